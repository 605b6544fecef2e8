"""Command-line entrypoint for the site builder.

Parses arguments, configures logging, merges ``SITEGEN_*`` environment
settings with CLI flags, resolves the layout function and runs
``SiteRunner``. The run report is printed as a Rich table.

Exit status is 1 only for fatal errors (invalid configuration, staging
reset failure, deploy-config rewrite failure). Page, asset and transfer
failures are listed in the report and the process exits 0.

Examples
--------
CLI usage:

>>> # In shell
>>> sitegen --dest user@example.org:/var/www --remote --remote-base /site
>>> sitegen --locales "" --ext md --layout sitegen.pipeline.site_builder.layouts:markdown_layout
"""

from __future__ import annotations

import argparse
import importlib
import logging
import os
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from sitegen.config import (
    DEFAULT_ASSET_PATTERNS,
    DEFAULT_EXTENSION,
    DEFAULT_LAYOUT,
    DEFAULT_LOCALES,
    DEFAULT_SOURCE_DIR,
    DEPLOY_CONFIG_FILENAME,
    LOG_DIR,
    LOG_FILENAME_SITEGEN,
    LOG_FORMAT,
)
from sitegen.exceptions import AppError, ConfigurationError
from sitegen.pipeline.site_builder import (
    Formatter,
    RunConfiguration,
    SiteRunner,
    render_report,
)

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO", enable_file: bool = True) -> None:
    r"""Configure root logging for a CLI run.

    Installs a console handler and, when ``enable_file`` is True, a file
    handler writing to ``LOG_DIR / LOG_FILENAME_SITEGEN``. A file handler
    that cannot be created is reported as a warning and the run continues
    with console logging only.

    Parameters
    ----------
    level : str, optional
        Logging level name, e.g. ``"DEBUG"``. Defaults to ``"INFO"``.
    enable_file : bool, optional
        Whether to also log to a file. Defaults to True.

    Examples
    --------
    >>> from sitegen.cli import configure_logging
    >>> configure_logging("DEBUG", enable_file=False)
    """
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    file_error: OSError | None = None
    if enable_file:
        try:
            LOG_DIR.mkdir(exist_ok=True)
            handlers.insert(
                0, logging.FileHandler(LOG_DIR / LOG_FILENAME_SITEGEN, mode="a")
            )
        except OSError as exc:
            file_error = exc
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )
    if file_error is not None:
        logger.warning("File logging disabled: %s", file_error)


def _split_list(value: str) -> list[str]:
    return [item for item in (part.strip() for part in value.split(",")) if item]


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the site builder.

    Parameters
    ----------
    argv : list[str] | None
        Optional argv to parse. When ``None`` the real CLI args are used.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Render locale-specific pages into a staging tree and sync it."
    )
    parser.add_argument("--source-dir", type=Path, default=DEFAULT_SOURCE_DIR)
    parser.add_argument("--staging-dir", type=Path, default=None)
    parser.add_argument("--dest", default=None, help="Transfer destination")
    parser.add_argument("--remote", action="store_true", default=None)
    parser.add_argument("--remote-base", default=None, help="RewriteBase value")
    parser.add_argument("--transfer-command", default=None)
    parser.add_argument(
        "--no-transfer", action="store_true", help="Leave output in staging"
    )
    parser.add_argument("--ext", default=DEFAULT_EXTENSION)
    parser.add_argument(
        "--locales",
        default=",".join(DEFAULT_LOCALES),
        help="Comma-separated locales; empty string for no-locale mode",
    )
    parser.add_argument(
        "--assets",
        default=",".join(DEFAULT_ASSET_PATTERNS),
        help="Comma-separated globs or directories copied into staging",
    )
    parser.add_argument("--deploy-config", default=DEPLOY_CONFIG_FILENAME)
    parser.add_argument(
        "--no-deploy-config", action="store_true", help="Skip the deploy config"
    )
    parser.add_argument("--layout", default=DEFAULT_LAYOUT, help="module:callable")
    parser.add_argument("--analytics", action="store_true", default=None)
    parser.add_argument("--analytics-account", default=None)
    parser.add_argument("--allow-server-markup", action="store_true", default=None)
    parser.add_argument("-v", "--verbose", action="store_true", default=None)
    parser.add_argument(
        "--log-level", type=str, default=os.environ.get("LOG_LEVEL", "INFO")
    )
    parser.add_argument("--env-file", type=Path, default=None)
    return parser.parse_args(argv)


def load_formatter(layout: str) -> Formatter:
    """Import the layout function named by ``layout`` (``module:callable``).

    Raises
    ------
    ConfigurationError
        If the name is malformed, the module cannot be imported, or the
        attribute is missing or not callable.
    """
    module_name, sep, attr = layout.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(
            f"Layout must be given as 'module:callable', got {layout!r}",
            context={"layout": layout},
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(
            f"Cannot import layout module {module_name!r}: {exc}",
            context={"layout": layout},
        ) from exc
    formatter = getattr(module, attr, None)
    if not callable(formatter):
        raise ConfigurationError(
            f"{layout!r} is not a callable layout", context={"layout": layout}
        )
    return formatter


def build_options(args: argparse.Namespace) -> RunConfiguration:
    """Merge environment settings with explicit CLI flags.

    Flags left at ``None`` keep the environment (or default) value.
    """
    options = RunConfiguration.from_env(args.env_file)
    overrides = {
        "destination": args.dest,
        "remote": args.remote,
        "remote_base": args.remote_base,
        "transfer_command": args.transfer_command,
        "staging_dir": args.staging_dir,
        "analytics": args.analytics,
        "analytics_account": args.analytics_account,
        "allow_server_markup": args.allow_server_markup,
        "verbose": args.verbose,
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(options, name, value)
    options.staging_dir = Path(options.staging_dir)
    if args.no_transfer:
        options.destination = None
    options.validate()
    return options


def main(argv: list[str] | None = None) -> int:
    """Run the site builder CLI and return the process exit status."""
    args = parse_arguments(argv)
    configure_logging(
        "DEBUG" if args.verbose else args.log_level,
        enable_file=not bool(os.environ.get("DISABLE_FILE_LOGS")),
    )
    console = Console()
    try:
        options = build_options(args)
        formatter = load_formatter(args.layout)
        runner = SiteRunner(
            options,
            extension=args.ext,
            locales=_split_list(args.locales),
            asset_patterns=_split_list(args.assets),
            deploy_config=None if args.no_deploy_config else args.deploy_config,
            source_dir=args.source_dir,
        )
        report = runner.run(formatter)
    except AppError as exc:
        logger.error("Build aborted: %s", exc)
        console.print(f"[bold red]Build aborted:[/bold red] {escape(exc.message)}")
        return 1
    console.print(render_report(report))
    if report.transfer is not None and report.transfer.output:
        console.print(report.transfer.output.rstrip(), markup=False, highlight=False)
    return 0


def entry_point() -> None:
    """Console-script wrapper around ``main``."""
    raise SystemExit(main())


if __name__ == "__main__":
    entry_point()
