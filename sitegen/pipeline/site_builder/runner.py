"""Render source pages into a staging tree and transfer it.

This module is the site builder's orchestrator. ``SiteRunner.run`` walks a
fixed sequence of states:

``IDLE -> STAGING_RESET -> GENERATING -> ASSET_COPY -> CONFIG_REWRITE ->
TRANSFERRING -> DONE``

Staging reset and deploy-config rewrite failures are fatal and raise. A
failure while generating one page, copying one asset pattern, or running the
transfer command is logged, recorded in the ``RunReport`` and the run goes on.

The staging directory is deleted and recreated on every run, so two runs
must never share a staging path at the same time.

Usage Examples
--------------
Typical programmatic usage::

    from sitegen.pipeline.site_builder import RunConfiguration, SiteRunner

    def layout(page, content):
        return f"<html><body>{content}</body></html>"

    runner = SiteRunner(RunConfiguration(destination="/srv/www"))
    report = runner.run(layout)
    assert report.pages_generated >= 0
"""

from __future__ import annotations

import enum
import glob
import logging
import re
from collections.abc import Sequence
from pathlib import Path

from sitegen.config import (
    DEFAULT_ASSET_PATTERNS,
    DEFAULT_EXTENSION,
    DEFAULT_LOCALES,
    DEFAULT_SOURCE_DIR,
    DEPLOY_CONFIG_FILENAME,
    REWRITE_BASE_DIRECTIVE,
)
from sitegen.exceptions import (
    AssetCopyFailed,
    ConfigRewriteFailed,
    ConfigurationError,
    FileGenerationFailed,
    StagingResetFailed,
    TransferFailed,
)
from sitegen.pipeline.markup.tags import AssetDirs, TagBuilder

from .fs_ops import FileOps, LocalFileOps, validate_staging_path
from .locales import LocaleSet
from .options import RunConfiguration
from .page import Formatter, PageContext
from .report import RunReport

logger = logging.getLogger(__name__)

_REWRITE_BASE_RE = re.compile(
    rf"^(?P<indent>\s*){REWRITE_BASE_DIRECTIVE}\s+(?P<value>.*?)\s*$"
)


class RunState(enum.Enum):
    """Pipeline stages in execution order."""

    IDLE = "idle"
    STAGING_RESET = "staging_reset"
    GENERATING = "generating"
    ASSET_COPY = "asset_copy"
    CONFIG_REWRITE = "config_rewrite"
    TRANSFERRING = "transferring"
    DONE = "done"


class SiteRunner:
    r"""Drive one build: reset, generate, copy, rewrite, transfer.

    Parameters
    ----------
    options : RunConfiguration
        Staging and transfer settings for the run.
    extension : str, optional
        Source and output extension, without the dot.
    locales : LocaleSet | Sequence[str] | None, optional
        Locales to generate. A plain sequence is paired with
        ``LocaleSet.from_locales``; an empty one selects no-locale mode.
        Defaults to ``DEFAULT_LOCALES``.
    asset_patterns : Sequence[str] | None, optional
        Globs or directory names copied verbatim into staging.
    deploy_config : str | None, optional
        Deploy-config filename in the source directory; ``None`` skips the
        rewrite step.
    source_dir : Path, optional
        Directory scanned for source pages and assets.
    file_ops : FileOps | None, optional
        Filesystem and transfer backend. Defaults to ``LocalFileOps``.
    asset_dirs : AssetDirs | None, optional
        Directory names handed to the pages' ``TagBuilder``.

    Attributes
    ----------
    state : RunState
        Stage the runner is currently in.
    report : RunReport
        Report for the current or last run.
    """

    def __init__(
        self,
        options: RunConfiguration,
        extension: str = DEFAULT_EXTENSION,
        locales: LocaleSet | Sequence[str] | None = None,
        asset_patterns: Sequence[str] | None = None,
        deploy_config: str | None = DEPLOY_CONFIG_FILENAME,
        source_dir: Path = DEFAULT_SOURCE_DIR,
        file_ops: FileOps | None = None,
        asset_dirs: AssetDirs | None = None,
    ) -> None:
        self.options = options
        self.extension = extension.lstrip(".")
        if locales is None:
            locales = DEFAULT_LOCALES
        self.locales = (
            locales if isinstance(locales, LocaleSet) else LocaleSet.from_locales(locales)
        )
        self.asset_patterns = list(
            DEFAULT_ASSET_PATTERNS if asset_patterns is None else asset_patterns
        )
        self.deploy_config = deploy_config
        self.source_dir = Path(source_dir)
        self.file_ops: FileOps = file_ops or LocalFileOps()
        self.tags = TagBuilder(asset_dirs)
        self.state = RunState.IDLE
        self.report = RunReport()

    @property
    def staging_dir(self) -> Path:
        return self.options.staging_dir

    def _log_step(self, message: str, *args: object) -> None:
        level = logging.INFO if self.options.verbose else logging.DEBUG
        logger.log(level, message, *args)

    def _enter(self, state: RunState) -> None:
        logger.debug("Entering state %s", state.value)
        self.state = state

    def run(self, formatter: Formatter) -> RunReport:
        """Execute the whole build with ``formatter`` as page layout.

        Parameters
        ----------
        formatter : Formatter
            Callable ``(page, raw_content) -> rendered_text``.

        Returns
        -------
        RunReport
            Pages written, recoverable failures and the transfer outcome.

        Raises
        ------
        StagingResetFailed
            If the staging directory cannot be rebuilt.
        ConfigRewriteFailed
            If the deploy config cannot be written to staging.
        """
        self.report = RunReport()
        self._enter(RunState.STAGING_RESET)
        self.reset_staging()

        self._enter(RunState.GENERATING)
        if len(self.locales) == 0:
            for path in self.discover(None):
                self.generate(None, path, formatter)
        else:
            for locale in self.locales:
                for path in self.discover(locale):
                    self.generate(locale, path, formatter)

        self._enter(RunState.ASSET_COPY)
        self.copy_assets(self.asset_patterns)

        self._enter(RunState.CONFIG_REWRITE)
        if self.deploy_config:
            self.rewrite_deploy_config(self.deploy_config)

        self._enter(RunState.TRANSFERRING)
        self.transfer()

        self._enter(RunState.DONE)
        logger.info(
            "Build finished: %d pages, %d failures",
            self.report.pages_generated,
            len(self.report.failures),
        )
        return self.report

    def reset_staging(self) -> None:
        """Delete the staging directory if present and recreate it empty.

        Raises
        ------
        StagingResetFailed
            If the path is unsafe to delete or any filesystem call fails.
        """
        validate_staging_path(self.staging_dir, self.source_dir)
        # Unresolved, so a symlinked staging dir is unlinked, not emptied.
        target = self.staging_dir
        try:
            self.file_ops.remove_tree(target)
            self.file_ops.ensure_directory(target)
        except OSError as exc:
            raise StagingResetFailed(
                f"Could not reset staging directory '{target}': {exc}",
                context={"staging": str(target)},
            ) from exc
        self._log_step("Staging directory ready: %s", target)

    def _pattern_for(self, locale: str | None) -> tuple[str, re.Pattern[str]]:
        ext = re.escape(self.extension)
        if locale is None:
            return f"*.{self.extension}", re.compile(rf"(.*)\.{ext}")
        return (
            f"*.{locale}.{self.extension}",
            re.compile(rf"(.*)\.{re.escape(locale)}\.{ext}"),
        )

    def discover(self, locale: str | None) -> list[Path]:
        """Return source files for ``locale`` sorted by name.

        Matches ``*.<locale>.<ext>``, or ``*.<ext>`` when ``locale`` is
        ``None``. Only regular files are returned.
        """
        glob, _ = self._pattern_for(locale)
        return sorted(p for p in self.source_dir.glob(glob) if p.is_file())

    def base_name(self, locale: str | None, path: Path) -> str:
        """Strip the locale segment and extension from ``path``'s name.

        Raises
        ------
        ValueError
            If the name does not match the discovery pattern or the stripped
            name is empty.
        """
        _, pattern = self._pattern_for(locale)
        match = pattern.fullmatch(path.name)
        if match is None or not match.group(1):
            raise ValueError(f"'{path.name}' does not name a page for locale {locale}.")
        return match.group(1)

    def generate(
        self, locale: str | None, path: Path, formatter: Formatter
    ) -> Path | None:
        """Render one source file into staging.

        Any error from reading, formatting, the markup guard or writing is
        logged and recorded as ``FileGenerationFailed``; the caller's loop
        continues with the next file.

        Returns
        -------
        Path | None
            The written output path, or ``None`` when generation failed.
        """
        try:
            content = path.read_text(encoding="utf-8")
            page = PageContext(
                self.base_name(locale, path),
                self.extension,
                locale=locale,
                locales=self.locales,
                tags=self.tags,
                analytics_account=self.options.active_analytics_account,
                allow_server_markup=self.options.allow_server_markup,
            )
            page.wrap(content, formatter)
            self.file_ops.ensure_directory(
                (self.staging_dir / page.relative_path).parent
            )
            written = page.write_to(self.staging_dir)
        except Exception as exc:
            failure = FileGenerationFailed(path, exc)
            logger.error("Could not generate %s: %s", path.name, exc)
            self.report.failures.append(failure)
            return None
        self._log_step("Generated %s -> %s", path.name, written)
        self.report.generated.append(written)
        return written

    def copy_assets(self, patterns: Sequence[str]) -> None:
        """Copy every path matching ``patterns`` into the staging root.

        Relative patterns are expanded in the source directory, absolute ones
        as given. A pattern that cannot be expanded or matches nothing, or a
        copy that fails, is logged and recorded as ``AssetCopyFailed``; later
        patterns are still copied.
        """
        for pattern in patterns:
            try:
                matches = self._expand_asset_pattern(pattern)
            except Exception as exc:
                logger.error("Cannot expand asset pattern %r: %s", pattern, exc)
                self.report.asset_failures.append(
                    AssetCopyFailed(pattern, f"Invalid pattern '{pattern}': {exc}")
                )
                continue
            if not matches:
                logger.warning("Asset pattern %r matched nothing", pattern)
                self.report.asset_failures.append(
                    AssetCopyFailed(pattern, f"No files match '{pattern}'")
                )
                continue
            for source in matches:
                try:
                    self._log_step("Copying %s into %s", source, self.staging_dir)
                    self.file_ops.copy_tree(source, self.staging_dir)
                except Exception as exc:
                    logger.error("Could not copy %s: %s", source, exc)
                    self.report.asset_failures.append(
                        AssetCopyFailed(
                            pattern,
                            f"Could not copy {source.name}: {exc}",
                            context={"source": str(source)},
                        )
                    )

    def _expand_asset_pattern(self, pattern: str) -> list[Path]:
        if not pattern:
            raise ValueError("empty pattern")
        if Path(pattern).is_absolute():
            return sorted(Path(p) for p in glob.glob(pattern))
        return sorted(self.source_dir.glob(pattern))

    def rewrite_deploy_config(self, fname: str) -> Path | None:
        """Place the deploy config in staging, rewriting it in remote mode.

        In remote mode every ``RewriteBase`` line gets the configured remote
        base, or one is inserted as the second line when none exists. In
        local mode the file is copied unchanged; a missing file is skipped.

        Returns
        -------
        Path | None
            The staged deploy-config path, or ``None`` when skipped.

        Raises
        ------
        ConfigRewriteFailed
            On a missing remote base, a missing file in remote mode, or any
            I/O error.
        """
        source = self.source_dir / fname
        target = self.staging_dir / fname
        if not self.options.remote:
            if not source.exists():
                logger.warning("No deploy config %s; skipping", source)
                return None
            try:
                self.file_ops.copy_tree(source, self.staging_dir)
            except OSError as exc:
                raise ConfigRewriteFailed(
                    f"Could not copy {fname} into staging: {exc}",
                    context={"source": str(source)},
                ) from exc
            return target

        remote_base = self.options.remote_base
        if not remote_base:
            raise ConfigRewriteFailed(
                "Remote mode requires a remote base.", context={"source": str(source)}
            )
        try:
            lines = source.read_text(encoding="utf-8").splitlines(keepends=True)
        except OSError as exc:
            raise ConfigRewriteFailed(
                f"Could not read {source}: {exc}", context={"source": str(source)}
            ) from exc

        rewritten = rewrite_base_lines(lines, remote_base)
        try:
            self.file_ops.ensure_directory(target.parent)
            target.write_text("".join(rewritten), encoding="utf-8")
        except OSError as exc:
            raise ConfigRewriteFailed(
                f"Could not write {target}: {exc}", context={"target": str(target)}
            ) from exc
        self._log_step("Rewrote %s for base %s", target, remote_base)
        return target

    def transfer(self) -> None:
        """Run the transfer command on the staging tree.

        An unparseable command template, a launch failure or a non-zero exit
        is logged and recorded as ``TransferFailed``; nothing is raised.
        """
        destination = self.options.destination
        if not destination:
            logger.warning(
                "No destination configured; output left in %s", self.staging_dir
            )
            self.report.transfer_skipped = True
            return
        try:
            argv = self.options.transfer_argv()
        except ConfigurationError as exc:
            logger.error("Transfer command is invalid: %s", exc.message)
            self.report.transfer_error = TransferFailed(
                exc.message, context=exc.context, transient=False
            )
            return
        command = [*argv, f"{str(self.staging_dir).rstrip('/')}/", destination]
        logger.info("Running: %s", " ".join(command))
        try:
            result = self.file_ops.run_transfer(command)
        except OSError as exc:
            logger.error("Transfer command could not be started: %s", exc)
            self.report.transfer_error = TransferFailed(
                f"Could not start {command[0]}: {exc}",
                context={"command": command},
            )
            return
        self.report.transfer = result
        if result.output:
            self._log_step("%s", result.output.rstrip())
        if not result.ok:
            logger.error("Transfer exited with status %d", result.returncode)
            self.report.transfer_error = TransferFailed(
                f"{command[0]} exited with status {result.returncode}",
                context={"command": command, "returncode": result.returncode},
            )


def rewrite_base_lines(lines: Sequence[str], remote_base: str) -> list[str]:
    r"""Point every ``RewriteBase`` directive at ``remote_base``.

    Parameters
    ----------
    lines : Sequence[str]
        Deploy-config lines, with line endings.
    remote_base : str
        New base path.

    Returns
    -------
    list[str]
        Rewritten lines. When no directive was present one is inserted as
        the second line.

    Examples
    --------
    >>> rewrite_base_lines(["RewriteEngine On\n", "RewriteBase /old\n"], "/new")
    ['RewriteEngine On\n', 'RewriteBase /new\n']
    >>> rewrite_base_lines(["RewriteEngine On\n"], "/new")
    ['RewriteEngine On\n', 'RewriteBase /new\n']
    """
    directive = f"{REWRITE_BASE_DIRECTIVE} {remote_base}\n"
    out: list[str] = []
    wrote_base = False
    for line in lines:
        match = _REWRITE_BASE_RE.match(line)
        if match is None:
            out.append(line)
            continue
        if match.group("value") != remote_base:
            logger.warning(
                'Replacing base "%s" with "%s"', match.group("value"), remote_base
            )
        out.append(f"{match.group('indent')}{directive}")
        wrote_base = True
    if not wrote_base:
        if out and not out[0].endswith("\n"):
            out[0] += "\n"
        out.insert(1, directive)
    return out


__all__ = ["RunState", "SiteRunner", "rewrite_base_lines"]
