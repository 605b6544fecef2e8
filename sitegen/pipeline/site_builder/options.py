"""Run settings for staging and transfer.

``RunConfiguration`` is owned by the caller for the whole run and treated as
read-only by the runner. Values can come from keyword arguments, from
``SITEGEN_*`` environment variables (optionally loaded from a ``.env`` file
with ``python-dotenv``), or from CLI flags layered on top.

Examples
--------
>>> from sitegen.pipeline.site_builder.options import RunConfiguration
>>> cfg = RunConfiguration(destination="user@host:/var/www")
>>> cfg.transfer_command
'rsync -a'
"""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from sitegen.config import (
    DEFAULT_STAGING_DIR,
    DEFAULT_TRANSFER_COMMAND,
    ENV_FILENAME,
    ENV_PREFIX,
)
from sitegen.exceptions import ConfigurationError

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env(name: str) -> str | None:
    value = os.getenv(f"{ENV_PREFIX}{name}")
    return value if value else None


def _env_flag(name: str) -> bool:
    return (_env(name) or "").strip().lower() in _TRUE_VALUES


@dataclass
class RunConfiguration:
    r"""Settings that control staging, deploy-config rewriting and transfer.

    Attributes
    ----------
    analytics : bool
        Emit the analytics snippet in layouts that support it.
    analytics_account : str | None
        Tracking account id; required when ``analytics`` is True.
    verbose : bool
        Log every command and copied path at INFO instead of DEBUG.
    remote_base : str | None
        Value written to the ``RewriteBase`` directive in remote mode.
    destination : str | None
        Transfer target (local path or ``host:path``). ``None`` leaves the
        output in staging and skips the transfer.
    remote : bool
        Rewrite the deploy config for the remote base instead of copying it.
    transfer_command : str
        Command template run as ``<template> <staging>/ <destination>``.
    staging_dir : Path
        Staging directory, rebuilt from scratch on every run.
    allow_server_markup : bool
        Disable the forbidden-markup guard for all pages.
    """

    analytics: bool = False
    analytics_account: str | None = None
    verbose: bool = False
    remote_base: str | None = None
    destination: str | None = None
    remote: bool = False
    transfer_command: str = DEFAULT_TRANSFER_COMMAND
    staging_dir: Path = DEFAULT_STAGING_DIR
    allow_server_markup: bool = False

    def __post_init__(self) -> None:
        self.staging_dir = Path(self.staging_dir)

    @classmethod
    def from_env(cls, env_path: Path | None = None) -> RunConfiguration:
        r"""Build a configuration from ``SITEGEN_*`` environment variables.

        A ``.env`` file is loaded first when present. Variables already set
        in the process environment take precedence over the file.

        Parameters
        ----------
        env_path : Path | None, optional
            Explicit ``.env`` location. Defaults to ``./.env``.

        Returns
        -------
        RunConfiguration
            Configuration with unset values left at their defaults.

        Examples
        --------
        >>> import os
        >>> os.environ["SITEGEN_DESTINATION"] = "/srv/www"
        >>> RunConfiguration.from_env().destination
        '/srv/www'
        """
        env_file = Path(env_path) if env_path is not None else Path(ENV_FILENAME)
        if env_file.exists():
            load_dotenv(env_file, override=False)
        return cls(
            analytics=_env_flag("ANALYTICS"),
            analytics_account=_env("ANALYTICS_ACCOUNT"),
            verbose=_env_flag("VERBOSE"),
            remote_base=_env("REMOTE_BASE"),
            destination=_env("DESTINATION"),
            remote=_env_flag("REMOTE"),
            transfer_command=_env("TRANSFER_COMMAND") or DEFAULT_TRANSFER_COMMAND,
            staging_dir=Path(_env("STAGING_DIR") or DEFAULT_STAGING_DIR),
            allow_server_markup=_env_flag("ALLOW_SERVER_MARKUP"),
        )

    def validate(self) -> None:
        """Raise ``ConfigurationError`` for inconsistent settings."""
        if self.remote and not self.remote_base:
            raise ConfigurationError(
                "Remote mode requires a remote base for the RewriteBase directive.",
                context={"remote": self.remote},
            )
        if not self.transfer_argv():
            raise ConfigurationError("Transfer command must not be empty.")
        if self.analytics and not self.analytics_account:
            raise ConfigurationError(
                "Analytics is enabled but no analytics account is configured."
            )

    def transfer_argv(self) -> list[str]:
        """Split the transfer command template into an argument vector.

        Raises
        ------
        ConfigurationError
            If the template cannot be split, e.g. on an unbalanced quote.
        """
        try:
            return shlex.split(self.transfer_command)
        except ValueError as exc:
            raise ConfigurationError(
                f"Cannot parse transfer command {self.transfer_command!r}: {exc}",
                context={"transfer_command": self.transfer_command},
            ) from exc

    @property
    def active_analytics_account(self) -> str | None:
        """Analytics account to embed in pages, or ``None`` when disabled."""
        return self.analytics_account if self.analytics else None


__all__ = ["RunConfiguration"]
