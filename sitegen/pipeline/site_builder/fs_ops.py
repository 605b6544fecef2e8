"""Filesystem and transfer operations used by the site builder.

The runner never calls ``shutil`` or ``subprocess`` directly. Deletes,
copies, directory creation and the transfer go through a ``FileOps`` object
so tests can substitute a recording fake. Writing the text of a single page
or deploy config into a directory prepared this way stays with ``pathlib``.
``LocalFileOps`` is the real implementation.

Functions
---------
- ``validate_staging_path``: Refuse staging locations that would wipe sources.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from sitegen.exceptions import StagingResetFailed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferResult:
    """Outcome of one transfer command.

    Attributes
    ----------
    command : list[str]
        The argument vector that was run.
    returncode : int
        Exit status of the command.
    output : str
        Combined stdout and stderr.
    """

    command: list[str]
    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class FileOps(Protocol):
    """Side-effecting operations the runner depends on."""

    def copy_tree(self, source: Path, dest_dir: Path) -> None:
        """Copy a file or directory into ``dest_dir``, keeping its name."""
        ...

    def ensure_directory(self, path: Path) -> None:
        """Create ``path`` and any missing parents."""
        ...

    def remove_tree(self, path: Path) -> None:
        """Recursively delete ``path`` if it exists."""
        ...

    def run_transfer(self, command: Sequence[str]) -> TransferResult:
        """Run the transfer command and capture its output."""
        ...


class LocalFileOps:
    """``FileOps`` backed by the local filesystem and ``subprocess``."""

    def copy_tree(self, source: Path, dest_dir: Path) -> None:
        target = Path(dest_dir) / Path(source).name
        if Path(source).is_dir():
            shutil.copytree(source, target, dirs_exist_ok=True)
        else:
            shutil.copy2(source, target)

    def ensure_directory(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def remove_tree(self, path: Path) -> None:
        target = Path(path)
        if target.is_dir() and not target.is_symlink():
            logger.warning(f"Removing staging tree: {target}")
            shutil.rmtree(target)
        elif target.exists() or target.is_symlink():
            target.unlink()

    def run_transfer(self, command: Sequence[str]) -> TransferResult:
        proc = subprocess.run(
            list(command),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
        return TransferResult(list(command), proc.returncode, proc.stdout or "")


def validate_staging_path(staging_dir: Path, source_dir: Path) -> Path:
    r"""Check that deleting ``staging_dir`` cannot destroy the sources.

    Parameters
    ----------
    staging_dir : Path
        Staging directory about to be reset.
    source_dir : Path
        Directory holding the source pages.

    Returns
    -------
    Path
        The resolved staging path.

    Raises
    ------
    StagingResetFailed
        If the staging path is a filesystem root, the source directory, or
        one of its ancestors.

    Examples
    --------
    >>> from pathlib import Path
    >>> validate_staging_path(Path("/tmp/site/.gen"), Path("/tmp/site")).name
    '.gen'
    >>> validate_staging_path(Path("/tmp/site"), Path("/tmp/site"))  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    sitegen.exceptions.StagingResetFailed: STAGING_RESET_FAILED: ...
    """
    target = Path(staging_dir).resolve()
    source = Path(source_dir).resolve()
    if target == Path(target.anchor):
        raise StagingResetFailed(
            "Refusing to use a filesystem root as staging directory.",
            context={"staging": str(target)},
        )
    if target == source or target in source.parents:
        raise StagingResetFailed(
            f"Staging directory '{target}' contains the source directory.",
            context={"staging": str(target), "source": str(source)},
        )
    return target


__all__ = ["FileOps", "LocalFileOps", "TransferResult", "validate_staging_path"]
