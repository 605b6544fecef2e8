"""Run report collected by the site builder and its console rendering.

The runner appends to a ``RunReport`` as it goes: written pages, per-file
generation failures, asset copy failures, and the transfer outcome. The CLI
renders it with Rich once the run is over.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from rich.markup import escape
from rich.table import Table

from sitegen.exceptions import AssetCopyFailed, FileGenerationFailed, TransferFailed

from .fs_ops import TransferResult


@dataclass
class RunReport:
    """Everything a caller needs to judge a finished run.

    Attributes
    ----------
    generated : list[Path]
        Output paths written to staging, in processing order.
    failures : list[FileGenerationFailed]
        Source files that could not be generated.
    asset_failures : list[AssetCopyFailed]
        Asset patterns that could not be copied.
    transfer : TransferResult | None
        Result of the transfer command; ``None`` when it did not run.
    transfer_error : TransferFailed | None
        Set when the transfer failed to launch or exited non-zero.
    transfer_skipped : bool
        True when no destination was configured.
    """

    generated: list[Path] = field(default_factory=list)
    failures: list[FileGenerationFailed] = field(default_factory=list)
    asset_failures: list[AssetCopyFailed] = field(default_factory=list)
    transfer: TransferResult | None = None
    transfer_error: TransferFailed | None = None
    transfer_skipped: bool = False

    @property
    def pages_generated(self) -> int:
        return len(self.generated)

    @property
    def clean(self) -> bool:
        """True when no recoverable error was recorded."""
        return not (self.failures or self.asset_failures or self.transfer_error)

    def transfer_status(self) -> str:
        if self.transfer_skipped:
            return "skipped (no destination)"
        if self.transfer_error is not None:
            return f"failed: {self.transfer_error.message}"
        if self.transfer is None:
            return "not run"
        return "ok"


def render_report(report: RunReport) -> Table:
    """Build a Rich table summarising ``report``.

    Parameters
    ----------
    report : RunReport
        The finished run's report.

    Returns
    -------
    rich.table.Table
        One row per metric followed by one row per recorded failure.
    """
    table = Table(title="Site build", show_header=True, header_style="bold blue")
    table.add_column("Step", style="bold")
    table.add_column("Result")
    table.add_row("Pages generated", str(report.pages_generated))
    table.add_row("Page failures", str(len(report.failures)))
    table.add_row("Asset failures", str(len(report.asset_failures)))
    table.add_row("Transfer", escape(report.transfer_status()))
    for failure in report.failures:
        table.add_row(
            f"[red]{escape(failure.source.name)}[/red]", escape(str(failure.cause))
        )
    for asset_failure in report.asset_failures:
        table.add_row(
            f"[yellow]{escape(asset_failure.pattern)}[/yellow]",
            escape(asset_failure.message),
        )
    return table


__all__ = ["RunReport", "render_report"]
