"""Unit tests for RunReport and its Rich table."""

from pathlib import Path

from rich.console import Console

from sitegen.exceptions import AssetCopyFailed, FileGenerationFailed, TransferFailed
from sitegen.pipeline.site_builder.fs_ops import TransferResult
from sitegen.pipeline.site_builder.report import RunReport, render_report


def _render(table) -> str:
    console = Console(record=True, width=120)
    console.print(table)
    return console.export_text()


def test_empty_report_is_clean():
    report = RunReport()
    assert report.pages_generated == 0
    assert report.clean
    assert report.transfer_status() == "not run"


def test_transfer_status_variants():
    assert RunReport(transfer_skipped=True).transfer_status() == "skipped (no destination)"
    ok = RunReport(transfer=TransferResult(["rsync"], 0, ""))
    assert ok.transfer_status() == "ok"
    failed = RunReport(transfer_error=TransferFailed("rsync exited with status 12"))
    assert failed.transfer_status() == "failed: rsync exited with status 12"
    assert not failed.clean


def test_render_report_lists_failures():
    report = RunReport(generated=[Path("de/index.html")])
    report.failures.append(
        FileGenerationFailed(Path("site/[broken].de.html"), RuntimeError("bad [b]x[/b]"))
    )
    report.asset_failures.append(AssetCopyFailed("js", "No files match 'js'"))
    text = _render(render_report(report))
    assert "Site build" in text
    assert "Pages generated" in text
    assert "[broken].de.html" in text
    assert "bad [b]x[/b]" in text
    assert "No files match 'js'" in text
