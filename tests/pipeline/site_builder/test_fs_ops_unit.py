"""Unit tests for the local filesystem backend and staging path checks."""

import sys
from pathlib import Path

import pytest

from sitegen.exceptions import StagingResetFailed
from sitegen.pipeline.site_builder.fs_ops import LocalFileOps, validate_staging_path


def test_copy_tree_copies_file_into_directory(tmp_path: Path):
    src = tmp_path / "style.css"
    src.write_text("body{}", encoding="utf-8")
    dest = tmp_path / "stage"
    dest.mkdir()
    LocalFileOps().copy_tree(src, dest)
    assert (dest / "style.css").read_text(encoding="utf-8") == "body{}"


def test_copy_tree_copies_directory_recursively(tmp_path: Path):
    images = tmp_path / "images" / "icons"
    images.mkdir(parents=True)
    (images / "a.png").write_bytes(b"\x89PNG")
    dest = tmp_path / "stage"
    dest.mkdir()
    ops = LocalFileOps()
    ops.copy_tree(tmp_path / "images", dest)
    # A second copy merges instead of failing.
    ops.copy_tree(tmp_path / "images", dest)
    assert (dest / "images" / "icons" / "a.png").read_bytes() == b"\x89PNG"


def test_remove_tree_and_ensure_directory(tmp_path: Path):
    stage = tmp_path / "stage"
    (stage / "de").mkdir(parents=True)
    (stage / "de" / "old.html").write_text("stale", encoding="utf-8")
    ops = LocalFileOps()
    ops.remove_tree(stage)
    assert not stage.exists()
    ops.remove_tree(stage)  # missing path is a no-op
    ops.ensure_directory(stage / "nested")
    assert (stage / "nested").is_dir()


def test_run_transfer_captures_output():
    ops = LocalFileOps()
    result = ops.run_transfer([sys.executable, "-c", "print('synced')"])
    assert result.ok
    assert result.returncode == 0
    assert "synced" in result.output


def test_run_transfer_reports_nonzero_exit():
    result = LocalFileOps().run_transfer(
        [sys.executable, "-c", "import sys; sys.stderr.write('bad'); sys.exit(3)"]
    )
    assert not result.ok
    assert result.returncode == 3
    assert "bad" in result.output


def test_run_transfer_missing_program_raises_oserror():
    with pytest.raises(OSError):
        LocalFileOps().run_transfer(["definitely-not-a-real-sync-tool-xyz"])


def test_validate_staging_path_accepts_child(tmp_path: Path):
    assert validate_staging_path(tmp_path / ".gen", tmp_path) == (tmp_path / ".gen").resolve()


@pytest.mark.parametrize("which", ["same", "parent"])
def test_validate_staging_path_rejects_source_or_ancestor(tmp_path: Path, which):
    source = tmp_path / "site"
    source.mkdir()
    staging = source if which == "same" else tmp_path
    with pytest.raises(StagingResetFailed):
        validate_staging_path(staging, source)


def test_validate_staging_path_rejects_root(tmp_path: Path):
    with pytest.raises(StagingResetFailed):
        validate_staging_path(Path(tmp_path.anchor), tmp_path)
