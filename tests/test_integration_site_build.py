"""End-to-end site builds against real directories."""

import shutil

import pytest

import sitegen.cli as cli
from sitegen.pipeline.site_builder import RunConfiguration, RunState, SiteRunner


def shout(page, content):
    return content.upper()


def test_two_locale_build_writes_exactly_the_rendered_pages(tmp_path, site_dir):
    stage = tmp_path / "stage"
    runner = SiteRunner(
        RunConfiguration(staging_dir=stage),
        source_dir=site_dir,
        asset_patterns=[],
        deploy_config=None,
    )
    report = runner.run(shout)
    assert (stage / "de" / "index.html").read_text(encoding="utf-8") == "HALLO WELT"
    assert (stage / "us" / "index.html").read_text(encoding="utf-8") == "HELLO WORLD"
    written = sorted(p.relative_to(stage).as_posix() for p in stage.rglob("*") if p.is_file())
    assert written == ["de/index.html", "us/index.html"]
    assert report.clean
    assert runner.state is RunState.DONE


def test_rerun_starts_from_empty_staging(tmp_path, site_dir):
    stage = tmp_path / "stage"
    runner = SiteRunner(
        RunConfiguration(staging_dir=stage),
        source_dir=site_dir,
        asset_patterns=[],
        deploy_config=None,
    )
    runner.run(shout)
    (site_dir / "index.us.html").unlink()
    report = runner.run(shout)
    assert not (stage / "us" / "index.html").exists()
    assert report.pages_generated == 1


@pytest.mark.skipif(shutil.which("cp") is None, reason="needs cp")
def test_full_remote_build_and_transfer(tmp_path, site_dir):
    (site_dir / "style.css").write_text("body{}", encoding="utf-8")
    (site_dir / "images").mkdir()
    (site_dir / "images" / "logo.png").write_bytes(b"png")
    (site_dir / ".htaccess").write_text(
        "RewriteEngine On\nRewriteBase /dev\n", encoding="utf-8"
    )
    stage = tmp_path / "stage"
    dest = tmp_path / "published"
    options = RunConfiguration(
        staging_dir=stage,
        destination=str(dest),
        remote=True,
        remote_base="/live",
        transfer_command="cp -r",
    )
    report = SiteRunner(options, source_dir=site_dir).run(shout)

    assert report.transfer is not None and report.transfer.ok
    assert (dest / "de" / "index.html").read_text(encoding="utf-8") == "HALLO WELT"
    assert (dest / "style.css").exists()
    assert (dest / "images" / "logo.png").read_bytes() == b"png"
    assert "RewriteBase /live\n" in (dest / ".htaccess").read_text(encoding="utf-8")
    # Only the "js" default pattern has nothing to copy.
    assert [f.pattern for f in report.asset_failures] == ["js"]


@pytest.mark.skipif(shutil.which("cp") is None, reason="needs cp")
def test_cli_transfer(monkeypatch, tmp_path, site_dir, capsys):
    monkeypatch.setattr(cli, "configure_logging", lambda *a, **k: None)
    monkeypatch.chdir(tmp_path)
    dest = tmp_path / "published"
    rc = cli.main(
        [
            "--source-dir",
            str(site_dir),
            "--staging-dir",
            str(tmp_path / "stage"),
            "--dest",
            str(dest),
            "--transfer-command",
            "cp -r",
            "--assets",
            "",
        ]
    )
    assert rc == 0
    page = (dest / "us" / "index.html").read_text(encoding="utf-8")
    assert page.startswith("<!DOCTYPE html>")
    assert "hello world" in page
    assert (dest / "de" / "index.html").exists()
    assert "ok" in capsys.readouterr().out
