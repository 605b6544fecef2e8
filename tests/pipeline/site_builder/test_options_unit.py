"""Unit tests for RunConfiguration loading and validation."""

from pathlib import Path

import pytest

from sitegen.config import DEFAULT_STAGING_DIR, DEFAULT_TRANSFER_COMMAND
from sitegen.exceptions import ConfigurationError
from sitegen.pipeline.site_builder.options import RunConfiguration


def test_defaults():
    cfg = RunConfiguration()
    assert cfg.analytics is False
    assert cfg.verbose is False
    assert cfg.remote is False
    assert cfg.remote_base is None
    assert cfg.destination is None
    assert cfg.transfer_command == DEFAULT_TRANSFER_COMMAND
    assert cfg.staging_dir == DEFAULT_STAGING_DIR
    cfg.validate()


def test_staging_dir_is_coerced_to_path():
    assert RunConfiguration(staging_dir="build").staging_dir == Path("build")


def test_transfer_argv_splits_template():
    cfg = RunConfiguration(transfer_command="rsync -az --delete -e 'ssh -p 2222'")
    assert cfg.transfer_argv() == ["rsync", "-az", "--delete", "-e", "ssh -p 2222"]


def test_remote_requires_remote_base():
    with pytest.raises(ConfigurationError):
        RunConfiguration(remote=True).validate()
    RunConfiguration(remote=True, remote_base="/site").validate()


def test_empty_transfer_command_is_invalid():
    with pytest.raises(ConfigurationError):
        RunConfiguration(transfer_command="  ").validate()


def test_analytics_requires_account():
    with pytest.raises(ConfigurationError):
        RunConfiguration(analytics=True).validate()
    cfg = RunConfiguration(analytics=True, analytics_account="UA-1")
    assert cfg.active_analytics_account == "UA-1"
    assert RunConfiguration(analytics_account="UA-1").active_analytics_account is None


def test_from_env_reads_process_environment(monkeypatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SITEGEN_DESTINATION", "host:/var/www")
    monkeypatch.setenv("SITEGEN_REMOTE", "yes")
    monkeypatch.setenv("SITEGEN_REMOTE_BASE", "/site")
    monkeypatch.setenv("SITEGEN_STAGING_DIR", "out")
    cfg = RunConfiguration.from_env()
    assert cfg.destination == "host:/var/www"
    assert cfg.remote is True
    assert cfg.remote_base == "/site"
    assert cfg.staging_dir == Path("out")
    assert cfg.transfer_command == DEFAULT_TRANSFER_COMMAND


def test_from_env_loads_dotenv_file(tmp_path: Path):
    env_file = tmp_path / "build.env"
    env_file.write_text(
        'SITEGEN_TRANSFER_COMMAND="scp -r"\nSITEGEN_ANALYTICS=1\n'
        "SITEGEN_ANALYTICS_ACCOUNT=UA-9\n",
        encoding="utf-8",
    )
    cfg = RunConfiguration.from_env(env_file)
    assert cfg.transfer_command == "scp -r"
    assert cfg.analytics is True
    assert cfg.analytics_account == "UA-9"


def test_process_environment_wins_over_dotenv(monkeypatch, tmp_path: Path):
    env_file = tmp_path / ".env"
    env_file.write_text("SITEGEN_DESTINATION=/from/file\n", encoding="utf-8")
    monkeypatch.setenv("SITEGEN_DESTINATION", "/from/env")
    assert RunConfiguration.from_env(env_file).destination == "/from/env"


def test_unbalanced_quote_in_transfer_command():
    cfg = RunConfiguration(transfer_command='rsync -a "--exclude=x')
    with pytest.raises(ConfigurationError) as excinfo:
        cfg.transfer_argv()
    assert excinfo.value.context == {"transfer_command": 'rsync -a "--exclude=x'}
    with pytest.raises(ConfigurationError):
        cfg.validate()
