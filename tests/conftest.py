"""Pytest configuration for test environment setup.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Keeps ``SITEGEN_*`` variables from leaking between tests.
"""

import os
import sys

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests
from pathlib import Path

import pytest

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)


@pytest.fixture(autouse=True)
def _isolate_sitegen_env(monkeypatch):
    """Clear ``SITEGEN_*`` variables before and after each test."""
    for key in list(os.environ):
        if key.startswith("SITEGEN_"):
            monkeypatch.delenv(key)
    yield
    # ``load_dotenv`` writes straight into os.environ.
    for key in list(os.environ):
        if key.startswith("SITEGEN_"):
            del os.environ[key]


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """Source directory with one page per default locale."""
    src = tmp_path / "site"
    src.mkdir()
    (src / "index.de.html").write_text("hallo welt", encoding="utf-8")
    (src / "index.us.html").write_text("hello world", encoding="utf-8")
    return src
