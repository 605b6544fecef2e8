"""Global configuration constants for the project.

Defines default paths, locales, filenames and command templates used across
the site builder and the CLI.
"""

from __future__ import annotations

from pathlib import Path

# Project directories
LOG_DIR: Path = Path.cwd() / "logs"

# Source discovery
DEFAULT_EXTENSION: str = "html"
DEFAULT_LOCALES: tuple[str, ...] = ("de", "us")
DEFAULT_SOURCE_DIR: Path = Path(".")

# Staging and transfer
DEFAULT_STAGING_DIR: Path = Path(".gen")
DEFAULT_TRANSFER_COMMAND: str = "rsync -a"
DEFAULT_ASSET_PATTERNS: tuple[str, ...] = ("*.css", "images", "js")

# Deploy configuration
DEPLOY_CONFIG_FILENAME: str = ".htaccess"
REWRITE_BASE_DIRECTIVE: str = "RewriteBase"

# Markup helpers
SCRIPT_DIR: str = "js"
IMAGE_DIR: str = "images"
STYLESHEET_DIR: str = "."
GUARD_SNIPPET_LIMIT: int = 10
VALIDATOR_URL: str = "http://validator.w3.org/check"

# Bundled layouts
DEFAULT_LAYOUT: str = "sitegen.pipeline.site_builder.layouts:standard_layout"
DEFAULT_STYLESHEET: str = "style.css"
LANGUAGE_NAMES: dict[str, str] = {"de": "Deutsch", "us": "English"}

# Environment overrides (loaded from .env when present)
ENV_PREFIX: str = "SITEGEN_"
ENV_FILENAME: str = ".env"

# CLI defaults and logging
LOG_FILENAME_SITEGEN: str = "sitegen.log"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
