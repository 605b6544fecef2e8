"""Markup helpers for page layouts.

Exposes the tag builder, the forbidden-markup guard and locale-aware links.
Nothing here touches the filesystem; layouts call these helpers to produce
strings, and the site builder calls the guard on every rendered page.
"""

from .guard import ForbiddenMarkup, find_forbidden_markup, scan
from .links import LanguageLink
from .tags import AssetDirs, TagBuilder, html_encode, url_encode

__all__ = [
    "AssetDirs",
    "ForbiddenMarkup",
    "LanguageLink",
    "TagBuilder",
    "find_forbidden_markup",
    "html_encode",
    "scan",
    "url_encode",
]
