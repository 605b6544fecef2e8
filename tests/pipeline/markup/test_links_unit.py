"""Unit tests for locale-aware links."""

import pytest

from sitegen.exceptions import ConfigurationError
from sitegen.pipeline.markup.links import LanguageLink


def test_fixed_label_ignores_locale():
    link = LanguageLink("/news.html", "News")
    assert link.to_html_for("de") == '<a href="/news.html">News</a>'
    assert link.to_html_for(None) == '<a href="/news.html">News</a>'


def test_per_locale_labels():
    link = LanguageLink("/about.html", {"de": "Über uns", "us": "About"})
    assert link.to_html_for("de") == '<a href="/about.html">Über uns</a>'
    assert link.to_html_for("us") == '<a href="/about.html">About</a>'


def test_missing_locale_raises():
    link = LanguageLink("/about.html", {"de": "Über uns"})
    with pytest.raises(ConfigurationError) as excinfo:
        link.to_html_for("us")
    assert "us" in excinfo.value.message


def test_rejects_other_label_types():
    with pytest.raises(TypeError):
        LanguageLink("/x", ["not", "valid"])  # type: ignore[arg-type]
