"""Unit tests for locale sets and counterparts."""

import pytest

from sitegen.exceptions import ConfigurationError
from sitegen.pipeline.site_builder.locales import LocaleSet


def test_two_locales_are_each_others_counterpart():
    ls = LocaleSet.from_locales(["de", "us"])
    assert ls.counterpart("de") == "us"
    assert ls.counterpart("us") == "de"
    assert list(ls) == ["de", "us"]
    assert len(ls) == 2
    assert "de" in ls


def test_three_locales_rotate():
    ls = LocaleSet.from_locales(["de", "fr", "us"])
    assert [ls.counterpart(loc) for loc in ls] == ["fr", "us", "de"]


def test_empty_set_is_no_locale_mode():
    ls = LocaleSet.from_locales([])
    assert len(ls) == 0
    assert ls.counterpart(None) is None


def test_single_locale_is_rejected():
    with pytest.raises(ConfigurationError):
        LocaleSet.from_locales(["de"])


def test_self_counterpart_is_rejected():
    with pytest.raises(ConfigurationError):
        LocaleSet({"de": "de", "us": "de"})


def test_counterpart_must_be_configured():
    with pytest.raises(ConfigurationError):
        LocaleSet({"de": "fr"})


def test_unknown_locale_lookup():
    ls = LocaleSet.from_locales(["de", "us"])
    with pytest.raises(ConfigurationError):
        ls.counterpart("fr")


def test_duplicates_are_collapsed():
    ls = LocaleSet.from_locales(["de", "us", "de"])
    assert list(ls) == ["de", "us"]
