"""Links whose label depends on the page locale."""

from __future__ import annotations

from collections.abc import Mapping

from sitegen.exceptions import ConfigurationError


class LanguageLink:
    """A hyperlink with either a fixed label or one label per locale.

    Parameters
    ----------
    url : str
        Link target.
    labels : str | Mapping[str, str]
        A single label, or a mapping from locale to label.

    Raises
    ------
    TypeError
        If ``labels`` is neither a string nor a mapping.

    Examples
    --------
    >>> link = LanguageLink("/about.html", {"de": "Über", "us": "About"})
    >>> link.to_html_for("us")
    '<a href="/about.html">About</a>'
    """

    def __init__(self, url: str, labels: str | Mapping[str, str]) -> None:
        if not isinstance(labels, (str, Mapping)):
            raise TypeError("Expected a string or a mapping of labels.")
        self.url = url
        self.labels = labels

    def label_for(self, locale: str | None) -> str:
        """Return the label shown on pages of ``locale``."""
        if isinstance(self.labels, str):
            return self.labels
        if locale not in self.labels:
            raise ConfigurationError(
                f"No such locale {locale}. Options are: {list(self.labels)}",
                context={"url": self.url, "locale": locale},
            )
        return self.labels[locale]

    def to_html_for(self, locale: str | None) -> str:
        """Render the anchor for pages of ``locale``."""
        return f'<a href="{self.url}">{self.label_for(locale)}</a>'


__all__ = ["LanguageLink"]
