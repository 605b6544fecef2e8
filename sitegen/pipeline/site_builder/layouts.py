"""Ready-made page layouts.

Layouts are plain formatters ``(page, content) -> str`` and can be passed to
``SiteRunner.run`` or selected with ``sitegen --layout``. Sites with their
own look write their own function in the same shape.
"""

from __future__ import annotations

import markdown2

from sitegen.config import DEFAULT_STYLESHEET, LANGUAGE_NAMES
from sitegen.pipeline.markup.links import LanguageLink

from .page import PageContext


def _language_switch(page: PageContext) -> str:
    if page.other_locale is None or page.alternate_path is None:
        return ""
    link = LanguageLink(
        page.alternate_path, LANGUAGE_NAMES.get(page.other_locale, page.other_locale)
    )
    return page.tags.build("nav", {"class": "language"}, link.to_html_for(page.locale))


def standard_layout(page: PageContext, content: str) -> str:
    r"""Wrap ``content`` in a complete HTML document.

    The head carries the title, the default stylesheet and, when the page
    has a counterpart locale, an alternate-language link. The footer holds
    the language switch and a validator badge. The analytics snippet is
    appended when the run enables analytics.

    Parameters
    ----------
    page : PageContext
        Context of the page being rendered.
    content : str
        Body markup of the page.

    Returns
    -------
    str
        The full document.
    """
    tb = page.tags
    head = [
        tb.build("meta", {"charset": "utf-8"}),
        tb.build("title", {}, page.base_name),
        tb.css(DEFAULT_STYLESHEET),
    ]
    if page.alternate_path is not None:
        head.append(
            tb.build(
                "link",
                {
                    "rel": "alternate",
                    "hreflang": page.other_locale,
                    "href": page.alternate_path,
                },
            )
        )
    footer = _language_switch(page) + tb.validator(page.relative_path.as_posix())
    body = content + tb.build("footer", {}, footer)
    if page.analytics_account:
        body += tb.analytics(page.analytics_account)
    html_attrs = {"lang": page.locale} if page.locale else {}
    return (
        "<!DOCTYPE html>\n"
        + tb.build(
            "html",
            html_attrs,
            "\n" + tb.build("head", {}, "\n".join(head)) + tb.build("body", {}, body),
        )
    )


def markdown_layout(page: PageContext, content: str) -> str:
    """Render Markdown ``content`` to HTML, then apply ``standard_layout``."""
    body = markdown2.markdown(content, extras=["tables", "fenced-code-blocks"])
    return standard_layout(page, str(body))


def passthrough_layout(page: PageContext, content: str) -> str:
    """Return ``content`` unchanged."""
    return content


__all__ = ["markdown_layout", "passthrough_layout", "standard_layout"]
