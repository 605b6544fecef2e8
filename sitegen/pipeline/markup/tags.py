"""HTML tag emission helpers used by page layouts.

``TagBuilder`` turns a tag name plus zero, one or two positional arguments
into HTML text. The fixed-purpose emitters (script include, stylesheet link,
image, analytics snippet, validator badge) are thin wrappers that call the
generic builder with preset attributes. Directory names for scripts, images
and stylesheets come from an ``AssetDirs`` value handed to the builder.

Examples
--------
>>> from sitegen.pipeline.markup.tags import TagBuilder
>>> tb = TagBuilder()
>>> tb.build("br")
'<br>'
>>> tb.build("a", {"href": "x.html"}, "x")
'<a href="x.html">x</a>\\n'
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sitegen.config import IMAGE_DIR, SCRIPT_DIR, STYLESHEET_DIR, VALIDATOR_URL
from sitegen.exceptions import UnsupportedTagCall

_ANALYTICS_TEMPLATE = """<script type="text/javascript">
  var _gaq = _gaq || [];
  _gaq.push(['_setAccount', '{account_id}']);
  _gaq.push(['_trackPageview']);
  (function() {{
    var ga = document.createElement('script'); ga.type = 'text/javascript'; ga.async = true;
    ga.src = ('https:' == document.location.protocol ? 'https://ssl' : 'http://www') + '.google-analytics.com/ga.js';
    var s = document.getElementsByTagName('script')[0]; s.parentNode.insertBefore(ga, s);
  }})();
</script>
"""


@dataclass(frozen=True)
class AssetDirs:
    """Directory names prefixed to script, image and stylesheet references.

    Attributes
    ----------
    script_dir : str
        Directory holding JavaScript files.
    image_dir : str
        Directory holding images.
    stylesheet_dir : str
        Directory holding stylesheets.
    """

    script_dir: str = SCRIPT_DIR
    image_dir: str = IMAGE_DIR
    stylesheet_dir: str = STYLESHEET_DIR


def url_encode(text: str) -> str:
    """Escape ampersands for use inside a query-string value."""
    return text.replace("&", "%26")


def html_encode(text: str) -> str:
    """Escape ampersands for use in HTML text."""
    return text.replace("&", "&amp;")


class TagBuilder:
    """Build HTML tags from a name and a variable argument list.

    Parameters
    ----------
    dirs : AssetDirs | None, optional
        Directory names used by ``js``, ``css`` and ``img``. Defaults to
        ``AssetDirs()``.
    """

    def __init__(self, dirs: AssetDirs | None = None) -> None:
        self.dirs = dirs or AssetDirs()

    def tagf(self, name: str, attrs: Mapping[str, Any] | None = None) -> str:
        """Return an open tag with attributes in mapping iteration order.

        Examples
        --------
        >>> TagBuilder().tagf("a", {"href": "x", "id": "y"})
        '<a href="x" id="y">'
        """
        rendered = "".join(f' {key}="{value}"' for key, value in (attrs or {}).items())
        return f"<{name}{rendered}>"

    def tag(
        self, name: str, attrs: Mapping[str, Any] | None = None, content: Any = ""
    ) -> str:
        """Return an open tag, the content, and a matching close tag plus newline."""
        return f"{self.tagf(name, attrs)}{content}</{name}>\n"

    def build(self, name: str, *args: Any) -> str:
        r"""Construct any tag from its name and up to two positional arguments.

        Parameters
        ----------
        name : str
            Tag name, e.g. ``"div"``.
        *args : Any
            Nothing for a bare open tag, an attribute mapping for an open tag
            with attributes, or an attribute mapping and content for a full
            element.

        Returns
        -------
        str
            The rendered HTML.

        Raises
        ------
        UnsupportedTagCall
            If more than two arguments are supplied.

        Examples
        --------
        >>> tb = TagBuilder()
        >>> tb.build("p", {"class": "note"})
        '<p class="note">'
        >>> tb.build("p", {}, "hi")
        '<p>hi</p>\n'
        """
        if len(args) == 0:
            return f"<{name}>"
        if len(args) == 1:
            return self.tagf(name, args[0])
        if len(args) == 2:
            return self.tag(name, args[0], str(args[1]))
        raise UnsupportedTagCall(name, len(args))

    def js(self, file: str) -> str:
        """Return a script include for ``file`` under the script directory."""
        return self.build(
            "script",
            {"type": "text/javascript", "src": f"{self.dirs.script_dir}/{file}"},
            "",
        )

    def css(self, file: str) -> str:
        """Return a stylesheet link for ``file`` under the stylesheet directory."""
        return self.build(
            "link",
            {
                "rel": "stylesheet",
                "type": "text/css",
                "href": f"{self.dirs.stylesheet_dir}/{file}",
            },
        )

    def img(self, src: str, attrs: Mapping[str, Any] | None = None) -> str:
        """Return an image tag for ``src`` under the image directory."""
        return self.build("img", {"src": f"{self.dirs.image_dir}/{src}", **(attrs or {})})

    def analytics(self, account_id: str) -> str:
        """Return the page-tracking script snippet for ``account_id``."""
        return _ANALYTICS_TEMPLATE.format(account_id=account_id)

    def validator(self, page_url: str) -> str:
        """Return a link submitting ``page_url`` to the W3C markup validator."""
        href = (
            f"{VALIDATOR_URL}?uri={url_encode(page_url)}"
            "&charset=%28detect+automatically%29&doctype=Inline&group=0"
        )
        return self.build("a", {"href": html_encode(href)}, "VALIDATE!")


__all__ = ["AssetDirs", "TagBuilder", "html_encode", "url_encode"]
