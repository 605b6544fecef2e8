"""Per-page rendering context handed to layout formatters.

A ``PageContext`` is created for one source file immediately before it is
rendered and is discarded once the output is written. It knows where the
page lands in the staging tree (``<root>/<locale>/<base>.<ext>``) and which
locale is its counterpart, and it runs the caller's formatter followed by the
forbidden-markup guard.

Examples
--------
>>> from sitegen.pipeline.site_builder.locales import LocaleSet
>>> page = PageContext("index", "html", locale="de", locales=LocaleSet.from_locales(["de", "us"]))
>>> page.other_locale
'us'
>>> page.relative_path
PosixPath('de/index.html')
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from sitegen.pipeline.markup import guard
from sitegen.pipeline.markup.tags import TagBuilder

from .locales import LocaleSet

logger = logging.getLogger(__name__)

Formatter = Callable[["PageContext", str], str]


@dataclass
class PageContext:
    """Locale, base name and extension of one generated page.

    Attributes
    ----------
    base_name : str
        Source file name without locale segment and extension.
    extension : str
        Output extension, without the leading dot.
    locale : str | None
        Page locale; ``None`` in no-locale mode.
    locales : LocaleSet | None
        Configured locales, used to compute ``other_locale``.
    tags : TagBuilder
        Tag builder layouts may use for markup.
    analytics_account : str | None
        Tracking account id when analytics are enabled for the run.
    allow_server_markup : bool
        Skip the forbidden-markup guard when True.
    other_locale : str | None
        Counterpart of ``locale``; computed, never passed in.
    rendered : str | None
        Text produced by the last ``wrap`` call.
    """

    base_name: str
    extension: str
    locale: str | None = None
    locales: LocaleSet | None = field(default=None, repr=False)
    tags: TagBuilder = field(default_factory=TagBuilder, repr=False)
    analytics_account: str | None = None
    allow_server_markup: bool = False
    other_locale: str | None = field(init=False, default=None)
    rendered: str | None = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.base_name:
            raise ValueError("Page base name must be non-empty.")
        if not self.extension:
            raise ValueError("Page extension must be non-empty.")
        if self.locale is not None and self.locales is not None:
            self.other_locale = self.locales.counterpart(self.locale)

    @property
    def filename(self) -> str:
        return f"{self.base_name}.{self.extension}"

    @property
    def relative_path(self) -> Path:
        """Path of the page relative to the staging root."""
        if self.locale is None:
            return Path(self.filename)
        return Path(self.locale) / self.filename

    @property
    def alternate_path(self) -> str | None:
        """Relative link from this page to its counterpart-locale version."""
        if self.other_locale is None:
            return None
        return f"../{self.other_locale}/{self.filename}"

    def wrap(self, content: str, formatter: Formatter) -> str:
        """Render ``content`` with ``formatter`` and check the result.

        Parameters
        ----------
        content : str
            Raw source text of the page.
        formatter : Formatter
            Callable receiving this context and the raw content; its return
            value is the final page text.

        Returns
        -------
        str
            The rendered page.

        Raises
        ------
        ForbiddenMarkupError
            If the rendered page contains server-side markup and
            ``allow_server_markup`` is False.
        """
        rendered = formatter(self, content)
        if not self.allow_server_markup:
            guard.scan(rendered)
        self.rendered = rendered
        return rendered

    def write_to(self, staging_root: Path, content: str | None = None) -> Path:
        """Write the page below ``staging_root`` and return the written path.

        Writes ``content`` when given, otherwise the text from the last
        ``wrap``. Intermediate directories are created and an existing file
        is overwritten.

        Raises
        ------
        ValueError
            If there is nothing to write.
        OSError
            If the directory or file cannot be written.
        """
        text = content if content is not None else self.rendered
        if text is None:
            raise ValueError(f"Nothing rendered for {self.relative_path}.")
        target = Path(staging_root) / self.relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        logger.debug("Wrote %s", target)
        return target


__all__ = ["Formatter", "PageContext"]
