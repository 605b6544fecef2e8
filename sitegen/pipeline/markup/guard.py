"""Detect server-side markup left in rendered pages.

Static output must never carry executable ``<? ... ?>`` directives. The
guard applies three checks in order and stops at the first hit: a complete
open/close pair, a dangling open delimiter, and a dangling close delimiter.
The two dangling checks report at most ``GUARD_SNIPPET_LIMIT`` characters of
surrounding text.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from sitegen.config import GUARD_SNIPPET_LIMIT
from sitegen.exceptions import ForbiddenMarkupError

_CHECKS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("pair", re.compile(r"(<\?.*\?>)")),
    ("open", re.compile(rf"(<\?.{{0,{GUARD_SNIPPET_LIMIT}}})")),
    ("close", re.compile(rf"(.{{0,{GUARD_SNIPPET_LIMIT}}}\?>)")),
)


class ForbiddenMarkup(NamedTuple):
    """A guard hit: which check fired and the matched text."""

    kind: str
    snippet: str


def find_forbidden_markup(content: str) -> ForbiddenMarkup | None:
    """Return the first forbidden-markup match in ``content``, or ``None``.

    Examples
    --------
    >>> find_forbidden_markup("a <?php x ?> b")
    ForbiddenMarkup(kind='pair', snippet='<?php x ?>')
    >>> find_forbidden_markup("plain text") is None
    True
    """
    for kind, pattern in _CHECKS:
        match = pattern.search(content)
        if match:
            return ForbiddenMarkup(kind, match.group(1))
    return None


def scan(content: str) -> None:
    """Raise if ``content`` contains server-side markup.

    Parameters
    ----------
    content : str
        Rendered page text.

    Raises
    ------
    ForbiddenMarkupError
        Carrying the matched snippet and the check that fired.
    """
    hit = find_forbidden_markup(content)
    if hit is not None:
        raise ForbiddenMarkupError(hit.snippet, hit.kind)


__all__ = ["ForbiddenMarkup", "find_forbidden_markup", "scan"]
