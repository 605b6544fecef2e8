"""Closed set of page locales and their counterparts.

Every locale maps to exactly one other locale, used for alternate-language
links. A ``LocaleSet`` with no locales selects the no-locale mode, in which
sources are discovered as ``*.<ext>`` and written to the staging root.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence

from sitegen.exceptions import ConfigurationError


class LocaleSet:
    """Ordered locales with a designated counterpart for each.

    Parameters
    ----------
    counterparts : Mapping[str, str]
        Mapping from each locale to its counterpart. Iteration order of the
        mapping is the processing order.

    Raises
    ------
    ConfigurationError
        If a locale is its own counterpart or a counterpart is not itself a
        configured locale.

    Examples
    --------
    >>> ls = LocaleSet.from_locales(["de", "us"])
    >>> ls.counterpart("de")
    'us'
    >>> list(ls)
    ['de', 'us']
    """

    def __init__(self, counterparts: Mapping[str, str]) -> None:
        for locale, other in counterparts.items():
            if not locale:
                raise ConfigurationError("Locale tags must be non-empty.")
            if locale == other:
                raise ConfigurationError(
                    f"Locale {locale!r} cannot be its own counterpart.",
                    context={"locale": locale},
                )
            if other not in counterparts:
                raise ConfigurationError(
                    f"Counterpart {other!r} of {locale!r} is not a configured locale.",
                    context={"locale": locale, "counterpart": other},
                )
        self._counterparts = dict(counterparts)

    @classmethod
    def from_locales(cls, locales: Sequence[str]) -> LocaleSet:
        """Pair each locale with the next one, wrapping around.

        Two locales become each other's counterparts. A single locale has no
        valid counterpart and is rejected.
        """
        unique = list(dict.fromkeys(locales))
        if len(unique) == 1:
            raise ConfigurationError(
                f"Locale {unique[0]!r} needs a second locale as its counterpart.",
                context={"locales": unique},
            )
        return cls(
            {locale: unique[(i + 1) % len(unique)] for i, locale in enumerate(unique)}
        )

    def counterpart(self, locale: str | None) -> str | None:
        """Return the counterpart of ``locale``; ``None`` in no-locale mode."""
        if locale is None:
            return None
        try:
            return self._counterparts[locale]
        except KeyError:
            raise ConfigurationError(
                f"Unknown locale {locale!r}. Options are: {list(self._counterparts)}",
                context={"locale": locale},
            ) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._counterparts)

    def __len__(self) -> int:
        return len(self._counterparts)

    def __contains__(self, locale: object) -> bool:
        return locale in self._counterparts

    def __repr__(self) -> str:
        return f"LocaleSet({self._counterparts!r})"


__all__ = ["LocaleSet"]
