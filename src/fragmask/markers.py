"""
Delimiter symbols that mark a templating fragment, plus a few named presets for
common template languages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from fragmask.constants import DEFAULT_CLOSING, DEFAULT_OPENING


@dataclass(frozen=True, slots=True)
class Marker:
    symbol: str
    length: int = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.symbol, str) or not self.symbol:
            raise ValueError(f"Marker symbol must be a non-empty string (got {self.symbol!r})")
        object.__setattr__(self, "length", len(self.symbol))

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True, slots=True)
class MarkerPair:
    opening: Marker
    closing: Marker

    def __post_init__(self) -> None:
        if self.opening.symbol == self.closing.symbol:
            raise ValueError(
                f"Opening and closing markers must differ (both are {self.opening.symbol!r})"
            )

    @classmethod
    def of(cls, opening: str, closing: str) -> MarkerPair:
        return cls(Marker(opening), Marker(closing))

    def __str__(self) -> str:
        return f"{self.opening} … {self.closing}"


class MarkerStyle(StrEnum):
    JINJA = "jinja"            # {% statement %}, also nunjucks/twig/django
    EXPRESSION = "expression"  # {{ expression }}
    COMMENT = "comment"        # {# comment #}
    ERB = "erb"                # <% ruby %>, also ejs
    PHP = "php"                # <?php ... ?>


_PRESETS: dict[MarkerStyle, MarkerPair] = {
    MarkerStyle.JINJA: MarkerPair.of(DEFAULT_OPENING, DEFAULT_CLOSING),
    MarkerStyle.EXPRESSION: MarkerPair.of("{{", "}}"),
    MarkerStyle.COMMENT: MarkerPair.of("{#", "#}"),
    MarkerStyle.ERB: MarkerPair.of("<%", "%>"),
    MarkerStyle.PHP: MarkerPair.of("<?php", "?>"),
}

DEFAULT_MARKERS = _PRESETS[MarkerStyle.JINJA]


def marker_pair(style: MarkerStyle | str) -> MarkerPair:
    try:
        return _PRESETS[MarkerStyle(style)]
    except ValueError:
        known = ", ".join(s.value for s in MarkerStyle)
        raise ValueError(f"Unknown marker style {style!r} (expected one of: {known})") from None
