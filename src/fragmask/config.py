"""
Engine configuration: which markers delimit a fragment, how placeholder tokens
look, and how strict restoration is. Immutable; use `evolve` for variants.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any

from fragmask.constants import (
    DEFAULT_KEY_LENGTH,
    ENV_PREFIX,
    MAX_KEY_LENGTH,
    PLACEHOLDER_PREFIX,
)
from fragmask.markers import DEFAULT_MARKERS, Marker, MarkerPair, marker_pair

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_flag(name: str, raw: str) -> bool:
    val = raw.strip().lower()
    if val in _TRUE:
        return True
    if val in _FALSE:
        return False
    raise ValueError(f"{ENV_PREFIX}{name} must be a boolean flag (got {raw!r})")


@dataclass(frozen=True, slots=True)
class EngineConfig:
    markers: MarkerPair = field(default=DEFAULT_MARKERS)
    key_length: int = DEFAULT_KEY_LENGTH
    prefix: str = PLACEHOLDER_PREFIX
    strict_restore: bool = True
    warn_stray_closing: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.key_length, int) or isinstance(self.key_length, bool):
            raise ValueError(f"key_length must be an int (got {self.key_length!r})")
        if not 1 <= self.key_length <= MAX_KEY_LENGTH:
            raise ValueError(f"key_length must be in [1, {MAX_KEY_LENGTH}] (got {self.key_length})")
        if not self.prefix or any(ch.isdigit() for ch in self.prefix):
            raise ValueError(f"prefix must be non-empty and digit-free (got {self.prefix!r})")
        for m in (self.markers.opening, self.markers.closing):
            if self.prefix in m.symbol or m.symbol in self.prefix:
                raise ValueError(f"prefix {self.prefix!r} overlaps marker {m.symbol!r}")

    @property
    def opening(self) -> Marker:
        return self.markers.opening

    @property
    def closing(self) -> Marker:
        return self.markers.closing

    def placeholder(self, key: str) -> str:
        return self.prefix + key

    def evolve(self, **overrides: Any) -> EngineConfig:
        known = {f.name for f in fields(EngineConfig)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown EngineConfig field(s): {', '.join(unknown)}")
        return replace(self, **overrides)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineConfig:
        """
        Build a config from FRAGMASK_* variables. FRAGMASK_STYLE picks a preset;
        FRAGMASK_OPEN / FRAGMASK_CLOSE override individual symbols.
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> str | None:
            val = env.get(ENV_PREFIX + name)
            return val if val not in (None, "") else None

        overrides: dict[str, Any] = {}

        markers = DEFAULT_MARKERS
        if (style := get("STYLE")) is not None:
            markers = marker_pair(style.lower())
        opening, closing = get("OPEN"), get("CLOSE")
        if opening is not None or closing is not None:
            markers = MarkerPair.of(opening or markers.opening.symbol, closing or markers.closing.symbol)
        overrides["markers"] = markers

        if (raw_len := get("KEY_LENGTH")) is not None:
            try:
                overrides["key_length"] = int(raw_len)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}KEY_LENGTH must be an integer (got {raw_len!r})") from None
        if (prefix := get("PREFIX")) is not None:
            overrides["prefix"] = prefix
        if (strict := get("STRICT_RESTORE")) is not None:
            overrides["strict_restore"] = _parse_flag("STRICT_RESTORE", strict)

        return cls(**overrides)


DEFAULT_CONFIG = EngineConfig()
