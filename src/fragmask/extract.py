"""
Extraction: swap every fragment for a `FRAGMENT<digits>` placeholder and record
what it replaced.

    <html>{% print('x') %}</html>   ->   <html>FRAGMENT1234567</html>
                                         {"1234567": "{% print('x') %}"}
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import NamedTuple

from fragmask.config import DEFAULT_CONFIG, EngineConfig
from fragmask.inputs import as_kind, coerce_text
from fragmask.keys import KeyGenerator
from fragmask.scan import find_fragments
from fragmask.source import Source
from fragmask.table import FragmentTable

__all__ = ["Extraction", "extract"]


class Extraction(NamedTuple):
    text: str | bytes
    table: FragmentTable


def extract(
    text: str | bytes,
    config: EngineConfig | None = None,
    *,
    rng: random.Random | None = None,
    file: str | Path | None = None,
) -> Extraction:
    """
    Replace each fragment in `text` with a placeholder token.

    Fragments are substituted right to left, so the rightmost fragment gets the
    first key and comes first in the returned table. The input is not modified;
    `bytes` in gives `bytes` out.

    Raises UnsupportedInputKind, UnbalancedMarkers or NestedMarkers; nothing is
    returned on error.
    """
    cfg = config or DEFAULT_CONFIG
    contents, was_bytes = coerce_text(text)
    source = Source.from_string(contents, file)

    spans = find_fragments(source, cfg.markers, warn_stray_closing=cfg.warn_stray_closing)
    keys = KeyGenerator(cfg.key_length, rng=rng, prefix=cfg.prefix)

    entries: dict[str, str] = {}
    pieces: list[str] = []
    tail = len(contents)
    for span in reversed(spans):
        key = keys.next_key(entries, avoid=contents)
        entries[key] = source.slice(span)
        pieces.append(contents[int(span.end):tail])
        pieces.append(cfg.placeholder(key))
        tail = int(span.start)
    pieces.append(contents[:tail])

    table = FragmentTable(entries=entries, prefix=cfg.prefix, key_length=cfg.key_length)
    return Extraction(as_kind("".join(reversed(pieces)), was_bytes), table)
