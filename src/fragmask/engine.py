from __future__ import annotations

import random
from collections.abc import Callable
from pathlib import Path

from fragmask.config import EngineConfig
from fragmask.extract import Extraction, extract
from fragmask.restore import restore
from fragmask.table import FragmentTable

__all__ = ["FragmentEngine"]


class FragmentEngine:
    """
    Configuration bound to the two directions of the transform.

    The engine keeps no tables: every `extract` returns its own, which the
    caller passes to the matching `restore`. One engine can therefore serve
    many documents, from several threads at once.
    """

    def __init__(self, config: EngineConfig | None = None, *, rng: random.Random | None = None):
        self.config = config or EngineConfig()
        self._rng = rng

    def extract(self, text: str | bytes, *, file: str | Path | None = None) -> Extraction:
        return extract(text, self.config, rng=self._rng, file=file)

    def restore(self, text: str | bytes, table: FragmentTable) -> str | bytes:
        return restore(text, table, self.config)

    def round_trip(self, text: str | bytes, transform: Callable[[str], str]) -> str | bytes:
        """
        Extract, run `transform` on the placeholder-bearing text, restore.

        `transform` sees `str` even for `bytes` input and must keep every
        placeholder token intact.
        """
        masked, table = self.extract(text)
        shown = masked.decode("utf-8") if isinstance(masked, bytes) else masked
        out = transform(shown)
        restored = self.restore(out, table)
        if isinstance(text, (bytes, bytearray, memoryview)) and isinstance(restored, str):
            return restored.encode("utf-8")
        return restored
