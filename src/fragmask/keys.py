from __future__ import annotations

import random
from collections.abc import Collection

from fragmask.errors import TokenCollision

__all__ = ["KeyGenerator"]


class KeyGenerator:
    """
    Draws fixed-length numeric keys (zero-padded, so "0012345" is a valid
    7-digit key). Uniqueness only holds against the `taken` keys passed in,
    i.e. within one table.
    """

    def __init__(self, length: int, rng: random.Random | None = None, prefix: str = ""):
        if length < 1:
            raise ValueError(f"key length must be positive (got {length})")
        self.length = length
        self.prefix = prefix
        self._rng = rng or random.Random()

    @property
    def key_space(self) -> int:
        return 10**self.length

    def _draw(self) -> str:
        return f"{self._rng.randrange(self.key_space):0{self.length}d}"

    def _check(self, key: str, taken: Collection[str], avoid: str) -> str:
        if key in taken:
            raise TokenCollision(key)
        # The placeholder must not already be present in the document, or
        # restoration could pick the wrong occurrence.
        if avoid and (self.prefix + key) in avoid:
            raise TokenCollision(key)
        return key

    def next_key(self, taken: Collection[str], avoid: str = "") -> str:
        # Random draws first; the retry budget grows with the table.
        for _ in range(len(taken) + 32):
            try:
                return self._check(self._draw(), taken, avoid)
            except TokenCollision:
                continue
        # Nearly full key space: walk it from a random offset so we either find
        # the free keys or prove there are none.
        offset = self._rng.randrange(self.key_space)
        for i in range(self.key_space):
            key = f"{(offset + i) % self.key_space:0{self.length}d}"
            try:
                return self._check(key, taken, avoid)
            except TokenCollision:
                continue
        raise ValueError(f"no free {self.length}-digit key left (key space exhausted)")
