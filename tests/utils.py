from __future__ import annotations

import random
from collections.abc import Iterable


def frag(body: str, opening: str = "{%", closing: str = "%}") -> str:
    """Wrap `body` in fragment markers: frag(" x ") -> "{% x %}"."""
    return f"{opening}{body}{closing}"


class ScriptedRandom(random.Random):
    """A Random whose randrange() replays the given values first."""

    def __init__(self, values: Iterable[int], seed: int = 0):
        super().__init__(seed)
        self._queue = list(values)

    def randrange(self, start, stop=None, step=1):  # type: ignore[no-untyped-def, override]
        if self._queue:
            return self._queue.pop(0)
        return super().randrange(start, stop, step)
