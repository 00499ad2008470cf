from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from pathlib import Path
from typing import SupportsIndex


@dataclass(frozen=True, order=True, slots=True)
class SourceIndex:
    pos: int

    def __int__(self) -> int:
        return self.pos

    def __index__(self) -> int:
        return self.pos

    def __add__(self, n: SupportsIndex) -> SourceIndex:
        return SourceIndex(self.pos + int(n))

    def __sub__(self, other: SupportsIndex | SourceIndex) -> int | SourceIndex:
        if isinstance(other, SourceIndex):
            return self.pos - other.pos
        return SourceIndex(self.pos - int(other))

    def __repr__(self) -> str:
        return f"SourceIndex({self.pos})"


@dataclass(frozen=True, slots=True)
class SourceSpan:
    '''0-indexed, [start, end) half-open interval over Source.contents.'''
    start: SourceIndex  # inclusive
    end: SourceIndex    # exclusive

    def __post_init__(self) -> None:
        if self.start < SourceIndex(0):
            raise ValueError(f"SourceSpan.start cannot be negative (got {self.start})")
        if self.end <= self.start:
            raise ValueError(f"SourceSpan.end ({self.end}) <= start ({self.start})")

    @classmethod
    def from_ints(cls, start: int, end: int) -> SourceSpan:
        return cls(SourceIndex(start), SourceIndex(end))

    def __len__(self) -> int:
        return self.end.pos - self.start.pos


def _compute_line_starts(s: str) -> tuple[SourceIndex, ...]:
    # Start of each line, plus a sentinel at len(s). splitlines handles \r\n and \r.
    starts = [SourceIndex(0)]
    pos = 0
    for part in s.splitlines(keepends=True):
        pos += len(part)
        starts.append(SourceIndex(pos))
    return tuple(starts)


@dataclass(frozen=True, slots=True)
class Source:
    """An in-memory document. Empty documents are allowed (nothing to extract)."""

    contents: str
    file: Path | None = None

    _line_starts: tuple[SourceIndex, ...] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    @classmethod
    def from_string(cls, text: str, file: Path | str | None = None) -> Source:
        return cls(text, Path(file) if file is not None else None)

    @property
    def label(self) -> str:
        return str(self.file) if self.file is not None else "<string>"

    def full_span(self) -> SourceSpan:
        return SourceSpan.from_ints(0, len(self.contents))

    def slice(self, span: SourceSpan) -> str:
        if not (0 <= int(span.start) <= int(span.end) <= len(self.contents)):
            raise ValueError("SourceSpan out of bounds for this Source")
        return self.contents[int(span.start):int(span.end)]

    @property
    def line_starts(self) -> tuple[SourceIndex, ...]:
        ls = self._line_starts
        if ls is None:
            ls = _compute_line_starts(self.contents)
            object.__setattr__(self, "_line_starts", ls)
        return ls

    def pos_to_line_col(self, pos: SourceIndex | int) -> tuple[int, int]:
        '''returns 1-indexed (line, col), editor-style; accepts pos==len(contents).'''
        p = SourceIndex(int(pos))
        if not (0 <= p.pos <= len(self.contents)):
            raise ValueError(f"pos {p.pos} out of range [0, {len(self.contents)}]")
        ls = self.line_starts
        line_idx = bisect.bisect_right(ls, p) - 1
        return (line_idx + 1, p.pos - ls[line_idx].pos + 1)
