from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

import msgspec
import msgspec.json

from fragmask.constants import DEFAULT_KEY_LENGTH, PLACEHOLDER_PREFIX, TABLE_SCHEMA, table_path


class FragmentTable(msgspec.Struct, frozen=True):
    """
    Placeholder key -> original fragment text, in extraction order (the
    rightmost fragment of the document comes first).

    One table belongs to one extracted document. It is a plain value: hand it
    from `extract` to `restore` yourself, or persist it with `save`/`to_json`
    when the two steps run apart.
    """

    entries: dict[str, str] = msgspec.field(default_factory=dict)
    prefix: str = PLACEHOLDER_PREFIX
    key_length: int = DEFAULT_KEY_LENGTH
    schema: int = TABLE_SCHEMA

    # ---- read API -------------------------------------------------------------

    @property
    def mapping(self) -> Mapping[str, str]:
        return MappingProxyType(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def keys(self) -> Iterator[str]:
        return iter(self.entries)

    def items(self) -> Iterator[tuple[str, str]]:
        return iter(self.entries.items())

    def fragment(self, key: str) -> str:
        return self.entries[key]

    def token(self, key: str) -> str:
        return self.prefix + key

    def tokens(self) -> tuple[str, ...]:
        return tuple(self.prefix + k for k in self.entries)

    # ---- persistence ----------------------------------------------------------

    def to_json(self) -> bytes:
        return msgspec.json.encode(self)

    @classmethod
    def from_json(cls, data: bytes | str) -> FragmentTable:
        table = msgspec.json.decode(data, type=cls)
        if table.schema != TABLE_SCHEMA:
            raise ValueError(
                f"Unsupported fragment table schema {table.schema} (expected {TABLE_SCHEMA})"
            )
        return table

    def save(self, path: Path | str) -> None:
        """Write the table as JSON, atomically (temp file + rename)."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(self.to_json() + b"\n")
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    @classmethod
    def load(cls, path: Path | str) -> FragmentTable:
        return cls.from_json(Path(path).read_bytes())

    def save_beside(self, document: Path | str) -> Path:
        """Save next to `document` as `<name>.fragments.json`; returns that path."""
        path = table_path(Path(document))
        self.save(path)
        return path

    @classmethod
    def load_beside(cls, document: Path | str) -> FragmentTable:
        return cls.load(table_path(Path(document)))
