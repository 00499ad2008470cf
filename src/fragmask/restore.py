from __future__ import annotations

import warnings

from fragmask.config import DEFAULT_CONFIG, EngineConfig
from fragmask.errors import RestoreKeyNotFound
from fragmask.inputs import as_kind, coerce_text
from fragmask.reporting.warnings_bridge import PlaceholderWarning
from fragmask.table import FragmentTable

__all__ = ["restore"]


def restore(
    text: str | bytes,
    table: FragmentTable,
    config: EngineConfig | None = None,
) -> str | bytes:
    """
    Put the original fragments back in place of their placeholders.

    Keys are handled in table order; each one replaces the first occurrence of
    its full placeholder token (prefix plus digits) in the text as rewritten so
    far. Bare digits elsewhere in the document are never touched.

    A placeholder that is missing from the text raises RestoreKeyNotFound, or,
    with `strict_restore=False`, is skipped with a PlaceholderWarning. The
    table itself is never modified.
    """
    cfg = config or DEFAULT_CONFIG
    out, was_bytes = coerce_text(text)

    for key, fragment in table.items():
        token = table.token(key)
        at = out.find(token)
        if at < 0:
            msg = f"placeholder {token!r} not found in text being restored"
            if cfg.strict_restore:
                raise RestoreKeyNotFound(msg, key=key, token=token)
            warnings.warn(msg + "; fragment dropped", PlaceholderWarning, stacklevel=2)
            continue
        out = out[:at] + fragment + out[at + len(token):]

    return as_kind(out, was_bytes)
