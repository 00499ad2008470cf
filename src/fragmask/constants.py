"""
fragmask.constants
==================

Defaults shared by the extractor, the restorer and the table format.
"""

from __future__ import annotations

from pathlib import Path

# ---- placeholders ------------------------------------------------------------

PLACEHOLDER_PREFIX = "FRAGMENT"
DEFAULT_KEY_LENGTH = 7
MAX_KEY_LENGTH = 18

# ---- markers -----------------------------------------------------------------

DEFAULT_OPENING = "{%"
DEFAULT_CLOSING = "%}"

# ---- persisted tables --------------------------------------------------------

TABLE_SCHEMA = 0  # version of the saved table format
TABLE_SUFFIX = ".fragments.json"

# ---- environment -------------------------------------------------------------

ENV_PREFIX = "FRAGMASK_"


def table_path(document: Path) -> Path:
    """Sidecar path used to keep a document's table between pipeline steps."""
    return document.with_name(document.name + TABLE_SUFFIX)
