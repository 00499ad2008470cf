"""
fragmask
========

Hide templating fragments (`{% ... %}` and friends) behind placeholder tokens
while other tools process a document, then put them back.

    masked, table = extract(text)
    masked = minify(masked)
    text = restore(masked, table)
"""

from __future__ import annotations

from fragmask.config import EngineConfig
from fragmask.engine import FragmentEngine
from fragmask.errors import (
    FragmaskError,
    NestedMarkers,
    RestoreKeyNotFound,
    UnbalancedMarkers,
    UnsupportedInputKind,
)
from fragmask.extract import Extraction, extract
from fragmask.markers import Marker, MarkerPair, MarkerStyle, marker_pair
from fragmask.restore import restore
from fragmask.table import FragmentTable

__all__ = [
    "EngineConfig",
    "FragmentEngine",
    "FragmaskError",
    "NestedMarkers",
    "RestoreKeyNotFound",
    "UnbalancedMarkers",
    "UnsupportedInputKind",
    "Extraction",
    "extract",
    "Marker",
    "MarkerPair",
    "MarkerStyle",
    "marker_pair",
    "restore",
    "FragmentTable",
]
