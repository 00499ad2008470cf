"""
Opt-in bridge that routes fragmask warnings to rich code-frame rendering.
Python's warnings filtering still applies.

Do NOT install this at import time. Let scripts/CLIs opt in.
"""

from __future__ import annotations

import warnings
from collections.abc import Callable
from typing import TextIO

from rich.console import Console

from fragmask.reporting.diagnostics import Diagnostic, Emitter, location_label

__all__ = [
    "FragmaskWarning",
    "StrayMarkerWarning",
    "PlaceholderWarning",
    "DiagnosticWarning",
    "warn_diagnostic",
    "install_warnings_bridge",
]


class FragmaskWarning(Warning):
    """Base fragmask warning category."""


class DiagnosticWarning(FragmaskWarning):
    """
    A warning carrying a Diagnostic. Readable as plain text without the bridge,
    pretty-printed when the bridge is installed.
    """

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic

    def __str__(self) -> str:
        d = self.diagnostic
        code = f" [{d.code}]" if d.code else ""
        return f"{d.severity.upper()}{code}: {d.message} at {location_label(d)}"


class StrayMarkerWarning(DiagnosticWarning):
    """A closing marker outside any fragment was left in place as literal text."""


class PlaceholderWarning(FragmaskWarning):
    """Restoration hit an ambiguous or missing placeholder."""


def warn_diagnostic(
    category: type[DiagnosticWarning], diagnostic: Diagnostic, *, stacklevel: int = 3
) -> None:
    warnings.warn(category(diagnostic), stacklevel=stacklevel)


def install_warnings_bridge(
    *,
    emitter: Emitter | None = None,
    only_fragmask: bool = True,
) -> Callable[[], None]:
    """
    Route the display of fragmask warnings through rich frames.

    Returns an `uninstall()` function that restores the previous handler. With
    `only_fragmask=True` (default) other warnings are passed through unchanged.
    """
    em = emitter or Emitter(Console(stderr=True))
    prev_showwarning = warnings.showwarning

    def _showwarning(
        message: Warning | str,
        category: type[Warning],
        filename: str,
        lineno: int,
        file: TextIO | None = None,
        line: str | None = None,
    ) -> None:
        if isinstance(message, DiagnosticWarning):
            em.emit(message.diagnostic)
            return
        if only_fragmask and not issubclass(category, FragmaskWarning):
            return prev_showwarning(message, category, filename, lineno, file=file, line=line)
        em.console.print(f"{category.__name__}: {message} ({filename}:{lineno})")

    warnings.showwarning = _showwarning

    def uninstall() -> None:
        warnings.showwarning = prev_showwarning

    return uninstall
