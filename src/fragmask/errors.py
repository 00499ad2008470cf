"""
fragmask exceptions. Errors that point at a place in a document carry a
Diagnostic and render as a rich code frame; the rest are plain messages.
"""

from __future__ import annotations

from rich.console import Console, ConsoleOptions, RenderResult
from rich.text import Text

from fragmask.reporting.diagnostics import Diagnostic, location_label, render_diagnostic

__all__ = [
    "FragmaskError",
    "UnsupportedInputKind",
    "UnbalancedMarkers",
    "NestedMarkers",
    "RestoreKeyNotFound",
    "TokenCollision",
]


class FragmaskError(Exception):
    """Base fragmask exception, optionally carrying a Diagnostic."""

    code: str | None = None

    def __init__(self, message: str, *, diagnostic: Diagnostic | None = None):
        super().__init__(message)
        self.message = message
        self.diagnostic = diagnostic

    # Plain-text fallback (CI/log files; or if user didn't use Console)
    def __str__(self) -> str:
        d = self.diagnostic
        if d is None:
            return self.message
        code = f" [{d.code}]" if d.code else ""
        return f"{d.severity.upper()}{code}: {d.message} at {location_label(d)}"

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        _ = console
        _ = options
        if self.diagnostic is None:
            head = Text("ERROR", style="bold red")
            if self.code:
                head.append(f" [{self.code}]")
            head.append(f": {self.message}")
            yield head
        else:
            yield render_diagnostic(self.diagnostic)


class UnsupportedInputKind(FragmaskError, TypeError):
    """The engine was handed something other than a complete in-memory text buffer."""

    code = "FM004"


class UnbalancedMarkers(FragmaskError, ValueError):
    """An opening marker has no closing marker after it."""

    code = "FM001"


class NestedMarkers(UnbalancedMarkers):
    """An opening marker appears inside a fragment that is still open."""

    code = "FM002"


class RestoreKeyNotFound(FragmaskError, LookupError):
    """A table entry's placeholder is missing from the text being restored."""

    code = "FM003"

    def __init__(self, message: str, *, key: str, token: str):
        super().__init__(message)
        self.key = key
        self.token = token


class TokenCollision(Exception):
    """Raised inside key generation only; the generator retries with a new key."""
