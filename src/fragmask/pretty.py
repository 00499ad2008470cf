"""
Script-friendly helpers for enabling diagnostics:
- `use_diagnostics(...)`: context manager that installs the warnings bridge (opt-in)
  and configures Rich color behavior with 'auto' defaults.
- `run_with_diagnostics(...)`: decorator to wrap a function in the same context
  and pretty-print FragmaskError on the way out.
"""

from __future__ import annotations

import contextvars
import functools
import os
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import ParamSpec, TypeVar

from rich.console import Console

from fragmask.errors import FragmaskError
from fragmask.reporting.diagnostics import Emitter
from fragmask.reporting.warnings_bridge import install_warnings_bridge

__all__ = ["use_diagnostics", "print_exception", "run_with_diagnostics"]

P = ParamSpec("P")
R = TypeVar("R")

# Track the active Console so print_exception() can reuse the same settings.
_active_console: contextvars.ContextVar[Console | None] = contextvars.ContextVar(
    "_active_console", default=None
)


@contextmanager
def use_diagnostics(
    *,
    color: str | None = None,
    pretty: bool | str | None = None,
    only_fragmask: bool = True,
    console: Console | None = None,
) -> Iterator[Console]:
    """
    Enable Rich diagnostics for *this script*.

    Args:
      color: 'auto' | 'always' | 'never' | None (env FRAGMASK_COLOR or 'auto')
      pretty: True | False | 'auto' | None (env FRAGMASK_PRETTY_WARNINGS or 'auto')
      only_fragmask: if True, only fragmask warnings get prettified.
      console: use this Console instead of building one (handy in tests).

    pretty='auto' installs the bridge only when a TTY is attached.
    """
    color = (color or os.getenv("FRAGMASK_COLOR") or "auto").lower()
    pretty_val = pretty if pretty is not None else os.getenv("FRAGMASK_PRETTY_WARNINGS", "auto")
    pretty_str = str(pretty_val).lower()
    is_tty = sys.stderr.isatty() or sys.stdout.isatty()
    enable_pretty = (pretty_str in {"true", "1"}) or (pretty_str == "auto" and is_tty)

    if console is None:
        console = Console(
            stderr=True,
            force_terminal=True if color == "always" else None,
            no_color=(color == "never"),
        )
    token = _active_console.set(console)

    uninstall = None
    try:
        if enable_pretty:
            uninstall = install_warnings_bridge(
                emitter=Emitter(console=console),
                only_fragmask=only_fragmask,
            )
        yield console
    finally:
        if uninstall:
            uninstall()
        _active_console.reset(token)


def print_exception(e: FragmaskError) -> None:
    """Pretty-print a FragmaskError; uses the active Console if available."""
    (_active_console.get() or Console(stderr=True)).print(e)


def run_with_diagnostics(
    *,
    color: str | None = None,
    pretty: bool | str | None = None,
    only_fragmask: bool = True,
    exit_on_exception: bool = True,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator: runs the function inside `use_diagnostics(...)`. A FragmaskError
    that escapes is pretty-printed and (by default) turned into exit status 2.
    """
    def deco(fn: Callable[P, R]) -> Callable[P, R]:
        @functools.wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with use_diagnostics(color=color, pretty=pretty, only_fragmask=only_fragmask):
                try:
                    return fn(*args, **kwargs)
                except FragmaskError as e:
                    print_exception(e)
                    if exit_on_exception:
                        raise SystemExit(2) from e
                    raise
        return wrapper
    return deco
