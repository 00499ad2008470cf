"""
fragmask diagnostics: a small data model for problems found in a document, a
rich renderer that draws a code frame with carets under the offending span, and
an Emitter that prints them. Shared by exceptions and warnings.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from fragmask.source import Source, SourceSpan

__all__ = [
    "Severity",
    "Related",
    "Diagnostic",
    "FrameConfig",
    "Theme",
    "Emitter",
    "render_diagnostic",
    "location_label",
]


class Severity(StrEnum):
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Related:
    label: str
    span: SourceSpan
    source: Source


@dataclass(frozen=True, slots=True)
class Diagnostic:
    message: str
    severity: Severity
    span: SourceSpan
    source: Source
    code: str | None = None
    notes: list[str] = field(default_factory=list)
    hint: str | None = None
    related: list[Related] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class FrameConfig:
    context_lines: int = 1
    tab_width: int = 4
    show_line_numbers: bool = True
    max_related: int = 4
    max_line_width: int = 72  # minified inputs can put a whole file on one line


@dataclass(frozen=True, slots=True)
class Theme:
    info_header: str = "bold cyan"
    warn_header: str = "bold yellow"
    error_header: str = "bold red"
    filename: str = "italic"
    line_no: str = "dim"
    caret: str = "bold red"
    note_bullet: str = "dim"
    hint_label: str = "italic dim"

    def header_style(self, severity: Severity) -> str:
        if severity is Severity.ERROR:
            return self.error_header
        if severity is Severity.WARN:
            return self.warn_header
        return self.info_header


def location_label(d: Diagnostic) -> str:
    """`file:line:col` (or `<string>:line:col`) of the diagnostic's primary span."""
    ln, col = d.source.pos_to_line_col(d.span.start)
    return f"{d.source.label}:{ln}:{col}"


def _clip(line: str, start_col: int, end_col: int, width: int) -> tuple[str, int, int]:
    """
    Cut a long display line down to `width` chars around [start_col, end_col)
    (1-indexed display columns) and return the adjusted columns.
    """
    if len(line) <= width:
        return line, start_col, end_col
    lo = max(0, start_col - 1 - width // 3)
    clipped = line[lo:lo + width]
    prefix = "…" if lo > 0 else ""
    shift = lo - len(prefix)
    return prefix + clipped, start_col - shift, min(end_col - shift, len(prefix + clipped) + 1)


def _code_frame(
    source: Source,
    span: SourceSpan,
    severity: Severity,
    theme: Theme,
    cfg: FrameConfig,
) -> RenderableType:
    text = source.contents
    starts = source.line_starts
    s_line, s_col = source.pos_to_line_col(span.start)
    e_line, e_col = source.pos_to_line_col(span.end)

    last_line = max(1, len(starts) - 1)
    lo = max(1, s_line - cfg.context_lines)
    hi = min(last_line, e_line + cfg.context_lines)
    gutter_w = len(str(hi))

    body = Text()
    for i, line_no in enumerate(range(lo, hi + 1)):
        begin = int(starts[line_no - 1])
        stop = int(starts[line_no]) if line_no < len(starts) else len(text)
        raw = text[begin:stop].rstrip("\r\n")
        shown = raw.expandtabs(cfg.tab_width)

        marked = s_line <= line_no <= e_line
        first = len(raw[: s_col - 1].expandtabs(cfg.tab_width)) + 1 if line_no == s_line else 1
        last = (
            len(raw[: e_col - 1].expandtabs(cfg.tab_width)) + 1
            if line_no == e_line
            else len(shown) + 1
        )
        shown, first, last = _clip(shown, first, last, cfg.max_line_width)

        if i:
            body.append("\n")
        if cfg.show_line_numbers:
            body.append(f"{line_no:>{gutter_w}}", style=theme.line_no)
            body.append(" | ")
        body.append(shown)

        if marked:
            pad = (gutter_w + 3 if cfg.show_line_numbers else 0) + first - 1
            body.append("\n" + " " * pad)
            body.append("^" * max(1, last - first), style=theme.caret)

    title = Text(source.label, style=theme.filename)
    title.append(f":{s_line}:{s_col}", style=theme.line_no)
    return Panel.fit(body, title=title, border_style=theme.header_style(severity), padding=(0, 1))


def render_diagnostic(
    d: Diagnostic,
    *,
    theme: Theme | None = None,
    cfg: FrameConfig | None = None,
) -> RenderableType:
    """Header line, rule, main code frame, related frames, then notes and hint."""
    theme = theme or Theme()
    cfg = cfg or FrameConfig()
    style = theme.header_style(d.severity)

    head = Text(d.severity.upper(), style=style)
    if d.code:
        head.append(f" [{d.code}]")
    head.append(f": {d.message}")

    parts: list[RenderableType] = [head, Rule(style=style), _code_frame(d.source, d.span, d.severity, theme, cfg)]

    shown = d.related[: cfg.max_related]
    for rel in shown:
        parts.append(Text(rel.label, style=theme.line_no))
        parts.append(_code_frame(rel.source, rel.span, d.severity, theme, cfg))
    if len(d.related) > len(shown):
        parts.append(Text(f"... and {len(d.related) - len(shown)} more", style=theme.line_no))

    trailer = Text()
    for note in d.notes:
        trailer.append("\n• ", style=theme.note_bullet)
        trailer.append(note)
    if d.hint:
        trailer.append("\nHint: ", style=theme.hint_label)
        trailer.append(d.hint)
    if trailer.plain:
        parts.append(trailer)

    return Group(*parts)


class Emitter:
    """Prints diagnostics to a rich Console (stderr unless told otherwise)."""

    def __init__(
        self,
        console: Console | None = None,
        theme: Theme | None = None,
        cfg: FrameConfig | None = None,
    ):
        self.console = console or Console(stderr=True)
        self.theme = theme or Theme()
        self.cfg = cfg or FrameConfig()

    def emit(self, d: Diagnostic) -> None:
        self.console.print(render_diagnostic(d, theme=self.theme, cfg=self.cfg))

    def report(
        self,
        severity: Severity,
        message: str,
        source: Source,
        span: SourceSpan,
        *,
        code: str | None = None,
        hint: str | None = None,
        notes: Iterable[str] = (),
        related: Iterable[Related] = (),
    ) -> None:
        self.emit(
            Diagnostic(
                message=message,
                severity=severity,
                span=span,
                source=source,
                code=code,
                hint=hint,
                notes=list(notes),
                related=list(related),
            )
        )
