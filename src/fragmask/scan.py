"""
Locate fragments in a document.

Each opening marker is paired with the first closing marker that follows it.
Pairing is explicit: a second opening marker before the closing one is an
error, as is an opening marker that is never closed. Closing markers outside
any fragment are left alone as literal text.
"""

from __future__ import annotations

from fragmask.errors import NestedMarkers, UnbalancedMarkers
from fragmask.markers import MarkerPair
from fragmask.reporting.diagnostics import Diagnostic, Related, Severity
from fragmask.reporting.warnings_bridge import StrayMarkerWarning, warn_diagnostic
from fragmask.source import Source, SourceSpan

__all__ = ["find_fragments"]


def _marker_span(pos: int, length: int) -> SourceSpan:
    return SourceSpan.from_ints(pos, pos + length)


def _unclosed(source: Source, markers: MarkerPair, pos: int) -> UnbalancedMarkers:
    msg = f"opening marker {markers.opening.symbol!r} is never closed"
    return UnbalancedMarkers(
        msg,
        diagnostic=Diagnostic(
            message=msg,
            severity=Severity.ERROR,
            span=_marker_span(pos, markers.opening.length),
            source=source,
            code=UnbalancedMarkers.code,
            hint=f"add {markers.closing.symbol!r} after the fragment",
        ),
    )


def _nested(source: Source, markers: MarkerPair, outer: int, inner: int) -> NestedMarkers:
    msg = f"opening marker {markers.opening.symbol!r} inside an unclosed fragment"
    return NestedMarkers(
        msg,
        diagnostic=Diagnostic(
            message=msg,
            severity=Severity.ERROR,
            span=_marker_span(inner, markers.opening.length),
            source=source,
            code=NestedMarkers.code,
            notes=["nested or interleaved fragments are not supported"],
            related=[
                Related("outer fragment opens here", _marker_span(outer, markers.opening.length), source)
            ],
        ),
    )


def _warn_stray(source: Source, markers: MarkerPair, lo: int, hi: int) -> None:
    closing = markers.closing
    pos = source.contents.find(closing.symbol, lo, hi)
    while pos >= 0:
        warn_diagnostic(
            StrayMarkerWarning,
            Diagnostic(
                message=f"closing marker {closing.symbol!r} outside any fragment; kept as text",
                severity=Severity.WARN,
                span=_marker_span(pos, closing.length),
                source=source,
            ),
            stacklevel=5,
        )
        pos = source.contents.find(closing.symbol, pos + closing.length, hi)


def find_fragments(
    source: Source | str,
    markers: MarkerPair,
    *,
    warn_stray_closing: bool = True,
) -> tuple[SourceSpan, ...]:
    """
    Return the spans of all fragments, left to right. Each span runs from the
    start of the opening marker through the end of its closing marker.

    Raises UnbalancedMarkers for an unclosed opening marker and NestedMarkers
    when a fragment opens inside another one.
    """
    src = source if isinstance(source, Source) else Source.from_string(source)
    text = src.contents
    opening, closing = markers.opening, markers.closing

    spans: list[SourceSpan] = []
    pos = 0
    while (start := text.find(opening.symbol, pos)) >= 0:
        if warn_stray_closing:
            _warn_stray(src, markers, pos, start)

        body = start + opening.length
        close = text.find(closing.symbol, body)
        if close < 0:
            raise _unclosed(src, markers, start)

        inner = text.find(opening.symbol, body, close)
        if inner >= 0:
            raise _nested(src, markers, start, inner)

        end = close + closing.length
        spans.append(SourceSpan.from_ints(start, end))
        pos = end

    if warn_stray_closing:
        _warn_stray(src, markers, pos, len(text))

    return tuple(spans)
