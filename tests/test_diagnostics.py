from __future__ import annotations

import warnings

import pytest
from rich.console import Console

from fragmask.errors import RestoreKeyNotFound, UnbalancedMarkers, UnsupportedInputKind
from fragmask.extract import extract
from fragmask.pretty import print_exception, run_with_diagnostics, use_diagnostics
from fragmask.reporting.diagnostics import Diagnostic, Emitter, Related, Severity, render_diagnostic
from fragmask.reporting.warnings_bridge import StrayMarkerWarning, install_warnings_bridge
from fragmask.source import Source, SourceSpan
from fragmask.table import FragmentTable
from fragmask.restore import restore


def _console() -> Console:
    return Console(record=True, width=100, color_system=None, force_terminal=False)


def test_error_renders_code_frame() -> None:
    console = _console()
    with pytest.raises(UnbalancedMarkers) as ei:
        extract("<ul>\n  <li>{% for x in xs</li>\n</ul>", file="list.html")
    console.print(ei.value)
    out = console.export_text()
    assert "ERROR [FM001]" in out
    assert "never closed" in out
    assert "list.html:2:7" in out
    assert "  <li>{% for x in xs</li>" in out
    assert "^^" in out
    assert "Hint:" in out


def test_nested_error_shows_related_location() -> None:
    console = _console()
    with pytest.raises(UnbalancedMarkers) as ei:
        extract("{% a {% b %} %}")
    console.print(ei.value)
    out = console.export_text()
    assert "[FM002]" in out
    assert "outer fragment opens here" in out


def test_plain_errors_without_diagnostic() -> None:
    console = _console()
    with pytest.raises(UnsupportedInputKind) as ei:
        extract(None)  # type: ignore[arg-type]
    assert "NoneType" in str(ei.value)
    console.print(ei.value)
    assert "ERROR [FM004]" in console.export_text()


def test_long_lines_are_clipped() -> None:
    text = "x" * 500 + "{% open" + "y" * 500
    d = Diagnostic(
        message="clip me",
        severity=Severity.ERROR,
        span=SourceSpan.from_ints(500, 502),
        source=Source(text),
    )
    console = _console()
    console.print(render_diagnostic(d))
    out = console.export_text()
    assert "{% open" in out
    assert "x" * 300 not in out


def test_emitter_report_with_notes_and_related() -> None:
    console = _console()
    src = Source("a\nb\nc\n")
    Emitter(console).report(
        Severity.WARN,
        "look here",
        src,
        SourceSpan.from_ints(2, 3),
        code="FM999",
        notes=["first note"],
        related=[Related("and here", SourceSpan.from_ints(4, 5), src)],
    )
    out = console.export_text()
    assert "WARN [FM999]: look here" in out
    assert "• first note" in out
    assert "and here" in out


def test_warnings_bridge_renders_stray_markers() -> None:
    console = _console()
    with warnings.catch_warnings():
        warnings.simplefilter("always")
        uninstall = install_warnings_bridge(emitter=Emitter(console))
        try:
            extract("oops %} then {% fine %}")
        finally:
            uninstall()
    out = console.export_text()
    assert "outside any fragment" in out
    assert "oops %} then" in out


def test_warnings_bridge_passes_other_warnings_through() -> None:
    console = _console()
    with warnings.catch_warnings(record=True) as rec:
        warnings.simplefilter("always")
        uninstall = install_warnings_bridge(emitter=Emitter(console))
        try:
            warnings.warn("unrelated", UserWarning)
        finally:
            uninstall()
    assert console.export_text() == ""


def test_use_diagnostics_with_explicit_console() -> None:
    console = _console()
    with warnings.catch_warnings():
        warnings.simplefilter("always")
        with use_diagnostics(pretty=True, console=console) as active:
            assert active is console
            extract("%} {% a %}")
            with pytest.raises(RestoreKeyNotFound) as ei:
                restore("nothing", FragmentTable(entries={"0000001": "{% a %}"}))
            print_exception(ei.value)
    out = console.export_text()
    assert "outside any fragment" in out
    assert "FRAGMENT0000001" in out


def test_run_with_diagnostics_exits_with_status_2(capsys: pytest.CaptureFixture[str]) -> None:
    @run_with_diagnostics(color="never", pretty=False)
    def build() -> str:
        return extract("{% unterminated").text  # type: ignore[return-value]

    with pytest.raises(SystemExit) as ei:
        build()
    assert ei.value.code == 2
    assert "FM001" in capsys.readouterr().err


def test_run_with_diagnostics_can_reraise() -> None:
    @run_with_diagnostics(pretty=False, exit_on_exception=False)
    def build() -> None:
        extract("{% unterminated")

    with pytest.raises(UnbalancedMarkers):
        build()
