from __future__ import annotations

import json
from pathlib import Path

import pytest

from fragmask.extract import extract
from fragmask.restore import restore
from fragmask.table import FragmentTable

from tests.utils import ScriptedRandom


def _table() -> FragmentTable:
    _, table = extract("A{%1%}B{%2%}C", rng=ScriptedRandom([2222222, 1111111]))
    return table


def test_read_api() -> None:
    table = _table()
    assert len(table) == 2
    assert "2222222" in table
    assert list(table) == ["2222222", "1111111"]
    assert list(table.items()) == [("2222222", "{%2%}"), ("1111111", "{%1%}")]
    assert table.token("2222222") == "FRAGMENT2222222"
    assert table.tokens() == ("FRAGMENT2222222", "FRAGMENT1111111")


def test_mapping_is_read_only() -> None:
    with pytest.raises(TypeError):
        _table().mapping["x"] = "y"  # type: ignore[index]


def test_table_is_frozen() -> None:
    with pytest.raises(AttributeError):
        _table().prefix = "OTHER"  # type: ignore[misc]


def test_json_round_trip_keeps_order() -> None:
    table = _table()
    data = table.to_json()
    assert list(json.loads(data)["entries"]) == ["2222222", "1111111"]
    again = FragmentTable.from_json(data)
    assert again == table
    assert list(again.keys()) == list(table.keys())


def test_schema_mismatch() -> None:
    with pytest.raises(ValueError, match="schema"):
        FragmentTable.from_json(b'{"entries": {}, "schema": 99}')


def test_save_and_load(tmp_path: Path) -> None:
    table = _table()
    path = tmp_path / "nested" / "table.json"
    table.save(path)
    assert FragmentTable.load(path) == table
    assert [p.name for p in path.parent.iterdir()] == ["table.json"]


def test_sidecar_between_pipeline_steps(tmp_path: Path) -> None:
    page = tmp_path / "page.html"
    original = "<body>{% include 'nav.html' %}<main>{{ x }}</main>{% endblock %}</body>"

    # step 1: mask and persist
    masked, table = extract(original)
    page.write_text(masked, encoding="utf-8")
    sidecar = table.save_beside(page)
    assert sidecar.name == "page.html.fragments.json"

    # step 2, later: reload and restore
    restored = restore(page.read_text(encoding="utf-8"), FragmentTable.load_beside(page))
    assert restored == original
