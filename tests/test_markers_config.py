from __future__ import annotations

import pytest

from fragmask.config import EngineConfig
from fragmask.markers import DEFAULT_MARKERS, Marker, MarkerPair, MarkerStyle, marker_pair


def test_marker_length_follows_symbol() -> None:
    assert Marker("{%").length == 2
    assert Marker("<?php").length == 5


@pytest.mark.parametrize("bad", ["", None, 3])
def test_marker_rejects_bad_symbols(bad: object) -> None:
    with pytest.raises(ValueError):
        Marker(bad)  # type: ignore[arg-type]


def test_marker_pair_requires_distinct_symbols() -> None:
    with pytest.raises(ValueError):
        MarkerPair.of("%%", "%%")


@pytest.mark.parametrize(
    "style,opening,closing",
    [
        (MarkerStyle.JINJA, "{%", "%}"),
        ("expression", "{{", "}}"),
        ("comment", "{#", "#}"),
        ("erb", "<%", "%>"),
        ("php", "<?php", "?>"),
    ],
)
def test_presets(style: str, opening: str, closing: str) -> None:
    pair = marker_pair(style)
    assert pair.opening.symbol == opening
    assert pair.closing.symbol == closing


def test_unknown_preset() -> None:
    with pytest.raises(ValueError, match="Unknown marker style"):
        marker_pair("mustache")


def test_defaults() -> None:
    cfg = EngineConfig()
    assert cfg.markers == DEFAULT_MARKERS
    assert cfg.opening.symbol == "{%"
    assert cfg.closing.symbol == "%}"
    assert cfg.key_length == 7
    assert cfg.placeholder("0123456") == "FRAGMENT0123456"
    assert cfg.strict_restore is True


@pytest.mark.parametrize("length", [0, -1, 19, True])
def test_key_length_bounds(length: int) -> None:
    with pytest.raises(ValueError):
        EngineConfig(key_length=length)


@pytest.mark.parametrize("prefix", ["", "FRAG1", "x%}"])
def test_prefix_validation(prefix: str) -> None:
    with pytest.raises(ValueError):
        EngineConfig(prefix=prefix)


def test_evolve() -> None:
    cfg = EngineConfig().evolve(key_length=4, prefix="TPL")
    assert (cfg.key_length, cfg.prefix) == (4, "TPL")
    with pytest.raises(ValueError, match="Unknown EngineConfig field"):
        EngineConfig().evolve(keylength=4)


def test_from_env_full() -> None:
    cfg = EngineConfig.from_env(
        {
            "FRAGMASK_STYLE": "ERB",
            "FRAGMASK_KEY_LENGTH": "4",
            "FRAGMASK_PREFIX": "TPL",
            "FRAGMASK_STRICT_RESTORE": "no",
        }
    )
    assert cfg.markers == marker_pair("erb")
    assert cfg.key_length == 4
    assert cfg.prefix == "TPL"
    assert cfg.strict_restore is False


def test_from_env_single_symbol_override() -> None:
    cfg = EngineConfig.from_env({"FRAGMASK_OPEN": "[[", "FRAGMASK_KEY_LENGTH": ""})
    assert cfg.opening.symbol == "[["
    assert cfg.closing.symbol == "%}"
    assert cfg.key_length == 7


@pytest.mark.parametrize(
    "env",
    [
        {"FRAGMASK_KEY_LENGTH": "seven"},
        {"FRAGMASK_STRICT_RESTORE": "maybe"},
        {"FRAGMASK_STYLE": "nope"},
    ],
)
def test_from_env_rejects_bad_values(env: dict[str, str]) -> None:
    with pytest.raises(ValueError):
        EngineConfig.from_env(env)


def test_from_env_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FRAGMASK_STYLE", "expression")
    assert EngineConfig.from_env().markers == marker_pair("expression")
