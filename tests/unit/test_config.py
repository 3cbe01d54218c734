from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from smartjump.core.config import (
    DEFAULT_CONFIG,
    ConfigError,
    _deep_merge,
    default_config_path,
    expand_path,
    load_config,
    resolve_debug,
    resolve_lookahead,
    save_config,
    smart_enabled,
)


def test_deep_merge_nested_dicts() -> None:
    base = {"a": {"b": 1, "c": 2}, "x": 3}
    override = {"a": {"b": 9}, "y": 4}
    merged = _deep_merge(base, override)
    assert merged == {"a": {"b": 9, "c": 2}, "x": 3, "y": 4}
    assert base["a"]["b"] == 1


def test_expand_path_expands_home_and_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SMARTJUMP_TMP_PATH", str(tmp_path))
    expanded = expand_path("$SMARTJUMP_TMP_PATH/config.toml")
    assert expanded == (tmp_path / "config.toml").resolve()


def test_default_config_path_uses_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "custom.toml"
    monkeypatch.setenv("SMARTJUMP_CONFIG_FILE", str(path))
    assert default_config_path() == path.resolve()


def test_load_config_missing_file_returns_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "missing.toml")
    assert cfg["smart"]["enabled"] is True
    assert cfg["smart"]["debug"] == "off"
    assert cfg["smart"]["block_lookahead"] == 2
    assert cfg["actions"]["find_references"] == ""


def test_load_config_from_json(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"smart": {"block_lookahead": 4}}))
    cfg = load_config(path)
    assert cfg["smart"]["block_lookahead"] == 4
    assert cfg["smart"]["enabled"] is True


def test_load_config_from_toml(write_temp_toml) -> None:
    path = write_temp_toml(
        "config.toml",
        """
[smart]
debug = "on"

[languages.extensions]
".star" = "python"

[rules]
python = ["^\\\\s*@dataclass"]
""",
    )
    cfg = load_config(path)
    assert cfg["smart"]["debug"] == "on"
    assert cfg["smart"]["block_lookahead"] == 2
    assert cfg["languages"]["extensions"] == {".star": "python"}
    assert cfg["rules"]["python"] == ["^\\s*@dataclass"]


def test_load_config_invalid_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{broken")
    with pytest.raises(ConfigError):
        load_config(path)


def test_load_config_invalid_toml_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.toml"
    path.write_text("[smart\nenabled = true")
    with pytest.raises(ConfigError):
        load_config(path)


def test_load_config_non_table_root_raises(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigError):
        load_config(path)


def test_save_config_json(tmp_path: Path) -> None:
    payload: Dict[str, Any] = {"smart": {"block_lookahead": 7}}
    path = save_config(payload, tmp_path / "config.json")
    assert json.loads(path.read_text())["smart"]["block_lookahead"] == 7


def test_save_default_config_toml_and_reload(tmp_path: Path) -> None:
    path = save_config(DEFAULT_CONFIG, tmp_path / "nested" / "config.toml")
    assert path.exists()
    assert load_config(path) == DEFAULT_CONFIG


def test_save_config_quotes_dotted_keys(tmp_path: Path) -> None:
    payload = {"languages": {"extensions": {".star": "python"}}}
    path = save_config(payload, tmp_path / "config.toml")
    assert '".star" = "python"' in path.read_text()
    assert load_config(path)["languages"]["extensions"][".star"] == "python"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("on", True), ("off", False), ("ON", True), (True, True), (False, False)],
)
def test_resolve_debug_from_config(raw: Any, expected: bool) -> None:
    assert resolve_debug({"smart": {"debug": raw}}) is expected


def test_resolve_debug_defaults_off() -> None:
    assert resolve_debug({}) is False


def test_resolve_debug_explicit_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SMARTJUMP_DEBUG", "on")
    assert resolve_debug({"smart": {"debug": "on"}}, explicit=False) is False


def test_resolve_debug_env_overrides_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SMARTJUMP_DEBUG", "on")
    assert resolve_debug({"smart": {"debug": "off"}}) is True


@pytest.mark.parametrize("raw", ["yes", "1", "enabled"])
def test_resolve_debug_rejects_unknown_values(raw: str) -> None:
    with pytest.raises(ConfigError):
        resolve_debug({"smart": {"debug": raw}})


def test_resolve_lookahead() -> None:
    assert resolve_lookahead({}) == 2
    assert resolve_lookahead({"smart": {"block_lookahead": 0}}) == 0


@pytest.mark.parametrize("raw", [-1, "2", 1.5, True])
def test_resolve_lookahead_rejects_invalid(raw: Any) -> None:
    with pytest.raises(ConfigError):
        resolve_lookahead({"smart": {"block_lookahead": raw}})


def test_smart_enabled() -> None:
    assert smart_enabled({}) is True
    assert smart_enabled({"smart": {"enabled": False}}) is False
    assert smart_enabled({"smart": {"enabled": "off"}}) is False
    assert smart_enabled({"smart": {"enabled": "on"}}) is True


@pytest.mark.parametrize("raw", ["false", "no", 0])
def test_smart_enabled_rejects_unknown_values(raw: Any) -> None:
    with pytest.raises(ConfigError):
        smart_enabled({"smart": {"enabled": raw}})
