"""Configuration loading and persistence."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]

from smartjump.core.constants import DEBUG_VALUES, DEFAULT_BLOCK_LOOKAHEAD


class ConfigError(RuntimeError):
    """Raised when config file parsing or validation fails."""


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("SMARTJUMP_CONFIG_FILE", "~/.config/smartjump/config.toml")
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    return {
        "smart": {
            "enabled": True,
            "debug": "off",
            "block_lookahead": DEFAULT_BLOCK_LOOKAHEAD,
        },
        "languages": {
            "modes": {},
            "extensions": {},
        },
        "rules": {},
        "actions": {
            "find_definitions": "",
            "find_references": "",
        },
    }


DEFAULT_CONFIG: Dict[str, Any] = _default_config()


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text()
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except Exception as exc:
        if suffix in {".toml", ""}:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
        raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()

    if cfg_path.exists():
        loaded = _read_config(cfg_path)
        cfg = _deep_merge(cfg, loaded)

    return cfg


def _toml_literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, list):
        items = ", ".join(_toml_literal(item) for item in value if item is not None)
        return f"[{items}]"
    raise TypeError(f"Unsupported TOML value type: {type(value)!r}")


def _toml_key(key: str) -> str:
    if key and all(ch.isalnum() or ch in "-_" for ch in key):
        return key
    return _toml_literal(key)


def _dict_to_toml(data: Dict[str, Any], prefix: Optional[str] = None) -> str:
    lines = []
    plain_keys = []
    nested_keys = []

    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            nested_keys.append((key, value))
        else:
            plain_keys.append((key, value))

    if prefix is not None:
        lines.append(f"[{prefix}]")

    for key, value in plain_keys:
        lines.append(f"{_toml_key(key)} = {_toml_literal(value)}")

    if plain_keys and nested_keys:
        lines.append("")

    for index, (key, value) in enumerate(nested_keys):
        table_name = _toml_key(key) if prefix is None else f"{prefix}.{_toml_key(key)}"
        lines.append(_dict_to_toml(value, prefix=table_name))
        if index != len(nested_keys) - 1:
            lines.append("")

    return "\n".join(lines)


def save_config(config: Dict[str, Any], path: Optional[Path] = None) -> Path:
    """Save configuration to disk as TOML (default) or JSON."""
    cfg_path = path or default_config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)

    if cfg_path.suffix.lower() == ".json":
        cfg_path.write_text(json.dumps(config, indent=2) + "\n")
        return cfg_path

    cfg_path.write_text(_dict_to_toml(config).strip() + "\n")
    return cfg_path


def _parse_switch(raw: Any, source: str) -> bool:
    if isinstance(raw, bool):
        return raw
    value = str(raw).strip().lower()
    if value not in DEBUG_VALUES:
        raise ConfigError(f"{source} must be 'on' or 'off', got {raw!r}")
    return DEBUG_VALUES[value]


def resolve_debug(config: Dict[str, Any], explicit: Optional[bool] = None) -> bool:
    """Resolve the diagnostic toggle: CLI flag, then env, then config."""
    if explicit is not None:
        return explicit
    env_value = os.getenv("SMARTJUMP_DEBUG")
    if env_value:
        return _parse_switch(env_value, "SMARTJUMP_DEBUG")
    return _parse_switch(config.get("smart", {}).get("debug", "off"), "smart.debug")


def resolve_lookahead(config: Dict[str, Any]) -> int:
    """Read the C/C++ block lookahead window from config."""
    raw = config.get("smart", {}).get("block_lookahead", DEFAULT_BLOCK_LOOKAHEAD)
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        raise ConfigError(f"smart.block_lookahead must be a non-negative integer, got {raw!r}")
    return raw


def smart_enabled(config: Dict[str, Any]) -> bool:
    """Whether the go-to-definition command is wrapped at session start."""
    return _parse_switch(config.get("smart", {}).get("enabled", True), "smart.enabled")
