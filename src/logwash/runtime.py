"""Runtime configuration helpers."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .constants import CONFIG_ENV_VAR
from .file_manager import FileManager
from .models import LogSettings

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}

INT_SETTINGS = {
    "LOGWASH_CUTOFF_LENGTH": ("cutoff_length", 1),
    "LOGWASH_INFINITE_LENGTH": ("infinite_length", 1),
    "LOGWASH_ABBREV": ("abbrev", 4),
}
BOOL_SETTINGS = {
    "LOGWASH_UNICODE_GRAPH": "unicode_graph",
    "LOGWASH_SHOW_MARGIN": "show_margin",
}
MARGIN_SETTINGS = {
    "LOGWASH_MARGIN_WIDTH": ("total_width", 8),
    "LOGWASH_MARGIN_UNIT_WIDTH": ("unit_width", 1),
}


def get_runtime_defaults(env: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Return validated setting overrides from environment variables."""
    source = os.environ if env is None else env
    values: dict[str, Any] = {}
    for key, (name, min_value) in INT_SETTINGS.items():
        parsed = _parse_int_env(source=source, key=key, default=None, min_value=min_value)
        if parsed is not None:
            values[name] = parsed
    for key, name in BOOL_SETTINGS.items():
        parsed_bool = _parse_bool_env(source=source, key=key, default=None)
        if parsed_bool is not None:
            values[name] = parsed_bool

    margin: dict[str, Any] = {}
    for key, (name, min_value) in MARGIN_SETTINGS.items():
        parsed = _parse_int_env(source=source, key=key, default=None, min_value=min_value)
        if parsed is not None:
            margin[name] = parsed
    if margin:
        values["margin"] = margin
    return values


def get_config_path(env: Mapping[str, str] | None = None) -> str:
    source = os.environ if env is None else env
    return source.get(CONFIG_ENV_VAR, "").strip()


def load_settings(
    config_path: str | None = None,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
    file_manager: FileManager | None = None,
) -> LogSettings:
    """Merge defaults, YAML file, environment and explicit overrides.

    Later sources win; nested ``margin`` keys are merged key by key.
    """
    file_manager = file_manager or FileManager()
    path_value = (config_path or "").strip() or get_config_path(env)
    merged: dict[str, Any] = {}
    if path_value:
        merged = _merge(merged, file_manager.read_yaml(Path(path_value).expanduser()))
    merged = _merge(merged, get_runtime_defaults(env))
    if overrides:
        merged = _merge(merged, {key: value for key, value in overrides.items() if value is not None})
    return LogSettings.model_validate(merged)


def _merge(base: dict[str, Any], update: Mapping[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in update.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = _merge(dict(result[key]), value)
        else:
            result[key] = value
    return result


def _parse_bool_env(source: Mapping[str, str], key: str, default: bool | None) -> bool | None:
    raw = source.get(key)
    if raw is None or not str(raw).strip():
        return default
    normalized = str(raw).strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(f"{key} must be a boolean value (true/false).")


def _parse_int_env(
    source: Mapping[str, str],
    key: str,
    default: int | None,
    min_value: int | None = None,
) -> int | None:
    raw = source.get(key)
    if raw is None or not str(raw).strip():
        return default
    try:
        parsed = int(str(raw).strip())
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer.") from exc
    if min_value is not None and parsed < min_value:
        raise ValueError(f"{key} must be >= {min_value}.")
    return parsed
