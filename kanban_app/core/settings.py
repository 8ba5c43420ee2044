"""Load application settings from YAML (with fallbacks) and the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .config import (
    HTTP_TIMEOUT_SECONDS,
    LINEAR_API_URL,
    TIMEZONE,
    AppSettings,
    cache_dir_for_environment,
    get_api_token,
)
from .errors import ConfigurationError

SETTINGS_FILE = "kanban.yaml"

ENV_OVERRIDES: dict[str, str] = {
    "LINEAR_TEAM_ID": "team_id",
    "METRICS_START_DATE": "start_date",
    "METRICS_END_DATE": "end_date",
    "KANBAN_CACHE_DIR": "cache_dir",
}

_CACHE: dict[str, Any] | None = None


def _read_yaml(yaml_path: Path) -> dict[str, Any]:
    if not yaml_path.exists():
        return {}
    try:
        data = yaml.safe_load(yaml_path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid settings file {yaml_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {yaml_path} must contain a mapping")
    return data


def load_file_settings(base_path: str | Path | None = None) -> dict[str, Any]:
    """Read ``kanban.yaml`` once; an explicit ``base_path`` bypasses the module cache."""
    global _CACHE
    if base_path is None and _CACHE is not None:
        return _CACHE
    base = Path(base_path or Path(__file__).resolve().parent.parent)
    data = _read_yaml(base / SETTINGS_FILE)
    if base_path is None:
        _CACHE = data
    return data


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name) or {}
    return value if isinstance(value, Mapping) else {}


def _str_or_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def load_settings(
    base_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> AppSettings:
    env = os.environ if env is None else env
    data = load_file_settings(base_path)
    defaults = _section(data, "defaults")
    cache = _section(data, "cache")
    api = _section(data, "api")

    values: dict[str, Any] = {
        "team_id": _str_or_none(defaults.get("team_id")),
        "start_date": _str_or_none(defaults.get("start_date")),
        "end_date": _str_or_none(defaults.get("end_date")),
        "cache_dir": _str_or_none(cache.get("directory")) or cache_dir_for_environment(env),
    }
    for env_key, field_name in ENV_OVERRIDES.items():
        override = _str_or_none(env.get(env_key))
        if override:
            values[field_name] = override

    try:
        timeout = float(api.get("timeout", HTTP_TIMEOUT_SECONDS))
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"api.timeout must be a number, got {api.get('timeout')!r}") from exc

    return AppSettings(
        api_token=get_api_token(env),
        api_url=_str_or_none(api.get("url")) or LINEAR_API_URL,
        http_timeout=timeout,
        timezone=_str_or_none(cache.get("timezone")) or TIMEZONE,
        **values,
    )
