"""
Infrastructure layer - configuration

Settings come from config/app.yaml; config/.env.local (python-dotenv) and
the process environment override individual keys.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigError

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
DEFAULT_CONFIG_FILE = CONFIG_DIR / "app.yaml"
DEFAULT_DOTENV_FILE = CONFIG_DIR / ".env.local"

DEFAULT_API_BASE_URL = "http://localhost:8080/api"
DEFAULT_TIMEOUT = 30.0

ENV_PREFIX = "HREVAL_"


@dataclass(frozen=True)
class Settings:
    api_base_url: str = DEFAULT_API_BASE_URL
    api_timeout: float = DEFAULT_TIMEOUT
    session_dir: Path = PROJECT_ROOT / "data" / "sessions"
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        api = data.get("api") or {}
        session = data.get("session") or {}
        logging_cfg = data.get("logging") or {}

        base_url = str(api.get("base_url") or DEFAULT_API_BASE_URL).rstrip("/")
        try:
            timeout = float(api.get("timeout", DEFAULT_TIMEOUT))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"api.timeout must be a number: {api.get('timeout')!r}", config_key="api.timeout") from e
        if timeout <= 0:
            raise ConfigError("api.timeout must be positive", config_key="api.timeout", value=timeout)

        level = str(logging_cfg.get("level") or "INFO").upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigError(f"Unknown log level: {level}", config_key="logging.level")

        log_file = logging_cfg.get("file")
        return cls(
            api_base_url=base_url,
            api_timeout=timeout,
            session_dir=_resolve_path(session.get("dir") or "data/sessions"),
            log_level=level,
            log_file=_resolve_path(log_file) if log_file else None,
        )


def _resolve_path(value: str) -> Path:
    p = Path(value)
    return p if p.is_absolute() else PROJECT_ROOT / p


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}", config_key=str(path)) from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping", config_key=str(path))
    return data


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    overrides = {
        ("api", "base_url"): os.getenv(f"{ENV_PREFIX}API_BASE_URL"),
        ("api", "timeout"): os.getenv(f"{ENV_PREFIX}API_TIMEOUT"),
        ("session", "dir"): os.getenv(f"{ENV_PREFIX}SESSION_DIR"),
        ("logging", "level"): os.getenv(f"{ENV_PREFIX}LOG_LEVEL"),
        ("logging", "file"): os.getenv(f"{ENV_PREFIX}LOG_FILE"),
    }
    merged = {k: dict(v) if isinstance(v, dict) else v for k, v in data.items()}
    for (section, key), value in overrides.items():
        if value:
            merged.setdefault(section, {})[key] = value
    return merged


_settings: Optional[Settings] = None


def load_settings(config_file: Optional[Path] = None, dotenv_file: Optional[Path] = None) -> Settings:
    """Load settings once per process; explicit paths always reload."""
    global _settings
    if _settings is not None and config_file is None and dotenv_file is None:
        return _settings

    load_dotenv(dotenv_file or DEFAULT_DOTENV_FILE)
    data = _apply_env_overrides(_read_yaml(config_file or DEFAULT_CONFIG_FILE))
    _settings = Settings.from_dict(data)
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (tests)"""
    global _settings
    _settings = None
