"""
Unified configuration loader with priority resolution.

Root directory (CINEFETCH_ROOT):
- macOS/Linux: ~/.cinefetch
- Windows: %APPDATA%\\cinefetch
- Override: CINEFETCH_ROOT environment variable

Setting priority (highest to lowest), resolved per key:
1. Environment variables (CINEFETCH_EXPORT_DIR, CINEFETCH_AI_PROVIDER,
   CINEFETCH_AI_MODEL, CINEFETCH_AI_MAX_INPUT_CHARS, CINEFETCH_SMOOTHING_DELAY)
2. Project config (.cinefetch/config.yaml, searched upward from cwd)
3. User config ({root_dir}/config.yaml)
4. Defaults (config/defaults.py)

Example config.yaml:
    ai_provider: gemini
    ai_model: gemini-2.5-flash
    ai_max_input_chars: 20000
    smoothing_delay: 0
    export_dir: ./exports
"""

import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from cinefetch.config.defaults import (
    AI_MAX_INPUT_CHARS,
    DEFAULT_AI_PROVIDER,
    SMOOTHING_DELAY,
)

logger = logging.getLogger(__name__)

# Setting name -> environment variable
ENV_VARS: dict[str, str] = {
    "export_dir": "CINEFETCH_EXPORT_DIR",
    "ai_provider": "CINEFETCH_AI_PROVIDER",
    "ai_model": "CINEFETCH_AI_MODEL",
    "ai_max_input_chars": "CINEFETCH_AI_MAX_INPUT_CHARS",
    "smoothing_delay": "CINEFETCH_SMOOTHING_DELAY",
}


class ConfigSource(Enum):
    """Source of the configuration value."""

    ENV = "env"
    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True)
class CinefetchConfig:
    """Resolved cinefetch configuration.

    ``source`` is the highest-priority source that supplied any setting.
    """

    root_dir: Path
    export_dir: Path
    ai_provider: str = DEFAULT_AI_PROVIDER
    ai_model: str | None = None
    ai_max_input_chars: int = AI_MAX_INPUT_CHARS
    smoothing_delay: float = SMOOTHING_DELAY
    source: ConfigSource = ConfigSource.DEFAULT

    def __repr__(self) -> str:
        return (
            f"CinefetchConfig(export_dir={self.export_dir!r}, "
            f"ai_provider={self.ai_provider!r}, ai_model={self.ai_model!r}, "
            f"source={self.source.value!r})"
        )


def _load_yaml_config(config_path: Path) -> dict[str, Any] | None:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Parsed config dict, or None if file doesn't exist or fails to parse.
    """
    if not config_path.exists():
        return None

    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        return None

    if config is None:
        return {}
    if not isinstance(config, dict):
        logger.warning(f"Config file {config_path} is not a valid YAML dict")
        return None
    return config


def _coerce_int(value: Any, key: str) -> int | None:
    try:
        result = int(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring invalid {key}: {value!r} (expected integer)")
        return None
    if result <= 0:
        logger.warning(f"Ignoring invalid {key}: {value!r} (must be positive)")
        return None
    return result


def _coerce_float(value: Any, key: str) -> float | None:
    try:
        result = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring invalid {key}: {value!r} (expected number)")
        return None
    if result < 0:
        logger.warning(f"Ignoring invalid {key}: {value!r} (must be >= 0)")
        return None
    return result


def _settings_from_mapping(
    raw: dict[str, Any] | None,
    config_path: Path | None = None,
) -> dict[str, Any]:
    """Validate and normalize known settings from a YAML dict or env mapping.

    Unknown keys are ignored. Invalid values are logged and dropped.
    Relative export_dir paths resolve against the config file's directory.
    """
    if not raw:
        return {}

    settings: dict[str, Any] = {}

    export_dir = raw.get("export_dir")
    if export_dir:
        path = Path(str(export_dir)).expanduser()
        if not path.is_absolute() and config_path is not None:
            path = config_path.parent / path
        settings["export_dir"] = path.resolve()

    for key in ("ai_provider", "ai_model"):
        value = raw.get(key)
        if value:
            settings[key] = str(value).strip()

    if raw.get("ai_max_input_chars") is not None:
        value = _coerce_int(raw["ai_max_input_chars"], "ai_max_input_chars")
        if value is not None:
            settings["ai_max_input_chars"] = value

    if raw.get("smoothing_delay") is not None:
        value = _coerce_float(raw["smoothing_delay"], "smoothing_delay")
        if value is not None:
            settings["smoothing_delay"] = value

    return settings


def _env_settings() -> dict[str, Any]:
    """Collect settings from CINEFETCH_* environment variables."""
    raw = {key: os.environ[var] for key, var in ENV_VARS.items() if os.environ.get(var)}
    return _settings_from_mapping(raw)


def _find_project_config() -> Path | None:
    """Find project-level config by walking up from cwd.

    Returns:
        Path to .cinefetch/config.yaml if found, None otherwise.
    """
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        config_path = parent / ".cinefetch" / "config.yaml"
        if config_path.exists():
            return config_path
    return None


def _get_root_dir() -> Path:
    """Get the cinefetch root directory.

    Priority:
    1. CINEFETCH_ROOT environment variable
    2. Platform-specific default:
       - Windows: %APPDATA%\\cinefetch
       - macOS/Linux: ~/.cinefetch
    """
    env_root = os.environ.get("CINEFETCH_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()

    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "cinefetch"
        return Path.home() / "AppData" / "Roaming" / "cinefetch"
    return Path.home() / ".cinefetch"


def _get_user_config_path() -> Path:
    """Get the user-level config path ({root_dir}/config.yaml)."""
    return _get_root_dir() / "config.yaml"


def _get_default_export_dir() -> Path:
    """Get the default export directory ({root_dir}/exports)."""
    return _get_root_dir() / "exports"


def _resolve_config() -> CinefetchConfig:
    """Resolve configuration from all sources in priority order.

    Returns:
        Resolved CinefetchConfig.
    """
    root_dir = _get_root_dir()
    settings: dict[str, Any] = {}
    source = ConfigSource.DEFAULT

    # Lowest priority first; later layers overwrite earlier ones
    user_config_path = _get_user_config_path()
    user_settings = _settings_from_mapping(
        _load_yaml_config(user_config_path), user_config_path
    )
    if user_settings:
        logger.debug(f"Loaded user config {user_config_path}: {sorted(user_settings)}")
        settings.update(user_settings)
        source = ConfigSource.USER

    project_config_path = _find_project_config()
    if project_config_path:
        project_settings = _settings_from_mapping(
            _load_yaml_config(project_config_path), project_config_path
        )
        if project_settings:
            logger.debug(
                f"Loaded project config {project_config_path}: {sorted(project_settings)}"
            )
            settings.update(project_settings)
            source = ConfigSource.PROJECT

    env_settings = _env_settings()
    if env_settings:
        logger.info(f"Using settings from environment: {sorted(env_settings)}")
        settings.update(env_settings)
        source = ConfigSource.ENV

    settings.setdefault("export_dir", _get_default_export_dir())
    return CinefetchConfig(root_dir=root_dir, source=source, **settings)


@lru_cache(maxsize=1)
def get_config() -> CinefetchConfig:
    """Get resolved cinefetch configuration.

    Results are cached - configuration is resolved once per process.
    To force re-resolution (e.g., after env change), use clear_config_cache().
    """
    return _resolve_config()


def get_export_dir(ensure_exists: bool = True) -> Path:
    """Get the resolved export directory.

    Args:
        ensure_exists: If True (default), create the directory if it doesn't exist.
    """
    export_dir = get_config().export_dir
    if ensure_exists:
        export_dir.mkdir(parents=True, exist_ok=True)
    return export_dir


def clear_config_cache() -> None:
    """Clear the cached configuration.

    Call this if environment variables or config files have changed
    and you need to re-resolve the configuration.
    """
    get_config.cache_clear()
