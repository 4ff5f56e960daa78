"""
Configuration for cinefetch.

Contains default settings and the layered config loader.
"""

from cinefetch.config.defaults import (
    AI_MAX_INPUT_CHARS,
    DEFAULT_AI_PROVIDER,
    EXPORT_FILE_PREFIX,
    SMOOTHING_DELAY,
)
from cinefetch.config.loader import (
    CinefetchConfig,
    ConfigSource,
    clear_config_cache,
    get_config,
    get_export_dir,
)

__all__ = [
    "AI_MAX_INPUT_CHARS",
    "DEFAULT_AI_PROVIDER",
    "EXPORT_FILE_PREFIX",
    "SMOOTHING_DELAY",
    "CinefetchConfig",
    "ConfigSource",
    "get_config",
    "get_export_dir",
    "clear_config_cache",
]
