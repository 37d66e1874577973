"""
Configuration module - Highlight colors, debounce and locator language.

The search core never reads these globals. A host takes a frozen
SearchConfig snapshot when it builds an ElementSearchTool, so reloading
settings only affects tools created afterwards.

Usage:
    from recorder_search.config import get_search_config, load_config
    
    # Snapshot of the process settings, for create_host(config=...)
    config = get_search_config(language="python")
    
    # Fresh settings, bypassing the process cache
    settings = load_config(search={"debounce_ms": 300})

Environment Variables:
    RECORDER_SEARCH_CONFIG=~/search.yaml
    RECORDER_SEARCH__SEARCH__DEBOUNCE_MS=200
    RECORDER_SEARCH__SEARCH__LANGUAGE=python
    RECORDER_SEARCH__COLORS__CURRENT_MATCH=#ff00007f
"""

from typing import Optional

from pydantic import ValidationError

from recorder_search.config.settings import (
    Settings,
    HighlightColors,
    SearchSettings,
    LoggingSettings,
    SearchConfig,
)
from recorder_search.config.loader import CONFIG_ENV_VAR, ConfigLoader, load_config
from recorder_search.exceptions.base import ConfigurationError

_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Process-wide settings, loaded on first use.
    
    Raises:
        ConfigurationError: If the config file or environment is invalid;
            the next call retries the load
    """
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None


def get_search_config(language: Optional[str] = None) -> SearchConfig:
    """
    Snapshot the process settings for a new search tool.
    
    Args:
        language: Recorder language overriding the configured one
    
    Raises:
        ConfigurationError: If the settings or the language are invalid
    """
    settings = get_settings()
    if language is not None:
        try:
            settings = settings.merge_with({"search": {"language": language}})
        except ValidationError as e:
            raise ConfigurationError(
                f"Unknown recorder language: {language}", {"language": language}
            ) from e
    return settings.snapshot()


__all__ = [
    "Settings",
    "HighlightColors",
    "SearchSettings",
    "LoggingSettings",
    "SearchConfig",
    "CONFIG_ENV_VAR",
    "ConfigLoader",
    "load_config",
    "get_settings",
    "reset_settings",
    "get_search_config",
]
