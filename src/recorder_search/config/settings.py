"""
Settings - Pydantic models for type-safe configuration.

This module defines all configuration settings as Pydantic models,
providing validation, type hints, and automatic environment variable loading.

Example:
    >>> from recorder_search.config import Settings, load_config
    >>> settings = load_config()  # Loads from env, yaml, and defaults
    >>> print(settings.search.debounce_ms)
    150
"""

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HighlightColors(BaseModel):
    """
    Colors used when highlighting elements in the recorder.
    
    All colors should include an alpha channel (8 hex digits or rgba).
    
    Attributes:
        multiple: Color for highlighting multiple matched elements
        single: Color for highlighting a single matched element
        assert_: Color for assertion mode highlights (``assert`` in files)
        action: Color for action/recording mode highlights
        current_match: Color for the current search match (falls back to single)
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)
    
    multiple: str = "#f6b26b7f"
    single: str = "#6fa8dc7f"
    assert_: str = Field(default="#8acae480", alias="assert")
    action: str = "#dc6f6f7f"
    current_match: Optional[str] = None
    
    @property
    def current_match_color(self) -> str:
        """Color for the current search match."""
        return self.current_match or self.single


class SearchSettings(BaseModel):
    """
    Element search behavior.
    
    Attributes:
        debounce_ms: Delay between the last keystroke and the search
        language: Recorder output language, used for locator syntax and tooltips
        test_id_attribute: Attribute resolved by getByTestId
        auto_scroll: Reveal the current match after searching and navigating
        placeholder: Placeholder text of the search input
        trigger_title: Title of the collapsed search trigger
    """
    model_config = ConfigDict(frozen=True)
    
    debounce_ms: int = Field(default=150, ge=0, le=5000)
    language: Literal["javascript", "python"] = "javascript"
    test_id_attribute: str = "data-testid"
    auto_scroll: bool = True
    placeholder: str = "Find elements..."
    trigger_title: str = "Search elements"


class LoggingSettings(BaseModel):
    """
    Logging configuration.
    
    Attributes:
        level: Log level
        format: Log format string
        file: Log file path (None for console only)
        json_format: Use JSON format for logs
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None
    json_format: bool = False


class SearchConfig(BaseModel):
    """
    Read-only configuration snapshot handed to the search core.
    
    The core never reads the global settings; the host builds one of these
    and injects it, so a settings reload never changes a running search.
    """
    model_config = ConfigDict(frozen=True)
    
    colors: HighlightColors = Field(default_factory=HighlightColors)
    search: SearchSettings = Field(default_factory=SearchSettings)


class Settings(BaseSettings):
    """
    Root settings container - single source of truth for all configuration.
    
    Settings are loaded in this priority order (highest to lowest):
    1. Explicit values passed to constructor (ConfigLoader passes YAML values here)
    2. Environment variables (prefixed with RECORDER_SEARCH__)
    3. Default values
    
    Example:
        >>> settings = Settings()  # Load from env vars
        >>> settings = Settings(search=SearchSettings(language="python"))
    """
    
    model_config = SettingsConfigDict(
        env_prefix="RECORDER_SEARCH__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )
    
    colors: HighlightColors = Field(default_factory=HighlightColors)
    search: SearchSettings = Field(default_factory=SearchSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    
    debug: bool = False
    
    def snapshot(self) -> SearchConfig:
        """Freeze the parts of the settings the search core consumes."""
        return SearchConfig(colors=self.colors, search=self.search)
    
    def merge_with(self, overrides: dict) -> "Settings":
        """
        Create a new Settings instance with overrides applied.
        
        Args:
            overrides: Dictionary of values to override
            
        Returns:
            New Settings instance with overrides applied
        """
        current = self.model_dump(by_alias=True)
        
        def deep_merge(base: dict, updates: dict) -> dict:
            for key, value in updates.items():
                if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                    deep_merge(base[key], value)
                else:
                    base[key] = value
            return base
        
        merged = deep_merge(current, overrides)
        return Settings(**merged)
