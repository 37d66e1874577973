"""
Config Loader - Build Settings from .env, a YAML file and explicit overrides.

Lookup order for the YAML file:
    1. ``config_path`` argument
    2. ``RECORDER_SEARCH_CONFIG`` environment variable
    3. ``config.yaml`` / ``config.yml`` / ``config/default.yaml`` in the
       working directory, then ``~/.config/recorder-search/config.yaml``

A missing file named by 1 or 2 is an error; the search paths in 3 are optional.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from recorder_search.config.settings import Settings
from recorder_search.exceptions.base import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "RECORDER_SEARCH_CONFIG"


class ConfigLoader:
    """
    Loads Settings for the search tool and its CLI.
    
    Priority order (highest to lowest):
    1. Overrides passed to load()
    2. Sections of the YAML config file
    3. Environment variables, including .env / .env.local
    4. Defaults
    
    Attributes:
        loaded_from: The YAML file the last load() read, if any
    """
    
    SEARCH_PATHS = [
        Path("config.yaml"),
        Path("config.yml"),
        Path("config/default.yaml"),
        Path.home() / ".config" / "recorder-search" / "config.yaml",
    ]
    
    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.config_path = Path(config_path) if config_path else None
        self.loaded_from: Optional[Path] = None
    
    def find_config_file(self) -> Optional[Path]:
        """
        Resolve the YAML file to read.
        
        Raises:
            ConfigurationError: If an explicitly named file does not exist
        """
        explicit = self.config_path
        if explicit is None and os.environ.get(CONFIG_ENV_VAR):
            explicit = Path(os.environ[CONFIG_ENV_VAR])
        
        if explicit is not None:
            if not explicit.is_file():
                raise ConfigurationError("Config file not found", path=explicit)
            return explicit
        
        return next((path for path in self.SEARCH_PATHS if path.is_file()), None)
    
    def load_yaml_config(self, path: Path) -> Dict[str, Any]:
        """
        Read a YAML mapping; an empty file is an empty mapping.
        
        Raises:
            ConfigurationError: If the file is not valid YAML or not a mapping
        """
        try:
            with open(path, "r") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError("Invalid YAML", {"error": str(e)}, path=path) from e
        
        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigurationError("Config file must contain a mapping", path=path)
        return config
    
    def load(
        self,
        env_file: Optional[Union[str, Path]] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> Settings:
        """
        Build Settings from every source.
        
        Args:
            env_file: .env file to read instead of ./.env or ./.env.local
            overrides: Nested values applied last
        
        Raises:
            ConfigurationError: If a file is unreadable or a value is invalid
        """
        if env_file:
            load_dotenv(env_file)
        else:
            env_path = next((p for p in (Path(".env"), Path(".env.local")) if p.is_file()), None)
            if env_path is not None:
                load_dotenv(env_path)
        
        file_config: Dict[str, Any] = {}
        self.loaded_from = self.find_config_file()
        if self.loaded_from is not None:
            file_config = self.load_yaml_config(self.loaded_from)
            logger.debug(f"Loaded search config from {self.loaded_from}")
        
        try:
            settings = Settings(**file_config)
            if overrides:
                settings = settings.merge_with(overrides)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            )
            raise ConfigurationError(
                "Invalid search configuration",
                {"errors": problems},
                path=self.loaded_from,
            ) from e
        
        return settings


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    env_file: Optional[Union[str, Path]] = None,
    **overrides: Any,
) -> Settings:
    """
    Load Settings in one call.
    
    Example:
        >>> settings = load_config()
        >>> settings = load_config(config_path="search.yaml")
        >>> settings = load_config(search={"debounce_ms": 300})
    """
    return ConfigLoader(config_path).load(env_file=env_file, overrides=overrides or None)
