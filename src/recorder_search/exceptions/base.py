"""
Base exceptions for Recorder Search.

Collaborators (selector engine, locator parser, aria template parser, config
loader) raise these. ElementSearchTool never lets one through: a failing
strategy is an empty match list, so only code driving a collaborator
directly needs to catch them.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union


class RecorderSearchError(Exception):
    """
    Base exception for all Recorder Search errors.
    
    Attributes:
        message: Human-readable error message
        details: Context for logs, e.g. the selector or template at fault
    """
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        context = ", ".join(
            f"{key}={value!r}" for key, value in self.details.items() if value is not None
        )
        return f"{self.message} ({context})" if context else self.message


class ConfigurationError(RecorderSearchError):
    """
    Search settings could not be loaded.
    
    Raised for a missing or malformed config file and for values the
    settings models reject (an unknown recorder language, a negative
    debounce delay).
    
    Attributes:
        path: Config file involved, if any
    """
    
    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        path: Optional[Union[str, Path]] = None,
    ):
        self.path = Path(path) if path is not None else None
        merged = {"path": str(self.path)} if self.path is not None else {}
        merged.update(details or {})
        super().__init__(message, merged)
