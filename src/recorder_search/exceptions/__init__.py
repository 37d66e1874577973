"""
Exceptions module - Custom exception hierarchy.

This module defines all custom exceptions used throughout Recorder Search.
Only collaborators raise them; the search pipeline itself never lets one
escape to the recorder UI.
"""

from recorder_search.exceptions.base import (
    RecorderSearchError,
    ConfigurationError,
)
from recorder_search.exceptions.selector import (
    SelectorError,
    SelectorParseError,
    SelectorEvaluationError,
    LocatorSyntaxError,
    AriaTemplateError,
)

__all__ = [
    # Base exceptions
    "RecorderSearchError",
    "ConfigurationError",
    # Selector exceptions
    "SelectorError",
    "SelectorParseError",
    "SelectorEvaluationError",
    "LocatorSyntaxError",
    "AriaTemplateError",
]
