"""
Utilities module - Common utility functions.
"""

from recorder_search.utils.logging import (
    setup_logging,
    setup_logging_from_settings,
    get_logger,
)

__all__ = [
    "setup_logging",
    "setup_logging_from_settings",
    "get_logger",
]
