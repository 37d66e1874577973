"""
UI module - Toolbar widgets for the search tool.
"""

from recorder_search.ui.widgets import (
    ClassList,
    Event,
    KeyboardEvent,
    SearchFactories,
    SearchInput,
    Widget,
)

__all__ = [
    "ClassList",
    "Event",
    "KeyboardEvent",
    "SearchFactories",
    "SearchInput",
    "Widget",
]
