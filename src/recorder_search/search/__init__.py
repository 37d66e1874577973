"""
Search module - The element search pipeline.

keystroke -> DebounceScheduler -> detect_search_mode -> StrategyDispatcher
-> SearchState -> HighlightSynchronizer + project()
"""

from recorder_search.search.modes import DetectedQuery, SearchMode, detect_search_mode
from recorder_search.search.text_matcher import TextMatcher
from recorder_search.search.dispatcher import StrategyDispatcher
from recorder_search.search.debounce import AsyncioTimers, DebounceScheduler
from recorder_search.search.state import (
    SearchState,
    empty_state,
    next_match,
    prev_match,
    search_completed,
)
from recorder_search.search.projector import UIProjection, project
from recorder_search.search.highlight_sync import HighlightSynchronizer
from recorder_search.search.host import SearchHost, create_host
from recorder_search.search.tool import ElementSearchTool

__all__ = [
    "DetectedQuery",
    "SearchMode",
    "detect_search_mode",
    "TextMatcher",
    "StrategyDispatcher",
    "AsyncioTimers",
    "DebounceScheduler",
    "SearchState",
    "empty_state",
    "next_match",
    "prev_match",
    "search_completed",
    "UIProjection",
    "project",
    "HighlightSynchronizer",
    "SearchHost",
    "create_host",
    "ElementSearchTool",
]
