"""
Highlight module - Highlight overlay implementations.
"""

from recorder_search.interfaces.highlight import HighlightEntry, IHighlight
from recorder_search.highlight.memory import InMemoryHighlight
from recorder_search.highlight.page import PageHighlight

__all__ = [
    "HighlightEntry",
    "IHighlight",
    "InMemoryHighlight",
    "PageHighlight",
]
