"""
In-Memory Highlight - Highlight overlay that records what it was asked to show.

Used when there is no live page to draw on (CLI on a saved HTML file) and in
tests.
"""

import logging
from typing import Any, List, Optional

from recorder_search.interfaces.highlight import HighlightEntry, IHighlight

logger = logging.getLogger(__name__)


class InMemoryHighlight(IHighlight):
    """
    Keeps the current highlight entries.
    
    Attributes:
        entries: Entries currently shown
        history: Every update, in order (an empty list marks a clear)
        revealed: Last element scrolled into view
    """
    
    def __init__(self):
        self.entries: List[HighlightEntry] = []
        self.history: List[List[HighlightEntry]] = []
        self.revealed: Optional[Any] = None
    
    @property
    def is_visible(self) -> bool:
        return bool(self.entries)
    
    @property
    def current(self) -> Optional[HighlightEntry]:
        return self.entries[0] if self.entries else None
    
    def update_highlight(self, entries: List[HighlightEntry]) -> None:
        self.entries = list(entries)
        self.history.append(list(entries))
        logger.debug(f"Highlighting {len(entries)} element(s)")
    
    def clear_highlight(self) -> None:
        if self.entries or not self.history or self.history[-1]:
            self.history.append([])
        self.entries = []
    
    def reveal(self, element: Any) -> None:
        self.revealed = element
