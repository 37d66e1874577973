"""
Highlight Synchronizer - Keep the overlay on the current match.

Only the current match is highlighted, with a locator tooltip in the
recorder's language.
"""

import logging

from recorder_search.config.settings import HighlightColors
from recorder_search.interfaces.engine import ISelectorEngine
from recorder_search.interfaces.highlight import HighlightEntry, IHighlight
from recorder_search.search.state import SearchState
from recorder_search.selectors.locator import as_locator

logger = logging.getLogger(__name__)


class HighlightSynchronizer:
    """
    Pushes the current match of a SearchState to the highlight overlay.
    """
    
    def __init__(
        self,
        highlight: IHighlight,
        engine: ISelectorEngine,
        colors: HighlightColors,
        language: str = "javascript",
        test_id_attribute: str = "data-testid",
    ):
        self.highlight = highlight
        self.engine = engine
        self.colors = colors
        self.language = language
        self.test_id_attribute = test_id_attribute
    
    def tooltip_for(self, element) -> str:
        """Locator text for ``element``; empty if none can be generated."""
        try:
            generated = self.engine.generate_selector(element, self.test_id_attribute)
            return as_locator(self.language, generated.selector)
        except Exception as e:
            # The element may have been detached since it was matched.
            logger.debug(f"Could not describe current match: {e}")
            return ""
    
    def sync(self, state: SearchState) -> None:
        if not state.is_active:
            self.highlight.clear_highlight()
            return
        
        element = state.current
        self.highlight.update_highlight([
            HighlightEntry(
                element=element,
                color=self.colors.current_match_color,
                tooltip_text=self.tooltip_for(element),
            )
        ])
    
    def reveal(self, state: SearchState) -> None:
        if state.is_active:
            self.highlight.reveal(state.current)
