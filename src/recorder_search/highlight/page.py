"""
Page Highlight - Mirror the current search match into a live Playwright page.

The searched Document is a snapshot of the page's HTML; elements are located
in the live page through their structural CSS path. Everything is best
effort: if the page changed and the path no longer resolves, the highlight is
simply not drawn.
"""

import asyncio
import logging
from typing import Any, List, Optional, Set, TYPE_CHECKING

from recorder_search.interfaces.highlight import HighlightEntry, IHighlight
from recorder_search.selectors.engine import css_path

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)


HIGHLIGHT_CSS = """
.recorder-search-highlight {
    outline: 3px solid var(--recorder-search-color, #6fa8dc7f) !important;
    outline-offset: 2px !important;
    box-shadow: 0 0 12px var(--recorder-search-color, #6fa8dc7f) !important;
}

.recorder-search-tooltip {
    position: fixed;
    background: #1e1e1e;
    color: #f0f0f0;
    padding: 3px 8px;
    border-radius: 3px;
    font-size: 12px;
    font-family: ui-monospace, SFMono-Regular, Menlo, monospace;
    z-index: 2147483646;
    pointer-events: none;
}
"""

HIGHLIGHT_ELEMENTS_JS = """
([entries, css]) => {
    if (!document.getElementById('recorder-search-styles')) {
        const style = document.createElement('style');
        style.id = 'recorder-search-styles';
        style.textContent = css;
        document.head.appendChild(style);
    }
    document.querySelectorAll('.recorder-search-highlight').forEach(el => {
        el.classList.remove('recorder-search-highlight');
    });
    document.querySelectorAll('.recorder-search-tooltip').forEach(el => el.remove());
    
    let drawn = 0;
    for (const entry of entries) {
        let element = null;
        try {
            element = document.querySelector(entry.selector);
        } catch (e) {
            continue;
        }
        if (!element) continue;
        
        document.documentElement.style.setProperty('--recorder-search-color', entry.color);
        element.classList.add('recorder-search-highlight');
        
        if (entry.tooltip) {
            const rect = element.getBoundingClientRect();
            const tooltip = document.createElement('div');
            tooltip.className = 'recorder-search-tooltip';
            tooltip.textContent = entry.tooltip;
            tooltip.style.left = rect.left + 'px';
            tooltip.style.top = Math.max(0, rect.top - 26) + 'px';
            document.body.appendChild(tooltip);
        }
        drawn++;
    }
    return drawn;
}
"""

CLEAR_HIGHLIGHT_JS = """
() => {
    document.querySelectorAll('.recorder-search-highlight').forEach(el => {
        el.classList.remove('recorder-search-highlight');
    });
    document.querySelectorAll('.recorder-search-tooltip').forEach(el => el.remove());
}
"""

REVEAL_ELEMENT_JS = """
(selector) => {
    const element = document.querySelector(selector);
    if (!element) return false;
    element.scrollIntoView({ behavior: 'smooth', block: 'center', inline: 'nearest' });
    return true;
}
"""


class PageHighlight(IHighlight):
    """
    Highlight overlay drawing into a Playwright page.
    
    The overlay contract is synchronous, so each call schedules a
    ``page.evaluate`` on the running event loop. Use ``flush()`` to wait for
    the page to catch up.
    
    Usage:
        highlight = PageHighlight(page)
        highlight.update_highlight([HighlightEntry(element, "#6fa8dc7f", "getByText('A')")])
        await highlight.flush()
    """
    
    def __init__(self, page: "Page"):
        self._page = page
        self._pending: Set[asyncio.Task] = set()
    
    def _schedule(self, expression: str, arg: Optional[Any] = None) -> None:
        async def run() -> None:
            try:
                if arg is None:
                    await self._page.evaluate(expression)
                else:
                    await self._page.evaluate(expression, arg)
            except Exception as e:
                logger.debug(f"Page highlight update failed: {e}")
        
        task = asyncio.get_running_loop().create_task(run())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
    
    def update_highlight(self, entries: List[HighlightEntry]) -> None:
        payload = [
            {
                "selector": css_path(entry.element),
                "color": entry.color,
                "tooltip": entry.tooltip_text,
            }
            for entry in entries
        ]
        self._schedule(HIGHLIGHT_ELEMENTS_JS, [payload, HIGHLIGHT_CSS])
    
    def clear_highlight(self) -> None:
        self._schedule(CLEAR_HIGHLIGHT_JS)
    
    def reveal(self, element: Any) -> None:
        self._schedule(REVEAL_ELEMENT_JS, css_path(element))
    
    async def flush(self) -> None:
        """Wait for every scheduled page update."""
        while self._pending:
            await asyncio.gather(*list(self._pending))
