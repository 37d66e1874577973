"""
Element Search Tool - Text-editor style element search for the recorder toolbar.

Supports searching by:
- Locator syntax (``getByRole('button')``, ``#id``, ``[data-testid=...]``)
- Aria template (prefix with ``/aria:`` or start with ``- ``)
- Text content (wrap in quotes: ``"text"`` or ``'text'``)
- Auto (tries locator first, falls back to text)

Features:
- Debounced, cancellable search while typing
- Highlight of the current match with a locator tooltip
- Match counter ("1/5"), Enter/Shift+Enter and F3/Shift+F3 navigation
- Collapsible UI state classes (``has-value``, ``has-results``, ``no-match``)
"""

import asyncio
import logging
from typing import Callable, List, Optional, Set

from recorder_search.search.debounce import DebounceScheduler
from recorder_search.search.dispatcher import StrategyDispatcher
from recorder_search.search.highlight_sync import HighlightSynchronizer
from recorder_search.search.host import SearchHost
from recorder_search.search.modes import detect_search_mode
from recorder_search.search.projector import UIProjection, project
from recorder_search.search.state import (
    SearchState,
    empty_state,
    next_match,
    prev_match,
    search_completed,
)
from recorder_search.ui.widgets import Event, KeyboardEvent, SearchInput, Widget

logger = logging.getLogger(__name__)


class ElementSearchTool:
    """
    Search UI and pipeline for one recorder toolbar.
    
    Example:
        >>> tool = ElementSearchTool(create_host(document))
        >>> tool.install(toolbar)
        >>> tool.input.type("getByRole('button')")
        >>> await asyncio.sleep(0.2); await tool.settle()
        >>> tool.projection.counter_text
        '1/3'
    """
    
    def __init__(self, host: SearchHost):
        self._host = host
        settings = host.config.search
        self._auto_scroll = settings.auto_scroll
        
        self._dispatcher = StrategyDispatcher(
            document=host.document,
            engine=host.engine,
            aria_parser=host.aria_parser,
            aria_matcher=host.aria_matcher,
            language=settings.language,
            test_id_attribute=settings.test_id_attribute,
        )
        self._highlight = HighlightSynchronizer(
            highlight=host.highlight,
            engine=host.engine,
            colors=host.config.colors,
            language=settings.language,
            test_id_attribute=settings.test_id_attribute,
        )
        self._debounce = DebounceScheduler(host.timers, settings.debounce_ms, self._on_debounce_fired)
        
        self._state: SearchState = empty_state()
        self._generation = 0
        self._inflight: Set[asyncio.Task] = set()
        self._listeners: List[Callable[[], None]] = []
        
        self._container: Optional[Widget] = None
        self._trigger: Optional[Widget] = None
        self._expandable: Optional[Widget] = None
        self._input: Optional[SearchInput] = None
        self._counter: Optional[Widget] = None
    
    # ------------------------------------------------------------------
    # Public surface
    # ------------------------------------------------------------------
    
    @property
    def state(self) -> SearchState:
        return self._state
    
    @property
    def projection(self) -> UIProjection:
        return project(self._state, self._input_value())
    
    @property
    def input(self) -> Optional[SearchInput]:
        return self._input
    
    @property
    def container(self) -> Optional[Widget]:
        return self._container
    
    @property
    def counter(self) -> Optional[Widget]:
        return self._counter
    
    @property
    def trigger(self) -> Optional[Widget]:
        return self._trigger
    
    @property
    def installed(self) -> bool:
        return self._container is not None
    
    def install(self, tools_list: Widget) -> None:
        """Render the search UI into ``tools_list`` and start listening."""
        if self.installed:
            return
        try:
            self._build(tools_list)
        except Exception as e:
            logger.warning(f"Failed to install element search: {e}", exc_info=True)
            self.uninstall()
    
    def uninstall(self) -> None:
        """Cancel pending work, detach listeners and remove rendered nodes."""
        self._debounce.cancel()
        # In-flight searches finish but their results are discarded.
        self._generation += 1
        for remove in self._listeners:
            remove()
        self._listeners = []
        
        had_matches = self._state.is_active
        self._state = empty_state()
        if had_matches:
            self._clear_highlight()
        
        if self._container is not None:
            self._container.remove()
        self._container = self._trigger = self._expandable = None
        self._input = self._counter = None
    
    def navigate_next(self) -> None:
        if not self._state.is_active:
            return
        self._apply(next_match(self._state))
        self._reveal_current()
    
    def navigate_prev(self) -> None:
        if not self._state.is_active:
            return
        self._apply(prev_match(self._state))
        self._reveal_current()
    
    def clear(self) -> None:
        """Reset to the empty state immediately, bypassing the debounce."""
        self._debounce.cancel()
        self._generation += 1
        self._state = empty_state()
        self._render()
        self._clear_highlight()
    
    async def search_now(self, query: str) -> SearchState:
        """Set the input to ``query`` and search without waiting for the debounce."""
        if self._input is not None:
            self._input.value = query
            self._update_has_value_class()
        self._debounce.cancel()
        if not query.strip():
            self.clear()
            return self._state
        self._generation += 1
        await self._run_search(self._generation, query.strip())
        return self._state
    
    def current_tooltip(self) -> str:
        """Locator text of the current match, empty when there is none."""
        if not self._state.is_active:
            return ""
        return self._highlight.tooltip_for(self._state.current)
    
    async def settle(self) -> None:
        """Wait until no search is in flight."""
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)
    
    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    
    def _build(self, tools_list: Widget) -> None:
        factories = self._host.factories
        settings = self._host.config.search
        
        self._container = factories.create_container()
        
        if factories.create_trigger is not None:
            self._trigger = factories.create_trigger(settings.trigger_title)
            self._container.append_child(self._trigger)
        
        if factories.create_expandable is not None:
            self._expandable = factories.create_expandable()
        else:
            self._expandable = Widget("x-pw-search-expandable")
        
        self._input = factories.create_input(settings.placeholder)
        self._expandable.append_child(self._input)
        
        if factories.create_counter is not None:
            self._counter = factories.create_counter()
            self._counter.text_content = ""
            self._expandable.append_child(self._counter)
        
        self._container.append_child(self._expandable)
        tools_list.append_child(self._container)
        
        self._listeners = [
            self._input.add_event_listener("input", self._guarded(self._on_search_input)),
            self._input.add_event_listener("input", self._guarded(lambda event: self._update_has_value_class())),
            self._input.add_event_listener("keydown", self._guarded(self._on_key_down)),
        ]
        if self._trigger is not None:
            self._listeners.append(
                self._trigger.add_event_listener("click", self._guarded(lambda event: self._input.focus()))
            )
    
    def _input_value(self) -> str:
        return self._input.value if self._input is not None else ""
    
    def _update_has_value_class(self) -> None:
        if self._container is None:
            return
        self._container.class_list.toggle("has-value", bool(self._input_value().strip()))
    
    def _render(self) -> None:
        view = project(self._state, self._input_value())
        if self._counter is not None:
            self._counter.text_content = view.counter_text
        if self._input is not None:
            self._input.class_list.toggle("no-match", view.no_match)
        if self._container is not None:
            self._container.class_list.toggle("has-value", view.has_value)
            self._container.class_list.toggle("has-results", view.has_results)
    
    def _apply(self, state: SearchState) -> None:
        self._state = state
        self._render()
        self._highlight.sync(state)
    
    def _clear_highlight(self) -> None:
        try:
            self._host.highlight.clear_highlight()
        except Exception as e:
            logger.warning(f"Failed to clear element search highlight: {e}", exc_info=True)
    
    def _reveal_current(self) -> None:
        if self._auto_scroll:
            self._highlight.reveal(self._state)
    
    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    
    def _guarded(self, handler: Callable[[Event], None]) -> Callable[[Event], None]:
        def listener(event: Event) -> None:
            try:
                handler(event)
            except Exception as e:
                logger.warning(f"Element search {event.type} handler failed: {e}", exc_info=True)
        return listener
    
    def _on_search_input(self, event: Event) -> None:
        if not self._input_value().strip():
            self.clear()
            return
        self._generation += 1
        self._debounce.schedule(self._generation)
    
    def _on_key_down(self, event: KeyboardEvent) -> None:
        # The recorder must not record keystrokes typed into the search.
        event.stop_propagation()
        
        if event.key == "Escape":
            if self._input is not None:
                self._input.value = ""
            self.clear()
            return
        
        if event.key in ("Enter", "F3"):
            event.prevent_default()
            if event.shift_key:
                self.navigate_prev()
            else:
                self.navigate_next()
    
    # ------------------------------------------------------------------
    # Search pipeline
    # ------------------------------------------------------------------
    
    def _on_debounce_fired(self, generation: int) -> None:
        query = self._input_value().strip()
        if not query:
            self.clear()
            return
        task = asyncio.get_running_loop().create_task(self._run_search(generation, query))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
    
    async def _run_search(self, generation: int, query: str) -> None:
        try:
            await self._perform_search(generation, query)
        except Exception as e:
            logger.warning(f"Element search for {query!r} failed: {e}", exc_info=True)
            if generation == self._generation:
                self._state = empty_state()
                self._render()
                self._clear_highlight()
    
    async def _perform_search(self, generation: int, query: str) -> None:
        detected = detect_search_mode(query)
        matches = await self._dispatcher.dispatch(detected.mode, detected.query)
        
        if generation != self._generation:
            logger.debug(f"Discarding stale {detected.mode.value} search for {detected.query!r}")
            return
        
        logger.debug(
            f"{detected.mode.value} search for {detected.query!r}: {len(matches)} match(es)"
        )
        self._apply(search_completed(detected.query, detected.mode, matches))
        self._reveal_current()
