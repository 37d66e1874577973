"""
Search State - The match list and the navigation state machine.

States:
    empty   no matches, current_index == -1
    active  matches present, 0 <= current_index < len(matches)

Transitions return a new SearchState; ``next``/``prev`` are no-ops when
empty.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional, Tuple

from recorder_search.search.modes import SearchMode


@dataclass(frozen=True)
class SearchState:
    """
    Result of the latest search plus the selected match.
    
    Attributes:
        query: Cleaned query that produced the matches
        mode: Strategy that produced the matches
        matches: Elements in document order, none an ancestor of another
        current_index: Selected match, -1 when there are none
    """
    query: str = ""
    mode: SearchMode = SearchMode.AUTO
    matches: Tuple[Any, ...] = field(default_factory=tuple)
    current_index: int = -1
    
    def __post_init__(self):
        if not self.matches and self.current_index != -1:
            raise ValueError("current_index must be -1 when there are no matches")
        if self.matches and not 0 <= self.current_index < len(self.matches):
            raise ValueError(f"current_index {self.current_index} out of range")
    
    @property
    def is_active(self) -> bool:
        return bool(self.matches)
    
    @property
    def current(self) -> Optional[Any]:
        return self.matches[self.current_index] if self.matches else None


def empty_state() -> SearchState:
    return SearchState()


def search_completed(query: str, mode: SearchMode, matches) -> SearchState:
    """Fresh state for a finished search; the first match is selected."""
    matches = tuple(matches)
    return SearchState(
        query=query,
        mode=mode,
        matches=matches,
        current_index=0 if matches else -1,
    )


def next_match(state: SearchState) -> SearchState:
    if not state.is_active:
        return state
    return replace(state, current_index=(state.current_index + 1) % len(state.matches))


def prev_match(state: SearchState) -> SearchState:
    if not state.is_active:
        return state
    count = len(state.matches)
    return replace(state, current_index=(state.current_index - 1 + count) % count)
