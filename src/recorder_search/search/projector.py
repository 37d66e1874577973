"""
UI Projector - Derive what the toolbar shows from the search state.
"""

from dataclasses import dataclass

from recorder_search.search.state import SearchState


@dataclass(frozen=True)
class UIProjection:
    """
    Toolbar view of a search state.
    
    Attributes:
        counter_text: ``"2/5"`` style position, empty without matches
        no_match: The input holds a query that found nothing
        has_value: The input holds non-blank text (keeps the search expanded)
        has_results: There are matches (widens the search to show the counter)
        navigation_enabled: next/prev do something
    """
    counter_text: str
    no_match: bool
    has_value: bool
    has_results: bool
    navigation_enabled: bool


def project(state: SearchState, input_value: str) -> UIProjection:
    """
    Args:
        state: Current search state
        input_value: Raw text in the search input
    """
    has_value = bool(input_value.strip())
    active = state.is_active
    return UIProjection(
        counter_text=f"{state.current_index + 1}/{len(state.matches)}" if active else "",
        no_match=has_value and not active,
        has_value=has_value,
        has_results=active,
        navigation_enabled=active,
    )
