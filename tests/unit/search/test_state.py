"""
Tests for the navigation state machine and the UI projector.
"""

import pytest

from recorder_search.search.modes import SearchMode
from recorder_search.search.projector import project
from recorder_search.search.state import (
    SearchState,
    empty_state,
    next_match,
    prev_match,
    search_completed,
)


MATCHES = ["a", "b", "c"]


class TestSearchState:
    """Test the shape of search states."""
    
    def test_empty_state(self):
        """Test the empty state has no current match."""
        state = empty_state()
        assert state.query == ""
        assert state.current_index == -1
        assert state.current is None
        assert not state.is_active
    
    def test_index_must_be_minus_one_without_matches(self):
        """Test an index without matches is rejected."""
        with pytest.raises(ValueError):
            SearchState(current_index=0)
    
    def test_index_must_be_in_range(self):
        """Test an out of range index is rejected."""
        with pytest.raises(ValueError):
            SearchState(matches=("a",), current_index=1)
        with pytest.raises(ValueError):
            SearchState(matches=("a",), current_index=-1)


class TestTransitions:
    """Test search-completed, next and prev."""
    
    def test_search_completed_selects_first(self):
        """Test a completed search selects the first match."""
        state = search_completed("q", SearchMode.TEXT, MATCHES)
        assert state.current_index == 0
        assert state.current == "a"
        assert state.matches == ("a", "b", "c")
        assert state.mode == SearchMode.TEXT
    
    def test_search_completed_without_matches(self):
        """Test a search with no results is empty but keeps the query."""
        state = search_completed("q", SearchMode.TEXT, [])
        assert state.current_index == -1
        assert state.query == "q"
    
    def test_next_wraps(self):
        """Test next cycles forward and wraps to the start."""
        state = search_completed("q", SearchMode.AUTO, MATCHES)
        seen = []
        for _ in range(4):
            state = next_match(state)
            seen.append(state.current_index)
        assert seen == [1, 2, 0, 1]
    
    def test_prev_wraps(self):
        """Test prev from the first match goes to the last."""
        state = search_completed("q", SearchMode.AUTO, MATCHES)
        state = prev_match(state)
        assert state.current_index == 2
    
    @pytest.mark.parametrize("count", [1, 2, 5])
    def test_full_cycle_returns_to_start(self, count):
        """Test n steps in either direction return to the start."""
        start = search_completed("q", SearchMode.AUTO, list(range(count)))
        forward = start
        backward = start
        for _ in range(count):
            forward = next_match(forward)
            backward = prev_match(backward)
        assert forward.current_index == start.current_index
        assert backward.current_index == start.current_index
    
    def test_navigation_is_noop_when_empty(self):
        """Test next and prev do nothing without matches."""
        state = empty_state()
        assert next_match(state) is state
        assert prev_match(state) is state
    
    def test_transitions_do_not_mutate(self):
        """Test transitions return new states."""
        state = search_completed("q", SearchMode.AUTO, MATCHES)
        next_match(state)
        assert state.current_index == 0


class TestProjector:
    """Test the UI projection."""
    
    def test_active_counter(self):
        """Test the counter is one-based."""
        state = next_match(search_completed("q", SearchMode.AUTO, MATCHES))
        view = project(state, "q")
        assert view.counter_text == "2/3"
        assert view.navigation_enabled
        assert view.has_results
        assert not view.no_match
    
    def test_no_match(self):
        """Test a non-empty query without matches sets no-match."""
        view = project(search_completed("zzz", SearchMode.TEXT, []), "zzz")
        assert view.counter_text == ""
        assert view.no_match
        assert view.has_value
        assert not view.navigation_enabled
        assert not view.has_results
    
    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_input(self, value):
        """Test a blank input is neither a value nor a miss."""
        view = project(empty_state(), value)
        assert not view.no_match
        assert not view.has_value
