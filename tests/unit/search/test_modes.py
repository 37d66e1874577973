"""
Tests for search mode detection.
"""

import pytest

from recorder_search.search.modes import SearchMode, detect_search_mode


class TestAriaDetection:
    """Queries routed to the aria template strategy."""
    
    def test_aria_prefix_is_stripped(self):
        """Test the /aria: prefix selects aria and is removed."""
        detected = detect_search_mode("/aria: foo")
        assert detected.mode == SearchMode.ARIA
        assert detected.query == "foo"
    
    def test_aria_prefix_trims_remainder(self):
        """Test whitespace after the prefix is trimmed."""
        detected = detect_search_mode('/aria:    - button "Submit"  ')
        assert detected.mode == SearchMode.ARIA
        assert detected.query == '- button "Submit"'
    
    def test_yaml_list_keeps_query(self):
        """Test YAML list items select aria without changing the query."""
        detected = detect_search_mode('- button "Submit"')
        assert detected.mode == SearchMode.ARIA
        assert detected.query == '- button "Submit"'
    
    def test_yaml_list_without_space_after_role(self):
        """Test a dash followed by whitespace and a word is a list item."""
        detected = detect_search_mode("-\theading")
        assert detected.mode == SearchMode.ARIA


class TestTextDetection:
    """Queries routed to the text strategy."""
    
    @pytest.mark.parametrize("query,cleaned", [
        ('"Submit"', "Submit"),
        ("'Submit'", "Submit"),
        ('"two words"', "two words"),
        ('""nonexistent""', '"nonexistent"'),
    ])
    def test_quoted_text(self, query, cleaned):
        """Test quotes select text mode and are stripped."""
        detected = detect_search_mode(query)
        assert detected.mode == SearchMode.TEXT
        assert detected.query == cleaned
    
    def test_mismatched_quotes_are_not_text(self):
        """Test a query opened and closed with different quotes."""
        assert detect_search_mode("\"Submit'").mode == SearchMode.AUTO
    
    def test_single_quote_character_is_not_text(self):
        """Test a lone quote is not an empty quoted string."""
        assert detect_search_mode('"').mode == SearchMode.AUTO


class TestLocatorDetection:
    """Queries routed to the locator strategy."""
    
    @pytest.mark.parametrize("query", [
        "#id",
        "getByRole('button')",
        "get_by_text(\"Hi\")",
        "page.getByTestId('x')",
        "locator('div')",
        "[data-testid=submit]",
        "text=Submit",
        "role=button",
        "label=Email",
        "placeholder=Search",
        "data-testid=submit",
    ])
    def test_locator_syntax(self, query):
        """Test locator-shaped queries keep their text."""
        detected = detect_search_mode(query)
        assert detected.mode == SearchMode.LOCATOR
        assert detected.query == query


class TestAutoDetection:
    """Queries that fall through to auto."""
    
    @pytest.mark.parametrize("query", ["hello", "button", "Sign in", "-dash"])
    def test_plain_words(self, query):
        """Test plain text selects auto unchanged."""
        detected = detect_search_mode(query)
        assert detected.mode == SearchMode.AUTO
        assert detected.query == query
