"""
Tests for locator syntax conversion and rendering.
"""

import pytest

from recorder_search.exceptions import LocatorSyntaxError
from recorder_search.selectors.locator import (
    as_locator,
    locator_or_selector_as_selector,
    looks_like_locator,
)


def _convert(text, language="javascript", test_id_attribute="data-testid"):
    return locator_or_selector_as_selector(language, text, test_id_attribute)


class TestLocatorToSelector:
    """Test converting locator call chains."""
    
    @pytest.mark.parametrize("locator,selector", [
        ("getByRole('button')", "role=button"),
        ("getByRole('button', { name: 'Submit' })", 'role=button[name="Submit"i]'),
        ("getByRole('button', { name: 'Submit', exact: true })", 'role=button[name="Submit"s]'),
        ("getByRole('heading', { level: 2 })", "role=heading[level=2]"),
        ("getByRole('checkbox', { checked: false })", "role=checkbox[checked=false]"),
        ("getByText('Hello')", 'text="Hello"i'),
        ("getByText('Hello', { exact: true })", 'text="Hello"s'),
        ("getByText(/hel+o/i)", "text=/hel+o/i"),
        ("getByLabel('Email')", 'label="Email"i'),
        ("getByPlaceholder('Search')", 'placeholder="Search"i'),
        ("getByAltText('logo')", 'alt="logo"i'),
        ("getByTitle('Help')", 'title="Help"i'),
        ("getByTestId('login')", 'testid=[data-testid="login"s]'),
        ("locator('#form')", "#form"),
        ("locator('#form').getByText('Go').first()", '#form >> text="Go"i >> nth=0'),
        ("getByRole('listitem').nth(2)", "role=listitem >> nth=2"),
        ("page.getByRole('link').last()", "role=link >> nth=-1"),
    ])
    def test_javascript(self, locator, selector):
        """Test JavaScript locators."""
        assert _convert(locator) == selector
    
    @pytest.mark.parametrize("locator,selector", [
        ('get_by_role("button", name="Submit")', 'role=button[name="Submit"i]'),
        ('get_by_role("button", name="Submit", exact=True)', 'role=button[name="Submit"s]'),
        ('page.get_by_text("Hi").first', 'text="Hi"i >> nth=0'),
        ('get_by_label(re.compile(r"e-?mail", re.IGNORECASE))', "label=/e-?mail/i"),
        ('get_by_test_id("x")', 'testid=[data-testid="x"s]'),
        ('get_by_role("button", include_hidden=True)', "role=button[include-hidden]"),
    ])
    def test_python(self, locator, selector):
        """Test Python locators."""
        assert _convert(locator, language="python") == selector
    
    def test_custom_test_id_attribute(self):
        """Test getByTestId uses the configured attribute."""
        assert _convert("getByTestId('x')", test_id_attribute="data-qa") == 'testid=[data-qa="x"s]'
    
    def test_plain_selectors_pass_through(self):
        """Test non-locator text is returned unchanged."""
        assert _convert("  #id > span  ") == "#id > span"
        assert _convert("text=Hello") == "text=Hello"
    
    @pytest.mark.parametrize("locator", [
        "getByRole('button'",
        "getByRole('button', { name: 'x' ",
        "getByRole()",
        "getByRole('button', { bogus: 1 })",
        "getByText('a', 'b')",
        "getByWhatever('x')",
        "getByText(undefinedVariable)",
        "getByText('x').nth('a')",
        "getByText('x') + 1",
    ])
    def test_malformed(self, locator):
        """Test malformed locators raise LocatorSyntaxError."""
        with pytest.raises(LocatorSyntaxError):
            _convert(locator)
    
    def test_looks_like_locator(self):
        """Test locator detection."""
        assert looks_like_locator("getByRole('button')")
        assert looks_like_locator("page.get_by_text('x')")
        assert looks_like_locator("locator('div')")
        assert not looks_like_locator("#id")
        assert not looks_like_locator("role=button")


class TestAsLocator:
    """Test rendering selectors as locators."""
    
    @pytest.mark.parametrize("selector,javascript,python", [
        (
            'role=button[name="Submit"i]',
            "getByRole('button', { name: 'Submit' })",
            'get_by_role("button", name="Submit")',
        ),
        (
            'role=button[name="Submit"s]',
            "getByRole('button', { name: 'Submit', exact: true })",
            'get_by_role("button", name="Submit", exact=True)',
        ),
        (
            'text="Hello"i',
            "getByText('Hello')",
            'get_by_text("Hello")',
        ),
        (
            'label="Email"s',
            "getByLabel('Email', { exact: true })",
            'get_by_label("Email", exact=True)',
        ),
        (
            'testid=[data-testid="login"]',
            "getByTestId('login')",
            'get_by_test_id("login")',
        ),
        (
            "#form >> nth=0",
            "locator('#form').first()",
            'locator("#form").first',
        ),
        (
            "role=heading[level=1]",
            "getByRole('heading', { level: 1 })",
            'get_by_role("heading", level=1)',
        ),
        (
            "html > body > div",
            "locator('html > body > div')",
            'locator("html > body > div")',
        ),
    ])
    def test_render(self, selector, javascript, python):
        """Test rendering in both languages."""
        assert as_locator("javascript", selector) == javascript
        assert as_locator("python", selector) == python
    
    def test_quotes_are_escaped(self):
        """Test quotes inside text survive rendering."""
        assert as_locator("javascript", 'text="it\'s"i') == "getByText('it\\'s')"
        assert as_locator("python", 'text="say \\"hi\\""i') == 'get_by_text("say \\"hi\\"")'
    
    def test_unparseable_selector(self):
        """Test selectors that do not parse render as locator()."""
        assert as_locator("javascript", "[broken") == "locator('[broken')"
    
    def test_round_trip(self):
        """Test a rendered locator converts back to the same selector."""
        selector = 'role=button[name="Sign in"i]'
        assert _convert(as_locator("javascript", selector)) == selector
        assert _convert(as_locator("python", selector), language="python") == selector
