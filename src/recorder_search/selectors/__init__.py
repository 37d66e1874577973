"""
Selectors module - Default selector/locator engine.

Parses selectors, evaluates them against a Document's lxml tree, converts
locator call chains to selectors and renders selectors back as locators.
"""

from recorder_search.selectors.engine import SelectorEngine, css_path
from recorder_search.selectors.locator import (
    as_locator,
    locator_or_selector_as_selector,
    looks_like_locator,
)
from recorder_search.selectors.parser import ParsedSelector, SelectorPart, parse_selector
from recorder_search.selectors.values import TextValue, parse_text_value

__all__ = [
    "SelectorEngine",
    "css_path",
    "as_locator",
    "locator_or_selector_as_selector",
    "looks_like_locator",
    "ParsedSelector",
    "SelectorPart",
    "parse_selector",
    "TextValue",
    "parse_text_value",
]
