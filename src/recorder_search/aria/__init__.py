"""
Aria module - Accessibility-template binding and matcher.
"""

from recorder_search.aria.template import (
    AriaFragment,
    AriaNode,
    AriaText,
    parse_aria_template,
    parse_template,
)
from recorder_search.aria.matcher import AriaMatcher

__all__ = [
    "AriaFragment",
    "AriaNode",
    "AriaText",
    "parse_aria_template",
    "parse_template",
    "AriaMatcher",
]
