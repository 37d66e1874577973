"""
Search Modes - Classify a raw query into a search strategy.

    /aria: - button "Submit"    -> aria, '- button "Submit"'
    - button "Submit"           -> aria (YAML list), unchanged
    "Submit" or 'Submit'        -> text, 'Submit'
    getByRole('button'), #id,
    [data-testid=x], text=...,
    role=..., data-testid=x     -> locator, unchanged
    anything else               -> auto, unchanged
"""

import re
from dataclasses import dataclass
from enum import Enum

ARIA_PREFIX = "/aria:"

_YAML_LIST = re.compile(r"^-\s+\w+")

LOCATOR_PATTERNS = [
    re.compile(r"^(getBy|get_by_|locator|page\.|#|\[|text=|role=|label=|placeholder=)", re.IGNORECASE),
    # attribute-engine shaped tokens such as data-testid=
    re.compile(r"^[a-z-]+\s*=", re.IGNORECASE),
]


class SearchMode(str, Enum):
    """Search strategies."""
    AUTO = "auto"
    LOCATOR = "locator"
    ARIA = "aria"
    TEXT = "text"


@dataclass(frozen=True)
class DetectedQuery:
    """
    Result of mode detection.
    
    Attributes:
        mode: Strategy to run
        query: Query with any mode markers removed
    """
    mode: SearchMode
    query: str


def _is_quoted(query: str) -> bool:
    if len(query) < 2:
        return False
    return (query[0] == query[-1]) and query[0] in "\"'"


def detect_search_mode(query: str) -> DetectedQuery:
    """
    Classify a trimmed, non-empty query. First matching rule wins.
    
    Args:
        query: Trimmed search text
        
    Returns:
        The mode and the cleaned query
    """
    if query.startswith(ARIA_PREFIX):
        return DetectedQuery(SearchMode.ARIA, query[len(ARIA_PREFIX):].strip())
    
    if query.startswith("- ") or _YAML_LIST.match(query):
        return DetectedQuery(SearchMode.ARIA, query)
    
    if _is_quoted(query):
        return DetectedQuery(SearchMode.TEXT, query[1:-1])
    
    if any(pattern.match(query) for pattern in LOCATOR_PATTERNS):
        return DetectedQuery(SearchMode.LOCATOR, query)
    
    return DetectedQuery(SearchMode.AUTO, query)
