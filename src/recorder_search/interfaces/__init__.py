"""
Interfaces module - Contracts for the collaborators of the search core.

The search core depends only on these abstractions; concrete
implementations live in ``selectors``, ``aria``, ``highlight`` and
``search.debounce``.
"""

from recorder_search.interfaces.engine import ISelectorEngine, GeneratedSelector
from recorder_search.interfaces.aria import (
    AriaTemplateParser,
    AriaTemplateResult,
    IAriaMatcher,
)
from recorder_search.interfaces.highlight import IHighlight, HighlightEntry
from recorder_search.interfaces.timers import ITimers

__all__ = [
    "ISelectorEngine",
    "GeneratedSelector",
    "AriaTemplateParser",
    "AriaTemplateResult",
    "IAriaMatcher",
    "IHighlight",
    "HighlightEntry",
    "ITimers",
]
