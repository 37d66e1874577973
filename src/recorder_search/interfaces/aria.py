"""
Aria Interfaces - Contracts for the accessibility-template binding.

The parser is an optional, asynchronous binding (the recorder host may not
provide one). The matcher resolves a parsed fragment to elements.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional


@dataclass
class AriaTemplateResult:
    """
    Outcome of parsing an aria template.
    
    Attributes:
        fragment: Parsed template, or None on failure
        error: Error message, or None on success
    """
    fragment: Optional[Any] = None
    error: Optional[str] = None


# parse_aria_template(text) -> awaitable AriaTemplateResult
AriaTemplateParser = Callable[[str], Awaitable[AriaTemplateResult]]


class IAriaMatcher(ABC):
    """Resolve a parsed aria template fragment to elements."""
    
    @abstractmethod
    def match_all(self, root: Any, fragment: Any) -> List[Any]:
        """Return every element under ``root`` matching ``fragment``."""
        pass
