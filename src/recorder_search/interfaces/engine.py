"""
Selector Engine Interface - Contract for the locator/selector engine.

The search resolves locator queries and builds highlight tooltips through
this interface only; it never parses selectors itself.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional


@dataclass(frozen=True)
class GeneratedSelector:
    """
    A selector generated for a specific element.
    
    Attributes:
        selector: Selector that resolves to the element alone
    """
    selector: str


class ISelectorEngine(ABC):
    """
    Abstract interface for selector engines.
    """
    
    @abstractmethod
    def parse(self, selector: str) -> Any:
        """
        Parse a selector string.
        
        Raises:
            SelectorParseError: If the selector is malformed
        """
        pass
    
    @abstractmethod
    def query(self, parsed: Any, root: Any) -> List[Any]:
        """
        Find all elements matching a parsed selector under ``root``.
        
        Raises:
            SelectorEvaluationError: If evaluation fails
        """
        pass
    
    @abstractmethod
    def generate_selector(
        self,
        element: Any,
        test_id_attribute: Optional[str] = None,
    ) -> GeneratedSelector:
        """Generate a selector that uniquely identifies ``element``."""
        pass
