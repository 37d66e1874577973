"""
Highlight Interface - Contract for the highlight overlay.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List


@dataclass(frozen=True)
class HighlightEntry:
    """
    One highlighted element.
    
    Attributes:
        element: Element to outline
        color: Outline color (with alpha)
        tooltip_text: Text shown next to the outline
    """
    element: Any
    color: str
    tooltip_text: str = ""


class IHighlight(ABC):
    """
    Abstract highlight overlay.
    
    Implementations must tolerate elements that were detached from the
    document after being matched.
    """
    
    @abstractmethod
    def update_highlight(self, entries: List[HighlightEntry]) -> None:
        """Replace the highlighted set with ``entries``."""
        pass
    
    @abstractmethod
    def clear_highlight(self) -> None:
        """Remove every highlight."""
        pass
    
    def reveal(self, element: Any) -> None:
        """Scroll ``element`` into view. Overlays without a viewport ignore this."""
        return None
