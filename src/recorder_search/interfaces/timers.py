"""
Timers Interface - setTimeout/clearTimeout equivalents of the host.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable


class ITimers(ABC):
    """Host timer primitives."""
    
    @abstractmethod
    def set_timeout(self, callback: Callable[[], None], delay_ms: int) -> Any:
        """Run ``callback`` once after ``delay_ms``; return a cancellable handle."""
        pass
    
    @abstractmethod
    def clear_timeout(self, handle: Any) -> None:
        """Cancel a pending callback. Cancelling a fired handle is a no-op."""
        pass
