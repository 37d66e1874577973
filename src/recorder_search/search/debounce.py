"""
Debounce - Coalesce bursts of input into one search.

A single pending timer: each ``schedule`` cancels the previous, not yet
fired, timer and starts a new one.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from recorder_search.interfaces.timers import ITimers

logger = logging.getLogger(__name__)


class AsyncioTimers(ITimers):
    """Timers on an asyncio event loop (``loop.call_later``)."""
    
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
    
    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()
    
    def set_timeout(self, callback: Callable[[], None], delay_ms: int) -> asyncio.TimerHandle:
        return self.loop.call_later(delay_ms / 1000, callback)
    
    def clear_timeout(self, handle: Any) -> None:
        if handle is not None:
            handle.cancel()


class DebounceScheduler:
    """
    Runs ``callback`` once input has been quiet for ``delay_ms``.
    
    Example:
        >>> scheduler = DebounceScheduler(AsyncioTimers(), 150, run_search)
        >>> scheduler.schedule()
        >>> scheduler.schedule()  # replaces the first timer
    """
    
    def __init__(self, timers: ITimers, delay_ms: int, callback: Callable[..., None]):
        self._timers = timers
        self._delay_ms = delay_ms
        self._callback = callback
        self._handle: Optional[Any] = None
    
    @property
    def pending(self) -> bool:
        return self._handle is not None
    
    def schedule(self, *args: Any) -> None:
        """(Re)start the timer; ``args`` are passed to the callback when it fires."""
        self.cancel()
        self._handle = self._timers.set_timeout(lambda: self._fire(args), self._delay_ms)
    
    def cancel(self) -> None:
        if self._handle is not None:
            self._timers.clear_timeout(self._handle)
            self._handle = None
    
    def _fire(self, args: tuple) -> None:
        self._handle = None
        self._callback(*args)
