"""
Pytest configuration and fixtures.
"""

from typing import Any, Callable, List, Optional

import pytest

from recorder_search.interfaces.timers import ITimers


BUTTONS_HTML = """
<html><body>
  <button>A</button>
  <button>B</button>
  <button>C</button>
</body></html>
"""

NESTED_HTML = """
<html><body>
  <div id="outer">Say <span id="inner">hello world</span></div>
  <p>nothing here</p>
</body></html>
"""

FORM_HTML = """
<html>
<head><title>Login page</title></head>
<body>
  <h1>Sign in</h1>
  <form id="login">
    <label for="user">Username</label>
    <input id="user" type="text" placeholder="Your name">
    <label>Password <input id="pass" type="password"></label>
    <input type="checkbox" id="remember" checked>
    <button type="submit" data-testid="submit">Sign in</button>
  </form>
  <a href="/help" title="Get help">Help</a>
  <img src="logo.png" alt="Company logo">
  <script>var signIn = "Sign in";</script>
</body>
</html>
"""


class _Handle:
    def __init__(self, callback: Callable[[], None], delay_ms: int):
        self.callback = callback
        self.delay_ms = delay_ms
        self.cancelled = False


class ManualTimers(ITimers):
    """Timers fired explicitly by the test instead of by a clock."""
    
    def __init__(self):
        self.handles: List[_Handle] = []
    
    @property
    def pending(self) -> List[_Handle]:
        return [h for h in self.handles if not h.cancelled]
    
    def set_timeout(self, callback: Callable[[], None], delay_ms: int) -> Any:
        handle = _Handle(callback, delay_ms)
        self.handles.append(handle)
        return handle
    
    def clear_timeout(self, handle: Optional[_Handle]) -> None:
        if handle is not None:
            handle.cancelled = True
    
    def fire_all(self) -> int:
        """Run every pending callback; returns how many fired."""
        pending = self.pending
        for handle in pending:
            handle.cancelled = True
            handle.callback()
        return len(pending)


@pytest.fixture
def timers():
    """Provide manually driven timers."""
    return ManualTimers()


@pytest.fixture
def highlight():
    """Provide an in-memory highlight overlay."""
    from recorder_search.highlight.memory import InMemoryHighlight
    return InMemoryHighlight()


@pytest.fixture
def buttons_doc():
    """Three buttons A, B and C."""
    from recorder_search.dom.document import Document
    return Document.from_html(BUTTONS_HTML)


@pytest.fixture
def nested_doc():
    """A div whose text comes partly from an inner span."""
    from recorder_search.dom.document import Document
    return Document.from_html(NESTED_HTML)


@pytest.fixture
def form_doc():
    """A login form with labels, test ids and a script."""
    from recorder_search.dom.document import Document
    return Document.from_html(FORM_HTML)


@pytest.fixture
def make_tool(timers, highlight):
    """Build an installed ElementSearchTool over a document."""
    from recorder_search.config.settings import SearchConfig
    from recorder_search.search.host import create_host
    from recorder_search.search.tool import ElementSearchTool
    from recorder_search.ui.widgets import Widget
    
    def factory(document, config: Optional[SearchConfig] = None, **host_overrides):
        host = create_host(document, highlight=highlight, config=config, timers=timers)
        for key, value in host_overrides.items():
            setattr(host, key, value)
        tool = ElementSearchTool(host)
        tools_list = Widget("x-pw-tools-list")
        tool.install(tools_list)
        return tool
    
    return factory
