"""
Recorder Search - Incremental element search for a browser recorder overlay.

Finds elements in a page by locator syntax, aria template, literal text or an
automatic blend, keeps a navigable list of the most specific matches and
highlights the current one.

Example:
    >>> from recorder_search import Document, ElementSearchTool, create_host
    >>> tool = ElementSearchTool(create_host(Document.from_html(html)))
    >>> await tool.search_now('"Submit"')
"""

__version__ = "0.1.0"

# Public API exports
from recorder_search.dom.document import Document
from recorder_search.config.settings import SearchConfig, Settings
from recorder_search.search.host import SearchHost, create_host
from recorder_search.search.modes import SearchMode, detect_search_mode
from recorder_search.search.tool import ElementSearchTool

__all__ = [
    "Document",
    "SearchConfig",
    "Settings",
    "SearchHost",
    "create_host",
    "SearchMode",
    "detect_search_mode",
    "ElementSearchTool",
    "__version__",
]
