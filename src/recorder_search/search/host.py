"""
Search Host - Everything the search tool needs from the recorder.

Bundles the document, the collaborator implementations and the read-only
configuration snapshot, so the tool never reaches for global state.
"""

from dataclasses import dataclass, field
from typing import Optional

from recorder_search.aria.matcher import AriaMatcher
from recorder_search.aria.template import parse_aria_template
from recorder_search.config.settings import SearchConfig
from recorder_search.dom.document import Document
from recorder_search.highlight.memory import InMemoryHighlight
from recorder_search.interfaces.aria import AriaTemplateParser, IAriaMatcher
from recorder_search.interfaces.engine import ISelectorEngine
from recorder_search.interfaces.highlight import IHighlight
from recorder_search.interfaces.timers import ITimers
from recorder_search.search.debounce import AsyncioTimers
from recorder_search.selectors.engine import SelectorEngine
from recorder_search.ui.widgets import SearchFactories


@dataclass
class SearchHost:
    """
    Recorder-side collaborators of the search tool.
    
    Attributes:
        document: Document being searched (may mutate between searches)
        engine: Selector engine
        highlight: Highlight overlay
        config: Configuration snapshot
        aria_parser: Optional aria template binding (None when unavailable)
        aria_matcher: Matcher for parsed aria fragments
        timers: Host timer primitives
        factories: Builders for the search widgets
    """
    document: Document
    engine: ISelectorEngine
    highlight: IHighlight
    config: SearchConfig = field(default_factory=SearchConfig)
    aria_parser: Optional[AriaTemplateParser] = None
    aria_matcher: Optional[IAriaMatcher] = None
    timers: ITimers = field(default_factory=AsyncioTimers)
    factories: SearchFactories = field(default_factory=SearchFactories)


def create_host(
    document: Document,
    highlight: Optional[IHighlight] = None,
    config: Optional[SearchConfig] = None,
    timers: Optional[ITimers] = None,
    with_aria: bool = True,
) -> SearchHost:
    """
    Build a host wired with the default collaborators.
    
    Args:
        document: Document to search
        highlight: Overlay (defaults to an InMemoryHighlight)
        config: Configuration snapshot (defaults to built-in defaults)
        timers: Timer primitives (defaults to the running asyncio loop)
        with_aria: Provide the aria template binding
    """
    config = config or SearchConfig()
    return SearchHost(
        document=document,
        engine=SelectorEngine(test_id_attribute=config.search.test_id_attribute),
        highlight=highlight or InMemoryHighlight(),
        config=config,
        aria_parser=parse_aria_template if with_aria else None,
        aria_matcher=AriaMatcher() if with_aria else None,
        timers=timers or AsyncioTimers(),
    )
