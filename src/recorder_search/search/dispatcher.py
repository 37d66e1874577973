"""
Strategy Dispatcher - Run the search strategy chosen for a query.

Every strategy failure is contained here: a strategy that raises yields an
empty result and the dispatcher never lets an exception out.
"""

import logging
from typing import List, Optional

from recorder_search.dom.document import Document, Element
from recorder_search.interfaces.aria import AriaTemplateParser, IAriaMatcher
from recorder_search.interfaces.engine import ISelectorEngine
from recorder_search.search.modes import SearchMode
from recorder_search.search.text_matcher import TextMatcher
from recorder_search.selectors.locator import locator_or_selector_as_selector

logger = logging.getLogger(__name__)


class StrategyDispatcher:
    """
    Routes a classified query to the locator, aria, text or auto strategy.
    
    Args:
        document: Document to search
        engine: Selector engine for locator queries
        aria_parser: Optional async aria template binding
        aria_matcher: Matcher for parsed aria fragments
        language: Recorder language for locator syntax
        test_id_attribute: Attribute getByTestId resolves against
    """
    
    def __init__(
        self,
        document: Document,
        engine: ISelectorEngine,
        aria_parser: Optional[AriaTemplateParser] = None,
        aria_matcher: Optional[IAriaMatcher] = None,
        language: str = "javascript",
        test_id_attribute: str = "data-testid",
    ):
        self.document = document
        self.engine = engine
        self.aria_parser = aria_parser
        self.aria_matcher = aria_matcher
        self.language = language
        self.test_id_attribute = test_id_attribute
        self.text_matcher = TextMatcher()
    
    async def dispatch(self, mode: SearchMode, query: str) -> List[Element]:
        """
        Run the strategy for ``mode``.
        
        Returns:
            Matching elements; empty if the strategy found nothing or failed
        """
        try:
            if mode == SearchMode.LOCATOR:
                return self.search_by_locator(query)
            if mode == SearchMode.ARIA:
                return await self.search_by_aria(query)
            if mode == SearchMode.TEXT:
                return self.search_by_text(query)
            return await self.search_auto(query)
        except Exception as e:
            logger.debug(f"{mode.value} search for {query!r} failed: {e}")
            return []
    
    def search_by_locator(self, query: str) -> List[Element]:
        try:
            selector = locator_or_selector_as_selector(
                self.language, query, self.test_id_attribute
            )
            parsed = self.engine.parse(selector)
            return list(self.engine.query(parsed, self.document.root))
        except Exception as e:
            logger.debug(f"Locator search for {query!r} failed: {e}")
            return []
    
    async def search_by_aria(self, query: str) -> List[Element]:
        if self.aria_parser is None or self.aria_matcher is None:
            logger.debug("Aria template binding unavailable")
            return []
        try:
            result = await self.aria_parser(query)
            if result.error or not result.fragment:
                logger.debug(f"Aria template rejected: {result.error}")
                return []
            return list(self.aria_matcher.match_all(self.document.body, result.fragment))
        except Exception as e:
            logger.debug(f"Aria search for {query!r} failed: {e}")
            return []
    
    def search_by_text(self, query: str) -> List[Element]:
        return self.text_matcher.search(self.document, query)
    
    async def search_auto(self, query: str) -> List[Element]:
        # A query that happens to be a valid locator wins over text relevance.
        matches = self.search_by_locator(query)
        if matches:
            return matches
        return self.search_by_text(query)
