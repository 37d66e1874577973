"""
Text Matcher - Find the most specific elements containing a piece of text.

Walks every element under the body in document order and keeps an element
when its normalized text contains the query (case-insensitively). Matching
ancestors are dropped in favor of their deeper matches, so no result
contains another. Results come back in document order.
"""

import logging
from typing import List

from recorder_search.dom.document import Document, Element
from recorder_search.dom.text import TextCache, element_text, normalize_whitespace

logger = logging.getLogger(__name__)


class TextMatcher:
    """
    Substring text search with specificity de-duplication.
    
    The text cache only lives for one ``search`` call: the document may have
    changed since the previous one.
    
    Example:
        >>> matcher = TextMatcher()
        >>> matcher.search(Document.from_html("<div><span>Hi</span></div>"), "hi")
        [<Element span>]
    """
    
    def __init__(self):
        self._cache: TextCache = {}
    
    def search(self, document: Document, query: str) -> List[Element]:
        """
        Find the deepest elements whose text contains ``query``.
        
        Args:
            document: Document to search
            query: Text to look for (case-insensitive)
            
        Returns:
            Matching elements in document order, none an ancestor of another
        """
        self._cache.clear()
        needle = normalize_whitespace(query).lower()
        if not needle:
            return []
        
        results: List[Element] = []
        for element in document.iter_elements():
            text = element_text(self._cache, element)
            if needle not in text.normalized.lower():
                continue
            
            # A deeper match already accepted wins over this element.
            if any(Document.contains(element, accepted) for accepted in results):
                continue
            
            # This element is more specific than any accepted ancestor.
            results = [
                accepted for accepted in results
                if not Document.contains(accepted, element)
            ]
            results.append(element)
        
        return document.sort_in_document_order(results)
