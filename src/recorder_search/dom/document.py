"""
Document - A live, mutable HTML document the search runs against.

Wraps an lxml HTML tree and adds the handful of DOM operations the search
core relies on: element-only tree walks, inclusive containment checks and
document-order sorting. The tree may be mutated freely between searches;
nothing here caches structure across calls.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union

import lxml.html
from lxml import etree

logger = logging.getLogger(__name__)

Element = lxml.html.HtmlElement

_EMPTY_DOCUMENT = "<html><head></head><body></body></html>"


def is_element(node: object) -> bool:
    """True for element nodes (comments and processing instructions are skipped)."""
    return isinstance(node, etree._Element) and isinstance(node.tag, str)


def is_shadow_root(node: object) -> bool:
    """True for a declarative shadow root (``<template shadowrootmode=...>``)."""
    return (
        is_element(node)
        and node.tag == "template"
        and node.get("shadowrootmode") is not None
    )


def shadow_root(host: Element) -> Optional[Element]:
    """Return the declarative shadow root attached to ``host``, if any."""
    for child in host.iterchildren():
        if is_shadow_root(child):
            return child
    return None


def child_elements(node: Element) -> Iterator[Element]:
    """Yield element children, skipping shadow roots which are not children."""
    for child in node.iterchildren():
        if is_element(child) and not is_shadow_root(child):
            yield child


class Document:
    """
    A parsed HTML document.
    
    Example:
        >>> doc = Document.from_html("<button>A</button><button>B</button>")
        >>> [el.text for el in doc.iter_elements()]
        ['A', 'B']
    """
    
    def __init__(self, root: Element):
        self._root = root
        if self._root.find("body") is None:
            etree.SubElement(self._root, "body")
    
    @classmethod
    def from_html(cls, html: str) -> "Document":
        """Parse an HTML string (fragments are wrapped in html/body)."""
        if not html or not html.strip():
            html = _EMPTY_DOCUMENT
        return cls(lxml.html.document_fromstring(html))
    
    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Document":
        """Parse an HTML file."""
        return cls.from_html(Path(path).read_text(encoding="utf-8"))
    
    @property
    def root(self) -> Element:
        """The ``<html>`` element."""
        return self._root
    
    @property
    def head(self) -> Optional[Element]:
        return self._root.find("head")
    
    @property
    def body(self) -> Element:
        return self._root.find("body")
    
    def iter_elements(self, root: Optional[Element] = None) -> Iterator[Element]:
        """
        Walk the elements under ``root`` depth-first, in document order.
        
        ``root`` itself is not yielded. Template content and shadow roots are
        not entered, matching what a DOM TreeWalker over the light tree sees.
        
        Args:
            root: Element to walk (defaults to the body)
        """
        start = self.body if root is None else root
        stack = list(reversed(list(child_elements(start))))
        while stack:
            element = stack.pop()
            yield element
            if element.tag == "template":
                continue
            stack.extend(reversed(list(child_elements(element))))
    
    @staticmethod
    def contains(ancestor: Element, node: Element) -> bool:
        """Inclusive containment, like ``Node.contains``."""
        if ancestor is node:
            return True
        for parent in node.iterancestors():
            if parent is ancestor:
                return True
        return False
    
    def is_connected(self, element: Element) -> bool:
        """True if ``element`` is still attached to this document."""
        # lxml keeps removed subtrees in the same document, so walk the parents.
        return self.contains(self._root, element)
    
    def is_in_head(self, element: Element) -> bool:
        head = self.head
        return head is not None and self.contains(head, element)
    
    def document_positions(self) -> Dict[Element, int]:
        """Map every element to its pre-order position in the document."""
        return {el: index for index, el in enumerate(self._root.iter()) if is_element(el)}
    
    def sort_in_document_order(self, elements: Iterable[Element]) -> List[Element]:
        """
        Sort elements by document position.
        
        Detached elements sort after attached ones, keeping their relative
        order.
        """
        elements = list(elements)
        positions = self.document_positions()
        detached = len(positions)
        return sorted(elements, key=lambda el: positions.get(el, detached))
    
    def unique_in_document_order(self, elements: Iterable[Element]) -> List[Element]:
        """Drop duplicates (by identity) and sort by document position."""
        seen = set()
        unique = []
        for element in elements:
            if element in seen:
                continue
            seen.add(element)
            unique.append(element)
        return self.sort_in_document_order(unique)
    
    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        for element in self._root.iter():
            if is_element(element) and element.get("id") == element_id:
                return element
        return None
    
    def to_html(self) -> str:
        return lxml.html.tostring(self._root, encoding="unicode")
