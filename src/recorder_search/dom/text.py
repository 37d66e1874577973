"""
Element Text - Text content of elements as used for text matching.

Computes the full and whitespace-normalized text of an element, including
the text of its declarative shadow root. Callers pass in a cache so a
single tree walk never recomputes the text of a subtree twice; the cache
must not outlive the walk because the document can change in between.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Union

from recorder_search.dom.document import (
    Element,
    is_element,
    is_shadow_root,
    shadow_root,
)

SKIPPED_TAGS = frozenset({"script", "noscript", "style"})

_INVISIBLE_CHARS = re.compile("[\u200b\u00ad]")
_WHITESPACE = re.compile(r"\s+")


@dataclass
class ElementText:
    """
    Text of one element.
    
    Attributes:
        full: Concatenated raw text of the subtree
        normalized: ``full`` with whitespace collapsed and trimmed
        immediate: Runs of text that are direct children of the element
    """
    full: str = ""
    normalized: str = ""
    immediate: List[str] = field(default_factory=list)


# Keys are elements or shadow-root templates.
TextCache = Dict[Element, ElementText]


def normalize_whitespace(text: str) -> str:
    """Strip zero-width characters, collapse whitespace runs and trim."""
    return _WHITESPACE.sub(" ", _INVISIBLE_CHARS.sub("", text).strip())


def _should_skip(node: Element) -> bool:
    # Template content is inert; shadow-root templates never get here.
    if node.tag in SKIPPED_TAGS or node.tag == "template":
        return True
    for ancestor in node.iterancestors():
        if ancestor.tag == "head":
            return True
    return node.tag == "head"


def _is_button_input(node: Element) -> bool:
    return node.tag == "input" and (node.get("type") or "").lower() in ("submit", "button")


def element_text(cache: TextCache, node: Union[Element, object]) -> ElementText:
    """
    Compute (or fetch from ``cache``) the text of an element or shadow root.
    
    Args:
        cache: Per-walk memo of already computed text
        node: Element, or the template element standing in for a shadow root
        
    Returns:
        The element's text
    """
    value = cache.get(node)
    if value is not None:
        return value
    
    value = ElementText()
    if is_shadow_root(node):
        # Shadow root text is its children's text; the template has no light text.
        value = _collect(cache, node)
    elif not _should_skip(node):
        if _is_button_input(node):
            button_value = node.get("value") or ""
            value = ElementText(
                full=button_value,
                normalized=normalize_whitespace(button_value),
                immediate=[button_value],
            )
        else:
            value = _collect(cache, node)
            root = shadow_root(node)
            if root is not None:
                value.full += element_text(cache, root).full
                value.normalized = normalize_whitespace(value.full) if value.full else ""
    
    cache[node] = value
    return value


def _collect(cache: TextCache, node: Element) -> ElementText:
    value = ElementText()
    current = node.text or ""
    value.full += current
    
    for child in node.iterchildren():
        if is_element(child) and not is_shadow_root(child):
            if current:
                value.immediate.append(current)
            current = ""
            if child.tag != "template":
                value.full += element_text(cache, child).full
        # Text following a comment continues the same immediate run.
        tail = child.tail or ""
        value.full += tail
        current += tail
    
    if current:
        value.immediate.append(current)
    if value.full:
        value.normalized = normalize_whitespace(value.full)
    return value
