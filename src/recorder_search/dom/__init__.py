"""
DOM module - Document model, element text and accessibility helpers.
"""

from recorder_search.dom.document import Document, Element, is_element, shadow_root
from recorder_search.dom.text import ElementText, TextCache, element_text, normalize_whitespace
from recorder_search.dom.roles import accessible_name, get_role, is_hidden

__all__ = [
    "Document",
    "Element",
    "is_element",
    "shadow_root",
    "ElementText",
    "TextCache",
    "element_text",
    "normalize_whitespace",
    "accessible_name",
    "get_role",
    "is_hidden",
]
