"""
Roles - ARIA roles and accessible names for HTML elements.

A pragmatic subset of the HTML-AAM mapping: enough for role selectors,
``getByLabel`` and aria template matching on ordinary pages.
"""

import re
from typing import Dict, Optional

from recorder_search.dom.document import Element, child_elements
from recorder_search.dom.text import TextCache, element_text, normalize_whitespace

_INPUT_ROLES: Dict[str, str] = {
    "button": "button",
    "submit": "button",
    "reset": "button",
    "image": "button",
    "checkbox": "checkbox",
    "radio": "radio",
    "range": "slider",
    "number": "spinbutton",
    "search": "searchbox",
    "email": "textbox",
    "tel": "textbox",
    "text": "textbox",
    "url": "textbox",
    "password": "textbox",
}

_TAG_ROLES: Dict[str, str] = {
    "article": "article",
    "aside": "complementary",
    "button": "button",
    "dialog": "dialog",
    "fieldset": "group",
    "footer": "contentinfo",
    "form": "form",
    "h1": "heading",
    "h2": "heading",
    "h3": "heading",
    "h4": "heading",
    "h5": "heading",
    "h6": "heading",
    "header": "banner",
    "hr": "separator",
    "li": "listitem",
    "main": "main",
    "menu": "list",
    "nav": "navigation",
    "ol": "list",
    "optgroup": "group",
    "option": "option",
    "p": "paragraph",
    "progress": "progressbar",
    "table": "table",
    "tbody": "rowgroup",
    "td": "cell",
    "textarea": "textbox",
    "tfoot": "rowgroup",
    "th": "columnheader",
    "thead": "rowgroup",
    "tr": "row",
    "ul": "list",
}

# Roles whose accessible name comes from their content.
NAME_FROM_CONTENT = frozenset({
    "button", "cell", "checkbox", "columnheader", "gridcell", "heading",
    "link", "menuitem", "menuitemcheckbox", "menuitemradio", "option",
    "radio", "row", "rowheader", "switch", "tab", "tooltip", "treeitem",
})

_HIDDEN_STYLE = re.compile(r"(display\s*:\s*none|visibility\s*:\s*hidden)", re.I)


def get_role(element: Element) -> Optional[str]:
    """Explicit role if present, otherwise the implicit role of the tag."""
    explicit = (element.get("role") or "").split()
    if explicit:
        return explicit[0].lower()
    
    tag = element.tag
    if tag == "a" or tag == "area":
        return "link" if element.get("href") is not None else None
    if tag == "input":
        input_type = (element.get("type") or "text").lower()
        if input_type == "hidden":
            return None
        if input_type in ("text", "email", "tel", "url", "search") and element.get("list"):
            return "combobox"
        return _INPUT_ROLES.get(input_type, "textbox")
    if tag == "select":
        multiple = element.get("multiple") is not None
        size = element.get("size") or ""
        if multiple or (size.isdigit() and int(size) > 1):
            return "listbox"
        return "combobox"
    if tag == "img":
        if element.get("alt") == "" and not element.get("title"):
            return "presentation"
        return "img"
    if tag == "section":
        return "region" if element.get("aria-label") or element.get("aria-labelledby") else None
    return _TAG_ROLES.get(tag)


def heading_level(element: Element) -> Optional[int]:
    level = element.get("aria-level")
    if level and level.isdigit():
        return int(level)
    if re.fullmatch(r"h[1-6]", element.tag):
        return int(element.tag[1])
    return None


def is_checked(element: Element) -> Optional[bool]:
    aria_checked = element.get("aria-checked")
    if aria_checked is not None:
        return aria_checked.lower() == "true"
    if element.tag == "input" and (element.get("type") or "").lower() in ("checkbox", "radio"):
        return element.get("checked") is not None
    return None


def is_disabled(element: Element) -> bool:
    if (element.get("aria-disabled") or "").lower() == "true":
        return True
    if element.tag in ("button", "input", "select", "textarea", "option", "fieldset"):
        if element.get("disabled") is not None:
            return True
    for ancestor in element.iterancestors():
        if ancestor.tag == "fieldset" and ancestor.get("disabled") is not None:
            return True
    return False


def is_hidden(element: Element) -> bool:
    """Hidden from the accessibility tree (the element or any ancestor)."""
    node = element
    while node is not None:
        if node.get("hidden") is not None:
            return True
        if (node.get("aria-hidden") or "").lower() == "true":
            return True
        if _HIDDEN_STYLE.search(node.get("style") or ""):
            return True
        if node.tag in ("head", "script", "style", "noscript", "template"):
            return True
        node = node.getparent()
    return False


def _by_id(element: Element, element_id: str) -> Optional[Element]:
    for node in element.getroottree().getroot().iter():
        if isinstance(node.tag, str) and node.get("id") == element_id:
            return node
    return None


def labels_for(element: Element) -> list:
    """Return ``<label>`` elements associated with a form control."""
    labels = []
    element_id = element.get("id")
    root = element.getroottree().getroot()
    if element_id:
        labels.extend(
            label for label in root.iter("label")
            if label.get("for") == element_id
        )
    for ancestor in element.iterancestors():
        if ancestor.tag == "label" and ancestor not in labels:
            labels.append(ancestor)
    return labels


def label_text(cache: TextCache, element: Element) -> str:
    """Text of the labels attached to a form control."""
    return " ".join(
        element_text(cache, label).normalized for label in labels_for(element)
    ).strip()


def accessible_name(cache: TextCache, element: Element) -> str:
    """
    Compute an accessible name.
    
    Order: aria-labelledby, aria-label, associated labels, alt, content for
    name-from-content roles, title, placeholder.
    """
    labelled_by = (element.get("aria-labelledby") or "").split()
    if labelled_by:
        parts = []
        for element_id in labelled_by:
            target = _by_id(element, element_id)
            if target is not None:
                parts.append(element_text(cache, target).normalized)
        name = normalize_whitespace(" ".join(parts))
        if name:
            return name
    
    aria_label = normalize_whitespace(element.get("aria-label") or "")
    if aria_label:
        return aria_label
    
    if element.tag in ("input", "select", "textarea", "meter", "progress"):
        labelled = label_text(cache, element)
        if labelled:
            return labelled
        if element.tag == "input" and (element.get("type") or "").lower() in ("submit", "button", "reset"):
            value = element.get("value")
            if value:
                return normalize_whitespace(value)
            if (element.get("type") or "").lower() == "submit":
                return "Submit"
    
    if element.tag in ("img", "area") or (element.tag == "input" and element.get("type") == "image"):
        alt = normalize_whitespace(element.get("alt") or "")
        if alt:
            return alt
    
    role = get_role(element)
    if role in NAME_FROM_CONTENT:
        content = _content_name(cache, element)
        if content:
            return content
    
    title = normalize_whitespace(element.get("title") or "")
    if title:
        return title
    return normalize_whitespace(element.get("placeholder") or "")


def _content_name(cache: TextCache, element: Element) -> str:
    # Hidden descendants do not contribute to names computed from content.
    if not any(is_hidden(child) for child in element.iter() if child is not element and isinstance(child.tag, str)):
        return element_text(cache, element).normalized
    parts = [element.text or ""]
    for child in child_elements(element):
        if not is_hidden(child):
            parts.append(element_text(cache, child).full)
        parts.append(child.tail or "")
    return normalize_whitespace("".join(parts))


def role_attributes_match(element: Element, attributes: Dict[str, object]) -> bool:
    """Check ``level``/``checked``/``disabled``/aria state attributes."""
    for key, expected in attributes.items():
        if key == "level":
            actual: object = heading_level(element)
        elif key == "checked":
            checked = is_checked(element)
            actual = False if checked is None else checked
        elif key == "disabled":
            actual = is_disabled(element)
        else:
            raw = element.get(f"aria-{key}")
            if raw is None and key == "selected":
                raw = "true" if element.get("selected") is not None else None
            actual = (raw or "false").lower() == "true"
        if actual != expected:
            return False
    return True
