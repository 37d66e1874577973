"""
Aria Template - Parse accessibility-tree templates.

Templates are YAML lists describing the expected accessibility tree::

    - heading "Checkout" [level=1]
    - list:
      - listitem: Apples
      - listitem: /pears?/i
    - button "Pay"

Supported node forms: ``role``, ``role "name"``, ``role /regex/``, any of
those followed by ``[attr=value]`` groups, and a ``text: ...`` node. A
mapping value is either the node's text or a list of child nodes.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

import yaml

from recorder_search.exceptions.selector import AriaTemplateError, SelectorParseError
from recorder_search.interfaces.aria import AriaTemplateResult
from recorder_search.selectors.parser import parse_scalar, scan_brackets
from recorder_search.selectors.values import TextValue, parse_text_value

logger = logging.getLogger(__name__)

_NODE_KEY = re.compile(
    r"""^(?P<role>[a-zA-Z][\w-]*)
        (?:\s+(?P<name>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*'|/(?:[^/\\]|\\.)+/[a-z]*))?
        \s*(?P<attrs>(?:\[[^\]]*\]\s*)*)$""",
    re.X | re.S,
)

_ATTRIBUTES = frozenset({"level", "checked", "disabled", "pressed", "expanded", "selected"})


@dataclass
class AriaText:
    """Text expected inside the parent node."""
    value: TextValue


@dataclass
class AriaNode:
    """
    An expected accessibility node.
    
    Attributes:
        role: ARIA role
        name: Expected accessible name
        attributes: State attributes (level, checked, ...)
        children: Expected descendants, in order
    """
    role: str
    name: Optional[TextValue] = None
    attributes: Dict[str, Union[bool, int, str]] = field(default_factory=dict)
    children: List[Union["AriaNode", AriaText]] = field(default_factory=list)


@dataclass
class AriaFragment:
    """Top-level template: a sequence of sibling nodes."""
    children: List[Union[AriaNode, AriaText]] = field(default_factory=list)


def _parse_key(key: str, template: str) -> AriaNode:
    key = key.strip()
    match = _NODE_KEY.match(key)
    if not match:
        raise AriaTemplateError(f"Cannot parse template node {key!r}", template)
    
    try:
        node = AriaNode(role=match.group("role").lower())
        if match.group("name"):
            node.name = parse_text_value(match.group("name"), template, quoted_exact=False)
        for group in scan_brackets(match.group("attrs") or "", template):
            attr, sep, value = group.partition("=")
            attr = attr.strip().lower()
            if attr not in _ATTRIBUTES:
                raise AriaTemplateError(f"Unknown template attribute {attr!r}", template)
            node.attributes[attr] = True if not sep else parse_scalar(value.strip())
    except SelectorParseError as e:
        raise AriaTemplateError(e.message, template) from e
    return node


def _text_child(value: object, template: str) -> AriaText:
    try:
        return AriaText(value=parse_text_value(str(value), template, quoted_exact=False))
    except SelectorParseError as e:
        raise AriaTemplateError(e.message, template) from e


def _parse_nodes(items: object, template: str) -> List[Union[AriaNode, AriaText]]:
    if items is None:
        return []
    if not isinstance(items, list):
        items = [items]
    
    nodes: List[Union[AriaNode, AriaText]] = []
    for item in items:
        if isinstance(item, str):
            nodes.append(_parse_key(item, template))
        elif isinstance(item, dict):
            for key, value in item.items():
                if str(key).strip() == "text":
                    nodes.append(_text_child(value, template))
                    continue
                node = _parse_key(str(key), template)
                if isinstance(value, list):
                    node.children = _parse_nodes(value, template)
                elif value is not None:
                    node.children = [_text_child(value, template)]
                nodes.append(node)
        else:
            raise AriaTemplateError(f"Unexpected template item {item!r}", template)
    return nodes


def parse_template(text: str) -> AriaFragment:
    """
    Parse template text synchronously.
    
    Raises:
        AriaTemplateError: On YAML or node syntax errors
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise AriaTemplateError(f"Invalid template YAML: {e}", text) from e
    
    fragment = AriaFragment(children=_parse_nodes(data, text))
    if not fragment.children:
        raise AriaTemplateError("Template is empty", text)
    return fragment


async def parse_aria_template(text: str) -> AriaTemplateResult:
    """
    Asynchronous template binding: never raises, reports errors in the result.
    """
    try:
        return AriaTemplateResult(fragment=parse_template(text))
    except AriaTemplateError as e:
        logger.debug(f"Aria template rejected: {e}")
        return AriaTemplateResult(error=e.message)
