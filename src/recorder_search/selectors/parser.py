"""
Selector Parser - Parse selector strings into engine parts.

A selector is one or more parts joined by ``>>``; each part narrows the
scope of the next. A part is ``engine=body`` for a known engine, an XPath
expression when it starts with ``//`` or ``..``, and CSS otherwise::

    #login >> role=button[name="Sign in"i]
    text="Submit"s
    //form >> nth=0
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from cssselect import SelectorError as CSSSelectorError
from lxml import etree
from lxml.cssselect import CSSSelector

from recorder_search.exceptions.selector import SelectorParseError
from recorder_search.selectors.values import TextValue, parse_text_value, unquote

TEXT_ENGINES = frozenset({"text", "label", "placeholder", "alt", "title"})
ATTRIBUTE_ENGINES = frozenset({"id", "data-testid", "data-test-id", "data-test"})
KNOWN_ENGINES = TEXT_ENGINES | ATTRIBUTE_ENGINES | {"css", "xpath", "role", "testid", "nth"}

_ENGINE_PREFIX = re.compile(r"^([a-zA-Z][\w-]*)\s*=", re.S)
_ROLE_NAME = re.compile(r"^([a-zA-Z][\w-]*)")
_TESTID_BODY = re.compile(r"^\[([\w:.-]+)=(.+)\]$", re.S)

ROLE_ATTRIBUTES = frozenset({
    "name", "exact", "level", "checked", "disabled", "pressed",
    "expanded", "selected", "include-hidden",
})


@dataclass
class RoleQuery:
    """Compiled ``role=`` body."""
    role: str
    name: Optional[TextValue] = None
    attributes: Dict[str, Union[bool, int, str]] = field(default_factory=dict)
    include_hidden: bool = False


@dataclass
class SelectorPart:
    """
    One ``>>``-separated step of a selector.
    
    Attributes:
        engine: Engine name
        body: Raw engine body
        compiled: Engine-specific compiled form
    """
    engine: str
    body: str
    compiled: Any = None
    
    def __str__(self) -> str:
        if self.engine == "css" and not _ENGINE_PREFIX.match(self.body):
            return self.body
        if self.engine == "xpath" and self.body.startswith(("//", "..")):
            return self.body
        return f"{self.engine}={self.body}"


@dataclass
class ParsedSelector:
    """A parsed selector: an ordered list of parts."""
    source: str
    parts: List[SelectorPart] = field(default_factory=list)
    
    def __str__(self) -> str:
        return " >> ".join(str(part) for part in self.parts)


def split_selector(selector: str) -> List[str]:
    """Split on ``>>`` outside of quotes and brackets."""
    parts = []
    start = 0
    quote_char = None
    depth = 0
    i = 0
    while i < len(selector):
        ch = selector[i]
        if quote_char:
            if ch == "\\":
                i += 2
                continue
            if ch == quote_char:
                quote_char = None
        elif ch in "\"'":
            quote_char = ch
        elif ch in "[(":
            depth += 1
        elif ch in "])":
            depth = max(0, depth - 1)
        elif ch == ">" and depth == 0 and selector.startswith(">>", i):
            parts.append(selector[start:i])
            i += 2
            start = i
            continue
        i += 1
    parts.append(selector[start:])
    return [part.strip() for part in parts]


def scan_brackets(body: str, selector: str) -> List[str]:
    """Return the contents of consecutive ``[...]`` groups."""
    groups = []
    i = 0
    while i < len(body):
        if body[i].isspace():
            i += 1
            continue
        if body[i] != "[":
            raise SelectorParseError(f"Unexpected {body[i]!r} in role selector", selector)
        quote_char = None
        j = i + 1
        while j < len(body):
            ch = body[j]
            if quote_char:
                if ch == "\\":
                    j += 2
                    continue
                if ch == quote_char:
                    quote_char = None
            elif ch in "\"'":
                quote_char = ch
            elif ch == "]":
                break
            j += 1
        if j >= len(body):
            raise SelectorParseError("Unterminated attribute in role selector", selector)
        groups.append(body[i + 1:j].strip())
        i = j + 1
    return groups


def parse_scalar(value: str) -> Union[bool, int, str]:
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered == "mixed":
        return "mixed"
    if re.fullmatch(r"-?\d+", value):
        return int(value)
    if value[:1] in "\"'" and value[-1:] == value[:1]:
        return unquote(value)
    return value


def parse_role(body: str, selector: str) -> RoleQuery:
    match = _ROLE_NAME.match(body.strip())
    if not match:
        raise SelectorParseError("Role selector needs a role name", selector)
    query = RoleQuery(role=match.group(1).lower())
    exact = False
    
    for group in scan_brackets(body.strip()[match.end():], selector):
        key, sep, value = group.partition("=")
        key = key.strip().lower()
        if key not in ROLE_ATTRIBUTES:
            raise SelectorParseError(f"Unknown role attribute {key!r}", selector)
        if key == "name":
            if not sep:
                raise SelectorParseError("Role name attribute needs a value", selector)
            query.name = parse_text_value(value, selector, quoted_exact=False)
        elif key == "exact":
            exact = True if not sep else bool(parse_scalar(value.strip()))
        elif key == "include-hidden":
            query.include_hidden = True if not sep else bool(parse_scalar(value.strip()))
        else:
            query.attributes[key] = True if not sep else parse_scalar(value.strip())
    
    if exact and query.name is not None and query.name.pattern is None:
        query.name = TextValue(text=query.name.text, exact=True)
    return query


def _compile_css(body: str, selector: str) -> CSSSelector:
    try:
        return CSSSelector(body, translator="html")
    except CSSSelectorError as e:
        raise SelectorParseError(f"Invalid CSS selector {body!r}: {e}", selector) from e


def _compile_xpath(body: str, selector: str) -> Tuple[etree.XPath, etree.XPath]:
    """Compile an XPath for document scope and for element scope."""
    relative = "." + body if body.startswith("/") else body
    try:
        return etree.XPath(body), etree.XPath(relative)
    except etree.XPathSyntaxError as e:
        raise SelectorParseError(f"Invalid XPath {body!r}: {e}", selector) from e


def _compile_part(engine: str, body: str, selector: str) -> SelectorPart:
    if not body.strip():
        raise SelectorParseError(f"Empty {engine} selector", selector)
    
    if engine == "css":
        compiled: Any = _compile_css(body, selector)
    elif engine == "xpath":
        compiled = _compile_xpath(body, selector)
    elif engine in TEXT_ENGINES:
        compiled = parse_text_value(body, selector, quoted_exact=(engine == "text"))
    elif engine == "role":
        compiled = parse_role(body, selector)
    elif engine == "testid":
        match = _TESTID_BODY.match(body.strip())
        if not match:
            raise SelectorParseError("Test id selector must look like [attr=value]", selector)
        compiled = (match.group(1), parse_text_value(match.group(2), selector))
    elif engine in ATTRIBUTE_ENGINES:
        compiled = (engine, parse_text_value(body, selector))
    elif engine == "nth":
        try:
            compiled = int(body.strip())
        except ValueError as e:
            raise SelectorParseError(f"nth= expects an integer, got {body!r}", selector) from e
    else:
        raise SelectorParseError(f"Unknown selector engine {engine!r}", selector)
    return SelectorPart(engine=engine, body=body.strip(), compiled=compiled)


def parse_selector(selector: str) -> ParsedSelector:
    """
    Parse a selector string.
    
    Raises:
        SelectorParseError: If any part is malformed
    """
    if not selector or not selector.strip():
        raise SelectorParseError("Empty selector", selector)
    
    parsed = ParsedSelector(source=selector)
    for raw in split_selector(selector):
        if not raw:
            raise SelectorParseError("Empty selector part", selector)
        if raw.startswith(("//", "..")):
            parsed.parts.append(_compile_part("xpath", raw, selector))
            continue
        prefix = _ENGINE_PREFIX.match(raw)
        if prefix and prefix.group(1).lower() in KNOWN_ENGINES:
            engine = prefix.group(1).lower()
            parsed.parts.append(_compile_part(engine, raw[prefix.end():], selector))
        else:
            parsed.parts.append(_compile_part("css", raw, selector))
    return parsed
