"""
Text values used inside selectors.

A text value is written one of four ways:

    Submit          case-insensitive substring
    "Submit"        engine default (exact for text=, substring for role names)
    "Submit"i       case-insensitive substring
    "Submit"s       case-sensitive exact match
    /sub.*t/i       regular expression search

Matching always happens against whitespace-normalized text.
"""

import json
import re
from dataclasses import dataclass
from typing import Optional, Pattern

from recorder_search.dom.text import normalize_whitespace
from recorder_search.exceptions.selector import SelectorParseError

_QUOTED = re.compile(r"""^(["'])(.*)\1([is]?)$""", re.S)
_REGEX = re.compile(r"^/(.+)/([imsu]*)$", re.S)

_REGEX_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "u": 0}


@dataclass(frozen=True)
class TextValue:
    """
    A parsed text value.
    
    Attributes:
        text: Literal text (empty when ``pattern`` is set)
        exact: Whole-string, case-sensitive comparison
        pattern: Compiled regular expression, if the value was a regex
    """
    text: str = ""
    exact: bool = False
    pattern: Optional[Pattern[str]] = None
    
    def matches(self, candidate: str) -> bool:
        candidate = normalize_whitespace(candidate)
        if self.pattern is not None:
            return self.pattern.search(candidate) is not None
        if self.exact:
            return candidate == normalize_whitespace(self.text)
        return normalize_whitespace(self.text).lower() in candidate.lower()
    
    def render(self) -> str:
        """Serialize back to selector syntax."""
        if self.pattern is not None:
            return f"/{self.pattern.pattern}/{regex_flags(self.pattern)}"
        return quote(self.text) + ("s" if self.exact else "i")


def quote(text: str) -> str:
    """Double-quote a string for use inside a selector."""
    return json.dumps(text, ensure_ascii=False)


def unquote(body: str) -> str:
    """Strip surrounding quotes and resolve backslash escapes."""
    inner = body[1:-1]
    if body[0] == '"':
        try:
            return json.loads(body)
        except ValueError:
            pass
    return re.sub(r"\\(.)", r"\1", inner, flags=re.S)


def regex_flags(pattern: Pattern[str]) -> str:
    flags = ""
    if pattern.flags & re.IGNORECASE:
        flags += "i"
    if pattern.flags & re.MULTILINE:
        flags += "m"
    if pattern.flags & re.DOTALL:
        flags += "s"
    return flags


def compile_regex(source: str, flags: str, selector: str) -> Pattern[str]:
    value = 0
    for flag in flags:
        value |= _REGEX_FLAGS.get(flag, 0)
    try:
        return re.compile(source, value)
    except re.error as e:
        raise SelectorParseError(f"Invalid regular expression /{source}/: {e}", selector) from e


def parse_text_value(body: str, selector: str, quoted_exact: bool = True) -> TextValue:
    """
    Parse a text value.
    
    Args:
        body: Raw value text
        selector: Whole selector, for error reporting
        quoted_exact: Whether a quoted value without a flag is exact
        
    Raises:
        SelectorParseError: If the value is empty or malformed
    """
    body = body.strip()
    if not body:
        raise SelectorParseError("Empty text value", selector)
    
    regex = _REGEX.match(body)
    if regex:
        return TextValue(pattern=compile_regex(regex.group(1), regex.group(2), selector))
    
    quoted = _QUOTED.match(body)
    if quoted:
        flag = quoted.group(3)
        exact = flag == "s" or (flag == "" and quoted_exact)
        return TextValue(text=unquote(quoted.group(1) + quoted.group(2) + quoted.group(1)), exact=exact)
    
    if body[0] in "\"'":
        raise SelectorParseError(f"Unterminated string in {body!r}", selector)
    return TextValue(text=body)
