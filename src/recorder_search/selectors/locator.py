"""
Locator Syntax - Convert between locator call chains and selectors.

Accepts what a user would paste from recorded code, in either dialect::

    getByRole('button', { name: 'Submit', exact: true })
    page.get_by_role("button", name="Submit", exact=True)
    getByTestId('login').first()
    locator('#form').getByText(/sign in/i)

and renders selectors back into the recorder's output language for
highlight tooltips.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from recorder_search.exceptions.selector import LocatorSyntaxError, SelectorParseError
from recorder_search.selectors.parser import (
    RoleQuery,
    SelectorPart,
    parse_selector,
)
from recorder_search.selectors.values import TextValue, quote, regex_flags

_LOCATOR_START = re.compile(
    r"^(?:page\s*\.\s*)?(?:get_?by_?[a-z_]+|locator|frame_?locator)\s*\(",
    re.IGNORECASE,
)
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_PY_REGEX = re.compile(
    r"""^re\.compile\(\s*r?(["'])(.*)\1\s*(?:,\s*(.+))?\)$""", re.S
)
_JS_REGEX = re.compile(r"^/(.+)/([a-z]*)$", re.S)

_TEXT_METHODS = {
    "getbytext": "text",
    "getbylabel": "label",
    "getbyplaceholder": "placeholder",
    "getbyalttext": "alt",
    "getbytitle": "title",
}
_ROLE_OPTIONS = {
    "name", "exact", "level", "checked", "disabled", "pressed",
    "expanded", "selected", "includehidden",
}


@dataclass(frozen=True)
class RegexLiteral:
    """A regular expression argument."""
    pattern: str
    flags: str = ""


def looks_like_locator(text: str) -> bool:
    return bool(_LOCATOR_START.match(text.strip()))


def locator_or_selector_as_selector(language: str, text: str, test_id_attribute: str) -> str:
    """
    Convert locator syntax to a selector; return anything else unchanged.
    
    Args:
        language: Recorder language the text was written for
        text: Locator call chain or selector
        test_id_attribute: Attribute getByTestId resolves against
        
    Raises:
        LocatorSyntaxError: If ``text`` looks like a locator but is malformed
    """
    text = text.strip()
    if not looks_like_locator(text):
        return text
    
    parts = []
    for method, args in _split_calls(text, language):
        parts.append(_call_to_selector(method, args, text, language, test_id_attribute))
    return " >> ".join(parts)


# ----------------------------------------------------------------------
# Parsing locator text
# ----------------------------------------------------------------------

def _split_calls(text: str, language: str) -> List[Tuple[str, Optional[List[Any]]]]:
    calls = []
    pos = 0
    stripped = re.match(r"page\s*\.\s*", text)
    if stripped:
        pos = stripped.end()
    
    while pos < len(text):
        ident = _IDENTIFIER.match(text, pos)
        if not ident:
            raise LocatorSyntaxError(
                f"Expected a method name at {text[pos:]!r}", text
            )
        pos = ident.end()
        while pos < len(text) and text[pos].isspace():
            pos += 1
        args: Optional[List[Any]] = None
        if pos < len(text) and text[pos] == "(":
            end = _matching_paren(text, pos)
            args = [_parse_value(raw, text) for raw in _split_top_level(text[pos + 1:end], ",")]
            pos = end + 1
        calls.append((ident.group(0), args))
        while pos < len(text) and text[pos].isspace():
            pos += 1
        if pos < len(text):
            if text[pos] != ".":
                raise LocatorSyntaxError(f"Unexpected {text[pos]!r} in locator", text)
            pos += 1
    if not calls:
        raise LocatorSyntaxError(f"Empty {language} locator", text)
    return calls


def _matching_paren(text: str, start: int) -> int:
    depth = 0
    quote_char = None
    i = start
    while i < len(text):
        ch = text[i]
        if quote_char:
            if ch == "\\":
                i += 2
                continue
            if ch == quote_char:
                quote_char = None
        elif ch in "\"'`":
            quote_char = ch
        elif ch in "([{":
            depth += 1
        elif ch in ")]}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    raise LocatorSyntaxError("Unbalanced parentheses in locator", text)


def _split_top_level(text: str, separator: str) -> List[str]:
    pieces = []
    depth = 0
    quote_char = None
    current = ""
    i = 0
    while i < len(text):
        ch = text[i]
        if quote_char:
            current += ch
            if ch == "\\" and i + 1 < len(text):
                current += text[i + 1]
                i += 2
                continue
            if ch == quote_char:
                quote_char = None
        elif ch in "\"'`":
            quote_char = ch
            current += ch
        elif ch in "([{":
            depth += 1
            current += ch
        elif ch in ")]}":
            depth -= 1
            current += ch
        elif ch == separator and depth == 0:
            pieces.append(current.strip())
            current = ""
        else:
            current += ch
        i += 1
    if current.strip():
        pieces.append(current.strip())
    return pieces


def _unescape(body: str) -> str:
    return re.sub(r"\\(.)", lambda m: {"n": "\n", "t": "\t"}.get(m.group(1), m.group(1)), body, flags=re.S)


def _parse_value(raw: str, source: str) -> Any:
    raw = raw.strip()
    if not raw:
        raise LocatorSyntaxError("Empty argument", source)
    
    if raw[0] in "{":
        if raw[-1] != "}":
            raise LocatorSyntaxError(f"Unterminated options {raw!r}", source)
        options = {}
        for entry in _split_top_level(raw[1:-1], ","):
            key, sep, value = entry.partition(":")
            if not sep:
                raise LocatorSyntaxError(f"Malformed option {entry!r}", source)
            options[key.strip().strip("'\"")] = _parse_value(value, source)
        return options
    
    # Python keyword argument
    keyword = re.match(r"^([A-Za-z_]\w*)\s*=(?!=)\s*(.+)$", raw, re.S)
    if keyword:
        return {keyword.group(1): _parse_value(keyword.group(2), source)}
    
    string = re.match(r"""^[rbuf]?(["'`])(.*)\1$""", raw, re.S)
    if string:
        body = string.group(2)
        return body if raw[0] == "r" else _unescape(body)
    
    py_regex = _PY_REGEX.match(raw)
    if py_regex:
        flags = "i" if py_regex.group(3) and re.search(r"IGNORECASE|\bI\b", py_regex.group(3)) else ""
        return RegexLiteral(pattern=py_regex.group(2), flags=flags)
    
    js_regex = _JS_REGEX.match(raw)
    if js_regex:
        return RegexLiteral(pattern=js_regex.group(1), flags=js_regex.group(2))
    
    if raw in ("true", "True"):
        return True
    if raw in ("false", "False"):
        return False
    if re.fullmatch(r"-?\d+", raw):
        return int(raw)
    raise LocatorSyntaxError(f"Unsupported argument {raw!r}", source)


def _normalize_method(name: str) -> str:
    return name.replace("_", "").lower()


def _positional_and_options(args: List[Any]) -> Tuple[List[Any], Dict[str, Any]]:
    positional = []
    options: Dict[str, Any] = {}
    for arg in args:
        if isinstance(arg, dict):
            options.update({_normalize_method(k): v for k, v in arg.items()})
        else:
            positional.append(arg)
    return positional, options


def _text_value(value: Any, exact: bool, source: str) -> str:
    if isinstance(value, RegexLiteral):
        return f"/{value.pattern}/{value.flags}"
    if not isinstance(value, str):
        raise LocatorSyntaxError(f"Expected text, got {value!r}", source)
    return quote(value) + ("s" if exact else "i")


def _call_to_selector(
    method: str,
    args: Optional[List[Any]],
    source: str,
    language: str,
    test_id_attribute: str,
) -> str:
    name = _normalize_method(method)
    
    # Python exposes first/last as properties
    if name in ("first", "last") and args in (None, []):
        return "nth=0" if name == "first" else "nth=-1"
    if args is None:
        raise LocatorSyntaxError(f"{method} must be called", source)
    
    positional, options = _positional_and_options(args)
    
    if name == "nth":
        if len(positional) != 1 or not isinstance(positional[0], int):
            raise LocatorSyntaxError("nth() expects one integer", source)
        return f"nth={positional[0]}"
    
    if name == "locator":
        if len(positional) != 1 or not isinstance(positional[0], str):
            raise LocatorSyntaxError("locator() expects one selector string", source)
        if options:
            raise LocatorSyntaxError(f"Unsupported locator() options {sorted(options)}", source)
        return positional[0]
    
    if name == "getbyrole":
        if len(positional) != 1 or not isinstance(positional[0], str):
            raise LocatorSyntaxError("getByRole() expects a role name", source)
        unknown = set(options) - _ROLE_OPTIONS
        if unknown:
            raise LocatorSyntaxError(f"Unsupported getByRole() options {sorted(unknown)}", source)
        selector = f"role={positional[0]}"
        exact = bool(options.get("exact", False))
        if "name" in options:
            selector += f"[name={_text_value(options['name'], exact, source)}]"
        for key in ("level", "checked", "disabled", "pressed", "expanded", "selected"):
            if key in options:
                value = options[key]
                rendered = str(value).lower() if isinstance(value, bool) else str(value)
                selector += f"[{key}={rendered}]"
        if options.get("includehidden"):
            selector += "[include-hidden]"
        return selector
    
    if name in _TEXT_METHODS:
        if len(positional) != 1:
            raise LocatorSyntaxError(f"{method}() expects one argument", source)
        exact = bool(options.get("exact", False))
        return f"{_TEXT_METHODS[name]}={_text_value(positional[0], exact, source)}"
    
    if name == "getbytestid":
        if len(positional) != 1:
            raise LocatorSyntaxError("getByTestId() expects one argument", source)
        value = positional[0]
        if isinstance(value, RegexLiteral):
            return f"testid=[{test_id_attribute}=/{value.pattern}/{value.flags}]"
        return f"testid=[{test_id_attribute}={quote(str(value))}s]"
    
    raise LocatorSyntaxError(f"Unsupported {language} locator method {method!r}", source)


# ----------------------------------------------------------------------
# Rendering selectors as locators
# ----------------------------------------------------------------------

_JS_TEXT_METHODS = {
    "text": "getByText",
    "label": "getByLabel",
    "placeholder": "getByPlaceholder",
    "alt": "getByAltText",
    "title": "getByTitle",
}
_PY_TEXT_METHODS = {
    "text": "get_by_text",
    "label": "get_by_label",
    "placeholder": "get_by_placeholder",
    "alt": "get_by_alt_text",
    "title": "get_by_title",
}


def _js_string(text: str) -> str:
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n") + "'"


def _py_string(text: str) -> str:
    return quote(text)


def _render_text(language: str, value: TextValue) -> Tuple[str, bool]:
    """Render a text argument; second item tells whether exact must be added."""
    if value.pattern is not None:
        if language == "python":
            flags = ", re.IGNORECASE" if "i" in regex_flags(value.pattern) else ""
            return f're.compile(r"{value.pattern.pattern}"{flags})', False
        return f"/{value.pattern.pattern}/{regex_flags(value.pattern)}", False
    string = _py_string(value.text) if language == "python" else _js_string(value.text)
    return string, value.exact


def _render_part(language: str, part: SelectorPart) -> str:
    python = language == "python"
    
    if part.engine == "nth":
        index = part.compiled
        if index == 0:
            return "first" if python else "first()"
        if index == -1:
            return "last" if python else "last()"
        return f"nth({index})"
    
    if part.engine in _JS_TEXT_METHODS:
        method = (_PY_TEXT_METHODS if python else _JS_TEXT_METHODS)[part.engine]
        argument, exact = _render_text(language, part.compiled)
        if exact:
            argument += ", exact=True" if python else ", { exact: true }"
        return f"{method}({argument})"
    
    if part.engine == "role":
        query: RoleQuery = part.compiled
        options = []
        exact = False
        if query.name is not None:
            argument, exact = _render_text(language, query.name)
            options.append(("name", argument))
        for key, value in query.attributes.items():
            if isinstance(value, bool):
                rendered = ("True" if value else "False") if python else str(value).lower()
            elif isinstance(value, int):
                rendered = str(value)
            else:
                rendered = _py_string(str(value)) if python else _js_string(str(value))
            options.append((key, rendered))
        if exact:
            options.append(("exact", "True" if python else "true"))
        if query.include_hidden:
            options.append(("include_hidden" if python else "includeHidden", "True" if python else "true"))
        if python:
            rendered_options = "".join(f", {k}={v}" for k, v in options)
            return f"get_by_role({_py_string(query.role)}{rendered_options})"
        rendered_options = ", ".join(f"{k}: {v}" for k, v in options)
        suffix = f", {{ {rendered_options} }}" if options else ""
        return f"getByRole({_js_string(query.role)}{suffix})"
    
    if part.engine == "testid":
        _, value = part.compiled
        if value.pattern is not None:
            argument, _ = _render_text(language, value)
        else:
            argument = _py_string(value.text) if python else _js_string(value.text)
        return f"get_by_test_id({argument})" if python else f"getByTestId({argument})"
    
    raw = str(part)
    return f"locator({_py_string(raw) if python else _js_string(raw)})"


def as_locator(language: str, selector: str) -> str:
    """
    Render a selector as a locator call chain in ``language``.
    
    Selectors that cannot be parsed are rendered as a plain ``locator()``.
    """
    python = language == "python"
    try:
        parsed = parse_selector(selector)
    except SelectorParseError:
        return f"locator({_py_string(selector) if python else _js_string(selector)})"
    
    return ".".join(_render_part(language, part) for part in parsed.parts)
