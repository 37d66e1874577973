"""
Selector Engine - Evaluate selectors against a document and generate them.

This is the default implementation of the selector engine contract the
search consumes: parse a selector, query it against a root, and produce a
selector for a given element (used for highlight tooltips).
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from lxml import etree

from recorder_search.dom.document import Element, child_elements, is_element
from recorder_search.dom.roles import (
    accessible_name,
    get_role,
    is_hidden,
    label_text,
    role_attributes_match,
)
from recorder_search.dom.text import TextCache, element_text, normalize_whitespace
from recorder_search.exceptions.selector import (
    SelectorError,
    SelectorEvaluationError,
)
from recorder_search.interfaces.engine import GeneratedSelector, ISelectorEngine
from recorder_search.selectors.parser import (
    ParsedSelector,
    RoleQuery,
    SelectorPart,
    parse_selector,
)
from recorder_search.selectors.values import TextValue, quote

logger = logging.getLogger(__name__)

_CSS_IDENT = re.compile(r"^-?[_a-zA-Z][_a-zA-Z0-9-]*$")
_LABELABLE = frozenset({"input", "select", "textarea", "button", "meter", "output", "progress"})

MAX_TEXT_LENGTH = 80


def css_path(element: Element) -> str:
    """
    Build a structural CSS path (``html > body > div:nth-of-type(2) > span``).
    
    The path is unique within the element's tree as long as the tree does not
    change.
    """
    steps = []
    node = element
    while node is not None and is_element(node):
        parent = node.getparent()
        step = node.tag
        if parent is not None:
            same_tag = [child for child in child_elements(parent) if child.tag == node.tag]
            if len(same_tag) > 1:
                step += f":nth-of-type({same_tag.index(node) + 1})"
        steps.append(step)
        node = parent
    return " > ".join(reversed(steps))


def _tree_root(node: Element) -> Element:
    return node.getroottree().getroot()


def _scope_elements(scope: Element, include_self: bool) -> List[Element]:
    elements = [el for el in scope.iter() if is_element(el)]
    return elements if include_self else elements[1:]


class SelectorEngine(ISelectorEngine):
    """
    lxml-backed selector engine.
    
    Example:
        >>> engine = SelectorEngine()
        >>> parsed = engine.parse('role=button[name="Submit"i]')
        >>> engine.query(parsed, document.root)
        [<Element button>]
    """
    
    def __init__(self, test_id_attribute: str = "data-testid"):
        self.test_id_attribute = test_id_attribute
        self._evaluators: Dict[str, Callable[[SelectorPart, Element, bool, TextCache], List[Element]]] = {
            "css": self._query_css,
            "xpath": self._query_xpath,
            "text": self._query_text,
            "role": self._query_role,
            "label": self._query_label,
            "placeholder": self._attribute_matcher("placeholder"),
            "alt": self._attribute_matcher("alt"),
            "title": self._attribute_matcher("title"),
            "testid": self._query_attribute_part,
            "id": self._query_attribute_part,
            "data-testid": self._query_attribute_part,
            "data-test-id": self._query_attribute_part,
            "data-test": self._query_attribute_part,
        }
    
    # ------------------------------------------------------------------
    # Contract
    # ------------------------------------------------------------------
    
    def parse(self, selector: str) -> ParsedSelector:
        return parse_selector(selector)
    
    def query(self, parsed: ParsedSelector, root: Element) -> List[Element]:
        """
        Evaluate a parsed selector under ``root``.
        
        When ``root`` is the document element it is itself a candidate, as
        with ``document.querySelectorAll``.
        
        Returns:
            Unique matching elements in document order
            
        Raises:
            SelectorEvaluationError: If an engine fails during evaluation
        """
        cache: TextCache = {}
        include_self = root.getparent() is None
        scopes: List[Tuple[Element, bool]] = [(root, include_self)]
        current: List[Element] = []
        
        for part in parsed.parts:
            if part.engine == "nth":
                current = self._pick_nth(current if current else [], part.compiled)
                scopes = [(el, False) for el in current]
                continue
            
            evaluator = self._evaluators[part.engine]
            found: List[Element] = []
            for scope, with_self in scopes:
                try:
                    found.extend(evaluator(part, scope, with_self, cache))
                except SelectorError:
                    raise
                except (etree.XPathError, ValueError, TypeError) as e:
                    raise SelectorEvaluationError(
                        f"Failed to evaluate {part}: {e}", parsed.source
                    ) from e
            current = self._unique_sorted(found, root)
            scopes = [(el, False) for el in current]
        
        return current
    
    def query_selector_all(self, selector: str, root: Element) -> List[Element]:
        return self.query(self.parse(selector), root)
    
    def generate_selector(
        self,
        element: Element,
        test_id_attribute: Optional[str] = None,
    ) -> GeneratedSelector:
        """
        Generate a selector that resolves to ``element`` alone.
        
        Candidates, in order: test id, role + name, label, placeholder, alt,
        text, ``#id``, title, then a structural CSS path.
        """
        attribute = test_id_attribute or self.test_id_attribute
        root = _tree_root(element)
        cache: TextCache = {}
        
        for candidate in self._candidates(element, attribute, cache):
            try:
                matches = self.query(parse_selector(candidate), root)
            except SelectorError as e:
                logger.debug(f"Skipping candidate selector {candidate!r}: {e}")
                continue
            if len(matches) == 1 and matches[0] is element:
                return GeneratedSelector(selector=candidate)
        
        return GeneratedSelector(selector=css_path(element))
    
    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    
    def _candidates(self, element: Element, attribute: str, cache: TextCache):
        test_id = element.get(attribute)
        if test_id:
            yield f"testid=[{attribute}={quote(test_id)}]"
        
        if not is_hidden(element):
            role = get_role(element)
            if role and role not in ("presentation", "none", "generic"):
                name = accessible_name(cache, element)
                if name and len(name) <= MAX_TEXT_LENGTH:
                    yield f"role={role}[name={quote(name)}i]"
                    yield f"role={role}[name={quote(name)}s]"
        
        if element.tag in _LABELABLE:
            label = label_text(cache, element) or normalize_whitespace(element.get("aria-label") or "")
            if label and len(label) <= MAX_TEXT_LENGTH:
                yield f"label={quote(label)}i"
                yield f"label={quote(label)}s"
        
        for attr in ("placeholder", "alt"):
            value = normalize_whitespace(element.get(attr) or "")
            if value and len(value) <= MAX_TEXT_LENGTH:
                yield f"{attr}={quote(value)}i"
                yield f"{attr}={quote(value)}s"
        
        text = element_text(cache, element).normalized
        if text and len(text) <= MAX_TEXT_LENGTH:
            yield f"text={quote(text)}i"
            yield f"text={quote(text)}s"
        
        element_id = element.get("id")
        if element_id and _CSS_IDENT.match(element_id):
            yield f"#{element_id}"
        
        title = normalize_whitespace(element.get("title") or "")
        if title and len(title) <= MAX_TEXT_LENGTH:
            yield f"title={quote(title)}s"
    
    # ------------------------------------------------------------------
    # Engines
    # ------------------------------------------------------------------
    
    def _query_css(self, part: SelectorPart, scope: Element, include_self: bool, cache: TextCache) -> List[Element]:
        matches = part.compiled(scope)
        return [el for el in matches if is_element(el) and (include_self or el is not scope)]
    
    def _query_xpath(self, part: SelectorPart, scope: Element, include_self: bool, cache: TextCache) -> List[Element]:
        absolute, relative = part.compiled
        if include_self:
            result = absolute(scope.getroottree())
        else:
            result = relative(scope)
        if not isinstance(result, list):
            raise SelectorEvaluationError(f"XPath {part.body!r} does not select elements", part.body)
        return [el for el in result if is_element(el)]
    
    def _query_text(self, part: SelectorPart, scope: Element, include_self: bool, cache: TextCache) -> List[Element]:
        value: TextValue = part.compiled
        matched = set()
        for element in _scope_elements(scope, include_self):
            if value.matches(element_text(cache, element).full):
                matched.add(element)
        # Keep the innermost elements: drop any whose child also matched.
        return [
            el for el in matched
            if not any(child in matched for child in child_elements(el))
        ]
    
    def _query_role(self, part: SelectorPart, scope: Element, include_self: bool, cache: TextCache) -> List[Element]:
        query: RoleQuery = part.compiled
        results = []
        for element in _scope_elements(scope, include_self):
            if get_role(element) != query.role:
                continue
            if not query.include_hidden and is_hidden(element):
                continue
            if query.name is not None and not query.name.matches(accessible_name(cache, element)):
                continue
            if not role_attributes_match(element, query.attributes):
                continue
            results.append(element)
        return results
    
    def _query_label(self, part: SelectorPart, scope: Element, include_self: bool, cache: TextCache) -> List[Element]:
        value: TextValue = part.compiled
        results = []
        for element in _scope_elements(scope, include_self):
            candidates = []
            if element.tag in _LABELABLE:
                candidates.append(label_text(cache, element))
            if element.get("aria-label") is not None:
                candidates.append(element.get("aria-label"))
            if element.get("aria-labelledby"):
                candidates.append(accessible_name(cache, element))
            if any(text and value.matches(text) for text in candidates):
                results.append(element)
        return results
    
    def _attribute_matcher(self, attribute: str):
        def evaluate(part: SelectorPart, scope: Element, include_self: bool, cache: TextCache) -> List[Element]:
            value: TextValue = part.compiled
            return [
                el for el in _scope_elements(scope, include_self)
                if el.get(attribute) is not None and value.matches(el.get(attribute))
            ]
        return evaluate
    
    def _query_attribute_part(self, part: SelectorPart, scope: Element, include_self: bool, cache: TextCache) -> List[Element]:
        attribute, value = part.compiled
        expected = value if value.pattern is not None else TextValue(text=value.text, exact=True)
        return [
            el for el in _scope_elements(scope, include_self)
            if el.get(attribute) is not None and expected.matches(el.get(attribute))
        ]
    
    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    
    @staticmethod
    def _pick_nth(elements: List[Element], index: int) -> List[Element]:
        if not elements:
            return []
        if index < 0:
            index += len(elements)
        if 0 <= index < len(elements):
            return [elements[index]]
        return []
    
    @staticmethod
    def _unique_sorted(elements: List[Element], root: Element) -> List[Element]:
        positions = {el: i for i, el in enumerate(_tree_root(root).iter())}
        unique = list({id(el): el for el in elements}.values())
        return sorted(unique, key=lambda el: positions.get(el, len(positions)))
