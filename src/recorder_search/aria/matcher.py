"""
Aria Matcher - Resolve parsed aria templates to elements.

A single top-level node matches every visible element with that role and
name whose descendants contain the node's children in order. Several
top-level nodes match the innermost elements containing all of them, in
order.
"""

import logging
from typing import List, Union

from recorder_search.aria.template import AriaFragment, AriaNode, AriaText
from recorder_search.dom.document import Element, is_element
from recorder_search.dom.roles import accessible_name, get_role, is_hidden, role_attributes_match
from recorder_search.dom.text import TextCache, element_text
from recorder_search.interfaces.aria import IAriaMatcher

logger = logging.getLogger(__name__)

TemplateNode = Union[AriaNode, AriaText]


class AriaMatcher(IAriaMatcher):
    """
    Match aria template fragments against an lxml tree.
    
    Example:
        >>> fragment = parse_template('- button "Submit"')
        >>> AriaMatcher().match_all(document.body, fragment)
        [<Element button>]
    """
    
    def match_all(self, root: Element, fragment: AriaFragment) -> List[Element]:
        cache: TextCache = {}
        elements = [el for el in root.iter() if is_element(el) and not is_hidden(el)]
        
        if len(fragment.children) == 1 and isinstance(fragment.children[0], AriaNode):
            node = fragment.children[0]
            return [el for el in elements if self._matches_node(cache, el, node)]
        
        containers = [el for el in elements if self._contains_in_order(cache, el, fragment.children)]
        # Innermost containers only
        container_set = set(containers)
        return [
            el for el in containers
            if not any(d in container_set for d in el.iterdescendants())
        ]
    
    def _matches_node(self, cache: TextCache, element: Element, node: AriaNode) -> bool:
        if get_role(element) != node.role:
            return False
        if node.name is not None and not node.name.matches(accessible_name(cache, element)):
            return False
        if not role_attributes_match(element, node.attributes):
            return False
        return self._contains_in_order(cache, element, node.children)
    
    def _contains_in_order(self, cache: TextCache, container: Element, children: List[TemplateNode]) -> bool:
        """Match ``children`` against the container's descendants, greedily in order."""
        if not children:
            return True
        
        descendants = [
            el for el in container.iterdescendants()
            if is_element(el) and not is_hidden(el)
        ]
        position = 0
        for child in children:
            if isinstance(child, AriaText):
                if not child.value.matches(element_text(cache, container).full):
                    return False
                continue
            
            while position < len(descendants):
                candidate = descendants[position]
                position += 1
                if self._matches_node(cache, candidate, child):
                    # Continue after the matched subtree
                    subtree = sum(1 for el in candidate.iterdescendants() if is_element(el) and not is_hidden(el))
                    position += subtree
                    break
            else:
                return False
        return True
