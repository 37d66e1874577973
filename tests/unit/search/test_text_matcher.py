"""
Tests for the text matcher.
"""

import pytest

from recorder_search.dom.document import Document
from recorder_search.search.text_matcher import TextMatcher


def _ids(elements):
    return [el.get("id") or el.tag for el in elements]


def _no_ancestors(document, matches):
    return all(
        not Document.contains(a, b)
        for a in matches for b in matches if a is not b
    )


class TestSpecificity:
    """Test that only the deepest matches survive."""
    
    def test_inner_span_wins_over_div(self, nested_doc):
        """Test the span is kept and its containing div dropped."""
        matches = TextMatcher().search(nested_doc, "hello")
        assert _ids(matches) == ["inner"]
    
    def test_text_spanning_children_matches_parent(self, nested_doc):
        """Test text split across the div and span matches the div."""
        matches = TextMatcher().search(nested_doc, "say hello")
        assert _ids(matches) == ["outer"]
    
    def test_no_match_is_ancestor_of_another(self):
        """Test no match is an ancestor of another match on a deeper tree."""
        doc = Document.from_html("""
            <section>item
              <ul>
                <li>item one <b>item</b></li>
                <li>item two</li>
              </ul>
              <div><div><i>item three</i></div></div>
            </section>
        """)
        matches = TextMatcher().search(doc, "item")
        assert _no_ancestors(doc, matches)
        assert [el.tag for el in matches] == ["b", "li", "i"]
    
    def test_siblings_all_match(self):
        """Test unrelated siblings are all kept."""
        doc = Document.from_html("<p>go</p><p>go</p><p>stop</p>")
        assert len(TextMatcher().search(doc, "go")) == 2


class TestOrdering:
    """Test results come back in document order."""
    
    def test_document_order(self):
        """Test matches are strictly increasing in document position."""
        doc = Document.from_html("""
            <div id="a"><span id="a1">x</span></div>
            <div id="b">x</div>
            <div id="c"><p><span id="c1">x</span></p><span id="c2">x</span></div>
        """)
        matches = TextMatcher().search(doc, "x")
        positions = doc.document_positions()
        order = [positions[el] for el in matches]
        assert order == sorted(order)
        assert len(set(order)) == len(order)
        assert _ids(matches) == ["a1", "b", "c1", "c2"]


class TestMatching:
    """Test the text rules."""
    
    def test_case_insensitive(self):
        """Test matching ignores case."""
        doc = Document.from_html("<p>Submit Order</p>")
        assert len(TextMatcher().search(doc, "submit order")) == 1
        assert len(TextMatcher().search(doc, "SUBMIT")) == 1
    
    def test_whitespace_is_normalized(self):
        """Test runs of whitespace in the page collapse to one space."""
        doc = Document.from_html("<p>Submit\n    \t Order</p>")
        assert len(TextMatcher().search(doc, "submit order")) == 1
        assert len(TextMatcher().search(doc, "submit   order")) == 1
    
    def test_script_and_style_are_ignored(self, form_doc):
        """Test text inside script tags never matches."""
        matches = TextMatcher().search(form_doc, "signIn")
        assert matches == []
    
    def test_head_is_ignored(self, form_doc):
        """Test the title in head is not searched."""
        assert TextMatcher().search(form_doc, "Login page") == []
    
    def test_button_input_value(self):
        """Test submit inputs match on their value."""
        doc = Document.from_html('<form><input type="submit" value="Send now"></form>')
        matches = TextMatcher().search(doc, "send")
        assert [el.tag for el in matches] == ["input"]
    
    def test_shadow_root_text(self):
        """Test the host matches on its shadow root text."""
        doc = Document.from_html(
            '<div id="host"><template shadowrootmode="open"><b>shadowed</b></template></div>'
        )
        matches = TextMatcher().search(doc, "shadowed")
        assert _ids(matches) == ["host"]
    
    def test_template_content_is_inert(self):
        """Test text inside a plain template is not searchable."""
        doc = Document.from_html(
            "<div><template><p>secret row</p></template><span>other</span></div>"
        )
        assert TextMatcher().search(doc, "secret") == []
        assert [el.tag for el in TextMatcher().search(doc, "other")] == ["span"]
    
    def test_empty_query(self, buttons_doc):
        """Test an empty query matches nothing."""
        assert TextMatcher().search(buttons_doc, "") == []
        assert TextMatcher().search(buttons_doc, "   ") == []
    
    def test_no_match(self, buttons_doc):
        """Test a missing string yields an empty list."""
        assert TextMatcher().search(buttons_doc, "nonexistent") == []


class TestCache:
    """Test the text cache is scoped to one search."""
    
    def test_mutation_between_searches(self, buttons_doc):
        """Test a second search sees text changed after the first."""
        matcher = TextMatcher()
        assert len(matcher.search(buttons_doc, "A")) == 1
        
        first = buttons_doc.body.find("button")
        first.text = "Z"
        
        assert matcher.search(buttons_doc, "a") == []
        assert len(matcher.search(buttons_doc, "z")) == 1
    
    def test_removed_elements_are_not_found(self, buttons_doc):
        """Test detached elements drop out of later searches."""
        matcher = TextMatcher()
        button = buttons_doc.body.find("button")
        button.getparent().remove(button)
        assert matcher.search(buttons_doc, "A") == []
