"""
Tests for the document model, element text and roles.
"""

import pytest

from recorder_search.dom.document import Document, shadow_root
from recorder_search.dom.roles import accessible_name, get_role, is_disabled, is_hidden
from recorder_search.dom.text import element_text, normalize_whitespace


class TestDocument:
    """Test the Document wrapper."""
    
    def test_fragment_gets_body(self):
        """Test fragments and empty input are wrapped in html/body."""
        assert Document.from_html("<p>x</p>").body.find("p") is not None
        assert Document.from_html("").body is not None
    
    def test_from_file(self, tmp_path):
        """Test loading a file."""
        path = tmp_path / "page.html"
        path.write_text("<button>Go</button>", encoding="utf-8")
        assert Document.from_file(path).body.find("button").text == "Go"
    
    def test_iter_elements_preorder(self):
        """Test the walk is depth-first in document order and skips the root."""
        doc = Document.from_html('<div id="a"><p id="b"><i id="c"></i></p></div><span id="d"></span>')
        assert [el.get("id") for el in doc.iter_elements()] == ["a", "b", "c", "d"]
    
    def test_iter_elements_skips_template_content(self):
        """Test template and shadow-root content is not walked."""
        doc = Document.from_html(
            '<div id="host"><template shadowrootmode="open"><b id="shadow"></b></template></div>'
            '<template id="t"><i id="inert"></i></template>'
        )
        ids = [el.get("id") for el in doc.iter_elements()]
        assert "shadow" not in ids
        assert "inert" not in ids
        assert shadow_root(doc.get_element_by_id("host")) is not None
    
    def test_contains_is_inclusive(self, nested_doc):
        """Test contains includes the node itself."""
        outer = nested_doc.get_element_by_id("outer")
        inner = nested_doc.get_element_by_id("inner")
        assert Document.contains(outer, inner)
        assert Document.contains(inner, inner)
        assert not Document.contains(inner, outer)
    
    def test_sort_in_document_order(self, buttons_doc):
        """Test sorting and detached elements."""
        a, b, c = buttons_doc.body.findall("button")
        assert buttons_doc.sort_in_document_order([c, a, b]) == [a, b, c]
        
        buttons_doc.body.remove(a)
        assert not buttons_doc.is_connected(a)
        assert buttons_doc.sort_in_document_order([a, c, b]) == [b, c, a]
    
    def test_is_connected_after_removal(self, nested_doc):
        """Test a removed subtree and its descendants are detached."""
        outer = nested_doc.get_element_by_id("outer")
        inner = nested_doc.get_element_by_id("inner")
        assert nested_doc.is_connected(nested_doc.root)
        assert nested_doc.is_connected(inner)
        
        nested_doc.body.remove(outer)
        
        assert not nested_doc.is_connected(outer)
        assert not nested_doc.is_connected(inner)
        assert nested_doc.is_connected(nested_doc.body)
    
    def test_unique_in_document_order(self, buttons_doc):
        """Test duplicates are dropped."""
        a, b, _ = buttons_doc.body.findall("button")
        assert buttons_doc.unique_in_document_order([b, a, b, a]) == [a, b]


class TestElementText:
    """Test text extraction."""
    
    def test_normalize_whitespace(self):
        """Test collapsing, trimming and invisible characters."""
        assert normalize_whitespace("  a \n\t b  ") == "a b"
        assert normalize_whitespace("soft\u00adhyphen zero\u200bwidth") == "softhyphen zerowidth"
    
    def test_nested_text(self, nested_doc):
        """Test text concatenates descendants."""
        cache = {}
        outer = nested_doc.get_element_by_id("outer")
        text = element_text(cache, outer)
        assert text.normalized == "Say hello world"
        assert text.immediate == ["Say "]
    
    def test_cache_is_used(self, nested_doc):
        """Test results are memoized in the given cache."""
        cache = {}
        inner = nested_doc.get_element_by_id("inner")
        first = element_text(cache, inner)
        assert cache[inner] is first
        assert element_text(cache, inner) is first
    
    def test_comments_are_skipped(self):
        """Test comments contribute no text but their tails do."""
        doc = Document.from_html("<p>a<!-- hidden -->b</p>")
        text = element_text({}, doc.body.find("p"))
        assert text.normalized == "ab"
        assert text.immediate == ["ab"]
    
    def test_skipped_tags(self):
        """Test script, style and noscript have no text."""
        doc = Document.from_html("<div>x<script>y</script><style>z</style></div>")
        assert element_text({}, doc.body.find("div")).normalized == "x"
    
    def test_template_has_no_text(self):
        """Test a plain template is inert while a shadow root is not."""
        doc = Document.from_html(
            '<div><template id="t"><p>row</p></template></div>'
            '<div id="host"><template shadowrootmode="open">inside</template></div>'
        )
        assert element_text({}, doc.get_element_by_id("t")).full == ""
        assert element_text({}, doc.get_element_by_id("host")).normalized == "inside"


class TestRoles:
    """Test implicit roles and accessible names."""
    
    @pytest.mark.parametrize("html,role", [
        ("<button>x</button>", "button"),
        ('<a href="#">x</a>', "link"),
        ("<a>x</a>", None),
        ('<input type="checkbox">', "checkbox"),
        ('<input type="submit">', "button"),
        ("<input>", "textbox"),
        ('<input type="hidden">', None),
        ("<select><option>a</option></select>", "combobox"),
        ("<select multiple><option>a</option></select>", "listbox"),
        ("<h3>x</h3>", "heading"),
        ('<div role="tab button">x</div>', "tab"),
        ('<img alt="">', "presentation"),
    ])
    def test_get_role(self, html, role):
        """Test explicit and implicit roles."""
        element = next(Document.from_html(html).iter_elements())
        assert get_role(element) == role
    
    def test_accessible_name_sources(self, form_doc):
        """Test labels, aria-label and content."""
        cache = {}
        assert accessible_name(cache, form_doc.get_element_by_id("user")) == "Username"
        assert accessible_name(cache, form_doc.get_element_by_id("pass")) == "Password"
        assert accessible_name(cache, form_doc.body.find(".//button")) == "Sign in"
        
        doc = Document.from_html('<span id="l">Close</span><button aria-labelledby="l">X</button>')
        assert accessible_name({}, doc.body.find("button")) == "Close"
    
    def test_hidden(self):
        """Test hidden, aria-hidden and inline styles, including ancestors."""
        doc = Document.from_html(
            '<div hidden><b id="a"></b></div>'
            '<div aria-hidden="true"><b id="b"></b></div>'
            '<div style="display: none"><b id="c"></b></div>'
            '<div><b id="d"></b></div>'
        )
        hidden = [is_hidden(doc.get_element_by_id(i)) for i in "abcd"]
        assert hidden == [True, True, True, False]
    
    def test_disabled_fieldset(self):
        """Test controls inside a disabled fieldset are disabled."""
        doc = Document.from_html("<fieldset disabled><input id='x'></fieldset>")
        assert is_disabled(doc.get_element_by_id("x"))
