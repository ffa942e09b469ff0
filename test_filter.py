"""Tests for XmlFilter."""

import lxml.etree as ET
import pytest

from xmlequiv import FilterExpressionError, InvalidArgumentError, XmlFilter
from xmlequiv.xmlutils import to_element, to_string


def filtered(xml_filter, xml):
    return to_string(xml_filter.apply_filter_to(to_element(xml)))


class TestHasFilters:
    """Test detection of a no-op filter."""

    def test_empty(self):
        assert XmlFilter().has_filters() is False
        assert XmlFilter([], []).has_filters() is False

    def test_local_names_only(self):
        assert XmlFilter(["b"]).has_filters() is True

    def test_xpaths_only(self):
        assert XmlFilter(xpaths_to_ignore=["//b"]).has_filters() is True


class TestLocalNames:
    """Test removal by element local name."""

    def test_remove_elements_and_descendants(self):
        """Test that every element with a listed name is removed with its subtree."""
        xml_filter = XmlFilter(["b"])
        assert filtered(xml_filter, "<a><b>1</b><c><b>2</b></c><d/></a>") == "<a><c/><d/></a>"

    def test_input_not_modified(self):
        """Test that filtering works on a copy."""
        element = to_element("<a><b>1</b><c/></a>")
        result = XmlFilter(["b"]).apply_filter_to(element)

        assert to_string(element) == "<a><b>1</b><c/></a>"
        assert result is not element

    def test_namespace_is_ignored(self):
        """Test that matching uses the local name only."""
        xml_filter = XmlFilter(["b"])
        result = xml_filter.apply_filter_to(to_element('<a xmlns="urn:x"><b/><c/></a>'))

        assert [ET.QName(e).localname for e in result] == ["c"]

    def test_tail_text_kept(self):
        """Test that text following a removed element stays in place."""
        xml_filter = XmlFilter(["b"])
        assert filtered(xml_filter, "<p>one<b>two</b>three</p>") == "<p>onethree</p>"
        assert filtered(xml_filter, "<p><i>one</i><b>two</b>three</p>") == "<p><i>one</i>three</p>"

    def test_root_is_kept(self):
        """Test that the root element is never removed."""
        assert filtered(XmlFilter(["a"]), "<a><b/></a>") == "<a><b/></a>"

    def test_none(self):
        """Test that no tree in means no tree out."""
        assert XmlFilter(["b"]).apply_filter_to(None) is None


class TestXPaths:
    """Test removal by XPath expression."""

    def test_remove_selected_elements(self):
        xml_filter = XmlFilter(xpaths_to_ignore=["//b[@id='1']"])
        assert filtered(xml_filter, '<a><b id="1"/><b id="2"/></a>') == '<a><b id="2"/></a>'

    def test_namespaces(self):
        """Test that expressions can use prefixes from the namespace mapping."""
        xml_filter = XmlFilter(xpaths_to_ignore=["//x:b"], namespaces={"x": "urn:x"})
        result = xml_filter.apply_filter_to(to_element('<a xmlns="urn:x"><b/><c/></a>'))

        assert [ET.QName(e).localname for e in result] == ["c"]

    def test_remove_attributes(self):
        """Test that selected attributes are removed from their elements."""
        xml_filter = XmlFilter(xpaths_to_ignore=["//b/@id"])
        assert filtered(xml_filter, '<a><b id="1" x="y"/><b id="2"/></a>') == '<a><b x="y"/><b/></a>'

    def test_remove_comments(self):
        xml_filter = XmlFilter(xpaths_to_ignore=["//comment()"])
        assert filtered(xml_filter, "<a><!-- note --><b/></a>") == "<a><b/></a>"

    def test_overlapping_with_local_names(self):
        """Test that nodes already removed by name are simply skipped."""
        xml_filter = XmlFilter(["b"], ["//b", "//c"])
        assert filtered(xml_filter, "<a><b/><c/><d/></a>") == "<a><d/></a>"

    def test_idempotent(self):
        """Test that filtering a filtered tree changes nothing."""
        xml_filter = XmlFilter(["ts"], ["//item[@skip='true']", "//@trace"])
        xml = '<a trace="1"><ts>now</ts><item skip="true"/><item>keep<ts/></item></a>'

        once = xml_filter.apply_filter_to(to_element(xml))
        twice = xml_filter.apply_filter_to(once)
        assert to_string(once) == to_string(twice)
        assert to_string(once) == "<a><item>keep</item></a>"

    def test_invalid_expression(self):
        """Test that a malformed expression is rejected when the filter is built."""
        with pytest.raises(FilterExpressionError) as exc_info:
            XmlFilter(xpaths_to_ignore=["//b["])

        assert exc_info.value.expression == "//b["
        assert "//b[" in str(exc_info.value)
        assert isinstance(exc_info.value, InvalidArgumentError)

    def test_undefined_prefix(self):
        """Test that an expression failing at evaluation names the expression."""
        with pytest.raises(FilterExpressionError) as exc_info:
            XmlFilter(xpaths_to_ignore=["//q:b"]).apply_filter_to(to_element("<a><b/></a>"))

        assert exc_info.value.expression == "//q:b"

    def test_non_node_result(self):
        """Test that an expression must select nodes."""
        xml_filter = XmlFilter(xpaths_to_ignore=["count(//b)"])
        with pytest.raises(FilterExpressionError):
            xml_filter.apply_filter_to(to_element("<a><b/></a>"))


class TestDescribe:
    """Test the filter description used in failure reports."""

    def test_both_sets(self):
        xml_filter = XmlFilter(["ts", "id"], ["//trace"])
        assert xml_filter.describe() == (
            "XML elements with the following Local Names will be ignored: ts, id\n"
            "XML nodes satisfying the following XPath expressions will be ignored: //trace\n"
        )
        assert str(xml_filter) == xml_filter.describe()

    def test_names_only(self):
        assert XmlFilter(["ts"]).describe() == "XML elements with the following Local Names will be ignored: ts\n"

    def test_empty(self):
        assert XmlFilter().describe() == ""

    def test_from_dict(self):
        xml_filter = XmlFilter.from_dict({"element_local_names": ["ts"], "xpaths": ["//x:b"],
                                          "namespaces": {"x": "urn:x"}})

        assert xml_filter.element_local_names_to_ignore == ["ts"]
        assert xml_filter.xpaths_to_ignore == ["//x:b"]
        assert xml_filter.namespaces == {"x": "urn:x"}
