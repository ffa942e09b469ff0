"""Rendering of comparisons as human-readable text."""

from __future__ import annotations

from typing import Any, Protocol

import lxml.etree as ET

from .models import AttributeNode, Comparison, ComparisonType, NodeDetail, TextNode


_DESCRIPTIONS = {
    ComparisonType.ELEMENT_TAG_NAME: "element tag name",
    ComparisonType.NAMESPACE_URI: "namespace URI",
    ComparisonType.NAMESPACE_PREFIX: "namespace prefix",
    ComparisonType.ATTR_VALUE: "attribute value",
    ComparisonType.ATTR_MISSING: "attribute",
    ComparisonType.ATTR_EXTRA: "attribute",
    ComparisonType.SCHEMA_LOCATION: "schema location",
    ComparisonType.NO_NAMESPACE_SCHEMA_LOCATION: "no namespace schema location",
    ComparisonType.TEXT_VALUE: "text value",
    ComparisonType.CHILD_SEQUENCE: "child nodelist sequence",
    ComparisonType.CHILD_LOOKUP: "child",
}


class ComparisonFormatter(Protocol):
    """Strategy for turning a comparison into text."""

    def get_description(self, comparison: Comparison) -> str:
        ...

    def get_details(self, detail: NodeDetail, comparison_type: ComparisonType, format_xml: bool) -> str:
        ...


class DefaultComparisonFormatter:
    """
    Formatter producing one-line descriptions such as:

        Expected text value 'hi' but was 'oh' - comparing <b>hi</b> at /a[1]/b[1]/text()[1]
        to <b>oh</b> at /a[1]/b[1]/text()[1]
    """

    def get_description(self, comparison: Comparison) -> str:
        description = _DESCRIPTIONS.get(comparison.type, comparison.type.value.lower())
        control = comparison.control
        test = comparison.test
        return (
            f"Expected {description} {self._value(control.value)} "
            f"but was {self._value(test.value)} - comparing "
            f"{self._short_string(control.node)} at {control.xpath or 'NULL'} to "
            f"{self._short_string(test.node)} at {test.xpath or 'NULL'}"
        )

    def get_details(self, detail: NodeDetail, comparison_type: ComparisonType, format_xml: bool) -> str:
        """Render the full node behind one side of a comparison."""
        node = detail.node
        if node is None:
            return "<NULL>"
        if isinstance(node, AttributeNode):
            node = node.owner
        elif isinstance(node, TextNode):
            if comparison_type == ComparisonType.TEXT_VALUE:
                return node.value
            node = node.owner
        if comparison_type in (ComparisonType.ELEMENT_TAG_NAME, ComparisonType.NAMESPACE_URI,
                               ComparisonType.NAMESPACE_PREFIX):
            return self._short_string(node)
        return ET.tostring(node, encoding="unicode", pretty_print=format_xml, with_tail=False)

    def _value(self, value: Any) -> str:
        if value is None:
            return "NULL"
        if isinstance(value, str):
            return f"'{value}'"
        return str(value)

    def _short_string(self, node: Any) -> str:
        if node is None:
            return "NULL"
        if isinstance(node, TextNode):
            element = node.owner
            return f"{self._start_tag(element)}{node.value}</{self._tag_name(element)}>"
        if isinstance(node, AttributeNode):
            element = node.owner
            name = self._attribute_name(element, node.name)
            value = element.get(node.name)
            return f"<{self._tag_name(element)} {name}=\"{value}\"...>"
        return self._start_tag(node)

    def _start_tag(self, element: Any) -> str:
        suffix = " ..." if len(element.attrib) > 0 else ""
        return f"<{self._tag_name(element)}{suffix}>"

    def _tag_name(self, element: Any) -> str:
        qname = ET.QName(element)
        if element.prefix:
            return f"{element.prefix}:{qname.localname}"
        return qname.localname

    def _attribute_name(self, element: Any, name: str) -> str:
        qname = ET.QName(name)
        if qname.namespace is None:
            return qname.localname
        for prefix, uri in element.nsmap.items():
            if uri == qname.namespace and prefix:
                return f"{prefix}:{qname.localname}"
        return qname.text
