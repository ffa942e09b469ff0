"""Pre-comparison filter that removes ignored content from a copy of a tree."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Iterable, Optional

import lxml.etree as ET

from .exceptions import FilterExpressionError


class XmlFilter:
    """
    Removes elements from a tree before it is compared.

    Operations:
    - Remove every element whose local name is listed, with its descendants
    - Remove every node selected by one of the XPath expressions

    The input tree is never modified; filtering works on a deep copy.
    """

    def __init__(
        self,
        element_local_names_to_ignore: Optional[Iterable[str]] = None,
        xpaths_to_ignore: Optional[Iterable[str]] = None,
        namespaces: Optional[dict[str, str]] = None
    ):
        """
        Initialize the filter.

        Args:
            element_local_names_to_ignore: Local names of elements to remove
            xpaths_to_ignore: XPath expressions selecting nodes to remove
            namespaces: Prefix to namespace URI mapping used by the expressions
        """
        self.element_local_names_to_ignore = list(element_local_names_to_ignore or [])
        self.xpaths_to_ignore = list(xpaths_to_ignore or [])
        self.namespaces = dict(namespaces or {})
        self._compiled: dict[str, ET.XPath] = {}

        for expression in self.xpaths_to_ignore:
            self._compile(expression)

    @classmethod
    def from_dict(cls, data: dict) -> XmlFilter:
        """Build a filter from a configuration mapping."""
        return cls(
            element_local_names_to_ignore=data.get("element_local_names"),
            xpaths_to_ignore=data.get("xpaths"),
            namespaces=data.get("namespaces")
        )

    def has_filters(self) -> bool:
        return len(self.element_local_names_to_ignore) > 0 or len(self.xpaths_to_ignore) > 0

    def apply_filter_to(self, element: Optional[ET._Element]) -> Optional[ET._Element]:
        """
        Return a filtered deep copy of the element.

        Args:
            element: Root of the tree to filter (None is passed through)

        Returns:
            Filtered copy, or None when no element was given
        """
        if element is None:
            return None

        result = deepcopy(element)

        if self.element_local_names_to_ignore:
            names = set(self.element_local_names_to_ignore)
            matches = [
                e for e in result.iterdescendants()
                if isinstance(e.tag, str) and ET.QName(e).localname in names
            ]
            for match in matches:
                _remove_node(match)

        for expression in self.xpaths_to_ignore:
            for node in self._select(result, expression):
                _remove_node(node)

        return result

    def describe(self) -> str:
        lines = []

        if self.element_local_names_to_ignore:
            lines.append(
                "XML elements with the following Local Names will be ignored: "
                + ", ".join(self.element_local_names_to_ignore)
            )

        if self.xpaths_to_ignore:
            lines.append(
                "XML nodes satisfying the following XPath expressions will be ignored: "
                + ", ".join(self.xpaths_to_ignore)
            )

        return "".join(f"{line}\n" for line in lines)

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return (
            f"XmlFilter(element_local_names_to_ignore={self.element_local_names_to_ignore!r}, "
            f"xpaths_to_ignore={self.xpaths_to_ignore!r})"
        )

    def _compile(self, expression: str) -> ET.XPath:
        """Compile and cache an XPath expression."""
        if expression not in self._compiled:
            try:
                self._compiled[expression] = ET.XPath(expression, namespaces=self.namespaces)
            except ET.XPathError as e:
                raise FilterExpressionError(expression, str(e)) from e
        return self._compiled[expression]

    def _select(self, element: ET._Element, expression: str) -> list[Any]:
        try:
            result = self._compile(expression)(element)
        except ET.XPathError as e:
            raise FilterExpressionError(expression, str(e)) from e

        if not isinstance(result, list):
            raise FilterExpressionError(
                expression,
                f"expression evaluates to {type(result).__name__}, not to a node set"
            )
        return result


def _remove_node(node: Any):
    """Detach an element, comment, attribute or text node from its owner."""
    if isinstance(node, ET._Element):
        _remove_element(node)
        return

    owner = getattr(node, "getparent", None)
    owner = owner() if owner else None
    if owner is None:
        return

    if getattr(node, "is_attribute", False):
        owner.attrib.pop(node.attrname, None)
    elif getattr(node, "is_tail", False):
        owner.tail = None
    elif getattr(node, "is_text", False):
        owner.text = None


def _remove_element(element: ET._Element):
    """Remove an element while keeping its tail text in place. The root is never removed."""
    parent = element.getparent()
    if parent is None:
        return

    if element.tail:
        previous = element.getprevious()
        if previous is not None:
            previous.tail = (previous.tail or "") + element.tail
        else:
            parent.text = (parent.text or "") + element.tail

    parent.remove(element)
