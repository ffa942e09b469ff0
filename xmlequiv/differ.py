"""Tree walk that pairs nodes and records every comparison outcome."""

from __future__ import annotations

from typing import Any, Optional

import lxml.etree as ET

from .models import (
    AttributeNode,
    Comparison,
    ComparisonResult,
    ComparisonType,
    Diff,
    Difference,
    DifferenceEvaluator,
    NodeDetail,
    TextNode,
)


XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

_SCHEMA_LOCATION_TYPES = {
    f"{{{XSI_NAMESPACE}}}schemaLocation": ComparisonType.SCHEMA_LOCATION,
    f"{{{XSI_NAMESPACE}}}noNamespaceSchemaLocation": ComparisonType.NO_NAMESPACE_SCHEMA_LOCATION,
}


def child_elements(element: ET._Element) -> list[ET._Element]:
    """Child elements, skipping comments, processing instructions and entities."""
    return [child for child in element if isinstance(child.tag, str)]


def text_nodes(element: ET._Element) -> list[str]:
    """
    Character data directly inside an element.

    Text on either side of a comment or processing instruction is merged, as if
    the skipped node were not there. Whitespace is kept as is, except that
    whitespace-only runs next to child elements are indentation and dropped.
    """
    has_children = any(isinstance(child.tag, str) for child in element)
    texts = []
    buffer = element.text or ""
    for child in element:
        if not isinstance(child.tag, str):
            buffer += child.tail or ""
            continue
        if buffer and not (has_children and buffer.isspace()):
            texts.append(buffer)
        buffer = child.tail or ""
    if buffer and not (has_children and buffer.isspace()):
        texts.append(buffer)
    return texts


def match_children(control: list[ET._Element], test: list[ET._Element]) -> dict[int, int]:
    """
    Pair child elements by name rather than by position.

    A control child is paired with the first unpaired test child that has the
    same qualified name; children still unpaired are then paired by local name
    alone, so a namespace mismatch is reported on the pair instead of as a
    missing and an unexpected child.

    Returns:
        Mapping of control index to test index
    """
    pairs: dict[int, int] = {}
    used: set[int] = set()

    for key in (lambda e: e.tag, lambda e: ET.QName(e).localname):
        candidates: dict[str, list[int]] = {}
        for j, element in enumerate(test):
            if j not in used:
                candidates.setdefault(key(element), []).append(j)

        for i, element in enumerate(control):
            if i in pairs:
                continue
            indices = candidates.get(key(element))
            if indices:
                j = indices.pop(0)
                pairs[i] = j
                used.add(j)

    return pairs


def _child_xpaths(parent_xpath: str, children: list[ET._Element]) -> list[str]:
    counts: dict[str, int] = {}
    paths = []
    for child in children:
        name = ET.QName(child).localname
        counts[name] = counts.get(name, 0) + 1
        paths.append(f"{parent_xpath}/{name}[{counts[name]}]")
    return paths


def _attribute_xpath(element_xpath: str, name: str) -> str:
    qname = ET.QName(name)
    return f"{element_xpath}/@{qname.localname}"


class Differ:
    """
    Walks two element trees and classifies every comparison.

    Handles:
    - Element names, namespace URIs and namespace prefixes
    - Attributes as an unordered set (missing, extra, different value)
    - Text content, compared verbatim
    - Child elements paired by name, in any order
    """

    def __init__(
        self,
        evaluator: DifferenceEvaluator,
        formatter: Any = None,
        fail_fast: bool = False
    ):
        self.evaluator = evaluator
        self.formatter = formatter
        self.fail_fast = fail_fast

        self.diff = Diff()
        self._aborted = False

    def diff_elements(
        self,
        control: ET._Element,
        test: ET._Element,
        control_xpath: Optional[str] = None,
        test_xpath: Optional[str] = None
    ) -> bool:
        """
        Compare two elements and everything below them.

        Args:
            control: Element from the expected tree
            test: Element from the actual tree
            control_xpath: Location of the control element
            test_xpath: Location of the test element

        Returns:
            True if no DIFFERENT outcome was recorded for this subtree
        """
        if self._aborted:
            return False

        control_name = ET.QName(control)
        test_name = ET.QName(test)
        if control_xpath is None:
            control_xpath = f"/{control_name.localname}[1]"
        if test_xpath is None:
            test_xpath = f"/{test_name.localname}[1]"

        before = len(self.diff.differences)

        self._compare(ComparisonType.ELEMENT_TAG_NAME,
                      control, control_xpath, control_name.localname,
                      test, test_xpath, test_name.localname)
        self._compare(ComparisonType.NAMESPACE_URI,
                      control, control_xpath, control_name.namespace,
                      test, test_xpath, test_name.namespace)
        self._compare(ComparisonType.NAMESPACE_PREFIX,
                      control, control_xpath, control.prefix,
                      test, test_xpath, test.prefix)

        self._diff_attributes(control, test, control_xpath, test_xpath)
        self._diff_text(control, test, control_xpath, test_xpath)
        self._diff_children(control, test, control_xpath, test_xpath)

        return len(self.diff.differences) == before

    def _diff_attributes(
        self,
        control: ET._Element,
        test: ET._Element,
        control_xpath: str,
        test_xpath: str
    ):
        """Compare attributes keyed by qualified name; namespace declarations are not attributes."""
        for name, value in control.attrib.items():
            if self._aborted:
                return

            control_node = AttributeNode(control, name)
            control_path = _attribute_xpath(control_xpath, name)
            schema_type = _SCHEMA_LOCATION_TYPES.get(name)

            if name not in test.attrib:
                self._compare(schema_type or ComparisonType.ATTR_MISSING,
                              control_node, control_path, value if schema_type else name,
                              None, None, None)
                continue

            self._compare(schema_type or ComparisonType.ATTR_VALUE,
                          control_node, control_path, value,
                          AttributeNode(test, name), _attribute_xpath(test_xpath, name), test.get(name))

        for name, value in test.attrib.items():
            if self._aborted:
                return
            if name in control.attrib:
                continue

            schema_type = _SCHEMA_LOCATION_TYPES.get(name)
            self._compare(schema_type or ComparisonType.ATTR_EXTRA,
                          None, None, None,
                          AttributeNode(test, name), _attribute_xpath(test_xpath, name),
                          value if schema_type else name)

    def _diff_text(
        self,
        control: ET._Element,
        test: ET._Element,
        control_xpath: str,
        test_xpath: str
    ):
        """Compare text nodes pairwise in document order."""
        control_texts = text_nodes(control)
        test_texts = text_nodes(test)

        for i in range(max(len(control_texts), len(test_texts))):
            if self._aborted:
                return

            control_value = control_texts[i] if i < len(control_texts) else None
            test_value = test_texts[i] if i < len(test_texts) else None

            self._compare(
                ComparisonType.TEXT_VALUE,
                TextNode(control, control_value) if control_value is not None else None,
                f"{control_xpath}/text()[{i + 1}]" if control_value is not None else None,
                control_value,
                TextNode(test, test_value) if test_value is not None else None,
                f"{test_xpath}/text()[{i + 1}]" if test_value is not None else None,
                test_value
            )

    def _diff_children(
        self,
        control: ET._Element,
        test: ET._Element,
        control_xpath: str,
        test_xpath: str
    ):
        """Pair child elements by name, report unpaired ones, then recurse."""
        control_children = child_elements(control)
        test_children = child_elements(test)
        control_paths = _child_xpaths(control_xpath, control_children)
        test_paths = _child_xpaths(test_xpath, test_children)

        pairs = match_children(control_children, test_children)

        for i, child in enumerate(control_children):
            if self._aborted:
                return

            j = pairs.get(i)
            if j is None:
                self._compare(ComparisonType.CHILD_LOOKUP,
                              child, control_paths[i], ET.QName(child).localname,
                              None, None, None)
            elif i != j:
                self._compare(ComparisonType.CHILD_SEQUENCE,
                              child, control_paths[i], i,
                              test_children[j], test_paths[j], j)

        paired = set(pairs.values())
        for j, child in enumerate(test_children):
            if self._aborted:
                return
            if j not in paired:
                self._compare(ComparisonType.CHILD_LOOKUP,
                              None, None, None,
                              child, test_paths[j], ET.QName(child).localname)

        for i, j in sorted(pairs.items()):
            if self._aborted:
                return
            self.diff_elements(control_children[i], test_children[j], control_paths[i], test_paths[j])

    def _compare(
        self,
        comparison_type: ComparisonType,
        control_node: Any,
        control_xpath: Optional[str],
        control_value: Any,
        test_node: Any,
        test_xpath: Optional[str],
        test_value: Any
    ) -> ComparisonResult:
        """Evaluate one comparison and record it unless it is EQUAL."""
        comparison = Comparison(
            type=comparison_type,
            control=NodeDetail(control_node, control_xpath, control_value),
            test=NodeDetail(test_node, test_xpath, test_value)
        )

        outcome = ComparisonResult.EQUAL if control_value == test_value else ComparisonResult.DIFFERENT
        outcome = self.evaluator(comparison, outcome)
        self.diff.comparisons_made += 1

        if outcome == ComparisonResult.DIFFERENT:
            self.diff.differences.append(Difference(comparison, outcome, self.formatter))
            if self.fail_fast:
                self._aborted = True
        elif outcome == ComparisonResult.SIMILAR:
            self.diff.similarities.append(Difference(comparison, outcome, self.formatter))

        return outcome
