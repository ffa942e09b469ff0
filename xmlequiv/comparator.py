"""Main comparison engine for xmlequiv."""

from __future__ import annotations

from typing import Any, Optional

import lxml.etree as ET

from .differ import Differ
from .evaluators import chain, default_evaluator, ignore_element_tag_name_differences
from .exceptions import InvalidArgumentError
from .formatting import ComparisonFormatter, DefaultComparisonFormatter
from .models import ComparatorConfig, Diff, DifferenceEvaluator


class XmlComparator:
    """
    Decides whether two XML trees are equivalent.

    Equivalence ignores comments, child element order and namespace prefix
    spelling. Namespace URIs, attributes and text (including whitespace) are
    significant. Every divergence is listed in the returned Diff.
    """

    def __init__(
        self,
        config: Optional[ComparatorConfig] = None,
        formatter: Optional[ComparisonFormatter] = None
    ):
        """
        Initialize the comparator.

        Args:
            config: Comparator configuration (uses defaults if not provided)
            formatter: Formatter used when rendering differences
        """
        self.config = config or ComparatorConfig()
        self.formatter = formatter or DefaultComparisonFormatter()
        self.evaluator = self._build_evaluator()

    def _build_evaluator(self) -> DifferenceEvaluator:
        evaluators = [default_evaluator]
        if self.config.ignore_element_tag_names:
            evaluators.append(ignore_element_tag_name_differences)
        evaluators.extend(self.config.evaluators)
        return chain(*evaluators)

    def compare(self, expected: Any, actual: Any) -> Diff:
        """
        Compare the expected tree against the actual tree.

        Args:
            expected: Expected (control) element or element tree
            actual: Actual (test) element or element tree

        Returns:
            Diff listing every difference; empty when the trees are equivalent
        """
        if expected is None:
            raise InvalidArgumentError("expected")
        if actual is None:
            raise InvalidArgumentError("actual")

        differ = Differ(
            evaluator=self.evaluator,
            formatter=self.formatter,
            fail_fast=self.config.fail_fast
        )
        differ.diff_elements(_root(expected), _root(actual))
        return differ.diff

    def is_equivalent(self, expected: Any, actual: Any) -> bool:
        return self.compare(expected, actual).is_equivalent


def _root(tree: Any) -> ET._Element:
    if isinstance(tree, ET._ElementTree):
        return tree.getroot()
    return tree


def compare(
    expected: Any,
    actual: Any,
    config: Optional[ComparatorConfig] = None,
    formatter: Optional[ComparisonFormatter] = None
) -> Diff:
    """
    Convenience function to compare two XML trees.

    Args:
        expected: Expected element or element tree
        actual: Actual element or element tree
        config: Optional comparator configuration
        formatter: Optional difference formatter

    Returns:
        Diff of the two trees
    """
    return XmlComparator(config, formatter).compare(expected, actual)
