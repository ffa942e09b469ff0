"""Difference evaluators: policies that reclassify the outcome of a comparison."""

from __future__ import annotations

from .models import Comparison, ComparisonResult, ComparisonType, DifferenceEvaluator


# Differences that do not change the meaning of a document
_SIMILAR_TYPES = frozenset({
    ComparisonType.NAMESPACE_PREFIX,
    ComparisonType.CHILD_SEQUENCE,
    ComparisonType.SCHEMA_LOCATION,
    ComparisonType.NO_NAMESPACE_SCHEMA_LOCATION,
})


def default_evaluator(comparison: Comparison, outcome: ComparisonResult) -> ComparisonResult:
    """
    Downgrade cosmetic differences to SIMILAR.

    Namespace prefix spelling, child order and schema location hints do not
    affect equivalence.
    """
    if outcome == ComparisonResult.DIFFERENT and comparison.type in _SIMILAR_TYPES:
        return ComparisonResult.SIMILAR
    return outcome


def ignore_element_tag_name_differences(comparison: Comparison, outcome: ComparisonResult) -> ComparisonResult:
    """
    Treat elements paired with each other as similar even when their local names differ.

    Only ELEMENT_TAG_NAME comparisons are affected; the namespace, attributes,
    text and children of the two elements are still compared.
    """
    if outcome == ComparisonResult.DIFFERENT and comparison.type == ComparisonType.ELEMENT_TAG_NAME:
        return ComparisonResult.SIMILAR
    return outcome


def downgrade(*comparison_types: ComparisonType) -> DifferenceEvaluator:
    """Build an evaluator that downgrades the given comparison types to SIMILAR."""
    types = frozenset(comparison_types)

    def evaluate(comparison: Comparison, outcome: ComparisonResult) -> ComparisonResult:
        if outcome == ComparisonResult.DIFFERENT and comparison.type in types:
            return ComparisonResult.SIMILAR
        return outcome

    return evaluate


def chain(*evaluators: DifferenceEvaluator) -> DifferenceEvaluator:
    """
    Compose evaluators left to right.

    Each evaluator receives the outcome produced by the one before it.
    """
    def evaluate(comparison: Comparison, outcome: ComparisonResult) -> ComparisonResult:
        for evaluator in evaluators:
            outcome = evaluator(comparison, outcome)
        return outcome

    return evaluate
