"""Data models for the xmlequiv comparison engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional


class ComparisonType(Enum):
    ELEMENT_TAG_NAME = "ELEMENT_TAG_NAME"
    NAMESPACE_URI = "NAMESPACE_URI"
    NAMESPACE_PREFIX = "NAMESPACE_PREFIX"
    ATTR_VALUE = "ATTR_VALUE"
    ATTR_MISSING = "ATTR_MISSING"
    ATTR_EXTRA = "ATTR_EXTRA"
    SCHEMA_LOCATION = "SCHEMA_LOCATION"
    NO_NAMESPACE_SCHEMA_LOCATION = "NO_NAMESPACE_SCHEMA_LOCATION"
    TEXT_VALUE = "TEXT_VALUE"
    CHILD_SEQUENCE = "CHILD_SEQUENCE"
    CHILD_LOOKUP = "CHILD_LOOKUP"


class ComparisonResult(Enum):
    EQUAL = "EQUAL"
    SIMILAR = "SIMILAR"
    DIFFERENT = "DIFFERENT"


@dataclass(frozen=True)
class NodeDetail:
    """One side of a comparison: the node, where it lives and the compared value."""
    node: Any
    xpath: Optional[str]
    value: Any

    def to_dict(self) -> dict:
        return {
            "xpath": self.xpath,
            "value": self.value,
        }


@dataclass(frozen=True)
class Comparison:
    """A single check made while walking the expected (control) and actual (test) trees."""
    type: ComparisonType
    control: NodeDetail
    test: NodeDetail

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "control": self.control.to_dict(),
            "test": self.test.to_dict(),
        }


@dataclass
class Difference:
    """A comparison whose outcome was not EQUAL."""
    comparison: Comparison
    result: ComparisonResult
    formatter: Any = field(default=None, repr=False, compare=False)

    def to_string(self, formatter=None) -> str:
        if formatter is None:
            formatter = self.formatter
        if formatter is None:
            from .formatting import DefaultComparisonFormatter
            formatter = DefaultComparisonFormatter()
        return f"{formatter.get_description(self.comparison)} ({self.result.value})"

    def __str__(self) -> str:
        return self.to_string()

    def to_dict(self) -> dict:
        result = self.comparison.to_dict()
        result["result"] = self.result.value
        result["message"] = self.to_string()
        return result


@dataclass
class Diff:
    """Complete result of comparing two XML trees."""
    differences: list[Difference] = field(default_factory=list)
    similarities: list[Difference] = field(default_factory=list)
    comparisons_made: int = 0

    def has_differences(self) -> bool:
        return len(self.differences) > 0

    @property
    def is_equivalent(self) -> bool:
        return not self.has_differences()

    def report(self, separator: str = ".\n") -> str:
        """Join every difference into one multi-line report."""
        return separator.join(str(d) for d in self.differences)

    def __str__(self) -> str:
        if not self.has_differences():
            return "[identical]"
        return self.report()

    def to_dict(self) -> dict:
        return {
            "is_equivalent": self.is_equivalent,
            "comparisons_made": self.comparisons_made,
            "differences": [d.to_dict() for d in self.differences],
            "similarities": [s.to_dict() for s in self.similarities],
        }


DifferenceEvaluator = Callable[[Comparison, ComparisonResult], ComparisonResult]


@dataclass
class ComparatorConfig:
    """Configuration for the comparison engine."""
    ignore_element_tag_names: bool = False
    fail_fast: bool = False
    evaluators: list[DifferenceEvaluator] = field(default_factory=list)


@dataclass(frozen=True)
class TextNode:
    """A run of character data inside an element, with comments removed."""
    owner: Any
    value: str


@dataclass(frozen=True)
class AttributeNode:
    """An attribute of an element, addressed by its qualified name."""
    owner: Any
    name: str
