"""
xmlequiv - Semantic XML Equivalence Checker for Test Suites

Decides whether an expected and an actual XML document carry the same
content, ignoring child element order, namespace prefixes and comments, and
reports every difference when they do not.
"""

from .comparator import XmlComparator, compare
from .models import (
    ComparatorConfig,
    Comparison,
    ComparisonResult,
    ComparisonType,
    Diff,
    Difference,
    NodeDetail,
)
from .evaluators import (
    chain,
    default_evaluator,
    downgrade,
    ignore_element_tag_name_differences,
)
from .formatting import ComparisonFormatter, DefaultComparisonFormatter
from .xml_filter import XmlFilter
from .tester import XmlTester
from .mapping import MappingXmlTester
from .events import XmlChangedEvent, XmlChangedEventArgs
from .logger import SimpleLogger, ConsoleLogger, StandardLogger
from .asserter import LogAsserter, RaisingLogAsserter
from .serialization import XmlOverrides, serialise_to_xml
from .config import TesterSettings, load_config
from .exceptions import (
    XmlEquivError,
    InvalidArgumentError,
    InvalidOperationError,
    FilterExpressionError,
    XmlAssertionError,
    ConfigError,
)

__version__ = "1.0.0"
__all__ = [
    # Engine
    "XmlComparator",
    "compare",
    "ComparatorConfig",
    # Differences
    "Comparison",
    "ComparisonResult",
    "ComparisonType",
    "Diff",
    "Difference",
    "NodeDetail",
    # Evaluators
    "chain",
    "default_evaluator",
    "downgrade",
    "ignore_element_tag_name_differences",
    # Formatting
    "ComparisonFormatter",
    "DefaultComparisonFormatter",
    # Filtering
    "XmlFilter",
    # Testers
    "XmlTester",
    "MappingXmlTester",
    "XmlChangedEvent",
    "XmlChangedEventArgs",
    # Collaborators
    "SimpleLogger",
    "ConsoleLogger",
    "StandardLogger",
    "LogAsserter",
    "RaisingLogAsserter",
    "XmlOverrides",
    "serialise_to_xml",
    # Configuration
    "TesterSettings",
    "load_config",
    # Errors
    "XmlEquivError",
    "InvalidArgumentError",
    "InvalidOperationError",
    "FilterExpressionError",
    "XmlAssertionError",
    "ConfigError",
]
