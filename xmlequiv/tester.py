"""Orchestrator that holds the documents under test and asserts their equivalence."""

from __future__ import annotations

from types import ModuleType
from typing import Any, Optional, Union

import lxml.etree as ET

from .asserter import LogAsserter
from .comparator import XmlComparator
from .events import XmlChangedEvent
from .exceptions import InvalidArgumentError, InvalidOperationError
from .formatting import ComparisonFormatter, DefaultComparisonFormatter
from .logger import ConsoleLogger, SimpleLogger
from .models import ComparatorConfig, Diff
from .resources import get_as_string
from .serialization import XmlOverrides, serialise_to_xml
from .xml_filter import XmlFilter
from .xmlutils import clone, to_element, to_string

_UNSET = object()


def arrange_xml(xml: Any, argument: str = "xml") -> ET._Element:
    """
    Turn XML text or an element into a detached element tree.

    Elements are cloned by serializing and re-parsing them, so later changes to
    the caller's tree do not affect the arranged document.
    """
    if xml is None:
        raise InvalidArgumentError(argument)
    if isinstance(xml, ET._ElementTree):
        xml = xml.getroot()
    if isinstance(xml, ET._Element):
        return clone(xml)
    if isinstance(xml, (str, bytes)):
        return to_element(xml)
    raise TypeError(f"{argument} must be XML text or an lxml element, not {type(xml).__name__}")


def _as_tree(xml: Any, argument: str) -> ET._Element:
    if xml is None or xml is _UNSET:
        raise InvalidArgumentError(argument)
    if isinstance(xml, (str, bytes)):
        return to_element(xml)
    if isinstance(xml, ET._ElementTree):
        return xml.getroot()
    return xml


class XmlTester:
    """
    Helper for testing differences between an expected and an actual XML document.

    Usage:
        tester = XmlTester(RaisingLogAsserter())
        tester.set_expected("<a><b>hi</b><c>c</c></a>")
        tester.set_actual("<a><c>c</c><b>hi</b></a>")
        tester.assert_equivalent()

    Setting a document fires the matching change event. When nobody has
    subscribed to that event, the tester logs the new document itself.
    """

    ASSERTION_LABEL = "The XML is as expected"

    def __init__(
        self,
        asserter: LogAsserter,
        logger: Optional[SimpleLogger] = None,
        formatter: Optional[ComparisonFormatter] = None,
        config: Optional[ComparatorConfig] = None
    ):
        """
        Initialize the tester.

        Args:
            asserter: Assertion sink deciding how a failed assertion is surfaced
            logger: Logger for narration (prints to the console if not provided)
            formatter: Formatter used when rendering differences
            config: Comparator configuration
        """
        if asserter is None:
            raise InvalidArgumentError("asserter")

        self.asserter = asserter
        self.logger = logger or ConsoleLogger()
        self.formatter = formatter or DefaultComparisonFormatter()
        self.comparator = XmlComparator(config, self.formatter)

        self.expected_xml_changed = XmlChangedEvent()
        self.actual_xml_changed = XmlChangedEvent()

        self._expected_xml: Optional[ET._Element] = None
        self._actual_xml: Optional[ET._Element] = None
        self._differences: Optional[Diff] = None

    @property
    def expected_xml(self) -> Optional[ET._Element]:
        return self._expected_xml

    @property
    def actual_xml(self) -> Optional[ET._Element]:
        return self._actual_xml

    @property
    def differences(self) -> Optional[Diff]:
        """Differences found by the most recent comparison."""
        return self._differences

    # Arrange expected XML

    def set_expected(self, xml: Union[str, bytes, ET._Element]):
        self._expected_xml = arrange_xml(xml)
        self.on_expected_xml_changed(self._expected_xml)

    def set_expected_from_resource(self, package: Union[str, ModuleType], resource_name: str):
        self.set_expected(get_as_string(package, resource_name))

    def set_expected_from_object(
        self,
        value: Any,
        root_name: Optional[str] = None,
        overrides_key: Optional[str] = None,
        overrides: Optional[XmlOverrides] = None
    ):
        if value is None:
            raise InvalidArgumentError("value")
        self.set_expected(serialise_to_xml(value, root_name, overrides_key, overrides))

    # Arrange actual XML

    def set_actual(self, xml: Union[str, bytes, ET._Element]):
        self._actual_xml = arrange_xml(xml)
        self.on_actual_xml_changed(self._actual_xml)

    def set_actual_from_resource(self, package: Union[str, ModuleType], resource_name: str):
        self.set_actual(get_as_string(package, resource_name))

    def set_actual_from_object(
        self,
        value: Any,
        root_name: Optional[str] = None,
        overrides_key: Optional[str] = None,
        overrides: Optional[XmlOverrides] = None
    ):
        if value is None:
            raise InvalidArgumentError("value")
        self.set_actual(serialise_to_xml(value, root_name, overrides_key, overrides))

    # Comparison

    def is_equivalent(self, expected: Any = _UNSET, actual: Any = _UNSET) -> bool:
        """
        Determine whether two XML documents are equivalent.

        Called without arguments, compares the arranged expected and actual
        documents. Called with two arguments (trees or XML text), compares
        those instead and leaves the arranged documents alone.

        Returns:
            True if no differences were found
        """
        if expected is _UNSET and actual is _UNSET:
            if self._expected_xml is None:
                raise InvalidOperationError("The expected XML must be arranged before calling is_equivalent()")
            if self._actual_xml is None:
                raise InvalidOperationError("The actual XML must be arranged before calling is_equivalent()")
            expected, actual = self._expected_xml, self._actual_xml
        else:
            expected = _as_tree(expected, "expected")
            actual = _as_tree(actual, "actual")

        self._differences = self.comparator.compare(expected, actual)
        return self._differences.is_equivalent

    def assert_equivalent(self, xml_filter: Optional[XmlFilter] = None):
        """
        Assert the actual XML against the expected XML.

        Args:
            xml_filter: Filter applied to copies of both documents to ignore
                the elements it selects
        """
        self.logger.log("Asserting actual and expected XML are equal")

        expected = self._expected_xml
        actual = self._actual_xml

        if expected is None:
            raise InvalidOperationError("The expected XML must be arranged before calling assert_equivalent()")
        if actual is None:
            raise InvalidOperationError("The actual XML must be arranged before calling assert_equivalent()")

        if xml_filter is not None and xml_filter.has_filters():
            self.logger.log(xml_filter.describe())
            expected = xml_filter.apply_filter_to(expected)
            actual = xml_filter.apply_filter_to(actual)

        is_equal = self.is_equivalent(expected, actual)
        if not is_equal:
            self.logger.log("The differences are: \n" + self._differences.report())

        self.asserter.is_true(self.ASSERTION_LABEL, is_equal)
        self.logger.log(self.ASSERTION_LABEL)

    # Change notification

    def on_expected_xml_changed(self, xml: Optional[ET._Element]):
        if self.expected_xml_changed:
            self.expected_xml_changed.fire(self, xml)
        else:
            # subscribers are expected to log with more context themselves
            self.logger.log()
            self.logger.log(f"The expected XML is: \n{_describe(xml)}")

    def on_actual_xml_changed(self, xml: Optional[ET._Element]):
        if self.actual_xml_changed:
            self.actual_xml_changed.fire(self, xml)
        else:
            self.logger.log()
            self.logger.log(f"The actual XML is: \n{_describe(xml)}")


def _describe(xml: Optional[ET._Element]) -> str:
    return to_string(xml) if xml is not None else ""
