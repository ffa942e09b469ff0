"""Tester for mappings that transform an input XML document into an output XML document."""

from __future__ import annotations

from types import ModuleType
from typing import Any, Optional, Union

import lxml.etree as ET

from .exceptions import InvalidArgumentError
from .resources import get_as_string
from .serialization import XmlOverrides, serialise_to_xml
from .tester import XmlTester, arrange_xml
from .xmlutils import to_string


class MappingXmlTester(XmlTester):
    """
    XmlTester with an input document for the mapping under test.

    Usage:
        tester = MappingXmlTester(RaisingLogAsserter())
        tester.set_input(source_xml)
        tester.set_expected(expected_xml)
        tester.set_actual(my_mapping(tester.input_xml))
        tester.assert_equivalent()
    """

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._input_xml: Optional[ET._Element] = None

    @property
    def input_xml(self) -> Optional[ET._Element]:
        return self._input_xml

    def set_input(self, xml: Union[str, bytes, ET._Element]):
        self._input_xml = arrange_xml(xml)
        self.logger.log()
        self.logger.log(f"The input XML for the map is: \n{to_string(self._input_xml)}")

    def set_input_from_resource(self, package: Union[str, ModuleType], resource_name: str):
        self.set_input(get_as_string(package, resource_name))

    def set_input_from_object(
        self,
        value: Any,
        root_name: Optional[str] = None,
        overrides_key: Optional[str] = None,
        overrides: Optional[XmlOverrides] = None
    ):
        if value is None:
            raise InvalidArgumentError("value")
        self.set_input(serialise_to_xml(value, root_name, overrides_key, overrides))
