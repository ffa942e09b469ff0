"""Serialization of structured objects (dataclasses, attrs classes, mappings) into XML text."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Optional

import cattrs
import lxml.etree as ET

LOGGER = logging.getLogger(__name__)

_converter = cattrs.Converter()


@dataclass(frozen=True)
class XmlOverrides:
    """
    Controls how object fields map to XML.

    :param attributes: Fields rendered as XML attributes instead of child elements.
    :param renames: Field name to element or attribute name.
    :param ignore: Fields left out of the output.
    :param namespace: Namespace URI given to every element.
    """

    attributes: frozenset[str] = field(default_factory=frozenset)
    renames: dict[str, str] = field(default_factory=dict)
    ignore: frozenset[str] = field(default_factory=frozenset)
    namespace: Optional[str] = None


class XmlSerializer:
    "Renders unstructured object data as an element tree."

    overrides: XmlOverrides

    def __init__(self, overrides: Optional[XmlOverrides] = None) -> None:
        self.overrides = overrides or XmlOverrides()

    def serialize(self, value: Any, root_name: Optional[str] = None) -> ET._Element:
        if root_name is None:
            root_name = type(value).__name__
        return self._element(root_name, _converter.unstructure(value))

    def _tag(self, name: str) -> str:
        if self.overrides.namespace:
            return ET.QName(self.overrides.namespace, name).text
        return name

    def _element(self, name: str, data: Any) -> ET._Element:
        element = ET.Element(self._tag(name))

        if isinstance(data, dict):
            for key, item in data.items():
                key = str(key)
                if key in self.overrides.ignore or item is None:
                    continue
                child_name = self.overrides.renames.get(key, key)
                if key in self.overrides.attributes:
                    element.set(child_name, _text(item))
                elif isinstance(item, (list, tuple)):
                    for entry in item:
                        element.append(self._element(child_name, entry))
                else:
                    element.append(self._element(child_name, item))
        elif isinstance(data, (list, tuple)):
            for entry in data:
                element.append(self._element("item", entry))
        elif data is not None:
            element.text = _text(data)

        return element


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


# serializers built with overrides, keyed by a caller-supplied equality key
_serializers: dict[str, XmlSerializer] = {}


def get_serializer(overrides_key: Optional[str] = None, overrides: Optional[XmlOverrides] = None) -> XmlSerializer:
    """
    Returns a serializer for the given overrides.

    When a key is given, the serializer created for the first call with that key
    is reused by later calls. The overrides of the first call win: later calls
    passing different overrides under the same key get the cached serializer,
    and a warning is logged. Cached serializers are kept for the life of the
    process.
    """

    if overrides_key is None:
        return XmlSerializer(overrides)
    serializer = _serializers.get(overrides_key)
    if serializer is None:
        serializer = XmlSerializer(overrides)
        _serializers[overrides_key] = serializer
    elif overrides is not None and overrides != serializer.overrides:
        LOGGER.warning("Ignoring overrides for cached serializer key: %s", overrides_key)
    return serializer


def serialise_to_xml(
    value: Any,
    root_name: Optional[str] = None,
    overrides_key: Optional[str] = None,
    overrides: Optional[XmlOverrides] = None,
) -> str:
    """
    Converts a structured object to XML text.

    :param value: Dataclass, attrs class, mapping or list to serialize.
    :param root_name: Name of the root element; defaults to the class name of the value.
    :param overrides_key: Cache key identifying the overrides.
    :param overrides: Field mapping overrides.
    :returns: XML document as a string.
    """

    element = get_serializer(overrides_key, overrides).serialize(value, root_name)
    return ET.tostring(element, encoding="unicode")
