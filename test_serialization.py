"""Tests for serialising objects to XML."""

import enum
import logging
from dataclasses import dataclass, field
from typing import Optional

import lxml.etree as ET

from xmlequiv.serialization import XmlOverrides, XmlSerializer, get_serializer, serialise_to_xml
from xmlequiv.xmlutils import to_element


class Status(enum.Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass
class Line:
    sku: str
    quantity: int


@dataclass
class Order:
    id: str
    paid: bool
    lines: list[Line] = field(default_factory=list)
    note: Optional[str] = None


@dataclass
class Ticket:
    id: int
    status: Status


class TestSerialiseToXml:
    """Test the default field mapping."""

    def test_dataclass(self):
        """Test that fields become child elements and lists repeat the element."""
        order = Order("o1", True, [Line("a", 1), Line("b", 2)])

        assert serialise_to_xml(order) == (
            "<Order><id>o1</id><paid>true</paid>"
            "<lines><sku>a</sku><quantity>1</quantity></lines>"
            "<lines><sku>b</sku><quantity>2</quantity></lines>"
            "</Order>"
        )

    def test_none_skipped(self):
        assert serialise_to_xml(Order("o1", False)) == "<Order><id>o1</id><paid>false</paid></Order>"

    def test_enum_value(self):
        assert serialise_to_xml(Ticket(3, Status.CLOSED)) == "<Ticket><id>3</id><status>closed</status></Ticket>"

    def test_root_name(self):
        xml = serialise_to_xml({"name": "Ada"}, root_name="customer")
        assert xml == "<customer><name>Ada</name></customer>"

    def test_bare_list(self):
        assert serialise_to_xml(["x", "y"], root_name="values") == "<values><item>x</item><item>y</item></values>"


class TestOverrides:
    """Test customised field mapping."""

    def test_attributes_and_renames(self):
        overrides = XmlOverrides(attributes=frozenset({"id"}), renames={"quantity": "qty"}, ignore=frozenset({"paid"}))
        order = Order("o1", True, [Line("a", 1)])

        assert serialise_to_xml(order, overrides=overrides) == (
            '<Order id="o1"><lines><sku>a</sku><qty>1</qty></lines></Order>'
        )

    def test_namespace(self):
        """Test that every element is placed in the override namespace."""
        overrides = XmlOverrides(namespace="urn:orders")
        element = to_element(serialise_to_xml(Line("a", 1), overrides=overrides))

        assert ET.QName(element).namespace == "urn:orders"
        assert [ET.QName(child).namespace for child in element] == ["urn:orders", "urn:orders"]

    def test_serializer_cached_by_key(self):
        """Test that a key returns the serializer built for its first use."""
        first = get_serializer("test-serializer-cached", XmlOverrides(attributes=frozenset({"sku"})))
        second = get_serializer("test-serializer-cached", XmlOverrides())

        assert first is second
        assert serialise_to_xml(Line("a", 1), overrides_key="test-serializer-cached") == (
            '<Line sku="a"><quantity>1</quantity></Line>'
        )

    def test_conflicting_overrides_warn(self, caplog):
        """Test that different overrides under a reused key are reported and ignored."""
        first = get_serializer("test-conflicting-overrides", XmlOverrides(attributes=frozenset({"sku"})))
        with caplog.at_level(logging.WARNING, logger="xmlequiv.serialization"):
            same = get_serializer("test-conflicting-overrides", XmlOverrides(attributes=frozenset({"sku"})))
            assert caplog.records == []
            other = get_serializer("test-conflicting-overrides", XmlOverrides(namespace="urn:x"))

        assert same is first
        assert other is first
        assert [r.getMessage() for r in caplog.records] == [
            "Ignoring overrides for cached serializer key: test-conflicting-overrides"
        ]

    def test_no_key_not_cached(self):
        assert get_serializer() is not get_serializer()

    def test_serializer_returns_element(self):
        element = XmlSerializer().serialize(Line("a", 1), "line")

        assert element.tag == "line"
        assert element.findtext("sku") == "a"
