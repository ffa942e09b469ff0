"""Conversion between XML text and lxml element trees."""

from typing import Optional, Union

import lxml.etree as ET


def _parser(encoding: Optional[str] = None) -> ET.XMLParser:
    # comments are kept so that the comparator, not the parser, decides to skip them
    return ET.XMLParser(
        encoding=encoding,
        remove_blank_text=True,
        remove_comments=False,
        strip_cdata=True,
    )


def to_element(xml: Union[str, bytes]) -> ET._Element:
    """
    Parses XML text into an element tree.

    Whitespace-only text between elements (indentation) is dropped; whitespace
    inside text values is kept.

    :param xml: XML document as a string or as encoded bytes.
    :returns: The root element of the document.
    :raises lxml.etree.XMLSyntaxError: The text is not well-formed XML.
    """

    if isinstance(xml, str):
        # text is already decoded, so any encoding declaration is overridden
        return ET.fromstring(xml.encode("utf-8"), _parser("utf-8"))
    return ET.fromstring(xml, _parser())


def to_string(element: ET._Element, *, pretty_print: bool = False) -> str:
    "Serializes an element tree (without its tail) as a Unicode string."

    return ET.tostring(element, encoding="unicode", pretty_print=pretty_print, with_tail=False)


def clone(element: ET._Element) -> ET._Element:
    "Copies an element by serializing and re-parsing it, detaching it from its original document."

    return to_element(to_string(element))
