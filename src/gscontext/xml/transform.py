"""Re-serialization of XML documents with indentation."""

from __future__ import annotations

from lxml import etree

from gscontext.common.exceptions import EmptyInputError, XMLParseError

from .parser_factory import parse_xml

DEFAULT_INDENT = 2
DEFAULT_ENCODING = "UTF-8"
XML_DECLARATION = f'<?xml version="1.0" encoding="{DEFAULT_ENCODING}"?>'


def serialize_document(tree: etree._ElementTree | etree._Element, *, indent: int | None = DEFAULT_INDENT) -> str:
    """Serialize a tree as XML text preceded by a UTF-8 XML declaration.

    With ``indent`` set, whitespace-only text between elements is replaced
    so nested elements start on their own line, ``indent`` spaces per level.
    Text content is never altered.
    """
    if isinstance(tree, etree._Element):
        tree = tree.getroottree()
    try:
        if indent is not None:
            etree.indent(tree, space=" " * indent)
        body = etree.tostring(tree, encoding="unicode", pretty_print=indent is not None)
    except (TypeError, ValueError) as exc:
        raise XMLParseError(f"Unable to serialize XML: {exc}", cause=exc) from exc
    return XML_DECLARATION + body


def indent_xml(xml_text: str | None, *, indent: int = DEFAULT_INDENT) -> str | None:
    """Return ``xml_text`` re-serialized with indentation.

    Raises:
        EmptyInputError: If the text is missing, empty or whitespace only.
        XMLParseError: If the text is not well-formed XML.
    """
    if xml_text is not None:
        xml_text = xml_text.strip()
    if not xml_text:
        raise EmptyInputError("Empty XML.", operation="indent")

    tree = parse_xml(xml_text, remove_blank_text=True)
    value = serialize_document(tree, indent=indent).strip()

    if value.startswith(XML_DECLARATION + "<"):
        value = value.replace(XML_DECLARATION, XML_DECLARATION + "\r\n", 1)
    if not value:
        return None
    return value


__all__ = ["DEFAULT_ENCODING", "DEFAULT_INDENT", "XML_DECLARATION", "indent_xml", "serialize_document"]
