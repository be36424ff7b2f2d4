"""Parsed document bundles handed to host scripts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from lxml import etree

from .parser_factory import parse_xml
from .selectors import XPathEvaluator, make_evaluator


@dataclass(frozen=True)
class XmlInfo:
    """A parsed document, its root element and an evaluator bound to one namespace map."""

    document: etree._ElementTree
    root: etree._Element
    evaluator: XPathEvaluator


def new_xml_info(xml_text: str, namespace_map: Mapping[str, str] | None = None) -> XmlInfo:
    """Parse ``xml_text`` securely and pair it with a namespace-aware evaluator.

    Raises:
        XMLParseError: If the text is not well-formed XML.
    """
    document = parse_xml(xml_text)
    return XmlInfo(document=document, root=document.getroot(), evaluator=make_evaluator(namespace_map))


__all__ = ["XmlInfo", "new_xml_info"]
