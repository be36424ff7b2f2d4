"""Secure XML parsing, indentation and XPath querying built on lxml.etree."""

from .capabilities import FILTER_CAPABILITIES, remove_all_but_filter
from .document import XmlInfo, new_xml_info
from .namespaces import CSW_NS, OGC_NS, NamespaceContext
from .parser_factory import make_xml_parser, parse_xml
from .selectors import BREAK, AttributeNode, ChildVisit, NodeInfo, TextNode, XPathEvaluator, make_evaluator
from .transform import indent_xml, serialize_document

__all__ = [
    # Parsing and serialization
    "make_xml_parser",
    "parse_xml",
    "indent_xml",
    "serialize_document",
    "remove_all_but_filter",
    "FILTER_CAPABILITIES",
    # Documents and XPath
    "XmlInfo",
    "new_xml_info",
    "make_evaluator",
    "XPathEvaluator",
    "NodeInfo",
    "ChildVisit",
    "AttributeNode",
    "TextNode",
    "BREAK",
    # Namespaces
    "NamespaceContext",
    "OGC_NS",
    "CSW_NS",
]
