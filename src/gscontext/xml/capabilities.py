"""Reduction of service capability documents to their filter section."""

from __future__ import annotations

from lxml import etree

from gscontext.common.exceptions import XMLParseError
from gscontext.logging_setup import get_logger

from .parser_factory import parse_xml
from .transform import DEFAULT_INDENT, serialize_document

FILTER_CAPABILITIES = "Filter_Capabilities"

logger = get_logger(__name__)


def _remove_keeping_tail(node: etree._Element) -> None:
    # lxml keeps the text following a node in its tail, hand it to the
    # previous sibling (or the parent) so removing the node keeps the text.
    parent = node.getparent()
    if node.tail:
        previous = node.getprevious()
        if previous is not None:
            previous.tail = (previous.tail or "") + node.tail
        else:
            parent.text = (parent.text or "") + node.tail
    parent.remove(node)


def remove_all_but_filter(xml_text: str, *, indent: int = DEFAULT_INDENT) -> str:
    """Strip every root child except ``Filter_Capabilities`` elements and text.

    Comments directly under the root are removed as well. The result is
    re-serialized with indentation. Input that cannot be parsed or serialized
    is returned unchanged.
    """
    try:
        tree = parse_xml(xml_text, remove_blank_text=True)
        root = tree.getroot()
        for child in list(root):
            if isinstance(child, etree._Comment):
                _remove_keeping_tail(child)
            elif isinstance(child.tag, str) and etree.QName(child).localname != FILTER_CAPABILITIES:
                _remove_keeping_tail(child)
        return serialize_document(tree, indent=indent)
    except XMLParseError as exc:
        logger.debug("filter_capabilities_fallback", error=str(exc))
        return xml_text


__all__ = ["FILTER_CAPABILITIES", "remove_all_but_filter"]
