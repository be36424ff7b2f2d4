"""Namespace-aware XPath evaluation over lxml trees.

lxml exposes attributes and text as plain (smart) strings rather than
nodes. The evaluator converts them to :class:`AttributeNode` and
:class:`TextNode` views so every query result, child and attribute can be
inspected with the same operations.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from lxml import etree

from gscontext.common.exceptions import XPathError

from .namespaces import NamespaceContext

BREAK = "break"

_XML_NS = "http://www.w3.org/XML/1998/namespace"


@dataclass(frozen=True)
class AttributeNode:
    """Read-only view of an attribute of ``owner``.

    ``name`` uses lxml's ``{uri}local`` notation for namespaced attributes.
    """

    owner: etree._Element = field(repr=False)
    name: str
    value: str


@dataclass(frozen=True)
class TextNode:
    """Read-only view of a text node.

    lxml stores text before the first child in ``owner.text`` and text after
    an element in that element's ``tail``. ``is_tail`` tells which one this is.
    """

    owner: etree._Element = field(repr=False)
    value: str
    is_tail: bool = False

    @property
    def parent(self) -> etree._Element | None:
        return self.owner.getparent() if self.is_tail else self.owner


@dataclass(frozen=True)
class NodeInfo:
    node: Any = field(repr=False)
    qualified_name: str | None
    local_name: str | None
    namespace_uri: str | None
    is_attribute: bool
    is_element: bool
    is_text: bool


@dataclass(frozen=True)
class ChildVisit:
    """Argument passed to :meth:`XPathEvaluator.for_each_child` callbacks."""

    node: Any
    node_info: NodeInfo
    node_text: str | None


def _is_element(node: Any) -> bool:
    return isinstance(node, etree._Element) and isinstance(node.tag, str)


def _wrap(item: Any) -> Any:
    """Turn lxml smart strings into node views, leave nodes untouched."""
    if isinstance(item, etree._ElementUnicodeResult):
        parent = item.getparent()
        if item.is_attribute and parent is not None:
            return AttributeNode(parent, str(item.attrname), str(item))
        if (item.is_text or item.is_tail) and parent is not None:
            return TextNode(parent, str(item), is_tail=bool(item.is_tail))
        return str(item)
    return item


def _format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == int(value):
        return str(int(value))
    return repr(value)


def _string_value(node: Any) -> str:
    if isinstance(node, (AttributeNode, TextNode)):
        return node.value
    if isinstance(node, etree._ElementTree):
        node = node.getroot()
    if _is_element(node):
        return str(node.xpath("string()"))
    if isinstance(node, etree._Element):
        return node.text or ""
    return str(node)


def _prefix_for(element: etree._Element, uri: str) -> str | None:
    if uri == _XML_NS:
        return "xml"
    for prefix, bound in element.nsmap.items():
        if prefix is not None and bound == uri:
            return prefix
    return None


class XPathEvaluator:
    """Query helpers bound to one namespace context for their whole lifetime.

    Queries run from an element or a document. ``AttributeNode`` and
    ``TextNode`` views cannot be a query context; query from their
    ``owner`` (or ``parent``) element instead.
    """

    def __init__(self, namespace_context: NamespaceContext) -> None:
        self._namespace_context = namespace_context
        self._namespaces = namespace_context.xpath_namespaces()

    @property
    def namespace_context(self) -> NamespaceContext:
        return self._namespace_context

    def _evaluate(self, context: Any, expression: str) -> Any:
        if not isinstance(context, (etree._Element, etree._ElementTree)):
            raise XPathError(f"Unsupported XPath context: {type(context).__name__} (use an element or document)", xpath=expression)
        try:
            return context.xpath(expression, namespaces=self._namespaces)
        except etree.XPathError as exc:
            raise XPathError(f"XPath evaluation failed for {expression!r}: {exc}", xpath=expression, cause=exc) from exc

    def query_node(self, context: Any, expression: str) -> Any:
        """Return the first node selected by ``expression`` or ``None``.

        Raises:
            XPathError: If ``context`` is not an element or document, or the
                expression is invalid or does not select nodes.
        """
        result = self._evaluate(context, expression)
        if not isinstance(result, list):
            raise XPathError(f"Expression does not select nodes: {expression!r}", xpath=expression)
        return _wrap(result[0]) if result else None

    def query_nodes(self, context: Any, expression: str) -> list[Any]:
        """Return all nodes selected by ``expression`` in document order.

        ``context`` must be an element or document, as for :meth:`query_node`.
        """
        result = self._evaluate(context, expression)
        if not isinstance(result, list):
            raise XPathError(f"Expression does not select nodes: {expression!r}", xpath=expression)
        return [_wrap(item) for item in result]

    def query_string(self, context: Any, expression: str) -> str:
        """Evaluate ``expression`` and convert the result like XPath ``string()``.

        ``context`` must be an element or document, as for :meth:`query_node`.
        """
        result = self._evaluate(context, expression)
        if isinstance(result, list):
            return _string_value(_wrap(result[0])) if result else ""
        if isinstance(result, bool):
            return "true" if result else "false"
        if isinstance(result, float):
            return _format_number(result)
        return str(result)

    def children_of(self, node: Any) -> list[Any]:
        """Return the child nodes of ``node``, text included, in document order."""
        if node is None:
            return []
        if isinstance(node, etree._ElementTree):
            root = node.getroot()
            if root is None:
                return []
            before = list(root.itersiblings(preceding=True))
            before.reverse()
            return before + [root] + list(root.itersiblings())
        if not _is_element(node):
            return []

        children: list[Any] = []
        if node.text:
            children.append(TextNode(node, node.text))
        for child in node:
            children.append(child)
            if child.tail:
                children.append(TextNode(child, child.tail, is_tail=True))
        return children

    def attributes_of(self, node: Any) -> list[AttributeNode]:
        if not _is_element(node):
            return []
        return [AttributeNode(node, name, value) for name, value in node.attrib.items()]

    def info_of(self, node: Any) -> NodeInfo:
        if isinstance(node, AttributeNode):
            qname = etree.QName(node.name)
            prefix = _prefix_for(node.owner, qname.namespace) if qname.namespace else None
            return NodeInfo(
                node=node,
                qualified_name=f"{prefix}:{qname.localname}" if prefix else qname.localname,
                local_name=qname.localname,
                namespace_uri=qname.namespace,
                is_attribute=True,
                is_element=False,
                is_text=False,
            )
        if isinstance(node, TextNode):
            return NodeInfo(node, "#text", None, None, is_attribute=False, is_element=False, is_text=True)
        if _is_element(node):
            qname = etree.QName(node)
            return NodeInfo(
                node=node,
                qualified_name=f"{node.prefix}:{qname.localname}" if node.prefix else qname.localname,
                local_name=qname.localname,
                namespace_uri=qname.namespace,
                is_attribute=False,
                is_element=True,
                is_text=False,
            )
        if isinstance(node, etree._Comment):
            name = "#comment"
        elif isinstance(node, etree._ProcessingInstruction):
            name = node.target
        elif isinstance(node, etree._Entity):
            name = node.name
        elif isinstance(node, etree._ElementTree):
            name = "#document"
        else:
            raise TypeError(f"Not an XML node: {node!r}")
        return NodeInfo(node, name, None, None, is_attribute=False, is_element=False, is_text=False)

    def text_of(self, node: Any) -> str | None:
        """Trimmed text content of an element, raw value of any other node."""
        if node is None:
            return None
        if _is_element(node):
            return _string_value(node).strip()
        if isinstance(node, (AttributeNode, TextNode)):
            return node.value
        if isinstance(node, etree._Entity):
            return None
        if isinstance(node, etree._Element):
            # comments and processing instructions
            return node.text if isinstance(node.text, str) else None
        return None

    def for_each_child(self, node: Any, callback: Callable[[ChildVisit], Any] | None) -> None:
        """Visit children in document order until the callback returns :data:`BREAK`."""
        if callback is None:
            return
        for child in self.children_of(node):
            visit = ChildVisit(node=child, node_info=self.info_of(child), node_text=self.text_of(child))
            if callback(visit) == BREAK:
                break


def make_evaluator(namespace_map: Mapping[str, str] | None = None) -> XPathEvaluator:
    """Build an evaluator resolving prefixes through ``namespace_map`` only."""
    return XPathEvaluator(NamespaceContext(namespace_map))


__all__ = [
    "BREAK",
    "AttributeNode",
    "ChildVisit",
    "NodeInfo",
    "TextNode",
    "XPathEvaluator",
    "make_evaluator",
]
