"""XML inspection, XPath querying and HTTP fetch utilities for a search-service script context."""

from __future__ import annotations

from gscontext.clients import HttpFetcher
from gscontext.common import (
    AtomicCounter,
    CapabilityNotFoundError,
    ConfigError,
    EmptyInputError,
    GsContextError,
    NetworkError,
    Promise,
    ResourceNotFoundError,
    StringBuilder,
    XMLParseError,
    XPathError,
)
from gscontext.config import Settings
from gscontext.context import CapabilityRegistry, Context, DefaultContext, Task
from gscontext.resource_reader import ResourceReader, read_resource
from gscontext.xml import (
    BREAK,
    NodeInfo,
    XmlInfo,
    XPathEvaluator,
    indent_xml,
    make_evaluator,
    new_xml_info,
    remove_all_but_filter,
)

__version__ = "1.0.0"

__all__ = [
    "BREAK",
    "AtomicCounter",
    "CapabilityNotFoundError",
    "CapabilityRegistry",
    "ConfigError",
    "Context",
    "DefaultContext",
    "EmptyInputError",
    "GsContextError",
    "HttpFetcher",
    "NetworkError",
    "NodeInfo",
    "Promise",
    "ResourceNotFoundError",
    "ResourceReader",
    "Settings",
    "StringBuilder",
    "Task",
    "XMLParseError",
    "XPathError",
    "XPathEvaluator",
    "XmlInfo",
    "indent_xml",
    "make_evaluator",
    "new_xml_info",
    "read_resource",
    "remove_all_but_filter",
]
