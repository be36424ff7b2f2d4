"""Operations a script context offers to the search-service host."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from gscontext.common.counter import AtomicCounter
from gscontext.common.promise import Promise
from gscontext.common.text import StringBuilder
from gscontext.xml.document import XmlInfo


class Context(ABC):
    """Fixed capability interface called by the host.

    ``task`` arguments are host task objects; only their ``async`` and
    ``verbose`` flags are read.
    """

    def new_promise(self) -> Promise:
        return Promise()

    @abstractmethod
    def indent_xml(self, task: Any, xml_text: str | None) -> str | None:
        """Return the document re-serialized with indentation."""

    @abstractmethod
    def new_counter(self) -> AtomicCounter:
        """Return a new thread-safe counter starting at zero."""

    @abstractmethod
    def new_string_builder(self) -> StringBuilder:
        """Return a new empty string accumulator."""

    @abstractmethod
    def new_xml_info(self, task: Any, xml_text: str, namespace_map: Mapping[str, str] | None = None) -> XmlInfo:
        """Parse a document and bind an XPath evaluator to ``namespace_map``."""

    @abstractmethod
    def read_resource_file(self, path: str, charset: str | None = None) -> str:
        """Read a resource file as text."""

    @abstractmethod
    def remove_all_but_filter(self, xml_text: str) -> str:
        """Reduce a capabilities document to its Filter_Capabilities section."""

    @abstractmethod
    def send_http_request(self, task: Any, url: str, data: str | None = None, data_content_type: str | None = None) -> Promise:
        """Fetch ``url`` and settle the returned promise with the response text."""


__all__ = ["Context"]
