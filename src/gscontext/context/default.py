"""Script context backed by lxml and requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from gscontext.clients.http import HttpFetcher
from gscontext.common.counter import AtomicCounter
from gscontext.common.promise import Promise
from gscontext.common.text import StringBuilder
from gscontext.config import Settings
from gscontext.logging_setup import get_logger
from gscontext.resource_reader import ResourceReader
from gscontext.xml import capabilities, document, transform

from .base import Context
from .task import coerce_task


class DefaultContext(Context):
    """Concrete context wiring settings, logger, fetcher and resource reader.

    Collaborators are injected so hosts and tests can replace them; missing
    ones are built from ``settings``.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        logger: Any = None,
        fetcher: HttpFetcher | None = None,
        resources: ResourceReader | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.logger = logger or get_logger(self.__class__.__name__)
        self.fetcher = fetcher or HttpFetcher(self.settings.http, logger=self.logger)
        self.resources = resources or ResourceReader(self.settings.resources.search_paths)

    def indent_xml(self, task: Any, xml_text: str | None) -> str | None:
        return transform.indent_xml(xml_text, indent=self.settings.xml.indent)

    def new_counter(self) -> AtomicCounter:
        return AtomicCounter()

    def new_string_builder(self) -> StringBuilder:
        return StringBuilder()

    def new_xml_info(self, task: Any, xml_text: str, namespace_map: Mapping[str, str] | None = None) -> document.XmlInfo:
        return document.new_xml_info(xml_text, namespace_map)

    def read_resource_file(self, path: str, charset: str | None = None) -> str:
        return self.resources.read(path, charset)

    def remove_all_but_filter(self, xml_text: str) -> str:
        return capabilities.remove_all_but_filter(xml_text, indent=self.settings.xml.indent)

    def send_http_request(self, task: Any, url: str, data: str | None = None, data_content_type: str | None = None) -> Promise:
        flags = coerce_task(task)
        if flags.async_:
            return self.fetcher.fetch_async(url, data, data_content_type, verbose=flags.verbose)

        promise = self.new_promise()
        if flags.verbose:
            self.logger.info("http_fetch_started", url=url)
        try:
            result = self.fetcher.fetch(url, data, data_content_type)
        except Exception as exc:  # noqa: BLE001
            promise.reject(exc)
        else:
            promise.resolve(result)
        return promise


__all__ = ["DefaultContext"]
