"""Outbound HTTP fetch returning response bodies as text."""

from __future__ import annotations

import codecs
import itertools
import threading
from collections.abc import Callable
from typing import Any

import requests

from gscontext.common.exceptions import NetworkError
from gscontext.common.promise import Promise
from gscontext.config import HTTPSettings
from gscontext.logging_setup import get_logger

DEFAULT_CHARSET = "UTF-8"

_thread_ids = itertools.count(1)


def charset_from_content_type(content_type: str | None, default: str = DEFAULT_CHARSET) -> str:
    """Return the ``charset`` parameter of a Content-Type header value.

    The key is matched case-insensitively. Missing, empty or unknown
    charsets, and codecs that are not text encodings, fall back to
    ``default``.
    """
    if not content_type:
        return default
    for part in content_type.split(";"):
        part = part.strip()
        if not part.lower().startswith("charset="):
            continue
        charset = part[len("charset=") :].strip().strip("\"'")
        if not charset:
            continue
        try:
            codec = codecs.lookup(charset)
        except LookupError:
            return default
        # base64, zlib, rot13 and friends are bytes-to-bytes codecs
        if not getattr(codec, "_is_text_encoding", True):
            return default
        return charset
    return default


def _close_quietly(resource: Any, logger: Any, **context: Any) -> None:
    if resource is None:
        return
    try:
        resource.close()
    except Exception as exc:  # noqa: BLE001
        logger.warning("http_close_failed", error=str(exc), **context)


class HttpFetcher:
    """Single-shot GET/POST requests with no retries and no connection reuse.

    Every call opens its own session and closes it, and the response,
    before returning.
    """

    def __init__(
        self,
        settings: HTTPSettings | None = None,
        *,
        session_factory: Callable[[], requests.Session] = requests.Session,
        logger: Any = None,
    ) -> None:
        self.settings = settings or HTTPSettings()
        self._session_factory = session_factory
        self.logger = logger or get_logger(self.__class__.__name__)

    def _build_request(self, data: str | None, content_type: str | None) -> tuple[str, dict[str, str], bytes | None]:
        headers: dict[str, str] = {}
        if self.settings.user_agent:
            headers["User-Agent"] = self.settings.user_agent
        headers.update(self.settings.headers)

        if not (isinstance(data, str) and data):
            return "GET", headers, None

        body = data.encode("utf-8")
        if isinstance(content_type, str) and content_type:
            headers["Content-Type"] = content_type
        headers["charset"] = "UTF-8"
        headers["Content-Length"] = str(len(body))
        return "POST", headers, body

    def _send(self, url: str, data: str | None, content_type: str | None) -> str:
        method, headers, body = self._build_request(data, content_type)
        session = None
        response = None
        try:
            session = self._session_factory()
            response = session.request(
                method,
                url,
                data=body,
                headers=headers,
                timeout=self.settings.timeout,
                allow_redirects=self.settings.follow_redirects,
            )
            response.raise_for_status()
            charset = charset_from_content_type(response.headers.get("Content-Type"))
            return response.content.decode(charset, errors="replace")
        except requests.RequestException as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            raise NetworkError(f"{method} {url} failed: {exc}", url=url, method=method, status_code=status_code, cause=exc) from exc
        finally:
            _close_quietly(response, self.logger, url=url)
            _close_quietly(session, self.logger, url=url)

    def fetch(self, url: str, data: str | None = None, content_type: str | None = None) -> str | None:
        """Fetch ``url`` and return the decoded body.

        A non-empty ``data`` string is POSTed, otherwise a GET is issued.
        Failures are logged and reported as ``None``.
        """
        try:
            return self._send(url, data, content_type)
        except NetworkError as exc:
            self.logger.error("http_fetch_failed", url=url, error=exc.message, status_code=exc.context.details.get("status_code"))
            return None

    def fetch_async(
        self,
        url: str,
        data: str | None = None,
        content_type: str | None = None,
        *,
        verbose: bool = False,
    ) -> Promise:
        """Fetch ``url`` on a new worker thread.

        The returned promise resolves with the decoded body or is rejected
        with :class:`NetworkError`. It cannot be cancelled.
        """
        promise = Promise()

        def _worker() -> None:
            if verbose:
                self.logger.info("http_fetch_async_started", url=url)
            try:
                result = self._send(url, data, content_type)
            except Exception as exc:  # noqa: BLE001
                promise.reject(exc)
                return
            if verbose:
                self.logger.info("http_fetch_async_resolved", url=url)
            promise.resolve(result)

        thread = threading.Thread(target=_worker, name=f"gscontext-fetch-{next(_thread_ids)}", daemon=True)
        thread.start()
        return promise


__all__ = ["DEFAULT_CHARSET", "HttpFetcher", "charset_from_content_type"]
