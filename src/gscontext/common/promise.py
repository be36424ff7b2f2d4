"""Future with the resolve/reject vocabulary host scripts use."""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any


class Promise(Future):
    """A :class:`concurrent.futures.Future` that is already running.

    Promises are never cancellable: the producer settles them exactly once
    through :meth:`resolve` or :meth:`reject`.
    """

    def __init__(self) -> None:
        super().__init__()
        self.set_running_or_notify_cancel()

    def resolve(self, value: Any) -> None:
        self.set_result(value)

    def reject(self, error: BaseException) -> None:
        self.set_exception(error)


__all__ = ["Promise"]
