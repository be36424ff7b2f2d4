"""Name-based dispatch of host calls onto a context."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from gscontext.common.exceptions import CapabilityNotFoundError

from .base import Context

# Host operation name -> Context method
HOST_OPERATIONS: dict[str, str] = {
    "indentXml": "indent_xml",
    "newCounter": "new_counter",
    "newPromise": "new_promise",
    "newStringBuilder": "new_string_builder",
    "newXmlInfo": "new_xml_info",
    "readResourceFile": "read_resource_file",
    "removeAllButFilter": "remove_all_but_filter",
    "sendHttpRequest": "send_http_request",
}


class CapabilityRegistry:
    """Callables the host may invoke by name."""

    def __init__(self) -> None:
        self._capabilities: dict[str, Callable[..., Any]] = {}

    @classmethod
    def for_context(cls, context: Context) -> CapabilityRegistry:
        registry = cls()
        for name, method in HOST_OPERATIONS.items():
            registry.register(name, getattr(context, method))
        return registry

    def register(self, name: str, capability: Callable[..., Any]) -> None:
        if not callable(capability):
            raise TypeError(f"Capability {name!r} is not callable")
        self._capabilities[name] = capability

    def get(self, name: str) -> Callable[..., Any]:
        try:
            return self._capabilities[name]
        except KeyError:
            raise CapabilityNotFoundError(name, available=sorted(self._capabilities)) from None

    def invoke(self, name: str, *args: Any, **kwargs: Any) -> Any:
        return self.get(name)(*args, **kwargs)

    def names(self) -> list[str]:
        return sorted(self._capabilities)

    def __contains__(self, name: object) -> bool:
        return name in self._capabilities

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._capabilities)


__all__ = ["HOST_OPERATIONS", "CapabilityRegistry"]
