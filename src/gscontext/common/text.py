"""Mutable string accumulator for host scripts."""

from __future__ import annotations

from typing import Any


class StringBuilder:
    """Append-only text buffer joined on demand."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._length = 0

    def append(self, value: Any) -> StringBuilder:
        # The host's builder renders missing values as "null".
        text = "null" if value is None else str(value)
        self._parts.append(text)
        self._length += len(text)
        return self

    @property
    def length(self) -> int:
        return self._length

    def to_string(self) -> str:
        if len(self._parts) > 1:
            self._parts = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        return self.to_string()


__all__ = ["StringBuilder"]
