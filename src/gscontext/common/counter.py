"""Thread-safe integer counter handed out to host scripts."""

from __future__ import annotations

import threading


class AtomicCounter:
    """Integer counter whose updates are atomic across threads.

    Scripts use it to count completed asynchronous fetches from worker
    threads, so every read-modify-write goes through a lock.
    """

    def __init__(self, initial: int = 0) -> None:
        self._value = initial
        self._lock = threading.Lock()

    def get(self) -> int:
        with self._lock:
            return self._value

    def set(self, value: int) -> None:
        with self._lock:
            self._value = value

    def add_and_get(self, delta: int) -> int:
        with self._lock:
            self._value += delta
            return self._value

    def get_and_add(self, delta: int) -> int:
        with self._lock:
            previous = self._value
            self._value += delta
            return previous

    def increment_and_get(self) -> int:
        return self.add_and_get(1)

    def get_and_increment(self) -> int:
        return self.get_and_add(1)

    def decrement_and_get(self) -> int:
        return self.add_and_get(-1)

    def __int__(self) -> int:
        return self.get()

    def __repr__(self) -> str:
        return f"AtomicCounter({self.get()})"


__all__ = ["AtomicCounter"]
