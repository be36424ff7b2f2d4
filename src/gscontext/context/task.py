"""Flags read from the host's task object."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Task(BaseModel):
    """The subset of a host task this package looks at.

    ``async`` is a Python keyword, so the field is ``async_`` and accepts
    ``async`` as its alias. Any other host field is ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    async_: bool = Field(default=False, alias="async")
    verbose: bool = False


def coerce_task(task: Any) -> Task:
    """Build a :class:`Task` from ``None``, a mapping or an attribute-bearing object."""
    if task is None:
        return Task()
    if isinstance(task, Task):
        return task
    if isinstance(task, Mapping):
        return Task.model_validate(task)
    is_async = getattr(task, "async_", None)
    if is_async is None:
        is_async = getattr(task, "async", False)
    return Task(async_=bool(is_async), verbose=bool(getattr(task, "verbose", False)))


__all__ = ["Task", "coerce_task"]
