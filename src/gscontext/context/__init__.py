"""Host-facing script context."""

from .base import Context
from .default import DefaultContext
from .registry import HOST_OPERATIONS, CapabilityRegistry
from .task import Task, coerce_task

__all__ = [
    "HOST_OPERATIONS",
    "CapabilityRegistry",
    "Context",
    "DefaultContext",
    "Task",
    "coerce_task",
]
