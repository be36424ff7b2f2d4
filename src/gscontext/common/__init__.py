"""Shared primitives: error taxonomy, promise, counter and string accumulator."""

from .counter import AtomicCounter
from .exceptions import (
    CapabilityNotFoundError,
    ConfigError,
    EmptyInputError,
    ErrorContext,
    ErrorDomain,
    ErrorSeverity,
    GsContextError,
    NetworkError,
    ResourceNotFoundError,
    XMLParseError,
    XPathError,
)
from .promise import Promise
from .text import StringBuilder

__all__ = [
    "AtomicCounter",
    "CapabilityNotFoundError",
    "ConfigError",
    "EmptyInputError",
    "ErrorContext",
    "ErrorDomain",
    "ErrorSeverity",
    "GsContextError",
    "NetworkError",
    "Promise",
    "ResourceNotFoundError",
    "StringBuilder",
    "XMLParseError",
    "XPathError",
]
