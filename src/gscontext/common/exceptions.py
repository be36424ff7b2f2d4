"""Unified exception hierarchy for the script context utilities.

Exceptions are organised by domain and severity and carry an
:class:`ErrorContext` so they can be rendered into structured log events.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"  # Non-critical, recoverable
    MEDIUM = "medium"  # Affects the result of a single call
    HIGH = "high"  # Host must handle it
    CRITICAL = "critical"


class ErrorDomain(Enum):
    """Error domains for categorization."""

    CONFIG = "config"
    INPUT = "input"
    XML = "xml"
    RESOURCE = "resource"
    NETWORK = "network"
    CONTEXT = "context"
    UNKNOWN = "unknown"


@dataclass
class ErrorContext:
    """Context information for errors."""

    domain: ErrorDomain
    severity: ErrorSeverity
    component: str | None = None
    operation: str | None = None
    details: dict[str, Any] | None = None
    traceback: str | None = None


class GsContextError(Exception):
    """Base exception for all script context errors."""

    def __init__(self, message: str, *, context: ErrorContext | None = None, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext(domain=ErrorDomain.UNKNOWN, severity=ErrorSeverity.MEDIUM)
        self.cause = cause

        if self.context.traceback is None and cause is not None:
            self.context.traceback = "".join(traceback.format_exception(type(cause), cause, cause.__traceback__))

    def __str__(self) -> str:
        base_msg = self.message
        if self.context.component:
            base_msg = f"[{self.context.component}] {base_msg}"
        if self.context.operation:
            base_msg = f"{base_msg} (operation: {self.context.operation})"
        return base_msg

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "message": self.message,
            "domain": self.context.domain.value,
            "severity": self.context.severity.value,
            "component": self.context.component,
            "operation": self.context.operation,
            "details": self.context.details,
            "cause": str(self.cause) if self.cause else None,
            "traceback": self.context.traceback,
        }


# Configuration Errors
class ConfigError(GsContextError):
    """Raised when configuration files are missing or invalid."""

    def __init__(self, message: str, *, config_file: str | None = None, config_section: str | None = None, cause: Exception | None = None) -> None:
        context = ErrorContext(domain=ErrorDomain.CONFIG, severity=ErrorSeverity.HIGH, component="config", details={"config_file": config_file, "config_section": config_section})
        super().__init__(message, context=context, cause=cause)


# Input Errors
class EmptyInputError(GsContextError):
    """Raised when an XML operation receives empty or whitespace-only input."""

    def __init__(self, message: str = "Empty XML.", *, operation: str | None = None) -> None:
        context = ErrorContext(domain=ErrorDomain.INPUT, severity=ErrorSeverity.MEDIUM, component="xml_transformer", operation=operation)
        super().__init__(message, context=context)


# XML Errors
class XMLParseError(GsContextError):
    """Raised when XML parsing or serialization fails."""

    def __init__(self, message: str, *, xml_source: str | None = None, xpath: str | None = None, cause: Exception | None = None) -> None:
        context = ErrorContext(domain=ErrorDomain.XML, severity=ErrorSeverity.MEDIUM, component="xml_parser", operation="parse", details={"xml_source": xml_source, "xpath": xpath})
        super().__init__(message, context=context, cause=cause)


class XPathError(XMLParseError):
    """Raised when XPath compilation or evaluation fails."""

    def __init__(self, message: str, *, xpath: str | None = None, cause: Exception | None = None) -> None:
        super().__init__(message, xpath=xpath, cause=cause)
        self.context.component = "xpath_evaluator"
        self.context.operation = "xpath"


# Resource Errors
class ResourceNotFoundError(GsContextError):
    """Raised when a resource path does not resolve to a readable file."""

    def __init__(self, message: str, *, path: str | None = None, search_paths: list[str] | None = None) -> None:
        context = ErrorContext(
            domain=ErrorDomain.RESOURCE, severity=ErrorSeverity.MEDIUM, component="resource_reader", operation="read", details={"path": path, "search_paths": search_paths}
        )
        super().__init__(message, context=context)


# Network/HTTP Errors
class NetworkError(GsContextError):
    """Raised when an HTTP fetch fails at the I/O level."""

    def __init__(self, message: str, *, url: str | None = None, method: str | None = None, status_code: int | None = None, cause: Exception | None = None) -> None:
        context = ErrorContext(
            domain=ErrorDomain.NETWORK, severity=ErrorSeverity.MEDIUM, component="http_fetcher", operation="fetch", details={"url": url, "method": method, "status_code": status_code}
        )
        super().__init__(message, context=context, cause=cause)


# Context Errors
class CapabilityNotFoundError(GsContextError):
    """Raised when the host invokes an operation name that is not registered."""

    def __init__(self, name: str, *, available: list[str] | None = None) -> None:
        context = ErrorContext(domain=ErrorDomain.CONTEXT, severity=ErrorSeverity.HIGH, component="capability_registry", operation="invoke", details={"name": name, "available": available})
        super().__init__(f"Unknown capability: {name}", context=context)


__all__ = [
    "CapabilityNotFoundError",
    "ConfigError",
    "EmptyInputError",
    "ErrorContext",
    "ErrorDomain",
    "ErrorSeverity",
    "GsContextError",
    "NetworkError",
    "ResourceNotFoundError",
    "XMLParseError",
    "XPathError",
]
