"""HTTP clients used by the script context."""

from .http import HttpFetcher, charset_from_content_type

__all__ = ["HttpFetcher", "charset_from_content_type"]
