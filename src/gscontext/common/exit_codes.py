"""Standardized exit codes for the command line interface."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes shared by every CLI command."""

    OK = 0
    """Successful execution."""

    INPUT_ERROR = 1
    """Input was empty, malformed XML or an invalid XPath expression."""

    HTTP_ERROR = 2
    """The HTTP fetch failed."""

    IO_ERROR = 4
    """A file or resource could not be read."""

    CONFIG_ERROR = 5
    """Configuration error (invalid YAML, bad override, unknown charset)."""
