"""Output formatters for weaver-setup."""

from .formatters import ActionOutputWriter, ConsoleFormatter, JSONFormatter

__all__ = [
    "ActionOutputWriter",
    "ConsoleFormatter",
    "JSONFormatter",
]
