"""Utility functions and helpers for weaver-setup."""

from .logging import get_logger, log_group, log_section, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "log_group",
    "log_section",
]
