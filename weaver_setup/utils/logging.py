"""Logging utilities for weaver-setup."""

import functools
import inspect
import logging
import os
import sys
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, TypeVar

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

F = TypeVar('F', bound=Callable[..., Any])

_THEME = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "red",
    "critical": "red bold",
    "debug": "dim",
})

# Names handed out by get_logger, so setup_logging can adjust their level
_LOGGER_NAMES = set()


class WeaverLogger:
    """Logger with rich formatting."""

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Setup rich console handler with custom theme."""
        console = Console(theme=_THEME, stderr=True)

        handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            markup=False,
        )

        formatter = logging.Formatter(
            fmt="%(name)s: %(message)s",
            datefmt="[%X]"
        )
        handler.setFormatter(formatter)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()
        self.logger.addHandler(handler)
        self.logger.propagate = False

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(msg, extra=kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(msg, extra=kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(msg, extra=kwargs)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(msg, extra=kwargs)

    def critical(self, msg: str, **kwargs: Any) -> None:
        """Log critical message."""
        self.logger.critical(msg, extra=kwargs)


def setup_logging(level: int = logging.INFO, verbose: bool = False) -> None:
    """Setup logging configuration for weaver-setup.

    Args:
        level: Logging level
        verbose: Enable verbose logging
    """
    if verbose:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    for name in _LOGGER_NAMES:
        logging.getLogger(name).setLevel(level)

    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def get_logger(name: str) -> WeaverLogger:
    """Get a weaver-setup logger instance.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    _LOGGER_NAMES.add(name)
    return WeaverLogger(name, level=logging.getLogger(name).level or logging.INFO)


def running_in_github_actions() -> bool:
    """Check whether we run inside a GitHub Actions job."""
    return os.environ.get("GITHUB_ACTIONS") == "true"


@contextmanager
def log_section(title: str, console: Optional[Console] = None) -> Iterator[None]:
    """Bracket a block of output with a collapsible group.

    Under GitHub Actions this emits ``::group::`` workflow commands, elsewhere
    it prints a rich rule.
    """
    if running_in_github_actions():
        sys.stdout.write(f"::group::{title}\n")
        sys.stdout.flush()
        try:
            yield
        finally:
            sys.stdout.write("::endgroup::\n")
            sys.stdout.flush()
        return

    console = console or Console(theme=_THEME)
    console.rule(f"[bold cyan]{title}")
    yield


def log_group(title: str) -> Callable[[F], F]:
    """Decorator wrapping a function or coroutine function in a log section.

    Args:
        title: Group title shown in the log
    """
    def decorator(func: F) -> F:
        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with log_section(title):
                    return await func(*args, **kwargs)
            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with log_section(title):
                return func(*args, **kwargs)
        return wrapper  # type: ignore[return-value]

    return decorator
