"""Logging configuration helpers for appship."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "appship"


def _close_handlers(logger: logging.Logger) -> None:
    """Detach and close all handlers currently bound to the logger."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(*, debug: bool, console: Console | None = None) -> logging.Logger:
    """Configure stderr logging for the CLI and return the root appship logger.

    Reconfigured on every invocation so repeated calls (tests, embedding
    commands) never stack handlers.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    _close_handlers(logger)

    level = logging.DEBUG if debug else logging.WARNING
    logger.setLevel(level)
    logger.propagate = False
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=debug,
        rich_tracebacks=debug,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the appship logger or a child of it (null handler if unconfigured)."""
    root = logging.getLogger(_LOGGER_NAME)
    if not root.handlers:
        root.addHandler(logging.NullHandler())
    if name:
        return root.getChild(name)
    return root
