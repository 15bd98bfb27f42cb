"""Logging utilities for protonge-installer.

Architecture:
    Application → QueueHandler → Queue → QueueListener Thread
                                              ↓
                                    Console (+ optional File) Handlers

Usage:
    >>> from protonge_installer.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Found release %s", tag_name)  # Use %-style formatting

Rules:
    1. Always use: logger = get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Handlers are only attached to the root 'protonge_installer' logger
"""

from protonge_installer.logger.formatters import (
    ColoredConsoleFormatter,
    HybridConsoleFormatter,
    SimpleConsoleFormatter,
)
from protonge_installer.logger.logger import (
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    set_console_level,
    setup_logging,
)
from protonge_installer.logger.state import get_state

__all__ = [
    "ColoredConsoleFormatter",
    "HybridConsoleFormatter",
    "SimpleConsoleFormatter",
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "get_state",
    "set_console_level",
    "setup_logging",
]
