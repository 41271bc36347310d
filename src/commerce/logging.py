"""Logging helpers used by the commerce CLI.

Console output goes through Rich on stderr so it never mixes with the
command output written to stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PROJECT_PREFIX = "commerce"


def effective_level(verbose_count: int, quiet_count: int) -> int:
    """WARNING, one step down per ``-v`` and one step up per ``-q``."""
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    return max(logging.DEBUG, min(logging.CRITICAL, level))


def config_console_handler(level: int = logging.INFO, color: bool = True) -> RichHandler:
    """Build a RichHandler writing to stderr.

    Source paths and timestamps are shown only at DEBUG.
    """
    console = Console(color_system="auto" if color else None, stderr=True)
    debug_mode = level <= logging.DEBUG
    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=debug_mode,
        show_path=debug_mode,
    )
    handler.setFormatter(logging.Formatter(fmt="%(name)s: %(message)s"))
    return handler


def configure_logging(verbose_count: int = 0, quiet_count: int = 0, color: bool = True) -> int:
    """Configure the root logger once for a CLI run and return the level used."""
    level = effective_level(verbose_count, quiet_count)
    logging.basicConfig(
        level=level,
        handlers=[config_console_handler(level=level, color=color)],
        force=True,  # override any existing logging config
    )
    logging.getLogger(PROJECT_PREFIX).debug(
        "Logging configured at %s", logging.getLevelName(level)
    )
    return level
