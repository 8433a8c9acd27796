"""Logging setup for agentdeck.

The TUI owns the terminal, so log records go to a file instead of stderr.
"""

import logging
from pathlib import Path
from typing import Optional, Union

DEFAULT_LOG_PATH = Path("/tmp/agentdeck-debug.log")
LOG_FORMAT = "[%(asctime)s.%(msecs)03d] [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

_handler: Optional[logging.Handler] = None


def parse_level(level: Union[str, int, None]) -> int:
    """Convert a level name like "debug" to a logging level (INFO if unknown)."""
    if isinstance(level, int):
        return level
    if not level:
        return logging.INFO

    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    level: Union[str, int, None] = "INFO",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Configure the ``agentdeck`` logger.

    Safe to call more than once: the file handler is installed a single time
    and later calls only change the level.

    Args:
        level: Level name or number
        log_file: Log destination (default: /tmp/agentdeck-debug.log)

    Returns:
        The configured package logger
    """
    global _handler

    root = logging.getLogger("agentdeck")
    root.setLevel(parse_level(level))

    if _handler is None:
        path = Path(log_file) if log_file else DEFAULT_LOG_PATH
        try:
            handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
        except OSError:
            # Unwritable log location; keep running without a log file
            handler = logging.NullHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)
        root.propagate = False
        _handler = handler

    return root


def teardown_logging() -> None:
    """Remove the handler installed by setup_logging()."""
    global _handler

    if _handler is not None:
        root = logging.getLogger("agentdeck")
        root.removeHandler(_handler)
        _handler.close()
        _handler = None
