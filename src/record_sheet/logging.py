"""Logger access for record_sheet modules.

The library only emits records: DEBUG summaries of resolved columns and
projected rows, and a WARNING when explicit headers do not match the
column count. Handlers and levels belong to the application.
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance by name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


__all__ = [
    "get_logger",
]
