"""Logging helpers for querybind.

Library modules only call :func:`get_logger`; applications opt in to
console output with :func:`setup_logging`.
"""

from __future__ import annotations

import logging
import sys

_CONSOLE_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
_DETAILED_FORMAT = "%(levelname)-8s %(name)s [%(filename)s:%(lineno)d]: %(message)s"

logging.getLogger("querybind").addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a querybind module."""
    return logging.getLogger(name)


def setup_logging(
    level: str = "WARNING",
    format_type: str = "console",
    include_timestamp: bool = True,
) -> logging.Logger:
    """Attach a stream handler to the ``querybind`` logger.

    Args:
        level: Logging level name.
        format_type: ``"console"`` for short lines, ``"detailed"`` to add
            file and line information.
        include_timestamp: Prefix each line with the record time.

    Returns:
        The configured package logger.
    """
    fmt = _DETAILED_FORMAT if format_type == "detailed" else _CONSOLE_FORMAT
    if include_timestamp:
        fmt = "%(asctime)s " + fmt

    root = logging.getLogger("querybind")
    root.setLevel(level.upper())

    # Replace handlers from a previous call
    for handler in list(root.handlers):
        if not isinstance(handler, logging.NullHandler):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(handler)
    return root
