"""Logging for Cost Analyser.

Only the Streamlit app and the scripts configure output, through
``configure_logging``. Modules ask ``get_logger`` for a child of the
``cost_analyser`` logger and stay silent until an entry point has run.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

from . import config

_ROOT = "cost_analyser"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = config.LOG_LEVEL
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        value = logging.getLevelName(name)
        if isinstance(value, int):
            return value
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Send ``cost_analyser`` log records to ``stream``; later calls are no-ops.

    ``level`` falls back to ``COST_ANALYSER_LOG_LEVEL`` and then INFO.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    resolved = _resolve_level(level)
    root = logging.getLogger(_ROOT)
    root.handlers = [h for h in root.handlers if not isinstance(h, logging.NullHandler)]

    handler = logging.StreamHandler(stream)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
    root.addHandler(handler)
    root.setLevel(resolved)
    root.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    root = logging.getLogger(_ROOT)
    if not _CONFIGURED and not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)
