"""Diagnostics logger for chainlog itself.

chainlog's own complaints (an unknown filter level, a rejected config) and
its debug trail (loggers joining or leaving the registry) go through the
standard ``logging`` module, never through the handles being configured.

Everything hangs off the ``chainlog`` logger, configured lazily at WARNING;
``get_logger("registry")`` returns the ``chainlog.registry`` child, so
``logging.getLogger("chainlog").setLevel(logging.DEBUG)`` turns on the whole
trail at once.
"""
from __future__ import annotations

import logging
from typing import Optional

ROOT_NAME = "chainlog"

_LOGGER: Optional[logging.Logger] = None


def get_logger(component: Optional[str] = None) -> logging.Logger:
    global _LOGGER
    if _LOGGER is None:
        logger = logging.getLogger(ROOT_NAME)
        # leave handlers alone when the application configured its own
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s: %(message)s"))
            logger.addHandler(handler)
        logger.setLevel(logging.WARNING)
        _LOGGER = logger
    if component:
        return _LOGGER.getChild(component)
    return _LOGGER


__all__ = ["get_logger", "ROOT_NAME"]
