"""Module-level severity handles and the global configuration calls.

Typical use::

    import sys
    import chainlog
    from chainlog import StreamSink, endl

    chainlog.set_output(StreamSink(sys.stderr))
    chainlog.set_log_level("info")
    chainlog.warning << "disk at " << pct << "%" << endl

Modules wanting their own instance declare ``Logger(Severity.INFO)``; it is
registered like the handles below, so the global calls reach it too.
"""
from __future__ import annotations

from typing import Dict, Optional, Union

from .levels import LEVELS, ErrorCode, Severity
from .logger import Logger, Part
from .registry import STATE
from .sinks import Sink

debug = Logger(Severity.DEBUG)
trace = Logger(Severity.TRACE)
info = Logger(Severity.INFO)
warning = Logger(Severity.WARNING)
error = Logger(Severity.ERROR)

_HANDLES: Dict[Severity, Logger] = {
    Severity.DEBUG: debug,
    Severity.TRACE: trace,
    Severity.INFO: info,
    Severity.WARNING: warning,
    Severity.ERROR: error,
}


def handle(severity: Severity) -> Logger:
    return _HANDLES[Severity(severity)]


def set_output(sink: Optional[Sink], severity: Optional[Severity] = None) -> None:
    """Send every logger of ``severity`` (all severities if None) to ``sink``.

    Only loggers registered at call time are reached; one declared later
    starts without output.
    """
    targets = LEVELS if severity is None else (Severity(severity),)
    for level in targets:
        STATE.registry.set_all_outputs(level, sink)


def set_log_level(level: Union[Severity, int, str]) -> ErrorCode:
    """Set the global filter. Unknown values return INVALID_LOGLEVEL and change nothing."""
    return STATE.set_log_level(level)


def get_log_level() -> Severity:
    return STATE.filter_level


def set_prepend(severity: Severity, *parts: Part) -> None:
    STATE.registry.set_all_prepend(Severity(severity), parts)


def set_append(severity: Severity, *parts: Part) -> None:
    STATE.registry.set_all_append(Severity(severity), parts)


__all__ = [
    "debug",
    "trace",
    "info",
    "warning",
    "error",
    "handle",
    "set_output",
    "set_log_level",
    "get_log_level",
    "set_prepend",
    "set_append",
]
