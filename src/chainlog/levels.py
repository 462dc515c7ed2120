"""Severity levels and the error codes returned by configuration calls."""
from __future__ import annotations

from enum import IntEnum
from typing import Dict, Optional, Union


class Severity(IntEnum):
    # DISABLED sorts below every level but is never itself "visible"
    DISABLED = 0
    DEBUG = 1
    TRACE = 2
    INFO = 3
    WARNING = 4
    ERROR = 5


class ErrorCode(IntEnum):
    OK = 0
    INVALID_LOGLEVEL = -1


LEVELS = (Severity.DEBUG, Severity.TRACE, Severity.INFO, Severity.WARNING, Severity.ERROR)

_ALIASES: Dict[str, Severity] = {
    "debug": Severity.DEBUG,
    "trace": Severity.TRACE,
    "info": Severity.INFO,
    "warning": Severity.WARNING,
    "warn": Severity.WARNING,
    "error": Severity.ERROR,
    "err": Severity.ERROR,
    "disabled": Severity.DISABLED,
    "off": Severity.DISABLED,
    "none": Severity.DISABLED,
}


def parse_level(value: Union[Severity, int, str, None]) -> Optional[Severity]:
    """Return the Severity named by ``value`` or None when unrecognized.

    Accepts Severity members, their integer values and case-insensitive names.
    """
    if isinstance(value, Severity):
        return value
    if isinstance(value, bool):  # bool is an int subclass; never a level
        return None
    if isinstance(value, int):
        try:
            return Severity(value)
        except ValueError:
            return None
    if isinstance(value, str):
        return _ALIASES.get(value.strip().lower())
    return None


def level_name(level: Severity) -> str:
    return level.name.lower()


__all__ = ["Severity", "ErrorCode", "LEVELS", "parse_level", "level_name"]
