"""Process-wide registry of logger instances, grouped by severity.

Every module may declare its own ``Logger`` for a severity, so "the error
logger" is really N independent objects. Each one registers here when built
and the ``set_all_*`` broadcasts reach all of them. Lists hold weak
references: the registry never keeps a logger alive, and a logger that is
garbage collected drops out of its list on its own.

State lives in ``STATE`` (a ``RuntimeState``). Per-severity lists are created
on first registration and removed once empty. One lock serializes list
mutation against broadcast iteration; the filter level is read without it.
"""
from __future__ import annotations

import threading
import weakref
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from .levels import LEVELS, ErrorCode, Severity, level_name, parse_level
from .logutil import get_logger

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .logger import Logger, Part
    from .sinks import Sink

DEFAULT_FILTER_LEVEL = Severity.ERROR

_log = get_logger("registry")


class RegistryError(AssertionError):
    """Registry bookkeeping is inconsistent (a lifecycle bug, not user error)."""


class Registry:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._lists: Dict[Severity, List["weakref.ReferenceType[Logger]"]] = {}

    def register(self, instance: "Logger") -> None:
        severity = instance.severity
        with self._lock:
            refs = self._lists.get(severity)
            if refs is None:
                refs = self._lists[severity] = []
            refs.append(weakref.ref(instance, self._discard_ref(severity)))
            _log.debug("registered %s logger %#x (%d live)", level_name(severity), id(instance), len(refs))

    def unregister(self, instance: "Logger") -> None:
        severity = instance.severity
        with self._lock:
            refs = self._lists.get(severity, [])
            for idx, ref in enumerate(refs):
                if ref() is instance:
                    del refs[idx]
                    _log.debug("unregistered %s logger %#x (%d live)", level_name(severity), id(instance), len(refs))
                    if not refs:
                        del self._lists[severity]
                    return
        raise RegistryError(f"{level_name(severity)} logger {id(instance):#x} is not registered")

    def _discard_ref(self, severity: Severity):
        def _callback(ref: "weakref.ReferenceType[Logger]") -> None:
            with self._lock:
                refs = self._lists.get(severity)
                if refs is None:
                    return
                try:
                    refs.remove(ref)
                except ValueError:  # already removed by unregister()
                    return
                _log.debug("collected %s logger dropped (%d live)", level_name(severity), len(refs))
                if not refs:
                    del self._lists[severity]

        return _callback

    def _live(self, severity: Severity) -> List["Logger"]:
        out = []
        for ref in list(self._lists.get(severity, ())):
            inst = ref()
            if inst is not None:
                out.append(inst)
        return out

    def instances(self, severity: Severity) -> List["Logger"]:
        with self._lock:
            return self._live(severity)

    def count(self, severity: Severity) -> int:
        with self._lock:
            return len(self._live(severity))

    def has_list(self, severity: Severity) -> bool:
        with self._lock:
            return severity in self._lists

    def set_all_outputs(self, severity: Severity, sink: Optional["Sink"]) -> None:
        with self._lock:
            for inst in self._live(severity):
                inst.set_output(sink)

    def set_all_prepend(self, severity: Severity, parts: Tuple["Part", ...]) -> None:
        with self._lock:
            for inst in self._live(severity):
                inst.set_prepend(*parts)

    def set_all_append(self, severity: Severity, parts: Tuple["Part", ...]) -> None:
        with self._lock:
            for inst in self._live(severity):
                inst.set_append(*parts)

    def set_all_disabled(self, severity: Severity, disabled: bool) -> None:
        with self._lock:
            for inst in self._live(severity):
                if disabled:
                    inst.disable()
                else:
                    inst.enable()


class RuntimeState:
    """The registry plus the global filter level."""

    def __init__(self) -> None:
        self.registry = Registry()
        self.filter_level: Severity = DEFAULT_FILTER_LEVEL

    def set_log_level(self, level) -> ErrorCode:
        parsed = parse_level(level)
        if parsed is None:
            get_logger().warning("invalid log level %r; keeping %s", level, level_name(self.filter_level))
            return ErrorCode.INVALID_LOGLEVEL
        self.filter_level = parsed
        return ErrorCode.OK

    def init(self) -> None:
        self.filter_level = DEFAULT_FILTER_LEVEL

    def destroy(self) -> None:
        """Detach every registered logger from its sink and decoration."""
        for severity in LEVELS:
            self.registry.set_all_outputs(severity, None)
            self.registry.set_all_prepend(severity, ())
            self.registry.set_all_append(severity, ())
            self.registry.set_all_disabled(severity, False)
        self.filter_level = DEFAULT_FILTER_LEVEL


STATE = RuntimeState()


def init() -> None:
    STATE.init()


def destroy() -> None:
    STATE.destroy()


__all__ = ["Registry", "RegistryError", "RuntimeState", "STATE", "DEFAULT_FILTER_LEVEL", "init", "destroy"]
