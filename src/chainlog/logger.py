"""Severity-bound loggers and the chained-write protocol.

``log << a << b << c`` composes one message. The first ``<<`` on a Logger
opens a ``_Message`` and returns a ``PendingWrite`` token; every further
``<<`` marks the previous token as treated and returns a new one. When the
last token goes away (or is closed explicitly) the message closes and the
append text is written, once, no matter how many values were chained.

Message lifecycle::

    FRESH --first write--> OPEN --last token closed--> CLOSED

Visibility, the sink and the decoration are captured when the message opens,
so a concurrent ``set_log_level`` or broadcast cannot split a message in two.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Tuple, Union

from .color import Color
from .levels import Severity, level_name
from .registry import STATE, RuntimeState
from .sinks import Control, Sink

Part = Union[str, Color, Control, Any]

endl = Control.ENDL
flush = Control.FLUSH


class MessageState(Enum):
    FRESH = "fresh"
    OPEN = "open"
    CLOSED = "closed"


def _emit(sink: Sink, value: Part) -> None:
    if isinstance(value, str):
        if value:
            sink.write(value)
    elif isinstance(value, Color):
        sink.apply_style(value)
    elif isinstance(value, Control):
        sink.write_control(value)
    else:
        sink.write(str(value))


def _normalize(parts: Tuple[Part, ...]) -> Tuple[Part, ...]:
    return tuple(p for p in parts if not (isinstance(p, str) and not p))


class _Message:
    __slots__ = ("owner", "sink", "visible", "prepend", "append", "state", "held")

    def __init__(self, logger: "Logger") -> None:
        # proxies report failures to the logger they were made from
        self.owner = logger._origin or logger
        self.visible = logger.visible()
        self.sink = logger.output
        self.prepend = logger.prepend_parts
        self.append = logger.append_parts
        self.state = MessageState.FRESH
        # while held by a with-block only __exit__ may close the message
        self.held = False

    def write(self, value: Part) -> None:
        if self.state is MessageState.CLOSED:
            raise ValueError("write to a closed log message")
        try:
            if self.state is MessageState.FRESH:
                self.state = MessageState.OPEN
                if self.visible:
                    for part in self.prepend:
                        _emit(self.sink, part)
            if self.visible:
                _emit(self.sink, value)
        except BaseException:
            # abandon the message; no append after a failed write
            self.state = MessageState.CLOSED
            raise

    def close(self, force: bool = False) -> None:
        if self.state is MessageState.CLOSED or (self.held and not force):
            return
        fresh = self.state is MessageState.FRESH
        self.state = MessageState.CLOSED
        if self.visible:
            # an empty message is still bracketed
            for part in (self.prepend + self.append) if fresh else self.append:
                _emit(self.sink, part)


class PendingWrite:
    """A message being composed. Only the last token of a chain closes it."""

    __slots__ = ("_message", "treated")

    def __init__(self, message: _Message) -> None:
        self._message = message
        self.treated = False

    @property
    def state(self) -> MessageState:
        return self._message.state

    @property
    def suppressed(self) -> bool:
        return not self._message.visible

    def __lshift__(self, value: Part) -> "PendingWrite":
        self.treated = True
        self._message.write(value)
        return PendingWrite(self._message)

    def close(self) -> None:
        if not self.treated:
            self.treated = True
            self._message.close()

    def __enter__(self) -> "PendingWrite":
        self._message.held = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.treated = True
        self._message.held = False
        self._message.close(force=True)

    def __del__(self) -> None:
        # __init__ may not have run
        if getattr(self, "treated", True):
            return
        try:
            self.close()
        except Exception as exc:
            # a finalizer cannot raise; the owner re-raises on its next write
            self._message.owner._failure = exc


class DecorationWriter:
    """Returned by ``Logger.prepend()`` / ``Logger.append()``; ``<<`` extends the decoration."""

    def __init__(self, logger: "Logger", attr: str) -> None:
        self._logger = logger
        self._attr = attr

    def __lshift__(self, value: Part) -> "DecorationWriter":
        current = getattr(self._logger, self._attr)
        setattr(self._logger, self._attr, current + _normalize((value,)))
        return self


class Logger:
    """A logger bound to one severity.

    Declare as many as you like (typically one per module); all loggers of a
    severity are registered so ``set_output`` / ``set_prepend`` broadcasts
    reach every one of them. A logger starts with no output and writes
    nothing until a sink is assigned.
    """

    def __init__(
        self,
        severity: Severity,
        disabled: bool = False,
        *,
        register: bool = True,
        state: Optional[RuntimeState] = None,
    ) -> None:
        severity = Severity(severity)
        if severity is Severity.DISABLED:
            raise ValueError("a logger needs a real severity, not DISABLED")
        self.severity = severity
        self.disabled = disabled
        self.output: Optional[Sink] = None
        self.prepend_parts: Tuple[Part, ...] = ()
        self.append_parts: Tuple[Part, ...] = ()
        self._state = state or STATE
        self._registered = False
        self._origin: Optional["Logger"] = None
        self._failure: Optional[Exception] = None
        if register:
            self._state.registry.register(self)
            self._registered = True

    def __repr__(self) -> str:
        return f"<Logger {level_name(self.severity)} output={self.output!r} disabled={self.disabled}>"

    @property
    def registered(self) -> bool:
        return self._registered

    def close(self) -> None:
        """Remove this logger from the registry. Broadcasts no longer reach it."""
        if self._registered:
            self._registered = False
            self._state.registry.unregister(self)

    def set_output(self, sink: Optional[Sink]) -> None:
        """Replace the sink. A failure still pending from the old sink is dropped."""
        self.output = sink
        self._failure = None

    def set_prepend(self, *parts: Part) -> None:
        self.prepend_parts = _normalize(parts)

    def set_append(self, *parts: Part) -> None:
        self.append_parts = _normalize(parts)

    def prepend(self) -> DecorationWriter:
        self.prepend_parts = ()
        return DecorationWriter(self, "prepend_parts")

    def append(self) -> DecorationWriter:
        self.append_parts = ()
        return DecorationWriter(self, "append_parts")

    def disable(self) -> None:
        self.disabled = True

    def enable(self) -> None:
        self.disabled = False

    def visible(self) -> bool:
        level = self._state.filter_level
        return (
            level is not Severity.DISABLED
            and self.severity >= level
            and self.output is not None
            and not self.disabled
        )

    def __call__(self, condition: bool) -> "Logger":
        """Per-call proxy that writes only when ``condition`` is true."""
        proxy = Logger(self.severity, self.disabled or not condition, register=False, state=self._state)
        proxy.output = self.output
        proxy.prepend_parts = self.prepend_parts
        proxy.append_parts = self.append_parts
        proxy._origin = self._origin or self
        return proxy

    def _raise_failure(self) -> None:
        owner = self._origin or self
        exc, owner._failure = owner._failure, None
        if exc is not None:
            raise exc

    def __lshift__(self, value: Part) -> PendingWrite:
        self._raise_failure()
        message = _Message(self)
        message.write(value)
        return PendingWrite(message)

    def write(self, *values: Part) -> None:
        """Write ``values`` as one message and close it before returning."""
        self._raise_failure()
        message = _Message(self)
        try:
            for value in values:
                message.write(value)
        finally:
            message.close()


__all__ = ["Logger", "PendingWrite", "DecorationWriter", "MessageState", "Part", "endl", "flush"]
