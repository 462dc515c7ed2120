"""Sink abstractions.

Loggers depend only on the ``Sink`` capability below. Anything able to take
text, a line-end/flush control value and a style change can receive log
output: terminals, files, rich consoles, in-memory buffers in tests.

How colours are applied is decided when the sink is built: a ``StreamSink``
is given a ``Styler`` (inline escape sequences or an attribute side-channel),
a ``ConsoleSink`` hands styles to rich.
"""
from __future__ import annotations

import os
from enum import Enum
from typing import Callable, Iterable, List, Optional, Protocol, TextIO

from rich.console import Console
from rich.style import Style
from rich.text import Text

from ..color import Color, Colour


class Control(Enum):
    ENDL = "endl"
    FLUSH = "flush"


class Sink(Protocol):  # pragma: no cover - simple protocol
    def write(self, text: str) -> None: ...  # noqa: E701 - protocol stub
    def write_control(self, control: Control) -> None: ...  # noqa: E701
    def apply_style(self, color: Color) -> None: ...  # noqa: E701
    def close(self) -> None: ...  # noqa: E701


class Styler(Protocol):  # pragma: no cover - simple protocol
    def apply(self, stream: TextIO, color: Color) -> None: ...  # noqa: E701


class AnsiStyler:
    """Embed SGR escape sequences in the text stream."""

    def apply(self, stream: TextIO, color: Color) -> None:
        stream.write(color.to_ansi())


class AttributeStyler:
    """Report styles through a separate "set attribute" call.

    ``setter`` receives the console attribute bitmask, e.g. a bound
    ``SetConsoleTextAttribute`` for a Windows console handle. Pending text is
    flushed first so the attribute change lands at the right position.
    """

    def __init__(self, setter: Callable[[int], object]) -> None:
        self._setter = setter
        self.current: Optional[int] = None

    def apply(self, stream: TextIO, color: Color) -> None:
        stream.flush()
        self.current = color.to_attributes(self.current)
        self._setter(self.current)


def default_styler(stream: TextIO) -> Optional[Styler]:
    if os.environ.get("NO_COLOR"):
        return None
    isatty = getattr(stream, "isatty", None)
    try:
        tty = bool(isatty()) if isatty is not None else False
    except ValueError:  # closed stream
        tty = False
    return AnsiStyler() if tty else None


class StreamSink:
    """Write to any text file-like object; the stream is not owned."""

    def __init__(self, stream: TextIO, styler: Optional[Styler] = None) -> None:
        self.stream = stream
        self.styler = styler

    def write(self, text: str) -> None:
        self.stream.write(text)

    def write_control(self, control: Control) -> None:
        if control is Control.ENDL:
            self.stream.write("\n")
        self.stream.flush()

    def apply_style(self, color: Color) -> None:
        if self.styler is not None:
            self.styler.apply(self.stream, color)

    def close(self) -> None:
        self.stream.flush()


class FileSink(StreamSink):
    """A StreamSink owning a file handle opened from ``path``."""

    def __init__(
        self, path: str, mode: str = "a", encoding: str = "utf-8", styler: Optional[Styler] = None
    ) -> None:
        self.path = path
        super().__init__(open(path, mode, encoding=encoding), styler)

    def close(self) -> None:
        if not self.stream.closed:
            self.stream.close()


class ConsoleSink:
    """rich Console backed sink; colours set the style used for later text."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(highlight=False, soft_wrap=True)
        self.style: Style = Style.null()

    def write(self, text: str) -> None:
        # printed verbatim: no markup, no emoji codes
        self.console.print(Text(text, style=self.style), end="", highlight=False)

    def write_control(self, control: Control) -> None:
        if control is Control.ENDL:
            self.console.line()
        self.console.file.flush()

    def apply_style(self, color: Color) -> None:
        if color.is_reset:
            self.style = Style.null()
        elif color.foreground is not Colour.NONE or color.background is not Colour.NONE:
            self.style = color.to_rich_style()
        else:
            self.style = self.style + color.to_rich_style()

    def close(self) -> None:
        self.console.file.flush()


class MultiSink:
    """Tee every call to several sinks. Failures propagate to the caller."""

    def __init__(self, sinks: Iterable[Sink]) -> None:
        self._sinks: List[Sink] = list(sinks)

    def write(self, text: str) -> None:
        for s in self._sinks:
            s.write(text)

    def write_control(self, control: Control) -> None:
        for s in self._sinks:
            s.write_control(control)

    def apply_style(self, color: Color) -> None:
        for s in self._sinks:
            s.apply_style(color)

    def close(self) -> None:
        for s in self._sinks:
            s.close()


class NullSink:
    def write(self, text: str) -> None:
        pass

    def write_control(self, control: Control) -> None:
        pass

    def apply_style(self, color: Color) -> None:
        pass

    def close(self) -> None:  # pragma: no cover - trivial
        pass


__all__ = [
    "Control",
    "Sink",
    "Styler",
    "AnsiStyler",
    "AttributeStyler",
    "default_styler",
    "StreamSink",
    "FileSink",
    "ConsoleSink",
    "MultiSink",
    "NullSink",
]
