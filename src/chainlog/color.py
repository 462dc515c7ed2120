"""Color and text attribute values.

A ``Color`` is written into a chain like any other value. It carries no
knowledge of where it ends up: stream sinks turn it into an ANSI SGR escape
sequence (``to_ansi``), console sinks that need an explicit "set attribute"
call use the Windows console bitmask (``to_attributes``) or a rich ``Style``
(``to_rich_style``). ``Color()`` with no arguments means "reset to default".
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from rich.style import Style


class Colour(Enum):
    NONE = "none"
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"
    GRAY = "gray"


BLACK = Colour.BLACK
RED = Colour.RED
GREEN = Colour.GREEN
YELLOW = Colour.YELLOW
BLUE = Colour.BLUE
MAGENTA = Colour.MAGENTA
CYAN = Colour.CYAN
WHITE = Colour.WHITE
GRAY = Colour.GRAY

# SGR offsets: foreground = 30 + n, background = 40 + n; gray is bright black.
_ANSI_INDEX = {
    Colour.BLACK: 0,
    Colour.RED: 1,
    Colour.GREEN: 2,
    Colour.YELLOW: 3,
    Colour.BLUE: 4,
    Colour.MAGENTA: 5,
    Colour.CYAN: 6,
    Colour.WHITE: 7,
}

# wincon.h
FOREGROUND_BLUE = 0x0001
FOREGROUND_GREEN = 0x0002
FOREGROUND_RED = 0x0004
FOREGROUND_INTENSITY = 0x0008
BACKGROUND_BLUE = 0x0010
BACKGROUND_GREEN = 0x0020
BACKGROUND_RED = 0x0040
BACKGROUND_INTENSITY = 0x0080
COMMON_LVB_UNDERSCORE = 0x8000

DEFAULT_ATTRIBUTES = FOREGROUND_RED | FOREGROUND_GREEN | FOREGROUND_BLUE

_CONSOLE_BITS = {
    Colour.BLACK: 0,
    Colour.RED: FOREGROUND_RED,
    Colour.GREEN: FOREGROUND_GREEN,
    Colour.YELLOW: FOREGROUND_RED | FOREGROUND_GREEN,
    Colour.BLUE: FOREGROUND_BLUE,
    Colour.MAGENTA: FOREGROUND_RED | FOREGROUND_BLUE,
    Colour.CYAN: FOREGROUND_GREEN | FOREGROUND_BLUE,
    Colour.WHITE: FOREGROUND_RED | FOREGROUND_GREEN | FOREGROUND_BLUE,
    Colour.GRAY: FOREGROUND_INTENSITY,
}

_RICH_NAMES = {
    Colour.GRAY: "bright_black",
}

ColourLike = Union[Colour, str, None]


def _coerce(value: ColourLike) -> Colour:
    if value is None:
        return Colour.NONE
    if isinstance(value, Colour):
        return value
    try:
        return Colour(value.lower())
    except ValueError:
        if value.lower() == "grey":
            return Colour.GRAY
        raise ValueError(f"unknown colour {value!r}") from None


@dataclass(frozen=True, init=False)
class Color:
    """A foreground/background pair plus bold, underline and blink flags.

    ``Color(True)`` is bold with no colour change, mirroring the short form
    used in prefixes such as ``"[" << Color(RED, True) << "EE" << Color() << "] "``.
    """

    foreground: Colour
    background: Colour
    bold: bool
    underline: bool
    blink: bool

    def __init__(
        self,
        foreground: Union[ColourLike, bool] = Colour.NONE,
        background: Union[ColourLike, bool] = Colour.NONE,
        bold: bool = False,
        underline: bool = False,
        blink: bool = False,
    ) -> None:
        # Positional bool shortcuts: Color(True) and Color(GREEN, True)
        if isinstance(foreground, bool):
            bold, foreground = foreground or bold, Colour.NONE
        if isinstance(background, bool):
            bold, background = background or bold, Colour.NONE
        object.__setattr__(self, "foreground", _coerce(foreground))
        object.__setattr__(self, "background", _coerce(background))
        object.__setattr__(self, "bold", bool(bold))
        object.__setattr__(self, "underline", bool(underline))
        object.__setattr__(self, "blink", bool(blink))

    @property
    def is_reset(self) -> bool:
        return (
            self.foreground is Colour.NONE
            and self.background is Colour.NONE
            and not (self.bold or self.underline or self.blink)
        )

    def _sgr_codes(self) -> List[str]:
        if self.is_reset:
            return ["0"]
        codes: List[str] = []
        if self.foreground is not Colour.NONE or self.background is not Colour.NONE:
            codes.append("0")
        if self.bold:
            codes.append("1")
        if self.underline:
            codes.append("4")
        if self.blink:
            codes.append("5")
        if self.foreground is Colour.GRAY:
            codes.append("90")
        elif self.foreground is not Colour.NONE:
            codes.append(str(30 + _ANSI_INDEX[self.foreground]))
        if self.background is Colour.GRAY:
            codes.append("100")
        elif self.background is not Colour.NONE:
            codes.append(str(40 + _ANSI_INDEX[self.background]))
        return codes

    def to_ansi(self) -> str:
        """Escape sequence for terminals and other stream sinks."""
        return "\x1b[" + ";".join(self._sgr_codes()) + "m"

    def to_attributes(self, current: Optional[int] = None) -> int:
        """Windows console attribute bitmask.

        ``current`` is the attribute word in effect; attribute-only values
        (bold, underline, blink) are OR-ed onto it, colour values replace it.
        """
        if self.is_reset:
            return DEFAULT_ATTRIBUTES
        base = DEFAULT_ATTRIBUTES if current is None else current
        if self.foreground is not Colour.NONE or self.background is not Colour.NONE:
            fg = self.foreground if self.foreground is not Colour.NONE else Colour.WHITE
            base = _CONSOLE_BITS[fg]
            if self.background is not Colour.NONE:
                base |= _CONSOLE_BITS[self.background] << 4
        if self.bold:
            base |= FOREGROUND_INTENSITY
        if self.blink:
            base |= BACKGROUND_INTENSITY
        if self.underline:
            base |= COMMON_LVB_UNDERSCORE
        return base

    def to_rich_style(self) -> Style:
        if self.is_reset:
            return Style.null()
        return Style(
            color=_rich_name(self.foreground),
            bgcolor=_rich_name(self.background),
            bold=self.bold or None,
            underline=self.underline or None,
            blink=self.blink or None,
        )

    def __str__(self) -> str:
        return self.to_ansi()


def _rich_name(colour: Colour) -> Optional[str]:
    if colour is Colour.NONE:
        return None
    return _RICH_NAMES.get(colour, colour.value)


def underline() -> Color:
    return Color(underline=True)


def blink() -> Color:
    return Color(blink=True)


def reset() -> Color:
    return Color()


__all__ = [
    "Colour",
    "Color",
    "underline",
    "blink",
    "reset",
    "BLACK",
    "RED",
    "GREEN",
    "YELLOW",
    "BLUE",
    "MAGENTA",
    "CYAN",
    "WHITE",
    "GRAY",
    "DEFAULT_ATTRIBUTES",
]
