"""Terminal colours, text modifiers, styles and styled text spans."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Optional, Union


class Color(enum.Enum):
    """Named terminal colours; RESET means the terminal's default."""

    RESET = "reset"
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    GRAY = "gray"
    DARK_GRAY = "darkgray"
    LIGHT_RED = "lightred"
    LIGHT_GREEN = "lightgreen"
    LIGHT_YELLOW = "lightyellow"
    LIGHT_BLUE = "lightblue"
    LIGHT_MAGENTA = "lightmagenta"
    LIGHT_CYAN = "lightcyan"
    WHITE = "white"


def _check_byte(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
        raise ValueError(f"{name} must be an integer in 0..=255, got {value!r}")


@dataclass(frozen=True)
class Rgb:
    """A 24-bit truecolor value."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            _check_byte(name, getattr(self, name))


@dataclass(frozen=True)
class Indexed:
    """An entry of the 256-colour palette."""

    index: int

    def __post_init__(self) -> None:
        _check_byte("index", self.index)


ColorValue = Union[Color, Rgb, Indexed]


class Modifier(enum.Flag):
    """Text attributes that can be combined."""

    BOLD = enum.auto()
    DIM = enum.auto()
    ITALIC = enum.auto()
    UNDERLINED = enum.auto()
    SLOW_BLINK = enum.auto()
    RAPID_BLINK = enum.auto()
    REVERSED = enum.auto()
    HIDDEN = enum.auto()
    CROSSED_OUT = enum.auto()


@dataclass(frozen=True)
class Style:
    """Foreground, background and modifiers; unset colours inherit."""

    fg: Optional[ColorValue] = None
    bg: Optional[ColorValue] = None
    modifiers: Modifier = field(default_factory=lambda: Modifier(0))

    def with_fg(self, color: ColorValue) -> "Style":
        return replace(self, fg=color)

    def with_bg(self, color: ColorValue) -> "Style":
        return replace(self, bg=color)

    def add_modifier(self, modifier: Modifier) -> "Style":
        return replace(self, modifiers=self.modifiers | modifier)

    def patch(self, other: "Style") -> "Style":
        """Layer `other` on top: its set colours win, modifiers accumulate."""
        return Style(
            fg=other.fg if other.fg is not None else self.fg,
            bg=other.bg if other.bg is not None else self.bg,
            modifiers=self.modifiers | other.modifiers,
        )


@dataclass(frozen=True)
class Span:
    """A run of text drawn in one style."""

    content: str
    style: Style = field(default_factory=Style)