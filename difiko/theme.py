"""User-overridable colour theme loaded from theme.json, and style helpers."""

from __future__ import annotations

import json
import re
import string
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

import platformdirs

from difiko.model import FileStatus
from difiko.style import Color, ColorValue, Indexed, Modifier, Rgb, Style


@dataclass
class Theme:
    """Colour overrides; unset keys fall back to built-in defaults."""

    bg: Optional[ColorValue] = None
    fg: Optional[ColorValue] = None
    dim: Optional[ColorValue] = None
    accent: Optional[ColorValue] = None
    accent_dim: Optional[ColorValue] = None
    add: Optional[ColorValue] = None
    del_: Optional[ColorValue] = None
    hunk: Optional[ColorValue] = None
    add_bg: Optional[ColorValue] = None
    del_bg: Optional[ColorValue] = None
    add_bg_strong: Optional[ColorValue] = None
    del_bg_strong: Optional[ColorValue] = None
    status_add: Optional[ColorValue] = None
    status_mod: Optional[ColorValue] = None
    status_del: Optional[ColorValue] = None
    status_ren: Optional[ColorValue] = None
    highlight_bg: Optional[ColorValue] = None
    highlight_bg_dim: Optional[ColorValue] = None
    search_current_bg: Optional[ColorValue] = None
    search_current_fg: Optional[ColorValue] = None
    search_other_bg: Optional[ColorValue] = None
    search_other_fg: Optional[ColorValue] = None

    def set(self, key: str, color: ColorValue) -> bool:
        """Set the field named by a JSON key; False if the key is unknown."""
        attr = _KEY_TO_ATTR.get(key)
        if attr is None:
            return False
        setattr(self, attr, color)
        return True


def _json_key(attr: str) -> str:
    return attr.rstrip("_")


_KEY_TO_ATTR = {_json_key(f.name): f.name for f in fields(Theme)}


@dataclass
class ThemeLoad:
    """A usable theme plus human-readable problems met while loading it."""

    theme: Theme = field(default_factory=Theme)
    issues: list = field(default_factory=list)


_U8 = re.compile(r"\+?[0-9]+")

_NAMED = {
    "reset": Color.RESET,
    "default": Color.RESET,
    "black": Color.BLACK,
    "red": Color.RED,
    "green": Color.GREEN,
    "yellow": Color.YELLOW,
    "blue": Color.BLUE,
    "magenta": Color.MAGENTA,
    "cyan": Color.CYAN,
    "gray": Color.GRAY,
    "darkgray": Color.DARK_GRAY,
    "lightred": Color.LIGHT_RED,
    "lightgreen": Color.LIGHT_GREEN,
    "lightyellow": Color.LIGHT_YELLOW,
    "lightblue": Color.LIGHT_BLUE,
    "lightmagenta": Color.LIGHT_MAGENTA,
    "lightcyan": Color.LIGHT_CYAN,
    "white": Color.WHITE,
}


def _parse_u8(text: str) -> Optional[int]:
    if not _U8.fullmatch(text):
        return None
    value = int(text)
    return value if value <= 255 else None


def _parse_hex_byte(text: str) -> Optional[int]:
    if len(text) != 2 or not all(c in string.hexdigits for c in text):
        return None
    return int(text, 16)


def _ascii_lower(text: str) -> str:
    return "".join(c.lower() if c.isascii() else c for c in text)


def parse_color(text: str) -> Optional[ColorValue]:
    """Parse a colour name, `#RRGGBB`, `rgb(r, g, b)` or a 0..255 palette index."""
    trimmed = text.strip()

    if trimmed.startswith("#"):
        digits = trimmed[1:]
        if len(digits.encode("utf-8")) == 6:
            channels = [_parse_hex_byte(digits[i : i + 2]) for i in (0, 2, 4)]
            if any(c is None for c in channels):
                return None
            return Rgb(*channels)

    if trimmed.startswith("rgb(") and trimmed.endswith(")") and len(trimmed) >= 5:
        parts = [p.strip() for p in trimmed[4:-1].split(",")]
        if len(parts) == 3:
            channels = [_parse_u8(p) for p in parts]
            if any(c is None for c in channels):
                return None
            return Rgb(*channels)

    index = _parse_u8(trimmed)
    if index is not None:
        return Indexed(index)

    name = _ascii_lower(trimmed).replace("grey", "gray")
    return _NAMED.get(name)


def parse_json(text: str) -> ThemeLoad:
    """Build a theme from JSON text, keeping good keys and reporting bad ones."""
    try:
        value = json.loads(text)
    except ValueError as exc:
        return ThemeLoad(issues=[f"theme.json is not valid JSON: {exc}"])
    if not isinstance(value, dict):
        return ThemeLoad(issues=["theme.json must be a JSON object at the top level"])

    theme = Theme()
    issues = []
    for key, val in sorted(value.items()):
        if key.startswith("_"):
            continue
        if not isinstance(val, str):
            issues.append(f'"{key}": value must be a string')
            continue
        color = parse_color(val)
        if color is None:
            issues.append(f'"{key}": unknown color {json.dumps(val, ensure_ascii=False)}')
            continue
        if not theme.set(key, color):
            issues.append(f'"{key}": unknown theme key')
    return ThemeLoad(theme=theme, issues=issues)


def load_from_path(path) -> ThemeLoad:
    """Read a theme file; a missing file yields the defaults with no issues."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return ThemeLoad()
    except (OSError, UnicodeDecodeError) as exc:
        return ThemeLoad(issues=[f"could not read theme.json: {exc}"])
    return parse_json(text)


def theme_path() -> Path:
    """Location of the user's theme override file."""
    return platformdirs.user_config_path("difiko", "local") / "theme.json"


def load() -> ThemeLoad:
    """Load the user's theme file; never raises."""
    return load_from_path(theme_path())


_DEFAULT_TEMPLATE = """{
  "_comment": "Edit this file to override difiko's theme. Restart difiko after saving. Delete any key to keep the default. Color values: a named color (black/red/green/yellow/blue/magenta/cyan/gray/darkgray/lightred/lightgreen/lightyellow/lightblue/lightmagenta/lightcyan/white), 'reset' for terminal default, '#RRGGBB' hex, 'rgb(r, g, b)' decimal, or 0..255 for the 256-color palette.",

  "fg": "reset",
  "bg": "reset",
  "dim": "darkgray",

  "accent": "cyan",
  "accent_dim": "blue",

  "add": "green",
  "del": "red",
  "hunk": "magenta",

  "add_bg": "rgb(15, 40, 15)",
  "del_bg": "rgb(55, 15, 15)",
  "add_bg_strong": "rgb(30, 95, 30)",
  "del_bg_strong": "rgb(140, 30, 30)",

  "status_add": "green",
  "status_mod": "yellow",
  "status_del": "red",
  "status_ren": "magenta",

  "highlight_bg": "rgb(40, 50, 70)",
  "highlight_bg_dim": "rgb(30, 35, 50)",

  "search_current_bg": "magenta",
  "search_current_fg": "white",
  "search_other_bg": "yellow",
  "search_other_fg": "black"
}
"""


def default_template() -> str:
    """JSON with every overridable key set to its built-in default."""
    return _DEFAULT_TEMPLATE


def ensure_default_file() -> Path:
    """Write the default template unless a theme file exists; return its path."""
    path = theme_path()
    if path.exists():
        return path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(default_template(), encoding="utf-8")
    return path


_THEME: Optional[Theme] = None


def init(theme: Theme) -> None:
    """Install theme overrides; only the first call has any effect."""
    global _THEME
    if _THEME is None:
        _THEME = theme


def current() -> Theme:
    """The installed theme, fixing the defaults in place if none was set."""
    global _THEME
    if _THEME is None:
        _THEME = Theme()
    return _THEME


def _pick(value: Optional[ColorValue], default: ColorValue) -> ColorValue:
    return value if value is not None else default


def bg() -> ColorValue:
    return _pick(current().bg, Color.RESET)


def fg() -> ColorValue:
    return _pick(current().fg, Color.RESET)


def dim() -> ColorValue:
    return _pick(current().dim, Color.DARK_GRAY)


def accent() -> ColorValue:
    return _pick(current().accent, Color.CYAN)


def accent_dim() -> ColorValue:
    return _pick(current().accent_dim, Color.BLUE)


def add() -> ColorValue:
    return _pick(current().add, Color.GREEN)


def deletion() -> ColorValue:
    return _pick(current().del_, Color.RED)


def hunk() -> ColorValue:
    return _pick(current().hunk, Color.MAGENTA)


def add_bg() -> ColorValue:
    return _pick(current().add_bg, Rgb(15, 40, 15))


def del_bg() -> ColorValue:
    return _pick(current().del_bg, Rgb(55, 15, 15))


def add_bg_strong() -> ColorValue:
    return _pick(current().add_bg_strong, Rgb(30, 95, 30))


def del_bg_strong() -> ColorValue:
    return _pick(current().del_bg_strong, Rgb(140, 30, 30))


def status_add() -> ColorValue:
    return _pick(current().status_add, Color.GREEN)


def status_mod() -> ColorValue:
    return _pick(current().status_mod, Color.YELLOW)


def status_del() -> ColorValue:
    return _pick(current().status_del, Color.RED)


def status_ren() -> ColorValue:
    return _pick(current().status_ren, Color.MAGENTA)


def highlight_bg() -> ColorValue:
    return _pick(current().highlight_bg, Rgb(40, 50, 70))


def highlight_bg_dim() -> ColorValue:
    return _pick(current().highlight_bg_dim, Rgb(30, 35, 50))


def search_current_bg() -> ColorValue:
    return _pick(current().search_current_bg, Color.MAGENTA)


def search_current_fg() -> ColorValue:
    return _pick(current().search_current_fg, Color.WHITE)


def search_other_bg() -> ColorValue:
    return _pick(current().search_other_bg, Color.YELLOW)


def search_other_fg() -> ColorValue:
    return _pick(current().search_other_fg, Color.BLACK)


def focused_border(focused: bool) -> Style:
    if focused:
        return Style().with_fg(accent()).add_modifier(Modifier.BOLD)
    return Style().with_fg(dim())


def label_style() -> Style:
    return Style().with_fg(dim())


def highlight_style() -> Style:
    return Style().with_bg(highlight_bg()).add_modifier(Modifier.BOLD)


def dim_highlight_style() -> Style:
    return Style().with_bg(highlight_bg_dim())


def status_color(status: FileStatus) -> ColorValue:
    if status is FileStatus.ADDED:
        return status_add()
    if status is FileStatus.MODIFIED:
        return status_mod()
    if status is FileStatus.DELETED:
        return status_del()
    if status in (FileStatus.RENAMED, FileStatus.COPIED):
        return status_ren()
    return dim()