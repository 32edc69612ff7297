"""Syntax highlighting of diff content."""

from __future__ import annotations

from pygments.lexers import get_lexer_for_filename
from pygments.lexers.special import TextLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from difiko.model import Add, Context, Del
from difiko.style import Modifier, Rgb, Style

_STYLE_NAME = "monokai"
_TEXTUAL = (Add, Del, Context)


def _lexer_for(path: str):
    options = {"stripnl": False, "stripall": False, "ensurenl": True}
    try:
        return get_lexer_for_filename(path, **options)
    except ClassNotFound:
        return TextLexer(**options)


def _to_style(info: dict) -> Style:
    style = Style()
    color = info.get("color")
    if color:
        style = style.with_fg(
            Rgb(int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16))
        )
    if info.get("bold"):
        style = style.add_modifier(Modifier.BOLD)
    if info.get("italic"):
        style = style.add_modifier(Modifier.ITALIC)
    if info.get("underline"):
        style = style.add_modifier(Modifier.UNDERLINED)
    return style


def _tokenised_lines(lexer, texts: list) -> list:
    """Split the token stream of the joined texts into per-line (style, piece) lists."""
    pyg_style = get_style_by_name(_STYLE_NAME)
    source = "\n".join(t.replace("\r", " ") for t in texts)
    lines: list = [[]]
    for ttype, value in lexer.get_tokens(source):
        style = _to_style(pyg_style.style_for_token(ttype))
        pieces = value.split("\n")
        for n, piece in enumerate(pieces):
            if n:
                lines.append([])
            if piece:
                lines[-1].append((style, piece))
    return lines


def _restore(segments: list, original: str) -> list:
    """Map segments back onto the original text, keeping its exact characters."""
    out = []
    pos = 0
    for style, piece in segments:
        out.append((style, original[pos : pos + len(piece)]))
        pos += len(piece)
    return out


def highlight_file(file) -> list:
    """One list of `(Style, text)` segments per diff line of `file`.

    Add, Del and Context lines are lexed together in order so multi-line
    constructs keep their context; other lines get an empty list.
    """
    texts = [line.text for line in file.diff_lines if isinstance(line, _TEXTUAL)]
    highlighted: list = []
    if texts:
        lines = _tokenised_lines(_lexer_for(file.path), texts)
        for n, text in enumerate(texts):
            segments = lines[n] if n < len(lines) else []
            if sum(len(piece) for _, piece in segments) != len(text):
                segments = [(Style(), text)] if text else []
            highlighted.append(_restore(segments, text))

    produced = iter(highlighted)
    return [
        next(produced) if isinstance(line, _TEXTUAL) else []
        for line in file.diff_lines
    ]