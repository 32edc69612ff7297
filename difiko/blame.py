"""Blame data and the gutter shown beside diff lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from wcwidth import wcwidth

from difiko import theme
from difiko.style import Span, Style

BLAME_HASH_W = 7
BLAME_AUTHOR_W = 12
BLAME_TOTAL_W = BLAME_HASH_W + 1 + BLAME_AUTHOR_W + 3


@dataclass(frozen=True)
class BlameLine:
    """Who last touched one line."""

    short_hash: str
    author: str


@dataclass
class Blame:
    """Blame entries keyed by 1-based line number in the new file."""

    by_line: dict = field(default_factory=dict)


def truncate_pad(text: str, width: int) -> str:
    """Cut `text` to at most `width` display cells, then pad with spaces."""
    out = []
    used = 0
    for char in text:
        cells = max(wcwidth(char), 0)
        if used + cells > width:
            break
        out.append(char)
        used += cells
    return "".join(out) + " " * max(width - used, 0)


def blame_gutter_span(blame: Optional[Blame], line_no: int) -> Optional[Span]:
    """Gutter for one line; blank when the line has no entry, None without blame."""
    if blame is None:
        return None
    style = Style().with_fg(theme.dim())
    entry = blame.by_line.get(line_no)
    if entry is None:
        return Span(" " * (BLAME_HASH_W + 1 + BLAME_AUTHOR_W) + " │ ", style)
    short_hash = truncate_pad(entry.short_hash, BLAME_HASH_W)
    author = truncate_pad(entry.author, BLAME_AUTHOR_W)
    return Span(f"{short_hash} {author} │ ", style)


def blame_pad_span(blame: Optional[Blame]) -> Optional[Span]:
    """Blank span as wide as the gutter, for rows without blame."""
    if blame is None:
        return None
    return Span(" " * BLAME_TOTAL_W, Style().with_fg(theme.dim()))