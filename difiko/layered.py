"""Layered styling of one diff line: base, syntax, word diff and search."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import pairwise
from typing import Iterable, Optional, Sequence

from difiko import theme
from difiko.style import Modifier, Span, Style


@dataclass(frozen=True)
class SearchMatch:
    """A search hit: diff-line index and UTF-8 byte range within that line."""

    line: int
    start: int
    end: int


def add_base_style(syntax_on: bool) -> Style:
    """Row style for added lines; a background tint when syntax owns the fg."""
    if syntax_on:
        return Style().with_bg(theme.add_bg())
    return Style().with_fg(theme.add())


def del_base_style(syntax_on: bool) -> Style:
    """Row style for deleted lines; a background tint when syntax owns the fg."""
    if syntax_on:
        return Style().with_bg(theme.del_bg())
    return Style().with_fg(theme.deletion())


def line_search_matches(
    matches: Optional[Sequence[SearchMatch]], current: int, line_idx: int
) -> list:
    """`(start, end, is_current)` for each match that falls on `line_idx`."""
    if not matches:
        return []
    return [
        (m.start, m.end, i == current)
        for i, m in enumerate(matches)
        if m.line == line_idx
    ]


def search_match_style(is_current: bool) -> Style:
    if is_current:
        return (
            Style()
            .with_bg(theme.search_current_bg())
            .with_fg(theme.search_current_fg())
            .add_modifier(Modifier.BOLD)
            .add_modifier(Modifier.UNDERLINED)
        )
    return (
        Style()
        .with_bg(theme.search_other_bg())
        .with_fg(theme.search_other_fg())
        .add_modifier(Modifier.BOLD)
    )


def _is_char_boundary(data: bytes, index: int) -> bool:
    return index == len(data) or (data[index] & 0xC0) != 0x80


def _syntax_ranges(segments, size: int) -> list:
    ranges = []
    acc = 0
    for style, segment in segments or ():
        seg_len = len(segment.encode("utf-8"))
        end = min(acc + seg_len, size)
        if acc < end:
            ranges.append((acc, end, style))
        acc += seg_len
        if acc >= size:
            break
    return ranges


def _resolve_style(a, b, base, syntax_ranges, word_changed, search_matches) -> Style:
    for start, end, is_current in search_matches:
        if a >= start and b <= end:
            return search_match_style(is_current)
    style = base
    for start, end, syn in syntax_ranges:
        if a >= start and b <= end:
            style = style.patch(syn)
            break
    if word_changed and any(a >= s and b <= e for s, e in word_changed):
        if base.bg == theme.add_bg():
            style = style.with_bg(theme.add_bg_strong())
        elif base.bg == theme.del_bg():
            style = style.with_bg(theme.del_bg_strong())
        style = style.add_modifier(Modifier.BOLD)
    return style


def layered_spans(
    text: str,
    base_style: Style,
    syntax_segments: Optional[Iterable] = None,
    word_changed: Optional[Iterable] = None,
    search_matches: Iterable = (),
) -> list:
    """Split `text` into styled spans, layering decorations over `base_style`.

    Precedence, lowest to highest: base, syntax segments, word-diff changed
    ranges, search matches. Offsets are UTF-8 byte offsets; offsets that do
    not fall on a character boundary are ignored.
    """
    data = text.encode("utf-8")
    size = len(data)
    if size == 0:
        return []
    words = list(word_changed or ())
    searches = list(search_matches)
    syntax_ranges = _syntax_ranges(syntax_segments, size)

    boundaries = {0, size}
    boundaries.update(end for _, end, _ in syntax_ranges)
    for start, end in words:
        boundaries.update((start, end))
    for start, end, _ in searches:
        boundaries.update((start, end))
    points = sorted(
        b for b in boundaries if 0 <= b <= size and _is_char_boundary(data, b)
    )

    return [
        Span(
            data[a:b].decode("utf-8"),
            _resolve_style(a, b, base_style, syntax_ranges, words, searches),
        )
        for a, b in pairwise(points)
        if a != b
    ]