"""Character-level intra-line diff and Del/Add line pairing."""

from __future__ import annotations

from difflib import SequenceMatcher

from difiko.model import Add, Del


def _merge_or_push(ranges: list, start: int, end: int) -> None:
    if ranges and ranges[-1][1] == start:
        ranges[-1] = (ranges[-1][0], end)
    else:
        ranges.append((start, end))


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def word_ranges(old: str, new: str) -> tuple:
    """Changed UTF-8 byte ranges `(start, end)` in `old` and in `new`."""
    matcher = SequenceMatcher(None, old, new, autojunk=False)
    old_ranges: list = []
    new_ranges: list = []
    old_cur = 0
    new_cur = 0
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        old_len = _byte_len(old[i1:i2])
        new_len = _byte_len(new[j1:j2])
        if tag == "equal":
            old_cur += old_len
            new_cur += new_len
            continue
        if old_len:
            _merge_or_push(old_ranges, old_cur, old_cur + old_len)
            old_cur += old_len
        if new_len:
            _merge_or_push(new_ranges, new_cur, new_cur + new_len)
            new_cur += new_len
    return old_ranges, new_ranges


def compute_word_pairings(diff_lines) -> dict:
    """Changed byte ranges keyed by diff-line index.

    Within each run of adjacent Del/Add lines the k-th Del pairs with the
    k-th Add; unpaired lines get no entry.
    """
    out: dict = {}
    dels: list = []
    adds: list = []

    def flush() -> None:
        for (di, dt), (ai, at) in zip(dels, adds):
            old_r, new_r = word_ranges(dt, at)
            out[di] = old_r
            out[ai] = new_r
        dels.clear()
        adds.clear()

    for idx, line in enumerate(diff_lines):
        if isinstance(line, Del):
            dels.append((idx, line.text))
        elif isinstance(line, Add):
            adds.append((idx, line.text))
        else:
            flush()
    flush()
    return out