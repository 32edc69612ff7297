"""Diff rendering into styled lines: file headers, unified and split layouts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from difiko import theme
from difiko.blame import Blame, blame_gutter_span, blame_pad_span
from difiko.layered import (
    SearchMatch,
    add_base_style,
    del_base_style,
    layered_spans,
    line_search_matches,
)
from difiko.model import Add, Binary, Context, Del, FileChange, Hunk, NoNewline
from difiko.style import Modifier, Span, Style


@dataclass
class DiffRenderCtx:
    """Optional decoration sources shared by one render pass.

    `syntax` holds one segment list per diff line; when it is set at all,
    add and delete rows use background tints so syntax colours own the
    foreground. `word_pairings` maps diff-line indices to changed byte
    ranges. `search_matches` with `search_current` mark search hits.
    """

    blame: Optional[Blame] = None
    search_matches: Optional[Sequence[SearchMatch]] = None
    search_current: int = 0
    syntax: Optional[Sequence[list]] = None
    word_pairings: Optional[dict] = None

    @property
    def syntax_on(self) -> bool:
        return self.syntax is not None

    def syntax_for(self, idx: int) -> Optional[list]:
        """Syntax segments for diff line `idx`, if highlighting produced any."""
        if self.syntax is None or not 0 <= idx < len(self.syntax):
            return None
        return self.syntax[idx]

    def word_for(self, idx: int) -> Optional[list]:
        """Changed byte ranges for diff line `idx`, if it was paired."""
        if self.word_pairings is None:
            return None
        return self.word_pairings.get(idx)

    def search_for(self, idx: int) -> list:
        """`(start, end, is_current)` search hits on diff line `idx`."""
        return line_search_matches(self.search_matches, self.search_current, idx)


def line_text(spans) -> str:
    """Plain text of a rendered line."""
    return "".join(span.content for span in spans)


def _hunk_style() -> Style:
    return Style().with_fg(theme.hunk()).add_modifier(Modifier.BOLD)


def file_header_spans(file: FileChange, reviewed: bool) -> list:
    """Title spans for a file: status, name, line counts and review mark."""
    spans = [
        Span(" "),
        Span(
            f"[{file.status.label()}] ",
            Style()
            .with_fg(theme.status_color(file.status))
            .add_modifier(Modifier.BOLD),
        ),
        Span(file.display_name()),
        Span("  "),
        Span(f"+{file.additions}", Style().with_fg(theme.add())),
        Span(" "),
        Span(f"-{file.deletions}", Style().with_fg(theme.deletion())),
    ]
    if reviewed:
        spans.append(
            Span(
                "  ✓ reviewed",
                Style().with_fg(theme.add()).add_modifier(Modifier.BOLD),
            )
        )
    spans.append(Span(" "))
    return spans


def build_unified_lines(file: FileChange, ctx: DiffRenderCtx) -> list:
    """One list of spans per displayed row of the unified diff."""
    blame = ctx.blame
    blame_pad = blame_pad_span(blame)
    lines = []
    old_no = 0
    new_no = 0
    for i, dl in enumerate(file.diff_lines):
        if isinstance(dl, Hunk):
            old_no = dl.old_start
            new_no = dl.new_start
            spans = [blame_pad] if blame_pad is not None else []
            spans += layered_spans(
                dl.header, _hunk_style(), None, None, ctx.search_for(i)
            )
            lines.append(spans)
        elif isinstance(dl, Add):
            spans = []
            gutter = blame_gutter_span(blame, new_no)
            if gutter is not None:
                spans.append(gutter)
            spans.append(
                Span(f"{'':>5} {new_no:>5} + ", Style().with_fg(theme.add()))
            )
            spans += layered_spans(
                dl.text,
                add_base_style(ctx.syntax_on),
                ctx.syntax_for(i),
                ctx.word_for(i),
                ctx.search_for(i),
            )
            new_no += 1
            lines.append(spans)
        elif isinstance(dl, Del):
            spans = [blame_pad] if blame_pad is not None else []
            spans.append(
                Span(f"{old_no:>5} {'':>5} - ", Style().with_fg(theme.deletion()))
            )
            spans += layered_spans(
                dl.text,
                del_base_style(ctx.syntax_on),
                ctx.syntax_for(i),
                ctx.word_for(i),
                ctx.search_for(i),
            )
            old_no += 1
            lines.append(spans)
        elif isinstance(dl, Context):
            spans = []
            gutter = blame_gutter_span(blame, new_no)
            if gutter is not None:
                spans.append(gutter)
            spans.append(Span(f"{old_no:>5} {new_no:>5}   "))
            spans += layered_spans(
                dl.text, Style(), ctx.syntax_for(i), None, ctx.search_for(i)
            )
            old_no += 1
            new_no += 1
            lines.append(spans)
        elif isinstance(dl, (NoNewline, Binary)):
            lines.append([Span(dl.text, Style().with_fg(theme.dim()))])
    return lines


def _flush_pending(pending_del, pending_add, left, right, ctx, blame_pad) -> None:
    rows = max(len(pending_del), len(pending_add))
    for k in range(rows):
        if k < len(pending_del):
            text, idx = pending_del[k]
            spans = [Span("- ", Style().with_fg(theme.deletion()))]
            spans += layered_spans(
                text,
                del_base_style(ctx.syntax_on),
                ctx.syntax_for(idx),
                ctx.word_for(idx),
                ctx.search_for(idx),
            )
            left.append(spans)
        else:
            left.append([Span("")])
        if k < len(pending_add):
            text, line_no, idx = pending_add[k]
            spans = []
            gutter = blame_gutter_span(ctx.blame, line_no)
            if gutter is not None:
                spans.append(gutter)
            spans.append(Span("+ ", Style().with_fg(theme.add())))
            spans += layered_spans(
                text,
                add_base_style(ctx.syntax_on),
                ctx.syntax_for(idx),
                ctx.word_for(idx),
                ctx.search_for(idx),
            )
            right.append(spans)
        elif blame_pad is not None:
            right.append([blame_pad])
        else:
            right.append([Span("")])
    pending_del.clear()
    pending_add.clear()


def build_split_lines(file: FileChange, ctx: DiffRenderCtx) -> tuple:
    """`(left, right)` rows of the side-by-side diff, always of equal length."""
    blame_pad = blame_pad_span(ctx.blame)
    left: list = []
    right: list = []
    pending_del: list = []
    pending_add: list = []
    new_no = 0

    def flush() -> None:
        _flush_pending(pending_del, pending_add, left, right, ctx, blame_pad)

    for i, dl in enumerate(file.diff_lines):
        if isinstance(dl, Hunk):
            flush()
            new_no = dl.new_start
            left.append(
                layered_spans(dl.header, _hunk_style(), None, None, ctx.search_for(i))
            )
            right.append(
                layered_spans(dl.header, _hunk_style(), None, None, ctx.search_for(i))
            )
        elif isinstance(dl, Context):
            flush()
            lspans = [Span("  ")]
            lspans += layered_spans(
                dl.text, Style(), ctx.syntax_for(i), None, ctx.search_for(i)
            )
            left.append(lspans)
            rspans = []
            gutter = blame_gutter_span(ctx.blame, new_no)
            if gutter is not None:
                rspans.append(gutter)
            rspans.append(Span("  "))
            rspans += layered_spans(
                dl.text, Style(), ctx.syntax_for(i), None, ctx.search_for(i)
            )
            right.append(rspans)
            new_no += 1
        elif isinstance(dl, Del):
            pending_del.append((dl.text, i))
        elif isinstance(dl, Add):
            pending_add.append((dl.text, new_no, i))
            new_no += 1
    flush()
    return left, right