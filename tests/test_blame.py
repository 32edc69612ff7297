from wcwidth import wcswidth

from difiko import theme
from difiko.blame import (
    BLAME_TOTAL_W,
    Blame,
    BlameLine,
    blame_gutter_span,
    blame_pad_span,
    truncate_pad,
)


def test_truncate_pad_pads_short_text():
    result = truncate_pad("ab", 5)
    assert result.startswith("ab")
    assert len(result) == 5
    assert result.strip() == "ab"


def test_truncate_pad_cuts_long_text():
    result = truncate_pad("abcdefghij", 4)
    assert result == "abcd"


def test_truncate_pad_respects_wide_characters():
    result = truncate_pad("日本語", 5)
    assert wcswidth(result) == 5
    assert result.startswith("日本")
    assert "語" not in result


def test_gutter_span_for_known_line():
    blame = Blame(by_line={3: BlameLine(short_hash="abc1234", author="Ann")})
    span = blame_gutter_span(blame, 3)
    assert span.content.startswith("abc1234 Ann")
    assert span.content.endswith(" │ ")
    assert wcswidth(span.content) == BLAME_TOTAL_W
    assert span.style.fg == theme.dim()


def test_gutter_span_truncates_long_author():
    blame = Blame(by_line={1: BlameLine(short_hash="0123456789", author="A" * 40)})
    span = blame_gutter_span(blame, 1)
    assert wcswidth(span.content) == BLAME_TOTAL_W
    assert span.content.startswith("0123456 ")


def test_gutter_span_for_unknown_line_is_blank():
    blame = Blame(by_line={})
    span = blame_gutter_span(blame, 7)
    assert span.content.strip() == "│"
    assert len(span.content) == BLAME_TOTAL_W


def test_no_blame_means_no_gutter():
    assert blame_gutter_span(None, 1) is None
    assert blame_pad_span(None) is None


def test_pad_span_matches_gutter_width():
    span = blame_pad_span(Blame())
    assert span.content == " " * BLAME_TOTAL_W
    assert span.style.fg == theme.dim()