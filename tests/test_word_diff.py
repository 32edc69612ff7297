from difiko.model import Add, Context, Del, Hunk
from difiko.word_diff import compute_word_pairings, word_ranges


def test_single_word_change_middle():
    o, n = word_ranges("foo bar baz", "foo qux baz")
    assert o == [(4, 7)]
    assert n == [(4, 7)]


def test_identical_lines_no_ranges():
    o, n = word_ranges("foo bar", "foo bar")
    assert o == []
    assert n == []


def test_version_bump_only_changes_digit():
    old = 'version = "0.1.3"'
    o, n = word_ranges(old, 'version = "0.1.4"')
    line_len = len(old)
    total_old = sum(e - s for s, e in o)
    total_new = sum(e - s for s, e in n)
    assert total_old < line_len // 2
    assert total_new < line_len // 2
    assert total_old > 0


def test_lines_with_no_common_chars_flag_everything():
    o, n = word_ranges("abc", "xyz")
    assert sum(e - s for s, e in o) == 3
    assert sum(e - s for s, e in n) == 3


def test_ranges_are_byte_offsets():
    o, n = word_ranges("aé", "aè")
    assert o == [(1, 3)]
    assert n == [(1, 3)]


def test_pure_insertion_has_no_old_ranges():
    o, n = word_ranges("ab", "axb")
    assert o == []
    assert n == [(1, 2)]


def test_pairings_pair_adjacent_del_add():
    lines = [
        Hunk("@@ -1 +1 @@", 1, 1, 1, 1),
        Del("foo bar baz"),
        Add("foo qux baz"),
        Context("same"),
    ]
    pairs = compute_word_pairings(lines)
    assert pairs == {1: [(4, 7)], 2: [(4, 7)]}


def test_pairings_skip_unpaired_lines():
    lines = [Del("one"), Del("two"), Add("one!"), Context("x")]
    pairs = compute_word_pairings(lines)
    assert set(pairs) == {0, 2}
    assert pairs[0] == []


def test_pairings_separate_runs():
    lines = [Del("a"), Context("c"), Add("b")]
    assert compute_word_pairings(lines) == {}


def test_pairings_multiple_runs():
    lines = [Del("foo bar baz"), Add("foo qux baz"), Context("c"), Del("abc"), Add("xyz")]
    pairs = compute_word_pairings(lines)
    assert set(pairs) == {0, 1, 3, 4}
    assert pairs[0] == [(4, 7)]