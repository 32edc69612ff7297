import pytest

from difiko.model import (
    Add,
    Commit,
    Del,
    FileChange,
    FileStatus,
    Hunk,
    sort_files,
)


@pytest.mark.parametrize(
    "letter,expected",
    [
        ("A", FileStatus.ADDED),
        ("a", FileStatus.ADDED),
        ("M", FileStatus.MODIFIED),
        ("d", FileStatus.DELETED),
        ("R", FileStatus.RENAMED),
        ("c", FileStatus.COPIED),
        ("X", FileStatus.OTHER),
        ("?", FileStatus.OTHER),
        ("é", FileStatus.OTHER),
    ],
)
def test_from_letter(letter, expected):
    assert FileStatus.from_letter(letter) is expected


def test_short_roundtrips_through_from_letter():
    for status in FileStatus:
        assert FileStatus.from_letter(status.short()) is status


def test_short_and_label_values():
    assert FileStatus.ADDED.short() == "A"
    assert FileStatus.OTHER.short() == "?"
    assert FileStatus.ADDED.label() == "Added"
    assert FileStatus.OTHER.label() == "Changed"
    assert FileStatus.RENAMED.label() == "Renamed"


def test_display_name_plain():
    fc = FileChange(path="src/a.rs", status=FileStatus.MODIFIED)
    assert fc.display_name() == "src/a.rs"


def test_display_name_rename():
    fc = FileChange(path="new.rs", status=FileStatus.RENAMED, old_path="old.rs")
    assert fc.display_name() == "old.rs → new.rs"


def test_display_name_copy():
    fc = FileChange(path="b.rs", status=FileStatus.COPIED, old_path="a.rs")
    assert fc.display_name() == "a.rs → b.rs"


def test_display_name_rename_same_path():
    fc = FileChange(path="x.rs", status=FileStatus.RENAMED, old_path="x.rs")
    assert fc.display_name() == "x.rs"


def test_display_name_old_path_ignored_for_modified():
    fc = FileChange(path="x.rs", status=FileStatus.MODIFIED, old_path="y.rs")
    assert fc.display_name() == "x.rs"


def test_sort_files_orders_by_directory_first():
    files = [
        FileChange(path="z.txt", status=FileStatus.ADDED),
        FileChange(path="src/b.rs", status=FileStatus.MODIFIED),
        FileChange(path="src/a.rs", status=FileStatus.MODIFIED),
        FileChange(path="README.md", status=FileStatus.MODIFIED),
        FileChange(path="src/ui/x.rs", status=FileStatus.DELETED),
    ]
    sort_files(files)
    assert [f.path for f in files] == [
        "README.md",
        "z.txt",
        "src/a.rs",
        "src/b.rs",
        "src/ui/x.rs",
    ]


def test_sort_files_ties_broken_by_status():
    files = [
        FileChange(path="a.rs", status=FileStatus.MODIFIED),
        FileChange(path="a.rs", status=FileStatus.ADDED),
    ]
    sort_files(files)
    assert [f.status for f in files] == [FileStatus.ADDED, FileStatus.MODIFIED]


def test_diff_line_values_compare_by_content():
    assert Add("x") == Add("x")
    assert Add("x") != Del("x")
    hunk = Hunk("@@ -1,2 +1,3 @@", 1, 2, 1, 3)
    assert hunk.new_count == 3
    assert hunk.old_start == 1


def test_commit_fields():
    c = Commit("abc", "a", "me", "today", "subj", "")
    assert c.subject == "subj"
    assert c.body == ""