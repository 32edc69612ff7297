from difiko.tree import DirNode, DirRow, FileRow, flatten


def test_builds_tree():
    root = DirNode.from_paths(["src/foo.rs", "src/bar/baz.rs", "README.md"])
    rows = flatten(root, set())
    assert any(isinstance(r, DirRow) and r.path == "src" for r in rows)
    assert any(isinstance(r, FileRow) and r.label == "README.md" for r in rows)


def test_flatten_order_and_depth():
    root = DirNode.from_paths(["src/foo.rs", "src/bar/baz.rs", "README.md"])
    rows = flatten(root, set())
    assert rows == [
        DirRow(path="src", label="src", depth=0, collapsed=False),
        DirRow(path="src/bar", label="bar", depth=1, collapsed=False),
        FileRow(path="src/bar/baz.rs", label="baz.rs", depth=2),
        FileRow(path="src/foo.rs", label="foo.rs", depth=1),
        FileRow(path="README.md", label="README.md", depth=0),
    ]


def test_collapsed_directory_hides_children():
    root = DirNode.from_paths(["src/foo.rs", "src/bar/baz.rs", "README.md"])
    rows = flatten(root, {"src"})
    assert rows == [
        DirRow(path="src", label="src", depth=0, collapsed=True),
        FileRow(path="README.md", label="README.md", depth=0),
    ]


def test_directories_sorted():
    root = DirNode.from_paths(["zeta/a", "alpha/b", "mid/c"])
    rows = flatten(root, set())
    dirs = [r.path for r in rows if isinstance(r, DirRow)]
    assert dirs == ["alpha", "mid", "zeta"]


def test_insert_adds_to_existing_node():
    root = DirNode()
    root.insert("a/b.txt")
    root.insert("a/c.txt")
    assert list(root.dirs) == ["a"]
    assert root.dirs["a"].files == ["b.txt", "c.txt"]
    assert root.files == []


def test_file_paths_roundtrip():
    paths = ["x/y/z.rs", "x/w.rs", "top.rs"]
    rows = flatten(DirNode.from_paths(paths), set())
    assert sorted(r.path for r in rows if isinstance(r, FileRow)) == sorted(paths)