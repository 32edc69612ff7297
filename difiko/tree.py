"""Directory tree built from file paths and flattened into display rows."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union


@dataclass
class DirNode:
    """A directory holding child directories and file names."""

    dirs: dict = field(default_factory=dict)
    files: list = field(default_factory=list)

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> "DirNode":
        root = cls()
        for path in paths:
            root.insert(path)
        return root

    def insert(self, path: str) -> None:
        """Add a slash-separated path; the last part is a file."""
        *directories, name = path.split("/")
        node = self
        for part in directories:
            node = node.dirs.setdefault(part, DirNode())
        node.files.append(name)


@dataclass(frozen=True)
class DirRow:
    path: str
    label: str
    depth: int
    collapsed: bool


@dataclass(frozen=True)
class FileRow:
    path: str
    label: str
    depth: int


TreeRow = Union[DirRow, FileRow]


def _join(prefix: str, name: str) -> str:
    return f"{prefix}/{name}" if prefix else name


def _walk(node: DirNode, prefix: str, depth: int, collapsed):
    for name in sorted(node.dirs):
        dir_path = _join(prefix, name)
        is_collapsed = dir_path in collapsed
        yield DirRow(path=dir_path, label=name, depth=depth, collapsed=is_collapsed)
        if not is_collapsed:
            yield from _walk(node.dirs[name], dir_path, depth + 1, collapsed)
    for name in node.files:
        yield FileRow(path=_join(prefix, name), label=name, depth=depth)


def flatten(root: DirNode, collapsed) -> list:
    """Rows in display order: directories first (sorted), then files."""
    return list(_walk(root, "", 0, collapsed))