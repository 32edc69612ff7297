"""Core data types: file statuses, diff lines, file changes and commits."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Union


class FileStatus(enum.Enum):
    """How a file changed between two revisions."""

    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    OTHER = "?"

    @classmethod
    def from_letter(cls, letter: str) -> "FileStatus":
        """Map a git status letter (case-insensitive) to a status."""
        upper = letter.upper() if letter.isascii() else letter
        try:
            return cls(upper)
        except ValueError:
            return cls.OTHER

    def short(self) -> str:
        """One-letter code shown in lists."""
        return self.value

    def label(self) -> str:
        """Human-readable label."""
        return _LABELS[self]


_LABELS = {
    FileStatus.ADDED: "Added",
    FileStatus.MODIFIED: "Modified",
    FileStatus.DELETED: "Deleted",
    FileStatus.RENAMED: "Renamed",
    FileStatus.COPIED: "Copied",
    FileStatus.OTHER: "Changed",
}


@dataclass(frozen=True)
class GitHeader:
    text: str


@dataclass(frozen=True)
class IndexHeader:
    text: str


@dataclass(frozen=True)
class OldFile:
    text: str


@dataclass(frozen=True)
class NewFile:
    text: str


@dataclass(frozen=True)
class Hunk:
    header: str
    old_start: int
    old_count: int
    new_start: int
    new_count: int


@dataclass(frozen=True)
class Add:
    text: str


@dataclass(frozen=True)
class Del:
    text: str


@dataclass(frozen=True)
class Context:
    text: str


@dataclass(frozen=True)
class NoNewline:
    text: str


@dataclass(frozen=True)
class Binary:
    text: str


DiffLine = Union[
    GitHeader,
    IndexHeader,
    OldFile,
    NewFile,
    Hunk,
    Add,
    Del,
    Context,
    NoNewline,
    Binary,
]


@dataclass
class FileChange:
    """One file's change in a diff."""

    path: str
    status: FileStatus
    old_path: Optional[str] = None
    diff_lines: list = field(default_factory=list)
    additions: int = 0
    deletions: int = 0
    binary: bool = False

    def display_name(self) -> str:
        """Header label; shows `old → new` for renames and copies."""
        if (
            self.old_path is not None
            and self.status in (FileStatus.RENAMED, FileStatus.COPIED)
            and self.old_path != self.path
        ):
            return f"{self.old_path} → {self.path}"
        return self.path


@dataclass
class Commit:
    hash: str
    short_hash: str
    author: str
    date: str
    subject: str
    body: str


def _sort_key(change: FileChange) -> tuple:
    directory = change.path.rsplit("/", 1)[0] if "/" in change.path else ""
    return (directory, change.path, change.status.short())


def sort_files(files: list) -> None:
    """Sort file changes in place by directory, then path, then status."""
    files.sort(key=_sort_key)