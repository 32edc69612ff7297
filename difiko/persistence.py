"""On-disk store of which files were reviewed for a branch comparison."""

from __future__ import annotations

import hashlib
import json
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import platformdirs

SCHEMA_VERSION = 1


@dataclass
class ReviewEntry:
    snapshot: str = ""
    reviewed_files: list = field(default_factory=list)


@dataclass
class StateFile:
    version: int = SCHEMA_VERSION
    entries: dict = field(default_factory=dict)


def _parse_state(text: str) -> StateFile:
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("state must be a JSON object")
    version = data.get("version", SCHEMA_VERSION)
    if isinstance(version, bool) or not isinstance(version, int) or version < 0:
        raise ValueError("version must be a non-negative integer")
    raw_entries = data.get("entries", {})
    if not isinstance(raw_entries, dict):
        raise ValueError("entries must be an object")
    entries = {}
    for key, raw in raw_entries.items():
        if not isinstance(raw, dict):
            raise ValueError(f"entry {key!r} must be an object")
        snapshot = raw["snapshot"]
        reviewed = raw["reviewed_files"]
        if not isinstance(snapshot, str):
            raise ValueError(f"entry {key!r}: snapshot must be a string")
        if not isinstance(reviewed, list) or not all(isinstance(p, str) for p in reviewed):
            raise ValueError(f"entry {key!r}: reviewed_files must be strings")
        entries[key] = ReviewEntry(snapshot=snapshot, reviewed_files=list(reviewed))
    return StateFile(version=version, entries=entries)


def _dump_state(state: StateFile) -> str:
    return json.dumps(
        {
            "version": state.version,
            "entries": {
                key: {"snapshot": e.snapshot, "reviewed_files": e.reviewed_files}
                for key, e in state.entries.items()
            },
        },
        indent=2,
        ensure_ascii=False,
    )


def state_path() -> Path:
    """Default location of the state file."""
    return platformdirs.user_data_path("difiko", "local") / "state.json"


def _sibling(path: Path, suffix: str) -> Path:
    return path.with_name(f"{path.stem}.{suffix}")


def _backup_path(path: Path) -> Path:
    return _sibling(path, f"json.broken-{int(time.time())}")


def make_key(repo: str, base: str, compare: str) -> str:
    return f"{repo}::{base}::{compare}"


def snapshot_for(files) -> str:
    """Hash of the sorted set of changed paths, independent of order."""
    hasher = hashlib.sha256()
    for path in sorted(f.path for f in files):
        hasher.update(path.encode("utf-8"))
        hasher.update(b"\0")
    return hasher.hexdigest()


class Store:
    """Reviewed-file sets keyed by repo and branch pair."""

    def __init__(self, path, state: Optional[StateFile] = None):
        self.path = Path(path)
        self.state = state if state is not None else StateFile()

    @classmethod
    def open(cls, path=None) -> "OpenResult":
        """Load the store; a corrupt file is moved aside and a fresh state begun."""
        path = Path(path) if path is not None else state_path()
        if not path.exists():
            return OpenResult(store=cls(path))
        text = path.read_text(encoding="utf-8")
        try:
            state = _parse_state(text)
        except (ValueError, KeyError):
            backup = _backup_path(path)
            try:
                os.replace(path, backup)
            except OSError:
                pass
            return OpenResult(store=cls(path), recovered_backup=backup)
        return OpenResult(store=cls(path, state))

    def load_reviewed(self, repo: str, base: str, compare: str, files) -> set:
        """Reviewed paths, or an empty set if the file list has changed."""
        entry = self.state.entries.get(make_key(repo, base, compare))
        if entry is not None and entry.snapshot == snapshot_for(files):
            return set(entry.reviewed_files)
        return set()

    def save_reviewed(self, repo: str, base: str, compare: str, files, reviewed) -> None:
        self.state.entries[make_key(repo, base, compare)] = ReviewEntry(
            snapshot=snapshot_for(files),
            reviewed_files=sorted(reviewed),
        )
        self._flush()

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = _sibling(self.path, "json.tmp")
        tmp.write_text(_dump_state(self.state), encoding="utf-8")
        os.replace(tmp, self.path)


@dataclass
class OpenResult:
    store: Store
    recovered_backup: Optional[Path] = None