"""Start this program again in a new terminal window."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Optional, Sequence

_RELAUNCH_FLAGS = {"--new-window", "-w"}
_CREATE_NO_WINDOW = 0x0800_0000
_SAFE_CHARS = set("@%+=:,./-_")

_TERMINALS = [
    ("x-terminal-emulator", ["-e"]),
    ("gnome-terminal", ["--"]),
    ("konsole", ["-e"]),
    ("alacritty", ["-e"]),
    ("kitty", []),
    ("xterm", ["-e"]),
]


def shell_quote(text: str) -> str:
    """Quote `text` for a POSIX shell, leaving safe words untouched."""
    if text and all((c.isascii() and c.isalnum()) or c in _SAFE_CHARS for c in text):
        return text
    return "'" + text.replace("'", "'\\''") + "'"


def quote_posix(exe, args: Sequence[str]) -> str:
    """A shell command line running `exe` with `args`."""
    return " ".join(shell_quote(part) for part in [str(exe), *args])


def relaunch_args(argv: Sequence[str], cwd=None) -> list:
    """Arguments for the relaunched process.

    Drops the new-window flags and adds `--repo <cwd>` when no repository
    was given, since the new window may start in another directory.
    """
    args = [a for a in argv if a not in _RELAUNCH_FLAGS]
    has_repo = any(a == "--repo" or a.startswith("--repo=") for a in args)
    if not has_repo and cwd is not None:
        args += ["--repo", str(cwd)]
    return args


def _spawn_windows(exe: str, args: list) -> None:
    try:
        subprocess.Popen(
            ["cmd", "/C", "start", "", exe, *args],
            creationflags=_CREATE_NO_WINDOW,
        )
    except OSError as exc:
        raise RuntimeError("spawning new console window via cmd /c start") from exc


def _spawn_macos(exe: str, args: list) -> None:
    cmdline = quote_posix(exe, args)
    escaped = cmdline.replace("\\", "\\\\").replace('"', '\\"')
    script = (
        'tell application "Terminal"\n'
        f'    do script "{escaped}"\n'
        "    activate\n"
        "end tell"
    )
    try:
        subprocess.Popen(["osascript", "-e", script])
    except OSError as exc:
        raise RuntimeError("invoking osascript to open Terminal") from exc


def _spawn_unix(exe: str, args: list) -> None:
    candidates = []
    preferred = os.environ.get("TERMINAL")
    if preferred is not None:
        candidates.append((preferred, ["-e"]))
    candidates.extend(_TERMINALS)
    for term, flags in candidates:
        try:
            subprocess.Popen([term, *flags, exe, *args])
        except FileNotFoundError:
            continue
        except OSError as exc:
            raise RuntimeError(f"spawning {term}") from exc
        return
    raise RuntimeError(
        "no terminal emulator found; set $TERMINAL or install one of: "
        "x-terminal-emulator, gnome-terminal, konsole, alacritty, kitty, xterm"
    )


def spawn_detached(exe, args: Sequence[str]) -> None:
    """Open a new terminal window running `exe` with `args`."""
    exe = str(exe)
    args = list(args)
    if sys.platform == "win32":
        _spawn_windows(exe, args)
    elif sys.platform == "darwin":
        _spawn_macos(exe, args)
    else:
        _spawn_unix(exe, args)


def _relaunch_command() -> tuple:
    program = sys.argv[0] if sys.argv else ""
    if program.endswith(".py"):
        return sys.executable, ["-m", "difiko"]
    if program and Path(program).exists():
        return str(Path(program).resolve()), []
    found = shutil.which(program) if program else None
    if found is None:
        raise RuntimeError("locating current executable")
    return found, []


def relaunch_in_new_window(argv: Optional[Sequence[str]] = None) -> None:
    """Start the program again in a new window with the same arguments."""
    if argv is None:
        argv = sys.argv[1:]
    exe, prefix = _relaunch_command()
    try:
        cwd = os.getcwd()
    except OSError:
        cwd = None
    spawn_detached(exe, [*prefix, *relaunch_args(argv, cwd)])