"""Open a file in the user's default graphical application."""

from __future__ import annotations

import subprocess
import sys

_CREATE_NO_WINDOW = 0x0800_0000


def open_command(path) -> list:
    """The command line that opens `path` with the platform's default handler."""
    target = str(path)
    if sys.platform == "win32":
        return ["cmd", "/C", "start", "", target]
    if sys.platform == "darwin":
        return ["open", target]
    return ["xdg-open", target]


def open_in_default_app(path) -> None:
    """Launch the default application for `path` without waiting for it."""
    command = open_command(path)
    options = {"creationflags": _CREATE_NO_WINDOW} if sys.platform == "win32" else {}
    try:
        subprocess.Popen(command, **options)
    except OSError as exc:
        raise RuntimeError(f"opening {path}: could not start {command[0]}") from exc