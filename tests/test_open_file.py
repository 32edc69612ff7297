import sys
from pathlib import Path
from unittest import mock

import pytest

from difiko.open_file import open_command, open_in_default_app


@pytest.mark.parametrize(
    "platform, prefix",
    [
        ("linux", ["xdg-open"]),
        ("darwin", ["open"]),
        ("win32", ["cmd", "/C", "start", ""]),
    ],
)
def test_open_command_per_platform(monkeypatch, platform, prefix):
    monkeypatch.setattr(sys, "platform", platform)
    path = Path("/tmp/theme.json")
    assert open_command(path) == [*prefix, str(path)]


def test_open_in_default_app_spawns_command(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    with mock.patch("difiko.open_file.subprocess.Popen") as popen:
        result = open_in_default_app("/tmp/a.txt")
    assert result is None
    assert popen.call_args.args[0] == ["xdg-open", "/tmp/a.txt"]
    assert "creationflags" not in popen.call_args.kwargs


def test_open_in_default_app_hides_window_on_windows(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    with mock.patch("difiko.open_file.subprocess.Popen") as popen:
        result = open_in_default_app("C:\\a.txt")
    assert result is None
    assert popen.call_args.args[0] == ["cmd", "/C", "start", "", "C:\\a.txt"]
    assert popen.call_args.kwargs["creationflags"] == 0x0800_0000


def test_open_in_default_app_reports_failure(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    with mock.patch(
        "difiko.open_file.subprocess.Popen", side_effect=FileNotFoundError("xdg-open")
    ):
        with pytest.raises(RuntimeError, match="/tmp/a.txt") as info:
            open_in_default_app("/tmp/a.txt")
    assert isinstance(info.value.__cause__, FileNotFoundError)