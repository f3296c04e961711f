"""Shared pytest fixtures for the test suite."""

import os
import shutil
import sys

import pytest

# Make the package importable without an editable install
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tmux_ai_status.procfs import ProcFS  # noqa: E402
from tmux_ai_status.window_store import WindowStore  # noqa: E402


class FakeProc:
    """Writes a fake /proc tree (stat, comm, cmdline per pid) under a tmp dir."""

    def __init__(self, root):
        self.root = root

    def add(self, pid, ppid, comm="sh", argv=(), write_comm=True):
        proc_dir = self.root / str(pid)
        proc_dir.mkdir(parents=True, exist_ok=True)
        (proc_dir / "stat").write_text(f"{pid} ({comm}) S {ppid} {pid} {pid} 0 -1 4194304\n")
        if write_comm:
            (proc_dir / "comm").write_text(comm + "\n")
        (proc_dir / "cmdline").write_bytes(b"".join(arg.encode() + b"\x00" for arg in argv))
        return pid

    def remove(self, pid):
        shutil.rmtree(self.root / str(pid))

    @property
    def source(self):
        return ProcFS(str(self.root))


class FakeTmux:
    """In-memory PaneBackend that records every call."""

    def __init__(self, panes=None, contents=None):
        self.panes = list(panes or [])
        self.contents = dict(contents or {})
        self.captures = []
        self.renames = []
        self.restored = []

    def list_panes(self):
        return list(self.panes)

    def capture_pane(self, window):
        self.captures.append(window)
        return self.contents.get(window)

    def rename_window(self, window, name):
        self.renames.append((window, name))

    def restore_automatic_rename(self, window):
        self.restored.append(window)


@pytest.fixture
def fake_proc(tmp_path):
    """Fixture that returns a helper to build a fake /proc tree."""
    root = tmp_path / "proc"
    root.mkdir()
    return FakeProc(root)


@pytest.fixture
def fake_tmux():
    return FakeTmux()


@pytest.fixture
def store():
    return WindowStore()
