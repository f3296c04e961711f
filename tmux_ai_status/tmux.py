"""
tmux adapter: list panes, capture pane text, rename windows.

The daemon only talks to tmux through the ``PaneBackend`` protocol so tests
can substitute an in-memory fake. Every failure (non-zero exit, missing
binary, timeout) is reported as "no data" rather than raised.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Protocol

from .constants import LIST_PANES_FORMAT, TMUX_TIMEOUT
from .models import PaneCapture, PaneInfo

logger = logging.getLogger(__name__)


class PaneBackend(Protocol):
    def list_panes(self) -> list[PaneInfo]: ...

    def capture_pane(self, window: str) -> str | None: ...

    def rename_window(self, window: str, name: str) -> None: ...

    def restore_automatic_rename(self, window: str) -> None: ...


def parse_list_panes(output: str) -> list[PaneInfo]:
    """Parse ``window pid active`` lines; malformed lines are skipped."""
    panes = []
    for line in output.splitlines():
        fields = line.split()
        if len(fields) < 3:
            continue
        try:
            pid = int(fields[1])
        except ValueError:
            logger.debug("Skipping list-panes line with bad pid: %r", line)
            continue
        panes.append(PaneInfo(window=fields[0], pid=pid, focused=fields[2] == "1"))
    return panes


class TmuxClient:
    """``PaneBackend`` that shells out to the tmux binary."""

    def __init__(self, tmux_bin: str = "tmux", timeout: float = TMUX_TIMEOUT):
        self.tmux_bin = tmux_bin
        self.timeout = timeout

    def _run(self, *args: str) -> str | None:
        cmd = [self.tmux_bin, *args]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("tmux %s failed: %s", args[0], e)
            return None
        if result.returncode != 0:
            logger.debug("tmux %s exited %d: %s", args[0], result.returncode, result.stderr.strip())
            return None
        return result.stdout

    def list_panes(self) -> list[PaneInfo]:
        out = self._run("list-panes", "-a", "-F", LIST_PANES_FORMAT)
        if out is None:
            return []
        return parse_list_panes(out)

    def capture_pane(self, window: str) -> str | None:
        return self._run("capture-pane", "-t", window, "-p")

    def rename_window(self, window: str, name: str) -> None:
        self._run("rename-window", "-t", window, name)

    def restore_automatic_rename(self, window: str) -> None:
        self._run("set-option", "-t", window, "automatic-rename", "on")


def get_pane_content(backend: PaneBackend, window: str, cache: dict[str, PaneCapture]) -> PaneCapture:
    """Capture ``window`` at most once per cycle; misses are cached too."""
    capture = cache.get(window)
    if capture is None:
        content = backend.capture_pane(window)
        if content is None:
            capture = PaneCapture(ok=False)
        else:
            capture = PaneCapture(content=content, ok=True)
        cache[window] = capture
    return capture
