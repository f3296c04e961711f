"""
Readers for the Linux ``/proc`` process-information files.

Every read failure yields an empty string or zero: a process that exits while
we are looking at it is simply treated as absent.
"""

from __future__ import annotations

import logging
import os

from .constants import PROC_ROOT

logger = logging.getLogger(__name__)


def parse_ppid_from_stat(stat: str) -> int:
    """Extract the parent pid from a ``/proc/<pid>/stat`` line.

    The command name is parenthesised and may itself contain spaces or
    parentheses, so fields are counted from the *last* closing paren:
    ``state ppid ...``.
    """
    i = stat.rfind(")")
    if i < 0 or i + 2 >= len(stat):
        return 0
    fields = stat[i + 2 :].split()
    if len(fields) < 2:
        return 0
    try:
        return int(fields[1])
    except ValueError:
        return 0


class ProcFS:
    """Filesystem-like process metadata source rooted at ``root``."""

    def __init__(self, root: str = PROC_ROOT):
        self.root = root

    def _read(self, pid: int, name: str) -> bytes:
        path = os.path.join(self.root, str(pid), name)
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            logger.debug("Cannot read %s: %s", path, e)
            return b""

    def list_pids(self) -> list[int]:
        """All numeric entries under the root, ascending."""
        try:
            names = os.listdir(self.root)
        except OSError as e:
            logger.warning("Cannot list %s: %s", self.root, e)
            return []
        return sorted(int(n) for n in names if n.isdigit())

    def read_stat(self, pid: int) -> str:
        return self._read(pid, "stat").decode("utf-8", errors="replace")

    def read_ppid(self, pid: int) -> int:
        return parse_ppid_from_stat(self.read_stat(pid))

    def read_cmdline(self, pid: int) -> str:
        """NUL-separated argv joined with spaces."""
        raw = self._read(pid, "cmdline").decode("utf-8", errors="replace")
        return raw.replace("\x00", " ")

    def read_comm(self, pid: int) -> str:
        return self._read(pid, "comm").decode("utf-8", errors="replace").strip()
