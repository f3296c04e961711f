"""
Process topology and descendant classification.

Builds a parent → children index from a full ``/proc`` scan, locates the
coding agent beneath a pane's shell, and maps the agent's live helper
subprocesses to a coarse activity glyph (build, test, package, ...).
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Mapping

from .constants import (
    AGENT_MARKERS,
    AGENT_RUNTIME_NAMES,
    AGENT_SEARCH_DEPTH,
    CHILD_MARKER_GROUPS,
    GLYPH_GENERIC,
)
from .models import AgentMatch
from .procfs import ProcFS

logger = logging.getLogger(__name__)


def build_child_map(source: ProcFS) -> dict[int, list[int]]:
    """Index every live process under its parent.

    A process whose parent is unknown (zero) or itself gets no edge.
    """
    children: dict[int, list[int]] = {}
    for pid in source.list_pids():
        ppid = source.read_ppid(pid)
        if ppid > 0 and ppid != pid:
            children.setdefault(ppid, []).append(pid)
    return children


class ProcessTable:
    """One cycle's view of the process table.

    The child index is built once per cycle; ``cmdline`` and ``comm`` reads
    are memoised so each process is read at most once per cycle.
    """

    def __init__(self, children: Mapping[int, list[int]], source: ProcFS | None = None):
        self.children = children
        self._source = source or ProcFS()
        self._cmdlines: dict[int, str] = {}
        self._comms: dict[int, str] = {}

    @classmethod
    def scan(cls, source: ProcFS) -> ProcessTable:
        return cls(build_child_map(source), source)

    def children_of(self, pid: int) -> list[int]:
        return list(self.children.get(pid, ()))

    def cmdline(self, pid: int) -> str:
        if pid not in self._cmdlines:
            self._cmdlines[pid] = self._source.read_cmdline(pid)
        return self._cmdlines[pid]

    def comm(self, pid: int) -> str:
        if pid not in self._comms:
            self._comms[pid] = self._source.read_comm(pid)
        return self._comms[pid]


def agent_kind(cmdline: str) -> str:
    """Return the agent kind named in ``cmdline`` (case-insensitive), or ""."""
    lower = cmdline.lower()
    for marker in AGENT_MARKERS:
        if marker in lower:
            return marker
    return ""


def find_agent(pane_pid: int, table: ProcessTable) -> AgentMatch:
    """Find the agent process among the children and grandchildren of a shell.

    Searched breadth-first; the first match in enumeration order wins.
    Deeper descendants are never considered.
    """
    generation = table.children_of(pane_pid)
    for _ in range(AGENT_SEARCH_DEPTH):
        for pid in generation:
            kind = agent_kind(table.cmdline(pid))
            if kind:
                return AgentMatch(pid=pid, kind=kind)
        generation = [child for pid in generation for child in table.children_of(pid)]
    return AgentMatch()


def collect_descendants(pid: int, children: Mapping[int, Iterable[int]]) -> list[int]:
    """All transitive descendants of ``pid``, breadth-first."""
    result: list[int] = []
    visited = {pid}
    queue = deque(children.get(pid, ()))
    while queue:
        p = queue.popleft()
        if p in visited:
            continue
        visited.add(p)
        result.append(p)
        queue.extend(children.get(p, ()))
    return result


def _mentions_agent(text: str) -> bool:
    return any(marker in text for marker in AGENT_MARKERS)


def is_agent_like_process(comm: str, cmdline: str) -> bool:
    """True for the agent's own runtime threads and helpers (lower-cased input)."""
    if not comm and not cmdline:
        return True
    if _mentions_agent(comm) or comm in AGENT_RUNTIME_NAMES:
        if not cmdline or _mentions_agent(cmdline):
            return True
    return _mentions_agent(cmdline)


def collect_child_signals(agent_pid: int, table: ProcessTable) -> list[str]:
    """Lower-cased command text of every live, non-agent descendant."""
    signals = []
    for pid in collect_descendants(agent_pid, table.children):
        comm = table.comm(pid).lower()
        cmdline = table.cmdline(pid).lower()
        if is_agent_like_process(comm, cmdline):
            continue
        signal = cmdline or comm
        if signal:
            signals.append(signal)
    if signals:
        logger.debug("Agent %d has live children: %s", agent_pid, signals)
    return signals


def classify_children(signals: list[str]) -> str:
    """Map descendant command lines to an activity glyph.

    Marker groups are checked in order, so a build marker anywhere in the
    joined text wins over test or package markers. An empty list means no
    live child work and yields "".
    """
    if not signals:
        return ""
    joined = "\n".join(signals).lower()
    for markers, glyph in CHILD_MARKER_GROUPS:
        if any(marker in joined for marker in markers):
            return glyph
    return GLYPH_GENERIC
