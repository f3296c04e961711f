"""
Per-window state that survives between poll cycles.

Two record groups, each behind its own lock:

- ``WindowStatus``: the label currently shown, hysteresis bookkeeping, and
  the unread flag.
- ``ActivityMemory``: grace-period and staleness timestamps, last-cycle
  working flag, baseline signatures and the remembered topic.

Records are created on first access and forgotten by ``prune`` once their
window disappears from ``tmux list-panes``.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import replace

from .models import ActivityMemory, WindowStatus
from .schemas import WindowStateSnapshot


class WindowStore:
    def __init__(self):
        self._status: dict[str, WindowStatus] = {}
        self._memory: dict[str, ActivityMemory] = {}
        self._status_lock = threading.Lock()
        self._memory_lock = threading.Lock()

    @contextmanager
    def status(self, window: str) -> Iterator[WindowStatus]:
        """Lock and yield the status record for ``window``, creating it."""
        with self._status_lock:
            record = self._status.get(window)
            if record is None:
                record = self._status[window] = WindowStatus()
            yield record

    @contextmanager
    def memory(self, window: str) -> Iterator[ActivityMemory]:
        """Lock and yield the activity memory for ``window``, creating it."""
        with self._memory_lock:
            record = self._memory.get(window)
            if record is None:
                record = self._memory[window] = ActivityMemory()
            yield record

    def peek_status(self, window: str) -> WindowStatus | None:
        with self._status_lock:
            record = self._status.get(window)
            return replace(record) if record else None

    def peek_memory(self, window: str) -> ActivityMemory | None:
        with self._memory_lock:
            record = self._memory.get(window)
            return replace(record) if record else None

    def windows(self) -> list[str]:
        with self._status_lock, self._memory_lock:
            return sorted(set(self._status) | set(self._memory))

    def prune(self, seen: Iterable[str]) -> list[str]:
        """Forget every window not in ``seen``; returns the forgotten ids."""
        keep = set(seen)
        dropped: set[str] = set()
        with self._status_lock:
            for window in [w for w in self._status if w not in keep]:
                del self._status[window]
                dropped.add(window)
        with self._memory_lock:
            for window in [w for w in self._memory if w not in keep]:
                del self._memory[window]
                dropped.add(window)
        return sorted(dropped)

    def snapshot(self) -> list[WindowStateSnapshot]:
        """Point-in-time copy of every window's state, sorted by window id."""
        result = []
        for window in self.windows():
            status = self.peek_status(window) or WindowStatus()
            memory = self.peek_memory(window) or ActivityMemory()
            result.append(
                WindowStateSnapshot(
                    window=window,
                    applied=status.applied,
                    pending=status.pending,
                    pending_count=status.count,
                    unread=status.unread,
                    working=memory.was_working,
                    prompt_sig=memory.prompt_sig,
                    done_sig=memory.done_sig,
                    topic=memory.topic,
                )
            )
        return result

    def __len__(self) -> int:
        return len(self.windows())
