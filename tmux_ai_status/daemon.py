"""
The poll loop: one cycle reads every tmux pane, decides a label per window,
and renames windows whose label changed.

Per cycle:
  1. list panes and scan the process table once
  2. compute a raw status per pane (process tree first, pane text second)
  3. roll panes up per window (any focused pane focuses the window; the
     busiest status wins)
  4. update unread state, add the unread glyph and topic word
  5. commit through hysteresis, then forget windows that disappeared
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from .models import PaneCapture, PaneInfo, WindowSummary
from .pane_text import classify_pane_attention_signature, classify_pane_completion_signature
from .procfs import ProcFS
from .process_tree import ProcessTable
from .schemas import DaemonConfig
from .stability import is_pane_active, set_window_status
from .status import get_status, is_working_status, status_priority
from .tmux import PaneBackend, get_pane_content
from .topic import TopicExtractor, format_status_with_topic
from .unread import apply_unread_glyph, clear_unread, is_unread, mark_unread, should_mark_unread
from .window_store import WindowStore

logger = logging.getLogger(__name__)


class StatusDaemon:
    def __init__(
        self,
        backend: PaneBackend,
        config: DaemonConfig | None = None,
        store: WindowStore | None = None,
        source: ProcFS | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or DaemonConfig()
        self.backend = backend
        self.store = store or WindowStore()
        self.source = source or ProcFS(self.config.proc_root)
        self.clock = clock
        self.topics = TopicExtractor(
            aliases=self.config.topic_aliases,
            stop_words=self.config.topic_stop_words,
            max_chars=self.config.topic_max_chars,
        )

    # ── One cycle ────────────────────────────────────────────────────────────

    def update_all_panes(self) -> dict[str, str]:
        """Run one cycle; returns the label computed for each window."""
        panes = self.backend.list_panes()
        if not panes:
            return {}

        table = ProcessTable.scan(self.source)
        now = self.clock()
        cache: dict[str, PaneCapture] = {}

        summaries: dict[str, WindowSummary] = {}
        for pane in panes:
            raw_status = self.pane_status(pane, table, cache, now)
            summary = summaries.get(pane.window)
            if summary is None:
                summaries[pane.window] = WindowSummary(status=raw_status, focused=pane.focused)
                continue
            summary.focused = summary.focused or pane.focused
            if status_priority(raw_status) > status_priority(summary.status):
                summary.status = raw_status

        labels = {
            window: self.update_window(window, summary, cache)
            for window, summary in summaries.items()
        }

        dropped = self.store.prune(summaries)
        if dropped:
            logger.debug("Forgot windows: %s", ", ".join(dropped))
        return labels

    def pane_status(
        self,
        pane: PaneInfo,
        table: ProcessTable,
        cache: dict[str, PaneCapture],
        now: float,
    ) -> str:
        def capture() -> PaneCapture:
            return get_pane_content(self.backend, pane.window, cache)

        def pane_active() -> bool:
            return is_pane_active(
                self.store,
                pane.window,
                capture(),
                now,
                grace=self.config.active_grace,
                stale_threshold=self.config.stale_active_threshold,
            )

        return get_status(pane.pid, table, capture, pane_active)

    def update_window(self, window: str, summary: WindowSummary, cache: dict[str, PaneCapture]) -> str:
        raw_status = summary.status
        focused = summary.focused
        is_working = is_working_status(raw_status)

        prompt_sig = ""
        done_sig = ""
        if not is_working and raw_status:
            capture = get_pane_content(self.backend, window, cache)
            if capture.ok:
                prompt_sig = classify_pane_attention_signature(capture.content)
                done_sig = classify_pane_completion_signature(capture.content)

        with self.store.memory(window) as mem:
            was_working = mem.was_working
            seen_before = mem.seen
            prev_prompt_sig = mem.prompt_sig
            prev_done_sig = mem.done_sig
            mem.was_working = is_working
            mem.seen = True
            mem.prompt_sig = prompt_sig
            mem.done_sig = done_sig

        if should_mark_unread(
            was_working,
            focused,
            is_working,
            raw_status,
            seen_before,
            prompt_sig,
            prev_prompt_sig,
            done_sig,
            prev_done_sig,
            require_alnum=self.config.prompt_text_requires_alnum,
        ):
            logger.debug("Window %s needs attention", window)
            mark_unread(self.store, window)
        if focused or is_working:
            clear_unread(self.store, window)

        status = raw_status
        if raw_status and not is_working:
            status = apply_unread_glyph(raw_status, is_unread(self.store, window))
        if status and self.config.show_topic:
            status = format_status_with_topic(status, self.remember_window_topic(window, cache))

        set_window_status(
            self.store,
            self.backend,
            window,
            status,
            threshold=self.config.stability_threshold,
        )
        return status

    def remember_window_topic(self, window: str, cache: dict[str, PaneCapture]) -> str:
        """Current topic, falling back to the last one seen for the window."""
        capture = get_pane_content(self.backend, window, cache)
        topic = self.topics.classify_pane_topic(capture.content) if capture.ok else ""
        with self.store.memory(window) as mem:
            if topic:
                mem.topic = topic
            return mem.topic

    # ── Loop ─────────────────────────────────────────────────────────────────

    def run_once(self) -> dict[str, str]:
        """One cycle that never raises; a failed cycle yields no labels."""
        try:
            return self.update_all_panes()
        except Exception:
            logger.exception("Poll cycle failed")
            return {}

    def run_forever(self, stop: threading.Event | None = None) -> None:
        """Poll until ``stop`` is set; a failing cycle never ends the loop."""
        stop = stop or threading.Event()
        logger.info("Polling tmux every %.1fs", self.config.poll_interval)
        while not stop.is_set():
            self.run_once()
            stop.wait(self.config.poll_interval)
