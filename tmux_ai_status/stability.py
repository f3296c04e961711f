"""
Anti-flicker filters layered over the raw per-cycle classification.

- Grace period: a pane confirmed active within ``grace`` seconds still
  counts as active, absorbing blank frames from spinner redraws.
- Staleness: an active line that has not changed for ``threshold`` seconds
  while a prompt is also visible is a frozen spinner, not work.
- Hysteresis: a new label must be seen for ``threshold`` consecutive
  cycles before the window is renamed.
"""

from __future__ import annotations

import logging
import time

from .constants import ACTIVE_GRACE, STABILITY_THRESHOLD, STALE_ACTIVE_THRESHOLD
from .models import PaneCapture
from .pane_text import classify_pane_active_signature, classify_pane_content, detect_prompt_signature
from .tmux import PaneBackend
from .window_store import WindowStore

logger = logging.getLogger(__name__)


def clear_active_marker(store: WindowStore, window: str) -> None:
    with store.memory(window) as mem:
        mem.active_sig = ""
        mem.active_since = None


def is_stale_active_marker(
    store: WindowStore,
    window: str,
    content: str,
    now: float,
    threshold: float = STALE_ACTIVE_THRESHOLD,
) -> bool:
    """True once the same active line has sat above a visible prompt too long."""
    active_sig = classify_pane_active_signature(content)
    prompt_sig = detect_prompt_signature(content)
    with store.memory(window) as mem:
        if not active_sig:
            mem.active_sig = ""
            mem.active_since = None
            return False
        if not prompt_sig or mem.active_sig != active_sig or mem.active_since is None:
            mem.active_sig = active_sig
            mem.active_since = now
            return False
        return now - mem.active_since >= threshold


def is_pane_active(
    store: WindowStore,
    window: str,
    capture: PaneCapture,
    now: float | None = None,
    grace: float = ACTIVE_GRACE,
    stale_threshold: float = STALE_ACTIVE_THRESHOLD,
) -> bool:
    """Whether the pane is computing, after staleness and grace filtering."""
    if now is None:
        now = time.monotonic()
    active = False

    if capture.ok:
        active = classify_pane_content(capture.content)
        if active:
            active = not is_stale_active_marker(store, window, capture.content, now, stale_threshold)
            if not active:
                logger.debug("Window %s: active marker is stale", window)
        else:
            clear_active_marker(store, window)
    else:
        clear_active_marker(store, window)

    with store.memory(window) as mem:
        if active:
            mem.last_active = now
            return True
        if mem.last_active is not None:
            if now - mem.last_active < grace:
                return True
            mem.last_active = None
        return False


def set_window_status(
    store: WindowStore,
    backend: PaneBackend,
    window: str,
    status: str,
    threshold: int = STABILITY_THRESHOLD,
) -> bool:
    """Rename ``window`` once ``status`` has held for ``threshold`` cycles.

    Returns True when the rename was issued this call. An empty status
    hands naming back to tmux.
    """
    with store.status(window) as ws:
        if status == ws.applied:
            ws.pending = ""
            ws.count = 0
            return False

        if status == ws.pending:
            ws.count += 1
        else:
            ws.pending = status
            ws.count = 1

        if ws.count < threshold:
            return False

        ws.applied = status
        ws.pending = ""
        ws.count = 0

    logger.info("window %s -> %r", window, status)
    if status:
        backend.rename_window(window, status)
    else:
        backend.restore_automatic_rename(window)
    return True
