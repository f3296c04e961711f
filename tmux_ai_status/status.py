"""Status label vocabulary and the per-pane status decision."""

from __future__ import annotations

from collections.abc import Callable

from .constants import AGENT_CLAUDE, AGENT_PREFIXES, GLYPH_COMPUTING, GLYPH_GENERIC, GLYPH_IDLE
from .models import PaneCapture
from .pane_text import classify_pane_needs_attention
from .process_tree import ProcessTable, classify_children, collect_child_signals, find_agent


def is_working_status(status: str) -> bool:
    return status != "" and not status.endswith(GLYPH_IDLE)


def status_priority(status: str) -> int:
    """working > present but idle > no agent."""
    if is_working_status(status):
        return 2
    if status:
        return 1
    return 0


def unknown_child_status(prefix: str, pane_active: bool, needs_attention: bool) -> str:
    # An unclassified child next to a visible prompt is usually a background
    # terminal or a leftover helper, so the prompt wins.
    if needs_attention:
        return prefix + GLYPH_IDLE
    if pane_active:
        return prefix + GLYPH_COMPUTING
    return prefix + GLYPH_GENERIC


def pane_needs_attention(capture: PaneCapture) -> bool:
    return capture.ok and classify_pane_needs_attention(capture.content)


def get_status(
    pane_pid: int,
    table: ProcessTable,
    capture: Callable[[], PaneCapture],
    pane_active: Callable[[], bool],
) -> str:
    """Raw status for one pane.

    ``capture`` and ``pane_active`` are zero-argument callables so the pane
    is only captured, and the grace/staleness filter only consulted, when
    process classification alone cannot decide.
    """
    agent = find_agent(pane_pid, table)
    if not agent:
        return ""

    prefix = AGENT_PREFIXES.get(agent.kind, AGENT_PREFIXES[AGENT_CLAUDE])
    child_status = classify_children(collect_child_signals(agent.pid, table))

    if child_status == GLYPH_GENERIC:
        return unknown_child_status(prefix, pane_active(), pane_needs_attention(capture()))
    if child_status:
        return prefix + child_status

    # No live child work: a visible prompt means idle/waiting.
    if pane_needs_attention(capture()):
        return prefix + GLYPH_IDLE
    if pane_active():
        return prefix + GLYPH_COMPUTING
    return prefix + GLYPH_IDLE
