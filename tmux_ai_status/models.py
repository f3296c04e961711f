"""Typed data models for the tmux status daemon."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PaneInfo:
    """One line of ``tmux list-panes`` output."""

    window: str
    pid: int
    focused: bool = False


@dataclass
class PaneCapture:
    """Result of one ``capture-pane`` call; ``ok=False`` is a capture miss."""

    content: str = ""
    ok: bool = False


@dataclass
class AgentMatch:
    """The agent process found beneath a pane's shell."""

    pid: int = 0
    kind: str = ""

    def __bool__(self) -> bool:
        return self.pid != 0


@dataclass
class WindowSummary:
    """Per-window roll-up of every pane sharing the window."""

    status: str
    focused: bool = False


@dataclass
class WindowStatus:
    """Externally visible status plus the hysteresis bookkeeping."""

    applied: str = ""
    pending: str = ""
    count: int = 0
    unread: bool = False


@dataclass
class ActivityMemory:
    """What the daemon remembers about a window between cycles."""

    last_active: float | None = None
    active_sig: str = ""
    active_since: float | None = None
    was_working: bool = False
    seen: bool = False
    prompt_sig: str = ""
    done_sig: str = ""
    topic: str = ""
