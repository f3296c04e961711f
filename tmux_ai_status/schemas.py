"""
Pydantic models for the daemon's configuration file and state snapshots.

``DaemonConfig`` validates the optional JSON config; ``WindowStateSnapshot``
is the JSON shape printed by ``tmux-ai-status once --json``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    ACTIVE_GRACE,
    POLL_INTERVAL,
    PROC_ROOT,
    STABILITY_THRESHOLD,
    STALE_ACTIVE_THRESHOLD,
    TMUX_TIMEOUT,
    TOPIC_MAX_CHARS,
)

# ── Configuration (~/.config/tmux-ai-status/config.json) ─────────────────────


class DaemonConfig(BaseModel):
    """Tunable daemon settings; every field has a working default."""

    model_config = ConfigDict(extra="ignore")

    poll_interval: float = Field(default=POLL_INTERVAL, gt=0)
    active_grace: float = Field(default=ACTIVE_GRACE, ge=0)
    stale_active_threshold: float = Field(default=STALE_ACTIVE_THRESHOLD, gt=0)
    stability_threshold: int = Field(default=STABILITY_THRESHOLD, ge=1)
    tmux_bin: str = "tmux"
    tmux_timeout: float = Field(default=TMUX_TIMEOUT, gt=0)
    proc_root: str = PROC_ROOT
    show_topic: bool = True
    topic_max_chars: int = Field(default=TOPIC_MAX_CHARS, ge=1)
    topic_aliases: dict[str, str] = Field(default_factory=dict)
    topic_stop_words: list[str] = Field(default_factory=list)
    prompt_text_requires_alnum: bool = False
    """When true, a first-seen prompt only counts as attention-worthy if its
    text has a letter or digit. By default any non-blank text after the glyph
    counts."""


# ── Window state (once --json) ───────────────────────────────────────────────


class WindowStateSnapshot(BaseModel):
    """One window's state after a cycle."""

    window: str
    applied: str = ""
    pending: str = ""
    pending_count: int = 0
    unread: bool = False
    working: bool = False
    prompt_sig: str = ""
    done_sig: str = ""
    topic: str = ""
