"""Tests for stability.py — grace period, stale markers and hysteresis."""

from tmux_ai_status.models import PaneCapture
from tmux_ai_status.stability import (
    clear_active_marker,
    is_pane_active,
    is_stale_active_marker,
    set_window_status,
)

FROZEN = (
    "◦ Planning broad tests and monitoring (1m 03s • esc to interrupt)\n"
    "› Find and fix a bug in @filename\n"
)
THINKING = "· Thinking… (5s · esc to interrupt)\n"
IDLE = "Done.\n\n› \n"


# ---------------------------------------------------------------------------
# is_stale_active_marker
# ---------------------------------------------------------------------------


class TestIsStaleActiveMarker:
    def test_first_sight_is_fresh(self, store):
        assert is_stale_active_marker(store, "w", FROZEN, 100.0) is False
        assert store.peek_memory("w").active_since == 100.0

    def test_under_threshold_is_fresh(self, store):
        is_stale_active_marker(store, "w", FROZEN, 100.0)
        assert is_stale_active_marker(store, "w", FROZEN, 111.9) is False

    def test_reaching_threshold_is_stale(self, store):
        is_stale_active_marker(store, "w", FROZEN, 100.0)
        assert is_stale_active_marker(store, "w", FROZEN, 112.0) is True
        assert is_stale_active_marker(store, "w", FROZEN, 130.0) is True

    def test_changed_line_resets(self, store):
        is_stale_active_marker(store, "w", FROZEN, 100.0)
        changed = FROZEN.replace("1m 03s", "1m 04s")
        assert is_stale_active_marker(store, "w", changed, 113.0) is False
        assert is_stale_active_marker(store, "w", changed, 124.0) is False
        assert is_stale_active_marker(store, "w", changed, 125.0) is True

    def test_without_prompt_never_stale(self, store):
        assert is_stale_active_marker(store, "w", THINKING, 100.0) is False
        assert is_stale_active_marker(store, "w", THINKING, 200.0) is False
        assert store.peek_memory("w").active_since == 200.0

    def test_custom_threshold(self, store):
        is_stale_active_marker(store, "w", FROZEN, 0.0, threshold=3.0)
        assert is_stale_active_marker(store, "w", FROZEN, 3.0, threshold=3.0) is True

    def test_no_marker_clears_tracking(self, store):
        is_stale_active_marker(store, "w", FROZEN, 100.0)
        assert is_stale_active_marker(store, "w", IDLE, 101.0) is False
        mem = store.peek_memory("w")
        assert mem.active_sig == ""
        assert mem.active_since is None

    def test_clear_active_marker(self, store):
        is_stale_active_marker(store, "w", FROZEN, 100.0)
        clear_active_marker(store, "w")
        assert store.peek_memory("w").active_sig == ""


# ---------------------------------------------------------------------------
# is_pane_active
# ---------------------------------------------------------------------------


class TestIsPaneActive:
    def test_active_content_records_timestamp(self, store):
        assert is_pane_active(store, "w", PaneCapture(THINKING, True), now=50.0) is True
        assert store.peek_memory("w").last_active == 50.0

    def test_grace_period_covers_capture_miss(self, store):
        with store.memory("w") as mem:
            mem.last_active = 95.0
        assert is_pane_active(store, "w", PaneCapture(ok=False), now=100.0) is True

    def test_grace_period_covers_blank_frame(self, store):
        is_pane_active(store, "w", PaneCapture(THINKING, True), now=0.0)
        assert is_pane_active(store, "w", PaneCapture("", True), now=2.0) is True

    def test_grace_expired(self, store):
        with store.memory("w") as mem:
            mem.last_active = 100.0 - 10.0 - 1.0
        assert is_pane_active(store, "w", PaneCapture(ok=False), now=100.0) is False
        assert store.peek_memory("w").last_active is None

    def test_grace_boundary_is_exclusive(self, store):
        with store.memory("w") as mem:
            mem.last_active = 90.0
        assert is_pane_active(store, "w", PaneCapture(ok=False), now=100.0) is False

    def test_no_history(self, store):
        assert is_pane_active(store, "w", PaneCapture(ok=False), now=100.0) is False

    def test_custom_grace(self, store):
        with store.memory("w") as mem:
            mem.last_active = 97.0
        assert is_pane_active(store, "w", PaneCapture(ok=False), now=100.0, grace=2.0) is False

    def test_stale_marker_stops_counting_once_grace_runs_out(self, store):
        capture = PaneCapture(FROZEN, True)
        assert is_pane_active(store, "w", capture, now=0.0) is True
        assert is_pane_active(store, "w", capture, now=12.0) is False

    def test_stale_marker_still_inside_grace(self, store):
        capture = PaneCapture(FROZEN, True)
        for t in (0.0, 2.0, 4.0, 6.0, 8.0, 10.0):
            assert is_pane_active(store, "w", capture, now=t) is True
        # stale from t=12, but last confirmed activity was t=10
        assert is_pane_active(store, "w", capture, now=12.0) is True
        assert is_pane_active(store, "w", capture, now=20.0) is False


# ---------------------------------------------------------------------------
# set_window_status (hysteresis)
# ---------------------------------------------------------------------------


class TestSetWindowStatus:
    def test_default_threshold_applies_immediately(self, store, fake_tmux):
        assert set_window_status(store, fake_tmux, "s:1", "c 🧠") is True
        assert fake_tmux.renames == [("s:1", "c 🧠")]
        assert store.peek_status("s:1").applied == "c 🧠"

    def test_same_status_is_noop(self, store, fake_tmux):
        set_window_status(store, fake_tmux, "s:1", "c 🧠")
        assert set_window_status(store, fake_tmux, "s:1", "c 🧠") is False
        assert len(fake_tmux.renames) == 1

    def test_waits_for_threshold(self, store, fake_tmux):
        for _ in range(2):
            assert set_window_status(store, fake_tmux, "s:1", "x 🔨", threshold=3) is False
        assert fake_tmux.renames == []
        assert store.peek_status("s:1").count == 2
        assert set_window_status(store, fake_tmux, "s:1", "x 🔨", threshold=3) is True
        assert fake_tmux.renames == [("s:1", "x 🔨")]
        ws = store.peek_status("s:1")
        assert (ws.pending, ws.count) == ("", 0)

    def test_alternating_values_never_commit(self, store, fake_tmux):
        for status in ["x 🧠", "x 💤"] * 5:
            set_window_status(store, fake_tmux, "s:1", status, threshold=2)
        assert fake_tmux.renames == []
        assert store.peek_status("s:1").count == 1

    def test_returning_to_applied_clears_pending(self, store, fake_tmux):
        set_window_status(store, fake_tmux, "s:1", "c 💤")
        set_window_status(store, fake_tmux, "s:1", "c 🧠", threshold=2)
        set_window_status(store, fake_tmux, "s:1", "c 💤", threshold=2)
        ws = store.peek_status("s:1")
        assert (ws.applied, ws.pending, ws.count) == ("c 💤", "", 0)

    def test_empty_status_restores_automatic_rename(self, store, fake_tmux):
        set_window_status(store, fake_tmux, "s:1", "c 💤")
        set_window_status(store, fake_tmux, "s:1", "")
        assert fake_tmux.restored == ["s:1"]

    def test_empty_status_on_new_window_is_noop(self, store, fake_tmux):
        assert set_window_status(store, fake_tmux, "s:1", "") is False
        assert fake_tmux.restored == []
