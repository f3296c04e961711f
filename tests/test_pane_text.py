"""Tests for pane_text.py — active, prompt and completion detection."""

import pytest

from tmux_ai_status.pane_text import (
    classify_pane_active_signature,
    classify_pane_attention_signature,
    classify_pane_completion_signature,
    classify_pane_content,
    classify_pane_needs_attention,
    detect_prompt_signature,
    has_active_marker,
    is_completion_line,
    iter_recent_lines,
    prompt_kind,
)

# ---------------------------------------------------------------------------
# Line-level markers
# ---------------------------------------------------------------------------


class TestHasActiveMarker:
    @pytest.mark.parametrize(
        "line",
        [
            "(esc to interrupt)",
            "· Thinking… (5s · esc to interrupt)",
            "✢ Transfiguring… (thought for 6s)",
            "· Pondering... (1s)",
            "* Perusing…",
        ],
    )
    def test_active(self, line):
        assert has_active_marker(line)

    @pytest.mark.parametrize(
        "line",
        [
            "✻ Cogitated for 1m 27s",
            "I am discussing...",
            "• Summary",
            "Thinking… without a spinner",
        ],
    )
    def test_not_active(self, line):
        assert not has_active_marker(line)


class TestIsCompletionLine:
    @pytest.mark.parametrize(
        "line, expected",
        [
            ("Done.", True),
            ("Done. Deployed to staging", True),
            ("All set.", True),
            ("All set. Tests pass", True),
            ("─ Worked for 1m 51s ──────", True),
            ("Done.x", False),
            ("Done", False),
            ("Not Done.", False),
        ],
    )
    def test_completion(self, line, expected):
        assert is_completion_line(line) is expected


class TestPromptKind:
    def test_codex(self):
        assert prompt_kind("› Explain this codebase") == "codex"
        assert prompt_kind("›") == "codex"

    def test_claude(self):
        assert prompt_kind("❯ fix it") == "claude"
        assert prompt_kind("❯") == "claude"

    def test_glyph_without_space_is_not_prompt(self):
        assert prompt_kind("›foo") == ""
        assert prompt_kind("$ ls") == ""


class TestIterRecentLines:
    def test_bottom_up_skipping_blanks(self):
        assert list(iter_recent_lines("a\n\n b \n\n", 10)) == ["b", "a"]

    def test_depth_counts_non_blank_lines(self):
        content = "\n".join(str(i) for i in range(30))
        assert len(list(iter_recent_lines(content, 12))) == 12


# ---------------------------------------------------------------------------
# classify_pane_content
# ---------------------------------------------------------------------------


class TestClassifyPaneContent:
    @pytest.mark.parametrize(
        "content",
        [
            "some output\n  (esc to interrupt)\n❯ \n",
            "· Thinking… (5s · esc to interrupt)\n❯ \n",
            "• Planning try removal patch (5m 42s • esc to interrupt)\n› \n",
            "✢ Transfiguring… (thought for 6s)\n❯ \n",
            "· Brewing… (2s)\n❯ \n",
            "· Leavening… (54s · ↑ 1.0k tokens · thought for 28s)\n❯ \n",
            "✻ Zymurgying… (3s)\n❯ \n",
            "· Pondering... (1s)\n❯ \n",
            "* Perusing…\n\n──────\n❯ \n",
            "• Implementing normalization, filtering, and selection logic (2m 23s • esc to interrupt)\n"
            "\n"
            "› Run /review on my current changes\n"
            "\n"
            "  gpt-5.3-codex xhigh · 58% left · ~/content-magic-weaver\n",
        ],
    )
    def test_active(self, content):
        assert classify_pane_content(content) is True

    @pytest.mark.parametrize(
        "content",
        [
            "output\n\n❯ \n──────\n  🟢 19%\n  ⏵⏵ bypass permissions on\n",
            "Done.\n\n› Explain this codebase\n\n  gpt-5.3-codex · 87% left\n",
            "─ Worked for 1m 51s ──────\n• Deployed.\n› \n",
            "✻ Cogitated for 1m 27s\n❯ \n",
            "Discussion summary...\nI am discussing...\n› Explain this codebase\n",
            "",
            "$ ls\nfile1\n$ \n",
        ],
    )
    def test_idle(self, content):
        assert classify_pane_content(content) is False

    def test_completion_nearer_bottom_wins(self):
        content = "· Thinking… (3s · esc to interrupt)\nDone.\n❯ \n"
        assert classify_pane_content(content) is False

    def test_active_beyond_scan_depth_ignored(self):
        content = "· Thinking… (esc to interrupt)\n" + "\n".join(f"line {i}" for i in range(12))
        assert classify_pane_content(content) is False


# ---------------------------------------------------------------------------
# Signatures
# ---------------------------------------------------------------------------


class TestClassifyPaneAttentionSignature:
    def test_codex_prompt_with_text(self):
        content = "Done.\n\n› Explain this codebase\n  gpt-5.3-codex · 87% left\n"
        assert classify_pane_attention_signature(content) == "codex:› Explain this codebase"

    def test_claude_bare_prompt(self):
        assert classify_pane_attention_signature("All set.\n\n❯ \n") == "claude:❯"

    def test_suppressed_while_active(self):
        content = "· Thinking… (5s · esc to interrupt)\n❯ \n"
        assert classify_pane_content(content) is True
        assert classify_pane_attention_signature(content) == ""

    def test_no_prompt(self):
        assert classify_pane_attention_signature("$ ls\nfile1\n$ \n") == ""


class TestClassifyPaneNeedsAttention:
    @pytest.mark.parametrize(
        "content, expected",
        [
            ("Done.\n\n› Run /review on my current changes\n\n  gpt-5.3-codex · 87% left\n", True),
            ("All set.\n\n❯ \n──────\n  🟢 19%\n", True),
            ("· Thinking… (5s · esc to interrupt)\n❯ \n", False),
            ("$ ls\nfile1\n$ \n", False),
        ],
    )
    def test_needs_attention(self, content, expected):
        assert classify_pane_needs_attention(content) is expected


class TestDetectPromptSignature:
    def test_ignores_activity(self):
        content = "· Thinking… (5s · esc to interrupt)\n› Summarize recent commits\n"
        assert detect_prompt_signature(content) == "codex:› Summarize recent commits"

    def test_status_footer_below_prompt(self):
        content = "Done.\n\n› Summarize recent commits\n\n  gpt-5.3-codex xhigh · 45% left\n"
        assert detect_prompt_signature(content) == "codex:› Summarize recent commits"


class TestClassifyPaneActiveSignature:
    def test_newest_active_line(self):
        content = (
            "Done.\n\n◦ Planning broad tests and monitoring (1m 03s • esc to interrupt)\n"
            "› Find and fix a bug in @filename\n"
        )
        assert (
            classify_pane_active_signature(content)
            == "◦ Planning broad tests and monitoring (1m 03s • esc to interrupt)"
        )

    def test_none(self):
        assert classify_pane_active_signature("Done.\n› \n") == ""


class TestClassifyPaneCompletionSignature:
    @pytest.mark.parametrize(
        "content, expected",
        [
            ("─ Worked for 2m 21s ─\n• Summary\n› Next task\n", "─ Worked for 2m 21s ─"),
            ("Done.\n\n› Explain this codebase\n", "Done."),
            ("Random output\n› prompt\n", ""),
        ],
    )
    def test_completion_signature(self, content, expected):
        assert classify_pane_completion_signature(content) == expected

    def test_scans_deeper_than_activity(self):
        content = "All set.\n" + "\n".join(f"summary line {i}" for i in range(15))
        assert classify_pane_completion_signature(content) == "All set."
        assert classify_pane_content("· Thinking… (esc to interrupt)\n" + content) is False

    def test_end_to_end_signatures(self):
        content = "Done.\n\n› Explain this codebase\n"
        assert classify_pane_attention_signature(content) == "codex:› Explain this codebase"
        assert classify_pane_completion_signature(content) == "Done."
