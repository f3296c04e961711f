"""
Classify captured pane text.

All scans walk the captured buffer bottom-up, skipping blank lines, because
the spinner and prompt always sit near the end of the scrollback.
"""

from __future__ import annotations

from collections.abc import Iterator

from .constants import (
    ACTIVITY_SCAN_LINES,
    COMPLETION_BANNER,
    COMPLETION_EXACT,
    COMPLETION_SCAN_LINES,
    GERUND_CUES,
    INTERRUPT_HINT,
    PROMPT_GLYPHS,
    SPINNER_PREFIXES,
)


def iter_recent_lines(content: str, limit: int) -> Iterator[str]:
    """Yield up to ``limit`` stripped, non-blank lines, newest first."""
    checked = 0
    for raw in reversed(content.split("\n")):
        if checked >= limit:
            return
        line = raw.strip()
        if not line:
            continue
        checked += 1
        yield line


def has_spinner_marker(line: str) -> bool:
    return line.startswith(SPINNER_PREFIXES)


def strip_spinner(line: str) -> str:
    for prefix in SPINNER_PREFIXES:
        if line.startswith(prefix):
            return line[len(prefix) :].strip()
    return line


def has_active_marker(line: str) -> bool:
    """An interrupt hint, or a spinner glyph followed by "...ing…"."""
    if INTERRUPT_HINT in line:
        return True
    if not has_spinner_marker(line):
        return False
    return any(cue in line for cue in GERUND_CUES)


def is_completion_line(line: str) -> bool:
    if line.startswith(COMPLETION_BANNER):
        return True
    return any(line == done or line.startswith(done + " ") for done in COMPLETION_EXACT)


def prompt_kind(line: str) -> str:
    """Agent kind for a prompt line ("› ..." or "❯ ..."), else ""."""
    for glyph, kind in PROMPT_GLYPHS.items():
        if line == glyph or line.startswith(glyph + " "):
            return kind
    return ""


def classify_pane_content(content: str) -> bool:
    """True if the nearest marker to the bottom is an active marker.

    A completion line seen first means the run is over, even if an older
    spinner line is still visible further up.
    """
    for line in iter_recent_lines(content, ACTIVITY_SCAN_LINES):
        if is_completion_line(line):
            return False
        if has_active_marker(line):
            return True
    return False


def classify_pane_active_signature(content: str) -> str:
    """Text of the newest active-marker line, or ""."""
    for line in iter_recent_lines(content, ACTIVITY_SCAN_LINES):
        if has_active_marker(line):
            return line
    return ""


def detect_prompt_signature(content: str) -> str:
    """Newest prompt line tagged with its agent kind, e.g. ``codex:› fix it``."""
    for line in iter_recent_lines(content, ACTIVITY_SCAN_LINES):
        kind = prompt_kind(line)
        if kind:
            return f"{kind}:{line}"
    return ""


def classify_pane_attention_signature(content: str) -> str:
    """Prompt signature, suppressed while the pane is active."""
    if classify_pane_content(content):
        return ""
    return detect_prompt_signature(content)


def classify_pane_needs_attention(content: str) -> bool:
    return classify_pane_attention_signature(content) != ""


def classify_pane_completion_signature(content: str) -> str:
    for line in iter_recent_lines(content, COMPLETION_SCAN_LINES):
        if is_completion_line(line):
            return line
    return ""
