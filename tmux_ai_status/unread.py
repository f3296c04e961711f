"""
Unread/attention tracking.

A window is flagged unread when its agent needs the user while the user is
looking elsewhere: it just finished working, or a new completion banner or
prompt appeared. Focusing the window or resumed work clears the flag.
"""

from __future__ import annotations

from .constants import GLYPH_IDLE, GLYPH_UNREAD, PROMPT_GLYPHS
from .window_store import WindowStore


def has_prompt_text(prompt_sig: str, require_alnum: bool = False) -> bool:
    """Whether a prompt signature carries more than a bare prompt glyph.

    With ``require_alnum`` the text after the glyph must contain a letter or
    digit; otherwise any non-blank text counts.
    """
    if not prompt_sig:
        return False
    kind, sep, line = prompt_sig.partition(":")
    if not sep or kind not in PROMPT_GLYPHS.values():
        return False
    text = line.strip()
    for glyph in PROMPT_GLYPHS:
        if text.startswith(glyph):
            text = text[len(glyph) :].strip()
            break
    if require_alnum:
        return any(ch.isalnum() for ch in text)
    return text != ""


def should_mark_unread(
    was_working: bool,
    focused: bool,
    is_working: bool,
    raw_status: str,
    seen_before: bool,
    prompt_sig: str,
    prev_prompt_sig: str,
    done_sig: str,
    prev_done_sig: str,
    require_alnum: bool = False,
) -> bool:
    if focused or is_working or not raw_status:
        return False
    if was_working:
        return True
    if not seen_before:
        # First baseline stays read for a bare prompt, but explicit prompt
        # text ("› Run /review ...") is an unanswered instruction.
        return has_prompt_text(prompt_sig, require_alnum)
    if done_sig and done_sig != prev_done_sig:
        return True
    if prompt_sig and prompt_sig != prev_prompt_sig:
        return True
    return False


def mark_unread(store: WindowStore, window: str) -> None:
    with store.status(window) as ws:
        ws.unread = True


def clear_unread(store: WindowStore, window: str) -> None:
    with store.status(window) as ws:
        ws.unread = False


def is_unread(store: WindowStore, window: str) -> bool:
    ws = store.peek_status(window)
    return ws.unread if ws else False


def apply_unread_glyph(status: str, unread: bool) -> str:
    """Swap a trailing idle glyph for the unread glyph."""
    if unread and status.endswith(GLYPH_IDLE):
        return status[: -len(GLYPH_IDLE)] + GLYPH_UNREAD
    return status
