"""Topic extraction for window labels.

Derives a short word describing the agent's current task from the pane's
trailing prompt or spinner line. Supports user-defined alias and stop-word
additions through the daemon config.

Strategy (per candidate line, newest first):
1. A slash command (``/review``) wins outright
2. Otherwise every token is scored: longer is better, curated domain
   keywords and aliases score higher, gerunds lower, later words slightly
   higher
3. Stop-words, numbers and spinner filler verbs never qualify
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from .constants import (
    TOPIC_ALIAS_BONUS,
    TOPIC_ALIASES,
    TOPIC_GERUND_PENALTY,
    TOPIC_MAX_CHARS,
    TOPIC_PREFERRED,
    TOPIC_PREFERRED_BONUS,
    TOPIC_SCAN_LINES,
    TOPIC_STOP_WORDS,
)
from .pane_text import has_active_marker, iter_recent_lines, prompt_kind, strip_spinner

_TOKEN_RE = re.compile(r"[^\W_]+")
_TRIM_CHARS = "_-.:,;!?()[]{}\"'`"


class TopicExtractor:
    """Topic word scorer configured with alias and stop-word tables."""

    def __init__(
        self,
        aliases: Mapping[str, str] | None = None,
        stop_words: Iterable[str] = (),
        max_chars: int = TOPIC_MAX_CHARS,
    ):
        self.aliases = {**TOPIC_ALIASES, **{k.lower(): v.lower() for k, v in (aliases or {}).items()}}
        self.stop_words = TOPIC_STOP_WORDS | {w.lower() for w in stop_words}
        self.max_chars = max_chars

    def classify_pane_topic(self, content: str) -> str:
        for line in iter_recent_lines(content, TOPIC_SCAN_LINES):
            if prompt_kind(line):
                topic = self.extract_topic_word(line[1:].strip())
                if topic:
                    return topic
                continue
            if has_active_marker(line):
                activity = strip_spinner(line)
                cut = activity.find(" (")
                if cut > 0:
                    activity = activity[:cut]
                topic = self.extract_topic_word(activity)
                if topic:
                    return topic
        return ""

    def extract_topic_word(self, text: str) -> str:
        lower = text.lower()

        for field in lower.split():
            if field.startswith("/") and len(field) > 1:
                cmd_tokens = tokenize(field[1:])
                if cmd_tokens:
                    cmd = self.normalize(cmd_tokens[0])
                    if cmd:
                        return cmd

        best = ""
        best_score = -1
        tokens = tokenize(lower)
        for i, raw in enumerate(tokens):
            token = self.normalize(raw)
            if not token:
                continue
            score = self.score(raw, token, i, len(tokens))
            if score > best_score:
                best, best_score = token, score
        return best

    def normalize(self, raw: str) -> str:
        raw = raw.lower()
        if not raw or raw.isdigit() or raw in self.stop_words:
            return ""
        if raw in self.aliases:
            return self.trim(self.aliases[raw])
        token = self.trim(raw)
        if not token or token.isdigit():
            return ""
        return token

    def score(self, raw: str, token: str, idx: int, total: int) -> int:
        score = len(token)
        if token in TOPIC_PREFERRED:
            score += TOPIC_PREFERRED_BONUS
        if self.aliases.get(raw) == token:
            score += TOPIC_ALIAS_BONUS
        if raw.endswith("ing"):
            score -= TOPIC_GERUND_PENALTY
        # position bonus: 0 for the first token, up to 1 for the last
        score += idx * 2 // max(total, 1)
        return score

    def trim(self, token: str) -> str:
        return token.strip(_TRIM_CHARS)[: self.max_chars]


def tokenize(text: str) -> list[str]:
    """Split on anything that is not a letter or digit."""
    return _TOKEN_RE.findall(text)


def format_status_with_topic(status: str, topic: str) -> str:
    if not status or not topic:
        return status
    return f"{status} {topic}"
