"""
Centralised constants for the tmux status daemon.

All thresholds, scan depths, glyphs and heuristic marker tables live here so
they are easy to find, tune, and test independently of the control flow.
"""

from __future__ import annotations

import os

# ── File-system paths ─────────────────────────────────────────────────────────

PROC_ROOT = "/proc"
"""Where per-process ``stat`` / ``cmdline`` / ``comm`` files are read from."""

CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".config", "tmux-ai-status")
CONFIG_PATH = os.path.join(CONFIG_DIR, "config.json")
CONFIG_ENV_VAR = "TMUX_AI_STATUS_CONFIG"

STATE_DIR = os.path.join(os.path.expanduser("~"), ".local", "state", "tmux-ai-status")
PID_FILE = os.path.join(STATE_DIR, "daemon.pid")
LOG_FILE = os.path.join(STATE_DIR, "daemon.log")

# ── Polling & timing (seconds) ────────────────────────────────────────────────

POLL_INTERVAL = 2.0
"""Sleep between the end of one cycle and the start of the next."""

ACTIVE_GRACE = 10.0
"""A pane confirmed active this recently still counts as active."""

STALE_ACTIVE_THRESHOLD = 12.0
"""An unchanged active line next to a visible prompt is stale after this long."""

STABILITY_THRESHOLD = 1
"""Consecutive cycles a new status must hold before the window is renamed."""

TMUX_TIMEOUT = 5.0
"""Timeout for every tmux subprocess call."""

# ── Scan depths ──────────────────────────────────────────────────────────────

AGENT_SEARCH_DEPTH = 2
"""Generations below the pane shell searched for the agent process."""

# Pane text is scanned bottom-up; depths count non-blank lines.
ACTIVITY_SCAN_LINES = 12
COMPLETION_SCAN_LINES = 20
TOPIC_SCAN_LINES = 24

# ── tmux ─────────────────────────────────────────────────────────────────────

LIST_PANES_FORMAT = "#{session_name}:#{window_index} #{pane_pid} #{window_active}"

# ── Agent kinds ──────────────────────────────────────────────────────────────

AGENT_CLAUDE = "claude"
AGENT_CODEX = "codex"

AGENT_MARKERS: tuple[str, ...] = (AGENT_CLAUDE, AGENT_CODEX)
"""Checked in order against lower-cased command lines; first hit names the kind."""

AGENT_PREFIXES: dict[str, str] = {
    AGENT_CLAUDE: "c ",
    AGENT_CODEX: "x ",
}

AGENT_RUNTIME_NAMES: frozenset[str] = frozenset({"node"})
"""Interpreter names that are the agent's own runtime when the cmdline says so."""

# ── Status glyphs ────────────────────────────────────────────────────────────

GLYPH_COMPUTING = "🧠"
GLYPH_IDLE = "💤"
GLYPH_UNREAD = "📬"
GLYPH_BUILD = "🔨"
GLYPH_TEST = "🧪"
GLYPH_PACKAGE = "📦"
GLYPH_VCS = "🔀"
GLYPH_NETWORK = "🌐"
GLYPH_GENERIC = "⚙️"

# ── Descendant command-line markers ──────────────────────────────────────────
# Order matters: compiler stages (cc1) run under build tools, so build wins.

CHILD_MARKER_GROUPS: list[tuple[tuple[str, ...], str]] = [
    (
        (
            "make",
            "gcc",
            "g++",
            "cc1",
            "rustc",
            "javac",
            "tsc",
            "webpack",
            "vite",
            "esbuild",
            "rollup",
            "coordinator/cli.ts build",
            " next build",
            "npm run build",
            "pnpm run build",
            "yarn build",
            "go build",
            "cargo build",
        ),
        GLYPH_BUILD,
    ),
    (("jest", "vitest", "pytest", "mocha", "phpunit", "rspec"), GLYPH_TEST),
    (("npm", "yarn", "pnpm", "pip", "apt", "brew", "pacman"), GLYPH_PACKAGE),
    (("git",), GLYPH_VCS),
    (("curl", "wget"), GLYPH_NETWORK),
]

# ── Pane text markers ────────────────────────────────────────────────────────

INTERRUPT_HINT = "esc to interrupt"

SPINNER_PREFIXES: tuple[str, ...] = ("· ", "• ", "✢ ", "✻ ", "* ")

GERUND_CUES: tuple[str, ...] = ("ing…", "ing...")

COMPLETION_EXACT: tuple[str, ...] = ("Done.", "All set.")
COMPLETION_BANNER = "─ Worked for "

PROMPT_GLYPHS: dict[str, str] = {
    "›": AGENT_CODEX,
    "❯": AGENT_CLAUDE,
}
"""Prompt glyph → agent kind used to tag attention signatures."""

# ── Topic extraction ─────────────────────────────────────────────────────────

TOPIC_MAX_CHARS = 8

TOPIC_STOP_WORDS: frozenset[str] = frozenset(
    {
        # function words
        "a", "an", "and", "are", "as", "at", "be", "by", "do", "for", "from",
        "i", "if", "in", "into", "is", "it", "its", "me", "my", "now", "of",
        "on", "or", "our", "please", "run", "show", "that", "the", "this",
        "to", "up", "us", "we", "with", "your",
        # generic nouns
        "app", "page", "file", "issue", "task", "filename", "codebase",
        "change", "changes", "commit", "commits", "current",
        # generic verbs
        "add", "check", "create", "deploy", "explain", "fix", "make",
        "remove", "summarize", "update", "write", "clean", "debug",
        "improve", "investigate", "refactor", "test", "tests", "work",
        # spinner filler
        "thinking", "planning", "implementing", "accomplishing", "brewing",
        "leavening", "perusing", "pondering", "transfiguring",
    }
)  # fmt: skip

TOPIC_ALIASES: dict[str, str] = {
    "auth": "auth",
    "authentication": "auth",
    "authorize": "auth",
    "login": "auth",
    "signin": "auth",
    "oauth": "auth",
    "nav": "nav",
    "navbar": "nav",
    "navigation": "nav",
    "menu": "menu",
    "menus": "menu",
    "hamburger": "menu",
    "drawer": "menu",
    "search": "search",
    "query": "search",
    "shop": "shop",
    "checkout": "checkout",
    "cart": "cart",
    "payment": "payment",
    "shipping": "shipping",
    "promo": "promo",
    "promotions": "promo",
    "campaign": "promo",
    "image": "image",
    "images": "image",
    "photo": "image",
    "parser": "parser",
    "scrape": "scrape",
    "crawler": "scrape",
    "db": "db",
    "database": "db",
    "sql": "sql",
    "api": "api",
    "cache": "cache",
    "redis": "cache",
    "deploy": "deploy",
    "release": "deploy",
}

TOPIC_PREFERRED: frozenset[str] = frozenset(
    {
        "auth", "nav", "menu", "search", "shop", "promo", "checkout", "cart",
        "payment", "shipping", "parser", "scrape", "db", "api", "cache", "deploy",
    }
)  # fmt: skip

TOPIC_PREFERRED_BONUS = 7
TOPIC_ALIAS_BONUS = 4
TOPIC_GERUND_PENALTY = 3
