"""Version information for tmux-ai-status."""

__version__ = "0.3.0"
