"""Label tmux windows with what the coding agent inside them is doing."""

from .__version__ import __version__

__all__ = ["__version__"]
