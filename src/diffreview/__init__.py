"""Review-before-apply coordinator for assistant-proposed file edits."""

__version__ = "0.1.0"
