"""Editor hosts for presenting pending changes."""

from .console_host import ConsoleEditorHost
from .diff_viewer import DiffViewer, FileDiff

__all__ = [
    "ConsoleEditorHost",
    "DiffViewer",
    "FileDiff",
]
