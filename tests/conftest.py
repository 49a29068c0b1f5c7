import io
import sys
from pathlib import Path

# Ensure src is importable
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

import pytest
from rich.console import Console

from diffreview.editor import ConsoleEditorHost
from diffreview.review import (
    ChangeLifecycleCoordinator,
    FileChangeMessage,
    FileWorkspace,
    Reporter,
)


class RecordingReporter(Reporter):
    """Reporter that keeps messages for assertions."""

    def __init__(self):
        self.infos: list[str] = []
        self.errors: list[str] = []

    def info(self, message: str):
        self.infos.append(message)

    def error(self, message: str):
        self.errors.append(message)


def make_message(
    change_id: str,
    file_path,
    original: str = "",
    new: str = "new content",
    tool: str = "editor",
) -> FileChangeMessage:
    return FileChangeMessage(
        id=change_id,
        file_path=str(file_path),
        original_content=original,
        new_content=new,
        tool_name=tool,
    )


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture
def host(console):
    return ConsoleEditorHost(console)


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def coordinator(host, reporter):
    coordinator = ChangeLifecycleCoordinator(
        host=host,
        workspace=FileWorkspace(),
        reporter=reporter,
    )
    yield coordinator
    coordinator.dispose()
