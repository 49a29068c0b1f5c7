import pytest

from diffreview.review import (
    FileChangeMessage,
    InvalidProposalError,
    PendingChange,
    Stage,
    SyntheticAddress,
)


def test_message_from_wire_keys():
    message = FileChangeMessage.from_dict({
        "id": "c1",
        "filePath": "/proj/a.txt",
        "originalContent": "",
        "newContent": "hello",
        "toolName": "writer",
    })

    assert message.id == "c1"
    assert message.file_path == "/proj/a.txt"
    assert message.new_content == "hello"
    assert message.tool_name == "writer"
    assert message.to_dict()["filePath"] == "/proj/a.txt"


def test_message_accepts_snake_case_and_optional_tool():
    message = FileChangeMessage.from_dict({
        "id": "c2",
        "file_path": "/proj/b.txt",
        "original_content": "old",
        "new_content": "new",
    })

    assert message.tool_name == ""
    assert message.original_content == "old"


@pytest.mark.parametrize("data", [
    {"filePath": "/a", "originalContent": "", "newContent": "x"},
    {"id": "c1", "originalContent": "", "newContent": "x"},
    {"id": "", "filePath": "/a", "originalContent": "", "newContent": "x"},
    {"id": "c1", "filePath": "/a", "originalContent": None, "newContent": "x"},
    ["not", "an", "object"],
])
def test_message_rejects_malformed(data):
    with pytest.raises(InvalidProposalError):
        FileChangeMessage.from_dict(data)


def test_pending_change_is_immutable():
    change = PendingChange(id="c1", file_path="/proj/a.txt", original_content="", new_content="x")

    assert change.is_new_file
    assert change.file_name == "a.txt"
    with pytest.raises(AttributeError):
        change.new_content = "y"


def test_synthetic_address_is_deterministic():
    change = PendingChange(id="c7", file_path="/proj/src/main.py", original_content="a", new_content="b")

    first = SyntheticAddress.for_change("coder-diff", change, Stage.ORIGINAL)
    again = SyntheticAddress.for_change("coder-diff", change, Stage.ORIGINAL)
    modified = SyntheticAddress.for_change("coder-diff", change, Stage.MODIFIED)

    assert first == again
    assert first != modified
    assert first.uri == "coder-diff://c7/original/main.py"
    assert str(modified) == "coder-diff://c7/modified/main.py"
