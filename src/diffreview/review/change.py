"""Change records and synthetic content addresses."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import Any
import time

from .errors import InvalidProposalError


class Stage(Enum):
    """Which side of a proposal a synthetic address holds."""
    ORIGINAL = "original"
    MODIFIED = "modified"
    NEW = "new"


@dataclass(frozen=True)
class FileChangeMessage:
    """
    An inbound change proposal as delivered by the assistant.

    Wire format (JSON):
        {"id", "filePath", "originalContent", "newContent", "toolName"}
    """
    id: str
    file_path: str
    original_content: str
    new_content: str
    tool_name: str = ""

    # wire key -> attribute
    _FIELDS = {
        "id": "id",
        "filePath": "file_path",
        "originalContent": "original_content",
        "newContent": "new_content",
        "toolName": "tool_name",
    }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FileChangeMessage":
        """Build a proposal from camelCase wire keys or snake_case keys."""
        if not isinstance(data, dict):
            raise InvalidProposalError(f"expected an object, got {type(data).__name__}")

        values = {}
        for wire_key, attr in cls._FIELDS.items():
            if wire_key in data:
                values[attr] = data[wire_key]
            elif attr in data:
                values[attr] = data[attr]

        for required in ("id", "file_path", "original_content", "new_content"):
            if required not in values:
                raise InvalidProposalError(f"missing field '{required}'")

        for attr, value in values.items():
            if not isinstance(value, str):
                raise InvalidProposalError(f"field '{attr}' must be a string")

        if not values["id"]:
            raise InvalidProposalError("empty change id")

        return cls(**values)

    def to_dict(self) -> dict:
        """Convert to the wire format."""
        return {wire_key: getattr(self, attr) for wire_key, attr in self._FIELDS.items()}


@dataclass(frozen=True)
class PendingChange:
    """
    A proposed, undecided replacement of a file's content.

    Attributes:
        id: Sender-assigned change identifier
        file_path: Absolute path of the target file
        original_content: Content before the change ("" for a new file)
        new_content: Proposed full replacement content
        tool_name: Which assistant action produced the proposal
        timestamp: Monotonic creation time, only used to order listings
    """
    id: str
    file_path: str
    original_content: str
    new_content: str
    tool_name: str = ""
    timestamp: float = field(default_factory=time.monotonic)

    @classmethod
    def from_message(cls, message: FileChangeMessage) -> "PendingChange":
        """Create a change record with a fresh timestamp."""
        return cls(
            id=message.id,
            file_path=message.file_path,
            original_content=message.original_content,
            new_content=message.new_content,
            tool_name=message.tool_name,
        )

    @property
    def is_new_file(self) -> bool:
        return self.original_content == ""

    @property
    def file_name(self) -> str:
        return PurePath(self.file_path).name


@dataclass(frozen=True)
class SyntheticAddress:
    """
    In-memory key for a content blob, rendered as
    ``<scheme>://<change_id>/<stage>/<file_name>``.

    Never resolved against real storage.
    """
    scheme: str
    change_id: str
    stage: Stage
    file_name: str

    @classmethod
    def for_change(
        cls,
        scheme: str,
        change: PendingChange,
        stage: Stage,
    ) -> "SyntheticAddress":
        return cls(
            scheme=scheme,
            change_id=change.id,
            stage=stage,
            file_name=change.file_name,
        )

    @property
    def uri(self) -> str:
        return f"{self.scheme}://{self.change_id}/{self.stage.value}/{self.file_name}"

    def __str__(self) -> str:
        return self.uri
