"""Proposal inbox: change proposals stored one JSON object per line."""

from pathlib import Path
import json
import logging

import aiofiles

from .change import FileChangeMessage
from .errors import InvalidProposalError

logger = logging.getLogger(__name__)


class ProposalInbox:
    """
    Reads change proposals from a JSONL file.

    Each line holds one proposal in wire format. Blank lines are ignored;
    malformed lines are logged and skipped.
    """

    def __init__(self, path: Path, encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding

    async def read(self) -> list[FileChangeMessage]:
        """Load all proposals from the inbox file."""
        if not self.path.exists():
            return []

        messages = []
        # Decoded per line so one undecodable line does not lose the rest
        async with aiofiles.open(self.path, "rb") as f:
            line_no = 0
            async for raw in f:
                line_no += 1
                try:
                    line = raw.decode(self.encoding).strip()
                except UnicodeDecodeError as e:
                    logger.warning("%s:%d: cannot decode as %s: %s", self.path, line_no, self.encoding, e)
                    continue
                if not line:
                    continue
                try:
                    messages.append(FileChangeMessage.from_dict(json.loads(line)))
                except json.JSONDecodeError as e:
                    logger.warning("%s:%d: invalid JSON: %s", self.path, line_no, e)
                except InvalidProposalError as e:
                    logger.warning("%s:%d: %s", self.path, line_no, e)
        return messages

    async def append(self, message: FileChangeMessage):
        """Append a proposal to the inbox file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(self.path, "a", encoding=self.encoding) as f:
            await f.write(json.dumps(message.to_dict()) + "\n")
