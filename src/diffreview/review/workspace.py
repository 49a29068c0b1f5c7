"""Filesystem access used when applying changes."""

from abc import ABC, abstractmethod
from pathlib import Path
import aiofiles
import aiofiles.os


class Workspace(ABC):
    """Where applied changes are written."""

    @abstractmethod
    async def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    async def replace_contents(self, path: str, text: str):
        """Replace the whole content of an existing file and persist it."""
        pass

    @abstractmethod
    async def create_file(self, path: str, text: str):
        """Create a file, including any missing parent directories."""
        pass


class FileWorkspace(Workspace):
    """
    Workspace backed by the local filesystem.

    Content is written exactly as given: no newline translation, no
    trailing newline added.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    async def exists(self, path: str) -> bool:
        return await aiofiles.os.path.exists(path)

    async def replace_contents(self, path: str, text: str):
        resolved = Path(path)
        if not await aiofiles.os.path.isfile(resolved):
            raise FileNotFoundError(f"Not a file: {path}")

        async with aiofiles.open(resolved, "w", encoding=self.encoding, newline="") as f:
            await f.write(text)

    async def create_file(self, path: str, text: str):
        resolved = Path(path)
        await aiofiles.os.makedirs(resolved.parent, exist_ok=True)

        async with aiofiles.open(resolved, "x", encoding=self.encoding, newline="") as f:
            await f.write(text)
