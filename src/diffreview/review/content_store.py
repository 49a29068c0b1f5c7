"""In-memory content behind synthetic addresses."""

from typing import Callable

from .change import SyntheticAddress
from .events import CallbackSet, Subscription


class SyntheticContentStore:
    """
    Holds the text shown by synthetic before/after views.

    Editor hosts resolve synthetic addresses through this store and
    subscribe to `on_did_change` to re-render views whose content was
    replaced. Nothing here touches disk.
    """

    def __init__(self):
        self._contents: dict[SyntheticAddress, str] = {}
        self._on_did_change = CallbackSet()

    def on_did_change(self, callback: Callable[[SyntheticAddress], None]) -> Subscription:
        """Observe content replacement; the callback receives the address."""
        return self._on_did_change.add(callback)

    def set_content(self, address: SyntheticAddress, text: str):
        """Store or overwrite the blob for an address."""
        self._contents[address] = text
        self._on_did_change.fire(address)

    def get_content(self, address: SyntheticAddress) -> str:
        """Return the blob, or an empty string for unknown addresses."""
        return self._contents.get(address, "")

    def remove_content(self, address: SyntheticAddress):
        self._contents.pop(address, None)

    def dispose_all(self):
        """Drop every blob and detach listeners. Used at shutdown."""
        self._contents.clear()
        self._on_did_change.clear()

    def addresses(self) -> list[SyntheticAddress]:
        return list(self._contents)

    def __contains__(self, address: object) -> bool:
        return address in self._contents

    def __len__(self) -> int:
        return len(self._contents)
