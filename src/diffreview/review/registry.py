"""Registry of pending (undecided) changes."""

from typing import Callable, Optional

from .change import PendingChange
from .events import CallbackSet, Subscription


class PendingChangeRegistry:
    """
    Authoritative mapping from change id to pending change.

    A change is undecided exactly while it is in the registry; applied and
    rejected changes are simply absent. Observers registered with
    `on_changed` run after every committed add or remove.
    """

    def __init__(self):
        self._changes: dict[str, PendingChange] = {}
        self._on_changed = CallbackSet()

    def on_changed(self, callback: Callable[[], None]) -> Subscription:
        return self._on_changed.add(callback)

    def add(self, change: PendingChange):
        """
        Insert a change, overwriting any record with the same id.

        The later write wins and moves to the end of the listing.
        """
        self._changes.pop(change.id, None)
        self._changes[change.id] = change
        self._on_changed.fire()

    def ids(self) -> list[str]:
        return list(self._changes)

    def list(self) -> list[PendingChange]:
        """All pending changes, oldest first."""
        # sorted() is stable, so equal timestamps keep insertion order
        return sorted(self._changes.values(), key=lambda c: c.timestamp)

    def get(self, change_id: str) -> Optional[PendingChange]:
        return self._changes.get(change_id)

    def remove(self, change_id: str) -> bool:
        """
        Remove a change.

        Returns:
            True if a change was removed. Removing an unknown id does not
            notify observers.
        """
        if change_id not in self._changes:
            return False
        del self._changes[change_id]
        self._on_changed.fire()
        return True

    def __contains__(self, change_id: object) -> bool:
        return change_id in self._changes

    def __len__(self) -> int:
        return len(self._changes)
