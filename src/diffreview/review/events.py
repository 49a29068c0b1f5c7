"""Plain callback fan-out with explicit unsubscribe handles."""

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Subscription:
    """Handle returned by `CallbackSet.add`; `dispose()` may be called repeatedly."""

    def __init__(self, on_dispose: Optional[Callable[[], None]] = None):
        self._on_dispose = on_dispose

    def dispose(self):
        if self._on_dispose is None:
            return
        on_dispose, self._on_dispose = self._on_dispose, None
        on_dispose()

    @property
    def disposed(self) -> bool:
        return self._on_dispose is None


class CallbackSet:
    """
    Set of observer callbacks.

    Callbacks run in registration order. One observer raising is logged
    and does not keep the others from running.
    """

    def __init__(self):
        self._callbacks: list[Callable] = []

    def add(self, callback: Callable) -> Subscription:
        """Register a callback and return its unsubscribe handle."""
        if callback not in self._callbacks:
            self._callbacks.append(callback)
        return Subscription(lambda: self.discard(callback))

    def discard(self, callback: Callable):
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def fire(self, *args):
        for callback in list(self._callbacks):
            try:
                callback(*args)
            except Exception:
                logger.exception("Observer %r failed", callback)

    def clear(self):
        self._callbacks.clear()

    def __len__(self) -> int:
        return len(self._callbacks)
