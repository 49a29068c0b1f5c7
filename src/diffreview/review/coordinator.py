"""Coordinator for the pending change lifecycle."""

from contextlib import contextmanager
from typing import Callable, Optional
import logging

from .change import FileChangeMessage, PendingChange
from .content_store import SyntheticContentStore
from .errors import ChangeInFlightError, ChangeNotFoundError, PersistenceError
from .events import CallbackSet, Subscription
from .registry import PendingChangeRegistry
from .reporter import Reporter
from .views import EditorHost, ViewLifecycleController
from .workspace import Workspace

logger = logging.getLogger(__name__)


class ChangeLifecycleCoordinator:
    """
    Drives proposed file changes from arrival to apply or reject.

    For every change id:
        Pending(no view) <-> Pending(view open) -> Applied | Rejected

    Applied and rejected changes are removed from the registry. Views are
    always torn down before the registry removal is announced, and before
    the file is written on apply.

    Public operations never raise: failures are sent to the reporter and
    surface as a False/None result. Only one lifecycle operation may run
    per change id at a time; a second one is refused.
    """

    def __init__(
        self,
        host: EditorHost,
        workspace: Workspace,
        reporter: Reporter,
        scheme: str = "coder-diff",
        title_prefix: str = "Coder",
    ):
        self.host = host
        self.workspace = workspace
        self.reporter = reporter
        self.registry = PendingChangeRegistry()
        self.store = SyntheticContentStore()
        self.views = ViewLifecycleController(
            host,
            self.store,
            scheme=scheme,
            title_prefix=title_prefix,
        )
        self._observers = CallbackSet()
        self._in_flight: set[str] = set()
        self._disposed = False

        self.registry.on_changed(self._observers.fire)
        host.register_content_provider(scheme, self.store)

    @contextmanager
    def _exclusive(self, change_id: str):
        """Mark a change id busy for the duration of one operation."""
        if change_id in self._in_flight:
            raise ChangeInFlightError(change_id)
        self._in_flight.add(change_id)
        try:
            yield
        finally:
            self._in_flight.discard(change_id)

    def _require(self, change_id: str) -> PendingChange:
        change = self.registry.get(change_id)
        if change is None:
            raise ChangeNotFoundError(change_id)
        return change

    async def add_pending_change(self, message: FileChangeMessage) -> PendingChange:
        """
        Register a proposal as pending. A proposal reusing an id replaces
        the earlier one.

        Does not open a view; callers decide whether to `show_diff`. If
        the replaced proposal is on screen, its view is updated to the new
        content before the registry change is announced.
        """
        change = PendingChange.from_message(message)
        if change.id in self.registry:
            logger.info("Replacing pending change %s", change.id)
            if self.views.is_open(change.id) and not self.is_in_flight(change.id):
                await self._refresh_view(change)
        self.registry.add(change)
        logger.info("Pending change %s for %s (%s)", change.id, change.file_path, change.tool_name)
        return change

    def list_pending(self) -> list[PendingChange]:
        return self.registry.list()

    def get_pending(self, change_id: str) -> Optional[PendingChange]:
        return self.registry.get(change_id)

    @property
    def pending_count(self) -> int:
        return len(self.registry)

    def is_in_flight(self, change_id: str) -> bool:
        return change_id in self._in_flight

    async def _refresh_view(self, change: PendingChange):
        if self.views.refresh(change):
            return
        try:
            with self._exclusive(change.id):
                await self.views.present(change)
        except Exception as e:
            logger.warning("Re-presenting %s failed: %s", change.id, e)
            self.reporter.error(f"Failed to show changes: {e}")

    async def show_diff(self, change_id: str) -> bool:
        """Present a pending change in the editor."""
        try:
            with self._exclusive(change_id):
                change = self._require(change_id)
                await self.views.present(change)
        except (ChangeNotFoundError, ChangeInFlightError) as e:
            self.reporter.error(str(e))
            return False
        except Exception as e:
            logger.exception("Showing %s failed", change_id)
            self.reporter.error(f"Failed to show changes: {e}")
            return False

        return True

    async def _write(self, change: PendingChange):
        try:
            if await self.workspace.exists(change.file_path):
                await self.workspace.replace_contents(change.file_path, change.new_content)
            else:
                await self.workspace.create_file(change.file_path, change.new_content)
                await self.host.show_document(change.file_path)
        except OSError as e:
            raise PersistenceError(change.file_path, e.strerror or str(e)) from e

    async def apply_change(self, change_id: str) -> bool:
        """
        Write a pending change to disk.

        The change's views are closed first. If writing fails the change
        stays pending so it can be retried.
        """
        try:
            with self._exclusive(change_id):
                change = self._require(change_id)
                await self.views.teardown(change_id)
                await self._write(change)
                self.registry.remove(change_id)
        except (ChangeNotFoundError, ChangeInFlightError) as e:
            self.reporter.error(str(e))
            return False
        except Exception as e:
            logger.warning("Applying %s failed: %s", change_id, e)
            self.reporter.error(f"Failed to apply changes: {e}")
            return False

        self.reporter.info(f"Applied changes to {change.file_name}")
        return True

    async def reject_change(self, change_id: str) -> bool:
        """
        Discard a pending change without touching the file.

        Returns False for an unknown id without reporting it.
        """
        try:
            with self._exclusive(change_id):
                change = self._require(change_id)
                await self.views.teardown(change_id)
                self.registry.remove(change_id)
        except ChangeNotFoundError:
            return False
        except ChangeInFlightError as e:
            self.reporter.error(str(e))
            return False
        except Exception as e:
            logger.warning("Rejecting %s failed: %s", change_id, e)
            self.reporter.error(f"Failed to reject changes: {e}")
            return False

        self.reporter.info(f"Rejected changes to {change.file_name}")
        return True

    async def close_diff(self, change_id: str) -> bool:
        """
        Withdraw a pending change that was resolved by the sender.

        Closes its views and forgets it without writing the file or
        reporting to the user. Returns False for an unknown id.
        """
        try:
            with self._exclusive(change_id):
                self._require(change_id)
                await self.views.teardown(change_id)
                self.registry.remove(change_id)
        except ChangeNotFoundError:
            return False
        except ChangeInFlightError as e:
            self.reporter.error(str(e))
            return False
        except Exception as e:
            logger.warning("Closing %s failed: %s", change_id, e)
            return False

        logger.info("Closed pending change %s", change_id)
        return True

    async def apply_all(self) -> dict[str, bool]:
        """
        Apply every pending change, oldest first.

        A failure does not stop the remaining changes.
        """
        results = {}
        for change in self.registry.list():
            results[change.id] = await self.apply_change(change.id)
        return results

    async def reject_all(self) -> dict[str, bool]:
        """Reject every pending change; a failure does not stop the rest."""
        results = {}
        for change_id in self.registry.ids():
            results[change_id] = await self.reject_change(change_id)
        return results

    def on_changes(self, callback: Callable[[], None]) -> Subscription:
        """Observe every committed add or remove of a pending change."""
        return self._observers.add(callback)

    def dispose(self):
        """
        Release synthetic content and detach observers.

        Open editor views are left to the host to close on shutdown.
        """
        if self._disposed:
            return
        self._disposed = True
        self.store.dispose_all()
        self._observers.clear()
        logger.debug("Coordinator disposed with %d pending change(s)", len(self.registry))
