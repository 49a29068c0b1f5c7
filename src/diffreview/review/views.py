"""Editor view lifecycle for pending changes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union
import logging

from .change import PendingChange, Stage, SyntheticAddress
from .content_store import SyntheticContentStore
from .errors import ViewNotOpenError

logger = logging.getLogger(__name__)


class ViewHandle(ABC):
    """An editor view as enumerated by the host."""

    @property
    @abstractmethod
    def addresses(self) -> tuple:
        """Everything this view displays (synthetic addresses or file paths)."""
        pass

    def displays(self, addresses: Iterable[SyntheticAddress]) -> bool:
        """Check whether this view shows any of the given addresses."""
        shown = self.addresses
        return any(address in shown for address in addresses)


@dataclass(frozen=True, eq=False)
class TextView(ViewHandle):
    """Single-pane view of one document."""

    target: Union[SyntheticAddress, str]
    preview: bool = False

    @property
    def addresses(self) -> tuple:
        return (self.target,)


@dataclass(frozen=True, eq=False)
class DiffView(ViewHandle):
    """Two-pane side-by-side diff of an original and a modified document."""

    original: SyntheticAddress
    modified: SyntheticAddress
    title: str = ""
    preview: bool = False

    @property
    def addresses(self) -> tuple:
        return (self.original, self.modified)


class EditorHost(ABC):
    """
    Capabilities the review workflow needs from the host editor.

    Implementations resolve synthetic addresses through the content
    provider registered for their scheme.
    """

    @abstractmethod
    def register_content_provider(self, scheme: str, provider: SyntheticContentStore):
        pass

    @abstractmethod
    def enumerate_open_views(self) -> list[ViewHandle]:
        pass

    @abstractmethod
    async def close(self, view: ViewHandle):
        """Close a view. Raises ViewNotOpenError if it is already gone."""
        pass

    @abstractmethod
    async def open_text(
        self,
        address: SyntheticAddress,
        beside: bool = True,
        preview: bool = True,
        preserve_focus: bool = True,
    ) -> ViewHandle:
        pass

    @abstractmethod
    async def open_diff(
        self,
        original: SyntheticAddress,
        modified: SyntheticAddress,
        title: str,
        preview: bool = True,
    ) -> ViewHandle:
        pass

    @abstractmethod
    async def show_document(self, path: str) -> ViewHandle:
        """Open a real file for the user to see."""
        pass

    @abstractmethod
    def terminal_focused(self) -> bool:
        pass

    @abstractmethod
    async def focus_terminal(self):
        pass


class PresentationKind(Enum):
    """How a change was presented."""
    NEW_FILE = "new_file"
    DIFF = "diff"


class ViewLifecycleController:
    """
    Opens and tears down the synthetic views of pending changes.

    Keeps the open-view set: for each change id with a view, the
    addresses materialized for it. An id either has no entry or a
    non-empty address list whose content is in the store.
    """

    def __init__(
        self,
        host: EditorHost,
        store: SyntheticContentStore,
        scheme: str = "coder-diff",
        title_prefix: str = "Coder",
    ):
        self.host = host
        self.store = store
        self.scheme = scheme
        self.title_prefix = title_prefix
        self._open: dict[str, list[SyntheticAddress]] = {}

    def _address(self, change: PendingChange, stage: Stage) -> SyntheticAddress:
        return SyntheticAddress.for_change(self.scheme, change, stage)

    async def present(self, change: PendingChange) -> PresentationKind:
        """
        Show a change: a read-only preview for a new file, or a two-pane
        diff of original against proposed content.

        Focus goes back to the terminal afterwards if it had focus.
        """
        if change.id in self._open:
            await self.teardown(change.id)

        terminal_was_focused = self.host.terminal_focused()

        if change.is_new_file:
            address = self._address(change, Stage.NEW)
            self.store.set_content(address, change.new_content)
            self._open[change.id] = [address]

            await self.host.open_text(
                address,
                beside=True,
                preview=True,
                preserve_focus=True,
            )
            kind = PresentationKind.NEW_FILE
        else:
            original = self._address(change, Stage.ORIGINAL)
            modified = self._address(change, Stage.MODIFIED)
            self.store.set_content(original, change.original_content)
            self.store.set_content(modified, change.new_content)
            self._open[change.id] = [original, modified]

            title = f"{self.title_prefix}: {change.file_name} ({change.tool_name})"
            await self.host.open_diff(original, modified, title, preview=True)
            kind = PresentationKind.DIFF

        if terminal_was_focused:
            await self.host.focus_terminal()

        logger.debug("Presented %s as %s", change.id, kind.value)
        return kind

    def refresh(self, change: PendingChange) -> bool:
        """
        Replace the content shown for an already presented change.

        Returns:
            False if the change has no open view, or if its addresses
            differ from the open ones (renamed file, new file turned into
            a modification or back). Such a view has to be presented anew.
        """
        addresses = self._open.get(change.id)
        if not addresses:
            return False

        if change.is_new_file:
            blobs = {self._address(change, Stage.NEW): change.new_content}
        else:
            blobs = {
                self._address(change, Stage.ORIGINAL): change.original_content,
                self._address(change, Stage.MODIFIED): change.new_content,
            }
        if list(blobs) != addresses:
            return False

        for address, text in blobs.items():
            self.store.set_content(address, text)
        return True

    async def teardown(self, change_id: str):
        """
        Close every view showing this change's addresses and release
        their content. Views the user already closed are skipped.
        """
        addresses = self._open.get(change_id)
        if not addresses:
            self._open.pop(change_id, None)
            return

        for view in self.host.enumerate_open_views():
            if not view.displays(addresses):
                continue
            try:
                await self.host.close(view)
            except ViewNotOpenError:
                logger.debug("View for %s was already closed", change_id)

        for address in addresses:
            self.store.remove_content(address)

        del self._open[change_id]
        logger.debug("Tore down views for %s", change_id)

    def is_open(self, change_id: str) -> bool:
        return change_id in self._open

    def open_addresses(self, change_id: str) -> list[SyntheticAddress]:
        return list(self._open.get(change_id, []))

    def open_ids(self) -> list[str]:
        return list(self._open)
