"""Terminal editor host that renders review views with rich."""

from pathlib import Path
from typing import Optional

import aiofiles
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from ..review.change import Stage, SyntheticAddress
from ..review.content_store import SyntheticContentStore
from ..review.errors import ViewNotOpenError
from ..review.views import DiffView, EditorHost, TextView, ViewHandle
from .diff_viewer import DiffViewer, FileDiff


class ConsoleEditorHost(EditorHost):
    """
    Editor host for terminal sessions.

    "Opening" a view prints it. The host remembers which views are open
    so the review workflow can enumerate and close them, keeps at most one
    preview view (a new preview replaces the previous one), and reprints
    an open view when the content behind one of its addresses changes.
    """

    def __init__(self, console: Optional[Console] = None, encoding: str = "utf-8"):
        self.console = console or Console()
        self.viewer = DiffViewer(self.console)
        self.encoding = encoding
        self._providers: dict[str, SyntheticContentStore] = {}
        self._views: list[ViewHandle] = []
        self._terminal_focused = True

    def register_content_provider(self, scheme: str, provider: SyntheticContentStore):
        self._providers[scheme] = provider
        provider.on_did_change(self._content_changed)

    def _content(self, address: SyntheticAddress) -> str:
        provider = self._providers.get(address.scheme)
        if provider is None:
            return ""
        return provider.get_content(address)

    def _content_changed(self, address: SyntheticAddress):
        for view in self._views:
            if view.displays([address]):
                self._render(view)

    def _render(self, view: ViewHandle):
        if isinstance(view, DiffView):
            diff = FileDiff(
                path=view.original.file_name,
                original=self._content(view.original),
                modified=self._content(view.modified),
            )
            self.viewer.show_diff(diff, title=view.title)
        elif isinstance(view, TextView) and isinstance(view.target, SyntheticAddress):
            diff = FileDiff(
                path=view.target.file_name,
                original="",
                modified=self._content(view.target),
                is_new=view.target.stage is Stage.NEW,
            )
            self.viewer.show_diff(diff)

    def _open(self, view: ViewHandle, preview: bool) -> ViewHandle:
        if preview:
            self._views = [v for v in self._views if not getattr(v, "preview", False)]
        self._views.append(view)
        self._render(view)
        return view

    def enumerate_open_views(self) -> list[ViewHandle]:
        return list(self._views)

    async def close(self, view: ViewHandle):
        if view not in self._views:
            raise ViewNotOpenError(view)
        self._views.remove(view)

    def close_by_user(self, view: ViewHandle):
        """Drop a view as if the user closed it."""
        if view in self._views:
            self._views.remove(view)

    async def open_text(
        self,
        address: SyntheticAddress,
        beside: bool = True,
        preview: bool = True,
        preserve_focus: bool = True,
    ) -> ViewHandle:
        if not preserve_focus:
            self._terminal_focused = False
        return self._open(TextView(address, preview=preview), preview)

    async def open_diff(
        self,
        original: SyntheticAddress,
        modified: SyntheticAddress,
        title: str,
        preview: bool = True,
    ) -> ViewHandle:
        self._terminal_focused = False
        return self._open(DiffView(original, modified, title=title, preview=preview), preview)

    async def show_document(self, path: str) -> ViewHandle:
        async with aiofiles.open(path, "r", encoding=self.encoding) as f:
            content = await f.read()

        # One real-file view at a time; review views are left alone
        self._views = [
            v for v in self._views
            if not (isinstance(v, TextView) and isinstance(v.target, str))
        ]
        view = TextView(str(path))
        self._views.append(view)
        self._terminal_focused = False

        lexer = Syntax.guess_lexer(path, code=content)
        self.console.print(Panel(
            Syntax(content, lexer, line_numbers=True),
            title=f"[bold]{Path(path).name}[/bold]",
            border_style="green",
        ))
        return view

    def terminal_focused(self) -> bool:
        return self._terminal_focused

    async def focus_terminal(self):
        self._terminal_focused = True
