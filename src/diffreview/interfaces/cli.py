"""CLI interface for reviewing proposed changes."""

import asyncio
from pathlib import Path
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import config
from ..editor import ConsoleEditorHost, DiffViewer
from ..review import (
    ChangeLifecycleCoordinator,
    ConsoleReporter,
    FileWorkspace,
    ProposalInbox,
)


console = Console()


class ReviewCLI:
    """
    CLI interface for approving or rejecting proposed file changes.

    Commands:
    - /quit, /exit - Exit
    - /help - Show available commands
    - /list - List pending changes
    - /load PATH - Load proposals from a JSONL file
    - /show ID - Show the diff for a change
    - /apply ID - Apply a change
    - /reject ID - Reject a change
    - /apply-all - Apply all pending changes
    - /reject-all - Reject all pending changes
    """

    def __init__(
        self,
        coordinator: Optional[ChangeLifecycleCoordinator] = None,
        auto_show_diff: Optional[bool] = None,
        output: Optional[Console] = None,
    ):
        self.console = output or console
        if coordinator is None:
            coordinator = ChangeLifecycleCoordinator(
                host=ConsoleEditorHost(self.console, encoding=config.review.encoding),
                workspace=FileWorkspace(encoding=config.review.encoding),
                reporter=ConsoleReporter(self.console),
                scheme=config.review.scheme,
                title_prefix=config.review.title_prefix,
            )
        self.coordinator = coordinator
        self.viewer = DiffViewer(self.console)
        self.auto_show_diff = (
            config.review.auto_show_diff if auto_show_diff is None else auto_show_diff
        )
        self._subscription = self.coordinator.on_changes(self._on_pending_changed)
        self.session: Optional[PromptSession] = None

    def _on_pending_changed(self):
        count = self.coordinator.pending_count
        self.console.print(f"[dim]{count} pending change(s)[/dim]")

    def _create_session(self) -> PromptSession:
        config.paths.base.mkdir(parents=True, exist_ok=True)
        return PromptSession(history=FileHistory(str(config.paths.history)))

    async def run(self):
        """Main CLI loop."""
        self.session = self._create_session()
        self.console.print(Panel(
            "[bold cyan]Diff Review[/bold cyan]\n"
            "Review proposed changes before they touch your files.\n"
            "Type /help for commands",
            title="Welcome",
            border_style="cyan",
        ))

        try:
            while True:
                try:
                    user_input = await asyncio.to_thread(
                        self.session.prompt, "review> "
                    )

                    if not user_input.strip():
                        continue

                    should_exit = await self.handle_command(user_input.strip())
                    if should_exit:
                        break

                except KeyboardInterrupt:
                    self.console.print("\n[yellow]Interrupted. Type /quit to exit.[/yellow]")
                except EOFError:
                    break
        finally:
            self.close()

        self.console.print("[green]Goodbye![/green]")

    def close(self):
        self._subscription.dispose()
        self.coordinator.dispose()

    async def load(self, path: Path) -> int:
        """
        Load proposals from a JSONL file.

        Returns:
            Number of proposals added
        """
        messages = await ProposalInbox(path, encoding=config.review.encoding).read()
        for message in messages:
            await self.coordinator.add_pending_change(message)
            if self.auto_show_diff:
                await self.coordinator.show_diff(message.id)
        return len(messages)

    def _resolve_id(self, args: str) -> Optional[str]:
        """Resolve a full change id or a unique prefix of one."""
        prefix = args.strip()
        if not prefix:
            self.console.print("[red]Missing change ID[/red]")
            return None

        ids = [c.id for c in self.coordinator.list_pending()]
        if prefix in ids:
            return prefix

        matches = [i for i in ids if i.startswith(prefix)]
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            self.console.print(f"[yellow]Ambiguous ID '{prefix}': {', '.join(matches)}[/yellow]")
            return None
        # Let the coordinator report unknown ids
        return prefix

    async def handle_command(self, command: str) -> bool:
        """
        Handle a command.

        Returns:
            True if should exit, False otherwise
        """
        parts = command.split(maxsplit=1)
        cmd = parts[0].lower()
        args = parts[1] if len(parts) > 1 else ""

        if cmd in ["/quit", "/exit", "/q"]:
            return True

        elif cmd == "/help":
            self._show_help()

        elif cmd in ["/list", "/ls"]:
            self.viewer.show_pending(self.coordinator.list_pending())

        elif cmd == "/load":
            await self._load_command(args)

        elif cmd == "/show":
            change_id = self._resolve_id(args)
            if change_id:
                await self.coordinator.show_diff(change_id)

        elif cmd == "/apply":
            change_id = self._resolve_id(args)
            if change_id:
                await self.coordinator.apply_change(change_id)

        elif cmd == "/reject":
            change_id = self._resolve_id(args)
            if change_id:
                rejected = await self.coordinator.reject_change(change_id)
                if not rejected and self.coordinator.get_pending(change_id) is None:
                    self.console.print(f"[yellow]No pending change {change_id}[/yellow]")

        elif cmd == "/apply-all":
            results = await self.coordinator.apply_all()
            self._show_batch("Applied", results)

        elif cmd == "/reject-all":
            results = await self.coordinator.reject_all()
            self._show_batch("Rejected", results)

        elif cmd == "/clear":
            self.console.clear()

        else:
            self.console.print(f"[red]Unknown command: {cmd}[/red]")
            self.console.print("Type /help for available commands.")

        return False

    async def _load_command(self, args: str):
        if not args.strip():
            self.console.print("[red]Usage: /load PATH[/red]")
            return

        path = Path(args.strip()).expanduser()
        if not path.exists():
            self.console.print(f"[red]File not found: {path}[/red]")
            return

        try:
            count = await self.load(path)
        except OSError as e:
            self.console.print(f"[red]Failed to load {path}: {e}[/red]")
            return

        self.console.print(f"[green]Loaded {count} proposal(s) from {path}[/green]")

    def _show_batch(self, verb: str, results: dict[str, bool]):
        if not results:
            self.console.print("[dim]No pending changes.[/dim]")
            return
        succeeded = sum(1 for ok in results.values() if ok)
        failed = len(results) - succeeded
        line = f"{verb} {succeeded} of {len(results)} change(s)"
        if failed:
            self.console.print(f"[yellow]{line}, {failed} failed[/yellow]")
        else:
            self.console.print(f"[green]{line}[/green]")

    def _show_help(self):
        """Display help information."""
        help_table = Table(title="Available Commands", show_header=True)
        help_table.add_column("Command", style="cyan")
        help_table.add_column("Description")

        commands = [
            ("/quit, /exit, /q", "Exit"),
            ("/help", "Show this help message"),
            ("/list", "List pending changes"),
            ("/load PATH", "Load proposals from a JSONL file"),
            ("/show ID", "Show the diff for a change"),
            ("/apply ID", "Apply a change to disk"),
            ("/reject ID", "Discard a change"),
            ("/apply-all", "Apply all pending changes, oldest first"),
            ("/reject-all", "Discard all pending changes"),
            ("/clear", "Clear screen"),
        ]

        for cmd, desc in commands:
            help_table.add_row(cmd, desc)

        self.console.print(help_table)
