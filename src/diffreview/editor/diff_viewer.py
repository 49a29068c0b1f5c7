"""Diff rendering for pending changes."""

import difflib
from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..review.change import PendingChange


@dataclass
class FileDiff:
    """Represents a diff between two versions of a file."""

    path: str
    original: str
    modified: str
    is_new: bool = False

    @classmethod
    def from_change(cls, change: PendingChange) -> "FileDiff":
        return cls(
            path=change.file_path,
            original=change.original_content,
            modified=change.new_content,
            is_new=change.is_new_file,
        )

    @property
    def unified_diff(self) -> str:
        """Generate unified diff."""
        original_lines = self.original.splitlines(keepends=True)
        modified_lines = self.modified.splitlines(keepends=True)

        diff = difflib.unified_diff(
            original_lines,
            modified_lines,
            fromfile=f"a/{self.path}",
            tofile=f"b/{self.path}",
        )
        return "".join(line if line.endswith("\n") else line + "\n" for line in diff)

    @property
    def stats(self) -> dict:
        """Get diff statistics."""
        original_lines = self.original.splitlines()
        modified_lines = self.modified.splitlines()

        matcher = difflib.SequenceMatcher(None, original_lines, modified_lines)
        additions = 0
        deletions = 0

        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == "insert":
                additions += j2 - j1
            elif tag == "delete":
                deletions += i2 - i1
            elif tag == "replace":
                additions += j2 - j1
                deletions += i2 - i1

        return {
            "additions": additions,
            "deletions": deletions,
            "original_lines": len(original_lines),
            "modified_lines": len(modified_lines),
        }


class DiffViewer:
    """
    Viewer for displaying file diffs.

    Shows changes in a clear, colorful format
    before they are applied.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show_diff(self, diff: FileDiff, title: Optional[str] = None):
        """
        Display a file diff.

        Args:
            diff: The diff to display
            title: Panel title (defaults to the file path)
        """
        stats = diff.stats

        if diff.is_new:
            header = f"[green]NEW FILE: {title or diff.path}[/green]"
        else:
            header = f"[yellow]MODIFY: {title or diff.path}[/yellow]"

        stats_line = f"[green]+{stats['additions']}[/green] [red]-{stats['deletions']}[/red]"

        unified = diff.unified_diff

        if unified:
            colored_lines = []
            for line in unified.splitlines():
                line = escape(line)
                if line.startswith("+++") or line.startswith("---"):
                    colored_lines.append(f"[bold]{line}[/bold]")
                elif line.startswith("@@"):
                    colored_lines.append(f"[cyan]{line}[/cyan]")
                elif line.startswith("+"):
                    colored_lines.append(f"[green]{line}[/green]")
                elif line.startswith("-"):
                    colored_lines.append(f"[red]{line}[/red]")
                else:
                    colored_lines.append(line)

            content = "\n".join(colored_lines)
        else:
            content = "[dim](no changes)[/dim]"

        panel = Panel(
            content,
            title=f"{header} {stats_line}",
            border_style="blue",
        )
        self.console.print(panel)

    def show_pending(self, changes: list[PendingChange]):
        """Display a summary table of pending changes."""
        if not changes:
            self.console.print("[dim]No pending changes.[/dim]")
            return

        table = Table(title="Pending Changes", show_header=True)
        table.add_column("#", width=3)
        table.add_column("ID", style="cyan")
        table.add_column("File")
        table.add_column("Tool", style="magenta")
        table.add_column("Status", width=8)
        table.add_column("Changes", width=15)

        total_additions = 0
        total_deletions = 0

        for i, change in enumerate(changes, 1):
            stats = FileDiff.from_change(change).stats
            total_additions += stats["additions"]
            total_deletions += stats["deletions"]

            status = "[green]NEW[/green]" if change.is_new_file else "[yellow]MODIFY[/yellow]"
            changes_cell = f"[green]+{stats['additions']}[/green] [red]-{stats['deletions']}[/red]"
            table.add_row(str(i), change.id, change.file_path, change.tool_name, status, changes_cell)

        self.console.print(table)
        self.console.print(
            f"\n[bold]Total:[/bold] [green]+{total_additions}[/green] "
            f"[red]-{total_deletions}[/red] in {len(changes)} file(s)\n"
        )
