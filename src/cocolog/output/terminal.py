"""Rich terminal renderer — one table row per commit."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from cocolog.git.models import CocoCommit, FileChange


def _format_timestamp(ts: int) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")


def _format_change(change: FileChange) -> Text:
    line = Text()
    if change.is_binary:
        line.append("bin ", style="dim")
    else:
        line.append(f"+{change.added}", style="green")
        line.append(" ")
        line.append(f"-{change.deleted}", style="red")
        line.append(" ")
    rename = change.rename
    if rename is not None:
        line.append(rename.old, style="magenta")
        line.append(" → ", style="dim")
        line.append(rename.new, style="magenta")
    else:
        line.append(change.file, style="magenta")
    return line


def render(
    commits: Sequence[CocoCommit],
    *,
    show_changes: bool = True,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print parsed commits to the terminal using Rich."""
    console = console or Console(stderr=True)

    if not commits:
        console.print()
        console.print("[dim]No commits found in log.[/dim]")
        return

    console.print()
    table = Table(
        title="Commits",
        show_lines=show_changes,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Revision", style="cyan", no_wrap=True)
    table.add_column("Date (UTC)", no_wrap=True)
    table.add_column("Author", style="yellow")
    table.add_column("Message", min_width=20)
    table.add_column("+", justify="right")
    table.add_column("-", justify="right")

    for commit in commits:
        message = Text(commit.message)
        if show_changes and commit.changes:
            for change in commit.changes:
                message.append("\n")
                message.append_text(_format_change(change))
        table.add_row(
            commit.revision,
            _format_timestamp(commit.timestamp),
            Text(commit.author),
            message,
            Text(str(commit.total_added), style="green"),
            Text(str(commit.total_deleted), style="red"),
        )

    console.print(table)

    if show_summary:
        _print_summary(console, commits)


def _print_summary(console: Console, commits: Sequence[CocoCommit]) -> None:
    files = {c.file for commit in commits for c in commit.changes}
    authors = {commit.author for commit in commits}
    console.print()
    console.print(f"[dim]Commits:[/dim]        {len(commits)}")
    console.print(f"[dim]Authors:[/dim]        {len(authors)}")
    console.print(f"[dim]Files touched:[/dim]  {len(files)}")
    console.print(
        f"[dim]Lines:[/dim]          [green]+{sum(c.total_added for c in commits)}[/green] "
        f"[red]-{sum(c.total_deleted for c in commits)}[/red]"
    )
