"""
Formatting of the wrapped summary for the console.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from rich.table import Table
from rich.text import Text

from shared.models import CommitRecord, WrappedSummary

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"


def format_timestamp(when: datetime) -> str:
    return when.strftime(TIMESTAMP_FORMAT)


def describe_commit(commit: CommitRecord) -> str:
    """``<hash> -- <trimmed message>``"""
    return f"{commit.hash} -- {commit.message.strip()}"


def _changes(changes: Tuple[int, int]) -> str:
    return f"(+{changes[0]}/-{changes[1]})"


def build_output(summary: WrappedSummary) -> str:
    """Render ``summary`` as a multi-line text block."""
    lines: List[str] = [
        f"🧮 Total commit count: {summary.total_commits}",
        f"🌅 Earliest commit({format_timestamp(summary.earliest.authored_at)}): "
        f"{describe_commit(summary.earliest)}",
        f"🌃 Latest commit({format_timestamp(summary.latest.authored_at)}): "
        f"{describe_commit(summary.latest)}",
        f"🟢 Average addition count: {summary.average_additions}",
        f"🔴 Average deletion count: {summary.average_deletions}",
        f"📈 Largest commit({format_timestamp(summary.largest.authored_at)}): "
        f"{describe_commit(summary.largest)} {_changes(summary.largest_changes)}",
        f"📉 Smallest commit({format_timestamp(summary.smallest.authored_at)}): "
        f"{describe_commit(summary.smallest)} {_changes(summary.smallest_changes)}",
    ]

    busiest = summary.busiest_day
    if busiest is not None:
        _, day_commits = busiest
        lines.append(
            f"🏔️ Most commits per day({format_timestamp(day_commits[0].authored_at)}): "
            f"{len(day_commits)}"
        )

    return "\n".join(lines)


def build_table(summary: WrappedSummary) -> Table:
    """Render ``summary`` as a rich table."""
    table = Table(title="Your Git Wrapped", show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    # Text() keeps brackets in commit messages from being parsed as markup
    def commit_cell(commit: CommitRecord, changes: Optional[Tuple[int, int]] = None) -> Text:
        cell = f"{format_timestamp(commit.authored_at)}\n{commit.hash[:12]} {commit.message.strip()}"
        if changes is not None:
            cell += f" {_changes(changes)}"
        return Text(cell)

    table.add_row("Total Commits", str(summary.total_commits))
    table.add_row("Earliest Commit", commit_cell(summary.earliest))
    table.add_row("Latest Commit", commit_cell(summary.latest))
    table.add_row("Average Additions", f"[green]+{summary.average_additions}[/green]")
    table.add_row("Average Deletions", f"[red]-{summary.average_deletions}[/red]")
    table.add_row("Largest Commit", commit_cell(summary.largest, summary.largest_changes))
    table.add_row("Smallest Commit", commit_cell(summary.smallest, summary.smallest_changes))

    busiest = summary.busiest_day
    if busiest is not None:
        _, day_commits = busiest
        table.add_row(
            "Most Commits Per Day",
            f"{len(day_commits)} on {day_commits[0].authored_at.strftime('%Y-%m-%d')}",
        )

    return table
