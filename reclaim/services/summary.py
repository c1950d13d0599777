from __future__ import annotations

import heapq

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from reclaim.models.scan import ReclaimReport, ScanIssue, ScanIssueCode
from reclaim.services.formatting import format_size, trim_path

_ISSUE_STYLE: dict[ScanIssueCode, str] = {
    ScanIssueCode.CLASSIFICATION_FAILED: "yellow",
    ScanIssueCode.UNSUPPORTED_KIND: "yellow",
    ScanIssueCode.LISTING_FAILED: "red",
    ScanIssueCode.LINK_COUNT_ANOMALY: "magenta",
}


def render_sizes(console: Console, report: ReclaimReport, *, human: bool = False) -> None:
    for path, size in report.sorted_sizes():
        console.print(f"{escape(path)}: {format_size(size, human=human)}", highlight=False, soft_wrap=True)


def render_total(console: Console, report: ReclaimReport, *, human: bool = False) -> None:
    console.print(f"[bold]Total:[/bold] {format_size(report.total, human=human)}", highlight=False, soft_wrap=True)


def render_top(console: Console, report: ReclaimReport, top_n: int, *, human: bool = False) -> None:
    root_prefix = report.root.rstrip("/") + "/"
    table = Table(title="Largest Entries", header_style="bold yellow")
    table.add_column("Path")
    table.add_column("Size", justify="right")
    for path, size in heapq.nlargest(top_n, report.sizes.items(), key=lambda item: item[1]):
        table.add_row(escape(trim_path(path, root_prefix)), format_size(size, human=human))
    console.print(table)


def render_stats(console: Console, report: ReclaimReport) -> None:
    stats = report.stats
    table = Table(title="Scan Summary", header_style="bold cyan")
    table.add_column("Directories", justify="right")
    table.add_column("Files", justify="right")
    table.add_column("Symlinks", justify="right")
    table.add_column("Inodes", justify="right")
    table.add_column("Issues", justify="right")
    table.add_row(
        f"{stats.directories:,}",
        f"{stats.files:,}",
        f"{stats.symlinks:,}",
        f"{stats.inodes:,}",
        f"{stats.errors:,}",
    )
    console.print(table)


def format_issue(issue: ScanIssue) -> str:
    style = _ISSUE_STYLE.get(issue.code, "red")
    return f"[{style}]{issue.code.value}[/]: {escape(issue.path)}: {escape(issue.message)}"


def render_issues(console: Console, issues: list[ScanIssue]) -> None:
    if not issues:
        return
    console.print(f"[red]{len(issues):,} issues during scan[/red]")
    for issue in issues:
        console.print(format_issue(issue), highlight=False, soft_wrap=True)
