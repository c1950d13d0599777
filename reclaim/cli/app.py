from __future__ import annotations

import threading
import time
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console, Group
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.spinner import Spinner
from rich.text import Text
from result import Err

from reclaim.config.defaults import default_config
from reclaim.config.loader import load_config, sample_config_json
from reclaim.config.schema import AppConfig
from reclaim.models.scan import ReclaimResult, ScanError, ScanErrorCode, ScanOptions
from reclaim.scan import Walker, default_walker
from reclaim.services.reclaim import compute_reclaimable
from reclaim.services.summary import render_issues, render_sizes, render_stats, render_top, render_total

console = Console()


@dataclass(slots=True)
class _ScanProgress:
    current_path: str
    entries: int
    directories: int
    start_time: float


def _truncate_path(path: str, max_width: int = 110) -> str:
    if len(path) <= max_width:
        return path
    keep = max_width - 3
    return f"...{path[-keep:]}"


def _render_scan_panel(progress: _ScanProgress, workers: int, phase: str) -> Panel:
    elapsed = time.perf_counter() - progress.start_time
    body = Group(
        Spinner("dots", text=phase, style="bold #8abeb7"),
        Text.from_markup(f"[#81a2be]Path:[/] {escape(_truncate_path(progress.current_path))}"),
        Text.from_markup(
            f"[#b5bd68]Visited:[/] {progress.entries:,} entries, {progress.directories:,} dirs listed"
            + f"    [#f0c674]Workers:[/] {workers}"
            + f"    [#de935f]Elapsed:[/] {elapsed:.1f}s"
        ),
    )
    return Panel(
        body,
        title="[bold #81a2be]reclaim - Scanning...[/]",
        border_style="#373b41",
    )


def _scan(path: Path, options: ScanOptions, walker: Walker) -> ReclaimResult:
    try:
        return compute_reclaimable(path, options, walker=walker)
    except Exception as exc:  # noqa: BLE001
        return Err(
            ScanError(
                code=ScanErrorCode.INTERNAL,
                path=str(path),
                message=f"Unhandled scan failure: {exc}",
            )
        )


def _scan_with_progress(path: Path, options: ScanOptions, workers: int, walker: Walker) -> ReclaimResult:
    lock = threading.Lock()
    done = threading.Event()
    interrupted = threading.Event()
    result: ReclaimResult | None = None
    progress = _ScanProgress(
        current_path=str(path),
        entries=0,
        directories=0,
        start_time=time.perf_counter(),
    )

    def on_progress(current_path: str, entries: int, directories: int) -> None:
        with lock:
            progress.current_path = current_path
            progress.entries = entries
            progress.directories = directories

    def scan_worker() -> None:
        nonlocal result
        try:
            result = compute_reclaimable(
                path,
                options,
                walker=walker,
                progress_callback=on_progress,
                cancel_check=interrupted.is_set,
            )
        except Exception as exc:  # noqa: BLE001
            result = Err(
                ScanError(
                    code=ScanErrorCode.INTERNAL,
                    path=str(path),
                    message=f"Unhandled scan failure: {exc}",
                )
            )
        finally:
            done.set()

    thread = threading.Thread(target=scan_worker, daemon=True)
    thread.start()

    with Live(
        _render_scan_panel(progress, workers, "Walking directory tree..."),
        console=console,
        refresh_per_second=12,
        transient=True,
    ) as live:
        while not done.is_set():
            try:
                with lock:
                    snapshot = replace(progress)
                live.update(_render_scan_panel(snapshot, workers, "Walking directory tree..."))
                time.sleep(0.08)
            except KeyboardInterrupt:
                interrupted.set()

        with lock:
            final = replace(progress)
        live.update(_render_scan_panel(final, workers, "Summing reclaimable inodes..."))

    thread.join()
    if result is None:
        return Err(
            ScanError(
                code=ScanErrorCode.INTERNAL,
                path=str(path),
                message="Scan did not complete",
            )
        )
    return result


def _effective_config(
    workers: int | None,
    include_root: bool,
    human: bool,
    top: int | None,
    quiet: bool,
) -> AppConfig:
    config_result = load_config()
    if isinstance(config_result, Err):
        console.print(f"[yellow]{escape(config_result.unwrap_err())} Using defaults.[/]")
        config = default_config()
    else:
        config = config_result.unwrap()

    overrides: dict[str, object] = {}
    if workers is not None:
        overrides["workers"] = max(1, workers)
    if include_root:
        overrides["include_root"] = True
    if human:
        overrides["human_readable"] = True
    if top is not None:
        overrides["top_count"] = max(0, top)
    if quiet:
        overrides["show_issues"] = False
    if overrides:
        config = replace(config, **overrides)
    return config


def run(
    path: Annotated[str, typer.Argument(help="Directory whose deletion should be measured.")] = ".",
    workers: Annotated[int | None, typer.Option("--workers", "-w", help="Walker threads (1 = depth-first).")] = None,
    include_root: Annotated[
        bool, typer.Option("--include-root", help="Also bill the root directory entry itself.")
    ] = False,
    human: Annotated[bool, typer.Option("--human", "-H", help="Print sizes in KiB/MiB/GiB.")] = False,
    top: Annotated[int | None, typer.Option("--top", help="Show the N largest entries.")] = None,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only count issues, do not list them.")] = False,
    progress: Annotated[bool, typer.Option("--progress/--no-progress", help="Show a live progress panel.")] = True,
    sample_config: Annotated[bool, typer.Option("--sample-config", help="Print sample config JSON.")] = False,
) -> None:
    if sample_config:
        console.print(sample_config_json())
        raise typer.Exit(0)

    config = _effective_config(workers, include_root, human, top, quiet)
    options = ScanOptions(include_root=config.include_root)
    walker = default_walker(workers=config.workers)

    if progress:
        result = _scan_with_progress(Path(path), options, workers=config.workers, walker=walker)
    else:
        result = _scan(Path(path), options, walker)

    if isinstance(result, Err):
        error = result.unwrap_err()
        console.print(f"[red]Scan failed for {escape(error.path)}: {escape(error.message)}[/]")
        raise typer.Exit(1)
    report = result.unwrap()

    render_sizes(console, report, human=config.human_readable)
    render_total(console, report, human=config.human_readable)
    if config.top_count:
        render_top(console, report, config.top_count, human=config.human_readable)
        render_stats(console, report)

    if report.cancelled:
        console.print("[yellow]Scan interrupted; results are partial.[/]")
    if config.show_issues:
        render_issues(console, report.issues)
    elif report.issues:
        console.print(f"[red]{len(report.issues):,} issues during scan[/red]")


def cli() -> None:
    typer.run(run)


if __name__ == "__main__":
    cli()
