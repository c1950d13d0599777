from __future__ import annotations

import io

from rich.console import Console

from reclaim.models.scan import ReclaimReport, ScanIssue, ScanIssueCode, ScanStats
from reclaim.services.formatting import format_bytes, format_size, trim_path
from reclaim.services.summary import render_issues, render_sizes, render_stats, render_top, render_total


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=200, color_system=None), buffer


def _report() -> ReclaimReport:
    return ReclaimReport(
        root="/d",
        sizes={"/d/zeta": 10, "/d/alpha": 2048, "/d/[odd]": 5},
        total=2063,
        stats=ScanStats(directories=0, files=3, symlinks=0, inodes=3, errors=1),
        issues=[ScanIssue(code=ScanIssueCode.LISTING_FAILED, path="/d/locked", message="Cannot list directory")],
    )


def test_sizes_printed_sorted_by_path() -> None:
    console, buffer = _console()
    render_sizes(console, _report())
    assert buffer.getvalue().splitlines() == ["/d/[odd]: 5", "/d/alpha: 2048", "/d/zeta: 10"]


def test_human_sizes_and_total() -> None:
    console, buffer = _console()
    render_sizes(console, _report(), human=True)
    render_total(console, _report(), human=True)
    lines = buffer.getvalue().splitlines()
    assert "/d/alpha: 2.0 KiB" in lines
    assert lines[-1] == "Total: 2.0 KiB"


def test_raw_total() -> None:
    console, buffer = _console()
    render_total(console, _report())
    assert buffer.getvalue().strip() == "Total: 2063"


def test_top_table_trims_root_prefix() -> None:
    console, buffer = _console()
    render_top(console, _report(), 1)
    out = buffer.getvalue()
    assert "Largest Entries" in out
    assert "alpha" in out
    assert "/d/alpha" not in out
    assert "zeta" not in out


def test_stats_table() -> None:
    console, buffer = _console()
    render_stats(console, _report())
    out = buffer.getvalue()
    assert "Scan Summary" in out
    assert "Inodes" in out


def test_issues_listed_with_code() -> None:
    console, buffer = _console()
    render_issues(console, _report().issues)
    out = buffer.getvalue()
    assert "1 issues during scan" in out
    assert "listing_failed: /d/locked: Cannot list directory" in out


def test_no_issues_prints_nothing() -> None:
    console, buffer = _console()
    render_issues(console, [])
    assert buffer.getvalue() == ""


class TestFormatting:
    def test_format_bytes(self) -> None:
        assert format_bytes(0) == "0 B"
        assert format_bytes(512) == "512 B"
        assert format_bytes(1536) == "1.5 KiB"
        assert format_bytes(3 * 1024**3) == "3.0 GiB"

    def test_format_size(self) -> None:
        assert format_size(1536) == "1536"
        assert format_size(1536, human=True) == "1.5 KiB"

    def test_trim_path(self) -> None:
        assert trim_path("/d/a/b", "/d/") == "a/b"
        assert trim_path("/other/a", "/d/") == "/other/a"
