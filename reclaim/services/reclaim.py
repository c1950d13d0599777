from __future__ import annotations

from pathlib import Path

from result import Err, Ok

from reclaim.models.enums import EntryKind
from reclaim.models.scan import (
    CancelCheck,
    IssueCallback,
    ProgressCallback,
    ReclaimReport,
    ReclaimResult,
    ScanError,
    ScanErrorCode,
    ScanIssue,
    ScanOptions,
    ScanStats,
)
from reclaim.scan import Walker, resolve_root
from reclaim.scan.walker import DepthFirstWalker
from reclaim.services.accountant import SizeAccountant
from reclaim.services.fs import DEFAULT_FS, FileSystem


def compute_reclaimable(
    path: str | Path,
    options: ScanOptions | None = None,
    *,
    walker: Walker | None = None,
    fs: FileSystem = DEFAULT_FS,
    progress_callback: ProgressCallback | None = None,
    cancel_check: CancelCheck | None = None,
    on_issue: IssueCallback | None = None,
) -> ReclaimResult:
    """Compute how many bytes deleting the tree at *path* would free.

    Precondition failures (missing path, not a directory) come back as
    ``Err(ScanError)`` before anything is walked. Everything else is
    best-effort: entries that cannot be classified or listed are skipped and
    listed in ``ReclaimReport.issues``.
    """
    options = options or ScanOptions()
    resolved = resolve_root(str(path), fs)
    if isinstance(resolved, ScanError):
        return Err(resolved)

    accountant = SizeAccountant(fs)
    issues: list[ScanIssue] = []

    def collect(issue: ScanIssue) -> None:
        issues.append(issue)
        if on_issue is not None:
            on_issue(issue)

    if options.include_root:
        outcome = accountant.record(resolved, EntryKind.DIRECTORY)
        if isinstance(outcome, Err):
            issue = outcome.unwrap_err()
            return Err(
                ScanError(
                    code=ScanErrorCode.ROOT_STAT_FAILED,
                    path=resolved,
                    message=issue.message,
                )
            )

    walker = walker or DepthFirstWalker(fs=fs)
    try:
        completed = walker.walk(
            resolved,
            accountant.record,
            on_issue=collect,
            cancel_check=cancel_check,
            progress_callback=progress_callback,
        )
    except OSError as exc:
        # Root vanished or was replaced between validation and the walk.
        return Err(
            ScanError(
                code=ScanErrorCode.ROOT_STAT_FAILED,
                path=resolved,
                message=f"Cannot walk root: {exc}",
            )
        )

    sizes, total = accountant.finalize()
    for anomaly in accountant.anomalies:
        collect(anomaly)

    stats = ScanStats(
        directories=accountant.count(EntryKind.DIRECTORY),
        files=accountant.count(EntryKind.REGULAR_FILE),
        symlinks=accountant.count(EntryKind.SYMLINK),
        inodes=accountant.inode_count,
        errors=len(issues),
    )
    return Ok(
        ReclaimReport(
            root=resolved,
            sizes=sizes,
            total=total,
            stats=stats,
            issues=issues,
            cancelled=not completed,
        )
    )
