from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from result import Err

from reclaim.models.enums import EntryKind
from reclaim.models.scan import (
    CancelCheck,
    IssueCallback,
    ProgressCallback,
    ScanError,
    ScanErrorCode,
    ScanIssue,
    ScanIssueCode,
    Visitor,
)
from reclaim.scan.classifier import classify_kind
from reclaim.services.fs import DEFAULT_FS, FileSystem

PROGRESS_EVERY = 100


def resolve_root(path: str, fs: FileSystem) -> str | ScanError:
    """Validate and resolve a walk root.

    Returns the resolved absolute path, or a ``ScanError`` on failure.
    """
    expanded = fs.expanduser(path)
    if not fs.exists(expanded):
        return ScanError(
            code=ScanErrorCode.NOT_FOUND,
            path=expanded,
            message="Path does not exist",
        )

    resolved = fs.resolve(expanded)
    try:
        root_stat = fs.lstat(resolved)
    except OSError as exc:
        return ScanError(
            code=ScanErrorCode.ROOT_STAT_FAILED,
            path=resolved,
            message=f"Cannot stat root: {exc}",
        )
    if not root_stat.is_dir:
        return ScanError(
            code=ScanErrorCode.NOT_DIRECTORY,
            path=resolved,
            message="Path is not a directory",
        )
    return resolved


class _WalkContext:
    """Issue and progress plumbing shared by the walkers; safe across threads."""

    def __init__(
        self,
        on_issue: IssueCallback | None,
        cancel_check: CancelCheck | None,
        progress_callback: ProgressCallback | None,
    ) -> None:
        self._on_issue = on_issue
        self._cancel_check = cancel_check
        self._progress_callback = progress_callback
        self._lock = threading.Lock()
        self._cancelled = threading.Event()
        self.entries = 0
        self.directories = 0

    def report(self, issue: ScanIssue) -> None:
        if self._on_issue is None:
            return
        with self._lock:
            self._on_issue(issue)

    def is_cancelled(self) -> bool:
        if self._cancelled.is_set():
            return True
        if self._cancel_check is not None and self._cancel_check():
            self._cancelled.set()
            return True
        return False

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def entry_visited(self, path: str) -> None:
        with self._lock:
            self.entries += 1
            due = self.entries % PROGRESS_EVERY == 0
            entries, directories = self.entries, self.directories
        if due and self._progress_callback is not None:
            self._progress_callback(path, entries, directories)

    def directory_listed(self) -> None:
        with self._lock:
            self.directories += 1


class WalkerBase(ABC):
    def __init__(self, fs: FileSystem = DEFAULT_FS) -> None:
        self._fs = fs

    @abstractmethod
    def _walk_tree(self, root: str, visit: Visitor, ctx: _WalkContext) -> None:
        """Visit everything below *root*, reporting per-entry failures on *ctx*."""

    def walk(
        self,
        root: str,
        visit: Visitor,
        *,
        on_issue: IssueCallback | None = None,
        cancel_check: CancelCheck | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> bool:
        """Walk the tree below *root*, calling *visit* once per classified entry.

        *root* itself is not visited. Raises ``NotADirectoryError`` when *root*
        is not a directory. Returns ``False`` if the walk was cancelled before
        it finished; whatever was visited up to that point stays consistent.
        """
        if not self._fs.lstat(root).is_dir:
            raise NotADirectoryError(f"Walk root is not a directory: {root}")

        ctx = _WalkContext(on_issue, cancel_check, progress_callback)
        self._walk_tree(root, visit, ctx)
        return not ctx.cancelled

    def _list(self, path: str, ctx: _WalkContext) -> list[str] | None:
        try:
            children = self._fs.listdir(path)
        except OSError as exc:
            ctx.report(
                ScanIssue(
                    code=ScanIssueCode.LISTING_FAILED,
                    path=path,
                    message=f"Cannot list directory: {exc}",
                )
            )
            return None
        ctx.directory_listed()
        return children

    def _visit_child(self, path: str, visit: Visitor, ctx: _WalkContext) -> bool:
        """Classify and visit one child. Returns True when it should be descended into."""
        kind_result = classify_kind(path, self._fs)
        if isinstance(kind_result, Err):
            ctx.report(kind_result.unwrap_err())
            return False
        kind = kind_result.unwrap()

        outcome = visit(path, kind)
        ctx.entry_visited(path)
        if isinstance(outcome, Err):
            ctx.report(outcome.unwrap_err())
            return False
        return kind is EntryKind.DIRECTORY
