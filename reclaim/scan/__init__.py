from __future__ import annotations

from typing import Protocol

from reclaim.models.scan import CancelCheck, IssueCallback, ProgressCallback, Visitor
from reclaim.scan._base import WalkerBase, resolve_root
from reclaim.scan.classifier import classify, classify_kind, inspect
from reclaim.scan.threaded import ThreadedWalker
from reclaim.scan.walker import DepthFirstWalker
from reclaim.services.fs import DEFAULT_FS, FileSystem


class Walker(Protocol):
    def walk(
        self,
        root: str,
        visit: Visitor,
        *,
        on_issue: IssueCallback | None = None,
        cancel_check: CancelCheck | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> bool: ...


def default_walker(workers: int = 1, fs: FileSystem = DEFAULT_FS) -> WalkerBase:
    """Return the depth-first walker, or a threaded one when *workers* > 1."""
    if workers > 1:
        return ThreadedWalker(workers=workers, fs=fs)
    return DepthFirstWalker(fs=fs)


__all__ = [
    "DepthFirstWalker",
    "ThreadedWalker",
    "Walker",
    "WalkerBase",
    "classify",
    "classify_kind",
    "default_walker",
    "inspect",
    "resolve_root",
]
