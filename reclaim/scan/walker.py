from __future__ import annotations

from collections.abc import Iterator
from typing import override

from reclaim.models.scan import Visitor
from reclaim.scan._base import WalkerBase, _WalkContext
from reclaim.services.fs import DEFAULT_FS, FileSystem


class DepthFirstWalker(WalkerBase):
    """Single-threaded pre-order walk in filesystem listing order.

    A directory child is descended into right after it is visited, before
    its later siblings. The recursion is kept on an explicit stack of listing
    iterators so deep trees do not hit the interpreter's recursion limit.
    """

    def __init__(self, fs: FileSystem = DEFAULT_FS) -> None:
        super().__init__(fs=fs)

    @override
    def _walk_tree(self, root: str, visit: Visitor, ctx: _WalkContext) -> None:
        listing = self._list(root, ctx)
        if listing is None:
            return

        stack: list[Iterator[str]] = [iter(listing)]
        while stack:
            path = next(stack[-1], None)
            if path is None:
                stack.pop()
                continue

            if ctx.is_cancelled():
                return

            if not self._visit_child(path, visit, ctx):
                continue

            children = self._list(path, ctx)
            if children is not None:
                stack.append(iter(children))
