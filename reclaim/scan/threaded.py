from __future__ import annotations

import queue
import threading
from typing import override

from reclaim.models.scan import Visitor
from reclaim.scan._base import WalkerBase, _WalkContext
from reclaim.services.fs import DEFAULT_FS, FileSystem


class ThreadedWalker(WalkerBase):
    """Walk sibling subtrees in parallel on a pool of worker threads.

    The per-entry contract is the same as the depth-first walker, but neither
    sibling order nor depth-first order holds. *visit* is called from several
    threads at once and must do its own locking.
    """

    def __init__(self, workers: int = 8, fs: FileSystem = DEFAULT_FS) -> None:
        super().__init__(fs=fs)
        self._workers = max(1, workers)

    @override
    def _walk_tree(self, root: str, visit: Visitor, ctx: _WalkContext) -> None:
        q: queue.Queue[str | None] = queue.Queue()
        q.put(root)
        failures: list[BaseException] = []

        def run_worker() -> None:
            while True:
                path = q.get()
                if path is None:
                    q.task_done()
                    break

                if failures or ctx.is_cancelled():
                    q.task_done()
                    continue

                try:
                    children = self._list(path, ctx)
                    for child in children or ():
                        if ctx.is_cancelled():
                            break
                        if self._visit_child(child, visit, ctx):
                            q.put(child)
                except Exception as exc:  # noqa: BLE001
                    failures.append(exc)
                finally:
                    q.task_done()

        threads = [threading.Thread(target=run_worker, daemon=True) for _ in range(self._workers)]
        for thread in threads:
            thread.start()
        q.join()
        for _ in threads:
            q.put(None)
        q.join()
        for thread in threads:
            thread.join(timeout=0.3)

        if failures:
            raise failures[0]
