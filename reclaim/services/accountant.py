from __future__ import annotations

import threading

from result import Err, Ok

from reclaim.models.enums import EntryKind
from reclaim.models.scan import EntryResult, InodeIdentity, InodeRecord, ScanIssue, ScanIssueCode
from reclaim.scan.classifier import inspect
from reclaim.services.fs import DEFAULT_FS, FileSystem


class SizeAccountant:
    """Per-path sizes plus per-inode link bookkeeping for one walk.

    Each visited entry is passed to :meth:`record`. An inode is billed by
    :meth:`finalize` only when every hard link the filesystem reports for it
    was seen inside the walked tree. Billing is all-or-nothing per inode and
    each inode is billed at most once, however many names point at it.
    """

    def __init__(self, fs: FileSystem = DEFAULT_FS) -> None:
        self._fs = fs
        self._lock = threading.Lock()
        self._sizes: dict[str, int] = {}
        self._inodes: dict[InodeIdentity, InodeRecord] = {}
        self._anomalies: list[ScanIssue] = []
        self._counts: dict[EntryKind, int] = {}

    def record(self, path: str, kind: EntryKind) -> EntryResult:
        if kind is EntryKind.OTHER:
            return Err(
                ScanIssue(
                    code=ScanIssueCode.UNSUPPORTED_KIND,
                    path=path,
                    message="Unsupported entry type (device, socket, fifo, ...)",
                )
            )

        inspected = inspect(path, kind, self._fs)
        if isinstance(inspected, Err):
            return Err(inspected.unwrap_err())
        entry = inspected.unwrap()

        with self._lock:
            self._sizes[entry.path] = entry.size
            self._counts[kind] = self._counts.get(kind, 0) + 1

            record = self._inodes.get(entry.identity)
            if entry.is_dir:
                # No hard links to directories: once seen, a directory is fully inside.
                if record is None:
                    self._inodes[entry.identity] = InodeRecord(
                        size=entry.size,
                        link_count=entry.link_count,
                        seen=entry.link_count,
                    )
                else:
                    record.link_count = entry.link_count
                    record.seen = entry.link_count
                return Ok(None)

            if record is None:
                record = InodeRecord(size=entry.size, link_count=entry.link_count)
                self._inodes[entry.identity] = record
            record.seen += 1
            if record.seen > record.link_count:
                self._anomalies.append(
                    ScanIssue(
                        code=ScanIssueCode.LINK_COUNT_ANOMALY,
                        path=entry.path,
                        message=(
                            f"Seen {record.seen} links to inode {entry.identity.inode} "
                            f"but filesystem reports {record.link_count}; tree changed during scan"
                        ),
                    )
                )
                record.seen = record.link_count
        return Ok(None)

    def finalize(self) -> tuple[dict[str, int], int]:
        """Return the path -> size map and the reclaimable total in bytes."""
        with self._lock:
            total = sum(record.size for record in self._inodes.values() if record.fully_inside)
            return dict(self._sizes), total

    @property
    def anomalies(self) -> list[ScanIssue]:
        with self._lock:
            return list(self._anomalies)

    @property
    def inode_count(self) -> int:
        with self._lock:
            return len(self._inodes)

    def count(self, kind: EntryKind) -> int:
        with self._lock:
            return self._counts.get(kind, 0)
