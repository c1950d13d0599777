from __future__ import annotations

from result import Err, Ok, Result

from reclaim.models.enums import EntryKind
from reclaim.models.scan import Entry, InodeIdentity, ScanIssue, ScanIssueCode
from reclaim.services.fs import DEFAULT_FS, FileSystem, StatResult


def _kind_of(st: StatResult) -> EntryKind:
    # Symlink first: the target may be missing or form a loop.
    if st.is_symlink:
        return EntryKind.SYMLINK
    if st.is_dir:
        return EntryKind.DIRECTORY
    if st.is_file:
        return EntryKind.REGULAR_FILE
    return EntryKind.OTHER


def classify_kind(path: str, fs: FileSystem = DEFAULT_FS) -> Result[EntryKind, ScanIssue]:
    """Determine what *path* is without following symlinks."""
    try:
        st = fs.lstat(path)
    except OSError as exc:
        return Err(
            ScanIssue(
                code=ScanIssueCode.CLASSIFICATION_FAILED,
                path=path,
                message=f"Cannot determine type: {exc}",
            )
        )
    return Ok(_kind_of(st))


def inspect(path: str, kind: EntryKind, fs: FileSystem = DEFAULT_FS) -> Result[Entry, ScanIssue]:
    """Collect inode identity, logical size and link count for an entry.

    Symlink size is the character length of the raw link target, not the size
    of whatever the link points at. Every failing attribute read is returned
    as an ``Err``; no fact is ever defaulted.
    """
    if kind is EntryKind.OTHER:
        return Err(
            ScanIssue(
                code=ScanIssueCode.UNSUPPORTED_KIND,
                path=path,
                message="Unsupported entry type (device, socket, fifo, ...)",
            )
        )

    try:
        st = fs.lstat(path)
    except OSError as exc:
        return Err(
            ScanIssue(
                code=ScanIssueCode.CLASSIFICATION_FAILED,
                path=path,
                message=f"Cannot read inode attributes: {exc}",
            )
        )

    if _kind_of(st) is not kind:
        return Err(
            ScanIssue(
                code=ScanIssueCode.CLASSIFICATION_FAILED,
                path=path,
                message=f"Entry changed type during scan (expected {kind.value})",
            )
        )

    if kind is EntryKind.SYMLINK:
        try:
            size = len(fs.readlink(path))
        except OSError as exc:
            return Err(
                ScanIssue(
                    code=ScanIssueCode.CLASSIFICATION_FAILED,
                    path=path,
                    message=f"Cannot read link target: {exc}",
                )
            )
    else:
        size = st.size

    return Ok(
        Entry(
            path=path,
            kind=kind,
            size=size,
            identity=InodeIdentity(device=st.device, inode=st.inode),
            link_count=st.nlink,
        )
    )


def classify(path: str, fs: FileSystem = DEFAULT_FS) -> Result[Entry, ScanIssue]:
    return classify_kind(path, fs).and_then(lambda kind: inspect(path, kind, fs))
