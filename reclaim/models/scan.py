from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from result import Result

from reclaim.models.enums import EntryKind

ProgressCallback = Callable[[str, int, int], None]
CancelCheck = Callable[[], bool]


@dataclass(slots=True, frozen=True)
class InodeIdentity:
    device: int
    inode: int


@dataclass(slots=True, frozen=True)
class Entry:
    path: str
    kind: EntryKind
    size: int
    identity: InodeIdentity
    link_count: int

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(slots=True)
class InodeRecord:
    size: int
    link_count: int
    seen: int = 0

    @property
    def fully_inside(self) -> bool:
        """True when every link the filesystem knows about was found in the tree."""
        return self.seen == self.link_count


class ScanIssueCode(str, Enum):
    CLASSIFICATION_FAILED = "classification_failed"
    UNSUPPORTED_KIND = "unsupported_kind"
    LISTING_FAILED = "listing_failed"
    LINK_COUNT_ANOMALY = "link_count_anomaly"


@dataclass(slots=True, frozen=True)
class ScanIssue:
    code: ScanIssueCode
    path: str
    message: str


IssueCallback = Callable[[ScanIssue], None]
EntryResult = Result[None, ScanIssue]
Visitor = Callable[[str, EntryKind], EntryResult]


@dataclass(slots=True)
class ScanStats:
    directories: int = 0
    files: int = 0
    symlinks: int = 0
    inodes: int = 0
    errors: int = 0


@dataclass(slots=True)
class ScanOptions:
    include_root: bool = False


@dataclass(slots=True)
class ReclaimReport:
    root: str
    sizes: dict[str, int]
    total: int
    stats: ScanStats
    issues: list[ScanIssue] = field(default_factory=list)
    cancelled: bool = False

    def sorted_sizes(self) -> list[tuple[str, int]]:
        return sorted(self.sizes.items())


class ScanErrorCode(str, Enum):
    NOT_FOUND = "not_found"
    NOT_DIRECTORY = "not_directory"
    ROOT_STAT_FAILED = "root_stat_failed"
    INTERNAL = "internal"


@dataclass(slots=True, frozen=True)
class ScanError:
    code: ScanErrorCode
    path: str
    message: str


ReclaimResult = Result[ReclaimReport, ScanError]
