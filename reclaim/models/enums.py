from __future__ import annotations

from enum import Enum


class EntryKind(str, Enum):
    DIRECTORY = "directory"
    REGULAR_FILE = "file"
    SYMLINK = "symlink"
    OTHER = "other"
