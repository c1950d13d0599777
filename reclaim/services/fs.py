from __future__ import annotations

import os
import stat as statmod
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(slots=True, frozen=True)
class StatResult:
    """No-follow stat facts needed for classification and accounting."""

    mode: int
    size: int
    device: int
    inode: int
    nlink: int

    @property
    def is_symlink(self) -> bool:
        return statmod.S_ISLNK(self.mode)

    @property
    def is_dir(self) -> bool:
        return statmod.S_ISDIR(self.mode)

    @property
    def is_file(self) -> bool:
        return statmod.S_ISREG(self.mode)


class FileSystem(Protocol):
    def expanduser(self, path: str) -> str: ...

    def exists(self, path: str) -> bool: ...

    def resolve(self, path: str) -> str: ...

    def lstat(self, path: str) -> StatResult: ...

    def readlink(self, path: str) -> str: ...

    def listdir(self, path: str) -> list[str]: ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str: ...


class OsFileSystem:
    def expanduser(self, path: str) -> str:
        return str(Path(path).expanduser())

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def resolve(self, path: str) -> str:
        return os.path.realpath(path)

    def lstat(self, path: str) -> StatResult:
        st = os.lstat(path)
        return StatResult(
            mode=st.st_mode,
            size=st.st_size,
            device=st.st_dev,
            inode=st.st_ino,
            nlink=st.st_nlink,
        )

    def readlink(self, path: str) -> str:
        return os.readlink(path)

    def listdir(self, path: str) -> list[str]:
        # Materialized so a deep walk does not hold one open handle per level.
        with os.scandir(path) as entries:
            return [e.path for e in entries]

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        return Path(path).read_text(encoding=encoding)


DEFAULT_FS: FileSystem = OsFileSystem()
