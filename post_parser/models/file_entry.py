"""Data models for files held in memory after reading an archive."""
from __future__ import annotations

import io
import stat
from dataclasses import dataclass, field
from datetime import datetime

from post_parser.errors import EntryNotFoundError
from post_parser.models import vpath


@dataclass(frozen=True)
class FileInfo:
    """Metadata of a file or directory.

    Attributes
    ----------
    name : str
        The base name.
    size : int
        The size in bytes.
    mode : int
        The permission and file type bits, as in ``os.stat_result.st_mode``.
    mtime : datetime.datetime
        The modification time.

    """

    name: str
    size: int
    mode: int
    mtime: datetime

    @property
    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    @classmethod
    def directory(cls, name: str, mtime: datetime, size: int = 0) -> FileInfo:
        return cls(name=name, size=size, mode=stat.S_IFDIR | 0o755, mtime=mtime)


@dataclass
class FileEntry:
    """An in-memory archive member.

    Regular files hold their content; directories hold their children, kept
    sorted by name once the owning tree is complete.
    """

    info: FileInfo
    content: bytes = b""
    children: list[FileEntry] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def is_dir(self) -> bool:
        return self.info.is_dir

    def child(self, name: str) -> FileEntry | None:
        for entry in self.children:
            if entry.name == name:
                return entry
        return None

    def sort(self) -> None:
        """Recursively sort children by name."""
        self.children.sort(key=lambda e: e.name)
        for entry in self.children:
            entry.sort()

    def open(self) -> EntryStream:
        return EntryStream(self)


class EntryStream(io.BytesIO):
    """A restartable, read-only byte stream over a file entry's content."""

    def __init__(self, entry: FileEntry) -> None:
        super().__init__(entry.content)
        self.name = entry.name
        self._info = entry.info

    def stat(self) -> FileInfo:
        return self._info

    def reset(self) -> None:
        """Rewind the stream to the start of the content."""
        self.seek(0)

    def writable(self) -> bool:
        return False

    def write(self, _data) -> int:  # type: ignore[override]
        raise io.UnsupportedOperation("write")


class EntryTree:
    """The decoded contents of one archive, rooted at a synthetic directory.

    Paths are resolved from the root one component at a time; entries hold
    no reference back to their parent.
    """

    def __init__(self, root: FileEntry) -> None:
        self.root = root

    def find(self, path: str) -> FileEntry:
        """Resolve a valid virtual path to its entry.

        Raises
        ------
        post_parser.errors.EntryNotFoundError
            If any component of ``path`` does not exist.

        """
        entry = self.root
        searched: list[str] = []
        for name in vpath.split(path):
            searched.append(name)
            found = entry.child(name) if entry.is_dir else None
            if found is None:
                raise EntryNotFoundError(path, "/".join(searched))
            entry = found
        return entry
