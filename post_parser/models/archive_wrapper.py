"""Filesystem facade over the in-memory contents of an archive."""
from __future__ import annotations

from post_parser.models import vpath
from post_parser.models.file_entry import EntryStream, EntryTree, FileInfo
from post_parser.models.filesystem import FileSystem


class ArchiveFileSystem(FileSystem):
    """Expose an ``EntryTree`` through the ``FileSystem`` contract.

    Only the tree is held; the archive file itself is not needed once the
    tree has been built.
    """

    def __init__(self, tree: EntryTree, filename: str | None = None) -> None:
        self.tree = tree
        self._filename = filename or tree.root.name

    @property
    def filename(self) -> str:
        return self._filename

    def open(self, path: str) -> EntryStream:
        entry = self.tree.find(vpath.check_path(path))
        if entry.is_dir:
            raise IsADirectoryError(21, "Is a directory", path)
        return entry.open()

    def read_dir(self, path: str) -> list[FileInfo]:
        entry = self.tree.find(vpath.check_path(path))
        if not entry.is_dir:
            raise NotADirectoryError(20, "Not a directory", path)
        return [child.info for child in entry.children]

    def stat(self, path: str) -> FileInfo:
        return self.tree.find(vpath.check_path(path)).info
