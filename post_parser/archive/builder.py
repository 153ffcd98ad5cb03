"""Decode archives into in-memory entry trees."""
from __future__ import annotations

import bz2
import gzip
import lzma
import os
import stat
import tarfile
import zipfile
import zlib
from contextlib import ExitStack
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Iterator

from verboselogs import VerboseLogger

from post_parser.errors import ArchiveReadError, UnsupportedArchiveError
from post_parser.models import vpath
from post_parser.models.archive_kind import ArchiveKind, detect_format
from post_parser.models.file_entry import EntryTree, FileEntry, FileInfo

# Everything the codecs and demultiplexers raise on bad or truncated input.
DECODE_ERRORS = (
    tarfile.TarError,
    zipfile.BadZipFile,
    lzma.LZMAError,
    zlib.error,
    EOFError,
    NotImplementedError,
    ValueError,
    OSError,
)

Member = tuple[str, FileInfo, bytes]


class _TreeBuilder:
    """Append members under their parent directory, creating missing ones."""

    def __init__(self, root: FileEntry) -> None:
        self.root = root
        self._dir_path: str | None = vpath.ROOT
        self._dir = root

    def add(self, path: str, info: FileInfo, content: bytes) -> None:
        # search for a new parent only when necessary
        parent_path = vpath.parent(path)
        if parent_path != self._dir_path:
            self._dir = self._directory(parent_path)
            self._dir_path = parent_path

        existing = self._dir.child(info.name)
        if existing is None:
            self._dir.children.append(FileEntry(info=info, content=content))
        elif existing.is_dir and info.is_dir:
            # an explicit directory member after its contents
            existing.info = info
        else:
            # duplicate member, the last one wins
            index = self._dir.children.index(existing)
            self._dir.children[index] = FileEntry(info=info, content=content)
            self._dir_path = None

    def _directory(self, path: str) -> FileEntry:
        entry = self.root
        for name in vpath.split(path):
            found = entry.child(name)
            if found is None:
                found = FileEntry(info=FileInfo.directory(name, self.root.info.mtime))
                entry.children.append(found)
            elif not found.is_dir:
                raise NotADirectoryError(20, "Not a directory", path)
            entry = found
        return entry


class ArchiveBuilder:
    """Read a whole archive into an ``EntryTree``.

    Handled formats: .tar, .tar.xz, .tar.gz, .tar.bz2 (and their short
    aliases) and .zip.
    """

    def __init__(self, logger: VerboseLogger) -> None:
        self.logger = logger

    def build(self, path: str | Path) -> EntryTree:
        """Decode the archive at ``path``.

        Parameters
        ----------
        path : str or pathlib.Path
            The archive file.

        Returns
        -------
        post_parser.models.file_entry.EntryTree
            The archive contents; the root is named after the archive file.

        Raises
        ------
        FileNotFoundError, PermissionError, OSError
            If the archive can't be opened.
        post_parser.errors.UnsupportedArchiveError
            If the extension is not a handled archive format.
        post_parser.errors.ArchiveReadError
            If the archive is malformed or truncated.

        """
        filename = str(path)
        st = os.stat(filename)
        if not stat.S_ISREG(st.st_mode):
            raise ArchiveReadError(filename, "not a regular file")

        root = FileEntry(
            info=FileInfo.directory(
                name=os.path.basename(os.path.normpath(filename)),
                mtime=datetime.fromtimestamp(st.st_mtime),
                size=st.st_size,
            )
        )
        kind = detect_format(filename)
        if kind is ArchiveKind.UNKNOWN:
            raise UnsupportedArchiveError(filename)

        self.logger.verbose(f"Loading archive '{filename}' ({kind.value}) ...")
        builder = _TreeBuilder(root)
        count = 0

        with ExitStack() as stack:
            raw: BinaryIO = stack.enter_context(open(filename, "rb"))
            try:
                members = (
                    self._tar_members(raw, kind, stack)
                    if kind.is_tar
                    else self._zip_members(raw, stack)
                )
                for member_path, info, content in members:
                    builder.add(member_path, info, content)
                    count += 1
            except DECODE_ERRORS as err:
                raise ArchiveReadError(filename, err) from err

        root.sort()
        self.logger.debug(f"Loaded {count} members from '{filename}'.")
        return EntryTree(root)

    def _decompress(
        self, raw: BinaryIO, kind: ArchiveKind, stack: ExitStack
    ) -> BinaryIO:
        match kind:
            case ArchiveKind.TAR_XZ:
                return stack.enter_context(lzma.LZMAFile(raw))
            case ArchiveKind.TAR_GZIP:
                return stack.enter_context(gzip.GzipFile(fileobj=raw))
            case ArchiveKind.TAR_BZIP2:
                return stack.enter_context(bz2.BZ2File(raw))
            case _:
                return raw

    def _tar_members(
        self, raw: BinaryIO, kind: ArchiveKind, stack: ExitStack
    ) -> Iterator[Member]:
        stream = self._decompress(raw, kind, stack)
        archive = stack.enter_context(tarfile.open(fileobj=stream, mode="r|"))
        for member in archive:
            path = self._member_path(member.name)
            if path is None:
                continue
            mtime = datetime.fromtimestamp(member.mtime)
            name = vpath.base(path)

            if member.isdir():
                yield path, FileInfo(name, 0, stat.S_IFDIR | member.mode, mtime), b""
            elif member.isfile():
                handle = archive.extractfile(member)
                content = handle.read() if handle is not None else b""
                yield path, FileInfo(
                    name, len(content), stat.S_IFREG | member.mode, mtime
                ), content
            else:
                self.logger.verbose(f"Skipping non-regular member '{member.name}'.")

    def _zip_members(self, raw: BinaryIO, stack: ExitStack) -> Iterator[Member]:
        archive = stack.enter_context(zipfile.ZipFile(raw))
        for info in archive.infolist():
            path = self._member_path(info.filename)
            if path is None:
                continue
            mtime = datetime(*info.date_time)
            perm = stat.S_IMODE(info.external_attr >> 16)
            name = vpath.base(path)

            if info.is_dir():
                mode = stat.S_IFDIR | (perm or 0o755)
                yield path, FileInfo(name, 0, mode, mtime), b""
            else:
                content = archive.read(info)
                mode = stat.S_IFREG | (perm or 0o644)
                yield path, FileInfo(name, len(content), mode, mtime), content

    @staticmethod
    def _member_path(name: str) -> str | None:
        path = vpath.clean(name)
        if path == vpath.ROOT:
            return None
        if path == ".." or path.startswith("../"):
            raise ValueError(f"member escapes the archive root: '{name}'")
        return path
