from __future__ import annotations

import os
import stat
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

from verboselogs import VerboseLogger

from post_parser.errors import EntryNotFoundError
from post_parser.models import vpath
from post_parser.models.file_entry import FileInfo
from post_parser.models.filesystem import FileSystem


class DirectoryFileSystem(FileSystem):
    """A directory-backed filesystem exposing the same contract as ArchiveFileSystem.

    Virtual paths are resolved relative to ``root_dir``. Symbolic links and
    other special files below the root are not followed; like the non-regular
    members of an archive they are left out of listings and can't be opened.
    """

    def __init__(self, root_dir: Path | str, logger: VerboseLogger) -> None:
        self.root_dir = Path(root_dir)
        self.logger = logger
        if not self.root_dir.exists():
            raise EntryNotFoundError(str(root_dir))
        if not self.root_dir.is_dir():
            raise NotADirectoryError(20, "Not a directory", str(root_dir))
        self._filename = str(self.root_dir)

    @property
    def filename(self) -> str:
        return self._filename

    def _resolve(self, path: str) -> Path:
        vpath.check_path(path)
        return self.root_dir if path == vpath.ROOT else self.root_dir / path

    def open(self, path: str) -> BinaryIO:
        info = self.stat(path)
        if info.is_dir:
            raise IsADirectoryError(21, "Is a directory", path)
        return self._resolve(path).open("rb")

    def read_dir(self, path: str) -> list[FileInfo]:
        if not self.stat(path).is_dir:
            raise NotADirectoryError(20, "Not a directory", path)

        infos: list[FileInfo] = []
        with os.scandir(self._resolve(path)) as it:
            for entry in it:
                st = entry.stat(follow_symlinks=False)
                if not (stat.S_ISDIR(st.st_mode) or stat.S_ISREG(st.st_mode)):
                    self.logger.verbose(
                        f"Skipping non-regular file '{vpath.join(path, entry.name)}'."
                    )
                    continue
                infos.append(self._info(st, entry.name))
        return sorted(infos, key=lambda i: i.name)

    def stat(self, path: str) -> FileInfo:
        target = self._resolve(path)
        try:
            # the root itself may be a link to a directory
            st = target.stat() if path == vpath.ROOT else target.lstat()
        except FileNotFoundError as err:
            raise EntryNotFoundError(path) from err
        if not (stat.S_ISDIR(st.st_mode) or stat.S_ISREG(st.st_mode)):
            raise EntryNotFoundError(path)
        return self._info(st, vpath.base(path))

    @staticmethod
    def _info(st: os.stat_result, name: str) -> FileInfo:
        return FileInfo(
            name=name,
            size=st.st_size,
            mode=st.st_mode,
            mtime=datetime.fromtimestamp(st.st_mtime),
        )
