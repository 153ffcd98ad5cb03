"""The filesystem contract shared by archive-backed and on-disk inputs."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Callable

from post_parser.models import vpath
from post_parser.models.file_entry import FileInfo


class WalkAction(Enum):
    CONTINUE = "continue"
    SKIP_SUBTREE = "skip-subtree"
    ABORT = "abort"


@dataclass(frozen=True)
class WalkResult:
    """What a walk visitor asks the walker to do next.

    An ``ABORT`` carrying an error makes ``FileSystem.walk`` raise it.
    """

    action: WalkAction
    error: BaseException | None = None


CONTINUE = WalkResult(WalkAction.CONTINUE)
SKIP_SUBTREE = WalkResult(WalkAction.SKIP_SUBTREE)


def abort(error: BaseException | None = None) -> WalkResult:
    return WalkResult(WalkAction.ABORT, error)


VisitFunc = Callable[[str, FileInfo], WalkResult]


class FileSystem(ABC):
    """A read-only tree of files addressed by virtual paths.

    Paths are slash-separated and relative; ``"."`` names the root.
    """

    @abstractmethod
    def open(self, path: str) -> BinaryIO:
        """Open a regular file for binary reading."""

    @abstractmethod
    def read_dir(self, path: str) -> list[FileInfo]:
        """List a directory's children, sorted by name."""

    @abstractmethod
    def stat(self, path: str) -> FileInfo:
        """Return the metadata of the entry at ``path``."""

    @property
    def filename(self) -> str:
        return vpath.ROOT

    def close(self) -> None:
        return None

    def walk(self, top: str, visit: VisitFunc) -> None:
        """Walk the tree rooted at ``top`` depth-first, in name order.

        ``visit`` is called for ``top`` itself and then for every entry
        beneath it, parents before children.

        Raises
        ------
        Exception
            The error carried by the first ``abort`` returned by ``visit``.

        """
        vpath.check_path(top)
        result = self._walk(top, self.stat(top), visit)
        if result.action is WalkAction.ABORT and result.error is not None:
            raise result.error

    def _walk(self, path: str, info: FileInfo, visit: VisitFunc) -> WalkResult:
        result = visit(path, info)
        if result.action is WalkAction.ABORT:
            return result
        if result.action is WalkAction.SKIP_SUBTREE or not info.is_dir:
            return CONTINUE

        for child in self.read_dir(path):
            result = self._walk(vpath.join(path, child.name), child, visit)
            if result.action is WalkAction.ABORT:
                return result
        return CONTINUE

    def __enter__(self) -> FileSystem:
        return self

    def __exit__(self, *args) -> None:
        self.close()
