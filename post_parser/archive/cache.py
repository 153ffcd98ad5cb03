"""Process-lifetime store of decoded archives."""
from __future__ import annotations

from pathlib import Path

from verboselogs import VerboseLogger

from post_parser.archive.builder import ArchiveBuilder
from post_parser.models.archive_wrapper import ArchiveFileSystem
from post_parser.models.file_entry import EntryTree


class ArchiveCache:
    """Keep decoded archives so that each one is read at most once.

    Archives are keyed by their resolved path. With ``enabled`` off every
    request decodes the archive again.
    """

    def __init__(
        self, builder: ArchiveBuilder, logger: VerboseLogger, enabled: bool = True
    ) -> None:
        self.builder = builder
        self.logger = logger
        self.enabled = enabled
        self._trees: dict[str, EntryTree] = {}

    @staticmethod
    def _key(path: str | Path) -> str:
        return str(Path(path).resolve())

    def get(self, path: str | Path) -> EntryTree:
        key = self._key(path)
        tree = self._trees.get(key)
        if tree is not None:
            self.logger.spam(f"Archive cache hit: '{path}'")
            return tree

        tree = self.builder.build(path)
        if self.enabled:
            self._trees[key] = tree
        return tree

    def filesystem(self, path: str | Path) -> ArchiveFileSystem:
        return ArchiveFileSystem(self.get(path), filename=str(path))

    def clear(self) -> None:
        if self._trees:
            self.logger.verbose(f"Clearing archive cache: {sorted(self._trees)}")
        self._trees.clear()

    def __contains__(self, path: object) -> bool:
        return isinstance(path, (str, Path)) and self._key(path) in self._trees

    def __len__(self) -> int:
        return len(self._trees)
