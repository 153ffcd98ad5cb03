"""Module that contains data models."""
from .archive_kind import ArchiveKind, detect_format
from .file_entry import EntryStream, EntryTree, FileEntry, FileInfo
from .filesystem import (
    CONTINUE,
    SKIP_SUBTREE,
    FileSystem,
    WalkAction,
    WalkResult,
    abort,
)
from .archive_wrapper import ArchiveFileSystem
from .directory_wrapper import DirectoryFileSystem

__all__ = [
    "ArchiveKind",
    "detect_format",
    "EntryStream",
    "EntryTree",
    "FileEntry",
    "FileInfo",
    "CONTINUE",
    "SKIP_SUBTREE",
    "FileSystem",
    "WalkAction",
    "WalkResult",
    "abort",
    "ArchiveFileSystem",
    "DirectoryFileSystem",
]
