"""Custom exceptions for the :mod:`post_parser` package."""
from __future__ import annotations


class PostParserError(Exception):
    """Base exception for post-processing input errors."""


class ConfigurationError(PostParserError, ValueError):
    """A run configuration field is unset or invalid."""


class UnsupportedArchiveError(PostParserError, ValueError):
    """The archive extension does not map to a known archive kind."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Unsupported archive format: '{path}'")
        self.path = path


class ArchiveReadError(PostParserError, RuntimeError):
    """The archive could not be decompressed or decoded."""

    def __init__(self, path: str, reason: object) -> None:
        super().__init__(f"Failed reading archive '{path}': {reason}")
        self.path = path


class InvalidPathError(PostParserError, ValueError):
    """A path is not in normalized, slash-separated, relative form."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Invalid path: '{path}'")
        self.path = path


class EntryNotFoundError(PostParserError, FileNotFoundError):
    """A path does not resolve to an existing entry.

    Attributes
    ----------
    path : str
        The full path which was requested.
    missing : str
        The shortest prefix of ``path`` which does not exist.

    """

    def __init__(self, path: str, missing: str | None = None) -> None:
        self.missing = missing or path
        super().__init__(
            2, f"No such file or directory (missing '{self.missing}')", path
        )
        self.path = path


class UnknownFormatError(PostParserError, ValueError):
    """A format or input tag is not registered."""

    def __init__(self, tag: str, available: list[str]) -> None:
        super().__init__(
            f"Bad input type {tag!r}, available types are: {sorted(available)}"
        )
        self.tag = tag
        self.available = sorted(available)


class TableDecodeError(PostParserError, RuntimeError):
    """A decoder failed to turn a byte stream into a table."""

    def __init__(self, reason: object, path: str | None = None) -> None:
        message = f"{reason}" if path is None else f"{reason}: in file: {path}"
        super().__init__(message)
        self.path = path


class StructuralError(PostParserError, RuntimeError):
    """Per-step tables cannot be merged into one consistent table."""


class TimeDirectoryError(StructuralError):
    """A directory below the time-series root is not named by a number."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Directory name is not a time value: '{path}'")
        self.path = path


class RowCountMismatchError(StructuralError):
    """A step table's row count differs from the first step's."""

    def __init__(self, path: str, expected: int, got: int) -> None:
        super().__init__(
            f"Row count mismatch: expected {expected}, got {got}: in file: {path}"
        )
        self.path = path
        self.expected = expected
        self.got = got


__all__ = [
    "PostParserError",
    "ConfigurationError",
    "UnsupportedArchiveError",
    "ArchiveReadError",
    "InvalidPathError",
    "EntryNotFoundError",
    "UnknownFormatError",
    "TableDecodeError",
    "StructuralError",
    "TimeDirectoryError",
    "RowCountMismatchError",
]
