"""Helpers for slash-separated virtual paths."""
import posixpath

from post_parser.errors import InvalidPathError

ROOT = "."


def is_valid_path(path: str) -> bool:
    """Report whether ``path`` is a clean, unrooted, slash-separated path.

    ``"."`` names the root. Otherwise no element may be empty, ``"."`` or
    ``".."``, and the path may neither start nor end with a slash.
    """
    if path == ROOT:
        return True
    if not path or "\\" in path or "\x00" in path:
        return False
    return all(part not in ("", ".", "..") for part in path.split("/"))


def check_path(path: str) -> str:
    """Return ``path`` unchanged, raising if it is not valid."""
    if not is_valid_path(path):
        raise InvalidPathError(path)
    return path


def clean(path: str) -> str:
    """Normalize an archive member name into a relative virtual path.

    Leading slashes and ``./`` prefixes are dropped, trailing slashes are
    removed; the empty name maps to the root.
    """
    cleaned = posixpath.normpath(path.replace("\\", "/").lstrip("/"))
    return ROOT if cleaned in ("", "/") else cleaned


def split(path: str) -> list[str]:
    """Split a valid path into its name components; the root has none."""
    return [] if path == ROOT else path.split("/")


def join(*parts: str) -> str:
    names = [p for p in parts if p and p != ROOT]
    return "/".join(names) if names else ROOT


def parent(path: str) -> str:
    head = posixpath.dirname(path)
    return head if head else ROOT


def base(path: str) -> str:
    return posixpath.basename(path) if path != ROOT else ROOT
