"""Archive kind detection from file names."""
from enum import Enum


class ArchiveKind(Enum):
    """Supported archive kinds."""

    UNKNOWN = "unknown"
    TAR = "tar"
    TAR_XZ = "tar.xz"
    TAR_GZIP = "tar.gz"
    TAR_BZIP2 = "tar.bz2"
    ZIP = "zip"

    @property
    def is_tar(self) -> bool:
        return self in (
            ArchiveKind.TAR,
            ArchiveKind.TAR_XZ,
            ArchiveKind.TAR_GZIP,
            ArchiveKind.TAR_BZIP2,
        )


EXTENSIONS: dict[str, ArchiveKind] = {
    ".tar": ArchiveKind.TAR,
    ".tar.xz": ArchiveKind.TAR_XZ,
    ".txz": ArchiveKind.TAR_XZ,
    ".tar.gz": ArchiveKind.TAR_GZIP,
    ".tgz": ArchiveKind.TAR_GZIP,
    ".tar.bz2": ArchiveKind.TAR_BZIP2,
    ".tb2": ArchiveKind.TAR_BZIP2,
    ".tbz": ArchiveKind.TAR_BZIP2,
    ".tbz2": ArchiveKind.TAR_BZIP2,
    ".tz2": ArchiveKind.TAR_BZIP2,
    ".zip": ArchiveKind.ZIP,
}


def _ext(name: str) -> str:
    # the suffix from the final dot of the last path element, dot included
    base = name.replace("\\", "/").rsplit("/", 1)[-1]
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


def detect_format(name: str) -> ArchiveKind:
    """Return the archive kind of a file name or path from its extension.

    Parameters
    ----------
    name : str
        A path or bare file name, possibly without an extension.

    Returns
    -------
    post_parser.models.archive_kind.ArchiveKind
        The matching kind, ``ArchiveKind.UNKNOWN`` if none matches.

    """
    ext = _ext(name)
    # tar archives can have two extensions
    if ext and _ext(name[: -len(ext)]) == ".tar":
        ext = ".tar" + ext
    return EXTENSIONS.get(ext, ArchiveKind.UNKNOWN)


__all__ = ["ArchiveKind", "EXTENSIONS", "detect_format"]
