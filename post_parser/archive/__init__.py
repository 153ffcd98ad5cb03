"""Reading archives into in-memory file trees."""
from .builder import ArchiveBuilder
from .cache import ArchiveCache

__all__ = ["ArchiveBuilder", "ArchiveCache"]
