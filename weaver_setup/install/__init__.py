"""Archive download, extraction and copy services used by the installer."""

from .copier import FileCopier
from .extractor import ArchiveExtractor
from .fetcher import ArchiveFetcher

__all__ = [
    "ArchiveFetcher",
    "ArchiveExtractor",
    "FileCopier",
]
