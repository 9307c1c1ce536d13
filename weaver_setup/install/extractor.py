"""Release archive extraction."""

import zipfile
from pathlib import Path

from ..core.errors import ArchiveError
from ..utils.logging import get_logger


class ArchiveExtractor:
    """Extracts zip archives into a directory."""

    def __init__(self) -> None:
        self.logger = get_logger("ArchiveExtractor")

    def extract(self, archive_path: Path, destination: Path) -> Path:
        """Extract ``archive_path`` into ``destination``.

        Members that would land outside ``destination`` are refused.

        Returns:
            The destination directory

        Raises:
            ArchiveError: If the archive is corrupt or unsafe
        """
        destination.mkdir(parents=True, exist_ok=True)
        root = destination.resolve()

        try:
            with zipfile.ZipFile(archive_path) as archive:
                for member in archive.namelist():
                    target = (root / member).resolve()
                    if target != root and root not in target.parents:
                        raise ArchiveError(f"Refusing to extract {member!r} outside {destination}")
                archive.extractall(root)
        except zipfile.BadZipFile as e:
            raise ArchiveError(f"Not a valid zip archive: {archive_path}") from e

        self.logger.info(f"Extracted {archive_path.name} to {destination}")
        return destination
