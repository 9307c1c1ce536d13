"""File and directory copying run off the event loop."""

import asyncio
import shutil
from pathlib import Path

from ..utils.logging import get_logger


class FileCopier:
    """Copies files and directory trees; directories are merged recursively."""

    def __init__(self) -> None:
        self.logger = get_logger("FileCopier")

    async def copy_directory(self, source: Path, destination: Path) -> None:
        """Copy the contents of ``source`` into ``destination``."""
        self.logger.debug(f"Copying {source} -> {destination}")
        await asyncio.to_thread(shutil.copytree, source, destination, dirs_exist_ok=True)

    async def copy_file(self, source: Path, destination: Path) -> None:
        """Copy a single file, creating the destination directory if needed."""
        self.logger.debug(f"Copying {source} -> {destination}")
        await asyncio.to_thread(self._copy_file, source, destination)

    @staticmethod
    def _copy_file(source: Path, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)
