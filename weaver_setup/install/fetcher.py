"""Release archive downloads over HTTP."""

import ssl
from pathlib import Path
from typing import Optional

import aiohttp
import certifi
from aiohttp import ClientTimeout

from ..core.errors import ArchiveError
from ..utils.logging import get_logger


class ArchiveFetcher:
    """Async downloader for release archives.

    Use as an async context manager so the session is closed afterwards.
    """

    TIMEOUT = ClientTimeout(total=300)
    CHUNK_SIZE = 64 * 1024

    def __init__(self, session: Optional[aiohttp.ClientSession] = None) -> None:
        """Initialize the fetcher.

        Args:
            session: Optional aiohttp session for connection reuse
        """
        self.logger = get_logger("ArchiveFetcher")
        self._session = session
        self._owns_session = session is None
        self._ssl_context = ssl.create_default_context(cafile=certifi.where())

    async def __aenter__(self) -> "ArchiveFetcher":
        self._get_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def download(self, url: str, destination: Path) -> Path:
        """Download ``url`` to ``destination``.

        Args:
            url: Archive URL
            destination: File path to write

        Returns:
            The destination path

        Raises:
            ArchiveError: If the server does not answer with 200
        """
        self.logger.info(f"Downloading {url}")
        destination.parent.mkdir(parents=True, exist_ok=True)

        session = self._get_session()
        try:
            async with session.get(url) as response:
                if response.status != 200:
                    raise ArchiveError(
                        f"Failed to download {url}: HTTP {response.status} {response.reason or ''}".rstrip()
                    )

                with open(destination, 'wb') as f:
                    async for chunk in response.content.iter_chunked(self.CHUNK_SIZE):
                        f.write(chunk)
        except aiohttp.ClientError as e:
            raise ArchiveError(f"Failed to download {url}: {e}") from e

        self.logger.info(f"Saved archive to {destination}")
        return destination

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if not self._session or self._session.closed:
            connector = aiohttp.TCPConnector(ssl=self._ssl_context)
            self._session = aiohttp.ClientSession(
                timeout=self.TIMEOUT,
                connector=connector
            )
            self._owns_session = True
        return self._session
