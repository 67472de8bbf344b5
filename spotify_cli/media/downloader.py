"""
Handles the low-level fetching of encrypted audio files from the CDN over HTTP.
"""

import asyncio
import logging

import aiohttp

from spotify_cli.exceptions import StreamError

log = logging.getLogger(__name__)

_connection_pool: aiohttp.ClientSession | None = None
_pool_lock = asyncio.Lock()


async def get_connection_pool() -> aiohttp.ClientSession:
    """
    Gets or creates a shared aiohttp ClientSession for downloads.

    This function ensures that only one connection pool is created for the
    lifetime of the application run.
    """
    global _connection_pool
    async with _pool_lock:
        if _connection_pool and not _connection_pool.closed:
            return _connection_pool

        connector = aiohttp.TCPConnector(
            limit=4,
            ttl_dns_cache=600,  # 10 minutes
            keepalive_timeout=30,
            enable_cleanup_closed=True,
        )
        timeout = aiohttp.ClientTimeout(total=None, sock_connect=15, sock_read=90)
        _connection_pool = aiohttp.ClientSession(connector=connector, timeout=timeout)
        log.debug("Created CDN download pool.")

    return _connection_pool


async def close_connection_pool() -> None:
    """Closes the shared global connection pool."""
    global _connection_pool
    async with _pool_lock:
        if _connection_pool and not _connection_pool.closed:
            await _connection_pool.close()
            _connection_pool = None
            log.debug("Shared downloader connection pool closed.")


class Downloader:
    """Fetches whole files into memory, retrying transient network errors."""

    CHUNK_SIZE = 131072  # 128 KB

    def __init__(self, max_attempts: int = 3, base_delay: float = 1.5):
        self.max_attempts = max_attempts
        self.base_delay = base_delay

    async def fetch_bytes(self, url: str) -> bytes:
        """
        Downloads the body of a URL.

        Raises:
            StreamError: When every attempt failed.
        """
        last_exception: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                session = await get_connection_pool()
                async with session.get(url, allow_redirects=True) as response:
                    response.raise_for_status()
                    buffer = bytearray()
                    async for chunk in response.content.iter_chunked(self.CHUNK_SIZE):
                        buffer.extend(chunk)
                    return bytes(buffer)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_exception = e
                log.debug(
                    f"Download attempt {attempt}/{self.max_attempts} failed: {e}. "
                    "Retrying..."
                )
                if attempt < self.max_attempts:
                    await asyncio.sleep(self.base_delay * (2 ** (attempt - 1)))

        raise StreamError(f"cannot fetch audio file: {last_exception}")


class CdnStream:
    """An encrypted audio file on the CDN, fetched when read."""

    def __init__(self, url: str, downloader: Downloader):
        self.url = url
        self.downloader = downloader
        self._closed = False

    async def read(self) -> bytes:
        if self._closed:
            raise StreamError("stream is closed")
        return await self.downloader.fetch_bytes(self.url)

    async def close(self) -> None:
        self._closed = True
