"""Download service for release assets.

Streams the release archive to disk with a concurrent progress indicator
and fetches small text assets such as the checksum file.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import aiofiles
import aiohttp

from protonge_installer.config import NetworkConfig
from protonge_installer.constants import CHUNK_SIZE
from protonge_installer.exceptions import FilesystemError, TransportError
from protonge_installer.http_session import build_stream_timeout
from protonge_installer.logger import flush_all_handlers, get_logger
from protonge_installer.progress import DotProgressReporter

logger = get_logger(__name__)

CONTENT_PREVIEW_MAX = 200


def _content_length(response: aiohttp.ClientResponse, url: str) -> int:
    raw = response.headers.get("Content-Length", "0")
    try:
        return int(raw)
    except ValueError as e:
        msg = f"invalid Content-Length header: {raw!r}"
        raise TransportError(msg, target=url) from e


def _check_status(response: aiohttp.ClientResponse, url: str) -> None:
    if not 200 <= response.status < 300:  # noqa: PLR2004
        msg = f"bad status: {response.status} {response.reason or ''}".rstrip()
        raise TransportError(msg, target=url)


class DownloadService:
    """Service for downloading release assets."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        progress_factory: Callable[[], DotProgressReporter] | None = None,
        network: NetworkConfig | None = None,
    ) -> None:
        """Initialize download service with HTTP session.

        Args:
            session: aiohttp session for downloads
            progress_factory: Creates the progress reporter for each
                download (defaults to DotProgressReporter)
            network: Network settings for the streaming timeout

        """
        self.session = session
        self.progress_factory = progress_factory or DotProgressReporter
        self.network = network or NetworkConfig()

    async def download_file(self, url: str, dest: Path) -> Path:
        """Stream a URL into a local file.

        The destination is created (or truncated) before the request is
        sent. Bytes already written when a failure occurs are left in
        place; the caller owns the cleanup. Nothing is logged while the
        progress line is on screen.

        Args:
            url: URL to download from
            dest: Destination path

        Returns:
            The destination path

        Raises:
            TransportError: On connection failure, a stalled transfer or
                a non-2xx status
            FilesystemError: If the local file cannot be written

        """
        logger.debug("Downloading %s", dest.name)
        logger.debug("   URL: %s", url)
        flush_all_handlers()

        async with self.progress_factory():
            try:
                async with aiofiles.open(dest, mode="wb") as f:
                    written, total = await self._stream_to(f, url)
            except OSError as e:
                msg = f"could not write download: {e}"
                raise FilesystemError(msg, target=str(dest)) from e

        if total > 0:
            logger.debug("   Size: %s bytes", f"{total:,}")
        logger.debug("Download completed: %s (%s bytes)", dest, f"{written:,}")
        return dest

    async def _stream_to(self, f, url: str) -> tuple[int, int]:
        timeout = build_stream_timeout(self.network)
        written = 0
        try:
            async with self.session.get(url, timeout=timeout) as response:
                _check_status(response, url)
                total = _content_length(response, url)
                async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                    if chunk:
                        await f.write(chunk)
                        written += len(chunk)
        except TimeoutError as e:
            msg = (
                f"download timed out after {written:,} bytes "
                f"(no data for {timeout.sock_read}s)"
            )
            raise TransportError(msg, target=url) from e
        except aiohttp.ClientError as e:
            msg = f"download interrupted: {e}"
            raise TransportError(msg, target=url) from e
        return written, total

    async def fetch_text(self, url: str) -> str:
        """Fetch a small text asset.

        Args:
            url: URL of the text file

        Returns:
            Decoded body

        Raises:
            TransportError: On connection failure or a non-2xx status

        """
        try:
            async with self.session.get(url) as response:
                _check_status(response, url)
                content = await response.text()
        except TimeoutError as e:
            msg = "request timed out"
            raise TransportError(msg, target=url) from e
        except aiohttp.ClientError as e:
            msg = f"request failed: {e}"
            raise TransportError(msg, target=url) from e

        logger.debug("Fetched %s (%d characters)", url, len(content))
        logger.debug(
            "   Content preview: %s%s",
            content[:CONTENT_PREVIEW_MAX],
            "..." if len(content) > CONTENT_PREVIEW_MAX else "",
        )
        return content
