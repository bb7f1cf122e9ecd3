"""Download service reporting progress into a table row.

Each download owns one ``ProgressLine``: the info block names the file
being fetched and the bar advances by whole-percent deltas of the bytes
received. The bar only ever moves forward, including across retries.
"""

import asyncio
import contextlib
from pathlib import Path
from urllib.parse import urlparse

import aiofiles
import aiohttp

from termtable.constants import (
    CHUNK_SIZE,
    DEFAULT_OUTPUT_NAME,
    DEFAULT_RETRY_ATTEMPTS,
    PROGRESS_COMPLETE,
)
from termtable.core.blocks import ProgressLine
from termtable.exceptions import DownloadError
from termtable.logger import get_logger

logger = get_logger(__name__)


def filename_from_url(url: str) -> str:
    """Return the last path segment of ``url`` or a fallback name."""
    return Path(urlparse(url).path).name or DEFAULT_OUTPUT_NAME


class _PercentReporter:
    """Turns byte counts into monotonic percentage deltas for a row."""

    def __init__(self, line: ProgressLine) -> None:
        self._line = line
        self._reported = 0

    def update(self, downloaded: int, total: int) -> None:
        if total <= 0:
            return
        percent = min(PROGRESS_COMPLETE, downloaded * 100 // total)
        if percent > self._reported:
            self._line.progress(percent - self._reported)
            self._reported = percent

    def finish(self) -> None:
        if self._reported < PROGRESS_COMPLETE:
            self._line.progress(PROGRESS_COMPLETE - self._reported)
            self._reported = PROGRESS_COMPLETE


class DownloadService:
    """Download files over a shared aiohttp session."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        backoff_base: float = 2.0,
    ) -> None:
        """Initialize the service.

        Args:
            session: aiohttp session for downloads
            retry_attempts: Attempts per file before giving up
            backoff_base: Base of the exponential wait between attempts

        """
        self.session = session
        self.retry_attempts = max(1, retry_attempts)
        self.backoff_base = backoff_base

    async def download_file(
        self, url: str, dest: Path, line: ProgressLine
    ) -> Path:
        """Download ``url`` to ``dest``, reporting into ``line``.

        Args:
            url: URL to download from
            dest: Destination path
            line: Row that shows this download

        Returns:
            The destination path

        Raises:
            DownloadError: If every attempt failed or the file cannot be
                written

        """
        reporter = _PercentReporter(line)
        line.update_info(f"Downloading {dest.name}")

        for attempt in range(1, self.retry_attempts + 1):
            try:
                await self._fetch(url, dest, reporter)
            except (aiohttp.ClientError, TimeoutError) as e:
                logger.warning(
                    "Attempt %s/%s failed for %s: %s",
                    attempt,
                    self.retry_attempts,
                    url,
                    e,
                )
                with contextlib.suppress(OSError):
                    dest.unlink(missing_ok=True)

                if attempt == self.retry_attempts:
                    line.update_info(f"Failed {dest.name}")
                    raise DownloadError(str(e), target=url) from e

                backoff = self.backoff_base**attempt
                logger.debug("Retrying %s in %s seconds", url, backoff)
                await asyncio.sleep(backoff)
            except OSError as e:
                # Local write failures are not retried.
                logger.exception("Cannot write %s", dest)
                with contextlib.suppress(OSError):
                    dest.unlink(missing_ok=True)
                line.update_info(f"Failed {dest.name}")
                raise DownloadError(str(e), target=url) from e
            else:
                reporter.finish()
                line.update_info(f"Done {dest.name}")
                logger.info("Downloaded %s", dest)
                return dest

        msg = "no download attempt was made"
        raise DownloadError(msg, target=url)

    async def _fetch(
        self, url: str, dest: Path, reporter: _PercentReporter
    ) -> None:
        async with self.session.get(url) as response:
            response.raise_for_status()
            total = int(response.headers.get("Content-Length", 0))
            dest.parent.mkdir(parents=True, exist_ok=True)
            logger.debug("Downloading %s (%s bytes)", url, total or "unknown")

            downloaded = 0
            async with aiofiles.open(dest, mode="wb") as f:
                async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                    await f.write(chunk)
                    downloaded += len(chunk)
                    reporter.update(downloaded, total)
