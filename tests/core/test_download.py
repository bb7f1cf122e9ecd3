"""Tests for DownloadService progress reporting and retries."""

import io

import aiohttp
import pytest
from aioresponses import aioresponses

from termtable.config import ConfigManager
from termtable.core.blocks import ProgressLine
from termtable.core.download import (
    DownloadService,
    _PercentReporter,
    filename_from_url,
)
from termtable.core.http_session import create_http_session
from termtable.core.table import WindowTable
from termtable.exceptions import DownloadError

URL = "https://example.com/files/a.bin"


@pytest.fixture
def line() -> ProgressLine:
    """A ProgressLine placed on a 100-column table."""
    line = ProgressLine()
    WindowTable(100, io.StringIO()).add_line(*line.blocks())
    return line


class TestFilenameFromUrl:
    """Tests for filename_from_url."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://example.com/dl/tool.iso", "tool.iso"),
            ("https://example.com/dl/tool.iso?token=1", "tool.iso"),
            ("https://example.com/", "download.bin"),
        ],
    )
    def test_last_path_segment(self, url: str, expected: str) -> None:
        """The last path segment names the file."""
        assert filename_from_url(url) == expected


class TestPercentReporter:
    """Tests for byte-count to percentage conversion."""

    def test_deltas_are_monotonic(self, line: ProgressLine) -> None:
        """Lower byte counts never move the bar back."""
        reporter = _PercentReporter(line)
        reporter.update(50, 100)
        reporter.update(40, 100)
        assert line.bar.completed == 50

        reporter.finish()
        assert line.bar.is_complete

    def test_unknown_total_waits_for_finish(
        self, line: ProgressLine
    ) -> None:
        """Without Content-Length the bar only moves on finish."""
        reporter = _PercentReporter(line)
        reporter.update(4096, 0)
        assert line.bar.completed == 0


class TestDownloadService:
    """Tests for DownloadService.download_file."""

    @pytest.mark.asyncio
    async def test_download_fills_line(self, tmp_path, line) -> None:
        """A successful download writes the file and completes the bar."""
        body = b"x" * 20000
        with aioresponses() as m:
            m.get(URL, body=body, headers={"Content-Length": str(len(body))})
            async with aiohttp.ClientSession() as session:
                service = DownloadService(session)
                path = await service.download_file(
                    URL, tmp_path / "a.bin", line
                )

        assert path.read_bytes() == body
        assert line.bar.is_complete
        assert line.info.content().rstrip() == "Done a.bin"

    @pytest.mark.asyncio
    async def test_retry_after_connection_error(
        self, tmp_path, line
    ) -> None:
        """A transient failure is retried."""
        with aioresponses() as m:
            m.get(URL, exception=aiohttp.ClientConnectionError("reset"))
            m.get(URL, body=b"data")
            async with aiohttp.ClientSession() as session:
                service = DownloadService(
                    session, retry_attempts=2, backoff_base=0
                )
                path = await service.download_file(
                    URL, tmp_path / "a.bin", line
                )

        assert path.read_bytes() == b"data"
        assert line.bar.is_complete

    @pytest.mark.asyncio
    async def test_gives_up_after_last_attempt(
        self, tmp_path, line, caplog
    ) -> None:
        """Exhausted retries raise DownloadError and clean up."""
        dest = tmp_path / "a.bin"
        with aioresponses() as m:
            m.get(URL, status=500, repeat=True)
            async with aiohttp.ClientSession() as session:
                service = DownloadService(
                    session, retry_attempts=2, backoff_base=0
                )
                with pytest.raises(DownloadError) as exc_info:
                    await service.download_file(URL, dest, line)

        assert exc_info.value.target == URL
        assert str(exc_info.value).startswith("Download failed for")
        assert not dest.exists()
        assert line.info.content().rstrip() == "Failed a.bin"
        assert "Attempt 2/2 failed" in caplog.text

    @pytest.mark.asyncio
    async def test_unwritable_destination(self, tmp_path, line) -> None:
        """A local write error fails at once without retrying."""
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        dest = blocker / "a.bin"
        with aioresponses() as m:
            m.get(URL, body=b"data")
            async with aiohttp.ClientSession() as session:
                service = DownloadService(
                    session, retry_attempts=3, backoff_base=0
                )
                with pytest.raises(DownloadError) as exc_info:
                    await service.download_file(URL, dest, line)

        assert exc_info.value.target == URL
        assert isinstance(exc_info.value.__cause__, OSError)
        assert line.info.content().rstrip() == "Failed a.bin"


class TestCreateHttpSession:
    """Tests for create_http_session."""

    @pytest.mark.asyncio
    async def test_session_uses_config(self, tmp_path) -> None:
        """Timeouts and connection limits follow the configuration."""
        config = ConfigManager(tmp_path).load_global_config()

        async with create_http_session(config) as session:
            assert session.timeout.sock_connect == 10
            assert session.connector.limit == 6
            assert session.connector.limit_per_host == 3

        assert session.closed
