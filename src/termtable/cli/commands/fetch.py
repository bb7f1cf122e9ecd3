"""Fetch command: concurrent downloads, one table row per URL."""

import asyncio
from argparse import Namespace
from pathlib import Path

from termtable.cli.commands.base import BaseCommandHandler
from termtable.core import ProgressLine, table_session
from termtable.core.download import DownloadService, filename_from_url
from termtable.core.http_session import create_http_session
from termtable.exceptions import DownloadError, TerminalError
from termtable.logger import get_logger

logger = get_logger(__name__)

# (url, destination, row)
FetchJob = tuple[str, Path, ProgressLine]


class FetchHandler(BaseCommandHandler):
    """Handler for ``termtable fetch``."""

    async def execute(self, args: Namespace) -> int:
        dest_dir = (
            Path(args.output).expanduser()
            if args.output
            else self.global_config["directory"]["download"]
        )
        fill_symbol = self.global_config["fill_symbol"]
        jobs: list[FetchJob] = [
            (url, dest_dir / filename_from_url(url), ProgressLine(fill_symbol))
            for url in args.urls
        ]

        try:
            async with table_session(self.refresh_interval) as table:
                for _url, _dest, line in jobs:
                    table.add_line(*line.blocks())
                results = await self.download_all(jobs)
        except TerminalError as e:
            logger.warning("%s; downloading without the table", e)
            results = await self.download_all(jobs)

        failures = [r for r in results if isinstance(r, DownloadError)]
        for failure in failures:
            logger.error("%s", failure)

        logger.info(
            "%d of %d downloads completed",
            len(results) - len(failures),
            len(results),
        )
        return 1 if failures else 0

    async def download_all(
        self, jobs: list[FetchJob]
    ) -> list[Path | DownloadError]:
        """Download every job, bounded by ``max_concurrent_downloads``.

        Returns:
            Per job, in order: the written path or the DownloadError

        """
        semaphore = asyncio.Semaphore(
            self.global_config["max_concurrent_downloads"]
        )

        async with create_http_session(self.global_config) as session:
            service = DownloadService(
                session,
                retry_attempts=self.global_config["network"][
                    "retry_attempts"
                ],
            )

            async def bounded(job: FetchJob) -> Path | DownloadError:
                url, dest, line = job
                async with semaphore:
                    try:
                        return await service.download_file(url, dest, line)
                    except DownloadError as e:
                        return e

            return list(await asyncio.gather(*(bounded(job) for job in jobs)))
