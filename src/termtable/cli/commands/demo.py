"""Demo command: worker threads advancing their own table rows."""

import asyncio
import random
import time
from argparse import Namespace

from termtable.cli.commands.base import BaseCommandHandler
from termtable.core import ProgressLine, table_session
from termtable.exceptions import TerminalError
from termtable.logger import get_logger

logger = get_logger(__name__)


def run_worker(
    line: ProgressLine, index: int, step: int, delay: float
) -> None:
    """Advance ``line`` by ``step`` percent until it is complete.

    Runs in a worker thread; ``line`` is owned by this worker alone.
    """
    name = f"worker {index + 1}"
    line.update_info(f"{name}: 0%")
    while not line.bar.is_complete:
        time.sleep(delay * random.uniform(0.5, 1.5))  # noqa: S311
        line.progress(step)
        line.update_info(f"{name}: {line.bar.completed}%")
    line.update_info(f"{name}: done")
    logger.info("%s finished", name)


class DemoHandler(BaseCommandHandler):
    """Handler for ``termtable demo``."""

    async def execute(self, args: Namespace) -> int:
        fill_symbol = self.global_config["fill_symbol"]
        lines = [ProgressLine(fill_symbol) for _ in range(args.lines)]

        try:
            async with table_session(self.refresh_interval) as table:
                for line in lines:
                    table.add_line(*line.blocks())
                await self._run_workers(lines, args.step, args.delay)
        except TerminalError as e:
            logger.warning("%s; running without the table", e)
            await self._run_workers(lines, args.step, args.delay)

        return 0

    async def _run_workers(
        self, lines: list[ProgressLine], step: int, delay: float
    ) -> None:
        await asyncio.gather(
            *(
                asyncio.to_thread(run_worker, line, index, step, delay)
                for index, line in enumerate(lines)
            )
        )
