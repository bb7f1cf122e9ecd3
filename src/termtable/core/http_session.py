"""aiohttp session tuned by the ``[network]`` settings."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiohttp

from termtable.types import GlobalConfig


def client_timeout(timeout_seconds: int) -> aiohttp.ClientTimeout:
    """Connect within ``timeout_seconds``; 3x that per read, 60x overall."""
    return aiohttp.ClientTimeout(
        total=timeout_seconds * 60,
        sock_connect=timeout_seconds,
        sock_read=timeout_seconds * 3,
    )


@asynccontextmanager
async def create_http_session(
    global_config: GlobalConfig,
) -> AsyncIterator[aiohttp.ClientSession]:
    """Open the session shared by every download of one command.

    At most ``max_concurrent_downloads`` connections go to one host and
    twice that in total. The session is closed when the block exits.

    Args:
        global_config: Loaded global configuration

    Yields:
        The open session

    """
    per_host = global_config["max_concurrent_downloads"]
    connector = aiohttp.TCPConnector(
        limit=per_host * 2, limit_per_host=per_host
    )
    timeout = client_timeout(global_config["network"]["timeout_seconds"])

    async with aiohttp.ClientSession(
        connector=connector, timeout=timeout
    ) as session:
        yield session
