"""TypedDicts for the parsed ``settings.conf``."""

from pathlib import Path
from typing import TypedDict


class NetworkConfig(TypedDict):
    """``[network]``: how hard ``fetch`` tries."""

    retry_attempts: int
    timeout_seconds: int


class DirectoryConfig(TypedDict):
    """``[directory]``: where files and logs land, user-expanded."""

    download: Path
    logs: Path


class GlobalConfig(TypedDict):
    """The whole file; ``[DEFAULT]`` keys sit at the top level."""

    config_version: str
    log_level: str
    console_log_level: str
    refresh_interval_ms: int
    fill_symbol: str
    max_concurrent_downloads: int
    network: NetworkConfig
    directory: DirectoryConfig
