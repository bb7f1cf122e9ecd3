"""Configuration management for termtable.

- ConfigManager: load and save ``settings.conf`` (settings.py)
- CommentAwareConfigParser, file_header: INI helpers (parser.py)
"""

from termtable.config.parser import (
    SECTION_COMMENTS,
    CommentAwareConfigParser,
    file_header,
)
from termtable.config.settings import ConfigManager, default_config_dir
from termtable.types import GlobalConfig

__all__ = [
    "SECTION_COMMENTS",
    "CommentAwareConfigParser",
    "ConfigManager",
    "GlobalConfig",
    "default_config_dir",
    "file_header",
]
