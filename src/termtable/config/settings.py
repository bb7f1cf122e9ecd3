"""Global settings stored in ``~/.config/termtable/settings.conf``."""

import configparser
import logging
from pathlib import Path

from termtable.config.parser import (
    SECTION_COMMENTS,
    CommentAwareConfigParser,
    file_header,
)
from termtable.constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    CONFIG_VERSION,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_FILL_SYMBOL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_CONCURRENT_DOWNLOADS,
    DEFAULT_REFRESH_INTERVAL_MS,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
    DIRECTORY_KEYS,
    KEY_CONFIG_VERSION,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_FILL_SYMBOL,
    KEY_LOG_LEVEL,
    KEY_MAX_CONCURRENT_DOWNLOADS,
    KEY_REFRESH_INTERVAL_MS,
    KEY_RETRY_ATTEMPTS,
    KEY_TIMEOUT_SECONDS,
    SECTION_DEFAULT,
    SECTION_DIRECTORY,
    SECTION_NETWORK,
    VALID_LOG_LEVELS,
)
from termtable.types import DirectoryConfig, GlobalConfig, NetworkConfig

logger = logging.getLogger(__name__)

# INI values as strings, keyed by section
RawSections = dict[str, dict[str, str]]

# inclusive bounds for integer settings
_INT_RANGES: dict[str, tuple[int, int]] = {
    KEY_REFRESH_INTERVAL_MS: (10, 1000),
    KEY_MAX_CONCURRENT_DOWNLOADS: (1, 10),
    KEY_RETRY_ATTEMPTS: (1, 10),
    KEY_TIMEOUT_SECONDS: (5, 60),
}


def default_config_dir() -> Path:
    """Return ``~/.config/termtable``."""
    return Path.home() / CONFIG_DIR_NAME / DEFAULT_CONFIG_SUBDIR


class ConfigManager:
    """Load and save the global ``settings.conf``.

    Example:
        manager = ConfigManager()
        config = manager.load_global_config()
        config["fill_symbol"] = "*"
        manager.save_global_config(config)

    """

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize the manager.

        Args:
            config_dir: Directory holding ``settings.conf``
                (defaults to ``~/.config/termtable``)

        """
        self.config_dir = config_dir or default_config_dir()
        self.settings_file = self.config_dir / CONFIG_FILE_NAME

    def default_sections(self) -> RawSections:
        """Return every default value as an INI string."""
        return {
            SECTION_DEFAULT: {
                KEY_CONFIG_VERSION: CONFIG_VERSION,
                KEY_LOG_LEVEL: DEFAULT_LOG_LEVEL,
                KEY_CONSOLE_LOG_LEVEL: DEFAULT_CONSOLE_LOG_LEVEL,
                KEY_REFRESH_INTERVAL_MS: str(DEFAULT_REFRESH_INTERVAL_MS),
                KEY_FILL_SYMBOL: DEFAULT_FILL_SYMBOL,
                KEY_MAX_CONCURRENT_DOWNLOADS: str(
                    DEFAULT_MAX_CONCURRENT_DOWNLOADS
                ),
            },
            SECTION_NETWORK: {
                KEY_RETRY_ATTEMPTS: str(DEFAULT_RETRY_ATTEMPTS),
                KEY_TIMEOUT_SECONDS: str(DEFAULT_TIMEOUT_SECONDS),
            },
            SECTION_DIRECTORY: {
                "download": str(Path.home() / "Downloads"),
                "logs": str(self.config_dir / "logs"),
            },
        }

    def _parser_with_defaults(self) -> CommentAwareConfigParser:
        parser = CommentAwareConfigParser()
        parser.read_dict(self.default_sections())
        return parser

    def load_global_config(self) -> GlobalConfig:
        """Read ``settings.conf`` over the defaults.

        A missing file means all defaults. An unparseable file, or any
        single invalid value, is reported with a warning and replaced by
        its default.

        Returns:
            Typed global configuration

        """
        parser = self._parser_with_defaults()

        if self.settings_file.exists():
            try:
                parser.read(self.settings_file, encoding="utf-8")
            except configparser.Error as e:
                logger.warning(
                    "Ignoring unreadable %s: %s", self.settings_file, e
                )
                parser = self._parser_with_defaults()

        return self._to_global_config(parser)

    def save_global_config(self, config: GlobalConfig) -> None:
        """Write ``config`` to ``settings.conf`` with explanatory comments.

        Args:
            config: Configuration to persist

        """
        sections: RawSections = {
            SECTION_DEFAULT: {
                KEY_CONFIG_VERSION: CONFIG_VERSION,
                KEY_LOG_LEVEL: config["log_level"],
                KEY_CONSOLE_LOG_LEVEL: config["console_log_level"],
                KEY_REFRESH_INTERVAL_MS: str(config["refresh_interval_ms"]),
                KEY_FILL_SYMBOL: config["fill_symbol"],
                KEY_MAX_CONCURRENT_DOWNLOADS: str(
                    config["max_concurrent_downloads"]
                ),
            },
            SECTION_NETWORK: {
                key: str(value) for key, value in config["network"].items()
            },
            SECTION_DIRECTORY: {
                key: str(value) for key, value in config["directory"].items()
            },
        }

        parts = [file_header()]
        for section, values in sections.items():
            parts.append(SECTION_COMMENTS[section])
            parts.append(f"[{section}]\n")
            parts.extend(f"{key} = {value}\n" for key, value in values.items())

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.settings_file.write_text("".join(parts), encoding="utf-8")
        logger.debug("Saved configuration to %s", self.settings_file)

    def _to_global_config(
        self, parser: configparser.ConfigParser
    ) -> GlobalConfig:
        network: NetworkConfig = {
            "retry_attempts": _int_setting(
                parser, SECTION_NETWORK, KEY_RETRY_ATTEMPTS,
                DEFAULT_RETRY_ATTEMPTS,
            ),
            "timeout_seconds": _int_setting(
                parser, SECTION_NETWORK, KEY_TIMEOUT_SECONDS,
                DEFAULT_TIMEOUT_SECONDS,
            ),
        }
        directory: DirectoryConfig = {
            key: Path(parser.get(SECTION_DIRECTORY, key)).expanduser()
            for key in DIRECTORY_KEYS
        }  # type: ignore[assignment]

        return {
            "config_version": parser.get(
                SECTION_DEFAULT, KEY_CONFIG_VERSION, fallback=CONFIG_VERSION
            ),
            "log_level": _level_setting(
                parser, KEY_LOG_LEVEL, DEFAULT_LOG_LEVEL
            ),
            "console_log_level": _level_setting(
                parser, KEY_CONSOLE_LOG_LEVEL, DEFAULT_CONSOLE_LOG_LEVEL
            ),
            "refresh_interval_ms": _int_setting(
                parser, SECTION_DEFAULT, KEY_REFRESH_INTERVAL_MS,
                DEFAULT_REFRESH_INTERVAL_MS,
            ),
            "fill_symbol": _fill_symbol_setting(parser),
            "max_concurrent_downloads": _int_setting(
                parser, SECTION_DEFAULT, KEY_MAX_CONCURRENT_DOWNLOADS,
                DEFAULT_MAX_CONCURRENT_DOWNLOADS,
            ),
            "network": network,
            "directory": directory,
        }


def _int_setting(
    parser: configparser.ConfigParser, section: str, key: str, default: int
) -> int:
    raw = parser.get(section, key, fallback=str(default))
    try:
        value = int(raw)
    except ValueError:
        logger.warning(
            "%s.%s is not an integer (%r), using %s",
            section, key, raw, default,
        )
        return default

    low, high = _INT_RANGES[key]
    if not low <= value <= high:
        logger.warning(
            "%s.%s=%s is outside %s-%s, using %s",
            section, key, value, low, high, default,
        )
        return default
    return value


def _level_setting(
    parser: configparser.ConfigParser, key: str, default: str
) -> str:
    level = parser.get(SECTION_DEFAULT, key, fallback=default).upper()
    if level not in VALID_LOG_LEVELS:
        logger.warning("Unknown %s %r, using %s", key, level, default)
        return default
    return level


def _fill_symbol_setting(parser: configparser.ConfigParser) -> str:
    symbol = parser.get(
        SECTION_DEFAULT, KEY_FILL_SYMBOL, fallback=DEFAULT_FILL_SYMBOL
    )
    # "#" and ";" start inline comments and read back empty
    if len(symbol) != 1:
        logger.warning("fill_symbol must be one character, got %r", symbol)
        return DEFAULT_FILL_SYMBOL
    return symbol
