"""Base command handler for termtable CLI commands."""

from abc import ABC, abstractmethod
from argparse import Namespace

from termtable.config import ConfigManager


class BaseCommandHandler(ABC):
    """Abstract base class for all command handlers.

    CLIRunner is the composition root: it builds the ConfigManager and
    injects it into every handler.
    """

    def __init__(self, config_manager: ConfigManager) -> None:
        """Initialize the handler.

        Args:
            config_manager: Configuration management instance

        """
        self.config_manager = config_manager
        self.global_config = config_manager.load_global_config()

    @property
    def refresh_interval(self) -> float:
        """Seconds between table redraws from the configuration."""
        return self.global_config["refresh_interval_ms"] / 1000

    @abstractmethod
    async def execute(self, args: Namespace) -> int:
        """Run the command and return the process exit status."""
