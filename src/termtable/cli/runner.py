"""CLI runner for termtable.

This module routes parsed arguments to the command handlers and maps
their outcome to a process exit status.
"""

from argparse import Namespace

from termtable import __version__
from termtable.cli.commands import DemoHandler, FetchHandler
from termtable.cli.commands.base import BaseCommandHandler
from termtable.cli.parser import CLIParser
from termtable.config import ConfigManager
from termtable.exceptions import TermTableError
from termtable.logger import (
    get_logger,
    set_console_level,
    update_logger_from_config,
)

logger = get_logger(__name__)


class CLIRunner:
    """CLI command runner and orchestrator."""

    def __init__(self, config_manager: ConfigManager | None = None) -> None:
        """Initialize CLI runner with shared dependencies."""
        self.config_manager = config_manager or ConfigManager()
        self.global_config = self.config_manager.load_global_config()
        update_logger_from_config(self.global_config)

        self.command_handlers: dict[str, BaseCommandHandler] = {
            "demo": DemoHandler(self.config_manager),
            "fetch": FetchHandler(self.config_manager),
        }

    async def run(self, argv: list[str] | None = None) -> int:
        """Run the CLI application.

        Args:
            argv: Arguments to parse (defaults to sys.argv[1:])

        Returns:
            Process exit status

        """
        parser = CLIParser(self.global_config)
        args = parser.parse_args(argv)

        if getattr(args, "version", False):
            print(__version__)
            return 0

        if not args.command:
            print("No command specified. Use --help for usage information.")
            return 1

        try:
            return await self._execute_command(args)
        except TermTableError as e:
            logger.error("%s", e)
            print(f"Error: {e}")
            return 1

    async def _execute_command(self, args: Namespace) -> int:
        handler = self.command_handlers[args.command]

        if getattr(args, "verbose", False):
            set_console_level("DEBUG")

        return await handler.execute(args)
