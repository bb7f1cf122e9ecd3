"""CLI argument parser for termtable."""

import argparse
from argparse import Namespace

from termtable.types import GlobalConfig


class CLIParser:
    """Command-line argument parser for termtable."""

    def __init__(self, global_config: GlobalConfig) -> None:
        """Initialize the parser.

        Args:
            global_config: Loaded global configuration, used for defaults
                shown in help text.

        """
        self.global_config = global_config

    def parse_args(self, argv: list[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Arguments to parse (defaults to sys.argv[1:])

        Returns:
            Parsed arguments namespace

        """
        parser = self._create_main_parser()
        self._add_global_options(parser)
        self._add_subcommands(parser)
        return parser.parse_args(argv)

    def _create_main_parser(self) -> argparse.ArgumentParser:
        return argparse.ArgumentParser(
            prog="termtable",
            description="Live multi-row progress table for the terminal",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Four worker threads advancing their own rows
  %(prog)s demo --lines 4

  # Download several files concurrently, one row per file
  %(prog)s fetch https://example.com/a.iso https://example.com/b.iso -o /tmp
            """,
        )

    def _add_global_options(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--version",
            action="store_true",
            help="Show termtable version and exit",
        )

    def _add_subcommands(self, parser: argparse.ArgumentParser) -> None:
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands"
        )
        self._add_demo_command(subparsers)
        self._add_fetch_command(subparsers)

    def _add_demo_command(self, subparsers) -> None:
        demo_parser = subparsers.add_parser(
            "demo", help="Drive the table from simulated worker threads"
        )
        demo_parser.add_argument(
            "--lines",
            type=_positive_int,
            default=3,
            help="Number of worker rows (default: 3)",
        )
        demo_parser.add_argument(
            "--step",
            type=_positive_int,
            default=5,
            help="Percent added per tick (default: 5)",
        )
        demo_parser.add_argument(
            "--delay",
            type=_non_negative_float,
            default=0.1,
            help="Average seconds between ticks (default: 0.1)",
        )
        demo_parser.add_argument(
            "-v", "--verbose", action="store_true", help="Debug logging"
        )

    def _add_fetch_command(self, subparsers) -> None:
        download_dir = self.global_config["directory"]["download"]
        fetch_parser = subparsers.add_parser(
            "fetch", help="Download URLs concurrently, one row per URL"
        )
        fetch_parser.add_argument("urls", nargs="+", help="URLs to download")
        fetch_parser.add_argument(
            "-o",
            "--output",
            default=None,
            help=f"Destination directory (default: {download_dir})",
        )
        fetch_parser.add_argument(
            "-v", "--verbose", action="store_true", help="Debug logging"
        )


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        msg = f"expected a positive integer, got {value}"
        raise argparse.ArgumentTypeError(msg)
    return number


def _non_negative_float(value: str) -> float:
    number = float(value)
    if number < 0:
        msg = f"expected a non-negative number, got {value}"
        raise argparse.ArgumentTypeError(msg)
    return number
