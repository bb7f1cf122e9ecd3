"""Main CLI entry point for termtable.

This module provides the minimal entry point for the command-line
interface, delegating all functionality to the CLI runner.
"""

import sys

import uvloop

from termtable.cli import CLIRunner


async def async_main() -> int:
    """Run the CLI asynchronously and return the exit status."""
    runner = CLIRunner()
    return await runner.run()


def main() -> None:
    """Run the CLI application on uvloop.

    Raises:
        SystemExit: Always, carrying the command's exit status.

    """
    try:
        status = uvloop.run(async_main())
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        sys.exit(1)
    sys.exit(status)


if __name__ == "__main__":
    main()
