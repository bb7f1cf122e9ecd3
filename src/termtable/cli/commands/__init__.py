"""Command handlers for the termtable CLI."""

from termtable.cli.commands.base import BaseCommandHandler
from termtable.cli.commands.demo import DemoHandler
from termtable.cli.commands.fetch import FetchHandler

__all__ = ["BaseCommandHandler", "DemoHandler", "FetchHandler"]
