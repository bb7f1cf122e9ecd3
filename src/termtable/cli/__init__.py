"""Command-line interface for termtable."""

from termtable.cli.parser import CLIParser
from termtable.cli.runner import CLIRunner

__all__ = ["CLIParser", "CLIRunner"]
