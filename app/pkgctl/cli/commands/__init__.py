"""CLI commands for pkgctl.

This package contains all subcommand implementations.
"""

from pkgctl.cli.commands import add, compare, diff, ls, move, rm, sync, update

__all__ = ["add", "compare", "diff", "ls", "move", "rm", "sync", "update"]
