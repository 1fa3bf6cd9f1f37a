"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from pkgctl import __version__
from pkgctl.cli.commands import add, compare, diff, ls, move, rm, sync, update
from pkgctl.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="pkgctl",
    help="Declarative package lists for Arch Linux machines.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pkgctl version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, quiet: bool) -> None:
    """Route log records through Rich on stderr."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    lists_dir: Annotated[
        Path | None,
        typer.Option(
            "--lists-dir",
            "-d",
            help="Directory of the .pkgs lists (default: ~/.config/pkgs).",
            file_okay=False,
        ),
    ] = None,
    machine: Annotated[
        str | None,
        typer.Option(
            "--machine",
            "-m",
            help="Treat this host as MACHINE instead of asking chezmoi.",
        ),
    ] = None,
) -> None:
    """pkgctl - Declarative package lists for Arch Linux machines.

    Keep pacman and AUR package lists per machine (plus a common set)
    under version control, and see how each machine drifts from them.
    """
    _configure_logging(verbose, quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["lists_dir"] = lists_dir
    ctx.obj["machine"] = machine


# Register commands
app.command(name="add")(add.add_packages)
app.command(name="rm")(rm.remove_packages)
app.command(name="ls")(ls.list_packages)
app.command(name="diff")(diff.diff_packages)
app.command(name="sync")(sync.sync_packages)
app.command(name="update")(update.update_lists)
app.command(name="move")(move.move_package)
app.command(name="compare")(compare.compare_scopes)


if __name__ == "__main__":
    app()
