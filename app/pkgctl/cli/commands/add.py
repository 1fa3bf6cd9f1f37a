"""Add command implementation.

Installs packages and declares them in a package list.
"""

from typing import Annotated

import typer

from pkgctl.cli.display import print_outcomes
from pkgctl.cli.types import get_config, get_controller
from pkgctl.core.errors import PkgctlError, ValidationError
from pkgctl.utils.formatting import print_error, print_info

USAGE = "Usage: pkgctl add <package>... [--scope <machine>]"


def add_packages(
    ctx: typer.Context,
    packages: Annotated[
        list[str],
        typer.Argument(help="Package names to install and declare.", show_default=False),
    ],
    scope: Annotated[
        str | None,
        typer.Option(
            "--scope",
            "-s",
            help="List scope to add to (default: common).",
        ),
    ] = None,
) -> None:
    """Install packages and add them to a list.

    Each package is looked up in the repositories: official packages go to
    the pacman list, everything else to the AUR list. The exact install
    command is shown first and only runs after you type the command name
    (pacman or the AUR helper) back.

    Adding to another machine's scope only edits that machine's list.

    Examples:
        pkgctl add htop                 # common list, install here
        pkgctl add docker -s desktop    # desktop list
        pkgctl add foo -s laptop        # list only, when run on the desktop
    """
    controller = get_controller(get_config(ctx))

    try:
        batches = controller.add(packages, scope)
    except ValidationError as e:
        print_error(str(e))
        print_info(USAGE)
        raise typer.Exit(code=1) from e
    except PkgctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not print_outcomes(batches):
        raise typer.Exit(code=1)
