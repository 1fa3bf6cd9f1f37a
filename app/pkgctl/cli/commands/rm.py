"""Rm command implementation.

Uninstalls packages and removes them from the package lists.
"""

from typing import Annotated

import typer

from pkgctl.cli.display import print_outcomes
from pkgctl.cli.types import get_config, get_controller
from pkgctl.core.errors import NotFoundError, PkgctlError, ValidationError
from pkgctl.utils.formatting import print_error, print_info

USAGE = "Usage: pkgctl rm <package>... [--scope <machine>]"


def remove_packages(
    ctx: typer.Context,
    packages: Annotated[
        list[str],
        typer.Argument(help="Package names to uninstall and drop.", show_default=False),
    ],
    scope: Annotated[
        str | None,
        typer.Option(
            "--scope",
            "-s",
            help="Only drop from this scope's lists (default: every list).",
        ),
    ] = None,
) -> None:
    """Uninstall packages and remove them from the lists.

    The exact removal command is shown first and only runs after you type
    the command name back. Lists are edited only if it succeeds.

    Removing from another machine's scope only edits that machine's lists.

    Examples:
        pkgctl rm htop                  # uninstall, drop from every list
        pkgctl rm foo -s laptop         # drop from the laptop lists only
    """
    controller = get_controller(get_config(ctx))

    try:
        batches = controller.remove(packages, scope)
    except ValidationError as e:
        print_error(str(e))
        print_info(USAGE)
        raise typer.Exit(code=1) from e
    except NotFoundError as e:
        print_error(str(e))
        print_info("Run 'pkgctl ls' to see the declared packages.")
        raise typer.Exit(code=1) from e
    except PkgctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not print_outcomes(batches):
        raise typer.Exit(code=1)
