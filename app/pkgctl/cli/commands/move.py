"""Move command implementation.

Moves a package declaration from its current lists to another scope.
"""

from typing import Annotated

import typer

from pkgctl.cli.display import print_move_result
from pkgctl.cli.types import get_config, get_controller
from pkgctl.core.errors import PkgctlError
from pkgctl.utils.formatting import print_error


def move_package(
    ctx: typer.Context,
    package: Annotated[str, typer.Argument(help="Package to move.", show_default=False)],
    destination: Annotated[
        str,
        typer.Argument(help="Scope to move it to (common or a machine).", show_default=False),
    ],
) -> None:
    """Move a package to another scope's list.

    The package is removed from every list that declares it and added to
    the destination list of the same source. Nothing is installed or
    removed.

    Examples:
        pkgctl move docker common       # share with every machine
        pkgctl move steam desktop       # desktop only
    """
    controller = get_controller(get_config(ctx))

    try:
        result = controller.move(package, destination)
    except PkgctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_move_result(result)
