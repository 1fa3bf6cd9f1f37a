"""Ls command implementation.

Prints the managed package lists.
"""

from typing import Annotated

import typer

from pkgctl.cli.types import get_config, get_store
from pkgctl.core.errors import PkgctlError
from pkgctl.utils.formatting import console, print_error, print_info


def list_packages(
    ctx: typer.Context,
    scope: Annotated[
        str | None,
        typer.Option(
            "--scope",
            "-s",
            help="Only show the lists of this scope.",
        ),
    ] = None,
) -> None:
    """Show the managed package lists.

    Prints every list file as it is stored, comments included. Does not
    need to know which machine this is.

    Examples:
        pkgctl ls                       # every list
        pkgctl ls -s laptop             # laptop lists only
    """
    store = get_store(get_config(ctx))

    try:
        keys = [key for key in store.all_lists() if scope is None or key.scope == scope]
        if not keys:
            where = f" for scope '{scope}'" if scope else ""
            print_info(f"No package lists found{where} in {store.lists_dir}")
            return

        for key in keys:
            console.print(f"[bold_header]=== {key.filename} ===[/]")
            content = store.read_text(key.source, key.scope)
            console.print(content, end="", markup=False, highlight=False)
            console.print()
    except PkgctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
