"""Compare command implementation.

Shows the packages two scopes declare differently.
"""

from typing import Annotated

import typer

from pkgctl.cli.types import get_config, get_store
from pkgctl.core.diff import ReconciliationEngine
from pkgctl.core.errors import PkgctlError
from pkgctl.models.package import PackageSource
from pkgctl.utils.formatting import console, create_package_table, print_error, print_success


def compare_scopes(
    ctx: typer.Context,
    left: Annotated[str, typer.Argument(help="First scope (e.g. desktop).", show_default=False)],
    right: Annotated[str, typer.Argument(help="Second scope (e.g. laptop).", show_default=False)],
) -> None:
    """Compare the lists of two scopes.

    Shows, per source, what only the first scope declares and what only
    the second one does. Does not need to know which machine this is.

    Examples:
        pkgctl compare desktop laptop
    """
    store = get_store(get_config(ctx))

    try:
        comparison = ReconciliationEngine(store.snapshot()).compare(left, right)
    except PkgctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if comparison.is_identical:
        print_success(f"'{left}' and '{right}' declare the same packages.")
        return

    table = create_package_table(f"{left} vs {right}", scope_column=True)
    for source in PackageSource:
        for name in comparison.only_left[source]:
            table.add_row("[added]<[/added]", source.value, f"[scope]{left}[/scope]", name)
        for name in comparison.only_right[source]:
            table.add_row("[changed]>[/changed]", source.value, f"[scope]{right}[/scope]", name)
    console.print(table)
