"""Sync command implementation.

Prints the install commands that would bring this machine in line with
its lists. Nothing is executed.
"""

import typer

from pkgctl.cli.types import (
    get_config,
    get_operators,
    get_resolver,
    get_scanner,
    get_store,
    require_machine,
    scan_installed,
)
from pkgctl.core.diff import ReconciliationEngine
from pkgctl.core.errors import PkgctlError
from pkgctl.models.action import ActionType
from pkgctl.models.package import PackageSource
from pkgctl.utils.formatting import console, print_error

_SOURCE_LABELS: dict[PackageSource, str] = {
    PackageSource.OFFICIAL: "pacman",
    PackageSource.FOREIGN: "AUR",
}


def sync_packages(ctx: typer.Context) -> None:
    """Generate install commands to review and run.

    Prints one command per package source for everything this machine's
    lists declare but is not installed. Copy and run them yourself.

    Examples:
        pkgctl sync
        pkgctl sync > install.sh
    """
    config = get_config(ctx)
    machine = require_machine(get_resolver(config))
    installed = scan_installed(get_scanner())

    try:
        plan = ReconciliationEngine(get_store(config).snapshot()).sync_plan(machine, installed)
    except PkgctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    operators = {op.source: op for op in get_operators(config)}

    console.print("# Review these commands, then copy-paste to run:", markup=False, highlight=False)
    console.print()
    for source in PackageSource:
        packages = list(plan.packages(source))
        if not packages:
            label = _SOURCE_LABELS[source]
            console.print(f"# All {label} packages installed", markup=False, highlight=False)
            continue
        command = operators[source].format_command(ActionType.INSTALL, packages, needed=True)
        console.print(command, markup=False, highlight=False, soft_wrap=True)
        console.print()
