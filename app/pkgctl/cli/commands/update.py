"""Update command implementation.

Shows which list edits would make the lists describe this machine.
"""

import json
from typing import Annotated

import typer
from rich.table import Table

from pkgctl.cli.types import (
    get_config,
    get_resolver,
    get_scanner,
    get_store,
    require_machine,
    scan_installed,
)
from pkgctl.core.diff import ReconciliationEngine, UpdateResult
from pkgctl.core.errors import PkgctlError
from pkgctl.utils.formatting import console, print_error, print_info, print_success


def _print_update_table(result: UpdateResult) -> None:
    table = Table(
        title=f"List drift on {result.machine}",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=6, justify="center")
    table.add_column("Package", no_wrap=True)
    table.add_column("Note")

    for name in result.unlisted:
        table.add_row("[added][+][/added]", f"[added]{name}[/added]", "[muted]In no list[/muted]")
    for name in result.removed:
        table.add_row(
            "[removed][-][/removed]",
            f"[removed]{name}[/removed]",
            "[muted]Not installed anymore[/muted]",
        )
    console.print(table)
    console.print(
        f"\nSummary: [added]{len(result.unlisted)} unlisted[/added], "
        f"[removed]{len(result.removed)} removed from system[/removed]"
    )


def update_lists(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON for scripting.",
        ),
    ] = False,
) -> None:
    """Show how the lists drifted from what is installed.

    Difference types:
      [+] UNLISTED: Installed but declared in no list at all
      [-] REMOVED: Declared for this machine but no longer installed

    Examples:
        pkgctl update                   # Show list drift
        pkgctl update --json            # JSON output for scripting
    """
    config = get_config(ctx)
    machine = require_machine(get_resolver(config))
    installed = scan_installed(get_scanner())

    try:
        result = ReconciliationEngine(get_store(config).snapshot()).update(machine, installed)
    except PkgctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if json_output:
        console.print_json(json.dumps(result.to_dict()))
        return

    if result.is_in_sync:
        print_success("Lists match the installed packages.")
        return

    _print_update_table(result)
    if result.unlisted:
        print_info(f"Declare with: pkgctl add -s {machine} <package>")
    if result.removed:
        print_info("Drop with: pkgctl rm <package>, or reinstall with 'pkgctl sync'")
