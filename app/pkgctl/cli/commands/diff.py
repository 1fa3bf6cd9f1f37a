"""Diff command implementation.

Compares this machine's package lists with the installed packages.
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
from pkgctl.core.diff import DiffResult, ReconciliationEngine
from pkgctl.core.errors import PkgctlError
from pkgctl.utils.formatting import console, print_error, print_success


def _create_diff_table(result: DiffResult) -> Table:
    """Create a table listing missing and extra packages.

    Args:
        result: The DiffResult to display.

    Returns:
        Rich Table with one row per difference.
    """
    table = Table(
        title=f"Differences on {result.machine}",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=6, justify="center")
    table.add_column("Package", no_wrap=True)
    table.add_column("Note")

    for name in result.missing:
        table.add_row(
            "[warning][-][/warning]",
            f"[warning]{name}[/warning]",
            "[muted]In lists, not installed[/muted]",
        )
    for name in result.extra:
        table.add_row(
            "[removed]\\[x][/removed]",
            f"[removed]{name}[/removed]",
            f"[muted]Installed, not in {result.machine} lists[/muted]",
        )
    return table


def _print_summary(result: DiffResult) -> None:
    parts: list[str] = []
    if result.missing:
        parts.append(f"[warning]{len(result.missing)} missing[/warning]")
    if result.extra:
        parts.append(f"[removed]{len(result.extra)} extra[/removed]")
    console.print(f"\nSummary: {', '.join(parts)} ({result.total_changes} total changes)")


def diff_packages(
    ctx: typer.Context,
    brief: Annotated[
        bool,
        typer.Option(
            "--brief",
            "-b",
            help="Show summary counts only.",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON for scripting.",
        ),
    ] = False,
) -> None:
    r"""Compare this machine's lists with installed packages.

    Difference types:
      [-] MISSING: In the common or machine lists but not installed
      \[x] EXTRA: Installed and declared for another machine only

    Installed packages that no list mentions are not shown here; see
    'pkgctl update'.

    Examples:
        pkgctl diff                     # Show all differences
        pkgctl diff --brief             # Summary counts only
        pkgctl diff --json              # JSON output for scripting
    """
    config = get_config(ctx)
    machine = require_machine(get_resolver(config))
    installed = scan_installed(get_scanner())

    try:
        engine = ReconciliationEngine(get_store(config).snapshot())
        result = engine.diff(machine, installed)
    except PkgctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if json_output:
        console.print_json(json.dumps(result.to_dict()))
        return

    if result.is_in_sync:
        print_success("Everything in sync!")
        return

    if brief:
        console.print(f"[warning]Missing:[/warning] {len(result.missing)}")
        console.print(f"[removed]Extra:[/removed] {len(result.extra)}")
        return

    console.print(_create_diff_table(result))
    _print_summary(result)
