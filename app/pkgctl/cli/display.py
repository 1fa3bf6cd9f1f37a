"""Shared Rich display functions for staged commands and outcomes.

Provides the confirmation prompt and the reporters used by the mutating
commands (add, rm, move).
"""

import typer

from pkgctl.core.mutation import MoveResult, MutationBatch, MutationState
from pkgctl.models.action import ActionType
from pkgctl.utils.formatting import (
    console,
    print_command,
    print_error,
    print_success,
    print_warning,
)


def show_staged(batch: MutationBatch) -> None:
    """Display a staged batch and the exact command that will run.

    Args:
        batch: Batch in STAGED state.
    """
    verb = "install" if batch.action_type == ActionType.INSTALL else "remove"
    source = batch.source.value
    console.print(f"\n[bold_header]About to {verb} ({source}):[/]")
    print_command(batch.command or "")


def prompt_confirmation(text: str) -> str:
    """Read the confirmation literal from the terminal.

    Ctrl-C / EOF count as an empty answer, which aborts the batch.
    """
    try:
        return typer.prompt(text, default="", show_default=False)
    except typer.Abort:
        return ""


def _list_names(batch: MutationBatch) -> str:
    if not batch.touched:
        return "lists"
    return ", ".join(dict.fromkeys(key.filename for key in batch.touched))


def print_batch_outcome(batch: MutationBatch) -> None:
    """Report the final state of one batch.

    Args:
        batch: Batch in a terminal state.
    """
    names = ", ".join(f"'{n}'" for n in batch.names)
    adding = batch.action_type == ActionType.INSTALL

    if batch.state == MutationState.APPLIED:
        if adding:
            print_success(f"Installed {names} and added to {_list_names(batch)}")
        else:
            print_success(f"Removed {names} from the system and from {_list_names(batch)}")
    elif batch.state == MutationState.LISTED:
        if batch.touched:
            verb = "Added" if adding else "Removed"
            prep = "to" if adding else "from"
            print_success(f"{verb} {names} {prep} {_list_names(batch)}")
        else:
            console.print(f"[muted]{names}: lists already up to date[/muted]")
        console.print(f"[muted]Scope '{batch.scope}' is not this machine; nothing was run.[/muted]")
    elif batch.state == MutationState.ABORTED:
        print_warning(f"Aborted {names}: {batch.error}. No changes made.")
    elif batch.state == MutationState.FAILED:
        print_error(f"{batch.error}. Lists left unchanged.")


def print_outcomes(batches: list[MutationBatch]) -> bool:
    """Report every batch.

    Args:
        batches: Finished batches.

    Returns:
        True if every batch changed the lists, False if any was aborted or failed.
    """
    for batch in batches:
        print_batch_outcome(batch)
    return all(batch.is_done for batch in batches)


def print_move_result(result: MoveResult) -> None:
    """Report a completed move."""
    origins = ", ".join(key.filename for key in result.origins)
    print_success(f"Moved '{result.name}' from {origins} to {result.destination.filename}")
