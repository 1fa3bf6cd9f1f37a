"""Shared helpers for CLI commands.

This module builds the collaborators (store, scanner, operators, machine
resolver, re-sync) from the configuration so every command wires them the
same way, and turns collaborator failures into clean exits.
"""

from pathlib import Path

import typer

from pkgctl.cli.display import prompt_confirmation, show_staged
from pkgctl.core.config import PkgctlConfig, load_config
from pkgctl.core.errors import ConfigError, MachineUnresolvedError
from pkgctl.core.lists import ListStore
from pkgctl.core.machine import ChezmoiMachineResolver, MachineResolver, StaticMachineResolver
from pkgctl.core.mutation import MutationController
from pkgctl.core.resync import ChezmoiSync, ExternalSync, NullSync
from pkgctl.operators.aur import AurOperator
from pkgctl.operators.base import Operator
from pkgctl.operators.pacman import PacmanOperator
from pkgctl.scanners.base import Scanner
from pkgctl.scanners.pacman import PacmanScanner
from pkgctl.utils.formatting import print_error, print_info


def get_config(ctx: typer.Context) -> PkgctlConfig:
    """Load the configuration and apply global CLI overrides.

    Args:
        ctx: Typer context carrying ``lists_dir`` / ``machine`` overrides.

    Returns:
        Effective configuration.

    Raises:
        typer.Exit: If the config file is invalid.
    """
    try:
        config = load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    updates: dict[str, object] = {}
    lists_dir = obj.get("lists_dir")
    if lists_dir:
        updates["lists_dir"] = Path(lists_dir).expanduser()
    machine = obj.get("machine")
    if machine:
        updates["machine"] = machine
    return config.model_copy(update=updates) if updates else config


def get_store(config: PkgctlConfig) -> ListStore:
    """Create the list store for the configured directory."""
    return ListStore(config.effective_lists_dir)


def get_scanner() -> Scanner:
    """Create the inventory scanner."""
    return PacmanScanner()


def get_operators(config: PkgctlConfig) -> list[Operator]:
    """Create one operator per package source."""
    return [PacmanOperator(use_sudo=config.use_sudo), AurOperator(helper=config.aur_helper)]


def get_resolver(config: PkgctlConfig) -> MachineResolver:
    """Create the machine resolver (static override, else chezmoi)."""
    machine = config.effective_machine
    if machine:
        return StaticMachineResolver(machine)
    return ChezmoiMachineResolver(config.chezmoi)


def get_sync(config: PkgctlConfig) -> ExternalSync:
    """Create the re-sync collaborator."""
    if config.resync:
        return ChezmoiSync(config.chezmoi)
    return NullSync()


def require_machine(resolver: MachineResolver) -> str:
    """Resolve the current machine or exit.

    Raises:
        typer.Exit: If the machine cannot be determined.
    """
    try:
        return resolver.require()
    except MachineUnresolvedError as e:
        print_error(str(e))
        print_info("Or set 'machine' in ~/.config/pkgctl/config.toml, or pass --machine.")
        raise typer.Exit(code=1) from e


def scan_installed(scanner: Scanner) -> set[str]:
    """Query installed packages or exit.

    Raises:
        typer.Exit: If the package manager query fails.
    """
    try:
        return scanner.list_installed()
    except RuntimeError as e:
        print_error(f"Scan failed: {e}")
        raise typer.Exit(code=1) from e


def get_controller(config: PkgctlConfig) -> MutationController:
    """Create the mutation controller wired to the terminal."""
    return MutationController(
        get_store(config),
        get_scanner(),
        get_operators(config),
        get_resolver(config),
        get_sync(config),
        show=show_staged,
        prompt=prompt_confirmation,
    )
