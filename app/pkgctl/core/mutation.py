"""Mutation controller for add / remove / move requests.

Every request that changes the system goes through a fixed sequence:

    REQUESTED -> CLASSIFIED -> STAGED -> AWAITING_CONFIRMATION
              -> APPLIED | ABORTED | FAILED

Names are classified per package source and each source forms its own
sub-batch with its own confirmation gate. The exact installer command is
shown before the operator is asked to type the command family's token
(``pacman`` or the AUR helper name). Lists are only edited after the
installer succeeded, and every edit is on disk before chezmoi is notified.

Requests for another machine's scope cannot install anything here, so
they skip staging and confirmation and only edit the lists (LISTED).
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from pkgctl.core.errors import (
    ExternalCommandError,
    MutationAbortedError,
    NotFoundError,
    ValidationError,
)
from pkgctl.core.lists import validate_package_name
from pkgctl.models.action import ActionType
from pkgctl.models.package import COMMON_SCOPE, ListKey, PackageSource

if TYPE_CHECKING:
    from pkgctl.core.lists import ListStore
    from pkgctl.core.machine import MachineResolver
    from pkgctl.core.resync import ExternalSync
    from pkgctl.operators.base import Operator
    from pkgctl.scanners.base import Scanner

logger = logging.getLogger(__name__)


class MutationState(Enum):
    """Lifecycle state of a mutation sub-batch."""

    REQUESTED = "requested"
    CLASSIFIED = "classified"
    STAGED = "staged"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    APPLIED = "applied"
    ABORTED = "aborted"
    FAILED = "failed"
    LISTED = "listed"


_TRANSITIONS: dict[MutationState, frozenset[MutationState]] = {
    MutationState.REQUESTED: frozenset({MutationState.CLASSIFIED}),
    MutationState.CLASSIFIED: frozenset({MutationState.STAGED, MutationState.LISTED}),
    MutationState.STAGED: frozenset({MutationState.AWAITING_CONFIRMATION}),
    MutationState.AWAITING_CONFIRMATION: frozenset(
        {MutationState.APPLIED, MutationState.ABORTED, MutationState.FAILED}
    ),
}


@dataclass(slots=True)
class MutationBatch:
    """Names of one package source processed together.

    Attributes:
        action_type: Install (add) or remove (rm).
        names: Package names in request order.
        scope: Target scope; None means every scope (rm only).
        source: Package source all names were classified under.
        state: Current lifecycle state.
        command: Staged installer command, exactly as it runs.
        touched: Lists edited after success.
        error: Reason for ABORTED / FAILED.
    """

    action_type: ActionType
    names: list[str]
    scope: str | None
    source: PackageSource
    state: MutationState = MutationState.REQUESTED
    command: str | None = None
    touched: list[ListKey] = field(default_factory=list)
    error: str | None = None

    def advance(self, state: MutationState) -> None:
        """Move to the next state.

        Raises:
            RuntimeError: If the transition is not allowed.
        """
        if state not in _TRANSITIONS.get(self.state, frozenset()):
            msg = f"Invalid transition {self.state.value} -> {state.value}"
            raise RuntimeError(msg)
        logger.debug("Batch %s %s: %s -> %s", self.source, self.names, self.state, state)
        self.state = state

    @property
    def is_done(self) -> bool:
        """Check if the batch reached a state that changed the lists."""
        return self.state in (MutationState.APPLIED, MutationState.LISTED)

    @property
    def is_confirmed_path(self) -> bool:
        """Check if the batch went through the installer gate."""
        return self.command is not None


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Outcome of moving a package to another scope.

    Attributes:
        name: Package that moved.
        origins: Lists the package was removed from.
        destination: List the package was added to.
    """

    name: str
    origins: tuple[ListKey, ...]
    destination: ListKey


class MutationController:
    """Coordinates list mutations with the installer and the operator.

    Example:
        >>> controller = MutationController(
        ...     store, scanner, [PacmanOperator(), AurOperator()],
        ...     resolver, ChezmoiSync(), show=print, prompt=input,
        ... )
        >>> for batch in controller.add(["htop"]):
        ...     print(batch.state)
    """

    def __init__(
        self,
        store: ListStore,
        scanner: Scanner,
        operators: Iterable[Operator],
        resolver: MachineResolver,
        sync: ExternalSync,
        *,
        show: Callable[[MutationBatch], None],
        prompt: Callable[[str], str],
    ) -> None:
        """Initialize the controller.

        Args:
            store: List storage to edit.
            scanner: Classifies names as official or foreign.
            operators: One installer per package source.
            resolver: Provides the current machine.
            sync: Notified after lists change.
            show: Displays a staged batch (its exact command).
            prompt: Reads the operator's confirmation text.
        """
        self._store = store
        self._scanner = scanner
        self._operators = {op.source: op for op in operators}
        self._resolver = resolver
        self._sync = sync
        self._show = show
        self._prompt = prompt

    def add(self, names: Iterable[str], scope: str | None = None) -> list[MutationBatch]:
        """Install packages and declare them in a list.

        Args:
            names: Package names to add.
            scope: Target scope, ``common`` by default.

        Returns:
            One finished batch per package source.

        Raises:
            ValidationError: If no names are given or a name/scope is invalid.
            MachineUnresolvedError: If a machine scope is given and the
                current machine is unknown.
            ExternalCommandError: If a package cannot be looked up.
        """
        requested = _validate_names(names)
        target_scope = _validate_scope(scope or COMMON_SCOPE)
        cross_machine = self._is_cross_machine(target_scope)

        batches = self._classify(ActionType.INSTALL, requested, target_scope)
        for batch in batches:
            self._process(batch, cross_machine)
        return batches

    def remove(self, names: Iterable[str], scope: str | None = None) -> list[MutationBatch]:
        """Uninstall packages and drop them from the lists.

        Args:
            names: Package names to remove.
            scope: Only drop from this scope's lists. None = every list.

        Returns:
            One finished batch per package source.

        Raises:
            ValidationError: If no names are given or a name/scope is invalid.
            MachineUnresolvedError: If a machine scope is given and the
                current machine is unknown.
            NotFoundError: If a name is not declared in the targeted lists.
            ExternalCommandError: If a package cannot be looked up.
        """
        requested = _validate_names(names)
        target_scope = _validate_scope(scope) if scope is not None else None
        cross_machine = target_scope is not None and self._is_cross_machine(target_scope)

        undeclared = [name for name in requested if not self._lists_for(name, target_scope)]
        if undeclared:
            where = f"{target_scope} lists" if target_scope else "any list"
            msg = f"Not found in {where}: {', '.join(undeclared)}"
            raise NotFoundError(msg)

        batches = self._classify(ActionType.REMOVE, requested, target_scope)
        for batch in batches:
            self._process(batch, cross_machine)
        return batches

    def move(self, name: str, destination: str) -> MoveResult:
        """Move a package declaration to another scope.

        The package is removed from every list that declares it and added to
        the destination scope of the source it was declared under. Nothing is
        installed or removed.

        Args:
            name: Package name to move.
            destination: Target scope.

        Returns:
            MoveResult describing the edit.

        Raises:
            ValidationError: If the name or scope is invalid.
            NotFoundError: If no list declares the package.
        """
        validate_package_name(name)
        destination = _validate_scope(destination)

        origins = self._store.lists_containing(name)
        if not origins:
            raise NotFoundError(f"'{name}' is not in any list")

        source = origins[0].source
        if len({key.source for key in origins}) > 1:
            logger.warning(
                "'%s' is declared under several sources, moving it as %s",
                name,
                source.value,
            )

        for key in origins:
            self._store.remove(key.source, key.scope, name)
        self._store.add(source, destination, name)

        self._sync.notify_changed(self._store.lists_dir)
        return MoveResult(
            name=name,
            origins=tuple(origins),
            destination=ListKey(source=source, scope=destination),
        )

    def _is_cross_machine(self, scope: str) -> bool:
        if scope == COMMON_SCOPE:
            return False
        return scope != self._resolver.require()

    def _lists_for(self, name: str, scope: str | None) -> list[ListKey]:
        keys = self._store.lists_containing(name)
        if scope is None:
            return keys
        return [key for key in keys if key.scope == scope]

    def _classify(
        self,
        action_type: ActionType,
        names: list[str],
        scope: str | None,
    ) -> list[MutationBatch]:
        """Split names into one batch per package source, keeping order."""
        grouped: dict[PackageSource, list[str]] = {}
        for name in names:
            try:
                source = self._scanner.classify(name)
            except (RuntimeError, OSError, subprocess.SubprocessError) as e:
                raise ExternalCommandError(f"pacman -Si {name}", str(e)) from e
            logger.debug("Classified %s as %s", name, source.value)
            grouped.setdefault(source, []).append(name)

        batches: list[MutationBatch] = []
        for source in PackageSource:
            if source not in grouped:
                continue
            batch = MutationBatch(
                action_type=action_type, names=grouped[source], scope=scope, source=source
            )
            batch.advance(MutationState.CLASSIFIED)
            batches.append(batch)
        return batches

    def _process(self, batch: MutationBatch, cross_machine: bool) -> None:
        if cross_machine:
            self._apply_lists(batch)
            batch.advance(MutationState.LISTED)
            self._sync.notify_changed(self._store.lists_dir)
            return

        operator = self._operator_for(batch)
        batch.command = operator.format_command(batch.action_type, batch.names)
        batch.advance(MutationState.STAGED)
        self._show(batch)
        batch.advance(MutationState.AWAITING_CONFIRMATION)

        try:
            self._confirm(operator.confirmation_token)
            self._execute(batch, operator)
        except MutationAbortedError as e:
            batch.error = str(e)
            batch.advance(MutationState.ABORTED)
            return
        except ExternalCommandError as e:
            batch.error = str(e)
            batch.advance(MutationState.FAILED)
            return

        self._apply_lists(batch)
        batch.advance(MutationState.APPLIED)
        self._sync.notify_changed(self._store.lists_dir)

    def _operator_for(self, batch: MutationBatch) -> Operator:
        try:
            return self._operators[batch.source]
        except KeyError:
            msg = f"No installer configured for {batch.source.value} packages"
            raise ValidationError(msg) from None

    def _confirm(self, token: str) -> None:
        answer = self._prompt(f"Type '{token}' to run this command")
        if answer != token:
            raise MutationAbortedError(f"Confirmation did not match '{token}'")

    def _execute(self, batch: MutationBatch, operator: Operator) -> None:
        command = batch.command or ""
        try:
            if batch.action_type == ActionType.INSTALL:
                results = operator.install(batch.names)
            else:
                results = operator.remove(batch.names)
        except RuntimeError as e:
            raise ExternalCommandError(command, str(e)) from e

        failed = [r for r in results if r.failed]
        if failed or len(results) != len(batch.names):
            detail = failed[0].error if failed else "incomplete results"
            raise ExternalCommandError(command, detail)

    def _apply_lists(self, batch: MutationBatch) -> None:
        """Write the batch to the lists, one immediately durable edit at a time."""
        if batch.action_type == ActionType.INSTALL:
            scope = batch.scope
            if scope is None:
                msg = "A target scope is required to add packages"
                raise ValidationError(msg)
            for name in batch.names:
                if self._store.add(batch.source, scope, name):
                    batch.touched.append(ListKey(source=batch.source, scope=scope))
            return

        for name in batch.names:
            for key in self._lists_for(name, batch.scope):
                if self._store.remove(key.source, key.scope, name):
                    batch.touched.append(key)


def _validate_names(names: Iterable[str]) -> list[str]:
    """Check names and drop repeats, keeping request order."""
    unique: list[str] = []
    for name in names:
        validate_package_name(name)
        if name not in unique:
            unique.append(name)
    if not unique:
        msg = "At least one package name is required"
        raise ValidationError(msg)
    return unique


def _validate_scope(scope: str) -> str:
    try:
        ListKey(source=PackageSource.OFFICIAL, scope=scope)
    except ValueError as e:
        raise ValidationError(str(e)) from e
    return scope
