"""Reconciliation engine for comparing package lists with system state.

This module provides the ReconciliationEngine class that composes the
target package set of a machine from the layered lists and compares it
with the packages actually installed.

Views:
- diff: is this machine's declared state satisfied? (missing / extra)
- sync: install arguments for the missing packages, per source
- update: which list edits would describe reality? (unlisted / removed)
- compare: which packages two scopes declare differently
"""

from __future__ import annotations

from collections.abc import Set
from dataclasses import dataclass, field

from pkgctl.core.errors import MachineUnresolvedError
from pkgctl.models.package import COMMON_SCOPE, ListSnapshot, PackageSource


def _sorted(names: Set[str]) -> tuple[str, ...]:
    return tuple(sorted(names))


@dataclass(frozen=True, slots=True)
class DiffResult:
    """Result of comparing a machine's target set with installed packages.

    Attributes:
        machine: Machine the target set was composed for.
        missing: Declared for this machine but not installed.
        extra: Installed and declared somewhere, but not for this machine.
    """

    machine: str
    missing: tuple[str, ...]
    extra: tuple[str, ...]

    @property
    def is_in_sync(self) -> bool:
        """Check if the machine matches its lists."""
        return not (self.missing or self.extra)

    @property
    def total_changes(self) -> int:
        """Total number of differences found."""
        return len(self.missing) + len(self.extra)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "machine": self.machine,
            "in_sync": self.is_in_sync,
            "missing": list(self.missing),
            "extra": list(self.extra),
        }


@dataclass(frozen=True, slots=True)
class UpdateResult:
    """List edits that would make the lists describe the system.

    Attributes:
        machine: Machine the target set was composed for.
        unlisted: Installed but declared in no list at all.
        removed: Declared for this machine but no longer installed.
    """

    machine: str
    unlisted: tuple[str, ...]
    removed: tuple[str, ...]

    @property
    def is_in_sync(self) -> bool:
        """Check if the lists already describe the system."""
        return not (self.unlisted or self.removed)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "machine": self.machine,
            "in_sync": self.is_in_sync,
            "unlisted": list(self.unlisted),
            "removed": list(self.removed),
        }


@dataclass(frozen=True, slots=True)
class SyncPlan:
    """Packages to install per source so the machine matches its lists.

    The plan only proposes arguments; nothing is installed.

    Attributes:
        machine: Machine the plan was computed for.
        missing: Sorted missing package names per source.
    """

    machine: str
    missing: dict[PackageSource, tuple[str, ...]] = field(default_factory=dict)

    def packages(self, source: PackageSource) -> tuple[str, ...]:
        """Return the missing packages of one source."""
        return self.missing.get(source, ())

    def arguments(self, source: PackageSource) -> str:
        """Return the space-joined installer arguments of one source."""
        return " ".join(self.packages(source))

    @property
    def is_empty(self) -> bool:
        """Check if nothing needs installing."""
        return not any(self.missing.values())


@dataclass(frozen=True, slots=True)
class ScopeComparison:
    """Packages two scopes declare differently, per source.

    Attributes:
        left: First scope.
        right: Second scope.
        only_left: Names declared for ``left`` but not ``right``.
        only_right: Names declared for ``right`` but not ``left``.
    """

    left: str
    right: str
    only_left: dict[PackageSource, tuple[str, ...]]
    only_right: dict[PackageSource, tuple[str, ...]]

    @property
    def is_identical(self) -> bool:
        """Check if both scopes declare the same packages."""
        return not any(self.only_left.values()) and not any(self.only_right.values())


class ReconciliationEngine:
    """Engine for computing drift between package lists and the system.

    The engine is a pure function of a list snapshot, an installed set and
    the machine name; it never touches the filesystem or the package
    manager itself.

    Example:
        >>> engine = ReconciliationEngine(store.snapshot())
        >>> result = engine.diff("desktop", scanner.list_installed())
        >>> if result.is_in_sync:
        ...     print("Everything in sync!")
    """

    def __init__(self, snapshot: ListSnapshot) -> None:
        """Initialize the engine with the declared lists.

        Args:
            snapshot: Every list on disk, keyed by source and scope.
        """
        self._snapshot = snapshot

    def declared(
        self,
        source: PackageSource | None = None,
        scope: str | None = None,
    ) -> frozenset[str]:
        """Return the union of declared names, optionally filtered.

        Args:
            source: Restrict to one package source.
            scope: Restrict to one scope.

        Returns:
            Union of the matching lists.
        """
        names: set[str] = set()
        for key, members in self._snapshot.items():
            if source is not None and key.source != source:
                continue
            if scope is not None and key.scope != scope:
                continue
            names |= members
        return frozenset(names)

    def target(self, machine: str | None, source: PackageSource | None = None) -> frozenset[str]:
        """Compose the target set of a machine.

        Args:
            machine: Resolved machine name.
            source: Restrict to one package source.

        Returns:
            Union of the ``common`` lists and the machine's own lists.

        Raises:
            MachineUnresolvedError: If no machine is given.
        """
        machine = _require_machine(machine)
        return self.declared(source, COMMON_SCOPE) | self.declared(source, machine)

    def diff(self, machine: str | None, installed: Set[str]) -> DiffResult:
        """Check whether this machine's declared state is satisfied.

        Extra only covers packages declared in some list: a package that no
        list mentions is unlisted, which only ``update`` reports.

        Args:
            machine: Resolved machine name.
            installed: Explicitly installed package names.

        Returns:
            DiffResult with sorted missing and extra names.

        Raises:
            MachineUnresolvedError: If no machine is given.
        """
        target = self.target(machine)
        missing = target - installed
        extra = (installed & self.declared()) - target
        return DiffResult(machine=str(machine), missing=_sorted(missing), extra=_sorted(extra))

    def sync_plan(self, machine: str | None, installed: Set[str]) -> SyncPlan:
        """Compute the install arguments for every missing package.

        Args:
            machine: Resolved machine name.
            installed: Explicitly installed package names.

        Returns:
            SyncPlan with sorted missing names per source.

        Raises:
            MachineUnresolvedError: If no machine is given.
        """
        missing = {
            source: _sorted(self.target(machine, source) - installed) for source in PackageSource
        }
        return SyncPlan(machine=str(machine), missing=missing)

    def update(self, machine: str | None, installed: Set[str]) -> UpdateResult:
        """Compute the list edits that would describe reality.

        Args:
            machine: Resolved machine name.
            installed: Explicitly installed package names.

        Returns:
            UpdateResult with sorted unlisted and removed names.

        Raises:
            MachineUnresolvedError: If no machine is given.
        """
        target = self.target(machine)
        unlisted = set(installed) - self.declared()
        removed = target - installed
        return UpdateResult(
            machine=str(machine),
            unlisted=_sorted(unlisted),
            removed=_sorted(removed),
        )

    def compare(self, left: str, right: str) -> ScopeComparison:
        """Compare what two scopes declare, source by source.

        Args:
            left: First scope (e.g. ``desktop``).
            right: Second scope (e.g. ``laptop``).

        Returns:
            ScopeComparison with the names unique to each side.
        """
        only_left: dict[PackageSource, tuple[str, ...]] = {}
        only_right: dict[PackageSource, tuple[str, ...]] = {}
        for source in PackageSource:
            left_names = self.declared(source, left)
            right_names = self.declared(source, right)
            only_left[source] = _sorted(left_names - right_names)
            only_right[source] = _sorted(right_names - left_names)
        return ScopeComparison(left=left, right=right, only_left=only_left, only_right=only_right)


def _require_machine(machine: str | None) -> str:
    if not machine:
        raise MachineUnresolvedError()
    return machine
