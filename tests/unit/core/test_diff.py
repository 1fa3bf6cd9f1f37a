"""Unit tests for ReconciliationEngine.

Tests for target composition and the diff, sync, update and compare views.
"""

import pytest
from pkgctl.core.diff import DiffResult, ReconciliationEngine, UpdateResult
from pkgctl.core.errors import MachineUnresolvedError
from pkgctl.models.package import ListKey, ListSnapshot, PackageSource

OFFICIAL = PackageSource.OFFICIAL
FOREIGN = PackageSource.FOREIGN


@pytest.fixture
def desktop_snapshot() -> ListSnapshot:
    """common = {git, vim}, desktop = {docker}."""
    return {
        ListKey(OFFICIAL, "common"): frozenset({"git", "vim"}),
        ListKey(OFFICIAL, "desktop"): frozenset({"docker"}),
    }


@pytest.fixture
def multi_snapshot() -> ListSnapshot:
    """Lists for two machines and both sources."""
    return {
        ListKey(OFFICIAL, "common"): frozenset({"git", "vim"}),
        ListKey(FOREIGN, "common"): frozenset({"paru-bin"}),
        ListKey(OFFICIAL, "desktop"): frozenset({"docker", "steam"}),
        ListKey(OFFICIAL, "laptop"): frozenset({"tlp", "docker"}),
        ListKey(FOREIGN, "laptop"): frozenset({"zoom"}),
    }


class TestTarget:
    """Tests for target set composition."""

    def test_target_is_common_plus_machine(self, multi_snapshot: ListSnapshot) -> None:
        """The target set unions common and the machine's lists across sources."""
        engine = ReconciliationEngine(multi_snapshot)
        assert engine.target("laptop") == {"git", "vim", "paru-bin", "tlp", "docker", "zoom"}

    def test_target_by_source(self, multi_snapshot: ListSnapshot) -> None:
        """The target set can be restricted to one source."""
        engine = ReconciliationEngine(multi_snapshot)
        assert engine.target("laptop", FOREIGN) == {"paru-bin", "zoom"}

    def test_target_unknown_machine_is_common(self, multi_snapshot: ListSnapshot) -> None:
        """A machine without lists gets the common set only."""
        engine = ReconciliationEngine(multi_snapshot)
        assert engine.target("server") == {"git", "vim", "paru-bin"}

    @pytest.mark.parametrize("machine", [None, ""])
    def test_unresolved_machine_raises(
        self, multi_snapshot: ListSnapshot, machine: str | None
    ) -> None:
        """Machine-scoped views cannot run without a machine."""
        engine = ReconciliationEngine(multi_snapshot)
        with pytest.raises(MachineUnresolvedError, match="chezmoi init"):
            engine.target(machine)

    def test_declared_filters(self, multi_snapshot: ListSnapshot) -> None:
        """declared unions every list, optionally filtered."""
        engine = ReconciliationEngine(multi_snapshot)
        assert engine.declared(scope="desktop") == {"docker", "steam"}
        assert engine.declared(FOREIGN) == {"paru-bin", "zoom"}
        assert len(engine.declared()) == 7


class TestDiff:
    """Tests for ReconciliationEngine.diff."""

    def test_desktop_example(
        self, desktop_snapshot: ListSnapshot, desktop_installed: set[str]
    ) -> None:
        """vim is missing; htop is declared nowhere so it is not extra."""
        result = ReconciliationEngine(desktop_snapshot).diff("desktop", desktop_installed)

        assert result.missing == ("vim",)
        assert result.extra == ()
        assert result.machine == "desktop"

    def test_other_machine_package_is_extra(self, multi_snapshot: ListSnapshot) -> None:
        """A package declared only for the laptop and installed on the desktop is extra."""
        installed = {"git", "vim", "paru-bin", "docker", "steam", "tlp"}

        engine = ReconciliationEngine(multi_snapshot)
        diff = engine.diff("desktop", installed)
        update = engine.update("desktop", installed)

        assert diff.extra == ("tlp",)
        assert "tlp" not in update.unlisted

    def test_missing_never_installed(self, multi_snapshot: ListSnapshot) -> None:
        """Missing and installed are always disjoint."""
        installed = {"git", "docker", "zoom", "htop"}
        for machine in ("desktop", "laptop", "server"):
            result = ReconciliationEngine(multi_snapshot).diff(machine, installed)
            assert set(result.missing).isdisjoint(installed)

    def test_results_are_sorted(self, multi_snapshot: ListSnapshot) -> None:
        """Result tuples are sorted."""
        result = ReconciliationEngine(multi_snapshot).diff("laptop", set())
        assert result.missing == tuple(sorted(result.missing))
        assert result.missing == ("docker", "git", "paru-bin", "tlp", "vim", "zoom")

    def test_in_sync(self, desktop_snapshot: ListSnapshot) -> None:
        """A machine with exactly its target installed is in sync."""
        result = ReconciliationEngine(desktop_snapshot).diff("desktop", {"git", "vim", "docker"})
        assert result.is_in_sync is True
        assert result.total_changes == 0

    def test_unresolved_machine_raises(self, desktop_snapshot: ListSnapshot) -> None:
        """diff needs a machine."""
        with pytest.raises(MachineUnresolvedError):
            ReconciliationEngine(desktop_snapshot).diff(None, set())

    def test_empty_lists(self) -> None:
        """No lists means nothing missing and nothing extra."""
        result = ReconciliationEngine({}).diff("desktop", {"git"})
        assert result.is_in_sync is True


class TestDiffResult:
    """Tests for DiffResult dataclass."""

    def test_to_dict(self) -> None:
        """to_dict is JSON-ready."""
        result = DiffResult(machine="desktop", missing=("vim",), extra=("tlp",))
        assert result.to_dict() == {
            "machine": "desktop",
            "in_sync": False,
            "missing": ["vim"],
            "extra": ["tlp"],
        }
        assert result.total_changes == 2


class TestUpdate:
    """Tests for ReconciliationEngine.update."""

    def test_desktop_example(
        self, desktop_snapshot: ListSnapshot, desktop_installed: set[str]
    ) -> None:
        """htop is unlisted, vim was removed from the system."""
        result = ReconciliationEngine(desktop_snapshot).update("desktop", desktop_installed)

        assert result.unlisted == ("htop",)
        assert result.removed == ("vim",)

    def test_in_sync(self, desktop_snapshot: ListSnapshot) -> None:
        """Lists that describe the system report no drift."""
        result = ReconciliationEngine(desktop_snapshot).update("desktop", {"git", "vim", "docker"})
        assert result.is_in_sync is True

    def test_to_dict(self) -> None:
        """to_dict is JSON-ready."""
        result = UpdateResult(machine="desktop", unlisted=("htop",), removed=())
        assert result.to_dict() == {
            "machine": "desktop",
            "in_sync": False,
            "unlisted": ["htop"],
            "removed": [],
        }


class TestSyncPlan:
    """Tests for ReconciliationEngine.sync_plan."""

    def test_plan_per_source(self, multi_snapshot: ListSnapshot) -> None:
        """Missing packages are grouped by source and sorted."""
        plan = ReconciliationEngine(multi_snapshot).sync_plan("laptop", {"git"})

        assert plan.packages(OFFICIAL) == ("docker", "tlp", "vim")
        assert plan.packages(FOREIGN) == ("paru-bin", "zoom")
        assert plan.arguments(OFFICIAL) == "docker tlp vim"
        assert plan.is_empty is False

    def test_plan_empty_when_installed(self, desktop_snapshot: ListSnapshot) -> None:
        """Nothing to install yields an empty plan."""
        plan = ReconciliationEngine(desktop_snapshot).sync_plan(
            "desktop", {"git", "vim", "docker", "htop"}
        )
        assert plan.is_empty is True
        assert plan.arguments(FOREIGN) == ""

    def test_plan_needs_machine(self, desktop_snapshot: ListSnapshot) -> None:
        """sync needs a machine."""
        with pytest.raises(MachineUnresolvedError):
            ReconciliationEngine(desktop_snapshot).sync_plan(None, set())


class TestCompare:
    """Tests for ReconciliationEngine.compare."""

    def test_compare_two_machines(self, multi_snapshot: ListSnapshot) -> None:
        """compare reports what only each side declares, per source."""
        comparison = ReconciliationEngine(multi_snapshot).compare("desktop", "laptop")

        assert comparison.only_left[OFFICIAL] == ("steam",)
        assert comparison.only_right[OFFICIAL] == ("tlp",)
        assert comparison.only_left[FOREIGN] == ()
        assert comparison.only_right[FOREIGN] == ("zoom",)
        assert comparison.is_identical is False

    def test_compare_same_scope(self, multi_snapshot: ListSnapshot) -> None:
        """A scope compared with itself is identical."""
        comparison = ReconciliationEngine(multi_snapshot).compare("laptop", "laptop")
        assert comparison.is_identical is True
