"""Unit tests for machine resolution."""

import subprocess
from unittest.mock import patch

import pytest
from pkgctl.core.errors import MachineUnresolvedError
from pkgctl.core.machine import ChezmoiMachineResolver, StaticMachineResolver
from pkgctl.utils.shell import CommandResult


class TestStaticMachineResolver:
    """Tests for StaticMachineResolver."""

    def test_returns_configured_machine(self) -> None:
        """The configured name is returned as-is."""
        resolver = StaticMachineResolver("desktop")
        assert resolver.current_machine() == "desktop"
        assert resolver.require() == "desktop"

    def test_require_without_machine_raises(self) -> None:
        """require fails with the chezmoi hint when no machine is set."""
        with pytest.raises(MachineUnresolvedError, match="Machine not set. Run: chezmoi init"):
            StaticMachineResolver(None).require()


class TestChezmoiMachineResolver:
    """Tests for ChezmoiMachineResolver."""

    def test_reads_machine_key(self) -> None:
        """The machine key of chezmoi data is the machine name."""
        output = '{"chezmoi": {"os": "linux"}, "machine": "laptop"}'
        with patch("pkgctl.core.machine.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout=output, stderr="", returncode=0)

            assert ChezmoiMachineResolver().current_machine() == "laptop"

        mock_run.assert_called_once_with(["chezmoi", "data", "--format", "json"], timeout=15.0)

    def test_uses_configured_executable(self) -> None:
        """A custom chezmoi path is honored."""
        with patch("pkgctl.core.machine.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="{}", stderr="", returncode=0)
            ChezmoiMachineResolver("/opt/bin/chezmoi").current_machine()

        assert mock_run.call_args.args[0][0] == "/opt/bin/chezmoi"

    @pytest.mark.parametrize(
        "stdout",
        ['{"chezmoi": {}}', '{"machine": ""}', '{"machine": 3}', "[]", "not json"],
    )
    def test_unusable_data_is_unresolved(self, stdout: str) -> None:
        """Missing, empty or malformed data leaves the machine unresolved."""
        with patch("pkgctl.core.machine.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout=stdout, stderr="", returncode=0)

            assert ChezmoiMachineResolver().current_machine() is None

    def test_command_failure_is_unresolved(self) -> None:
        """A failing chezmoi call leaves the machine unresolved."""
        with patch("pkgctl.core.machine.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="no config", returncode=1)

            with pytest.raises(MachineUnresolvedError):
                ChezmoiMachineResolver().require()

    @pytest.mark.parametrize(
        "error",
        [FileNotFoundError("chezmoi"), subprocess.TimeoutExpired(["chezmoi"], 15)],
    )
    def test_missing_chezmoi_is_unresolved(self, error: Exception) -> None:
        """chezmoi not being installed (or hanging) is not a crash."""
        with patch("pkgctl.core.machine.run_command", side_effect=error):
            assert ChezmoiMachineResolver().current_machine() is None

    def test_strips_whitespace(self) -> None:
        """Surrounding whitespace in the value is ignored."""
        with patch("pkgctl.core.machine.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout='{"machine": " desktop\\n"}', stderr="", returncode=0
            )

            assert ChezmoiMachineResolver().current_machine() == "desktop"
