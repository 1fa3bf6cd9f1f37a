"""Machine identity resolution.

The current machine selects which scope lists apply on top of ``common``.
It is provided by a MachineResolver that callers pass in explicitly.
"""

import json
import logging
import subprocess
from abc import ABC, abstractmethod

from pkgctl.core.errors import MachineUnresolvedError
from pkgctl.utils.shell import run_command

logger = logging.getLogger(__name__)


class MachineResolver(ABC):
    """Resolves the identity of the current host."""

    @abstractmethod
    def current_machine(self) -> str | None:
        """Return the machine name, or None if it cannot be determined."""

    def require(self) -> str:
        """Return the machine name or fail.

        Raises:
            MachineUnresolvedError: If the machine cannot be determined.
        """
        machine = self.current_machine()
        if not machine:
            raise MachineUnresolvedError()
        return machine


class StaticMachineResolver(MachineResolver):
    """Resolver returning a fixed, configured machine name."""

    def __init__(self, machine: str | None) -> None:
        self._machine = machine

    def current_machine(self) -> str | None:
        return self._machine


class ChezmoiMachineResolver(MachineResolver):
    """Resolver reading the ``machine`` key of the chezmoi template data.

    The key is set in chezmoi's config (``[data] machine = "laptop"``),
    usually prompted for by ``chezmoi init``.
    """

    DATA_KEY = "machine"

    def __init__(self, executable: str = "chezmoi") -> None:
        self._executable = executable

    def current_machine(self) -> str | None:
        try:
            result = run_command([self._executable, "data", "--format", "json"], timeout=15.0)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("chezmoi data failed: %s", e)
            return None

        if not result.success:
            logger.debug("chezmoi data exited %d: %s", result.returncode, result.stderr.strip())
            return None

        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            logger.warning("Could not parse chezmoi data: %s", e)
            return None

        machine = data.get(self.DATA_KEY) if isinstance(data, dict) else None
        if not isinstance(machine, str) or not machine.strip():
            return None
        return machine.strip()
