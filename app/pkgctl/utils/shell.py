"""Subprocess helpers for pacman, the AUR helper and chezmoi.

Lookups (``pacman -Qqe``, ``pacman -Si``, ``chezmoi data``) are captured;
installer commands inherit the terminal so sudo and pacman can prompt.
"""

import logging
import shlex
import shutil
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a lookup command."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if the command exited with status 0."""
        return self.returncode == 0


def run_command(args: list[str], *, timeout: float | None = 60.0) -> CommandResult:
    """Run a command and capture its output.

    A non-zero exit is returned, not raised; callers decide what it means.

    Args:
        args: Command and arguments.
        timeout: Seconds to wait before giving up.

    Returns:
        CommandResult with stdout, stderr and exit code.

    Raises:
        subprocess.TimeoutExpired: If the command exceeds the timeout.
        OSError: If the executable cannot be started.
    """
    logger.debug("Running: %s", shlex.join(args))
    result = subprocess.run(args, capture_output=True, text=True, check=False, timeout=timeout)
    return CommandResult(stdout=result.stdout, stderr=result.stderr, returncode=result.returncode)


def command_exists(name: str) -> bool:
    """Check if an executable is on PATH."""
    return shutil.which(name) is not None


def run_interactive(args: list[str]) -> int:
    """Run an installer command attached to the terminal.

    Output is not captured, so sudo password prompts and pacman's own
    confirmation reach the user.

    Returns:
        Exit code of the command.

    Raises:
        OSError: If the executable cannot be started.
    """
    return subprocess.run(args, check=False).returncode
