"""Re-sync notification for the configuration-management tool.

After a list file changes, chezmoi is told to re-read it so the change
lands in the dotfiles source state. This is a convenience step: failures
are logged and never abort the command.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from pkgctl.utils.shell import run_command

logger = logging.getLogger(__name__)


class ExternalSync(ABC):
    """Collaborator notified after list files change."""

    @abstractmethod
    def notify_changed(self, path: Path) -> None:
        """Report that files under ``path`` changed. Never raises."""


class NullSync(ExternalSync):
    """Sync collaborator that does nothing (re-sync disabled)."""

    def notify_changed(self, path: Path) -> None:
        logger.debug("Re-sync disabled, not notifying about %s", path)


class ChezmoiSync(ExternalSync):
    """Runs ``chezmoi re-add <path>`` after a change."""

    def __init__(self, executable: str = "chezmoi") -> None:
        self._executable = executable

    def notify_changed(self, path: Path) -> None:
        args = [self._executable, "re-add", str(path)]
        try:
            result = run_command(args, timeout=60.0)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning("chezmoi re-add failed: %s", e)
            return

        if not result.success:
            logger.warning(
                "chezmoi re-add exited %d: %s",
                result.returncode,
                result.stderr.strip() or "unknown error",
            )
            return
        logger.debug("chezmoi re-add %s completed", path)
