"""Pacman package scanner implementation.

Lists explicitly installed packages with ``pacman -Qqe`` and looks up
repository membership with ``pacman -Si``.
"""

import logging

from pkgctl.scanners.base import Scanner
from pkgctl.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


class PacmanScanner(Scanner):
    """Scanner for pacman-managed packages.

    Foreign (AUR) packages are registered in the local pacman database too,
    so ``pacman -Qqe`` covers both sources.
    """

    # Timeout for repository lookups (sync database reads only)
    _LOOKUP_TIMEOUT: float = 30.0

    def is_available(self) -> bool:
        """Check if pacman is available."""
        return command_exists("pacman")

    def list_installed(self) -> set[str]:
        """Return all explicitly installed packages.

        Returns:
            Set of package names.

        Raises:
            RuntimeError: If pacman is missing or the query fails.
        """
        if not self.is_available():
            msg = "pacman is not available on this system"
            raise RuntimeError(msg)

        result = run_command(["pacman", "-Qqe"])
        if not result.success:
            msg = f"pacman -Qqe failed: {result.stderr.strip() or 'unknown error'}"
            raise RuntimeError(msg)

        return {line.strip() for line in result.stdout.splitlines() if line.strip()}

    def is_official(self, name: str) -> bool:
        """Check if the sync repositories provide a package.

        Args:
            name: Package name to look up.

        Returns:
            True if ``pacman -Si`` succeeds, False otherwise.

        Raises:
            RuntimeError: If pacman is not available.
        """
        if not self.is_available():
            msg = "pacman is not available on this system"
            raise RuntimeError(msg)

        result = run_command(["pacman", "-Si", name], timeout=self._LOOKUP_TIMEOUT)
        logger.debug("pacman -Si %s -> exit %d", name, result.returncode)
        return result.success
