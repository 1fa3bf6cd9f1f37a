"""Pacman package operator implementation.

Installs and removes repository packages with pacman.
"""

from pkgctl.models.action import ActionType
from pkgctl.models.package import PackageSource
from pkgctl.operators.base import Operator
from pkgctl.utils.shell import command_exists


class PacmanOperator(Operator):
    """Operator for official repository packages.

    Attributes:
        use_sudo: Prefix commands with ``sudo``.
    """

    def __init__(self, use_sudo: bool = True) -> None:
        """Initialize the operator.

        Args:
            use_sudo: Prefix commands with ``sudo``.
        """
        self.use_sudo = use_sudo

    @property
    def source(self) -> PackageSource:
        """Return OFFICIAL as the package source."""
        return PackageSource.OFFICIAL

    @property
    def program(self) -> str:
        """Return ``pacman``."""
        return "pacman"

    def is_available(self) -> bool:
        """Check if pacman (and sudo, when used) is available."""
        if self.use_sudo and not command_exists("sudo"):
            return False
        return command_exists("pacman")

    def _base_command(self, action_type: ActionType) -> list[str]:
        prefix = ["sudo", "pacman"] if self.use_sudo else ["pacman"]
        if action_type == ActionType.INSTALL:
            return [*prefix, "-S"]
        # -Rns: drop unneeded dependencies and backup config files too
        return [*prefix, "-Rns"]
