"""AUR helper operator implementation.

Installs and removes foreign packages through an AUR helper (paru, yay).
"""

from pkgctl.models.action import ActionType
from pkgctl.models.package import PackageSource
from pkgctl.operators.base import Operator
from pkgctl.utils.shell import command_exists

DEFAULT_AUR_HELPER = "paru"


class AurOperator(Operator):
    """Operator for foreign (AUR) packages.

    AUR helpers elevate privileges themselves and refuse to run as root,
    so commands are never prefixed with ``sudo``.
    """

    def __init__(self, helper: str = DEFAULT_AUR_HELPER) -> None:
        """Initialize the operator.

        Args:
            helper: AUR helper executable (pacman-compatible flags).
        """
        self._helper = helper

    @property
    def source(self) -> PackageSource:
        """Return FOREIGN as the package source."""
        return PackageSource.FOREIGN

    @property
    def program(self) -> str:
        """Return the configured helper, e.g. ``paru``."""
        return self._helper

    def is_available(self) -> bool:
        """Check if the AUR helper is available."""
        return command_exists(self._helper)

    def _base_command(self, action_type: ActionType) -> list[str]:
        if action_type == ActionType.INSTALL:
            return [self._helper, "-S"]
        return [self._helper, "-Rns"]
