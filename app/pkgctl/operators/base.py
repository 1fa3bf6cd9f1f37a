"""Abstract base class for package operators.

This module defines the Operator interface that every installer command
family (pacman, AUR helper) must implement.
"""

import logging
import shlex
from abc import ABC, abstractmethod

from pkgctl.models.action import Action, ActionResult, ActionType
from pkgctl.models.package import PackageSource
from pkgctl.utils.shell import run_interactive

logger = logging.getLogger(__name__)


class Operator(ABC):
    """Abstract base class for all package operators.

    Operators render and execute install/remove commands for one package
    source. The argv returned by :meth:`build_command` is exactly what
    :meth:`install` and :meth:`remove` run, so the command shown to the
    user before confirmation is the command that executes.

    Example:
        >>> operator = PacmanOperator()
        >>> print(operator.format_command(ActionType.INSTALL, ["htop"]))
        sudo pacman -S htop
        >>> results = operator.install(["htop"])
    """

    @property
    @abstractmethod
    def source(self) -> PackageSource:
        """Return the package source this operator handles."""

    @property
    @abstractmethod
    def program(self) -> str:
        """Return the executable of this command family (e.g. ``pacman``)."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the installer is available on the system."""

    @abstractmethod
    def _base_command(self, action_type: ActionType) -> list[str]:
        """Return the argv prefix for an action, without package names."""

    @property
    def confirmation_token(self) -> str:
        """Literal the operator must type to confirm a staged command."""
        return self.program

    def build_command(
        self,
        action_type: ActionType,
        packages: list[str],
        *,
        needed: bool = False,
    ) -> list[str]:
        """Render the full argv for an action.

        Args:
            action_type: Install or remove.
            packages: Package names, kept in the given order.
            needed: Skip packages that are already up to date (install only).

        Returns:
            Command and arguments.
        """
        args = self._base_command(action_type)
        if needed and action_type == ActionType.INSTALL:
            args.append("--needed")
        args.extend(packages)
        return args

    def format_command(
        self,
        action_type: ActionType,
        packages: list[str],
        *,
        needed: bool = False,
    ) -> str:
        """Render the command as a single shell line."""
        return shlex.join(self.build_command(action_type, packages, needed=needed))

    def install(self, packages: list[str]) -> list[ActionResult]:
        """Install one or more packages.

        Args:
            packages: List of package names to install.

        Returns:
            List of ActionResult for each package.

        Raises:
            RuntimeError: If the installer is not available.
        """
        return self._execute(ActionType.INSTALL, packages)

    def remove(self, packages: list[str]) -> list[ActionResult]:
        """Remove one or more packages.

        Args:
            packages: List of package names to remove.

        Returns:
            List of ActionResult for each package.

        Raises:
            RuntimeError: If the installer is not available.
        """
        return self._execute(ActionType.REMOVE, packages)

    def _execute(self, action_type: ActionType, packages: list[str]) -> list[ActionResult]:
        """Run a command for a batch of packages.

        The batch is atomic, matching pacman's transaction semantics: either
        every package succeeds or every package fails.
        """
        if not self.is_available():
            msg = f"{self.program} is not available on this system"
            raise RuntimeError(msg)

        if not packages:
            return []

        args = self.build_command(action_type, packages)
        logger.info("Executing: %s", shlex.join(args))

        error: str | None = None
        try:
            returncode = run_interactive(args)
        except OSError as e:
            returncode = -1
            error = str(e)

        if returncode != 0 and error is None:
            error = f"{self.program} exited with status {returncode}"

        return [
            ActionResult(
                action=Action(action_type=action_type, package=package, source=self.source),
                success=error is None,
                message="Operation completed" if error is None else None,
                error=error,
            )
            for package in packages
        ]
