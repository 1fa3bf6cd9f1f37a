"""Action models for package operations.

This module defines data structures for representing package management
actions (install, remove) and their execution results.
"""

from dataclasses import dataclass
from enum import Enum

from pkgctl.models.package import PackageSource


class ActionType(Enum):
    """Type of package management action.

    Attributes:
        INSTALL: Install a package that is not currently installed.
        REMOVE: Remove a package together with its unneeded dependencies.
    """

    INSTALL = "install"
    REMOVE = "remove"


@dataclass(frozen=True, slots=True)
class Action:
    """Represents a single package management action to be executed.

    Attributes:
        action_type: The type of action (install or remove).
        package: Name of the package to operate on.
        source: Package source that handles this package.
    """

    action_type: ActionType
    package: str
    source: PackageSource

    def __post_init__(self) -> None:
        """Validate action data after initialization."""
        if not self.package:
            msg = "Package name cannot be empty"
            raise ValueError(msg)

    @property
    def is_install(self) -> bool:
        """Check if this is an install action."""
        return self.action_type == ActionType.INSTALL

    @property
    def is_remove(self) -> bool:
        """Check if this is a remove action."""
        return self.action_type == ActionType.REMOVE


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Result of executing a package management action.

    Attributes:
        action: The action that was executed.
        success: Whether the action completed successfully.
        message: Optional success message or additional information.
        error: Optional error message if the action failed.
    """

    action: Action
    success: bool
    message: str | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Check if the action failed."""
        return not self.success
