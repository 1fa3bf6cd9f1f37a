"""Unit tests for action models."""

import pytest
from pkgctl.models.action import Action, ActionResult, ActionType
from pkgctl.models.package import PackageSource


class TestAction:
    """Tests for Action dataclass."""

    def test_install_action(self) -> None:
        """Install actions report is_install."""
        action = Action(ActionType.INSTALL, "htop", PackageSource.OFFICIAL)
        assert action.is_install is True
        assert action.is_remove is False

    def test_remove_action(self) -> None:
        """Remove actions report is_remove."""
        action = Action(ActionType.REMOVE, "paru-bin", PackageSource.FOREIGN)
        assert action.is_remove is True
        assert action.is_install is False

    def test_empty_package_raises(self) -> None:
        """Empty package names are rejected."""
        with pytest.raises(ValueError, match="Package name cannot be empty"):
            Action(ActionType.INSTALL, "", PackageSource.OFFICIAL)


class TestActionResult:
    """Tests for ActionResult dataclass."""

    def test_failed_is_inverse_of_success(self) -> None:
        """failed mirrors success."""
        action = Action(ActionType.INSTALL, "htop", PackageSource.OFFICIAL)
        assert ActionResult(action=action, success=True).failed is False
        assert ActionResult(action=action, success=False, error="boom").failed is True
