"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's config, lists and machine out of every test."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.delenv("PKGCTL_LISTS_DIR", raising=False)
    monkeypatch.delenv("PKGCTL_MACHINE", raising=False)


@pytest.fixture
def lists_dir(tmp_path: Path) -> Path:
    """Directory with the desktop example lists.

    common declares git and vim, desktop declares docker.
    """
    path = tmp_path / "pkgs"
    path.mkdir()
    (path / "pacman-common.pkgs").write_text("git\nvim\n")
    (path / "pacman-desktop.pkgs").write_text("docker\n")
    return path


@pytest.fixture
def desktop_installed() -> set[str]:
    """Installed packages of the desktop example."""
    return {"git", "docker", "htop"}


@pytest.fixture
def mock_pacman_qqe_output() -> str:
    """Sample ``pacman -Qqe`` output for testing."""
    return """base
git
docker
htop
paru-bin
"""


@pytest.fixture
def mock_empty_output() -> str:
    """Empty output for testing edge cases."""
    return ""
