"""XDG-compliant path management for pkgctl.

This module provides standardized paths following the XDG Base Directory
Specification.

Defaults:
- Config: ~/.config/pkgctl/
- Package lists: ~/.config/pkgs/ (managed by chezmoi)
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "pkgctl"

# Directory name of the package lists under the config home
LISTS_DIR_NAME = "pkgs"

# Environment variable overriding the lists directory
LISTS_DIR_ENV = "PKGCTL_LISTS_DIR"


def _get_config_home() -> Path:
    """Return XDG_CONFIG_HOME, falling back to ~/.config."""
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base)
    return Path.home() / ".config"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/pkgctl/ (or XDG_CONFIG_HOME/pkgctl/).
    """
    return _get_config_home() / APP_NAME


def get_config_path() -> Path:
    """Get the configuration file path.

    Returns:
        Path to ~/.config/pkgctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_default_lists_dir() -> Path:
    """Get the default package lists directory.

    PKGCTL_LISTS_DIR takes precedence over the XDG location.

    Returns:
        Path to ~/.config/pkgs/ (or the override).
    """
    override = os.environ.get(LISTS_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return _get_config_home() / LISTS_DIR_NAME
