"""pkgctl configuration.

This module provides the configuration model and loader. Configuration is
optional and lives in ~/.config/pkgctl/config.toml:

    lists_dir = "~/.config/pkgs"
    machine = "desktop"      # skip the chezmoi lookup
    aur_helper = "paru"
    use_sudo = true
    resync = true            # chezmoi re-add after every list change
    chezmoi = "chezmoi"

    [colors]                 # output colors, any subset
    command = "#faf870"
"""

import logging
import os
import re
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from pkgctl.core.errors import ConfigError
from pkgctl.core.paths import get_config_path, get_default_lists_dir

logger = logging.getLogger(__name__)

# Environment variable overriding the machine name
MACHINE_ENV = "PKGCTL_MACHINE"


# Hex color: #RGB or #RRGGBB
_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class ThemeColors(BaseModel):
    """Output colors, set in the ``[colors]`` table of config.toml.

    Unset keys keep their default.
    """

    model_config = ConfigDict(extra="forbid")

    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # diff/sync/update/compare columns
    added: str = "#c1ff62"
    removed: str = "#f53263"
    changed: str = "#0e8ac8"

    # staged installer commands and list names
    command: str = "#faf870"
    scope: str = "#d44ebc"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: ValidationInfo) -> str:
        """Accept hex colors only."""
        if not isinstance(v, str) or not _HEX_COLOR.fullmatch(v.strip()):
            msg = f"{info.field_name}: expected #RGB or #RRGGBB, got {v!r}"
            raise ValueError(msg)
        return v.strip()


class PkgctlConfig(BaseModel):
    """Configuration for pkgctl.

    Attributes:
        lists_dir: Directory holding the ``.pkgs`` files. None = default.
        machine: Static machine name. None = ask chezmoi.
        aur_helper: AUR helper executable for foreign packages.
        use_sudo: Prefix pacman commands with sudo.
        resync: Run ``chezmoi re-add`` after list changes.
        chezmoi: chezmoi executable.
        colors: Output colors.
    """

    model_config = ConfigDict(extra="forbid")

    lists_dir: Annotated[
        Path | None,
        Field(description="Directory of the package lists"),
    ] = None
    machine: Annotated[
        str | None,
        Field(description="Machine name override"),
    ] = None
    aur_helper: Annotated[
        str,
        Field(min_length=1, description="AUR helper executable"),
    ] = "paru"
    use_sudo: Annotated[bool, Field(description="Prefix pacman with sudo")] = True
    resync: Annotated[bool, Field(description="Re-add lists to chezmoi after changes")] = True
    chezmoi: Annotated[str, Field(min_length=1, description="chezmoi executable")] = "chezmoi"
    colors: ThemeColors = Field(default_factory=ThemeColors)

    @field_validator("lists_dir", mode="after")
    @classmethod
    def expand_lists_dir(cls, v: Path | None) -> Path | None:
        """Expand ``~`` in the lists directory."""
        return v.expanduser() if v is not None else None

    @property
    def effective_lists_dir(self) -> Path:
        """Get the lists directory to use.

        Returns the configured directory if set, otherwise the default
        (PKGCTL_LISTS_DIR or ~/.config/pkgs).
        """
        return self.lists_dir or get_default_lists_dir()

    @property
    def effective_machine(self) -> str | None:
        """Get the static machine name, PKGCTL_MACHINE taking precedence."""
        return os.environ.get(MACHINE_ENV) or self.machine


def load_config(path: Path | None = None) -> PkgctlConfig:
    """Load configuration from a TOML file.

    A missing file yields the defaults.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated PkgctlConfig object.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return PkgctlConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return PkgctlConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e
