"""Rich styles for pkgctl output.

Styles are built from the ``[colors]`` table of config.toml once, when the
shared consoles are created.
"""

import logging

from rich.theme import Theme

from pkgctl.core.config import ThemeColors, load_config
from pkgctl.core.errors import ConfigError

logger = logging.getLogger(__name__)


def load_colors() -> ThemeColors:
    """Read the configured colors.

    An unreadable config file falls back to the default colors; the command
    that loads the config reports the error itself.
    """
    try:
        return load_config().colors
    except ConfigError as e:
        logger.debug("Using default colors: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors) -> Theme:
    """Map the colors onto the style names used in markup and tables."""
    return Theme(
        {
            "muted": colors.muted,
            "border": colors.border,
            "bold_header": f"bold {colors.header}",
            "success": colors.success,
            "warning": colors.warning,
            "error": f"bold {colors.error}",
            "info": colors.info,
            "added": colors.added,
            "removed": colors.removed,
            "changed": colors.changed,
            "command": f"bold {colors.command}",
            "scope": colors.scope,
        }
    )


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the Rich theme, building it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme(load_colors())
    return _cached_theme
