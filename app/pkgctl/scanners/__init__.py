"""Package scanners for querying the host package manager.

This module exports the scanner classes used to inspect installed packages.
"""

from pkgctl.scanners.base import Scanner
from pkgctl.scanners.pacman import PacmanScanner

__all__ = ["PacmanScanner", "Scanner"]
