"""Package operators for executing installation and removal actions.

This module provides the abstract operator and the concrete command
families for repository (pacman) and AUR packages.
"""

from pkgctl.operators.aur import AurOperator
from pkgctl.operators.base import Operator
from pkgctl.operators.pacman import PacmanOperator

__all__ = ["AurOperator", "Operator", "PacmanOperator"]
