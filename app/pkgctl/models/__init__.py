"""Data models for pkgctl.

This module exports the core data structures used throughout the application.
"""

from pkgctl.models.action import Action, ActionResult, ActionType
from pkgctl.models.package import (
    COMMON_SCOPE,
    LIST_SUFFIX,
    ListKey,
    ListSnapshot,
    PackageList,
    PackageSource,
)

__all__ = [
    "COMMON_SCOPE",
    "LIST_SUFFIX",
    "Action",
    "ActionResult",
    "ActionType",
    "ListKey",
    "ListSnapshot",
    "PackageList",
    "PackageSource",
]
