"""Package list models.

This module defines the core data structures for representing declared
package lists, keyed by package source and machine scope.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

# Scope that applies to every machine
COMMON_SCOPE = "common"

# File suffix of a package list on disk
LIST_SUFFIX = ".pkgs"


class PackageSource(Enum):
    """Enumeration of supported package sources.

    The value doubles as the file prefix of the source's list files
    (e.g. ``pacman-common.pkgs``, ``aur-laptop.pkgs``).

    Attributes:
        OFFICIAL: Installable from the configured pacman repositories.
        FOREIGN: Installable only through an AUR helper.
    """

    OFFICIAL = "pacman"
    FOREIGN = "aur"


@dataclass(frozen=True, slots=True)
class ListKey:
    """Identifies a single package list by source and scope.

    Attributes:
        source: Package source the list belongs to.
        scope: ``common`` or a machine identifier.
    """

    source: PackageSource
    scope: str

    def __post_init__(self) -> None:
        """Validate key data after initialization."""
        if not self.scope:
            msg = "Scope cannot be empty"
            raise ValueError(msg)
        if "/" in self.scope or self.scope.startswith("."):
            msg = f"Invalid scope name: {self.scope!r}"
            raise ValueError(msg)

    @property
    def sort_key(self) -> tuple[str, str]:
        """Return a key ordering lists by file name."""
        return (self.source.value, self.scope)

    @property
    def filename(self) -> str:
        """Return the list file name, e.g. ``pacman-common.pkgs``."""
        return f"{self.source.value}-{self.scope}{LIST_SUFFIX}"

    @property
    def is_common(self) -> bool:
        """Check if this list applies to every machine."""
        return self.scope == COMMON_SCOPE

    @classmethod
    def from_filename(cls, name: str) -> ListKey | None:
        """Parse a list file name back into a key.

        Args:
            name: File name such as ``aur-laptop.pkgs``.

        Returns:
            ListKey, or None if the name does not follow the convention.
        """
        if not name.endswith(LIST_SUFFIX):
            return None
        stem = name[: -len(LIST_SUFFIX)]
        prefix, sep, scope = stem.partition("-")
        if not sep or not scope:
            return None
        for source in PackageSource:
            if source.value == prefix:
                return cls(source=source, scope=scope)
        return None


@dataclass(frozen=True, slots=True)
class PackageList:
    """A declared package list loaded from disk.

    Blank lines and ``#`` comments are not part of the set.

    Attributes:
        key: Source and scope of the list.
        names: Declared package names.
        path: Backing file (may not exist yet).
    """

    key: ListKey
    names: frozenset[str]
    path: Path

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __len__(self) -> int:
        return len(self.names)

    @property
    def source(self) -> PackageSource:
        """Return the package source of this list."""
        return self.key.source

    @property
    def scope(self) -> str:
        """Return the scope of this list."""
        return self.key.scope

    @property
    def sorted_names(self) -> tuple[str, ...]:
        """Return the names in lexicographic order."""
        return tuple(sorted(self.names))


# Every list loaded at once, keyed by (source, scope)
ListSnapshot = dict[ListKey, frozenset[str]]
