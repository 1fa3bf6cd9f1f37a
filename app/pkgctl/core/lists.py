"""Package list file storage.

This module provides the ListStore class, which reads and writes the
``{source}-{scope}.pkgs`` files that declare the wanted packages.

File format: one package name per line. Blank lines and ``#`` comments
are ignored when computing the set but are kept verbatim by mutations.
Every mutation leaves the file normalized: the package lines between two
comment/blank anchors are sorted and duplicates are dropped, and the file
ends with exactly one newline.
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path
from tempfile import NamedTemporaryFile

from pkgctl.core.errors import PkgctlError, ValidationError
from pkgctl.models.package import (
    LIST_SUFFIX,
    ListKey,
    ListSnapshot,
    PackageList,
    PackageSource,
)

logger = logging.getLogger(__name__)


class ListStoreError(PkgctlError):
    """Raised when a list file cannot be read or written."""


def is_member_line(line: str) -> bool:
    """Check if a raw line declares a package (not blank, not a comment)."""
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith("#")


def validate_package_name(name: str) -> str:
    """Validate a package name before it is written to a list.

    Args:
        name: Candidate package name.

    Returns:
        The name, unchanged.

    Raises:
        ValidationError: If the name is empty, contains whitespace or
            would be read back as a comment.
    """
    if not name or name != name.strip() or any(c.isspace() for c in name):
        msg = f"Invalid package name: {name!r}"
        raise ValidationError(msg)
    if name.startswith("#") or name.startswith("-"):
        msg = f"Invalid package name: {name!r}"
        raise ValidationError(msg)
    return name


def normalize_lines(lines: Iterable[str]) -> list[str]:
    """Sort and deduplicate package lines, keeping comments in place.

    Comment and blank lines act as anchors. The package lines between two
    anchors form a section that is sorted on its own. A name seen earlier in
    the file is dropped. Trailing blank lines are removed.

    Args:
        lines: Raw lines without line terminators.

    Returns:
        Normalized lines without line terminators.
    """
    result: list[str] = []
    section: list[str] = []
    seen: set[str] = set()

    for line in lines:
        if is_member_line(line):
            name = line.strip()
            if name not in seen:
                seen.add(name)
                section.append(name)
            continue
        result.extend(sorted(section))
        section.clear()
        result.append(line)

    result.extend(sorted(section))

    while result and not result[-1].strip():
        result.pop()
    return result


def parse_names(lines: Iterable[str]) -> frozenset[str]:
    """Extract the declared package names from raw lines."""
    return frozenset(line.strip() for line in lines if is_member_line(line))


def insertion_index(lines: list[str], name: str) -> int:
    """Find where a new name goes so that it lands in its sorted section.

    The name joins the first section holding a member that sorts after it,
    or the last section. A file without members gets the name in front of
    its trailing comment block.

    Args:
        lines: Raw lines without line terminators.
        name: Package name about to be inserted.

    Returns:
        Index for ``lines.insert``.
    """
    sections: list[tuple[int, int]] = []
    start: int | None = None
    for i, line in enumerate(lines):
        if is_member_line(line):
            if start is None:
                start = i
        elif start is not None:
            sections.append((start, i))
            start = None
    if start is not None:
        sections.append((start, len(lines)))

    if not sections:
        index = len(lines)
        while index > 0 and lines[index - 1].strip().startswith("#"):
            index -= 1
        return index

    for first, end in sections:
        if any(lines[i].strip() > name for i in range(first, end)):
            return end
    return sections[-1][1]


class ListStore:
    """File-backed storage of the declared package lists.

    Storage location: ~/.config/pkgs/ (one file per source and scope).

    Example:
        >>> store = ListStore(Path("~/.config/pkgs").expanduser())
        >>> store.add(PackageSource.OFFICIAL, "common", "git")
        True
        >>> "git" in store.load(PackageSource.OFFICIAL, "common")
        True
    """

    def __init__(self, lists_dir: Path) -> None:
        """Initialize the store.

        Args:
            lists_dir: Directory containing the ``.pkgs`` files.
        """
        self._lists_dir = lists_dir

    @property
    def lists_dir(self) -> Path:
        """Directory containing the list files."""
        return self._lists_dir

    def path_for(self, source: PackageSource, scope: str) -> Path:
        """Return the backing file of a list."""
        return self._lists_dir / ListKey(source=source, scope=scope).filename

    def load(self, source: PackageSource, scope: str) -> PackageList:
        """Load a single list.

        A missing file is an empty list, not an error.

        Args:
            source: Package source of the list.
            scope: ``common`` or a machine identifier.

        Returns:
            The loaded PackageList.

        Raises:
            ListStoreError: If the file exists but cannot be read.
        """
        key = ListKey(source=source, scope=scope)
        path = self._lists_dir / key.filename
        return PackageList(key=key, names=parse_names(self._read_lines(path)), path=path)

    def all_lists(self) -> list[ListKey]:
        """Enumerate every list present on disk.

        Returns:
            Keys sorted by file name. Files that do not follow the
            ``{source}-{scope}.pkgs`` convention are skipped.
        """
        if not self._lists_dir.is_dir():
            return []

        keys: list[ListKey] = []
        for path in self._lists_dir.glob(f"*{LIST_SUFFIX}"):
            if not path.is_file():
                continue
            try:
                key = ListKey.from_filename(path.name)
            except ValueError:
                key = None
            if key is None:
                logger.debug("Ignoring unrecognized list file: %s", path.name)
                continue
            keys.append(key)

        return sorted(keys, key=lambda k: k.sort_key)

    def scopes(self) -> list[str]:
        """Return every scope that has at least one list on disk."""
        return sorted({key.scope for key in self.all_lists()})

    def snapshot(self) -> ListSnapshot:
        """Load every list on disk at once.

        Returns:
            Mapping of list key to declared names.
        """
        return {key: self.load(key.source, key.scope).names for key in self.all_lists()}

    def lists_containing(self, name: str) -> list[ListKey]:
        """Return every list that declares ``name``, sorted by file name."""
        return [key for key, names in self.snapshot().items() if name in names]

    def add(self, source: PackageSource, scope: str, name: str) -> bool:
        """Add a package to a list.

        Idempotent: adding a name that is already declared leaves the file
        untouched. New names join the first section that holds a name
        sorting after them, or the last section when there is none.

        Args:
            source: Package source of the list.
            scope: ``common`` or a machine identifier.
            name: Package name to add.

        Returns:
            True if the file changed, False if the name was already present.

        Raises:
            ValidationError: If the name is not a valid package name.
            ListStoreError: If the file cannot be read or written.
        """
        validate_package_name(name)
        path = self.path_for(source, scope)
        lines = self._read_lines(path)

        if name in parse_names(lines):
            return False

        lines.insert(insertion_index(lines, name), name)

        self._write_lines(path, normalize_lines(lines))
        logger.debug("Added %s to %s", name, path.name)
        return True

    def remove(self, source: PackageSource, scope: str, name: str) -> bool:
        """Remove a package from a list.

        Only lines matching the name exactly are deleted; comments and
        unrelated entries survive.

        Args:
            source: Package source of the list.
            scope: ``common`` or a machine identifier.
            name: Package name to remove.

        Returns:
            True if the file changed, False if the name was absent.

        Raises:
            ListStoreError: If the file cannot be read or written.
        """
        path = self.path_for(source, scope)
        lines = self._read_lines(path)

        kept = [line for line in lines if not (is_member_line(line) and line.strip() == name)]
        if len(kept) == len(lines):
            return False

        self._write_lines(path, normalize_lines(kept))
        logger.debug("Removed %s from %s", name, path.name)
        return True

    def read_text(self, source: PackageSource, scope: str) -> str:
        """Return the raw content of a list file ("" when absent)."""
        lines = self._read_lines(self.path_for(source, scope))
        return "\n".join(lines) + "\n" if lines else ""

    def _read_lines(self, path: Path) -> list[str]:
        try:
            return path.read_text(encoding="utf-8").splitlines()
        except FileNotFoundError:
            return []
        except OSError as e:
            raise ListStoreError(f"Failed to read {path}: {e}") from e

    def _write_lines(self, path: Path, lines: list[str]) -> None:
        """Write a list file atomically.

        The content goes to a temporary file in the same directory and is
        moved into place with os.replace().
        """
        content = "\n".join(lines) + "\n" if lines else ""

        tmp_path: Path | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                f.write(content)
            os.replace(str(tmp_path), str(path))
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise ListStoreError(f"Failed to write {path}: {e}") from e
