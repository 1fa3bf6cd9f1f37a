"""Abstract base class for package scanners.

This module defines the Scanner interface that the reconciliation code
uses to query the host package manager.
"""

from abc import ABC, abstractmethod

from pkgctl.models.package import PackageSource


class Scanner(ABC):
    """Abstract base class for package inventory providers.

    Scanners report which packages are explicitly installed and whether a
    name is served by the official repositories.

    Example:
        >>> scanner = PacmanScanner()
        >>> if scanner.is_available():
        ...     installed = scanner.list_installed()
        ...     print(scanner.classify("paru-bin"))
    """

    @abstractmethod
    def list_installed(self) -> set[str]:
        """Return the names of all explicitly installed packages.

        Raises:
            RuntimeError: If the package manager is not available or fails.
        """

    @abstractmethod
    def is_official(self, name: str) -> bool:
        """Check if a package is known to the official repositories.

        Works for names that are not installed.

        Args:
            name: Package name to look up.

        Returns:
            True if the repositories provide the package, False otherwise.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this package manager is available on the system.

        Returns:
            True if the package manager can be used, False otherwise.
        """

    def classify(self, name: str) -> PackageSource:
        """Return the package source a name belongs to.

        Args:
            name: Package name to classify.

        Returns:
            OFFICIAL for repository packages, FOREIGN otherwise.
        """
        return PackageSource.OFFICIAL if self.is_official(name) else PackageSource.FOREIGN
