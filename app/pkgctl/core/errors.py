"""Exception hierarchy for pkgctl.

Every failure a command can report derives from PkgctlError so the CLI
can print it and exit non-zero in one place.
"""


class PkgctlError(Exception):
    """Base exception for pkgctl errors."""


class ValidationError(PkgctlError):
    """Raised when a request is missing required arguments."""


class MachineUnresolvedError(PkgctlError):
    """Raised when the current machine cannot be determined."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Machine not set. Run: chezmoi init")


class NotFoundError(PkgctlError):
    """Raised when a package is absent from the lists an operation expects."""


class MutationAbortedError(PkgctlError):
    """Raised when the operator declines the confirmation gate."""


class ExternalCommandError(PkgctlError):
    """Raised when the installer reports failure."""

    def __init__(self, command: str, detail: str | None = None) -> None:
        self.command = command
        self.detail = detail
        message = f"Command failed: {command}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class ConfigError(PkgctlError):
    """Raised when the configuration file cannot be loaded."""
