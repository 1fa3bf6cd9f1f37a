"""pkgctl - declarative package lists for Arch Linux machines."""

__version__ = "0.3.0"
