"""Allow running pkgctl as ``python -m pkgctl``."""

from pkgctl.cli.main import app

app()
