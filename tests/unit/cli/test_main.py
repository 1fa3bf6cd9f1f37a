"""Unit tests for the main CLI application."""

from pathlib import Path

from pkgctl import __version__
from pkgctl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestMainApp:
    """Tests for global options and command registration."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"pkgctl version {__version__}" in result.stdout

    def test_help_lists_commands(self) -> None:
        """--help lists every command."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("add", "rm", "ls", "diff", "sync", "update", "move", "compare"):
            assert command in result.stdout

    def test_invalid_config_exits(self, tmp_path: Path, lists_dir: Path) -> None:
        """A broken config file is reported once and exits 1."""
        config_dir = tmp_path / "xdg-config" / "pkgctl"
        config_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text("colour = 'blue'\n")

        result = runner.invoke(app, ["--lists-dir", str(lists_dir), "ls"])

        assert result.exit_code == 1
        assert "Invalid config content" in result.output

    def test_lists_dir_from_config(self, tmp_path: Path, lists_dir: Path) -> None:
        """lists_dir from config.toml is used without --lists-dir."""
        config_dir = tmp_path / "xdg-config" / "pkgctl"
        config_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text(f'lists_dir = "{lists_dir}"\n')

        result = runner.invoke(app, ["ls"])

        assert result.exit_code == 0
        assert "pacman-desktop.pkgs" in result.stdout
