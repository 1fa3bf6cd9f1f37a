"""Unit tests for ls and compare commands."""

from pathlib import Path

from pkgctl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestLsCommand:
    """Tests for ls command."""

    def test_prints_every_list(self, lists_dir: Path) -> None:
        """Each list is printed under its file name header."""
        (lists_dir / "pacman-common.pkgs").write_text("# base\ngit\nvim\n")

        result = runner.invoke(app, ["--lists-dir", str(lists_dir), "ls"])

        assert result.exit_code == 0
        assert "=== pacman-common.pkgs ===" in result.stdout
        assert "=== pacman-desktop.pkgs ===" in result.stdout
        assert "# base\ngit\nvim\n" in result.stdout
        assert result.stdout.index("pacman-common") < result.stdout.index("pacman-desktop")

    def test_scope_filter(self, lists_dir: Path) -> None:
        """--scope limits output to one scope."""
        result = runner.invoke(app, ["--lists-dir", str(lists_dir), "ls", "--scope", "desktop"])

        assert "pacman-desktop.pkgs" in result.stdout
        assert "pacman-common.pkgs" not in result.stdout

    def test_needs_no_machine(self, lists_dir: Path) -> None:
        """ls works without a resolvable machine."""
        result = runner.invoke(app, ["--lists-dir", str(lists_dir), "ls"])
        assert result.exit_code == 0

    def test_no_lists(self, tmp_path: Path) -> None:
        """An empty directory is reported, not an error."""
        result = runner.invoke(app, ["--lists-dir", str(tmp_path / "empty"), "ls"])

        assert result.exit_code == 0
        assert "No package lists found" in result.output


class TestCompareCommand:
    """Tests for compare command."""

    def test_compare_scopes(self, lists_dir: Path) -> None:
        """compare shows what each scope declares on its own."""
        (lists_dir / "pacman-desktop.pkgs").write_text("docker\nsteam\n")
        (lists_dir / "pacman-laptop.pkgs").write_text("docker\ntlp\n")

        result = runner.invoke(
            app, ["--lists-dir", str(lists_dir), "compare", "desktop", "laptop"]
        )

        assert result.exit_code == 0
        assert "steam" in result.output
        assert "tlp" in result.output
        assert "docker" not in result.output

    def test_identical_scopes(self, lists_dir: Path) -> None:
        """Identical scopes are reported as such."""
        result = runner.invoke(app, ["--lists-dir", str(lists_dir), "compare", "laptop", "server"])

        assert result.exit_code == 0
        assert "declare the same packages" in result.output
