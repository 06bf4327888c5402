"""Tests for CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from cloudseed.cli import _setup_logging, app


runner = CliRunner()


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("cloudseed.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("cloudseed.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestPrepareCommand:
    """Tests for the prepare command."""

    def test_prepare_without_config(self, tmp_path: Path) -> None:
        """No configuration means nothing is written."""
        result = runner.invoke(app, ["prepare", "db1", "--root", str(tmp_path)])

        assert result.exit_code == 0
        assert "No cloud-init documents configured" in result.stdout
        assert not (tmp_path / ".vagrant").exists()

    def test_prepare_with_config(self, tmp_path: Path) -> None:
        """Configured documents are written and the volume printed."""
        (tmp_path / "cloudinit.yml").write_text("user_data:\n  inline: 'packages: [curl]'\n")

        result = runner.invoke(
            app,
            ["prepare", "web01", "--root", str(tmp_path), "--config", "cloudinit.yml"],
        )

        seed_dir = tmp_path / ".vagrant" / "cloudinit" / "web01"
        assert result.exit_code == 0
        assert (seed_dir / "user-data").read_text() == "#cloud-config\npackages: [curl]"
        assert (seed_dir / "meta-data").exists()
        assert "Volume:" in result.stdout

    def test_prepare_missing_source(self, tmp_path: Path) -> None:
        """A missing document source exits with an error."""
        (tmp_path / "cloudinit.yml").write_text("user_data:\n  path: missing.yml\n")

        result = runner.invoke(
            app,
            ["prepare", "web01", "--root", str(tmp_path), "--config", "cloudinit.yml"],
        )

        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_prepare_missing_config(self, tmp_path: Path) -> None:
        """A missing configuration file exits with an error."""
        result = runner.invoke(
            app,
            ["prepare", "web01", "--root", str(tmp_path), "--config", "nope.yml"],
        )

        assert result.exit_code == 1
        assert "Cannot read configuration" in result.stdout


class TestCleanupCommand:
    """Tests for the cleanup command."""

    def test_cleanup_removes_seed(self, tmp_path: Path) -> None:
        """Prepared seeds are removed."""
        seed_dir = tmp_path / ".vagrant" / "cloudinit" / "web01"
        seed_dir.mkdir(parents=True)
        (seed_dir / "meta-data").write_text("instance-id: web01\n")

        result = runner.invoke(app, ["cleanup", "web01", "--root", str(tmp_path)])

        assert result.exit_code == 0
        assert not seed_dir.exists()
        assert "Cleaned up cloud-init files" in result.stdout

    def test_cleanup_never_prepared(self, tmp_path: Path) -> None:
        """Cleanup of an unknown machine is silent."""
        result = runner.invoke(app, ["cleanup", "ghost", "--root", str(tmp_path)])

        assert result.exit_code == 0
        assert "Cleaned up" not in result.stdout


class TestShowCommand:
    """Tests for the show command."""

    def test_show_resolved_documents(self, tmp_path: Path) -> None:
        """Lists every document with its source."""
        config_file = tmp_path / "cloudinit.yml"
        config_file.write_text(
            "user_data:\n"
            "  path: files/user.yml\n"
            "vendor_data:\n"
            "  content_type: text/x-shellscript\n"
            "  inline: echo hi\n"
        )

        result = runner.invoke(app, ["show", "--config", str(config_file)])

        assert result.exit_code == 0
        assert "user-data" in result.stdout
        assert "files/user.yml" in result.stdout
        assert "network-config" in result.stdout

    def test_show_invalid_config(self, tmp_path: Path) -> None:
        """Invalid configuration exits with an error."""
        config_file = tmp_path / "cloudinit.yml"
        config_file.write_text("bogus: {}\n")

        result = runner.invoke(app, ["show", "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Unknown cloud-init section" in result.stdout
