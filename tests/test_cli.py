"""
Tests for ui/cli.py - the turbod command line.
"""

import unittest
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from turbod.core.configs import DaemonSettings
from turbod.daemon.hashing import get_repo_hash
from turbod.ui.cli import app


class TestCli(unittest.TestCase):
    """Test cases for the Typer app."""

    def setUp(self):
        self.runner = CliRunner()
        self.settings = DaemonSettings(
            temp_dir=Path("/var/tmp"),
            data_dir=Path("/srv/data"),
            binary=Path("/opt/bin/go-turbo"),
        )
        patcher = patch("turbod.ui.cli.get_settings", return_value=self.settings)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_hash(self):
        result = self.runner.invoke(app, ["hash", "/home/u/proj"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), get_repo_hash("/home/u/proj"))

    def test_paths(self):
        result = self.runner.invoke(app, ["paths", "/home/u/proj"])
        digest = get_repo_hash("/home/u/proj")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn(f"/var/tmp/turbod/{digest}/turbod.sock", result.output)
        self.assertIn(f"/var/tmp/turbod/{digest}/turbod.pid", result.output)
        self.assertIn(f"/srv/data/logs/{digest}-proj.log", result.output)
        self.assertIn("/opt/bin/turbo", result.output)
        self.assertNotIn("go-turbo", result.output)

    def test_paths_socket_too_long(self):
        self.settings.temp_dir = Path("/" + "t" * 120)
        result = self.runner.invoke(app, ["paths", "/home/u/proj"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("unix socket limit", result.output)

    def test_connect_without_daemon_fails(self):
        result = self.runner.invoke(app, ["connect", "/home/u/proj"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("No daemon socket", result.output)

    def test_connect_disabled(self):
        self.settings.no_daemon = True
        result = self.runner.invoke(app, ["connect", "/home/u/proj"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Daemon disabled", result.output)


if __name__ == "__main__":
    unittest.main()
