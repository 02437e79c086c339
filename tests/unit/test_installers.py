"""
Installer selection and CommandInstaller tests.
"""

import subprocess
from unittest.mock import patch

from config import PlatformFamily, ToolSearchConfig
from services.installers import (
    DEFAULT_WINDOWS_INSTALL_COMMAND,
    CommandInstaller,
    ManualInstaller,
    installable,
    select_installer,
)


class TestSelectInstaller:

    def test_unix_gets_manual_installer(self):
        installer = select_installer(ToolSearchConfig(platform_family=PlatformFamily.UNIX))

        assert isinstance(installer, ManualInstaller)
        assert installer.auto_install is False
        assert installer.ensure_installed("wget") is None

    def test_windows_gets_command_installer(self):
        installer = select_installer(ToolSearchConfig(platform_family=PlatformFamily.WINDOWS))

        assert isinstance(installer, CommandInstaller)
        assert installer.auto_install is True
        assert installer.command_template == DEFAULT_WINDOWS_INSTALL_COMMAND

    def test_windows_install_command_override(self):
        config = ToolSearchConfig(
            platform_family=PlatformFamily.WINDOWS,
            install_command="choco install -y {tool}",
        )
        assert select_installer(config).command_template == "choco install -y {tool}"

    def test_only_downloaders_installable(self):
        assert installable("wget")
        assert installable("aria2c")
        assert not installable("python")


class TestCommandInstaller:

    def test_already_installed_is_noop(self):
        with patch("services.installers.shutil.which", return_value="/usr/bin/wget"), \
                patch("services.installers.subprocess.run") as run:
            assert CommandInstaller("choco install -y {tool}").ensure_installed("wget") == "/usr/bin/wget"
        run.assert_not_called()

    def test_runs_template_then_looks_up_again(self):
        done = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")
        with patch("services.installers.shutil.which", side_effect=[None, "C:/bin/aria2c.exe"]), \
                patch("services.installers.subprocess.run", return_value=done) as run:
            path = CommandInstaller("winget install --id {package}").ensure_installed("aria2c")

        assert path == "C:/bin/aria2c.exe"
        assert run.call_args[0][0] == ["winget", "install", "--id", "aria2.aria2"]

    def test_failed_install_returns_none(self):
        failed = subprocess.CompletedProcess(args=[], returncode=1, stdout="", stderr="no such package")
        with patch("services.installers.shutil.which", return_value=None), \
                patch("services.installers.subprocess.run", return_value=failed):
            assert CommandInstaller("choco install -y {tool}").ensure_installed("wget") is None

    def test_missing_installer_returns_none(self):
        with patch("services.installers.shutil.which", return_value=None), \
                patch("services.installers.subprocess.run", side_effect=FileNotFoundError("choco")):
            assert CommandInstaller("choco install -y {tool}").ensure_installed("wget") is None
