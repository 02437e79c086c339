# ============================================================================
# DOWNLOADER TOOL INSTALLERS
# ============================================================================
# STATUS: Service - installer capability selected once at startup
# PURPOSE: Keep platform-specific install behaviour out of the resolvers
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: Installer, ManualInstaller, CommandInstaller, select_installer
# ============================================================================
"""
Downloader Tool Installers.

On Windows, missing wget/aria2c are installed automatically (winget by
default). Elsewhere the user installs them with the system package manager,
so the installer only declines.

The resolver asks one question, `installer.auto_install`, and makes one
call per missing tool, `installer.ensure_installed(tool)`. Which installer
it gets is decided once, by select_installer().
"""

import shlex
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import Dict, Optional

from config import DownloaderDefaults, PlatformFamily, ToolSearchConfig
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.FACTORY, "installers")

DEFAULT_WINDOWS_INSTALL_COMMAND = "winget install --silent --exact --id {package}"

# winget package identifiers
WINGET_PACKAGES: Dict[str, str] = {
    "wget": "JernejSimoncic.Wget",
    "aria2c": "aria2.aria2",
}


class Installer(ABC):
    """Installs a missing downloader tool."""

    auto_install: bool = False

    @abstractmethod
    def ensure_installed(self, tool: str) -> Optional[str]:
        """
        Make sure `tool` is installed. Idempotent.

        Returns:
            Path of the installed executable, or None if unavailable
        """


class ManualInstaller(Installer):
    """Never installs; the user remediates manually."""

    auto_install = False

    def ensure_installed(self, tool: str) -> Optional[str]:
        logger.debug(f"Automatic installation not available for '{tool}'")
        return None


class CommandInstaller(Installer):
    """
    Installs tools by running a command template.

    The template may use {tool} and {package}; {package} falls back to the
    tool name when no package mapping exists.
    """

    auto_install = True

    def __init__(
        self,
        command_template: str,
        timeout: float = 600.0,
        packages: Optional[Dict[str, str]] = None
    ):
        self.command_template = command_template
        self.timeout = timeout
        self.packages = packages if packages is not None else WINGET_PACKAGES

    def ensure_installed(self, tool: str) -> Optional[str]:
        existing = shutil.which(tool)
        if existing:
            return existing

        command = self.command_template.format(tool=tool, package=self.packages.get(tool, tool))
        logger.info(f"Installing '{tool}': {command}")
        try:
            result = subprocess.run(
                shlex.split(command, posix=False),
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"Installation of '{tool}' timed out after {self.timeout}s")
            return None
        except OSError as e:
            logger.warning(f"Installer for '{tool}' could not be started: {e}")
            return None

        if result.returncode != 0:
            logger.warning(
                f"Installation of '{tool}' failed ({result.returncode}): {result.stderr.strip()[:200]}"
            )
            return None
        return shutil.which(tool)


def select_installer(config: ToolSearchConfig) -> Installer:
    """
    Pick the installer for this platform family.

    Windows installs automatically (SEN2PREP_INSTALL_COMMAND or winget);
    other platforms only inform.
    """
    if config.platform_family == PlatformFamily.WINDOWS:
        template = config.install_command or DEFAULT_WINDOWS_INSTALL_COMMAND
        logger.debug(f"Selected CommandInstaller: {template}")
        return CommandInstaller(template)
    logger.debug("Selected ManualInstaller")
    return ManualInstaller()


def installable(tool: str) -> bool:
    """Whether an installer may be asked for `tool`."""
    return tool in DownloaderDefaults.INSTALLABLE_TOOLS
