"""
External Tool Search Configuration.

Immutable configuration threaded through the capability resolvers in place
of a process-wide "current GDAL path" option.

Provides configuration for:
    - Binary path store location
    - Fast lookup directories and full scan roots
    - External process timeout
    - Platform family (selects .exe suffix, script prefixes and installer)

Exports:
    PlatformFamily: Platform family enum
    ToolSearchConfig: Pydantic configuration model
"""

import os
import sys
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from exceptions import ConfigurationError
from .defaults import ToolkitDefaults, StoreDefaults


class PlatformFamily(str, Enum):
    """Platform families with different tool layouts."""
    WINDOWS = "windows"
    UNIX = "unix"

    @classmethod
    def current(cls) -> 'PlatformFamily':
        """Platform family of the running interpreter."""
        return cls.WINDOWS if sys.platform.startswith("win") else cls.UNIX


def _split_paths(raw: Optional[str]) -> Optional[Tuple[str, ...]]:
    """Split an os.pathsep separated env value, None when unset."""
    if raw is None:
        return None
    return tuple(p.strip() for p in raw.split(os.pathsep) if p.strip())


# ============================================================================
# TOOL SEARCH CONFIGURATION
# ============================================================================

class ToolSearchConfig(BaseModel):
    """
    Where and how external tools are searched.

    Frozen: resolvers receive one instance and never modify it.
    """

    model_config = ConfigDict(frozen=True)

    platform_family: PlatformFamily = Field(
        default_factory=PlatformFamily.current,
        description="Platform family; Windows binaries get the .exe suffix and "
                    "GDAL python scripts are invoked through the bundled interpreter."
    )

    binpaths_path: Path = Field(
        default_factory=lambda: Path(StoreDefaults.BINPATHS_FILE).expanduser(),
        description="JSON file persisting resolved tool paths"
    )

    search_paths: Tuple[str, ...] = Field(
        default=(),
        description="Directories checked after PATH during the fast lookup",
        examples=[("/usr/local/bin",), ("C:\\OSGeo4W64\\bin",)]
    )

    scan_roots: Tuple[str, ...] = Field(
        default=(),
        description="Filesystem roots walked during the full scan (slow)"
    )

    tool_timeout: float = Field(
        default=ToolkitDefaults.TOOL_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout in seconds for gdalinfo --version / --formats"
    )

    install_command: Optional[str] = Field(
        default=None,
        description="Command template used to install missing downloader tools "
                    "on Windows, e.g. 'choco install -y {tool}'. Unset = manual install.",
        examples=["choco install -y {tool}", "winget install --silent {tool}"]
    )

    @property
    def exe_suffix(self) -> str:
        return ".exe" if self.platform_family == PlatformFamily.WINDOWS else ""

    @property
    def effective_search_paths(self) -> Tuple[str, ...]:
        """Configured search paths, or platform defaults when none are set."""
        if self.search_paths:
            return self.search_paths
        if self.platform_family == PlatformFamily.WINDOWS:
            return ToolkitDefaults.WINDOWS_SEARCH_PATHS
        return ToolkitDefaults.UNIX_SEARCH_PATHS

    @property
    def effective_scan_roots(self) -> Tuple[str, ...]:
        """Configured scan roots, or platform defaults when none are set."""
        if self.scan_roots:
            return self.scan_roots
        if self.platform_family == PlatformFamily.WINDOWS:
            return ToolkitDefaults.WINDOWS_SCAN_ROOTS
        return ToolkitDefaults.UNIX_SCAN_ROOTS

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        kwargs = {}

        platform_raw = os.environ.get("SEN2PREP_PLATFORM")
        if platform_raw:
            try:
                kwargs["platform_family"] = PlatformFamily(platform_raw.strip().lower())
            except ValueError:
                raise ConfigurationError(
                    f"SEN2PREP_PLATFORM must be one of "
                    f"{[p.value for p in PlatformFamily]}, got '{platform_raw}'"
                )

        binpaths_raw = os.environ.get("SEN2PREP_BINPATHS")
        if binpaths_raw:
            kwargs["binpaths_path"] = Path(os.path.expandvars(binpaths_raw)).expanduser()

        search_paths = _split_paths(os.environ.get("SEN2PREP_SEARCH_PATHS"))
        if search_paths is not None:
            kwargs["search_paths"] = search_paths

        scan_roots = _split_paths(os.environ.get("SEN2PREP_SCAN_ROOTS"))
        if scan_roots is not None:
            kwargs["scan_roots"] = scan_roots

        timeout_raw = os.environ.get("SEN2PREP_TOOL_TIMEOUT")
        if timeout_raw:
            try:
                kwargs["tool_timeout"] = float(timeout_raw)
            except ValueError:
                raise ConfigurationError(
                    f"SEN2PREP_TOOL_TIMEOUT must be a number of seconds, got '{timeout_raw}'"
                )

        install_command = os.environ.get("SEN2PREP_INSTALL_COMMAND")
        if install_command:
            kwargs["install_command"] = install_command

        return cls(**kwargs)
