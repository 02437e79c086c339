# ============================================================================
# DOWNLOADER DEPENDENCY RESOLVER
# ============================================================================
# STATUS: Service - python/wget/aria2c discovery
# PURPOSE: Resolve downloader dependencies with graduated severity
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: DownloaderResolver
# ============================================================================
"""
Downloader Dependency Resolver.

The Theia download scripts need python and wget; aria2c (multi-connection
downloads) is optional and only requested when with_aria2=True.

Severity is graduated:
    mandatory tool missing  -> error (DependencyMissingError)
    only optional missing   -> warning (DependencyDegraded), verdict DEGRADED

When the injected installer can install automatically (Windows), missing
installable tools are installed and looked up again before severity is
decided. The decision itself does not depend on the platform.
"""

import warnings
from typing import Dict, List, Optional, Tuple

from config import DownloaderDefaults, PlatformFamily, ToolSearchConfig
from core.models import CapabilityReport, Severity, ToolRecord, ToolStatus, Verdict
from exceptions import DependencyDegraded, DependencyMissingError
from infrastructure import BinaryPathStore
from util_logger import LoggerFactory, ComponentType

from .gdal_resolver import osgeo4w_hint
from .installers import Installer, installable, select_installer
from .messaging import Messenger, translate as _
from .tool_locator import ToolLocator

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "downloader_resolver")

# Executable names tried for a tool, in order
ALTERNATIVE_NAMES: Dict[str, Tuple[str, ...]] = {
    "python": ("python", "python3"),
}


class DownloaderResolver:
    """
    Resolves the downloader dependencies.

    Args:
        config: Tool search configuration
        store: Binary path store
        locator: Executable finder (defaults to ToolLocator(config))
        installer: Installer capability (defaults to select_installer(config))
        messenger: report() channel (defaults to a logging Messenger)
    """

    def __init__(
        self,
        config: ToolSearchConfig,
        store: BinaryPathStore,
        locator: Optional[ToolLocator] = None,
        installer: Optional[Installer] = None,
        messenger: Optional[Messenger] = None
    ):
        self.config = config
        self.store = store
        self.locator = locator or ToolLocator(config)
        self.installer = installer or select_installer(config)
        self.messenger = messenger or Messenger(logger)

    @staticmethod
    def requested_tools(with_aria2: bool = DownloaderDefaults.WITH_ARIA2) -> Tuple[List[str], List[str]]:
        """(mandatory, optional) tool names for this request."""
        mandatory = list(DownloaderDefaults.MANDATORY_TOOLS)
        optional = list(DownloaderDefaults.OPTIONAL_TOOLS) if with_aria2 else []
        return mandatory, optional

    def _search(self, tool: str) -> ToolRecord:
        for name in ALTERNATIVE_NAMES.get(tool, (tool,)):
            path = self.locator.find(name)
            if path:
                return ToolRecord(name=tool, path=path)
        return ToolRecord.missing(tool)

    def _lookup(self, tool: str, stored: Dict[str, ToolRecord]) -> ToolRecord:
        """Stored path if still valid, otherwise a fresh search."""
        record = stored.get(tool)
        if record is not None and record.found and record.is_valid():
            return record
        if record is not None and record.found:
            logger.info(f"Stored path for '{tool}' is stale: {record.path}")
        return self._search(tool)

    def resolve(self, with_aria2: bool = DownloaderDefaults.WITH_ARIA2, abort: bool = True) -> CapabilityReport:
        """
        Resolve python, wget and optionally aria2c.

        Args:
            with_aria2: Also request aria2c (optional dependency)
            abort: Raise when a mandatory tool is missing (True) or return a
                   falsy report with a warning (False)

        Returns:
            CapabilityReport; verdict DEGRADED when only optional tools miss

        Raises:
            DependencyMissingError: mandatory tool missing and abort=True
        """
        mandatory, optional = self.requested_tools(with_aria2)
        dependencies = mandatory + optional

        stored = self.store.load()
        resolved = {tool: self._lookup(tool, stored) for tool in dependencies}
        missing = [tool for tool in dependencies if not resolved[tool].found]

        if missing and self.installer.auto_install:
            for tool in missing:
                if not installable(tool):
                    continue
                path = self.installer.ensure_installed(tool)
                resolved[tool] = ToolRecord(name=tool, path=path) if path else self._search(tool)
            missing = [tool for tool in dependencies if not resolved[tool].found]

        changed = {
            tool: record for tool, record in resolved.items()
            if stored.get(tool) is None or stored[tool].invocation != record.invocation
        }
        if changed:
            stored.update(changed)
            self.store.save(stored)

        report = CapabilityReport(
            verdict=Verdict.PASS,
            statuses={
                tool: ToolStatus.FOUND if record.found else ToolStatus.MISSING
                for tool, record in resolved.items()
            },
            records=resolved,
            missing=missing
        )
        if not missing:
            logger.info(f"All downloader dependencies found: {', '.join(dependencies)}")
            return report

        message = _(
            "Some dependencies ({missing}) were not found in your system; "
            "please install them or update your system PATH."
        ).format(missing=", ".join(missing))
        hint = ""
        if "python" in missing and self.config.platform_family == PlatformFamily.WINDOWS:
            hint = osgeo4w_hint("\"gdal-python\"")

        mandatory_missing = [tool for tool in missing if tool in mandatory]
        report.message = f"{message} {hint}".strip()

        if mandatory_missing:
            severity = Severity.ERROR if abort else Severity.WARNING
            self.messenger.report(severity, message, error_cls=DependencyMissingError, hint=hint)
            report.verdict = Verdict.FAIL
            report.error_type = DependencyMissingError.__name__
            return report

        self.messenger.report(Severity.WARNING, message, hint=hint)
        warnings.warn(report.message, DependencyDegraded, stacklevel=2)
        report.verdict = Verdict.DEGRADED
        report.error_type = DependencyDegraded.__name__
        return report
