# ============================================================================
# GDAL CAPABILITY RESOLVER
# ============================================================================
# STATUS: Service - raster toolkit discovery and verification
# PURPOSE: Find a GDAL >= 2.1.3 with JP2OpenJPEG and persist its tool paths
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: GdalResolver, osgeo4w_hint
# DEPENDENCIES: packaging (version comparison)
# ============================================================================
"""
GDAL Capability Resolver.

Resolution stages:
    1. Cached: store has gdalinfo and force=False -> success, no search
    2. Fast lookup: PATH + search paths, pick the newest usable install
    3. Full scan: only if stage 2 found nothing usable (announced as slow)
    4. Verify: version >= 2.1.3, then JP2OpenJPEG support
    5. Persist: every GDAL binary and script path of the chosen install

Failure kinds stay distinct because the fixes differ:
    DependencyMissingError  install GDAL
    VersionError            update GDAL
    FeatureGapError         add the OpenJPEG driver

abort=True makes any failure raise; abort=False reports a warning and
returns a falsy CapabilityReport so the caller can skip GDAL-based steps.

Usage:
    resolver = GdalResolver(config.tools, BinaryPathStore(config.tools.binpaths_path))
    if not resolver.resolve(abort=False):
        logger.warning("Processing disabled")
"""

import os
import platform
from typing import Callable, Dict, List, Optional, Tuple, Type

from packaging.version import InvalidVersion, Version

from config import PlatformFamily, ToolSearchConfig, ToolkitDefaults
from core.models import CapabilityReport, Severity, ToolRecord, ToolStatus, Verdict
from exceptions import DependencyError, DependencyMissingError, FeatureGapError, VersionError
from infrastructure import BinaryPathStore
from util_logger import LoggerFactory, ComponentType

from .gdal_introspection import GdalIntrospector
from .messaging import Messenger, translate as _
from .tool_locator import ToolLocator

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "gdal_resolver")

IntrospectorFactory = Callable[[str], GdalIntrospector]

OSGEO4W_GDAL_PACKAGES = '"gdal-python" and "openjpeg"'


def osgeo4w_hint(packages: str) -> str:
    """Windows remediation hint pointing at the OSGeo4W installer."""
    arch = "_64" if platform.machine().lower() in ("amd64", "x86_64") else ""
    url = ToolkitDefaults.OSGEO4W_INSTALLER_URL.format(arch=arch)
    return _(
        "We recommend to use the OSGeo4W installer ({url}), to choose the "
        "\"Advanced install\" and to check the packages {packages}."
    ).format(url=url, packages=packages)


class GdalResolver:
    """
    Resolves the GDAL installation used by the processing scripts.

    Args:
        config: Tool search configuration
        store: Binary path store
        locator: Executable finder (defaults to ToolLocator(config))
        introspector_factory: Builds a GdalIntrospector for a gdalinfo path
        messenger: report() channel (defaults to a logging Messenger)
        min_version: Minimum GDAL version
        required_driver: Driver that must be available
    """

    def __init__(
        self,
        config: ToolSearchConfig,
        store: BinaryPathStore,
        locator: Optional[ToolLocator] = None,
        introspector_factory: Optional[IntrospectorFactory] = None,
        messenger: Optional[Messenger] = None,
        min_version: str = ToolkitDefaults.MIN_VERSION,
        required_driver: str = ToolkitDefaults.REQUIRED_DRIVER
    ):
        self.config = config
        self.store = store
        self.locator = locator or ToolLocator(config)
        self.introspector_factory = introspector_factory or (
            lambda path: GdalIntrospector(path, timeout=config.tool_timeout)
        )
        self.messenger = messenger or Messenger(logger)
        self.min_version = Version(min_version)
        self.required_driver = required_driver
        self._introspectors: Dict[str, GdalIntrospector] = {}

    # ------------------------------------------------------------------
    # candidate handling
    # ------------------------------------------------------------------

    def _introspect(self, gdalinfo_path: str) -> GdalIntrospector:
        if gdalinfo_path not in self._introspectors:
            self._introspectors[gdalinfo_path] = self.introspector_factory(gdalinfo_path)
        return self._introspectors[gdalinfo_path]

    def _working(self, candidates: List[str]) -> List[str]:
        """Candidates whose gdalinfo answers --version."""
        return [c for c in candidates if self._introspect(c).version() is not None]

    def _version(self, candidate: str) -> Optional[Version]:
        try:
            return Version(self._introspect(candidate).version())
        except (InvalidVersion, TypeError):
            return None

    def _rank(self, candidate: str) -> Tuple[bool, bool, Version]:
        """Sort key: usable first, then with the driver, then newest."""
        version = self._version(candidate)
        has_driver = self._introspect(candidate).supports(self.required_driver)
        current = version is not None and version >= self.min_version
        return current and has_driver, has_driver, version or Version("0")

    def _best(self, candidates: List[str]) -> Optional[str]:
        """Highest ranked candidate; PATH order breaks ties."""
        if not candidates:
            return None
        return max(candidates, key=self._rank)

    def _locate(self) -> Optional[str]:
        """
        Fast lookup, then full scan if no usable installation was found.

        Returns:
            Best working candidate, None when no gdalinfo answers --version
        """
        binary = ToolkitDefaults.INTROSPECTION_BINARY
        working = self._working(self.locator.fast_lookup(binary))
        chosen = self._best(working)
        if chosen is not None and self._rank(chosen)[0]:
            return chosen

        self.messenger.report(
            Severity.MESSAGE,
            _("GDAL was not found in the system PATH, search in the full system "
              "(this could take some time, please wait)...")
        )
        scanned = self._working(
            [c for c in self.locator.full_scan(binary) if c not in working]
        )
        return self._best(working + scanned)

    # ------------------------------------------------------------------
    # persistence
    # ------------------------------------------------------------------

    def _tool_record(self, name: str, path: str, prefix: Optional[str] = None) -> ToolRecord:
        path = os.path.normpath(os.path.abspath(path))
        if not os.path.isfile(path):
            logger.warning(f"GDAL tool '{name}' not found at {path}")
            return ToolRecord.missing(name)
        return ToolRecord(name=name, path=path, prefix=prefix)

    def derive_records(self, gdalinfo_path: str) -> Dict[str, ToolRecord]:
        """
        Paths of every GDAL tool next to `gdalinfo_path`.

        On Windows the python scripts are run through the interpreter shipped
        in the same directory, which is recorded as "python" too.
        """
        gdal_dir = os.path.dirname(os.path.abspath(gdalinfo_path))
        suffix = self.config.exe_suffix
        records: Dict[str, ToolRecord] = {}

        for name in ToolkitDefaults.BINARIES:
            records[name] = self._tool_record(name, os.path.join(gdal_dir, name + suffix))

        prefix = None
        if self.config.platform_family == PlatformFamily.WINDOWS:
            python = self._tool_record("python", os.path.join(gdal_dir, "python" + suffix))
            records["python"] = python
            prefix = python.path or None

        for name in ToolkitDefaults.SCRIPTS:
            records[name] = self._tool_record(name, os.path.join(gdal_dir, name + ".py"), prefix)

        return records

    # ------------------------------------------------------------------
    # resolution
    # ------------------------------------------------------------------

    def _fail(
        self,
        error_cls: Type[DependencyError],
        message: str,
        hint: str,
        abort: bool,
        version: Optional[str] = None,
        found: bool = False
    ) -> CapabilityReport:
        severity = Severity.ERROR if abort else Severity.WARNING
        self.messenger.report(severity, message, error_cls=error_cls, hint=hint)
        status = ToolStatus.FOUND if found else ToolStatus.MISSING
        return CapabilityReport(
            verdict=Verdict.FAIL,
            statuses={ToolkitDefaults.INTROSPECTION_BINARY: status},
            missing=[] if found else [ToolkitDefaults.INTROSPECTION_BINARY],
            error_type=error_cls.__name__,
            message=f"{message} {hint}".strip(),
            version=version
        )

    def resolve(self, abort: bool = True, force: bool = False) -> CapabilityReport:
        """
        Find, verify and persist a GDAL installation.

        Args:
            abort: Raise on failure (True) or return a falsy report (False)
            force: Search again even if a path is already stored

        Returns:
            CapabilityReport (truthy on success)

        Raises:
            DependencyMissingError, VersionError, FeatureGapError: when abort=True
        """
        binary = ToolkitDefaults.INTROSPECTION_BINARY
        stored = self.store.load()

        cached = stored.get(binary)
        if not force and cached is not None and cached.found:
            logger.debug(f"GDAL is already set ({cached.path}); use force=True to reconfigure it")
            gdal_records = {
                name: record for name, record in stored.items()
                if name in ToolkitDefaults.BINARIES or name in ToolkitDefaults.SCRIPTS
            }
            return CapabilityReport(
                verdict=Verdict.PASS,
                statuses={binary: ToolStatus.FOUND},
                records=gdal_records,
                message=_("GDAL is already set; to reconfigure it, set force = True.")
            )

        self.messenger.report(Severity.MESSAGE, _("Searching for a valid GDAL installation..."))
        candidate = self._locate()
        windows = self.config.platform_family == PlatformFamily.WINDOWS

        if candidate is None:
            return self._fail(
                DependencyMissingError,
                _("GDAL was not found, please install it."),
                osgeo4w_hint(OSGEO4W_GDAL_PACKAGES) if windows and abort else "",
                abort
            )

        introspector = self._introspect(candidate)
        version_str = introspector.version()

        try:
            version = Version(version_str)
        except InvalidVersion:
            version = None
        if version is None or version < self.min_version:
            return self._fail(
                VersionError,
                _("GDAL version must be at least {min_version}. Please update it.").format(
                    min_version=self.min_version
                ),
                _("Found version {version} at {path}.").format(version=version_str, path=candidate),
                abort,
                version=version_str,
                found=True
            )

        if not introspector.supports(self.required_driver):
            hint = _("Please install {driver} support and recompile GDAL.").format(
                driver=self.required_driver
            )
            if windows and abort:
                hint = f"{hint} {osgeo4w_hint(OSGEO4W_GDAL_PACKAGES)}"
            return self._fail(
                FeatureGapError,
                _("Your local GDAL installation does not support JPEG2000 ({driver}) format.").format(
                    driver=self.required_driver
                ),
                hint,
                abort,
                version=version_str,
                found=True
            )

        gdal_records = self.derive_records(candidate)
        stored.update(gdal_records)
        self.store.save(stored)

        self.messenger.report(
            Severity.MESSAGE,
            _("GDAL version in use: {version}").format(version=version_str)
        )
        return CapabilityReport(
            verdict=Verdict.PASS,
            statuses={
                name: ToolStatus.FOUND if record.found else ToolStatus.MISSING
                for name, record in gdal_records.items()
            },
            records=gdal_records,
            version=version_str
        )
