# ============================================================================
# GDAL INTROSPECTION ADAPTER
# ============================================================================
# STATUS: Adapter - wraps gdalinfo --version / --formats
# PURPOSE: Ask a GDAL installation for its version and driver list
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: GdalIntrospector, parse_gdal_version, parse_gdal_formats
# ============================================================================
"""
GDAL Introspection Adapter.

Black-box queries against one gdalinfo binary:

    $ gdalinfo --version
    GDAL 3.6.2, released 2023/01/02

    $ gdalinfo --formats
    Supported Formats:
      VRT -raster,multidimensional raster- (rw+v): Virtual Raster
      GTiff -raster- (rw+vs): GeoTIFF
      JP2OpenJPEG -raster,vector- (rwv): JPEG-2000 driver based on OpenJPEG library

Every call is bounded by a timeout. A gdalinfo that hangs, crashes or
cannot be executed yields None / [] rather than an exception: to the
resolver it is simply not a working installation.
"""

import re
import subprocess
from typing import List, Optional

from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.ADAPTER, "gdal_introspection")

_VERSION_PATTERN = re.compile(r"^GDAL ([0-9]+(?:\.[0-9]+)*)")
_FORMAT_PATTERN = re.compile(r"^\s+([A-Za-z0-9_.]+)\s+-")


def parse_gdal_version(output: str) -> Optional[str]:
    """
    Extract the dotted version from `gdalinfo --version` output.

    Example:
        >>> parse_gdal_version("GDAL 3.6.2, released 2023/01/02")
        '3.6.2'
    """
    match = _VERSION_PATTERN.match((output or "").strip())
    return match.group(1) if match else None


def parse_gdal_formats(output: str) -> List[str]:
    """Driver short names from `gdalinfo --formats` output."""
    drivers = []
    for line in (output or "").splitlines():
        match = _FORMAT_PATTERN.match(line)
        if match:
            drivers.append(match.group(1))
    return drivers


class GdalIntrospector:
    """
    Version and driver queries for one GDAL installation.

    Results are cached per instance: each query runs gdalinfo at most once.
    """

    def __init__(self, gdalinfo_path: str, timeout: float = 30.0):
        self.gdalinfo_path = gdalinfo_path
        self.timeout = timeout
        self._version: Optional[str] = None
        self._version_checked = False
        self._formats: Optional[List[str]] = None

    def _run(self, *args: str) -> Optional[str]:
        cmd = [self.gdalinfo_path, *args]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"{' '.join(cmd)} timed out after {self.timeout}s")
            return None
        except OSError as e:
            logger.warning(f"{' '.join(cmd)} could not be executed: {e}")
            return None

        if result.returncode != 0:
            logger.warning(
                f"{' '.join(cmd)} exited with {result.returncode}: {result.stderr.strip()[:200]}"
            )
            return None
        return result.stdout

    def version(self) -> Optional[str]:
        """Dotted GDAL version, or None when gdalinfo does not answer."""
        if not self._version_checked:
            self._version_checked = True
            output = self._run("--version")
            self._version = parse_gdal_version(output) if output is not None else None
            if output is not None and self._version is None:
                logger.warning(f"Unrecognized gdalinfo --version output: {output.strip()[:100]}")
        return self._version

    def formats(self) -> List[str]:
        """Driver short names supported by this installation."""
        if self._formats is None:
            output = self._run("--formats")
            self._formats = parse_gdal_formats(output) if output is not None else []
        return self._formats

    def supports(self, driver: str) -> bool:
        return driver in self.formats()
