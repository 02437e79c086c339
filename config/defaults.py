"""
Configuration Defaults - Single source of truth for all default values.

Organization:
    - ToolkitDefaults: GDAL discovery, minimum version, required driver
    - DownloaderDefaults: downloader dependencies (python, wget, aria2c)
    - StoreDefaults: binary path store location
    - NormalizerDefaults: job parameter normalization constants

Usage:
    from config.defaults import ToolkitDefaults

    # In Pydantic Field definitions:
    tool_timeout: float = Field(default=ToolkitDefaults.TOOL_TIMEOUT_SECONDS, ...)
"""


# =============================================================================
# RASTER TOOLKIT DEFAULTS
# =============================================================================

class ToolkitDefaults:
    """
    GDAL discovery and verification defaults.

    GDAL older than 2.1.3 cannot read the SAFE format, and Sentinel-2 bands
    are distributed as JPEG2000, hence the JP2OpenJPEG driver requirement.
    """

    MIN_VERSION = "2.1.3"
    REQUIRED_DRIVER = "JP2OpenJPEG"

    # Binary used for --version / --formats introspection and as store key
    INTROSPECTION_BINARY = "gdalinfo"

    # Standalone executables persisted after a successful resolution
    BINARIES = (
        "gdalbuildvrt",
        "gdal_translate",
        "gdalwarp",
        "gdaldem",
        "gdalinfo",
        "ogrinfo",
    )

    # Python script tools; on Windows they need the interpreter as prefix
    SCRIPTS = (
        "gdal_calc",
        "gdal_merge",
        "gdal_polygonize",
    )

    # External process calls (gdalinfo --version / --formats)
    TOOL_TIMEOUT_SECONDS = 30.0

    # Fast lookup: extra directories checked after PATH
    UNIX_SEARCH_PATHS = ("/usr/local/bin", "/usr/bin", "/opt/local/bin")
    WINDOWS_SEARCH_PATHS = ("C:\\OSGeo4W64\\bin", "C:\\OSGeo4W\\bin")

    # Full scan: filesystem roots walked when fast lookup fails
    UNIX_SCAN_ROOTS = ("/usr", "/opt")
    WINDOWS_SCAN_ROOTS = ("C:\\",)

    OSGEO4W_INSTALLER_URL = "http://download.osgeo.org/osgeo4w/osgeo4w-setup-x86{arch}.exe"


# =============================================================================
# DOWNLOADER DEFAULTS
# =============================================================================

class DownloaderDefaults:
    """Downloader dependencies of the Theia download scripts."""

    MANDATORY_TOOLS = ("python", "wget")
    OPTIONAL_TOOLS = ("aria2c",)

    # Tools an installer can fetch on its own; python needs a manual install
    INSTALLABLE_TOOLS = ("wget", "aria2c")

    WITH_ARIA2 = True


# =============================================================================
# STORE DEFAULTS
# =============================================================================

class StoreDefaults:
    """Binary path store location."""

    BINPATHS_FILE = "~/.sen2prep/paths.json"


# =============================================================================
# NORMALIZER DEFAULTS
# =============================================================================

class NormalizerDefaults:
    """Job parameter normalization constants."""

    # Online mode without a timewindow searches this many days back
    ONLINE_WINDOW_DAYS = 90

    # Scene classification layer; selecting only SCL does not justify masking
    BASELINE_PRODUCTS = ("SCL",)

    MASK_NONE = "none"

    # TOA bands 1-12; BOA lacks band 10 (cirrus)
    MIN_BAND = 1
    MAX_BAND = 12
    BOA_EXCLUDED_BANDS = (10,)
