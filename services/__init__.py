"""
Services Package - Capability Resolution and Parameter Normalization.

Everything a job needs before the download/processing scripts can run:

    GdalResolver          GDAL >= 2.1.3 with JP2OpenJPEG, tool paths persisted
    DownloaderResolver    python, wget (mandatory) and aria2c (optional)
    ParameterNormalizer   job parameters -> corrected JobConfig

Collaborators are injected, never looked up globally:

    ToolLocator           fast PATH lookup / full filesystem scan
    GdalIntrospector      gdalinfo --version / --formats
    Installer             selected once per platform by select_installer()
    Messenger             report(severity, message); ERROR raises

Example:
    from config import get_config
    from infrastructure import BinaryPathStore
    from services import GdalResolver, ParameterNormalizer

    config = get_config()
    store = BinaryPathStore(config.tools.binpaths_path)
    GdalResolver(config.tools, store).resolve(abort=True)
    job = ParameterNormalizer(config.normalizer).normalize("params.json", mode="error")
"""

from .messaging import Messenger, translate
from .tool_locator import ToolLocator
from .gdal_introspection import GdalIntrospector, parse_gdal_version, parse_gdal_formats
from .installers import (
    Installer,
    ManualInstaller,
    CommandInstaller,
    select_installer,
)
from .gdal_resolver import GdalResolver, osgeo4w_hint
from .downloader_resolver import DownloaderResolver
from .parameter_normalizer import (
    ParameterNormalizer,
    normalize_parameters,
    parse_rgb,
)

__all__ = [
    'Messenger',
    'translate',
    'ToolLocator',
    'GdalIntrospector',
    'parse_gdal_version',
    'parse_gdal_formats',
    'Installer',
    'ManualInstaller',
    'CommandInstaller',
    'select_installer',
    'GdalResolver',
    'osgeo4w_hint',
    'DownloaderResolver',
    'ParameterNormalizer',
    'normalize_parameters',
    'parse_rgb',
]
