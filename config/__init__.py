# ============================================================================
# CONFIG PACKAGE INIT
# ============================================================================
# STATUS: Configuration - package exports and singleton
# PURPOSE: Configuration package exports
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: AppConfig, ToolSearchConfig, NormalizerConfig, PlatformFamily,
#          get_config, reset_config, debug_config
# DEPENDENCIES: pydantic
# ============================================================================

"""
Configuration Package - Domain-Specific Configuration Modules

Structure:
    config/
    ├── __init__.py              # This file - exports and singleton
    ├── app_config.py            # Main config (composes domain configs)
    ├── toolkit_config.py        # External tool search settings
    ├── normalizer_config.py     # Job parameter normalization settings
    └── defaults.py              # Default value constants

Usage:
    from config import get_config
    config = get_config()
    timeout = config.tools.tool_timeout
"""

from typing import Optional

from .defaults import (
    ToolkitDefaults,
    DownloaderDefaults,
    StoreDefaults,
    NormalizerDefaults,
)
from .toolkit_config import PlatformFamily, ToolSearchConfig
from .normalizer_config import NormalizerConfig
from .app_config import AppConfig


# ============================================================================
# SINGLETON PATTERN
# ============================================================================

_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get global configuration singleton.

    Returns:
        AppConfig instance loaded from environment
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AppConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton (tests, env changes)."""
    global _config_instance
    _config_instance = None


def debug_config() -> dict:
    """
    Get configuration as a plain dict for debugging and the CLI.
    """
    config = get_config()
    return {
        'debug_mode': config.debug_mode,
        'tools': {
            'platform_family': config.tools.platform_family.value,
            'binpaths_path': str(config.tools.binpaths_path),
            'search_paths': list(config.tools.effective_search_paths),
            'scan_roots': list(config.tools.effective_scan_roots),
            'tool_timeout': config.tools.tool_timeout,
            'install_command': config.tools.install_command,
        },
        'normalizer': {
            'baseline_products': list(config.normalizer.baseline_products),
            'online_window_days': config.normalizer.online_window_days,
        },
    }


__all__ = [
    'AppConfig',
    'ToolSearchConfig',
    'NormalizerConfig',
    'PlatformFamily',
    'ToolkitDefaults',
    'DownloaderDefaults',
    'StoreDefaults',
    'NormalizerDefaults',
    'get_config',
    'reset_config',
    'debug_config',
]
