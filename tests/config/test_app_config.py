"""
Environment-driven configuration tests.
"""

import os
from pathlib import Path

import pytest

from config import (
    AppConfig,
    NormalizerConfig,
    PlatformFamily,
    ToolSearchConfig,
    ToolkitDefaults,
    debug_config,
    get_config,
    reset_config,
)
from exceptions import ConfigurationError


class TestToolSearchConfig:

    def test_defaults(self, clean_env):
        config = ToolSearchConfig.from_environment()

        assert config.tool_timeout == ToolkitDefaults.TOOL_TIMEOUT_SECONDS
        assert config.binpaths_path == Path("~/.sen2prep/paths.json").expanduser()
        assert config.install_command is None

    def test_reads_environment(self, clean_env, tmp_path):
        clean_env.setenv("SEN2PREP_PLATFORM", "Windows")
        clean_env.setenv("SEN2PREP_BINPATHS", str(tmp_path / "paths.json"))
        clean_env.setenv("SEN2PREP_SEARCH_PATHS", os.pathsep.join(["/a", "/b"]))
        clean_env.setenv("SEN2PREP_TOOL_TIMEOUT", "2.5")
        clean_env.setenv("SEN2PREP_INSTALL_COMMAND", "choco install -y {tool}")

        config = ToolSearchConfig.from_environment()

        assert config.platform_family == PlatformFamily.WINDOWS
        assert config.exe_suffix == ".exe"
        assert config.binpaths_path == tmp_path / "paths.json"
        assert config.effective_search_paths == ("/a", "/b")
        assert config.tool_timeout == 2.5
        assert config.install_command == "choco install -y {tool}"

    def test_platform_defaults_for_search_locations(self):
        unix = ToolSearchConfig(platform_family=PlatformFamily.UNIX)
        windows = ToolSearchConfig(platform_family=PlatformFamily.WINDOWS)

        assert unix.effective_scan_roots == ToolkitDefaults.UNIX_SCAN_ROOTS
        assert windows.effective_scan_roots == ToolkitDefaults.WINDOWS_SCAN_ROOTS
        assert unix.exe_suffix == ""

    def test_unknown_platform_rejected(self, clean_env):
        clean_env.setenv("SEN2PREP_PLATFORM", "amiga")
        with pytest.raises(ConfigurationError):
            ToolSearchConfig.from_environment()

    def test_non_numeric_timeout_rejected(self, clean_env):
        clean_env.setenv("SEN2PREP_TOOL_TIMEOUT", "forever")
        with pytest.raises(ConfigurationError):
            ToolSearchConfig.from_environment()

    def test_config_is_frozen(self):
        config = ToolSearchConfig()
        with pytest.raises(Exception):
            config.tool_timeout = 1


class TestNormalizerConfig:

    def test_defaults(self, clean_env):
        config = NormalizerConfig.from_environment()
        assert config.baseline_products == ("SCL",)
        assert config.online_window_days == 90

    def test_reads_environment(self, clean_env):
        clean_env.setenv("SEN2PREP_BASELINE_PRODUCTS", "SCL, TCI")
        clean_env.setenv("SEN2PREP_ONLINE_DAYS", "30")

        config = NormalizerConfig.from_environment()

        assert config.baseline_products == ("SCL", "TCI")
        assert config.online_window_days == 30

    def test_non_numeric_days_rejected(self, clean_env):
        clean_env.setenv("SEN2PREP_ONLINE_DAYS", "ninety")
        with pytest.raises(ConfigurationError):
            NormalizerConfig.from_environment()


class TestAppConfigSingleton:

    def test_singleton_until_reset(self, clean_env):
        first = get_config()
        assert get_config() is first

        reset_config()
        assert get_config() is not first

    def test_debug_flag(self, clean_env):
        clean_env.setenv("SEN2PREP_DEBUG", "true")
        assert AppConfig.from_environment().debug_mode is True

    def test_debug_config_is_plain_dict(self, clean_env):
        clean_env.setenv("SEN2PREP_PLATFORM", "unix")
        reset_config()

        data = debug_config()

        assert data["tools"]["platform_family"] == "unix"
        assert data["normalizer"]["online_window_days"] == 90
