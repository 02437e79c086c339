"""
ToolLocator tests on a real temporary directory tree.
"""

import os

from config import PlatformFamily, ToolSearchConfig
from services.tool_locator import ToolLocator


class TestFastLookup:

    def test_finds_executable_in_search_path(self, unix_config, make_executable, monkeypatch):
        monkeypatch.setenv("PATH", "")
        wget = make_executable("bin/wget")

        locator = ToolLocator(unix_config)

        assert locator.fast_lookup("wget") == [os.path.abspath(wget)]
        assert locator.find("wget") == os.path.abspath(wget)
        assert locator.scan_count == 0

    def test_path_entries_come_first(self, unix_config, make_executable, monkeypatch):
        on_path = make_executable("path_dir/wget")
        in_search = make_executable("bin/wget")
        monkeypatch.setenv("PATH", os.path.dirname(on_path))

        assert ToolLocator(unix_config).fast_lookup("wget") == [on_path, in_search]

    def test_non_executable_ignored(self, unix_config, make_executable, monkeypatch):
        monkeypatch.setenv("PATH", "")
        make_executable("bin/wget", executable=False)

        assert ToolLocator(unix_config).find("wget") is None

    def test_windows_suffix_tried(self, tmp_path, make_executable, monkeypatch):
        monkeypatch.setenv("PATH", "")
        wget = make_executable("bin/wget.exe")
        config = ToolSearchConfig(
            platform_family=PlatformFamily.WINDOWS,
            search_paths=(str(tmp_path / "bin"),),
        )

        assert ToolLocator(config).find("wget") == os.path.abspath(wget)


class TestFullScan:

    def test_walks_scan_roots(self, unix_config, make_executable):
        deep = make_executable("root/opt/gdal/3.6/bin/gdalinfo")
        other = make_executable("root/usr/local/bin/gdalinfo")
        make_executable("root/usr/share/doc/gdalinfo", executable=False)

        locator = ToolLocator(unix_config)
        found = locator.full_scan("gdalinfo")

        assert sorted(found) == sorted([deep, other])
        assert locator.scan_count == 1

    def test_missing_root_skipped(self, tmp_path):
        config = ToolSearchConfig(
            platform_family=PlatformFamily.UNIX,
            scan_roots=(str(tmp_path / "does-not-exist"),),
        )
        locator = ToolLocator(config)

        assert locator.full_scan("gdalinfo") == []
        assert locator.scan_count == 1
