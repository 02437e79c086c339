"""
GdalResolver tests.

Locator and introspection are faked: no GDAL installation is needed, but
derived tool paths are real files so the persisted store can be checked.
"""

import json
import os

import pytest

from config import ToolkitDefaults
from core.models import ToolRecord, Verdict
from exceptions import DependencyMissingError, FeatureGapError, VersionError
from services.gdal_resolver import GdalResolver
from tests.factories.fakes import FakeIntrospector, FakeLocator, introspector_factory

JP2 = ToolkitDefaults.REQUIRED_DRIVER


def make_gdal_install(make_executable, folder: str, windows: bool = False, complete: bool = True) -> str:
    """Create a fake GDAL bin folder; returns the gdalinfo path."""
    suffix = ".exe" if windows else ""
    gdalinfo = make_executable(f"{folder}/gdalinfo{suffix}")
    if complete:
        for name in ToolkitDefaults.BINARIES:
            make_executable(f"{folder}/{name}{suffix}")
        for name in ToolkitDefaults.SCRIPTS:
            make_executable(f"{folder}/{name}.py")
        if windows:
            make_executable(f"{folder}/python.exe")
    return gdalinfo


def build_resolver(config, store, messenger, locator, introspectors):
    return GdalResolver(
        config,
        store,
        locator=locator,
        introspector_factory=introspector_factory(introspectors),
        messenger=messenger,
    )


class TestCachedResolution:

    def test_stored_path_returns_success_without_scan(self, unix_config, store, messenger):
        store.save({"gdalinfo": ToolRecord(name="gdalinfo", path="/opt/gdal/bin/gdalinfo")})
        locator = FakeLocator()
        resolver = build_resolver(unix_config, store, messenger, locator, {})

        report = resolver.resolve(abort=True, force=False)

        assert report
        assert report.verdict == Verdict.PASS
        assert locator.scan_count == 0
        assert locator.fast_count == 0

    def test_empty_stored_path_triggers_search(self, unix_config, store, messenger, make_executable):
        store.save({"gdalinfo": ToolRecord.missing("gdalinfo")})
        gdalinfo = make_gdal_install(make_executable, "gdal/bin")
        locator = FakeLocator(fast=[gdalinfo])
        resolver = build_resolver(
            unix_config, store, messenger, locator,
            {gdalinfo: FakeIntrospector("3.6.2", [JP2])}
        )

        report = resolver.resolve()

        assert report.version == "3.6.2"
        assert locator.fast_count == 1

    def test_force_searches_again(self, unix_config, store, messenger, make_executable):
        store.save({"gdalinfo": ToolRecord(name="gdalinfo", path="/old/gdalinfo")})
        gdalinfo = make_gdal_install(make_executable, "gdal/bin")
        locator = FakeLocator(fast=[gdalinfo])
        resolver = build_resolver(
            unix_config, store, messenger, locator,
            {gdalinfo: FakeIntrospector("3.6.2", [JP2])}
        )

        resolver.resolve(force=True)

        assert store.get("gdalinfo").path == os.path.abspath(gdalinfo)


class TestSearch:

    def test_fast_lookup_persists_all_tools(self, unix_config, store, messenger, make_executable):
        gdalinfo = make_gdal_install(make_executable, "gdal/bin")
        locator = FakeLocator(fast=[gdalinfo])
        resolver = build_resolver(
            unix_config, store, messenger, locator,
            {gdalinfo: FakeIntrospector("3.6.2", ["GTiff", JP2])}
        )

        report = resolver.resolve()

        assert report.verdict == Verdict.PASS
        assert locator.scan_count == 0
        records = store.load()
        gdal_dir = os.path.dirname(os.path.abspath(gdalinfo))
        for name in ToolkitDefaults.BINARIES:
            assert records[name].path == os.path.join(gdal_dir, name)
        for name in ToolkitDefaults.SCRIPTS:
            assert records[name].path == os.path.join(gdal_dir, name + ".py")
            assert records[name].prefix is None
        assert "GDAL version in use: 3.6.2" in [msg for _, msg in messenger.history]

    def test_missing_derived_tool_stored_empty(self, unix_config, store, messenger, make_executable):
        gdalinfo = make_gdal_install(make_executable, "gdal/bin", complete=False)
        locator = FakeLocator(fast=[gdalinfo])
        resolver = build_resolver(
            unix_config, store, messenger, locator,
            {gdalinfo: FakeIntrospector("3.6.2", [JP2])}
        )

        resolver.resolve()

        with open(store.path) as f:
            raw = json.load(f)
        assert raw["gdalinfo"] == os.path.abspath(gdalinfo)
        assert raw["gdalwarp"] == ""
        assert raw["gdal_calc"] == ""

    def test_full_scan_when_fast_lookup_lacks_driver(self, unix_config, store, messenger, make_executable):
        without_jp2 = make_gdal_install(make_executable, "old/bin")
        with_jp2 = make_gdal_install(make_executable, "root/opt/gdal/bin")
        locator = FakeLocator(fast=[without_jp2], scan=[with_jp2])
        resolver = build_resolver(
            unix_config, store, messenger, locator,
            {
                without_jp2: FakeIntrospector("3.6.2", ["GTiff"]),
                with_jp2: FakeIntrospector("3.4.1", [JP2]),
            }
        )

        report = resolver.resolve()

        assert report.version == "3.4.1"
        assert locator.scan_count == 1
        assert store.get("gdalinfo").path == os.path.abspath(with_jp2)
        assert any("this could take some time" in msg for _, msg in messenger.history)

    def test_newest_candidate_with_driver_wins(self, unix_config, store, messenger, make_executable):
        first = make_gdal_install(make_executable, "a/bin")
        second = make_gdal_install(make_executable, "b/bin")
        locator = FakeLocator(fast=[first, second])
        resolver = build_resolver(
            unix_config, store, messenger, locator,
            {
                first: FakeIntrospector("3.6.2", [JP2]),
                second: FakeIntrospector("3.8.0", [JP2]),
            }
        )

        report = resolver.resolve()

        assert report.version == "3.8.0"
        assert store.get("gdalinfo").path == os.path.abspath(second)

    def test_equal_candidates_keep_path_order(self, unix_config, store, messenger, make_executable):
        first = make_gdal_install(make_executable, "a/bin")
        second = make_gdal_install(make_executable, "b/bin")
        locator = FakeLocator(fast=[first, second])
        resolver = build_resolver(
            unix_config, store, messenger, locator,
            {
                first: FakeIntrospector("3.6.2", [JP2]),
                second: FakeIntrospector("3.6.2", [JP2]),
            }
        )

        resolver.resolve()

        assert store.get("gdalinfo").path == os.path.abspath(first)

    def test_old_install_on_path_does_not_hide_newer_one(self, unix_config, store, messenger, make_executable):
        old = make_gdal_install(make_executable, "old/bin")
        new = make_gdal_install(make_executable, "new/bin")
        locator = FakeLocator(fast=[old, new])
        resolver = build_resolver(
            unix_config, store, messenger, locator,
            {
                old: FakeIntrospector("2.0.0", [JP2]),
                new: FakeIntrospector("3.4.1", [JP2]),
            }
        )

        report = resolver.resolve(abort=True)

        assert report.version == "3.4.1"
        assert locator.scan_count == 0

    def test_full_scan_when_fast_lookup_is_too_old(self, unix_config, store, messenger, make_executable):
        old = make_gdal_install(make_executable, "old/bin")
        new = make_gdal_install(make_executable, "root/opt/gdal/bin")
        locator = FakeLocator(fast=[old], scan=[new])
        resolver = build_resolver(
            unix_config, store, messenger, locator,
            {
                old: FakeIntrospector("2.0.0", [JP2]),
                new: FakeIntrospector("3.4.1", [JP2]),
            }
        )

        report = resolver.resolve(abort=True)

        assert report.version == "3.4.1"
        assert locator.scan_count == 1
        assert store.get("gdalinfo").path == os.path.abspath(new)


class TestFailures:

    def test_not_found_raises_when_abort(self, unix_config, store, messenger):
        locator = FakeLocator()
        resolver = build_resolver(unix_config, store, messenger, locator, {})

        with pytest.raises(DependencyMissingError):
            resolver.resolve(abort=True)
        assert locator.scan_count == 1

    def test_not_found_returns_false_without_abort(self, unix_config, store, messenger):
        resolver = build_resolver(unix_config, store, messenger, FakeLocator(), {})

        report = resolver.resolve(abort=False)

        assert not report
        assert report.error_type == "DependencyMissingError"
        assert report.missing == ["gdalinfo"]
        assert len(messenger.warnings) == 1

    def test_unresponsive_candidate_counts_as_not_found(self, unix_config, store, messenger, make_executable):
        gdalinfo = make_gdal_install(make_executable, "gdal/bin")
        resolver = build_resolver(
            unix_config, store, messenger, FakeLocator(fast=[gdalinfo]),
            {gdalinfo: FakeIntrospector(None)}
        )

        with pytest.raises(DependencyMissingError):
            resolver.resolve()

    def test_old_version_raises_version_error(self, unix_config, store, messenger, make_executable):
        gdalinfo = make_gdal_install(make_executable, "gdal/bin")
        resolver = build_resolver(
            unix_config, store, messenger, FakeLocator(fast=[gdalinfo]),
            {gdalinfo: FakeIntrospector("2.0.0", [JP2])}
        )

        with pytest.raises(VersionError) as exc_info:
            resolver.resolve(abort=True)
        assert "2.1.3" in str(exc_info.value)

    def test_old_version_returns_false_without_abort(self, unix_config, store, messenger, make_executable):
        gdalinfo = make_gdal_install(make_executable, "gdal/bin")
        resolver = build_resolver(
            unix_config, store, messenger, FakeLocator(fast=[gdalinfo]),
            {gdalinfo: FakeIntrospector("2.0.0", [JP2])}
        )

        report = resolver.resolve(abort=False)

        assert not report
        assert report.error_type == "VersionError"
        assert report.version == "2.0.0"
        assert store.load() == {}

    def test_version_checked_before_driver(self, unix_config, store, messenger, make_executable):
        gdalinfo = make_gdal_install(make_executable, "gdal/bin")
        resolver = build_resolver(
            unix_config, store, messenger, FakeLocator(fast=[gdalinfo]),
            {gdalinfo: FakeIntrospector("2.0.0", ["GTiff"])}
        )

        with pytest.raises(VersionError):
            resolver.resolve()

    def test_minimum_version_accepted(self, unix_config, store, messenger, make_executable):
        gdalinfo = make_gdal_install(make_executable, "gdal/bin")
        resolver = build_resolver(
            unix_config, store, messenger, FakeLocator(fast=[gdalinfo]),
            {gdalinfo: FakeIntrospector("2.1.3", [JP2])}
        )

        assert resolver.resolve()

    def test_missing_driver_raises_feature_gap(self, unix_config, store, messenger, make_executable):
        gdalinfo = make_gdal_install(make_executable, "gdal/bin")
        resolver = build_resolver(
            unix_config, store, messenger, FakeLocator(fast=[gdalinfo]),
            {gdalinfo: FakeIntrospector("3.6.2", ["GTiff"])}
        )

        with pytest.raises(FeatureGapError) as exc_info:
            resolver.resolve(abort=True)
        assert JP2 in str(exc_info.value)

    def test_missing_driver_returns_false_without_abort(self, unix_config, store, messenger, make_executable):
        gdalinfo = make_gdal_install(make_executable, "gdal/bin")
        resolver = build_resolver(
            unix_config, store, messenger, FakeLocator(fast=[gdalinfo]),
            {gdalinfo: FakeIntrospector("3.6.2", ["GTiff"])}
        )

        report = resolver.resolve(abort=False)

        assert not report
        assert report.error_type == "FeatureGapError"
        assert len(messenger.warnings) == 1


class TestWindowsDerivation:

    def test_scripts_run_through_bundled_python(self, windows_config, store, messenger, make_executable):
        gdalinfo = make_gdal_install(make_executable, "OSGeo4W64/bin", windows=True)
        resolver = build_resolver(windows_config, store, messenger, FakeLocator(), {})

        records = resolver.derive_records(gdalinfo)

        gdal_dir = os.path.dirname(os.path.abspath(gdalinfo))
        python = os.path.join(gdal_dir, "python.exe")
        assert records["python"].path == python
        assert records["gdalwarp"].path == os.path.join(gdal_dir, "gdalwarp.exe")
        assert records["gdal_calc"].prefix == python
        assert records["gdal_calc"].command == [python, os.path.join(gdal_dir, "gdal_calc.py")]

    def test_pair_entries_round_trip_through_store(self, windows_config, store, messenger, make_executable):
        gdalinfo = make_gdal_install(make_executable, "OSGeo4W64/bin", windows=True)
        resolver = build_resolver(
            windows_config, store, messenger, FakeLocator(fast=[gdalinfo]),
            {gdalinfo: FakeIntrospector("3.6.2", [JP2])}
        )

        resolver.resolve()

        record = store.get("gdal_merge")
        assert record.prefix.endswith("python.exe")
        assert record.path.endswith("gdal_merge.py")
