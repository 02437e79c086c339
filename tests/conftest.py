"""
Shared fixtures: project root on sys.path and an isolated SEN2PREP_* environment.

Sets up the test environment so all production code can be imported and
run without GDAL, wget or aria2c installed and without touching the
user's real binary path store.
"""

import os
import stat
import sys

import pytest

# Add project root to sys.path so 'core', 'services', 'config', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


SEN2PREP_ENV_VARS = [
    "SEN2PREP_BINPATHS",
    "SEN2PREP_SEARCH_PATHS",
    "SEN2PREP_SCAN_ROOTS",
    "SEN2PREP_TOOL_TIMEOUT",
    "SEN2PREP_PLATFORM",
    "SEN2PREP_INSTALL_COMMAND",
    "SEN2PREP_BASELINE_PRODUCTS",
    "SEN2PREP_ONLINE_DAYS",
    "SEN2PREP_DEBUG",
]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """
    Clear SEN2PREP_* variables and point the store at a temp file.

    The config singleton is reset before and after every test.
    """
    from config import reset_config

    for var in SEN2PREP_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("SEN2PREP_BINPATHS", str(tmp_path / "store" / "paths.json"))
    reset_config()
    yield monkeypatch
    reset_config()


@pytest.fixture
def make_executable(tmp_path):
    """Factory fixture: create an executable file under tmp_path."""
    def _make(relative: str, executable: bool = True) -> str:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("#!/bin/sh\nexit 0\n")
        mode = path.stat().st_mode
        if executable:
            path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        else:
            path.chmod(mode & ~(stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))
        return str(path)
    return _make
