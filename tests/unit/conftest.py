"""
Unit test fixtures: tool search configs, a temporary store and a messenger.
"""

import pytest

from config import PlatformFamily, ToolSearchConfig
from infrastructure import BinaryPathStore
from services.messaging import Messenger


@pytest.fixture
def unix_config(tmp_path):
    """Unix tool search config confined to tmp_path."""
    return ToolSearchConfig(
        platform_family=PlatformFamily.UNIX,
        binpaths_path=tmp_path / "paths.json",
        search_paths=(str(tmp_path / "bin"),),
        scan_roots=(str(tmp_path / "root"),),
    )


@pytest.fixture
def windows_config(tmp_path):
    """Windows tool search config confined to tmp_path."""
    return ToolSearchConfig(
        platform_family=PlatformFamily.WINDOWS,
        binpaths_path=tmp_path / "paths.json",
        search_paths=(str(tmp_path / "bin"),),
        scan_roots=(str(tmp_path / "root"),),
    )


@pytest.fixture
def store(tmp_path):
    return BinaryPathStore(tmp_path / "paths.json")


@pytest.fixture
def messenger():
    return Messenger()
