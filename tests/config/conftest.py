"""
Config test fixtures: environment cleared of SEN2PREP_* variables.
"""

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every env var the config modules read, for isolation."""
    env_vars_to_clear = [
        "SEN2PREP_BINPATHS", "SEN2PREP_SEARCH_PATHS", "SEN2PREP_SCAN_ROOTS",
        "SEN2PREP_TOOL_TIMEOUT", "SEN2PREP_PLATFORM", "SEN2PREP_INSTALL_COMMAND",
        "SEN2PREP_BASELINE_PRODUCTS", "SEN2PREP_ONLINE_DAYS", "SEN2PREP_DEBUG",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
