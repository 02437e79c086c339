# ============================================================================
# STARTUP MODULE
# ============================================================================
# STATUS: Infrastructure - environment preparation
# PURPOSE: Resolve external capabilities before a job runs
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================
"""
Startup Module.

Prepares the processing environment:
1. GDAL - version >= 2.1.3, JP2OpenJPEG driver, tool paths persisted
2. Downloaders - python and wget required, aria2c optional

Usage:
    from startup import prepare_environment

    result = prepare_environment(abort=False)
    if result.all_passed:
        # Run the download/processing scripts
        pass

Exports:
    prepare_environment: Main entry point
    EnvironmentPreparer: Orchestrator with injectable resolvers
    PreparationResult: Dataclass for overall preparation state
    CheckResult: Dataclass for individual check results
"""

from .state import CheckResult, PreparationResult
from .orchestrator import EnvironmentPreparer, prepare_environment

__all__ = [
    'prepare_environment',
    'EnvironmentPreparer',
    'PreparationResult',
    'CheckResult',
]
