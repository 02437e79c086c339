# ============================================================================
# ENVIRONMENT PREPARATION ORCHESTRATOR
# ============================================================================
# STATUS: Infrastructure - capability check coordination
# PURPOSE: Run the GDAL and downloader resolvers in order over one store
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: EnvironmentPreparer, prepare_environment
# ============================================================================
"""
Environment Preparation Orchestrator.

Runs the capability checks a processing job needs, in order, against a
single BinaryPathStore:

    1. GDAL (version, JP2OpenJPEG, tool paths)
    2. Downloaders (python, wget, aria2c)

With abort=True the first failure raises its DependencyError. With
abort=False every check runs and its result is recorded; the caller reads
PreparationResult.all_passed.

Usage:
    from startup import prepare_environment

    result = prepare_environment(abort=False)
    if not result.all_passed:
        print(result.critical_error)
"""

from typing import Optional

from config import AppConfig, DownloaderDefaults, get_config
from core.models import CapabilityReport, Verdict
from exceptions import ConfigurationError
from infrastructure import BinaryPathStore
from services import DownloaderResolver, GdalResolver, Messenger
from util_logger import LoggerFactory, ComponentType

from .state import CheckResult, PreparationResult

_logger = LoggerFactory.create_logger(ComponentType.SERVICE, "startup.orchestrator")


class EnvironmentPreparer:
    """
    Coordinates the capability resolvers.

    Args:
        config: Application config (defaults to get_config())
        store: Binary path store (defaults to the configured file)
        gdal_resolver: Injected GDAL resolver
        downloader_resolver: Injected downloader resolver
        messenger: Shared report() channel
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        store: Optional[BinaryPathStore] = None,
        gdal_resolver: Optional[GdalResolver] = None,
        downloader_resolver: Optional[DownloaderResolver] = None,
        messenger: Optional[Messenger] = None
    ):
        self.config = config or get_config()
        self.store = store or BinaryPathStore(self.config.tools.binpaths_path)
        self.messenger = messenger or Messenger(_logger)
        self.gdal_resolver = gdal_resolver or GdalResolver(
            self.config.tools, self.store, messenger=self.messenger
        )
        self.downloader_resolver = downloader_resolver or DownloaderResolver(
            self.config.tools, self.store, messenger=self.messenger
        )

    def _check(self, name: str, resolve) -> CheckResult:
        try:
            report: CapabilityReport = resolve()
        except ConfigurationError as e:
            _logger.error(f"{name} check could not run: {e}")
            return CheckResult(
                name=name,
                passed=False,
                verdict=Verdict.FAIL,
                error_type=type(e).__name__,
                error_message=str(e)
            )
        result = CheckResult.from_report(name, report)
        if result.verdict == Verdict.FAIL:
            _logger.warning(f"{name} check FAILED: {result.error_message}")
        elif result.verdict == Verdict.DEGRADED:
            _logger.warning(f"{name} check DEGRADED: {result.error_message}")
        else:
            _logger.info(f"{name} check passed")
        return result

    def prepare(
        self,
        abort: bool = True,
        force: bool = False,
        with_aria2: bool = DownloaderDefaults.WITH_ARIA2
    ) -> PreparationResult:
        """
        Run every capability check.

        Args:
            abort: Raise on the first failure (True) or record it (False)
            force: Search for GDAL again even if a path is stored
            with_aria2: Request aria2c as an optional downloader

        Returns:
            PreparationResult, finalized

        Raises:
            DependencyError: first failure, when abort=True
            ConfigurationError: unreadable store, when abort=True
        """
        _logger.info("=" * 70)
        _logger.info("ENVIRONMENT PREPARATION STARTING")
        _logger.info("=" * 70)

        result = PreparationResult()

        _logger.info("Phase 1: Resolving GDAL...")
        if abort:
            result.gdal = CheckResult.from_report(
                "gdal", self.gdal_resolver.resolve(abort=True, force=force)
            )
        else:
            result.gdal = self._check("gdal", lambda: self.gdal_resolver.resolve(abort=False, force=force))

        _logger.info("Phase 2: Resolving downloader tools...")
        if abort:
            result.downloaders = CheckResult.from_report(
                "downloaders", self.downloader_resolver.resolve(with_aria2=with_aria2, abort=True)
            )
        else:
            result.downloaders = self._check(
                "downloaders",
                lambda: self.downloader_resolver.resolve(with_aria2=with_aria2, abort=False)
            )

        result.finalize()

        _logger.info("=" * 70)
        if result.all_passed:
            _logger.info("ENVIRONMENT PREPARATION COMPLETE - All checks PASSED")
        else:
            failed = result.get_failed_checks()
            _logger.warning(f"ENVIRONMENT PREPARATION COMPLETE - {len(failed)} check(s) FAILED")
            _logger.warning(f"Failed: {[f.name for f in failed]}")
        _logger.info("=" * 70)
        return result


def prepare_environment(
    abort: bool = True,
    force: bool = False,
    with_aria2: bool = DownloaderDefaults.WITH_ARIA2,
    config: Optional[AppConfig] = None
) -> PreparationResult:
    """Resolve every external capability with the default collaborators."""
    return EnvironmentPreparer(config=config).prepare(abort=abort, force=force, with_aria2=with_aria2)


__all__ = ['EnvironmentPreparer', 'prepare_environment']
