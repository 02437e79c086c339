# ============================================================================
# PREPARATION STATE MODULE
# ============================================================================
# STATUS: Infrastructure - environment preparation results
# PURPOSE: Hold per-check results of an environment preparation run
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: CheckResult, PreparationResult
# ============================================================================
"""
Preparation State Module.

Stores the outcome of each capability check so the CLI can print a summary
and pick an exit code without re-running anything.

Exports:
    CheckResult: Dataclass for individual check results
    PreparationResult: Dataclass for overall preparation state

Usage:
    result = prepare_environment(abort=False)
    if not result.all_passed:
        for check in result.get_failed_checks():
            print(check.name, check.error_message)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from core.models import CapabilityReport, Verdict


@dataclass
class CheckResult:
    """
    Result of a single capability check.

    Attributes:
        name: Identifier for this check ("gdal", "downloaders")
        passed: False only when the check failed (a degraded check passes)
        verdict: PASS, DEGRADED or FAIL
        error_type: Exception class name of the failure kind
        error_message: Human-readable error description
        details: Tool statuses, version, missing tools
        timestamp: When this check was performed
    """
    name: str
    passed: bool
    verdict: Verdict = Verdict.PASS
    error_type: Optional[str] = None
    error_message: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @classmethod
    def from_report(cls, name: str, report: CapabilityReport) -> "CheckResult":
        details = {"statuses": {tool: status.value for tool, status in report.statuses.items()}}
        if report.version:
            details["version"] = report.version
        if report.missing:
            details["missing"] = list(report.missing)
        return cls(
            name=name,
            passed=report.ok,
            verdict=report.verdict,
            error_type=report.error_type,
            error_message=report.message if report.verdict != Verdict.PASS else None,
            details=details
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        result = {
            "name": self.name,
            "passed": self.passed,
            "verdict": self.verdict.value,
            "timestamp": self.timestamp
        }
        if self.error_type:
            result["error_type"] = self.error_type
        if self.error_message:
            result["error_message"] = self.error_message
        if self.details:
            result["details"] = self.details
        return result


@dataclass
class PreparationResult:
    """
    Overall state of one preparation run.

    Attributes:
        gdal: GDAL resolution result
        downloaders: Downloader resolution result
        complete: True when all checks have run (pass or fail)
        all_passed: True only if no check failed
        critical_error: First failure, for quick display
    """

    gdal: Optional[CheckResult] = None
    downloaders: Optional[CheckResult] = None

    complete: bool = False
    all_passed: bool = False
    critical_error: Optional[str] = None

    def _checks(self) -> List[CheckResult]:
        return [c for c in (self.gdal, self.downloaders) if c is not None]

    def get_failed_checks(self) -> List[CheckResult]:
        return [c for c in self._checks() if not c.passed]

    def get_degraded_checks(self) -> List[CheckResult]:
        return [c for c in self._checks() if c.verdict == Verdict.DEGRADED]

    def finalize(self) -> None:
        """Mark preparation as complete and compute all_passed."""
        self.complete = True
        performed = self._checks()

        if not performed:
            self.all_passed = False
            self.critical_error = "No capability checks were performed"
            return

        failed = self.get_failed_checks()
        self.all_passed = not failed
        if failed:
            first_fail = failed[0]
            self.critical_error = f"{first_fail.name}: {first_fail.error_message or first_fail.error_type}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "complete": self.complete,
            "all_passed": self.all_passed,
            "critical_error": self.critical_error,
            "checks": {
                "gdal": self.gdal.to_dict() if self.gdal else None,
                "downloaders": self.downloaders.to_dict() if self.downloaders else None,
            }
        }
