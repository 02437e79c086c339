"""
Core Data Models Package.

Contains pure data structures without business logic.

Exports:
    Severity, NormalizeMode, ToolStatus, Verdict, RgbSource: Enums
    JobParameters, JobConfig: Job parameter schema (input / corrected)
    ParameterIssue, ErrorReport: Normalizer violations
    ToolRecord, CapabilityReport: Tool resolution results
"""

from .enums import (
    Severity,
    NormalizeMode,
    ToolStatus,
    Verdict,
    RgbSource,
)

from .job_config import (
    JobParameters,
    JobConfig,
    ParameterIssue,
    ErrorReport,
)

from .tool_record import (
    ToolRecord,
    CapabilityReport,
)

__all__ = [
    'Severity',
    'NormalizeMode',
    'ToolStatus',
    'Verdict',
    'RgbSource',
    'JobParameters',
    'JobConfig',
    'ParameterIssue',
    'ErrorReport',
    'ToolRecord',
    'CapabilityReport',
]
