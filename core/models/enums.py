"""
Pure Enumeration Types for Core Models.

No business logic - pure type definitions only.

Exports:
    Severity: Message severity for the messaging collaborator
    NormalizeMode: How the normalizer reports violations
    ToolStatus: Per-tool resolution status
    Verdict: Overall capability verdict
    RgbSource: Atmospheric correction level of an RGB specifier
"""

from enum import Enum


class Severity(str, Enum):
    """
    Severity of a user-facing message.

    ERROR is fatal: reporting it unwinds the current operation.
    """

    MESSAGE = "message"
    WARNING = "warning"
    ERROR = "error"


class NormalizeMode(str, Enum):
    """
    How parameter violations are reported.

    - STRING: collect every violation, return them as an ErrorReport
    - ERROR: raise the first violation (fail-fast)
    - WARNING: log each violation as a warning and continue
    """

    STRING = "string"
    ERROR = "error"
    WARNING = "warning"


class ToolStatus(str, Enum):
    """Resolution status of one external tool."""

    FOUND = "found"
    MISSING = "missing"


class Verdict(str, Enum):
    """
    Overall outcome of a resolution pass.

    - PASS: everything requested works
    - DEGRADED: only optional tools are missing
    - FAIL: a mandatory tool is missing, too old or lacks a feature
    """

    PASS = "pass"
    DEGRADED = "degraded"
    FAIL = "fail"


class RgbSource(str, Enum):
    """Correction level encoded by the last letter of an RGB specifier."""

    TOA = "T"
    BOA = "B"
