# ============================================================================
# EXCEPTIONS
# ============================================================================
# STATUS: Shared - used by normalizer, resolvers and CLI
# PURPOSE: Exception hierarchy separating contract violations from expected
#          parameter and dependency failures
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: ContractViolationError, BusinessLogicError, ParameterError,
#          ShapeError, RangeError, TypeCoercionError, DependencyError,
#          DependencyMissingError, VersionError, FeatureGapError,
#          DependencyDegraded, ConfigurationError
# DEPENDENCIES: None (standard library only)
# ============================================================================

"""
Custom Exception Hierarchy

Distinguishes between:
1. Contract Violations (programming bugs that need fixing)
2. Business Logic Failures (bad job parameters, missing or outdated tools)

Parameter failures and dependency failures have separate bases so callers
can tell "fix your parameter file" apart from "fix your installation".
"""


class ContractViolationError(TypeError):
    """
    Raised when component contracts are violated (programming bugs).

    Examples:
        - Unknown normalization mode passed to the normalizer
        - Messenger called with a severity that is not a Severity
    """
    pass


class BusinessLogicError(Exception):
    """
    Base class for expected runtime failures.

    Subclasses represent specific categories of failures. Every instance
    carries a human-readable message and an optional remediation hint.
    """

    def __init__(self, message: str = "", hint: str = ""):
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} {self.hint}"
        return self.message


# ============================================================================
# PARAMETER ERRORS
# ============================================================================

class ParameterError(BusinessLogicError):
    """Job parameter set is invalid."""
    pass


class ShapeError(ParameterError):
    """
    Malformed or missing input record.

    Examples:
        - Parameter file path does not exist
        - Input is neither a mapping nor a path
        - A field has the wrong structure (list expected, got a number)
    """
    pass


class RangeError(ParameterError):
    """
    Value outside its allowed bounds.

    Examples:
        - timewindow with more than two elements
        - timewindow start after end
    """
    pass


class TypeCoercionError(ParameterError):
    """
    Value cannot be coerced to the required semantic type.

    Examples:
        - timewindow element "last tuesday" is not a date
    """
    pass


# ============================================================================
# DEPENDENCY ERRORS
# ============================================================================

class DependencyError(BusinessLogicError):
    """External executable problem."""
    pass


class DependencyMissingError(DependencyError):
    """A mandatory external tool is not installed or not on the search path."""
    pass


class VersionError(DependencyError):
    """The toolkit is installed but older than the minimum version."""
    pass


class FeatureGapError(DependencyError):
    """
    The toolkit is installed but lacks a required capability.

    Remediation differs from DependencyMissingError: the user needs a codec
    plugin (JP2OpenJPEG), not a fresh installation.
    """
    pass


class DependencyDegraded(UserWarning):
    """
    An optional tool is missing.

    Warning category, never fatal: downloads still work, only slower
    (e.g. without aria2 multi-connection downloads).
    """
    pass


class ConfigurationError(Exception):
    """
    System configuration error.

    Examples:
        - SEN2PREP_TOOL_TIMEOUT is not a number
        - Binary path store is not a JSON object
    """
    pass


__all__ = [
    'ContractViolationError',
    'BusinessLogicError',
    'ParameterError',
    'ShapeError',
    'RangeError',
    'TypeCoercionError',
    'DependencyError',
    'DependencyMissingError',
    'VersionError',
    'FeatureGapError',
    'DependencyDegraded',
    'ConfigurationError',
]
