"""
Error Code Definitions and Classification.

Stable error codes for every failure kind, used in capability reports,
normalizer error reports and CLI exit codes.

Exports:
    ErrorCode: Standardized error codes enum
    error_code_for: Map an exception (or exception class) to its ErrorCode
    get_exit_code: CLI exit code for an ErrorCode
    create_error_response: Standardized error dict
"""

from enum import Enum
from typing import Any, Dict, Optional, Type, Union

from exceptions import (
    ConfigurationError,
    DependencyDegraded,
    DependencyMissingError,
    FeatureGapError,
    RangeError,
    ShapeError,
    TypeCoercionError,
    VersionError,
)


class ErrorCode(str, Enum):
    """
    Standardized error codes for all application errors.
    """

    # ========================================================================
    # PARAMETER ERRORS - user must fix the parameter file
    # ========================================================================

    PARAM_SHAPE = "PARAM_SHAPE"  # Malformed or missing record / field
    PARAM_RANGE = "PARAM_RANGE"  # Length or band index out of bounds
    PARAM_TYPE = "PARAM_TYPE"  # Value not coercible (non-date timewindow)

    # ========================================================================
    # DEPENDENCY ERRORS - user must fix the installation
    # ========================================================================

    DEPENDENCY_MISSING = "DEPENDENCY_MISSING"  # Mandatory tool absent
    DEPENDENCY_DEGRADED = "DEPENDENCY_DEGRADED"  # Optional tool absent (warning)
    VERSION_TOO_OLD = "VERSION_TOO_OLD"  # GDAL below minimum version
    FEATURE_GAP = "FEATURE_GAP"  # GDAL without JP2OpenJPEG

    # ========================================================================
    # GENERIC ERRORS
    # ========================================================================

    CONFIG_ERROR = "CONFIG_ERROR"  # Bad SEN2PREP_* environment
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"  # Unexpected exception


_EXCEPTION_CODES = (
    (ShapeError, ErrorCode.PARAM_SHAPE),
    (RangeError, ErrorCode.PARAM_RANGE),
    (TypeCoercionError, ErrorCode.PARAM_TYPE),
    (DependencyMissingError, ErrorCode.DEPENDENCY_MISSING),
    (DependencyDegraded, ErrorCode.DEPENDENCY_DEGRADED),
    (VersionError, ErrorCode.VERSION_TOO_OLD),
    (FeatureGapError, ErrorCode.FEATURE_GAP),
    (ConfigurationError, ErrorCode.CONFIG_ERROR),
)

_EXIT_CODES: Dict[ErrorCode, int] = {
    ErrorCode.PARAM_SHAPE: 2,
    ErrorCode.PARAM_RANGE: 2,
    ErrorCode.PARAM_TYPE: 2,
    ErrorCode.DEPENDENCY_MISSING: 3,
    ErrorCode.VERSION_TOO_OLD: 4,
    ErrorCode.FEATURE_GAP: 5,
    ErrorCode.DEPENDENCY_DEGRADED: 0,
    ErrorCode.CONFIG_ERROR: 6,
    ErrorCode.UNEXPECTED_ERROR: 1,
}


def error_code_for(error: Union[BaseException, Type[BaseException], None]) -> Optional[ErrorCode]:
    """
    Map an exception instance or class to its ErrorCode.

    Returns:
        ErrorCode, UNEXPECTED_ERROR for unknown exceptions, None for None

    Example:
        >>> error_code_for(VersionError)
        <ErrorCode.VERSION_TOO_OLD: 'VERSION_TOO_OLD'>
    """
    if error is None:
        return None
    error_cls = error if isinstance(error, type) else type(error)
    for exc_cls, code in _EXCEPTION_CODES:
        if issubclass(error_cls, exc_cls):
            return code
    return ErrorCode.UNEXPECTED_ERROR


def get_exit_code(error_code: Optional[ErrorCode]) -> int:
    """CLI exit code; 0 for no error and for warning-only codes."""
    if error_code is None:
        return 0
    return _EXIT_CODES.get(error_code, 1)


def create_error_response(
    error_code: ErrorCode,
    message: str,
    **kwargs: Any
) -> Dict[str, Any]:
    """
    Create a standardized error response dictionary.

    Example:
        >>> create_error_response(ErrorCode.FEATURE_GAP, "No JP2OpenJPEG", tool="gdalinfo")
        {'success': False, 'error': 'FEATURE_GAP', 'message': 'No JP2OpenJPEG',
         'exit_code': 5, 'tool': 'gdalinfo'}
    """
    return {
        "success": False,
        "error": error_code.value,
        "message": message,
        "exit_code": get_exit_code(error_code),
        **kwargs
    }
