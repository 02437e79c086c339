"""
Core Components.

Structure:
    models/: Pure data structures (no business logic)
    errors.py: Error codes shared by reports and the CLI

Exports:
    models: Data model subpackage
    ErrorCode: Standardized error codes
"""

from . import models
from .errors import ErrorCode, create_error_response, error_code_for, get_exit_code

__all__ = [
    'models',
    'ErrorCode',
    'create_error_response',
    'error_code_for',
    'get_exit_code',
]
