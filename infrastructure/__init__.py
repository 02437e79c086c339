"""
Infrastructure Package.

Persistence adapters.

Exports:
    BinaryPathStore: JSON-file backed tool path cache
"""

from .binpaths_repository import BinaryPathStore

__all__ = [
    'BinaryPathStore',
]
