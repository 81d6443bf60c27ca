"""
Functional modules for LockClient

Provides high-level operations:
- LockModule: Lock LP / CLMM positions, collect fees, read lock records
"""

from .lock import LockModule

__all__ = [
    "LockModule",
]
