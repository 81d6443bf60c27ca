"""
Type definitions for Lock Adapter
"""

from .programs import ProgramIds
from .result import LockCall, LockCommandResult

__all__ = [
    "ProgramIds",
    "LockCall",
    "LockCommandResult",
]
