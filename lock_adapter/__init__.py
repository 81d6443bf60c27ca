"""
Lock Adapter - Instruction construction for the Raydium liquidity-lock program

Provides:
- Lock CP-swap LP tokens behind a fee NFT
- Collect CP-swap fees as the fee NFT holder
- Lock Raydium CLMM position NFTs
- Decoding of locked liquidity / locked position records

Built calls are returned unsigned; transaction assembly and submission are
left to the caller.
"""

from .errors import (
    ErrorCode,
    LockAdapterError,
    RpcError,
    AccountNotFound,
    DerivationError,
    AccountDecodeError,
    EncodeError,
    SignerError,
    ConfigurationError,
)
from .types import ProgramIds, LockCall, LockCommandResult
from .config import setup_logging
from .client import LockClient
from .modules import LockModule

__version__ = "0.1.0"

__all__ = [
    # Client
    "LockClient",
    "LockModule",
    # Types
    "ProgramIds",
    "LockCall",
    "LockCommandResult",
    # Config
    "setup_logging",
    # Errors
    "ErrorCode",
    "LockAdapterError",
    "RpcError",
    "AccountNotFound",
    "DerivationError",
    "AccountDecodeError",
    "EncodeError",
    "SignerError",
    "ConfigurationError",
]
