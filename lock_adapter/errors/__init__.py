"""
Error definitions for Lock Adapter
"""

from .exceptions import (
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

__all__ = [
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
