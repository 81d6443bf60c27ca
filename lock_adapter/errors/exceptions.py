"""
Exception definitions for Lock Adapter

Every error carries an ErrorCode, a recoverable flag telling the caller
whether repeating the same request could succeed, and a details dict with
the values that identify what failed (endpoint, address, record kind...).
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(Enum):
    """
    Error codes grouped by layer

    1xxx - RPC transport
    2xxx - On-chain accounts
    3xxx - Program address derivation
    4xxx - Record decoding
    5xxx - Instruction encoding
    6xxx - Signer
    9xxx - Configuration
    """
    RPC_CONNECTION_FAILED = "1001"
    RPC_TIMEOUT = "1002"
    RPC_RATE_LIMITED = "1003"
    RPC_INVALID_RESPONSE = "1004"

    ACCOUNT_NOT_FOUND = "2001"
    ACCOUNT_OWNER_MISMATCH = "2002"
    ACCOUNT_STATE_MISMATCH = "2003"

    DERIVATION_FAILED = "3001"
    SEED_INVALID = "3002"

    DECODE_LENGTH_MISMATCH = "4001"
    DECODE_KIND_MISMATCH = "4002"

    ENCODE_INVALID_ARGUMENT = "5001"

    SIGNER_NOT_CONFIGURED = "6001"
    SIGNER_FAILED = "6002"

    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"


class LockAdapterError(Exception):
    """
    Base exception for all lock adapter errors

    Subclasses set default_code and retryable; callers may override either.
    """

    default_code: ErrorCode = ErrorCode.CONFIG_INVALID
    retryable: bool = False

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        recoverable: Optional[bool] = None,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.recoverable = self.retryable if recoverable is None else recoverable
        self.original_error = original_error
        self.details = {k: v for k, v in (details or {}).items() if v is not None}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code.name}, {self.message!r})"

    @property
    def should_retry(self) -> bool:
        return self.recoverable


class RpcError(LockAdapterError):
    """Transport or JSON-RPC failure talking to the node"""

    default_code = ErrorCode.RPC_CONNECTION_FAILED
    retryable = True

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        original_error: Optional[Exception] = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(message, code, original_error=original_error, details={"endpoint": endpoint})
        self.endpoint = endpoint

    @classmethod
    def connection_failed(cls, endpoint: str, error: Optional[Exception] = None) -> "RpcError":
        return cls(f"Cannot reach {endpoint}", original_error=error, endpoint=endpoint)

    @classmethod
    def timeout(cls, endpoint: str, timeout_seconds: float) -> "RpcError":
        return cls(f"Request to {endpoint} timed out after {timeout_seconds}s", ErrorCode.RPC_TIMEOUT, endpoint=endpoint)

    @classmethod
    def rate_limited(cls, endpoint: str) -> "RpcError":
        return cls(f"Rate limited by {endpoint}", ErrorCode.RPC_RATE_LIMITED, endpoint=endpoint)

    @classmethod
    def invalid_response(cls, endpoint: str, reason: str) -> "RpcError":
        return cls(f"Unusable response from {endpoint}: {reason}", ErrorCode.RPC_INVALID_RESPONSE, endpoint=endpoint)


class AccountNotFound(LockAdapterError):
    """
    An account the command depends on is absent, owned by the wrong program,
    or disagrees with the record that points at it
    """

    default_code = ErrorCode.ACCOUNT_NOT_FOUND

    def __init__(self, message: str, address: Optional[str] = None, code: Optional[ErrorCode] = None):
        super().__init__(message, code, details={"address": address})
        self.address = address

    @classmethod
    def not_found(cls, address: str, what: str = "Account") -> "AccountNotFound":
        return cls(f"{what} not found: {address}", address)

    @classmethod
    def owner_mismatch(cls, address: str, expected: str, actual: str) -> "AccountNotFound":
        return cls(
            f"Account {address} belongs to program {actual}, not {expected}",
            address,
            ErrorCode.ACCOUNT_OWNER_MISMATCH,
        )

    @classmethod
    def state_mismatch(cls, address: str, reason: str) -> "AccountNotFound":
        return cls(f"Account {address} is inconsistent: {reason}", address, ErrorCode.ACCOUNT_STATE_MISMATCH)


class DerivationError(LockAdapterError):
    """Program address derivation failed; seeds or program id are wrong"""

    default_code = ErrorCode.DERIVATION_FAILED

    def __init__(self, message: str, code: Optional[ErrorCode] = None, program_id: Optional[str] = None):
        super().__init__(message, code, details={"program_id": program_id})
        self.program_id = program_id

    @classmethod
    def no_viable_bump(cls, program_id: str) -> "DerivationError":
        return cls(f"No bump in 255..0 gives an off-curve address under {program_id}", program_id=program_id)

    @classmethod
    def on_curve(cls, program_id: str) -> "DerivationError":
        return cls(f"Seeds hash to an on-curve point under {program_id}", program_id=program_id)

    @classmethod
    def invalid_seed(cls, reason: str) -> "DerivationError":
        return cls(f"Invalid seeds: {reason}", ErrorCode.SEED_INVALID)


class AccountDecodeError(LockAdapterError):
    """
    Raw account bytes are not a valid instance of the requested record kind

    Never a partial parse: the caller either gets the whole record or this error.
    """

    default_code = ErrorCode.DECODE_LENGTH_MISMATCH

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        kind: Optional[str] = None,
        expected: Any = None,
        actual: Any = None,
    ):
        super().__init__(message, code, details={"kind": kind, "expected": expected, "actual": actual})
        self.kind = kind
        self.expected = expected
        self.actual = actual

    @classmethod
    def length_mismatch(cls, kind: str, expected: int, actual: int) -> "AccountDecodeError":
        return cls(
            f"{kind} must be {expected} bytes, got {actual}",
            ErrorCode.DECODE_LENGTH_MISMATCH,
            kind,
            expected,
            actual,
        )

    @classmethod
    def kind_mismatch(cls, kind: str, expected: bytes, actual: bytes) -> "AccountDecodeError":
        expected, actual = bytes(expected).hex(), bytes(actual).hex()
        return cls(
            f"{kind} discriminator is {actual}, expected {expected}",
            ErrorCode.DECODE_KIND_MISMATCH,
            kind,
            expected,
            actual,
        )

    @property
    def is_length_mismatch(self) -> bool:
        return self.code is ErrorCode.DECODE_LENGTH_MISMATCH

    @property
    def is_kind_mismatch(self) -> bool:
        return self.code is ErrorCode.DECODE_KIND_MISMATCH


class EncodeError(LockAdapterError):
    """Instruction arguments do not fit the fixed data layout"""

    default_code = ErrorCode.ENCODE_INVALID_ARGUMENT

    def __init__(self, message: str, instruction: Optional[str] = None):
        super().__init__(message, details={"instruction": instruction})
        self.instruction = instruction

    @classmethod
    def invalid_discriminator(cls, length: int) -> "EncodeError":
        return cls(f"Instruction discriminator must be 8 bytes, got {length}")

    @classmethod
    def invalid_arguments(cls, instruction: str, reason: str) -> "EncodeError":
        return cls(f"Cannot encode {instruction}: {reason}", instruction)


class SignerError(LockAdapterError):
    """No usable wallet keypair"""

    default_code = ErrorCode.SIGNER_FAILED

    @classmethod
    def not_configured(cls) -> "SignerError":
        return cls(
            "No wallet keypair: pass one in or set SOLANA_KEYPAIR_PATH",
            ErrorCode.SIGNER_NOT_CONFIGURED,
        )

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "SignerError":
        return cls(f"Keypair file {path} unusable: {reason}", details={"path": path})

    @classmethod
    def failed(cls, reason: str) -> "SignerError":
        return cls(f"Bad key material: {reason}")


class ConfigurationError(LockAdapterError):
    """Missing or malformed setting"""

    default_code = ErrorCode.CONFIG_INVALID

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"{param} is not configured", ErrorCode.CONFIG_MISSING, details={"param": param})

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"{param} is invalid: {reason}", details={"param": param})
