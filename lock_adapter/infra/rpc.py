"""
Solana JSON-RPC chain reader

Only the reads the lock commands need: raw account bytes (base64 decoded),
optionally checked against an expected owning program, and typed records
produced by a parser callable.

Each call is one HTTP request. Retry and backoff policy belong to the caller;
RpcError.recoverable tells it which failures are worth repeating.
"""

from __future__ import annotations

import base64
import binascii
import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar, Union

import httpx
from solders.pubkey import Pubkey

from ..errors import RpcError, AccountNotFound, ConfigurationError
from ..config import config as global_config

logger = logging.getLogger(__name__)

T = TypeVar("T")
Address = Union[str, Pubkey]
Owner = Union[Address, Sequence[Address]]


@dataclass
class RpcClientConfig:
    """
    Per-client overrides of the RPC settings

    Fields left as None take the value from lock_adapter.config at
    construction time.
    """
    timeout_seconds: Optional[float] = None
    commitment: Optional[str] = None

    def __post_init__(self):
        rpc = global_config.rpc
        if self.timeout_seconds is None:
            self.timeout_seconds = rpc.timeout_seconds
        if self.commitment is None:
            self.commitment = rpc.commitment


class RpcClient:
    """
    Solana JSON-RPC client

    Usage:
        with RpcClient("https://api.mainnet-beta.solana.com") as rpc:
            raw = rpc.get_account_data(address)            # None if absent
            pool = rpc.get_typed_account(pool_id, CpPoolState.from_account_data)
    """

    def __init__(self, endpoint: Optional[str] = None, config: Optional[RpcClientConfig] = None):
        """
        Args:
            endpoint: Node URL (defaults to SOLANA_RPC_URL)
            config: Timeout / commitment overrides

        Raises:
            ConfigurationError: If no endpoint is given or configured
        """
        self._endpoint = endpoint or global_config.rpc.url
        if not self._endpoint:
            raise ConfigurationError.missing("RPC endpoint")

        self._config = config or RpcClientConfig()
        self._http: Optional[httpx.Client] = None
        self._http_guard = threading.Lock()
        self._ids = itertools.count(1)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def commitment(self) -> str:
        return self._config.commitment

    @property
    def http(self) -> httpx.Client:
        """Shared httpx client, created on first use"""
        with self._http_guard:
            if self._http is None:
                self._http = httpx.Client(timeout=self._config.timeout_seconds)
            return self._http

    def _post(self, method: str, payload: Dict[str, Any], timeout: float) -> Dict[str, Any]:
        try:
            response = self.http.post(self._endpoint, json=payload, timeout=timeout)
            if response.status_code == 429:
                raise RpcError.rate_limited(self._endpoint)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            raise RpcError.timeout(self._endpoint, timeout) from e
        except httpx.HTTPStatusError as e:
            raise RpcError(
                f"{method} failed with HTTP {e.response.status_code}",
                endpoint=self._endpoint,
                original_error=e,
            ) from e
        except httpx.RequestError as e:
            raise RpcError.connection_failed(self._endpoint, e) from e
        except ValueError as e:
            raise RpcError.invalid_response(self._endpoint, f"{method} body is not JSON ({e})") from e

    def call(self, method: str, params: List[Any], timeout: Optional[float] = None) -> Any:
        """
        Make one JSON-RPC request and return its "result"

        Raises:
            RpcError: On transport failure, a malformed reply or an "error" member
        """
        timeout = timeout or self._config.timeout_seconds
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}

        try:
            reply = self._post(method, payload, timeout)
        except RpcError as e:
            logger.warning(f"{method} via {self._endpoint}: {e.message}")
            raise

        if not isinstance(reply, dict):
            raise RpcError.invalid_response(self._endpoint, f"{method} reply is not a JSON object")

        error = reply.get("error")
        if error is not None:
            if not isinstance(error, dict):
                raise RpcError.invalid_response(self._endpoint, f"{method} error member is not an object: {error!r}")
            rpc_error = RpcError(f"RPC error: {error.get('message', error)}", endpoint=self._endpoint)
            rpc_error.details["rpc_error_code"] = error.get("code")
            rpc_error.details["rpc_error_data"] = error.get("data")
            raise rpc_error

        return reply.get("result")

    def get_account_info(
        self,
        address: Address,
        encoding: str = "base64",
        commitment: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """getAccountInfo "value" member, None when the account does not exist"""
        options = {"encoding": encoding, "commitment": commitment or self.commitment}
        result = self.call("getAccountInfo", [str(address), options])
        if not result:
            return None
        if not isinstance(result, dict):
            raise RpcError.invalid_response(self._endpoint, f"getAccountInfo result is not an object for {address}")

        value = result.get("value")
        if value is not None and not isinstance(value, dict):
            raise RpcError.invalid_response(self._endpoint, f"getAccountInfo value is not an object for {address}")
        return value

    def _decode_data(self, address: Address, data: Any) -> bytes:
        # Nodes answer ["<b64>", "base64"]; some proxies flatten it to the string
        encoded = data[0] if isinstance(data, list) and data else data
        if not isinstance(encoded, str):
            raise RpcError.invalid_response(self._endpoint, f"no base64 data for {address}")
        try:
            return base64.b64decode(encoded, validate=True)
        except binascii.Error as e:
            raise RpcError.invalid_response(self._endpoint, f"bad base64 for {address} ({e})") from e

    def get_account_data(
        self,
        address: Address,
        owner: Optional[Owner] = None,
        commitment: Optional[str] = None,
    ) -> Optional[bytes]:
        """
        Raw account bytes

        Args:
            address: Account address
            owner: Program that must own the account, or a tuple of
                acceptable programs, if it matters
            commitment: Commitment override

        Returns:
            Account data, or None if the account does not exist

        Raises:
            AccountNotFound: If owner is given and the account has another owner
            RpcError: On RPC failure or malformed data
        """
        account = self.get_account_info(address, commitment=commitment)
        if account is None:
            return None

        actual_owner = account.get("owner")
        if owner is not None:
            allowed = [str(o) for o in owner] if isinstance(owner, (list, tuple)) else [str(owner)]
            if actual_owner not in allowed:
                raise AccountNotFound.owner_mismatch(str(address), " or ".join(allowed), str(actual_owner))

        return self._decode_data(address, account.get("data"))

    def get_typed_account(
        self,
        address: Address,
        parser: Callable[[bytes], T],
        owner: Optional[Owner] = None,
        what: str = "Account",
    ) -> T:
        """
        Fetch an account that must exist and parse it

        Raises:
            AccountNotFound: If the account is absent or has the wrong owner
            AccountDecodeError: If the parser rejects the data
        """
        data = self.get_account_data(address, owner=owner)
        if data is None:
            raise AccountNotFound.not_found(str(address), what)
        return parser(data)

    def close(self):
        with self._http_guard:
            if self._http is not None:
                self._http.close()
                self._http = None

    def __enter__(self) -> "RpcClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
