"""
LockClient - Entry point for liquidity-lock operations

Wires the chain reader, the wallet signer and the lock module together.
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from solders.keypair import Keypair
    from .modules.lock import LockModule

from .infra import RpcClient, RpcClientConfig, create_signer, Signer
from .types import ProgramIds


class LockClient:
    """
    Liquidity-lock client

    Usage:
        client = LockClient(
            rpc_url="https://api.mainnet-beta.solana.com",
            keypair_path="~/.config/solana/id.json",
        )

        result = client.lock.lock_cp_liquidity(pool_id, lp_account, lp_amount)
        record = client.lock.get_locked_liquidity(result.fee_nft_mint)
    """

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        keypair: Optional["Keypair"] = None,
        keypair_path: Optional[str] = None,
        rpc_config: Optional[RpcClientConfig] = None,
        programs: Optional[ProgramIds] = None,
    ):
        """
        Initialize LockClient

        Args:
            rpc_url: RPC endpoint URL (defaults to SOLANA_RPC_URL)
            keypair: Wallet keypair (takes precedence over keypair_path)
            keypair_path: solana-keygen JSON file with the wallet keypair
            rpc_config: Timeout / commitment overrides
            programs: Optional program id overrides

        Raises:
            SignerError: If no usable keypair is available
            ConfigurationError: If no RPC endpoint is configured
        """
        # Load the signer first so bad key material fails before any network setup
        self._signer = create_signer(keypair=keypair, keypair_path=keypair_path)
        self._rpc = RpcClient(rpc_url, config=rpc_config)
        self._programs = programs

        self._lock: Optional["LockModule"] = None

    @property
    def rpc(self) -> RpcClient:
        """Chain reader shared by all modules"""
        return self._rpc

    @property
    def signer(self) -> Signer:
        """Access to signer"""
        return self._signer

    @property
    def pubkey(self) -> str:
        """Payer's public key"""
        return self._signer.pubkey

    @property
    def lock(self) -> "LockModule":
        """
        Lock module

        Provides:
        - lock_cp_liquidity(pool_id, lp_token_account, lp_amount)
        - collect_cp_fees(fee_nft_account)
        - lock_clmm_position(position_nft_account)
        - get_locked_liquidity(fee_nft_mint) / get_locked_position(fee_nft_mint)
        """
        if self._lock is None:
            from .modules.lock import LockModule
            self._lock = LockModule(self._rpc, self._signer, programs=self._programs)
        return self._lock

    def close(self):
        """Release the HTTP connection pool"""
        self._rpc.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"LockClient(pubkey={self.pubkey}, endpoint={self._rpc.endpoint})"
