"""
Infrastructure layer for Lock Adapter

Provides:
- RpcClient: JSON-RPC chain reader
- Signer: Wallet signing abstraction (local keypair)
"""

from .rpc import RpcClient, RpcClientConfig
from .solana_signer import (
    Signer,
    LocalSigner,
    create_signer,
    generate_fee_nft_mint,
)

__all__ = [
    "RpcClient",
    "RpcClientConfig",
    "Signer",
    "LocalSigner",
    "create_signer",
    "generate_fee_nft_mint",
]
