"""
Parsers for accounts owned by other programs

The lock commands read a few accounts they do not own: the Raydium CP-swap
pool (vaults, mints, token programs) and SPL token accounts (to find which
mint a fee NFT or position NFT account holds). Only the fields the lock
commands need are exposed.
"""

import hashlib
import struct
from dataclasses import dataclass

from solders.pubkey import Pubkey

from ...errors import AccountDecodeError


def _anchor_account_discriminator(name: str) -> bytes:
    """Compute Anchor discriminator for account name"""
    return hashlib.sha256(f"account:{name}".encode("utf-8")).digest()[:8]


def _pubkey(data: bytes, offset: int) -> Pubkey:
    return Pubkey.from_bytes(data[offset:offset + 32])


@dataclass(frozen=True)
class CpPoolState:
    """
    Raydium CP-swap PoolState (packed zero-copy account)

    Layout:
    - blob(8): discriminator
    - publicKey(32) x 10: amm_config, pool_creator, token_0_vault, token_1_vault,
      lp_mint, token_0_mint, token_1_mint, token_0_program, token_1_program,
      observation_key
    - u8 x 5: auth_bump, status, lp_mint_decimals, mint_0_decimals, mint_1_decimals
    - u64 x 7: lp_supply, protocol_fees_token_0/1, fund_fees_token_0/1,
      open_time, recent_epoch
    - [u64; 31]: padding
    """
    amm_config: Pubkey
    pool_creator: Pubkey
    token_0_vault: Pubkey
    token_1_vault: Pubkey
    lp_mint: Pubkey
    token_0_mint: Pubkey
    token_1_mint: Pubkey
    token_0_program: Pubkey
    token_1_program: Pubkey
    observation_key: Pubkey
    auth_bump: int
    status: int
    lp_mint_decimals: int
    mint_0_decimals: int
    mint_1_decimals: int
    lp_supply: int
    open_time: int
    recent_epoch: int

    LEN = 8 + 10 * 32 + 5 + 7 * 8 + 31 * 8
    DISCRIMINATOR = _anchor_account_discriminator("PoolState")
    KIND = "CpPoolState"

    @classmethod
    def from_account_data(cls, raw: bytes) -> "CpPoolState":
        """
        Parse CP-swap pool account data.

        Raises:
            AccountDecodeError: On length or discriminator mismatch
        """
        raw = bytes(raw)
        if len(raw) != cls.LEN:
            raise AccountDecodeError.length_mismatch(cls.KIND, cls.LEN, len(raw))
        if raw[:8] != cls.DISCRIMINATOR:
            raise AccountDecodeError.kind_mismatch(cls.KIND, cls.DISCRIMINATOR, raw[:8])

        keys = [_pubkey(raw, 8 + 32 * i) for i in range(10)]
        offset = 8 + 32 * 10

        auth_bump, status, lp_mint_decimals, mint_0_decimals, mint_1_decimals = struct.unpack_from(
            "<5B", raw, offset
        )
        offset += 5

        # lp_supply, protocol fees (2), fund fees (2), open_time, recent_epoch
        u64s = struct.unpack_from("<7Q", raw, offset)

        return cls(
            *keys,
            auth_bump=auth_bump,
            status=status,
            lp_mint_decimals=lp_mint_decimals,
            mint_0_decimals=mint_0_decimals,
            mint_1_decimals=mint_1_decimals,
            lp_supply=u64s[0],
            open_time=u64s[5],
            recent_epoch=u64s[6],
        )


@dataclass(frozen=True)
class TokenAccount:
    """
    SPL token account base layout (shared by Token-2022)

    Layout:
    - publicKey(32): mint
    - publicKey(32): owner
    - u64: amount
    - ... (delegate, state, etc.)
    """
    mint: Pubkey
    owner: Pubkey
    amount: int

    LEN = 165
    KIND = "TokenAccount"

    @classmethod
    def from_account_data(cls, raw: bytes) -> "TokenAccount":
        """
        Parse token account data.

        Token-2022 accounts carry extensions after the base layout, so only a
        minimum length is enforced.

        Raises:
            AccountDecodeError: If the data is shorter than a token account
        """
        raw = bytes(raw)
        if len(raw) < cls.LEN:
            raise AccountDecodeError.length_mismatch(cls.KIND, cls.LEN, len(raw))

        amount = struct.unpack_from("<Q", raw, 64)[0]
        return cls(mint=_pubkey(raw, 0), owner=_pubkey(raw, 32), amount=amount)
