"""
Raydium Liquidity-Lock Account Parsers

Decodes the lock program's on-chain records.

Each record is a fixed-length blob: 8-byte discriminator, fixed-width fields
in declaration order, then a reserved padding region. Decoding checks the
length first and the discriminator second, then unpacks every field; a blob
that fails either check is rejected outright, never partially parsed.
"""

import struct
from dataclasses import dataclass
from typing import Type, TypeVar

from solders.pubkey import Pubkey

from ...errors import AccountDecodeError
from .constants import (
    LOCKED_CP_LIQUIDITY_DISCRIMINATOR,
    LOCKED_CLMM_POSITION_DISCRIMINATOR,
)

DISCRIMINATOR_SIZE = 8
PADDING_SIZE = 8 * 8

T = TypeVar("T", "LockedCpLiquidityState", "LockedClmmPositionState")


def _check_header(raw: bytes, kind: str, length: int, discriminator: bytes) -> None:
    if len(raw) != length:
        raise AccountDecodeError.length_mismatch(kind, length, len(raw))
    if raw[:DISCRIMINATOR_SIZE] != discriminator:
        raise AccountDecodeError.kind_mismatch(kind, discriminator, raw[:DISCRIMINATOR_SIZE])


@dataclass(frozen=True)
class LockedCpLiquidityState:
    """
    Locked CP-swap liquidity record

    Layout:
    - blob(8): discriminator
    - u64: locked_lp_amount - locked liquidity without claimed lp fee
    - u64: claimed_lp_amount
    - u64: unclaimed_lp_amount
    - u64: last_lp - pool lp supply at last update
    - u128: last_k - pool k at last update
    - u64: recent_epoch
    - publicKey(32): pool_id
    - publicKey(32): fee_nft_mint - holder of this NFT may collect fees
    - publicKey(32): locked_owner
    - publicKey(32): locked_lp_mint
    - blob(64): padding ([u64; 8], reserved)
    """
    locked_lp_amount: int
    claimed_lp_amount: int
    unclaimed_lp_amount: int
    last_lp: int
    last_k: int
    recent_epoch: int
    pool_id: Pubkey
    fee_nft_mint: Pubkey
    locked_owner: Pubkey
    locked_lp_mint: Pubkey
    padding: bytes = bytes(PADDING_SIZE)

    LEN = 8 + 4 * 8 + 16 + 8 + 32 * 4 + 8 * 8
    DISCRIMINATOR = LOCKED_CP_LIQUIDITY_DISCRIMINATOR
    KIND = "LockedCpLiquidityState"
    _BODY = struct.Struct("<4Q16sQ32s32s32s32s64s")

    @classmethod
    def from_account_data(cls, raw: bytes) -> "LockedCpLiquidityState":
        """
        Decode a locked liquidity record.

        Raises:
            AccountDecodeError: On length or discriminator mismatch
        """
        raw = bytes(raw)
        _check_header(raw, cls.KIND, cls.LEN, cls.DISCRIMINATOR)

        (
            locked_lp_amount,
            claimed_lp_amount,
            unclaimed_lp_amount,
            last_lp,
            last_k,
            recent_epoch,
            pool_id,
            fee_nft_mint,
            locked_owner,
            locked_lp_mint,
            padding,
        ) = cls._BODY.unpack_from(raw, DISCRIMINATOR_SIZE)

        return cls(
            locked_lp_amount=locked_lp_amount,
            claimed_lp_amount=claimed_lp_amount,
            unclaimed_lp_amount=unclaimed_lp_amount,
            last_lp=last_lp,
            last_k=int.from_bytes(last_k, "little"),
            recent_epoch=recent_epoch,
            pool_id=Pubkey.from_bytes(pool_id),
            fee_nft_mint=Pubkey.from_bytes(fee_nft_mint),
            locked_owner=Pubkey.from_bytes(locked_owner),
            locked_lp_mint=Pubkey.from_bytes(locked_lp_mint),
            padding=padding,
        )

    def to_bytes(self) -> bytes:
        """Serialize back to the on-chain layout"""
        return self.DISCRIMINATOR + self._BODY.pack(
            self.locked_lp_amount,
            self.claimed_lp_amount,
            self.unclaimed_lp_amount,
            self.last_lp,
            self.last_k.to_bytes(16, "little"),
            self.recent_epoch,
            bytes(self.pool_id),
            bytes(self.fee_nft_mint),
            bytes(self.locked_owner),
            bytes(self.locked_lp_mint),
            self.padding,
        )

    @property
    def total_lp_amount(self) -> int:
        """Locked liquidity plus fees not yet claimed"""
        return self.locked_lp_amount + self.unclaimed_lp_amount


@dataclass(frozen=True)
class LockedClmmPositionState:
    """
    Locked CLMM position record

    Layout:
    - blob(8): discriminator
    - u8: bump
    - publicKey(32): position_owner
    - publicKey(32): pool_id
    - publicKey(32): position_id
    - publicKey(32): locked_nft_account
    - publicKey(32): fee_nft_mint
    - u64: recent_epoch
    - blob(64): padding ([u64; 8], reserved)
    """
    bump: int
    position_owner: Pubkey
    pool_id: Pubkey
    position_id: Pubkey
    locked_nft_account: Pubkey
    fee_nft_mint: Pubkey
    recent_epoch: int
    padding: bytes = bytes(PADDING_SIZE)

    LEN = 8 + 1 + 32 * 5 + 8 + 8 * 8
    DISCRIMINATOR = LOCKED_CLMM_POSITION_DISCRIMINATOR
    KIND = "LockedClmmPositionState"
    _BODY = struct.Struct("<B32s32s32s32s32sQ64s")

    @classmethod
    def from_account_data(cls, raw: bytes) -> "LockedClmmPositionState":
        """
        Decode a locked position record.

        Raises:
            AccountDecodeError: On length or discriminator mismatch
        """
        raw = bytes(raw)
        _check_header(raw, cls.KIND, cls.LEN, cls.DISCRIMINATOR)

        (
            bump,
            position_owner,
            pool_id,
            position_id,
            locked_nft_account,
            fee_nft_mint,
            recent_epoch,
            padding,
        ) = cls._BODY.unpack_from(raw, DISCRIMINATOR_SIZE)

        return cls(
            bump=bump,
            position_owner=Pubkey.from_bytes(position_owner),
            pool_id=Pubkey.from_bytes(pool_id),
            position_id=Pubkey.from_bytes(position_id),
            locked_nft_account=Pubkey.from_bytes(locked_nft_account),
            fee_nft_mint=Pubkey.from_bytes(fee_nft_mint),
            recent_epoch=recent_epoch,
            padding=padding,
        )

    def to_bytes(self) -> bytes:
        """Serialize back to the on-chain layout"""
        return self.DISCRIMINATOR + self._BODY.pack(
            self.bump,
            bytes(self.position_owner),
            bytes(self.pool_id),
            bytes(self.position_id),
            bytes(self.locked_nft_account),
            bytes(self.fee_nft_mint),
            self.recent_epoch,
            self.padding,
        )


def decode_account(raw: bytes, kind: Type[T]) -> T:
    """
    Decode raw account bytes as the given record kind.

    Args:
        raw: Account data as returned by the chain
        kind: LockedCpLiquidityState or LockedClmmPositionState

    Returns:
        Decoded record

    Raises:
        AccountDecodeError: length_mismatch if the size is wrong,
            kind_mismatch if the discriminator is wrong
    """
    return kind.from_account_data(raw)
