"""
Raydium Liquidity-Lock protocol

Address derivation, instruction encoding and building, and record decoding
for the Raydium lock program.
"""

from .constants import (
    LOCK_PROGRAM_ID,
    DISCRIMINATORS,
    U64_MAX,
)
from .pda import (
    find_program_address,
    create_program_address,
    get_associated_token_address,
    derive_lock_cp_authority,
    derive_lock_clmm_authority,
    derive_locked_liquidity,
    derive_locked_position,
    derive_metadata_account,
    derive_cp_swap_authority,
    derive_personal_position,
)
from .encoding import (
    encode_instruction,
    encode_lock_cp_liquidity,
    encode_collect_cp_fees,
    encode_lock_clmm_position,
    encode_collect_clmm_fees,
)
from .instructions import (
    build_lock_cp_liquidity,
    build_collect_cp_fees,
    build_lock_clmm_position,
)
from .state import (
    LockedCpLiquidityState,
    LockedClmmPositionState,
    decode_account,
)
from .external import CpPoolState, TokenAccount

__all__ = [
    "LOCK_PROGRAM_ID",
    "DISCRIMINATORS",
    "U64_MAX",
    "find_program_address",
    "create_program_address",
    "get_associated_token_address",
    "derive_lock_cp_authority",
    "derive_lock_clmm_authority",
    "derive_locked_liquidity",
    "derive_locked_position",
    "derive_metadata_account",
    "derive_cp_swap_authority",
    "derive_personal_position",
    "encode_instruction",
    "encode_lock_cp_liquidity",
    "encode_collect_cp_fees",
    "encode_lock_clmm_position",
    "encode_collect_clmm_fees",
    "build_lock_cp_liquidity",
    "build_collect_cp_fees",
    "build_lock_clmm_position",
    "LockedCpLiquidityState",
    "LockedClmmPositionState",
    "decode_account",
    "CpPoolState",
    "TokenAccount",
]
