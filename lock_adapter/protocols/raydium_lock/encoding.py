"""
Lock program instruction data encoders

Format: 8-byte discriminator followed by the arguments packed little-endian
in declaration order, with no length prefixes or type tags. bool is one byte.
"""

import struct
from typing import Any, Dict, Tuple

from ...errors import EncodeError
from .constants import (
    LOCK_CP_LIQUIDITY_INS,
    COLLECT_CP_FEES_INS,
    LOCK_CLMM_POSITION_INS,
    COLLECT_CLMM_FEES_INS,
)

DISCRIMINATOR_SIZE = 8

# instruction name -> (discriminator, struct layout of the arguments)
INSTRUCTION_LAYOUTS: Dict[str, Tuple[bytes, str]] = {
    # lp_amount: u64, with_metadata: bool
    "lock_cp_liquidity": (LOCK_CP_LIQUIDITY_INS, "Q?"),
    # fee_lp_amount: u64
    "collect_cp_fees": (COLLECT_CP_FEES_INS, "Q"),
    # with_metadata: bool
    "lock_clmm_position": (LOCK_CLMM_POSITION_INS, "?"),
    "collect_clmm_fees": (COLLECT_CLMM_FEES_INS, ""),
}


def instruction_data_size(name: str) -> int:
    """Exact encoded size of an instruction's data"""
    _, layout = INSTRUCTION_LAYOUTS[name]
    return DISCRIMINATOR_SIZE + struct.calcsize("<" + layout)


def encode_instruction(discriminator: bytes, layout: str, *args: Any) -> bytes:
    """
    Pack a discriminator and fixed-width arguments.

    Args:
        discriminator: 8-byte instruction tag
        layout: struct format of the arguments (little-endian is implied)
        *args: Argument values in declaration order

    Returns:
        Instruction data

    Raises:
        EncodeError: If the discriminator is not 8 bytes or arguments don't fit the layout
    """
    if len(discriminator) != DISCRIMINATOR_SIZE:
        raise EncodeError.invalid_discriminator(len(discriminator))

    data = bytearray(discriminator)
    try:
        data.extend(struct.pack("<" + layout, *args))
    except struct.error as e:
        raise EncodeError.invalid_arguments(bytes(discriminator).hex(), str(e))
    return bytes(data)


def _encode(name: str, *args: Any) -> bytes:
    discriminator, layout = INSTRUCTION_LAYOUTS[name]
    try:
        return encode_instruction(discriminator, layout, *args)
    except EncodeError as e:
        raise EncodeError.invalid_arguments(name, e.message) from e


def encode_lock_cp_liquidity(lp_amount: int, with_metadata: bool) -> bytes:
    """Data for lock_cp_liquidity (17 bytes)"""
    return _encode("lock_cp_liquidity", lp_amount, bool(with_metadata))


def encode_collect_cp_fees(fee_lp_amount: int) -> bytes:
    """Data for collect_cp_fees (16 bytes)"""
    return _encode("collect_cp_fees", fee_lp_amount)


def encode_lock_clmm_position(with_metadata: bool) -> bytes:
    """Data for lock_clmm_position (9 bytes)"""
    return _encode("lock_clmm_position", bool(with_metadata))


def encode_collect_clmm_fees() -> bytes:
    """Data for collect_clmm_fees (discriminator only)"""
    return _encode("collect_clmm_fees")
