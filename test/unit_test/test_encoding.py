"""
Test Instruction Data Encoding

Tests for lock program instruction data layouts.
"""

import sys
import struct
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def test_discriminators():
    """Discriminators match the lock program ABI"""
    from lock_adapter.protocols.raydium_lock.constants import DISCRIMINATORS

    print("Testing discriminators...")

    assert DISCRIMINATORS["lock_clmm_position"] == bytes([188, 37, 179, 131, 82, 150, 84, 73])
    assert DISCRIMINATORS["collect_clmm_fees"] == bytes([16, 72, 250, 198, 14, 162, 212, 19])
    assert DISCRIMINATORS["lock_cp_liquidity"] == bytes([216, 157, 29, 78, 38, 51, 31, 26])
    assert DISCRIMINATORS["collect_cp_fees"] == bytes([8, 30, 51, 199, 209, 184, 247, 133])

    print("  Discriminators: PASSED")


def test_encode_lock_cp_liquidity():
    """lock_cp_liquidity: discriminator + u64 + bool"""
    from lock_adapter.protocols.raydium_lock.encoding import encode_lock_cp_liquidity
    from lock_adapter.protocols.raydium_lock.constants import LOCK_CP_LIQUIDITY_INS

    print("Testing encode_lock_cp_liquidity...")

    data = encode_lock_cp_liquidity(1_000_000, True)
    assert len(data) == 17
    assert data[:8] == LOCK_CP_LIQUIDITY_INS
    assert struct.unpack("<Q", data[8:16])[0] == 1_000_000
    assert data[16] == 1

    data = encode_lock_cp_liquidity(0, False)
    assert data[8:] == bytes(9)

    print("  encode_lock_cp_liquidity: PASSED")


def test_encode_collect_cp_fees():
    """collect_cp_fees: discriminator + u64"""
    from lock_adapter.protocols.raydium_lock.encoding import encode_collect_cp_fees
    from lock_adapter.protocols.raydium_lock.constants import COLLECT_CP_FEES_INS, U64_MAX

    print("Testing encode_collect_cp_fees...")

    data = encode_collect_cp_fees(U64_MAX)
    assert len(data) == 16
    assert data[:8] == COLLECT_CP_FEES_INS
    assert data[8:] == b"\xff" * 8

    print("  encode_collect_cp_fees: PASSED")


def test_encode_clmm():
    """lock_clmm_position: discriminator + bool; collect_clmm_fees: discriminator only"""
    from lock_adapter.protocols.raydium_lock.encoding import (
        encode_lock_clmm_position,
        encode_collect_clmm_fees,
    )
    from lock_adapter.protocols.raydium_lock.constants import (
        LOCK_CLMM_POSITION_INS,
        COLLECT_CLMM_FEES_INS,
    )

    print("Testing CLMM encoders...")

    assert encode_lock_clmm_position(True) == LOCK_CLMM_POSITION_INS + b"\x01"
    assert encode_lock_clmm_position(False) == LOCK_CLMM_POSITION_INS + b"\x00"
    assert encode_collect_clmm_fees() == COLLECT_CLMM_FEES_INS

    print("  CLMM encoders: PASSED")


def test_instruction_data_size():
    """instruction_data_size reports the fixed encoded sizes"""
    from lock_adapter.protocols.raydium_lock.encoding import instruction_data_size

    print("Testing instruction_data_size...")

    assert instruction_data_size("lock_cp_liquidity") == 17
    assert instruction_data_size("collect_cp_fees") == 16
    assert instruction_data_size("lock_clmm_position") == 9
    assert instruction_data_size("collect_clmm_fees") == 8

    print("  instruction_data_size: PASSED")


def test_encode_out_of_range():
    """Amounts outside u64 are encode errors"""
    from lock_adapter.protocols.raydium_lock.encoding import (
        encode_lock_cp_liquidity,
        encode_collect_cp_fees,
        encode_instruction,
    )
    from lock_adapter.errors import EncodeError

    print("Testing out-of-range amounts...")

    for bad in (-1, 2 ** 64):
        try:
            encode_lock_cp_liquidity(bad, False)
            assert False, f"Should reject lp_amount={bad}"
        except EncodeError as e:
            assert e.instruction == "lock_cp_liquidity"

    try:
        encode_collect_cp_fees(-5)
        assert False, "Should reject negative fee amount"
    except EncodeError:
        pass

    try:
        encode_instruction(b"short", "")
        assert False, "Should reject a 5-byte discriminator"
    except EncodeError:
        pass

    print("  Out-of-range amounts: PASSED")


def main():
    """Run all encoding tests"""
    print("=" * 60)
    print("Encoding Tests")
    print("=" * 60)

    tests = [
        test_discriminators,
        test_encode_lock_cp_liquidity,
        test_encode_collect_cp_fees,
        test_encode_clmm,
        test_instruction_data_size,
        test_encode_out_of_range,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"  FAILED: {e}")
            failed += 1

    print("=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)

    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
