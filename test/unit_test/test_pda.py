"""
Test Program-Derived Addresses

Cross-checks the lock PDA helpers against solders' own derivation.
"""

import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def _programs():
    from lock_adapter.config import ProgramConfig
    return ProgramConfig().to_program_ids()


def test_find_program_address_matches_solders():
    """find_program_address agrees with Pubkey.find_program_address"""
    from solders.pubkey import Pubkey
    from lock_adapter.protocols.raydium_lock.pda import find_program_address

    print("Testing find_program_address vs solders...")

    program_id = Pubkey.new_unique()
    seed_sets = [
        [b"lock_cp_authority_seed"],
        [b"locked_liquidity", bytes(Pubkey.new_unique())],
        [b"metadata", bytes(Pubkey.new_unique()), bytes(Pubkey.new_unique())],
        [],
    ]

    for seeds in seed_sets:
        address, bump = find_program_address(seeds, program_id)
        expected_address, expected_bump = Pubkey.find_program_address(seeds, program_id)
        assert address == expected_address, f"Address mismatch for seeds {seeds}"
        assert bump == expected_bump, f"Bump mismatch for seeds {seeds}"
        assert not address.is_on_curve(), "PDA must be off-curve"

    print("  find_program_address vs solders: PASSED")


def test_lock_cp_authority_is_deterministic():
    """The CP lock authority derivation returns the same pair every time"""
    from solders.pubkey import Pubkey
    from lock_adapter.protocols.raydium_lock.pda import derive_lock_cp_authority

    print("Testing lock CP authority determinism...")

    programs = _programs()
    first = derive_lock_cp_authority(programs)
    second = derive_lock_cp_authority(programs)

    assert first == second
    address, bump = first
    assert 0 <= bump <= 255
    assert (address, bump) == Pubkey.find_program_address([b"lock_cp_authority_seed"], programs.lock_program)

    print(f"  Authority: {address} (bump {bump})")
    print("  Lock CP authority determinism: PASSED")


def test_mainnet_lock_authorities():
    """Default program ids reproduce the lock authorities deployed on mainnet"""
    import os
    from unittest.mock import patch
    from solders.pubkey import Pubkey
    from lock_adapter.config import ProgramConfig
    from lock_adapter.protocols.raydium_lock.pda import (
        derive_lock_cp_authority,
        derive_lock_clmm_authority,
    )

    print("Testing mainnet lock authorities...")

    with patch.dict(os.environ, {}, clear=True):
        programs = ProgramConfig().to_program_ids()

    address, bump = derive_lock_cp_authority(programs)
    assert address == Pubkey.from_string("3f7GcQFG397GAaEnv51zR6tsTVihYRydnydDD1cXekxH")
    assert bump == 255

    address, _ = derive_lock_clmm_authority(programs)
    assert address == Pubkey.from_string("kN1kEznaF5Xbd8LYuqtEFcxzWSBk5Fv6ygX6SqEGJVy")

    print("  Mainnet lock authorities: PASSED")


def test_create_program_address_with_bump():
    """create_program_address reproduces the address found with its bump"""
    from solders.pubkey import Pubkey
    from lock_adapter.protocols.raydium_lock.pda import find_program_address, create_program_address

    print("Testing create_program_address...")

    program_id = Pubkey.new_unique()
    seeds = [b"locked_position", bytes(Pubkey.new_unique())]
    address, bump = find_program_address(seeds, program_id)

    assert create_program_address(seeds + [bytes([bump])], program_id) == address

    print("  create_program_address: PASSED")


def test_invalid_seeds():
    """Oversized seeds and too many seeds are rejected"""
    from solders.pubkey import Pubkey
    from lock_adapter.protocols.raydium_lock.pda import find_program_address
    from lock_adapter.errors import DerivationError, ErrorCode

    print("Testing invalid seeds...")

    program_id = Pubkey.new_unique()

    try:
        find_program_address([bytes(33)], program_id)
        assert False, "Should reject seed longer than 32 bytes"
    except DerivationError as e:
        assert e.code == ErrorCode.SEED_INVALID

    try:
        find_program_address([b"x"] * 16, program_id)
        assert False, "Should reject 16 seeds (bump would make 17)"
    except DerivationError as e:
        assert e.code == ErrorCode.SEED_INVALID

    # 32-byte seed is fine
    find_program_address([bytes(32)], program_id)

    print("  Invalid seeds: PASSED")


def test_associated_token_address():
    """ATA derivation uses [owner, token_program, mint] under the ATA program"""
    from solders.pubkey import Pubkey
    from lock_adapter.protocols.raydium_lock.pda import get_associated_token_address

    print("Testing associated token address...")

    programs = _programs()
    owner = Pubkey.new_unique()
    mint = Pubkey.new_unique()

    ata = get_associated_token_address(owner, mint, programs.token_program, programs.associated_token_program)
    expected, _ = Pubkey.find_program_address(
        [bytes(owner), bytes(programs.token_program), bytes(mint)],
        programs.associated_token_program,
    )
    assert ata == expected

    # Token-2022 mints get a different account
    ata_2022 = get_associated_token_address(owner, mint, programs.token_2022_program, programs.associated_token_program)
    assert ata_2022 != ata

    print("  Associated token address: PASSED")


def test_lock_record_addresses():
    """Locked records are derived under the lock program from the fee NFT mint"""
    from solders.pubkey import Pubkey
    from lock_adapter.protocols.raydium_lock.pda import (
        derive_locked_liquidity,
        derive_locked_position,
        derive_lock_clmm_authority,
        derive_metadata_account,
        derive_cp_swap_authority,
        derive_personal_position,
    )

    print("Testing lock record addresses...")

    programs = _programs()
    fee_nft_mint = Pubkey.new_unique()

    expected, _ = Pubkey.find_program_address([b"locked_liquidity", bytes(fee_nft_mint)], programs.lock_program)
    assert derive_locked_liquidity(fee_nft_mint, programs) == expected

    expected, _ = Pubkey.find_program_address([b"locked_position", bytes(fee_nft_mint)], programs.lock_program)
    assert derive_locked_position(fee_nft_mint, programs) == expected

    expected = Pubkey.find_program_address([b"program_authority_seed"], programs.lock_program)
    assert derive_lock_clmm_authority(programs) == expected

    expected, _ = Pubkey.find_program_address(
        [b"metadata", bytes(programs.metadata_program), bytes(fee_nft_mint)],
        programs.metadata_program,
    )
    assert derive_metadata_account(fee_nft_mint, programs) == expected

    expected, _ = Pubkey.find_program_address([b"vault_and_lp_mint_auth_seed"], programs.cp_swap_program)
    assert derive_cp_swap_authority(programs) == expected

    position_mint = Pubkey.new_unique()
    expected, _ = Pubkey.find_program_address([b"position", bytes(position_mint)], programs.clmm_program)
    assert derive_personal_position(position_mint, programs) == expected

    print("  Lock record addresses: PASSED")


def main():
    """Run all PDA tests"""
    print("=" * 60)
    print("PDA Tests")
    print("=" * 60)

    tests = [
        test_find_program_address_matches_solders,
        test_lock_cp_authority_is_deterministic,
        test_mainnet_lock_authorities,
        test_create_program_address_with_bump,
        test_invalid_seeds,
        test_associated_token_address,
        test_lock_record_addresses,
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
