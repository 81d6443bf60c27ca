"""
Program-Derived Address helpers for the Raydium lock program

Addresses are derived the same way the Solana runtime does it: SHA-256 over
the seeds, a bump byte, the owning program id and the "ProgramDerivedAddress"
marker. A candidate is only valid when it lies off the ed25519 curve, so
find_program_address walks bump values from 255 down until one succeeds.
"""

import hashlib
import logging
from typing import List, Sequence, Tuple

from solders.pubkey import Pubkey

from ...errors import DerivationError
from ...types.programs import ProgramIds
from .constants import (
    LOCK_CP_AUTH_SEED,
    LOCK_CLMM_AUTH_SEED,
    LOCKED_LIQUIDITY_SEED,
    LOCKED_POSITION_SEED,
    METADATA_PREFIX,
    CP_SWAP_AUTH_SEED,
    CLMM_POSITION_SEED,
)

logger = logging.getLogger(__name__)

PDA_MARKER = b"ProgramDerivedAddress"
MAX_SEED_LEN = 32
MAX_SEEDS = 16


def _check_seeds(seeds: Sequence[bytes]) -> List[bytes]:
    # The runtime counts the bump as one of the MAX_SEEDS
    if len(seeds) >= MAX_SEEDS:
        raise DerivationError.invalid_seed(f"{len(seeds)} seeds given, at most {MAX_SEEDS - 1} allowed")
    checked = []
    for index, seed in enumerate(seeds):
        seed = bytes(seed)
        if len(seed) > MAX_SEED_LEN:
            raise DerivationError.invalid_seed(
                f"seed {index} is {len(seed)} bytes, max is {MAX_SEED_LEN}"
            )
        checked.append(seed)
    return checked


def _hash_seeds(seeds: Sequence[bytes], program_id: Pubkey) -> Pubkey:
    hasher = hashlib.sha256()
    for seed in seeds:
        hasher.update(seed)
    hasher.update(bytes(program_id))
    hasher.update(PDA_MARKER)
    return Pubkey.from_bytes(hasher.digest())


def create_program_address(seeds: Sequence[bytes], program_id: Pubkey) -> Pubkey:
    """
    Derive a program address from a complete seed set (bump included).

    Args:
        seeds: Seed byte strings, including the bump as the last seed
        program_id: Owning program

    Returns:
        Derived address

    Raises:
        DerivationError: If the seeds are malformed or the result is on the curve
    """
    checked = [bytes(seed) for seed in seeds]
    if len(checked) > MAX_SEEDS:
        raise DerivationError.invalid_seed(f"{len(checked)} seeds given, at most {MAX_SEEDS} allowed")
    for index, seed in enumerate(checked):
        if len(seed) > MAX_SEED_LEN:
            raise DerivationError.invalid_seed(
                f"seed {index} is {len(seed)} bytes, max is {MAX_SEED_LEN}"
            )

    address = _hash_seeds(checked, program_id)
    if address.is_on_curve():
        raise DerivationError.on_curve(str(program_id))
    return address


def find_program_address(seeds: Sequence[bytes], program_id: Pubkey) -> Tuple[Pubkey, int]:
    """
    Find the canonical program-derived address for a seed set.

    Tries bump 255 first and walks down to 0, returning the first address
    that is off the ed25519 curve.

    Args:
        seeds: Seed byte strings (without bump)
        program_id: Owning program

    Returns:
        (address, bump)

    Raises:
        DerivationError: If the seeds are malformed or no bump yields a valid address
    """
    checked = _check_seeds(seeds)

    for bump in range(255, -1, -1):
        candidate = _hash_seeds(checked + [bytes([bump])], program_id)
        if not candidate.is_on_curve():
            return candidate, bump

    raise DerivationError.no_viable_bump(str(program_id))


def get_associated_token_address(
    owner: Pubkey,
    mint: Pubkey,
    token_program: Pubkey,
    associated_token_program: Pubkey,
) -> Pubkey:
    """
    Get associated token account address.

    Args:
        owner: Wallet (or PDA) owning the token account
        mint: Token mint
        token_program: Token program the mint belongs to
        associated_token_program: Associated token account program

    Returns:
        ATA address
    """
    seeds = [
        bytes(owner),
        bytes(token_program),
        bytes(mint),
    ]
    address, _ = find_program_address(seeds, associated_token_program)
    return address


def derive_lock_cp_authority(programs: ProgramIds) -> Tuple[Pubkey, int]:
    """Authority PDA that owns locked CP-swap LP tokens"""
    return find_program_address([LOCK_CP_AUTH_SEED], programs.lock_program)


def derive_lock_clmm_authority(programs: ProgramIds) -> Tuple[Pubkey, int]:
    """Authority PDA that owns locked CLMM position NFTs"""
    return find_program_address([LOCK_CLMM_AUTH_SEED], programs.lock_program)


def derive_locked_liquidity(fee_nft_mint: Pubkey, programs: ProgramIds) -> Pubkey:
    """LockedCpLiquidityState record address for a fee NFT mint"""
    address, _ = find_program_address(
        [LOCKED_LIQUIDITY_SEED, bytes(fee_nft_mint)],
        programs.lock_program,
    )
    return address


def derive_locked_position(fee_nft_mint: Pubkey, programs: ProgramIds) -> Pubkey:
    """LockedClmmPositionState record address for a fee NFT mint"""
    address, _ = find_program_address(
        [LOCKED_POSITION_SEED, bytes(fee_nft_mint)],
        programs.lock_program,
    )
    return address


def derive_metadata_account(mint: Pubkey, programs: ProgramIds) -> Pubkey:
    """Metaplex metadata account for a mint"""
    address, _ = find_program_address(
        [METADATA_PREFIX, bytes(programs.metadata_program), bytes(mint)],
        programs.metadata_program,
    )
    return address


def derive_cp_swap_authority(programs: ProgramIds) -> Pubkey:
    """Vault and LP mint authority of the CP-swap program"""
    address, _ = find_program_address([CP_SWAP_AUTH_SEED], programs.cp_swap_program)
    return address


def derive_personal_position(position_nft_mint: Pubkey, programs: ProgramIds) -> Pubkey:
    """
    Derive CLMM personal position PDA from its NFT mint.

    Args:
        position_nft_mint: Position NFT mint
        programs: Program ids

    Returns:
        Personal position address
    """
    address, _ = find_program_address(
        [CLMM_POSITION_SEED, bytes(position_nft_mint)],
        programs.clmm_program,
    )
    return address
