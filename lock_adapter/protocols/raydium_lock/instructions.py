"""
Raydium Liquidity-Lock Instruction Builders

Builds lock_cp_liquidity, collect_cp_fees and lock_clmm_position calls.

Account order and signer/writable flags must match the lock program exactly;
the program rejects or misreads any other layout. The payer wallet appears
three times in each list (payer, owner signer, read-only owner) because the
program declares those roles as separate accounts.

Builders never touch the network and never generate keys: the fresh fee NFT
mint is created by the caller and returned as an extra signer.
"""

import logging

from solders.instruction import Instruction, AccountMeta
from solders.pubkey import Pubkey

from ...types import LockCall, ProgramIds
from .encoding import (
    encode_lock_cp_liquidity,
    encode_collect_cp_fees,
    encode_lock_clmm_position,
)
from .pda import (
    derive_lock_cp_authority,
    derive_lock_clmm_authority,
    derive_locked_liquidity,
    derive_locked_position,
    derive_metadata_account,
    derive_cp_swap_authority,
    get_associated_token_address,
)

logger = logging.getLogger(__name__)

LOCK_CP_LIQUIDITY_ACCOUNTS = 18
COLLECT_CP_FEES_ACCOUNTS = 21
LOCK_CLMM_POSITION_ACCOUNTS = 17


def build_lock_cp_liquidity(
    payer: Pubkey,
    fee_nft_mint: Pubkey,
    user_lp_token: Pubkey,
    pool_id: Pubkey,
    lp_mint: Pubkey,
    token_0_vault: Pubkey,
    token_1_vault: Pubkey,
    lp_amount: int,
    with_metadata: bool,
    programs: ProgramIds,
) -> LockCall:
    """
    Build lock_cp_liquidity instruction.

    Locks CP-swap LP tokens under the lock authority and mints a fee NFT to the
    payer that entitles its holder to collect the position's fees.

    Args:
        payer: Wallet paying for and signing the lock
        fee_nft_mint: Freshly generated fee NFT mint (must co-sign)
        user_lp_token: Payer's LP token account
        pool_id: CP-swap pool state
        lp_mint: Pool LP mint
        token_0_vault: Pool vault for token 0
        token_1_vault: Pool vault for token 1
        lp_amount: LP amount to lock (raw units)
        with_metadata: Create Metaplex metadata for the fee NFT
        programs: Program ids

    Returns:
        LockCall with the fee NFT mint as extra signer
    """
    lock_cp_authority, _ = derive_lock_cp_authority(programs)
    locked_liquidity = derive_locked_liquidity(fee_nft_mint, programs)
    metadata_account = derive_metadata_account(fee_nft_mint, programs)
    fee_nft_account = get_associated_token_address(
        payer, fee_nft_mint, programs.token_program, programs.associated_token_program
    )
    locked_lp_vault = get_associated_token_address(
        lock_cp_authority, lp_mint, programs.token_program, programs.associated_token_program
    )

    data = encode_lock_cp_liquidity(lp_amount, with_metadata)

    accounts = [
        AccountMeta(lock_cp_authority, is_signer=False, is_writable=False),          # 0: authority
        AccountMeta(payer, is_signer=True, is_writable=True),                        # 1: payer
        AccountMeta(payer, is_signer=True, is_writable=True),                        # 2: liquidity_owner
        AccountMeta(payer, is_signer=False, is_writable=False),                      # 3: fee_nft_owner
        AccountMeta(fee_nft_mint, is_signer=True, is_writable=True),                 # 4: fee_nft_mint
        AccountMeta(fee_nft_account, is_signer=False, is_writable=True),             # 5: fee_nft_account
        AccountMeta(pool_id, is_signer=False, is_writable=True),                     # 6: pool_state
        AccountMeta(locked_liquidity, is_signer=False, is_writable=True),            # 7: locked_liquidity
        AccountMeta(lp_mint, is_signer=False, is_writable=True),                     # 8: lp_mint
        AccountMeta(user_lp_token, is_signer=False, is_writable=True),               # 9: liquidity_owner_lp
        AccountMeta(locked_lp_vault, is_signer=False, is_writable=True),             # 10: locked_lp_vault
        AccountMeta(token_0_vault, is_signer=False, is_writable=True),               # 11: token_0_vault
        AccountMeta(token_1_vault, is_signer=False, is_writable=True),               # 12: token_1_vault
        AccountMeta(metadata_account, is_signer=False, is_writable=True),            # 13: metadata_account
        AccountMeta(programs.rent_sysvar, is_signer=False, is_writable=False),       # 14: rent
        AccountMeta(programs.system_program, is_signer=False, is_writable=False),    # 15: system_program
        AccountMeta(programs.token_program, is_signer=False, is_writable=False),     # 16: token_program
        AccountMeta(programs.metadata_program, is_signer=False, is_writable=False),  # 17: metadata_program
    ]

    logger.debug(
        f"lock_cp_liquidity: pool={pool_id} fee_nft_mint={fee_nft_mint} "
        f"locked_liquidity={locked_liquidity} lp_amount={lp_amount}"
    )

    instruction = Instruction(programs.lock_program, data, accounts)
    return LockCall(instruction=instruction, extra_signers=(fee_nft_mint,))


def build_collect_cp_fees(
    payer: Pubkey,
    fee_nft_mint: Pubkey,
    fee_nft_account: Pubkey,
    pool_id: Pubkey,
    lp_mint: Pubkey,
    token_0_vault: Pubkey,
    token_1_vault: Pubkey,
    vault_0_mint: Pubkey,
    vault_1_mint: Pubkey,
    user_token_0: Pubkey,
    user_token_1: Pubkey,
    fee_lp_amount: int,
    programs: ProgramIds,
) -> LockCall:
    """
    Build collect_cp_fees instruction.

    Args:
        payer: Wallet holding the fee NFT
        fee_nft_mint: Fee NFT mint of the lock
        fee_nft_account: Payer's token account holding the fee NFT
        pool_id: CP-swap pool state
        lp_mint: Pool LP mint
        token_0_vault: Pool vault for token 0
        token_1_vault: Pool vault for token 1
        vault_0_mint: Token 0 mint
        vault_1_mint: Token 1 mint
        user_token_0: Payer's token 0 account receiving fees
        user_token_1: Payer's token 1 account receiving fees
        fee_lp_amount: LP fee amount to collect (U64_MAX collects everything owed)
        programs: Program ids

    Returns:
        LockCall listing the fee NFT mint as extra signer, since the
        account list flags it as one
    """
    lock_cp_authority, _ = derive_lock_cp_authority(programs)
    cp_swap_authority = derive_cp_swap_authority(programs)
    locked_liquidity = derive_locked_liquidity(fee_nft_mint, programs)
    locked_lp_vault = get_associated_token_address(
        lock_cp_authority, lp_mint, programs.token_program, programs.associated_token_program
    )

    data = encode_collect_cp_fees(fee_lp_amount)

    accounts = [
        AccountMeta(lock_cp_authority, is_signer=False, is_writable=False),           # 0: authority
        AccountMeta(payer, is_signer=True, is_writable=True),                         # 1: fee_nft_owner
        AccountMeta(payer, is_signer=True, is_writable=True),                         # 2: payer
        AccountMeta(payer, is_signer=False, is_writable=False),                       # 3: owner
        AccountMeta(fee_nft_mint, is_signer=True, is_writable=True),                  # 4: fee_nft_mint
        AccountMeta(fee_nft_account, is_signer=False, is_writable=True),              # 5: fee_nft_account
        AccountMeta(locked_liquidity, is_signer=False, is_writable=True),             # 6: locked_liquidity
        AccountMeta(programs.cp_swap_program, is_signer=False, is_writable=True),     # 7: cpmm_program
        AccountMeta(cp_swap_authority, is_signer=False, is_writable=True),            # 8: cp_authority
        AccountMeta(pool_id, is_signer=False, is_writable=True),                      # 9: pool_state
        AccountMeta(lp_mint, is_signer=False, is_writable=True),                      # 10: lp_mint
        AccountMeta(user_token_0, is_signer=False, is_writable=True),                 # 11: recipient_token_0
        AccountMeta(user_token_1, is_signer=False, is_writable=True),                 # 12: recipient_token_1
        AccountMeta(token_0_vault, is_signer=False, is_writable=True),                # 13: token_0_vault
        AccountMeta(token_1_vault, is_signer=False, is_writable=True),                # 14: token_1_vault
        AccountMeta(vault_0_mint, is_signer=False, is_writable=False),                # 15: vault_0_mint
        AccountMeta(vault_1_mint, is_signer=False, is_writable=False),                # 16: vault_1_mint
        AccountMeta(locked_lp_vault, is_signer=False, is_writable=True),              # 17: locked_lp_vault
        AccountMeta(programs.token_program, is_signer=False, is_writable=False),      # 18: token_program
        AccountMeta(programs.token_2022_program, is_signer=False, is_writable=False), # 19: token_program_2022
        AccountMeta(programs.memo_program, is_signer=False, is_writable=False),       # 20: memo_program
    ]

    logger.debug(
        f"collect_cp_fees: pool={pool_id} fee_nft_mint={fee_nft_mint} "
        f"locked_liquidity={locked_liquidity} fee_lp_amount={fee_lp_amount}"
    )

    instruction = Instruction(programs.lock_program, data, accounts)
    return LockCall(instruction=instruction, extra_signers=(fee_nft_mint,))


def build_lock_clmm_position(
    payer: Pubkey,
    fee_nft_mint: Pubkey,
    position_nft_account: Pubkey,
    position_nft_mint: Pubkey,
    personal_position: Pubkey,
    with_metadata: bool,
    programs: ProgramIds,
) -> LockCall:
    """
    Build lock_clmm_position instruction.

    Args:
        payer: Wallet owning the position NFT
        fee_nft_mint: Freshly generated fee NFT mint (must co-sign)
        position_nft_account: Payer's token account holding the position NFT
        position_nft_mint: Position NFT mint
        personal_position: CLMM personal position state
        with_metadata: Create Metaplex metadata for the fee NFT
        programs: Program ids

    Returns:
        LockCall with the fee NFT mint as extra signer
    """
    lock_clmm_authority, _ = derive_lock_clmm_authority(programs)
    locked_position = derive_locked_position(fee_nft_mint, programs)
    metadata_account = derive_metadata_account(fee_nft_mint, programs)
    fee_nft_account = get_associated_token_address(
        payer, fee_nft_mint, programs.token_program, programs.associated_token_program
    )
    locked_nft_account = get_associated_token_address(
        lock_clmm_authority,
        position_nft_mint,
        programs.token_program,
        programs.associated_token_program,
    )

    data = encode_lock_clmm_position(with_metadata)

    accounts = [
        AccountMeta(lock_clmm_authority, is_signer=False, is_writable=False),               # 0: authority
        AccountMeta(payer, is_signer=True, is_writable=True),                               # 1: payer
        AccountMeta(payer, is_signer=True, is_writable=True),                               # 2: position_nft_owner
        AccountMeta(payer, is_signer=False, is_writable=False),                             # 3: fee_nft_owner
        AccountMeta(position_nft_account, is_signer=False, is_writable=True),               # 4: position_nft_account
        AccountMeta(personal_position, is_signer=False, is_writable=True),                  # 5: personal_position
        AccountMeta(position_nft_mint, is_signer=False, is_writable=True),                  # 6: position_nft_mint
        AccountMeta(locked_nft_account, is_signer=False, is_writable=True),                 # 7: locked_nft_account
        AccountMeta(locked_position, is_signer=False, is_writable=True),                    # 8: locked_position
        AccountMeta(fee_nft_mint, is_signer=True, is_writable=True),                        # 9: fee_nft_mint
        AccountMeta(fee_nft_account, is_signer=False, is_writable=True),                    # 10: fee_nft_account
        AccountMeta(metadata_account, is_signer=False, is_writable=True),                   # 11: metadata_account
        AccountMeta(programs.metadata_program, is_signer=False, is_writable=False),         # 12: metadata_program
        AccountMeta(programs.associated_token_program, is_signer=False, is_writable=False), # 13: associated_token_program
        AccountMeta(programs.rent_sysvar, is_signer=False, is_writable=False),              # 14: rent
        AccountMeta(programs.token_program, is_signer=False, is_writable=False),            # 15: token_program
        AccountMeta(programs.system_program, is_signer=False, is_writable=False),           # 16: system_program
    ]

    logger.debug(
        f"lock_clmm_position: position={personal_position} fee_nft_mint={fee_nft_mint} "
        f"locked_position={locked_position}"
    )

    instruction = Instruction(programs.lock_program, data, accounts)
    return LockCall(instruction=instruction, extra_signers=(fee_nft_mint,))
