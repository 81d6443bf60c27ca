"""
Program identifier bundle passed to instruction builders
"""

from dataclasses import dataclass

from solders.pubkey import Pubkey


@dataclass(frozen=True)
class ProgramIds:
    """
    Every external program address the lock builders reference

    Built from configuration (ProgramConfig.to_program_ids()), never hardcoded
    inside a builder.
    """
    lock_program: Pubkey
    cp_swap_program: Pubkey
    clmm_program: Pubkey
    token_program: Pubkey
    token_2022_program: Pubkey
    associated_token_program: Pubkey
    metadata_program: Pubkey
    memo_program: Pubkey
    system_program: Pubkey
    rent_sysvar: Pubkey
