"""
Result type definitions for built lock instructions
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from solders.instruction import AccountMeta, Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey


@dataclass(frozen=True)
class LockCall:
    """
    A fully assembled lock program call, ready for signing

    Attributes:
        instruction: Program id, ordered account metas and encoded data
        extra_signers: Signer addresses this call introduces beyond the payer
            (e.g. a freshly generated fee NFT mint)
    """
    instruction: Instruction
    extra_signers: Tuple[Pubkey, ...] = ()

    @property
    def program_id(self) -> Pubkey:
        return self.instruction.program_id

    @property
    def accounts(self) -> List[AccountMeta]:
        return list(self.instruction.accounts)

    @property
    def data(self) -> bytes:
        return bytes(self.instruction.data)

    def signer_keys(self) -> List[Pubkey]:
        """Distinct addresses flagged as signers, in account order"""
        keys: List[Pubkey] = []
        for meta in self.instruction.accounts:
            if meta.is_signer and meta.pubkey not in keys:
                keys.append(meta.pubkey)
        return keys

    def __str__(self) -> str:
        return (
            f"LockCall(program={self.program_id}, accounts={len(self.instruction.accounts)}, "
            f"data={len(self.instruction.data)}B)"
        )


@dataclass
class LockCommandResult:
    """
    Output of one orchestrated lock command

    Attributes:
        calls: Built calls, in execution order
        signers: Every address that must sign (payer first, then each call's
            extra signers, deduplicated)
        new_keypairs: Keypairs generated during the command, keyed by base58
            pubkey, to hand to the signing collaborator
        fee_nft_mint: The fee NFT mint the command created or used
    """
    calls: List[LockCall]
    signers: List[Pubkey]
    new_keypairs: Dict[str, Keypair] = field(default_factory=dict)
    fee_nft_mint: Optional[Pubkey] = None

    @property
    def instructions(self) -> List[Instruction]:
        return [call.instruction for call in self.calls]

    @classmethod
    def merge(
        cls,
        payer: Pubkey,
        calls: List[LockCall],
        new_keypairs: Optional[Dict[str, Keypair]] = None,
        fee_nft_mint: Optional[Pubkey] = None,
    ) -> "LockCommandResult":
        """Combine calls, merging their extra signers after the payer"""
        signers = [payer]
        for call in calls:
            for key in call.extra_signers:
                if key not in signers:
                    signers.append(key)
        return cls(
            calls=list(calls),
            signers=signers,
            new_keypairs=dict(new_keypairs or {}),
            fee_nft_mint=fee_nft_mint,
        )
