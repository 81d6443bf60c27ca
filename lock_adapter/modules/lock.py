"""
Lock Module

Orchestrates the liquidity-lock commands: reads the chain state each command
needs, generates the fee NFT mint where one is created, and returns built
calls together with the signers they require.
"""

import logging
from typing import Callable, Optional, Union

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from ..config import config
from ..errors import AccountNotFound
from ..infra import RpcClient, Signer, generate_fee_nft_mint
from ..protocols.raydium_lock import (
    U64_MAX,
    CpPoolState,
    TokenAccount,
    LockedCpLiquidityState,
    LockedClmmPositionState,
    build_lock_cp_liquidity,
    build_collect_cp_fees,
    build_lock_clmm_position,
    derive_locked_liquidity,
    derive_locked_position,
    derive_personal_position,
    get_associated_token_address,
)
from ..types import LockCommandResult, ProgramIds

logger = logging.getLogger(__name__)

Address = Union[str, Pubkey]


def _to_pubkey(address: Address) -> Pubkey:
    if isinstance(address, Pubkey):
        return address
    return Pubkey.from_string(address)


class LockModule:
    """
    Liquidity-lock operations module

    Provides:
    - Lock CP-swap LP tokens behind a fee NFT
    - Collect CP-swap fees as the fee NFT holder
    - Lock a CLMM position NFT behind a fee NFT
    - Read locked liquidity / locked position records

    Usage:
        client = LockClient(rpc_url, keypair_path="~/.config/solana/id.json")

        result = client.lock.lock_cp_liquidity(pool_id, lp_account, 1_000_000)
        # result.instructions -> hand to a transaction builder
        # result.new_keypairs -> fee NFT mint keypair, must co-sign

        result = client.lock.collect_cp_fees(fee_nft_account)
    """

    def __init__(
        self,
        rpc: RpcClient,
        signer: Signer,
        programs: Optional[ProgramIds] = None,
        keypair_factory: Callable[[], Keypair] = generate_fee_nft_mint,
    ):
        """
        Initialize lock module

        Args:
            rpc: Chain reader
            signer: Wallet paying for and signing the commands
            programs: Program ids (defaults to the configured ones)
            keypair_factory: Source of fresh fee NFT mint keypairs
        """
        self._rpc = rpc
        self._signer = signer
        self._programs = programs or config.programs.to_program_ids()
        self._keypair_factory = keypair_factory

    @property
    def payer(self) -> Pubkey:
        """Payer wallet address"""
        return Pubkey.from_string(self._signer.pubkey)

    @property
    def programs(self) -> ProgramIds:
        return self._programs

    def _token_account(self, address: Pubkey, what: str) -> TokenAccount:
        return self._rpc.get_typed_account(
            address,
            TokenAccount.from_account_data,
            owner=(self._programs.token_program, self._programs.token_2022_program),
            what=what,
        )

    def _cp_pool(self, pool_id: Pubkey) -> CpPoolState:
        return self._rpc.get_typed_account(
            pool_id,
            CpPoolState.from_account_data,
            owner=self._programs.cp_swap_program,
            what="CP-swap pool",
        )

    def lock_cp_liquidity(
        self,
        pool_id: Address,
        lp_token_account: Address,
        lp_amount: int,
        with_metadata: bool = False,
    ) -> LockCommandResult:
        """
        Lock CP-swap LP tokens

        Args:
            pool_id: CP-swap pool address
            lp_token_account: Payer's LP token account
            lp_amount: LP amount to lock (raw units)
            with_metadata: Create Metaplex metadata for the fee NFT

        Returns:
            LockCommandResult with the generated fee NFT mint keypair

        Raises:
            AccountNotFound: If the pool does not exist or is not a CP-swap pool
            AccountDecodeError: If the pool data cannot be parsed
        """
        pool_id = _to_pubkey(pool_id)
        pool = self._cp_pool(pool_id)

        fee_nft = self._keypair_factory()
        fee_nft_mint = fee_nft.pubkey()

        call = build_lock_cp_liquidity(
            payer=self.payer,
            fee_nft_mint=fee_nft_mint,
            user_lp_token=_to_pubkey(lp_token_account),
            pool_id=pool_id,
            lp_mint=pool.lp_mint,
            token_0_vault=pool.token_0_vault,
            token_1_vault=pool.token_1_vault,
            lp_amount=lp_amount,
            with_metadata=with_metadata,
            programs=self._programs,
        )

        logger.info(f"Built lock_cp_liquidity: pool={pool_id} lp_amount={lp_amount} fee_nft_mint={fee_nft_mint}")
        return LockCommandResult.merge(
            self.payer,
            [call],
            new_keypairs={str(fee_nft_mint): fee_nft},
            fee_nft_mint=fee_nft_mint,
        )

    def collect_cp_fees(
        self,
        fee_nft_account: Address,
        fee_lp_amount: int = U64_MAX,
    ) -> LockCommandResult:
        """
        Collect fees of a locked CP-swap position

        Args:
            fee_nft_account: Payer's token account holding the fee NFT
            fee_lp_amount: LP fee amount to collect (default: everything owed)

        Returns:
            LockCommandResult for the collect call

        Raises:
            AccountNotFound: If an account is missing, the fee NFT account is
                not a token account, or the locked record belongs to a
                different fee NFT
        """
        fee_nft_account = _to_pubkey(fee_nft_account)
        fee_nft_mint = self._token_account(fee_nft_account, "Fee NFT account").mint

        locked_address = derive_locked_liquidity(fee_nft_mint, self._programs)
        locked = self._rpc.get_typed_account(
            locked_address,
            LockedCpLiquidityState.from_account_data,
            owner=self._programs.lock_program,
            what="Locked liquidity",
        )
        if locked.fee_nft_mint != fee_nft_mint:
            raise AccountNotFound.state_mismatch(
                str(locked_address),
                f"fee NFT mint {locked.fee_nft_mint} does not match {fee_nft_mint}",
            )

        pool = self._cp_pool(locked.pool_id)

        user_token_0 = get_associated_token_address(
            self.payer, pool.token_0_mint, pool.token_0_program, self._programs.associated_token_program
        )
        user_token_1 = get_associated_token_address(
            self.payer, pool.token_1_mint, pool.token_1_program, self._programs.associated_token_program
        )

        call = build_collect_cp_fees(
            payer=self.payer,
            fee_nft_mint=fee_nft_mint,
            fee_nft_account=fee_nft_account,
            pool_id=locked.pool_id,
            lp_mint=pool.lp_mint,
            token_0_vault=pool.token_0_vault,
            token_1_vault=pool.token_1_vault,
            vault_0_mint=pool.token_0_mint,
            vault_1_mint=pool.token_1_mint,
            user_token_0=user_token_0,
            user_token_1=user_token_1,
            fee_lp_amount=fee_lp_amount,
            programs=self._programs,
        )

        logger.info(f"Built collect_cp_fees: pool={locked.pool_id} fee_nft_mint={fee_nft_mint}")
        return LockCommandResult.merge(self.payer, [call], fee_nft_mint=fee_nft_mint)

    def lock_clmm_position(
        self,
        position_nft_account: Address,
        with_metadata: bool = False,
    ) -> LockCommandResult:
        """
        Lock a CLMM position NFT

        Args:
            position_nft_account: Payer's token account holding the position NFT
            with_metadata: Create Metaplex metadata for the fee NFT

        Returns:
            LockCommandResult with the generated fee NFT mint keypair

        Raises:
            AccountNotFound: If the NFT account or its personal position is
                missing, or the NFT account is not owned by a token program
        """
        position_nft_account = _to_pubkey(position_nft_account)
        position_nft_mint = self._token_account(position_nft_account, "Position NFT account").mint

        personal_position = derive_personal_position(position_nft_mint, self._programs)
        if self._rpc.get_account_data(personal_position, owner=self._programs.clmm_program) is None:
            raise AccountNotFound.not_found(str(personal_position), "CLMM personal position")

        fee_nft = self._keypair_factory()
        fee_nft_mint = fee_nft.pubkey()

        call = build_lock_clmm_position(
            payer=self.payer,
            fee_nft_mint=fee_nft_mint,
            position_nft_account=position_nft_account,
            position_nft_mint=position_nft_mint,
            personal_position=personal_position,
            with_metadata=with_metadata,
            programs=self._programs,
        )

        logger.info(f"Built lock_clmm_position: position={personal_position} fee_nft_mint={fee_nft_mint}")
        return LockCommandResult.merge(
            self.payer,
            [call],
            new_keypairs={str(fee_nft_mint): fee_nft},
            fee_nft_mint=fee_nft_mint,
        )

    def get_locked_liquidity(self, fee_nft_mint: Address) -> LockedCpLiquidityState:
        """Read the locked liquidity record behind a fee NFT mint"""
        address = derive_locked_liquidity(_to_pubkey(fee_nft_mint), self._programs)
        return self._rpc.get_typed_account(
            address,
            LockedCpLiquidityState.from_account_data,
            owner=self._programs.lock_program,
            what="Locked liquidity",
        )

    def get_locked_position(self, fee_nft_mint: Address) -> LockedClmmPositionState:
        """Read the locked CLMM position record behind a fee NFT mint"""
        address = derive_locked_position(_to_pubkey(fee_nft_mint), self._programs)
        return self._rpc.get_typed_account(
            address,
            LockedClmmPositionState.from_account_data,
            owner=self._programs.lock_program,
            what="Locked position",
        )
