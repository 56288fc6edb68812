"""
Base DEX adapter interface

Every DEX family implements this interface so the swap/liquidity modules and the
orchestrator never branch on chain identifiers. An adapter only builds plans; it never
talks to a wallet.
"""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional, Union

from ..abi.erc20 import (
    encode_allowance,
    encode_approve,
    encode_transfer,
    ALLOWANCE_SIGNATURE,
    APPROVE_SIGNATURE,
    TRANSFER_SIGNATURE,
    tron_allowance_parameters,
    tron_approve_parameters,
    tron_transfer_parameters,
)
from ..config import config as global_config
from ..errors import OperationNotSupported, UnsupportedToken
from ..modules.fees import FeeSplit, deadline as make_deadline, fee_wallet_for
from ..registry import is_native, resolve_token
from ..types import (
    ApprovalRequest,
    Call,
    ChainFamily,
    ChainProfile,
    ContractCall,
    DexKind,
    LiquidityPlan,
    MintRequest,
    NeoInvocation,
    Position,
    Quote,
    SwapIntent,
    SwapPlan,
    Token,
    TxKind,
)

logger = logging.getLogger(__name__)

# NEO witness scope: CustomContracts
NEO_SCOPE_CUSTOM_CONTRACTS = 16


class DexAdapter(ABC):
    """
    Abstract base class for DEX adapters

    Each adapter provides:
    - Swap plan building (approval, fee transfer, swap call)
    - Liquidity plan building (mint / increase / decrease / collect)

    Operations a DEX family does not offer raise OperationNotSupported.
    """

    # Adapter identifier
    name: str = "base"

    # DEX family this adapter encodes for
    kind: Optional[DexKind] = None

    def __init__(self, profile: ChainProfile):
        """
        Initialize adapter for a chain

        Args:
            profile: Chain profile (router / position manager addresses, deadlines)
        """
        self._profile = profile

    @property
    def profile(self) -> ChainProfile:
        return self._profile

    @property
    def chain(self) -> str:
        return self._profile.key

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._profile.key})"

    # ========== Swap ==========

    @abstractmethod
    def build_swap(self, intent: SwapIntent, split: FeeSplit, quote: Quote, sender: str) -> SwapPlan:
        """
        Build a swap plan

        Args:
            intent: User swap request
            split: Fee split of the input amount
            quote: Quote for split.swap_amount
            sender: Wallet address

        Returns:
            SwapPlan ready for the orchestrator
        """
        ...

    # ========== Liquidity ==========

    def build_mint(self, request: MintRequest) -> LiquidityPlan:
        raise OperationNotSupported.not_implemented("build_mint", self.name)

    def build_increase(
        self,
        position: Position,
        amount0: int,
        amount1: int,
        slippage_percent: Decimal,
        sender: str,
    ) -> LiquidityPlan:
        raise OperationNotSupported.not_implemented("build_increase", self.name)

    def build_decrease(
        self,
        position: Position,
        percent: int,
        slippage_percent: Decimal,
        sender: str,
        expected_amounts: Optional[tuple] = None,
    ) -> LiquidityPlan:
        raise OperationNotSupported.not_implemented("build_decrease", self.name)

    def build_collect(self, position: Position, recipient: str) -> LiquidityPlan:
        raise OperationNotSupported.not_implemented("build_collect", self.name)

    # ========== Shared helpers ==========

    def is_native(self, token: Union[Token, str]) -> bool:
        address = token.address if isinstance(token, Token) else token
        return is_native(self._profile, address)

    def token_for(self, address: str) -> Token:
        """Registry token for an address, or a bare descriptor for unlisted tokens"""
        try:
            return resolve_token(self._profile, address)
        except UnsupportedToken:
            logger.debug(f"Token {address} not in {self.chain} registry, using bare descriptor")
            return Token(address=address, symbol=address[:10], decimals=18, chain_id=self._profile.chain_id)

    def swap_deadline(self, intent: Optional[SwapIntent] = None, now: Optional[float] = None) -> int:
        offset = self._profile.swap_deadline_seconds
        if intent is not None and intent.deadline_offset_seconds:
            offset = intent.deadline_offset_seconds
        return make_deadline(offset, now)

    def lp_deadline(self, now: Optional[float] = None) -> int:
        return make_deadline(self._profile.lp_deadline_seconds, now)

    def approval_for(self, token: Token, spender: str, amount: int, exact: bool = True) -> Optional[ApprovalRequest]:
        """Approval request, or None for the native asset and NEP-17 tokens"""
        if amount <= 0 or self.is_native(token) or self._profile.family == ChainFamily.NEO:
            return None
        return ApprovalRequest(token=token, spender=spender, amount=amount, exact=exact)

    def build_approve_call(self, approval: ApprovalRequest) -> ContractCall:
        """approve(spender, amount) on the approval token"""
        if self._profile.family == ChainFamily.TRON:
            return ContractCall(
                to=approval.token.address,
                kind=TxKind.APPROVE,
                function_signature=APPROVE_SIGNATURE,
                parameters=tron_approve_parameters(approval.spender, approval.approve_amount),
                fee_limit=global_config.tron.approve_fee_limit,
            )
        return ContractCall(
            to=approval.token.address,
            data=encode_approve(approval.spender, approval.approve_amount),
            kind=TxKind.APPROVE,
        )

    def build_allowance_query(self, token: Token, owner: str, spender: str) -> ContractCall:
        """Read-only allowance(owner, spender) call"""
        if self._profile.family == ChainFamily.TRON:
            return ContractCall(
                to=token.address,
                kind=TxKind.APPROVE,
                function_signature=ALLOWANCE_SIGNATURE,
                parameters=tron_allowance_parameters(owner, spender),
            )
        return ContractCall(to=token.address, data=encode_allowance(owner, spender), kind=TxKind.APPROVE)

    def build_fee_call(self, token: Token, fee_amount: int, sender: str) -> Optional[Call]:
        """
        Protocol fee transfer in the input token

        Native: plain value transfer to the fee wallet. Token: ERC-20 / TRC-20 transfer,
        or a NEP-17 transfer invocation on NEO. Returns None when there is nothing to send.
        """
        wallet = fee_wallet_for(self._profile)
        if fee_amount <= 0 or not wallet:
            return None

        family = self._profile.family
        if family == ChainFamily.NEO:
            return self.nep17_transfer(token.address, sender, wallet, fee_amount, kind=TxKind.FEE_TRANSFER)

        if self.is_native(token):
            return ContractCall(
                to=wallet,
                value=fee_amount,
                kind=TxKind.FEE_TRANSFER,
                fee_limit=global_config.tron.transfer_fee_limit if family == ChainFamily.TRON else None,
            )

        if family == ChainFamily.TRON:
            return ContractCall(
                to=token.address,
                kind=TxKind.FEE_TRANSFER,
                function_signature=TRANSFER_SIGNATURE,
                parameters=tron_transfer_parameters(wallet, fee_amount),
                fee_limit=global_config.tron.transfer_fee_limit,
            )
        return ContractCall(
            to=token.address,
            data=encode_transfer(wallet, fee_amount),
            kind=TxKind.FEE_TRANSFER,
        )

    def nep17_transfer(
        self,
        token_hash: str,
        sender: str,
        to: str,
        amount: int,
        kind: TxKind = TxKind.TRANSFER,
    ) -> NeoInvocation:
        """NEP-17 transfer(from, to, amount, data) scoped to the token and router"""
        return NeoInvocation(
            script_hash=token_hash,
            operation="transfer",
            args=(
                {"type": "Address", "value": sender},
                {"type": "Hash160", "value": to},
                {"type": "Integer", "value": str(amount)},
                {"type": "Any", "value": None},
            ),
            signers=(
                {
                    "account": sender,
                    "scopes": NEO_SCOPE_CUSTOM_CONTRACTS,
                    "allowedContracts": [token_hash, self._profile.router_address],
                },
            ),
            kind=kind,
        )
