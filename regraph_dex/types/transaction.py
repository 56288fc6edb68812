"""
Transaction and plan type definitions

A plan is what a DEX adapter produces and the orchestrator consumes: the approvals to
check, an optional fee transfer, and the ordered calls to submit.
"""

import time
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from ..codec import UINT256_MAX
from .common import Token
from .result import Quote, TxStatus

if TYPE_CHECKING:
    from .position import LiquidityRange


class TxKind(Enum):
    """What a submitted transaction does"""
    APPROVE = "approve"
    FEE_TRANSFER = "fee_transfer"
    SWAP = "swap"
    MINT = "mint"
    INCREASE_LIQUIDITY = "increase_liquidity"
    DECREASE_LIQUIDITY = "decrease_liquidity"
    COLLECT = "collect"
    TRANSFER = "transfer"


@dataclass(frozen=True)
class ContractCall:
    """
    A contract call for EVM or TRON wallets

    EVM wallets use ``to``/``data``/``value``. TRON wallets use ``function_signature``,
    ``parameters`` ([{type, value}, ...]) and ``fee_limit`` (sun) and ignore ``data``.
    A call with empty ``data`` and no signature is a plain value transfer.
    """
    to: str
    data: str = "0x"
    value: int = 0
    kind: TxKind = TxKind.SWAP
    function_signature: Optional[str] = None
    parameters: tuple = ()
    fee_limit: Optional[int] = None

    @property
    def is_value_transfer(self) -> bool:
        return self.data in ("", "0x") and self.function_signature is None

    @property
    def selector(self) -> Optional[str]:
        if len(self.data) < 10:
            return None
        return self.data[:10]

    def to_tx_params(self, sender: str) -> Dict[str, Any]:
        """eth_sendTransaction parameter object"""
        params = {"from": sender, "to": self.to, "value": hex(self.value)}
        if not self.is_value_transfer:
            params["data"] = self.data
        return params


@dataclass(frozen=True)
class NeoInvocation:
    """
    A NeoLine ``invoke`` request

    Attributes:
        script_hash: Contract script hash
        operation: Contract method
        args: [{type, value}, ...]
        signers: [{account, scopes, allowedContracts}, ...]
        kind: What the invocation does
    """
    script_hash: str
    operation: str
    args: tuple = ()
    signers: tuple = ()
    kind: TxKind = TxKind.TRANSFER

    def to_request(self) -> Dict[str, Any]:
        return {
            "scriptHash": self.script_hash,
            "operation": self.operation,
            "args": [dict(a) for a in self.args],
            "signers": [dict(s) for s in self.signers],
        }


Call = Union[ContractCall, NeoInvocation]


@dataclass
class PendingTransaction:
    """
    A submitted transaction and its last known status

    Attributes:
        tx_hash: Transaction hash / txid
        kind: What the transaction does
        chain: Chain key
        submitted_at: Unix time of submission
        status: Last known status
        explorer_url: Explorer link
    """
    tx_hash: str
    kind: TxKind
    chain: str
    submitted_at: float = field(default_factory=time.time)
    status: TxStatus = TxStatus.PENDING
    explorer_url: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.tx_hash[:12]}...({self.status.value})"


@dataclass
class SwapIntent:
    """
    A user's request to swap

    Attributes:
        token_in: Symbol or address of the input token
        token_out: Symbol or address of the output token
        amount_in_human: Amount as typed by the user ("1.5")
        chain: Chain key or id
        slippage_bps: Max slippage in basis points
        deadline_offset_seconds: Overrides the chain's swap deadline when set
        recipient: Receiver of the output, defaults to the wallet address
    """
    token_in: str
    token_out: str
    amount_in_human: str
    chain: Union[str, int]
    slippage_bps: int = 50
    deadline_offset_seconds: Optional[int] = None
    recipient: Optional[str] = None


@dataclass(frozen=True)
class ApprovalRequest:
    """Allowance the spender needs before a plan's calls can run"""
    token: Token
    spender: str
    amount: int
    exact: bool = True

    @property
    def approve_amount(self) -> int:
        """Exact amount for swaps, unlimited (max uint256) for LP"""
        return self.amount if self.exact else UINT256_MAX


@dataclass
class SwapPlan:
    """
    Everything the orchestrator needs to execute a swap

    The fee call is submitted and confirmed before the swap call.
    """
    chain: str
    token_in: Token
    token_out: Token
    amount_in: int
    fee_amount: int
    swap_amount: int
    min_amount_out: int
    swap_call: Call
    quote: Optional[Quote] = None
    approval: Optional[ApprovalRequest] = None
    fee_call: Optional[Call] = None
    deadline: Optional[int] = None

    @property
    def expected_out_ui(self) -> Decimal:
        if self.quote is None:
            return Decimal(0)
        return Decimal(self.quote.amount_out).scaleb(-self.quote.decimals_out)


@dataclass
class LiquidityPlan:
    """
    Approvals followed by one or more LP calls, each polled in turn

    Attributes:
        chain: Chain key
        kind: Primary operation kind
        calls: Calls in submission order
        approvals: Allowances to ensure first
        description: Human-readable summary for logs
        deep_link: DEX UI link for the pool, when the DEX has one
    """
    chain: str
    kind: TxKind
    calls: List[Call]
    approvals: List[ApprovalRequest] = field(default_factory=list)
    description: str = ""
    deep_link: Optional[str] = None


@dataclass
class MintRequest:
    """
    A request to open a liquidity position

    Tick-based DEXes use ``liquidity_range`` (or ``price_lower``/``price_upper`` with
    ``fee``); bin-based DEXes use ``active_id``, ``bin_step``, ``bins_range`` and ``shape``.

    Attributes:
        token_a: First token (any order)
        token_b: Second token
        amount_a: Desired token_a deposit (smallest units)
        amount_b: Desired token_b deposit (smallest units)
        fee: Pool fee tier
        price_lower: Lower price bound (token_b per token_a, raw units)
        price_upper: Upper price bound
        slippage_percent: Max LP slippage in percent ("0.5")
        recipient: Position owner
        liquidity_range: Precomputed tick range, overrides the price bounds
        active_id: Liquidity Book active bin
        bin_step: Liquidity Book bin step
        bins_range: Bins on each side of the active bin
        shape: Distribution shape ("uniform", "curve", "bid-ask")
    """
    token_a: Token
    token_b: Token
    amount_a: int
    amount_b: int
    recipient: str
    fee: Optional[int] = None
    price_lower: Optional[Decimal] = None
    price_upper: Optional[Decimal] = None
    slippage_percent: Decimal = Decimal("0.5")
    liquidity_range: Optional["LiquidityRange"] = None
    active_id: Optional[int] = None
    bin_step: Optional[int] = None
    bins_range: Optional[int] = None
    shape: str = "uniform"
