"""
Liquidity Module

Opens, increases, removes and collects liquidity positions through the chain's
liquidity adapter (Uniswap V3 style NPM, Trader Joe Liquidity Book, Flamingo).
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from ..client import DexClient

from ..config import config
from ..protocols.registry import PURPOSE_LIQUIDITY, adapter_for
from ..types import LiquidityPlan, LiquidityRange, MintRequest, Position, Token
from .orchestrator import OperationOutcome
from .positions import PositionReader

logger = logging.getLogger(__name__)


def _default_lp_slippage() -> Decimal:
    return Decimal(config.trading.default_lp_slippage_bps) / 100


class LiquidityModule:
    """
    Liquidity operations on the client's chain

    Every operation builds a LiquidityPlan and runs it through the orchestrator:
    approvals first, then each call submitted and polled in order.

    Usage:
        outcome = client.liquidity.open_position(
            "WBNB", "USDT", "1", "600",
            price_lower=Decimal("550"), price_upper=Decimal("650"), fee=2500,
        )
        for position in client.liquidity.positions():
            client.liquidity.collect(position)
    """

    def __init__(self, client: "DexClient"):
        """
        Initialize liquidity module

        Args:
            client: DexClient instance
        """
        self._client = client

    @property
    def owner(self) -> str:
        """Owner wallet address"""
        return self._client.address

    @property
    def adapter(self):
        return adapter_for(self._client.profile, PURPOSE_LIQUIDITY)

    def _execute(self, plan: LiquidityPlan) -> OperationOutcome:
        logger.info(f"[{plan.chain}] {plan.description} ({len(plan.calls)} calls, {len(plan.approvals)} approvals)")
        return self._client.orchestrator.execute_calls(plan)

    # =========================================================================
    # Open
    # =========================================================================

    def prepare_open(
        self,
        token_a: Union[str, Token],
        token_b: Union[str, Token],
        amount_a: str,
        amount_b: str,
        price_lower: Optional[Decimal] = None,
        price_upper: Optional[Decimal] = None,
        fee: Optional[int] = None,
        slippage_percent: Optional[Decimal] = None,
        liquidity_range: Optional[LiquidityRange] = None,
        active_id: Optional[int] = None,
        bin_step: Optional[int] = None,
        bins_range: Optional[int] = None,
        shape: str = "uniform",
    ) -> LiquidityPlan:
        """
        Build the mint plan without touching the wallet

        Args:
            token_a: Symbol, address or Token
            token_b: Symbol, address or Token
            amount_a: UI amount of token_a ("1.5", "0" for one-sided)
            amount_b: UI amount of token_b
            price_lower: Lower bound, token_b per token_a (tick-based DEXes)
            price_upper: Upper bound
            fee: Pool fee tier, the chain default when omitted
            slippage_percent: LP slippage in percent
            liquidity_range: Precomputed tick range, overrides the price bounds
            active_id: Active bin (Liquidity Book)
            bin_step: Bin step (Liquidity Book)
            bins_range: Bins on each side of the active bin (Liquidity Book)
            shape: Bin distribution shape (Liquidity Book)
        """
        profile = self._client.profile
        token_a = token_a if isinstance(token_a, Token) else self._client.resolve_token(token_a, profile)
        token_b = token_b if isinstance(token_b, Token) else self._client.resolve_token(token_b, profile)

        request = MintRequest(
            token_a=token_a,
            token_b=token_b,
            amount_a=token_a.raw_amount(amount_a),
            amount_b=token_b.raw_amount(amount_b),
            recipient=self.owner,
            fee=fee,
            price_lower=price_lower,
            price_upper=price_upper,
            slippage_percent=_default_lp_slippage() if slippage_percent is None else slippage_percent,
            liquidity_range=liquidity_range,
            active_id=active_id,
            bin_step=bin_step,
            bins_range=bins_range,
            shape=shape,
        )
        return self.adapter.build_mint(request)

    def open_position(self, token_a, token_b, amount_a: str, amount_b: str, **kwargs) -> OperationOutcome:
        """Open a position; keyword arguments as for prepare_open()"""
        return self._execute(self.prepare_open(token_a, token_b, amount_a, amount_b, **kwargs))

    # =========================================================================
    # Existing positions
    # =========================================================================

    def increase(
        self,
        position: Position,
        amount0: int,
        amount1: int,
        slippage_percent: Optional[Decimal] = None,
    ) -> OperationOutcome:
        """Add token0/token1 (smallest units) to an existing position"""
        slippage = _default_lp_slippage() if slippage_percent is None else slippage_percent
        plan = self.adapter.build_increase(position, amount0, amount1, slippage, self.owner)
        return self._execute(plan)

    def remove(
        self,
        position: Position,
        percent: int = 100,
        slippage_percent: Optional[Decimal] = None,
        expected_amounts: Optional[tuple] = None,
    ) -> OperationOutcome:
        """Decrease liquidity by ``percent`` and collect the proceeds"""
        slippage = _default_lp_slippage() if slippage_percent is None else slippage_percent
        plan = self.adapter.build_decrease(position, percent, slippage, self.owner, expected_amounts)
        return self._execute(plan)

    def collect(self, position: Position, recipient: Optional[str] = None) -> OperationOutcome:
        """Collect uncollected fees of a position"""
        return self._execute(self.adapter.build_collect(position, recipient or self.owner))

    # =========================================================================
    # Query
    # =========================================================================

    def positions(self, owner: Optional[str] = None, include_closed: bool = False) -> List[Position]:
        reader = PositionReader(self._client.transport, self._client.profile)
        return reader.list_positions(owner or self.owner, include_closed=include_closed)

    def position(self, token_id: int) -> Position:
        return PositionReader(self._client.transport, self._client.profile).get_position(token_id)
