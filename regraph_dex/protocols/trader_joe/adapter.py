"""
Trader Joe Liquidity Book Adapter

Avalanche LP through the LB router ``addLiquidity`` / ``addLiquidityNATIVE``.
Swaps are delegated to the Trader Joe V1 router via the V2 style adapter.
"""

import logging

from ...abi.liquidity_book import (
    LBLiquidityParameters,
    encode_lb_add_liquidity,
    encode_lb_add_liquidity_native,
    pool_deep_link,
)
from ...abi.position_manager import sort_token_pair
from ...config import config as global_config
from ...errors import InvalidInput
from ...modules.fees import FeeSplit, lp_min_amount
from ...types import (
    ContractCall,
    DexKind,
    LiquidityPlan,
    MintRequest,
    Quote,
    SwapIntent,
    SwapPlan,
    TxKind,
)
from ..base import DexAdapter
from ..uniswap_v2.adapter import UniswapV2Adapter
from .math import build_bin_distribution, BIN_STEPS

logger = logging.getLogger(__name__)

# Max bins the active id may move between submission and execution
DEFAULT_ID_SLIPPAGE = 5


class LiquidityBookAdapter(DexAdapter):
    """
    Concentrated-bin adapter for Trader Joe LB V2.1

    Positions are fungible per-bin balances, so only opening a position is encoded;
    increase / decrease / collect raise OperationNotSupported.
    """

    name = "liquidity_book"
    kind = DexKind.LIQUIDITY_BOOK

    def __init__(self, profile):
        super().__init__(profile)
        self._swap_adapter = UniswapV2Adapter(profile)

    def build_swap(self, intent: SwapIntent, split: FeeSplit, quote: Quote, sender: str) -> SwapPlan:
        return self._swap_adapter.build_swap(intent, split, quote, sender)

    def build_mint(self, request: MintRequest) -> LiquidityPlan:
        """
        addLiquidity with a shaped bin distribution around the active bin

        The plan carries a deep link to the pool page as a fallback for wallets that
        cannot sign the call.
        """
        if request.active_id is None:
            raise InvalidInput("Liquidity Book mint needs the pair's active bin id", field="active_id")
        if request.amount_a <= 0 and request.amount_b <= 0:
            raise InvalidInput("Enter an amount for at least one token", field="amount")

        bin_step = request.bin_step or global_config.trading.default_bin_step
        if bin_step not in BIN_STEPS:
            raise InvalidInput.out_of_range("bin_step", bin_step, f"expected one of {BIN_STEPS}")
        bins_range = request.bins_range or global_config.trading.default_bin_range

        native_a = self.is_native(request.token_a)
        native_b = self.is_native(request.token_b)
        wrapped = self.profile.wrapped_native_address
        addr_a = wrapped if native_a else request.token_a.address
        addr_b = wrapped if native_b else request.token_b.address

        min_a = lp_min_amount(request.amount_a, request.slippage_percent)
        min_b = lp_min_amount(request.amount_b, request.slippage_percent)
        token_x, token_y, (amount_x, amount_y), (min_x, min_y) = sort_token_pair(
            addr_a, addr_b, (request.amount_a, request.amount_b), (min_a, min_b)
        )

        distribution = build_bin_distribution(request.active_id, bins_range, request.shape)
        params = LBLiquidityParameters(
            token_x=token_x,
            token_y=token_y,
            bin_step=bin_step,
            amount_x=amount_x,
            amount_y=amount_y,
            amount_x_min=min_x,
            amount_y_min=min_y,
            active_id_desired=request.active_id,
            id_slippage=DEFAULT_ID_SLIPPAGE,
            delta_ids=distribution.delta_ids,
            distribution_x=distribution.distribution_x,
            distribution_y=distribution.distribution_y,
            to=request.recipient,
            refund_to=request.recipient,
            deadline=self.lp_deadline(),
        )

        value = (request.amount_a if native_a else 0) + (request.amount_b if native_b else 0)
        data = encode_lb_add_liquidity_native(params) if value else encode_lb_add_liquidity(params)
        router = self.profile.position_manager_address

        approvals = [
            a for a in (
                self.approval_for(request.token_a, router, request.amount_a, exact=False),
                self.approval_for(request.token_b, router, request.amount_b, exact=False),
            ) if a is not None
        ]

        logger.info(
            f"[{self.chain}] LB addLiquidity {request.token_a.symbol}/{request.token_b.symbol} "
            f"bin_step={bin_step} active={request.active_id} range={bins_range} shape={request.shape}"
        )

        return LiquidityPlan(
            chain=self.chain,
            kind=TxKind.MINT,
            calls=[ContractCall(to=router, data=data, value=value, kind=TxKind.MINT)],
            approvals=approvals,
            description=f"Add {request.token_a.symbol}/{request.token_b.symbol} to LB bin step {bin_step}",
            deep_link=pool_deep_link(token_x, token_y, bin_step),
        )
