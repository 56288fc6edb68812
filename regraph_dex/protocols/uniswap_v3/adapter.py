"""
Uniswap V3 Style Adapter

Swaps through SwapRouter ``exactInputSingle`` (Base, Ethereum, Arbitrum, Polygon,
Optimism) and manages NonfungiblePositionManager positions (those chains plus
PancakeSwap V3 on BSC and SunSwap V3 on TRON).

Native assets are routed as the wrapped token; the native amount rides as call value.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from ...abi.position_manager import (
    encode_mint,
    encode_increase_liquidity,
    encode_decrease_liquidity,
    encode_collect,
    encode_multicall,
    encode_refund_eth,
    encode_unwrap_weth9,
    sort_token_pair,
    MINT_SIGNATURE,
    INCREASE_LIQUIDITY_SIGNATURE,
    DECREASE_LIQUIDITY_SIGNATURE,
    COLLECT_SIGNATURE,
    tron_mint_parameters,
    tron_increase_parameters,
    tron_decrease_parameters,
    tron_collect_parameters,
)
from ...abi.router import encode_exact_input_single
from ...config import config as global_config
from ...errors import InvalidInput, OperationNotSupported
from ...modules.fees import FeeSplit, lp_min_amount, liquidity_to_remove, min_amount_out
from ...registry import tick_spacing_for
from ...types import (
    ApprovalRequest,
    ChainFamily,
    ContractCall,
    DexKind,
    FeeTier,
    LiquidityPlan,
    LiquidityRange,
    MintRequest,
    Position,
    Quote,
    SwapIntent,
    SwapPlan,
    TxKind,
)
from ..base import DexAdapter

logger = logging.getLogger(__name__)


class UniswapV3Adapter(DexAdapter):
    """
    Uniswap V3 style adapter

    Usage:
        adapter = UniswapV3Adapter(resolve_chain("base"))
        plan = adapter.build_swap(intent, split, quote, sender)
    """

    name = "uniswap_v3"
    kind = DexKind.UNISWAP_V3

    @property
    def position_manager(self) -> str:
        return self.profile.position_manager_address

    @property
    def _is_tron(self) -> bool:
        return self.profile.family == ChainFamily.TRON

    # =========================================================================
    # Swap
    # =========================================================================

    def build_swap(self, intent: SwapIntent, split: FeeSplit, quote: Quote, sender: str) -> SwapPlan:
        """Single-hop exactInputSingle; native output is unwrapped through multicall"""
        if self._is_tron:
            raise OperationNotSupported.not_implemented("build_swap", f"{self.name} on {self.chain}")

        # Raises before anything is built, so no fee transfer goes out for an unknown pool
        tick_spacing_for(self.profile, quote.fee_bps)

        token_in, token_out = quote.token_in, quote.token_out
        native_in = self.is_native(token_in)
        native_out = self.is_native(token_out)
        recipient = intent.recipient or sender
        router = self.profile.router_address
        wrapped = self.profile.wrapped_native_address

        min_out = min_amount_out(quote.amount_out, intent.slippage_bps)
        swap_deadline = self.swap_deadline(intent)

        swap_data = encode_exact_input_single(
            token_in=wrapped if native_in else token_in.address,
            token_out=wrapped if native_out else token_out.address,
            fee=quote.fee_bps,
            recipient=router if native_out else recipient,
            deadline=swap_deadline,
            amount_in=split.swap_amount,
            amount_out_min=min_out,
        )
        if native_out:
            swap_data = encode_multicall([swap_data, encode_unwrap_weth9(min_out, recipient)])

        swap_call = ContractCall(
            to=router,
            data=swap_data,
            value=split.swap_amount if native_in else 0,
            kind=TxKind.SWAP,
        )

        logger.debug(
            f"[{self.chain}] exactInputSingle {token_in.symbol}->{token_out.symbol} "
            f"in={split.swap_amount} min_out={min_out} fee_tier={quote.fee_bps}"
        )

        return SwapPlan(
            chain=self.chain,
            token_in=token_in,
            token_out=token_out,
            amount_in=split.gross,
            fee_amount=split.fee,
            swap_amount=split.swap_amount,
            min_amount_out=min_out,
            swap_call=swap_call,
            quote=quote,
            approval=self.approval_for(token_in, router, split.swap_amount, exact=True),
            fee_call=self.build_fee_call(token_in, split.fee, sender),
            deadline=swap_deadline,
        )

    # =========================================================================
    # Liquidity
    # =========================================================================

    def _liquidity_range(self, request: MintRequest, fee: int) -> LiquidityRange:
        if request.liquidity_range is not None:
            return request.liquidity_range
        if request.price_lower is None or request.price_upper is None:
            raise InvalidInput("Mint needs a liquidity range or both price bounds", field="price_lower")
        tier = FeeTier(fee, tick_spacing_for(self.profile, fee))
        return LiquidityRange.from_prices(request.price_lower, request.price_upper, tier)

    def build_mint(self, request: MintRequest) -> LiquidityPlan:
        """
        mint(MintParams) with tokens sorted and amounts swapped in lock-step

        Prices in the request are token_b per token_a. When sorting flips the pair the
        range is inverted so ticks stay in token1-per-token0 terms.
        """
        fee = request.fee or self.profile.default_fee
        if request.amount_a <= 0 and request.amount_b <= 0:
            raise InvalidInput("Enter an amount for at least one token", field="amount")

        native_a = self.is_native(request.token_a)
        native_b = self.is_native(request.token_b)
        addr_a = self.profile.wrapped_native_address if native_a else request.token_a.address
        addr_b = self.profile.wrapped_native_address if native_b else request.token_b.address

        min_a = lp_min_amount(request.amount_a, request.slippage_percent)
        min_b = lp_min_amount(request.amount_b, request.slippage_percent)

        token0, token1, (amount0, amount1), (min0, min1) = sort_token_pair(
            addr_a, addr_b, (request.amount_a, request.amount_b), (min_a, min_b)
        )
        flipped = token0 != addr_a

        liq_range = self._liquidity_range(request, fee)
        tick_lower, tick_upper = liq_range.tick_lower, liq_range.tick_upper
        if flipped:
            tick_lower, tick_upper = -liq_range.tick_upper, -liq_range.tick_lower

        mint_deadline = self.lp_deadline()
        value = (request.amount_a if native_a else 0) + (request.amount_b if native_b else 0)

        approvals: List[ApprovalRequest] = [
            a for a in (
                self.approval_for(request.token_a, self.position_manager, request.amount_a, exact=False),
                self.approval_for(request.token_b, self.position_manager, request.amount_b, exact=False),
            ) if a is not None
        ]

        args = (token0, token1, fee, tick_lower, tick_upper, amount0, amount1, min0, min1,
                request.recipient, mint_deadline)

        if self._is_tron:
            call = ContractCall(
                to=self.position_manager,
                value=value,
                kind=TxKind.MINT,
                function_signature=MINT_SIGNATURE,
                parameters=tron_mint_parameters(*args),
                fee_limit=global_config.tron.mint_fee_limit,
            )
        else:
            data = encode_mint(*args)
            if value:
                data = encode_multicall([data, encode_refund_eth()])
            call = ContractCall(to=self.position_manager, data=data, value=value, kind=TxKind.MINT)

        logger.info(
            f"[{self.chain}] mint {request.token_a.symbol}/{request.token_b.symbol} fee={fee} "
            f"ticks={tick_lower}..{tick_upper}"
        )

        return LiquidityPlan(
            chain=self.chain,
            kind=TxKind.MINT,
            calls=[call],
            approvals=approvals,
            description=f"Mint {request.token_a.symbol}/{request.token_b.symbol} {fee / 10000:.2f}%",
        )

    def build_increase(
        self,
        position: Position,
        amount0: int,
        amount1: int,
        slippage_percent: Decimal,
        sender: str,
    ) -> LiquidityPlan:
        if amount0 <= 0 and amount1 <= 0:
            raise InvalidInput("Enter an amount for at least one token", field="amount")

        min0 = lp_min_amount(amount0, slippage_percent)
        min1 = lp_min_amount(amount1, slippage_percent)
        increase_deadline = self.lp_deadline()
        args = (position.token_id, amount0, amount1, min0, min1, increase_deadline)

        approvals = [
            a for a in (
                self.approval_for(self.token_for(position.token0), self.position_manager, amount0, exact=False),
                self.approval_for(self.token_for(position.token1), self.position_manager, amount1, exact=False),
            ) if a is not None
        ]

        if self._is_tron:
            call = ContractCall(
                to=self.position_manager,
                kind=TxKind.INCREASE_LIQUIDITY,
                function_signature=INCREASE_LIQUIDITY_SIGNATURE,
                parameters=tron_increase_parameters(*args),
                fee_limit=global_config.tron.modify_fee_limit,
            )
        else:
            call = ContractCall(
                to=self.position_manager,
                data=encode_increase_liquidity(*args),
                kind=TxKind.INCREASE_LIQUIDITY,
            )

        return LiquidityPlan(
            chain=self.chain,
            kind=TxKind.INCREASE_LIQUIDITY,
            calls=[call],
            approvals=approvals,
            description=f"Increase position #{position.token_id}",
        )

    def build_decrease(
        self,
        position: Position,
        percent: int,
        slippage_percent: Decimal,
        sender: str,
        expected_amounts: Optional[tuple] = None,
    ) -> LiquidityPlan:
        """
        decreaseLiquidity followed by collect

        Minimums are derived from ``expected_amounts`` (amount0, amount1 for the removed
        share) when given, otherwise 0.
        """
        liquidity = liquidity_to_remove(position.liquidity, percent)
        if liquidity == 0:
            raise InvalidInput.out_of_range("percent", percent, f"removes no liquidity from #{position.token_id}")

        min0 = min1 = 0
        if expected_amounts is not None:
            min0 = lp_min_amount(expected_amounts[0], slippage_percent)
            min1 = lp_min_amount(expected_amounts[1], slippage_percent)

        decrease_deadline = self.lp_deadline()
        args = (position.token_id, liquidity, min0, min1, decrease_deadline)

        if self._is_tron:
            decrease = ContractCall(
                to=self.position_manager,
                kind=TxKind.DECREASE_LIQUIDITY,
                function_signature=DECREASE_LIQUIDITY_SIGNATURE,
                parameters=tron_decrease_parameters(*args),
                fee_limit=global_config.tron.modify_fee_limit,
            )
        else:
            decrease = ContractCall(
                to=self.position_manager,
                data=encode_decrease_liquidity(*args),
                kind=TxKind.DECREASE_LIQUIDITY,
            )

        collect = self._collect_call(position, sender)
        logger.info(f"[{self.chain}] decrease #{position.token_id} by {percent}% ({liquidity} liquidity)")

        return LiquidityPlan(
            chain=self.chain,
            kind=TxKind.DECREASE_LIQUIDITY,
            calls=[decrease, collect],
            description=f"Remove {percent}% of position #{position.token_id}",
        )

    def build_collect(self, position: Position, recipient: str) -> LiquidityPlan:
        return LiquidityPlan(
            chain=self.chain,
            kind=TxKind.COLLECT,
            calls=[self._collect_call(position, recipient)],
            description=f"Collect fees of position #{position.token_id}",
        )

    def _collect_call(self, position: Position, recipient: str) -> ContractCall:
        if self._is_tron:
            return ContractCall(
                to=self.position_manager,
                kind=TxKind.COLLECT,
                function_signature=COLLECT_SIGNATURE,
                parameters=tron_collect_parameters(position.token_id, recipient),
                fee_limit=global_config.tron.collect_fee_limit,
            )
        return ContractCall(
            to=self.position_manager,
            data=encode_collect(position.token_id, recipient),
            kind=TxKind.COLLECT,
        )
