"""
Uniswap V2 Style Adapter

Swaps for PancakeSwap V2 (BSC), Trader Joe V1 (Avalanche) and SunSwap V2 (TRON).
Paths route through the wrapped native token; the native leg uses the router's
ETH/AVAX-named functions.
"""

import logging

from ...abi.router import (
    build_v2_path,
    encode_swap_exact_native_for_tokens,
    encode_swap_exact_tokens_for_native,
    encode_swap_exact_tokens_for_tokens,
    tron_v2_swap_parameters,
    v2_swap_signature,
)
from ...config import config as global_config
from ...modules.fees import FeeSplit, min_amount_out
from ...types import (
    ChainFamily,
    ContractCall,
    DexKind,
    Quote,
    SwapIntent,
    SwapPlan,
    TxKind,
)
from ..base import DexAdapter

logger = logging.getLogger(__name__)


class UniswapV2Adapter(DexAdapter):
    """
    Uniswap V2 style router adapter (swaps only)

    Liquidity operations on these chains go through the V3 / Liquidity Book adapters.
    """

    name = "uniswap_v2"
    kind = DexKind.UNISWAP_V2

    def build_swap(self, intent: SwapIntent, split: FeeSplit, quote: Quote, sender: str) -> SwapPlan:
        token_in, token_out = quote.token_in, quote.token_out
        native_in = self.is_native(token_in)
        native_out = self.is_native(token_out)
        recipient = intent.recipient or sender
        router = self.profile.router_address
        native_name = self.profile.native_swap_name

        path = build_v2_path(
            token_in.address,
            token_out.address,
            self.profile.wrapped_native_address,
            native_in=native_in,
            native_out=native_out,
        )
        min_out = min_amount_out(quote.amount_out, intent.slippage_bps)
        swap_deadline = self.swap_deadline(intent)
        value = split.swap_amount if native_in else 0

        if self.profile.family == ChainFamily.TRON:
            swap_call = ContractCall(
                to=router,
                value=value,
                kind=TxKind.SWAP,
                function_signature=v2_swap_signature(native_in, native_out, native_name),
                parameters=tron_v2_swap_parameters(
                    split.swap_amount, min_out, path, recipient, swap_deadline, native_in=native_in
                ),
                fee_limit=global_config.tron.swap_fee_limit,
            )
        else:
            if native_in:
                data = encode_swap_exact_native_for_tokens(min_out, path, recipient, swap_deadline, native_name)
            elif native_out:
                data = encode_swap_exact_tokens_for_native(
                    split.swap_amount, min_out, path, recipient, swap_deadline, native_name
                )
            else:
                data = encode_swap_exact_tokens_for_tokens(split.swap_amount, min_out, path, recipient, swap_deadline)
            swap_call = ContractCall(to=router, data=data, value=value, kind=TxKind.SWAP)

        logger.debug(
            f"[{self.chain}] V2 swap {token_in.symbol}->{token_out.symbol} path_len={len(path)} "
            f"in={split.swap_amount} min_out={min_out}"
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
