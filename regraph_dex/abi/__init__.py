"""
ABI call builders and decoders

Every builder is pure and returns 0x-prefixed lowercase hex call data.
"""

from .encoder import (
    selector_for,
    build_call,
    encode_call,
    split_words,
    tron_parameters,
)
from .erc20 import (
    encode_approve,
    encode_allowance,
    encode_balance_of,
    encode_transfer,
    encode_name,
    encode_symbol,
    encode_decimals,
)
from .router import (
    encode_exact_input_single,
    encode_swap_exact_native_for_tokens,
    encode_swap_exact_tokens_for_native,
    encode_swap_exact_tokens_for_tokens,
    build_v2_path,
)
from .position_manager import (
    encode_mint,
    encode_increase_liquidity,
    encode_decrease_liquidity,
    encode_collect,
    encode_positions,
    encode_token_of_owner_by_index,
    encode_refund_eth,
    encode_unwrap_weth9,
    encode_multicall,
    sort_token_pair,
)
from .liquidity_book import (
    LBLiquidityParameters,
    encode_lb_add_liquidity,
    encode_lb_add_liquidity_native,
    pool_deep_link,
)
from .decoder import (
    decode_uint,
    decode_address,
    decode_words,
    decode_position,
    decode_erc20_string,
)

__all__ = [
    "selector_for",
    "build_call",
    "encode_call",
    "split_words",
    "tron_parameters",
    "encode_approve",
    "encode_allowance",
    "encode_balance_of",
    "encode_transfer",
    "encode_name",
    "encode_symbol",
    "encode_decimals",
    "encode_exact_input_single",
    "encode_swap_exact_native_for_tokens",
    "encode_swap_exact_tokens_for_native",
    "encode_swap_exact_tokens_for_tokens",
    "build_v2_path",
    "encode_mint",
    "encode_increase_liquidity",
    "encode_decrease_liquidity",
    "encode_collect",
    "encode_positions",
    "encode_token_of_owner_by_index",
    "encode_refund_eth",
    "encode_unwrap_weth9",
    "encode_multicall",
    "sort_token_pair",
    "LBLiquidityParameters",
    "encode_lb_add_liquidity",
    "encode_lb_add_liquidity_native",
    "pool_deep_link",
    "decode_uint",
    "decode_address",
    "decode_words",
    "decode_position",
    "decode_erc20_string",
]
