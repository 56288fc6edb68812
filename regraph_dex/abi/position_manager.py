"""
NonfungiblePositionManager call data

Uniswap V3, PancakeSwap V3 and SunSwap V3 share the NPM interface. All param structs
are static, so each call is the selector followed by its fields as consecutive words.
multicall carries bytes[] and is left to eth_abi.
"""

from typing import Sequence

from ..codec import UINT128_MAX, encode_signed_tick, normalize_address
from .encoder import (
    build_call,
    uint_word,
    address_word,
    encode_call,
    call_bytes,
    tron_parameters,
)

MINT_SELECTOR = "0x88316456"
INCREASE_LIQUIDITY_SELECTOR = "0x219f5d17"
DECREASE_LIQUIDITY_SELECTOR = "0x0c49ccbe"
COLLECT_SELECTOR = "0xfc6f7865"
POSITIONS_SELECTOR = "0x99fbab88"
TOKEN_OF_OWNER_BY_INDEX_SELECTOR = "0x2f745c59"
REFUND_ETH_SELECTOR = "0x12210e8a"
UNWRAP_WETH9_SELECTOR = "0x49404b7c"
MULTICALL_SELECTOR = "0xac9650d8"

MINT_SIGNATURE = "mint((address,address,uint24,int24,int24,uint256,uint256,uint256,uint256,address,uint256))"
INCREASE_LIQUIDITY_SIGNATURE = "increaseLiquidity((uint256,uint256,uint256,uint256,uint256,uint256))"
DECREASE_LIQUIDITY_SIGNATURE = "decreaseLiquidity((uint256,uint128,uint256,uint256,uint256))"
COLLECT_SIGNATURE = "collect((uint256,address,uint128,uint128))"
POSITIONS_SIGNATURE = "positions(uint256)"
TOKEN_OF_OWNER_BY_INDEX_SIGNATURE = "tokenOfOwnerByIndex(address,uint256)"

_MINT_TYPES = (
    "address", "address", "uint24", "int24", "int24",
    "uint256", "uint256", "uint256", "uint256", "address", "uint256",
)


def encode_mint(
    token0: str,
    token1: str,
    fee: int,
    tick_lower: int,
    tick_upper: int,
    amount0_desired: int,
    amount1_desired: int,
    amount0_min: int,
    amount1_min: int,
    recipient: str,
    deadline: int,
) -> str:
    """
    mint(MintParams)

    Tokens must already be sorted (token0 < token1); this function never reorders.
    """
    return build_call(
        MINT_SELECTOR,
        address_word(token0),
        address_word(token1),
        uint_word(fee),
        encode_signed_tick(tick_lower),
        encode_signed_tick(tick_upper),
        uint_word(amount0_desired),
        uint_word(amount1_desired),
        uint_word(amount0_min),
        uint_word(amount1_min),
        address_word(recipient),
        uint_word(deadline),
    )


def encode_increase_liquidity(
    token_id: int,
    amount0_desired: int,
    amount1_desired: int,
    amount0_min: int,
    amount1_min: int,
    deadline: int,
) -> str:
    return build_call(
        INCREASE_LIQUIDITY_SELECTOR,
        uint_word(token_id),
        uint_word(amount0_desired),
        uint_word(amount1_desired),
        uint_word(amount0_min),
        uint_word(amount1_min),
        uint_word(deadline),
    )


def encode_decrease_liquidity(
    token_id: int,
    liquidity: int,
    amount0_min: int,
    amount1_min: int,
    deadline: int,
) -> str:
    return build_call(
        DECREASE_LIQUIDITY_SELECTOR,
        uint_word(token_id),
        uint_word(liquidity),
        uint_word(amount0_min),
        uint_word(amount1_min),
        uint_word(deadline),
    )


def encode_collect(
    token_id: int,
    recipient: str,
    amount0_max: int = UINT128_MAX,
    amount1_max: int = UINT128_MAX,
) -> str:
    return build_call(
        COLLECT_SELECTOR,
        uint_word(token_id),
        address_word(recipient),
        uint_word(amount0_max),
        uint_word(amount1_max),
    )


def encode_positions(token_id: int) -> str:
    return build_call(POSITIONS_SELECTOR, uint_word(token_id))


def encode_token_of_owner_by_index(owner: str, index: int) -> str:
    return build_call(TOKEN_OF_OWNER_BY_INDEX_SELECTOR, address_word(owner), uint_word(index))


def encode_refund_eth() -> str:
    return REFUND_ETH_SELECTOR


def encode_unwrap_weth9(amount_minimum: int, recipient: str) -> str:
    return build_call(UNWRAP_WETH9_SELECTOR, uint_word(amount_minimum), address_word(recipient))


def encode_multicall(calls: Sequence[str]) -> str:
    """multicall(bytes[]) - bundles NPM calls into one transaction"""
    return encode_call(MULTICALL_SELECTOR, ["bytes[]"], [[call_bytes(c) for c in calls]])


def sort_token_pair(token_a: str, token_b: str, *pairs):
    """
    Order two tokens the way pools do (by address) and swap each (a, b) pair alongside

    Example:
        token0, token1, (amount0, amount1), (min0, min1) = sort_token_pair(
            usdc, weth, (usdc_amount, weth_amount), (usdc_min, weth_min))

    TRON base58 addresses are compared by their hex form.
    """
    if normalize_address(token_a) <= normalize_address(token_b):
        return (token_a, token_b) + tuple(tuple(p) for p in pairs)
    return (token_b, token_a) + tuple((p[1], p[0]) for p in pairs)


# =========================================================================
# TRON parameter lists (SunSwap V3)
# =========================================================================

def tron_mint_parameters(
    token0: str,
    token1: str,
    fee: int,
    tick_lower: int,
    tick_upper: int,
    amount0_desired: int,
    amount1_desired: int,
    amount0_min: int,
    amount1_min: int,
    recipient: str,
    deadline: int,
) -> tuple:
    return tron_parameters(
        _MINT_TYPES,
        (token0, token1, fee, tick_lower, tick_upper, amount0_desired, amount1_desired,
         amount0_min, amount1_min, recipient, deadline),
    )


def tron_increase_parameters(token_id, amount0, amount1, amount0_min, amount1_min, deadline) -> tuple:
    return tron_parameters(
        ("uint256",) * 6,
        (token_id, amount0, amount1, amount0_min, amount1_min, deadline),
    )


def tron_decrease_parameters(token_id, liquidity, amount0_min, amount1_min, deadline) -> tuple:
    return tron_parameters(
        ("uint256", "uint128", "uint256", "uint256", "uint256"),
        (token_id, liquidity, amount0_min, amount1_min, deadline),
    )


def tron_collect_parameters(token_id, recipient, amount0_max=UINT128_MAX, amount1_max=UINT128_MAX) -> tuple:
    return tron_parameters(
        ("uint256", "address", "uint128", "uint128"),
        (token_id, recipient, amount0_max, amount1_max),
    )


def tron_positions_parameters(token_id: int) -> tuple:
    return tron_parameters(("uint256",), (token_id,))


def tron_token_of_owner_by_index_parameters(owner: str, index: int) -> tuple:
    return tron_parameters(("address", "uint256"), (owner, index))
