"""
Swap router call data

Uniswap V3 SwapRouter ``exactInputSingle`` and the Uniswap V2 style router family
(PancakeSwap V2, Trader Joe V1, SunSwap V2). Trader Joe names its native functions
with AVAX instead of ETH, which changes the selectors but not the layout.
"""

from typing import List, Sequence

from ..codec import normalize_address
from ..errors import InvalidInput
from .encoder import build_call, uint_word, address_word, selector_for, tron_parameters

EXACT_INPUT_SINGLE_SELECTOR = "0x414bf389"

# V2 router, ETH naming
SWAP_EXACT_ETH_FOR_TOKENS_SELECTOR = "0x7ff36ab5"
SWAP_EXACT_TOKENS_FOR_ETH_SELECTOR = "0x18cbafe5"
SWAP_EXACT_TOKENS_FOR_TOKENS_SELECTOR = "0x38ed1739"

SWAP_EXACT_NATIVE_FOR_TOKENS_SIGNATURE = "swapExact{native}ForTokens(uint256,address[],address,uint256)"
SWAP_EXACT_TOKENS_FOR_NATIVE_SIGNATURE = "swapExactTokensFor{native}(uint256,uint256,address[],address,uint256)"
SWAP_EXACT_TOKENS_FOR_TOKENS_SIGNATURE = "swapExactTokensForTokens(uint256,uint256,address[],address,uint256)"

_NATIVE_SELECTORS = {
    "ETH": (SWAP_EXACT_ETH_FOR_TOKENS_SELECTOR, SWAP_EXACT_TOKENS_FOR_ETH_SELECTOR),
    "AVAX": (
        selector_for(SWAP_EXACT_NATIVE_FOR_TOKENS_SIGNATURE.format(native="AVAX")),
        selector_for(SWAP_EXACT_TOKENS_FOR_NATIVE_SIGNATURE.format(native="AVAX")),
    ),
}

# Head sizes in bytes: 4 and 5 static slots before the path tail
_NATIVE_IN_PATH_OFFSET = 0x80
_TOKENS_IN_PATH_OFFSET = 0xA0


def _native_selectors(native_name: str):
    try:
        return _NATIVE_SELECTORS[native_name.upper()]
    except KeyError:
        raise InvalidInput.out_of_range("native_name", native_name, "expected ETH or AVAX") from None


def _path_tail(path: Sequence[str]) -> str:
    if len(path) < 2:
        raise InvalidInput("Swap path needs at least two tokens", field="path", value=str(list(path)))
    return uint_word(len(path)) + "".join(address_word(a) for a in path)


# =========================================================================
# Uniswap V3
# =========================================================================

def encode_exact_input_single(
    token_in: str,
    token_out: str,
    fee: int,
    recipient: str,
    deadline: int,
    amount_in: int,
    amount_out_min: int,
    sqrt_price_limit_x96: int = 0,
) -> str:
    """
    exactInputSingle(ExactInputSingleParams)

    The struct is fully static, so it is laid out as 8 consecutive words with no
    offset word.
    """
    return build_call(
        EXACT_INPUT_SINGLE_SELECTOR,
        address_word(token_in),
        address_word(token_out),
        uint_word(fee),
        address_word(recipient),
        uint_word(deadline),
        uint_word(amount_in),
        uint_word(amount_out_min),
        uint_word(sqrt_price_limit_x96),
    )


# =========================================================================
# Uniswap V2 family
# =========================================================================

def encode_swap_exact_native_for_tokens(
    amount_out_min: int,
    path: Sequence[str],
    to: str,
    deadline: int,
    native_name: str = "ETH",
) -> str:
    """swapExactETHForTokens / swapExactAVAXForTokens, amount in is the call value"""
    selector, _ = _native_selectors(native_name)
    return build_call(
        selector,
        uint_word(amount_out_min),
        uint_word(_NATIVE_IN_PATH_OFFSET),
        address_word(to),
        uint_word(deadline),
        _path_tail(path),
    )


def encode_swap_exact_tokens_for_native(
    amount_in: int,
    amount_out_min: int,
    path: Sequence[str],
    to: str,
    deadline: int,
    native_name: str = "ETH",
) -> str:
    _, selector = _native_selectors(native_name)
    return build_call(
        selector,
        uint_word(amount_in),
        uint_word(amount_out_min),
        uint_word(_TOKENS_IN_PATH_OFFSET),
        address_word(to),
        uint_word(deadline),
        _path_tail(path),
    )


def encode_swap_exact_tokens_for_tokens(
    amount_in: int,
    amount_out_min: int,
    path: Sequence[str],
    to: str,
    deadline: int,
) -> str:
    return build_call(
        SWAP_EXACT_TOKENS_FOR_TOKENS_SELECTOR,
        uint_word(amount_in),
        uint_word(amount_out_min),
        uint_word(_TOKENS_IN_PATH_OFFSET),
        address_word(to),
        uint_word(deadline),
        _path_tail(path),
    )


def build_v2_path(
    token_in: str,
    token_out: str,
    wrapped_native: str,
    native_in: bool = False,
    native_out: bool = False,
) -> List[str]:
    """
    Route through the wrapped native token

    Native in  -> [wrapped, out]
    Native out -> [in, wrapped]
    Otherwise  -> [in, wrapped, out], or [in, out] when either side already is
    the wrapped native.
    """
    if native_in and native_out:
        raise InvalidInput("Cannot swap native for native", field="path")
    if native_in:
        return [wrapped_native, token_out]
    if native_out:
        return [token_in, wrapped_native]

    wrapped = normalize_address(wrapped_native)
    if normalize_address(token_in) == wrapped or normalize_address(token_out) == wrapped:
        return [token_in, token_out]
    return [token_in, wrapped_native, token_out]


# =========================================================================
# TRON (SunSwap V2) - the wallet encodes from signature + parameters
# =========================================================================

def v2_swap_signature(native_in: bool, native_out: bool, native_name: str = "ETH") -> str:
    if native_in:
        return SWAP_EXACT_NATIVE_FOR_TOKENS_SIGNATURE.format(native=native_name)
    if native_out:
        return SWAP_EXACT_TOKENS_FOR_NATIVE_SIGNATURE.format(native=native_name)
    return SWAP_EXACT_TOKENS_FOR_TOKENS_SIGNATURE


def tron_v2_swap_parameters(
    amount_in: int,
    amount_out_min: int,
    path: Sequence[str],
    to: str,
    deadline: int,
    native_in: bool = False,
) -> tuple:
    if native_in:
        return tron_parameters(
            ("uint256", "address[]", "address", "uint256"),
            (amount_out_min, list(path), to, deadline),
        )
    return tron_parameters(
        ("uint256", "uint256", "address[]", "address", "uint256"),
        (amount_in, amount_out_min, list(path), to, deadline),
    )
