"""
Chain / DEX registry
"""

from .chains import (
    CHAINS,
    DEFAULT_CHAIN,
    UNISWAP_FEE_TIERS,
    PANCAKESWAP_FEE_TIERS,
    LB_BIN_STEPS,
    resolve_chain,
    resolve_token,
    tick_spacing_for,
    chain_for_chain_id,
    list_chains,
    list_tokens,
    is_native,
    wrap_native,
)
from .tokens import TOKENS_BY_CHAIN, TRON_NATIVE_SENTINEL

__all__ = [
    "CHAINS",
    "DEFAULT_CHAIN",
    "UNISWAP_FEE_TIERS",
    "PANCAKESWAP_FEE_TIERS",
    "LB_BIN_STEPS",
    "resolve_chain",
    "resolve_token",
    "tick_spacing_for",
    "chain_for_chain_id",
    "list_chains",
    "list_tokens",
    "is_native",
    "wrap_native",
    "TOKENS_BY_CHAIN",
    "TRON_NATIVE_SENTINEL",
]
