"""
DEX adapters

One adapter per DEX family, selected once per chain and purpose via adapter_for().
"""

from .base import DexAdapter
from .registry import ProtocolRegistry, adapter_for, register_adapter, PURPOSE_SWAP, PURPOSE_LIQUIDITY
from .uniswap_v3 import UniswapV3Adapter
from .uniswap_v2 import UniswapV2Adapter
from .trader_joe import LiquidityBookAdapter
from .flamingo import Nep17Adapter

__all__ = [
    "DexAdapter",
    "ProtocolRegistry",
    "adapter_for",
    "register_adapter",
    "PURPOSE_SWAP",
    "PURPOSE_LIQUIDITY",
    "UniswapV3Adapter",
    "UniswapV2Adapter",
    "LiquidityBookAdapter",
    "Nep17Adapter",
]
