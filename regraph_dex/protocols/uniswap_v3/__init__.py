"""
Uniswap V3 style protocol (Uniswap, PancakeSwap V3, SunSwap V3)
"""

from .adapter import UniswapV3Adapter

__all__ = ["UniswapV3Adapter"]
