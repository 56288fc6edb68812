"""
Uniswap V2 style routers (PancakeSwap V2, Trader Joe V1, SunSwap V2)
"""

from .adapter import UniswapV2Adapter

__all__ = ["UniswapV2Adapter"]
