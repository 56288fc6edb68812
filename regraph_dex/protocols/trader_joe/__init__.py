"""
Trader Joe Liquidity Book protocol
"""

from .adapter import LiquidityBookAdapter

__all__ = ["LiquidityBookAdapter"]
