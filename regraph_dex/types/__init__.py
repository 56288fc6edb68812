"""
Type definitions for regraph-dex
"""

from .common import Token, STABLECOINS, NATIVE_SENTINEL
from .chain import ChainFamily, ChainProfile, DexKind, FeeTier
from .result import TxResult, TxStatus, Quote, PriceTable
from .transaction import (
    TxKind,
    ContractCall,
    NeoInvocation,
    Call,
    PendingTransaction,
    SwapIntent,
    ApprovalRequest,
    SwapPlan,
    LiquidityPlan,
    MintRequest,
)
from .position import LiquidityRange, Position, BinDistribution

__all__ = [
    "Token",
    "STABLECOINS",
    "NATIVE_SENTINEL",
    "ChainFamily",
    "ChainProfile",
    "DexKind",
    "FeeTier",
    "TxResult",
    "TxStatus",
    "Quote",
    "PriceTable",
    "TxKind",
    "ContractCall",
    "NeoInvocation",
    "Call",
    "PendingTransaction",
    "SwapIntent",
    "ApprovalRequest",
    "SwapPlan",
    "LiquidityPlan",
    "MintRequest",
    "LiquidityRange",
    "Position",
    "BinDistribution",
]
