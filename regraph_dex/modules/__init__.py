"""
Functional modules for DexClient

Provides high-level operations:
- Fee split and slippage math
- SessionContext: wallet-action guard, price cache, refresh scheduling
- QuoteClient: quote / price service
- TransactionOrchestrator: approve -> fee -> submit -> poll
- PositionReader, WalletModule: on-chain reads
- SwapModule, LiquidityModule: client facades
"""

# fees first: protocols.base depends on it
from .fees import (
    FeeSplit,
    split_fee,
    min_amount_out,
    lp_min_amount,
    liquidity_to_remove,
    slippage_percent_to_bps,
    deadline,
    fee_wallet_for,
)
from .session import SessionContext, WalletActionGuard, PriceCache, RefreshScheduler
from .quote import QuoteClient
from .orchestrator import OperationOutcome, OperationState, TransactionOrchestrator
from .positions import PositionReader
from .wallet import WalletModule
from .swap import SwapModule
from .liquidity import LiquidityModule

__all__ = [
    "FeeSplit",
    "split_fee",
    "min_amount_out",
    "lp_min_amount",
    "liquidity_to_remove",
    "slippage_percent_to_bps",
    "deadline",
    "fee_wallet_for",
    "SessionContext",
    "WalletActionGuard",
    "PriceCache",
    "RefreshScheduler",
    "QuoteClient",
    "OperationOutcome",
    "OperationState",
    "TransactionOrchestrator",
    "PositionReader",
    "WalletModule",
    "SwapModule",
    "LiquidityModule",
]
