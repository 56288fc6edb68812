"""
regraph-dex - Multi-chain DEX core

Swaps and concentrated-liquidity positions across nine chains and four DEX families:
- Uniswap V3 (Base, Ethereum, Arbitrum, Polygon, Optimism)
- PancakeSwap V2 swaps / V3 LP (BSC)
- Trader Joe V1 swaps / Liquidity Book LP (Avalanche)
- SunSwap V2 swaps / V3 LP (TRON)
- Flamingo (NEO N3)

EVM, TRON and NEO wallets sit behind one transport interface.
"""

from .client import DexClient
from .types import (
    Token,
    ChainProfile,
    ChainFamily,
    DexKind,
    FeeTier,
    TxResult,
    TxStatus,
    Quote,
    PriceTable,
    SwapIntent,
    SwapPlan,
    LiquidityPlan,
    LiquidityRange,
    MintRequest,
    Position,
)
from .errors import (
    DexAdapterError,
    ErrorCode,
    InvalidInput,
    QuoteUnavailable,
    UnsupportedChain,
    UnsupportedToken,
    UserRejected,
    WalletTimeout,
    TransactionReverted,
    TransactionError,
    OperationInProgress,
    OperationCancelled,
    OperationNotSupported,
    ConfigurationError,
)
from .registry import resolve_chain, resolve_token, list_chains
from .modules import (
    OperationOutcome,
    OperationState,
    QuoteClient,
    SessionContext,
    TransactionOrchestrator,
)
from .protocols import adapter_for
from .infra import RetryPolicy, EvmTransport, TronTransport, NeoTransport, transport_for

__all__ = [
    # Client
    "DexClient",
    # Types
    "Token",
    "ChainProfile",
    "ChainFamily",
    "DexKind",
    "FeeTier",
    "TxResult",
    "TxStatus",
    "Quote",
    "PriceTable",
    "SwapIntent",
    "SwapPlan",
    "LiquidityPlan",
    "LiquidityRange",
    "MintRequest",
    "Position",
    # Errors
    "DexAdapterError",
    "ErrorCode",
    "InvalidInput",
    "QuoteUnavailable",
    "UnsupportedChain",
    "UnsupportedToken",
    "UserRejected",
    "WalletTimeout",
    "TransactionReverted",
    "TransactionError",
    "OperationInProgress",
    "OperationCancelled",
    "OperationNotSupported",
    "ConfigurationError",
    # Registry
    "resolve_chain",
    "resolve_token",
    "list_chains",
    # Orchestration
    "OperationOutcome",
    "OperationState",
    "QuoteClient",
    "SessionContext",
    "TransactionOrchestrator",
    "adapter_for",
    # Wallet transports
    "RetryPolicy",
    "EvmTransport",
    "TronTransport",
    "NeoTransport",
    "transport_for",
]

__version__ = "0.1.0"
