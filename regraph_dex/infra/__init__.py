"""
Infrastructure layer

Provides:
- Wallet transports (EVM / TRON / NEO) behind one interface
- RetryPolicy and receipt polling with correlation-id logging
- Web3Provider: local EIP-1193 provider using web3.py

Web3Provider is not imported here so the transports stay usable without a node.
"""

from .retry import (
    CorrelationContext,
    RetryPolicy,
    poll_until,
    get_correlation_id,
    log_with_correlation,
    is_recoverable_error,
)
from .transports import (
    WalletTransport,
    EvmTransport,
    TronTransport,
    NeoTransport,
    ProviderRpcError,
    NeoLineError,
    transport_for,
    USER_REJECTED_CODE,
    CHAIN_NOT_ADDED_CODE,
)

__all__ = [
    "CorrelationContext",
    "RetryPolicy",
    "poll_until",
    "get_correlation_id",
    "log_with_correlation",
    "is_recoverable_error",
    "WalletTransport",
    "EvmTransport",
    "TronTransport",
    "NeoTransport",
    "ProviderRpcError",
    "NeoLineError",
    "transport_for",
    "USER_REJECTED_CODE",
    "CHAIN_NOT_ADDED_CODE",
]
