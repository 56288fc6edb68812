"""
Error definitions for the swap core
"""

from .exceptions import (
    ErrorCode,
    DexAdapterError,
    InvalidInput,
    InvalidNumericInput,
    Overflow,
    QuoteUnavailable,
    UnsupportedChain,
    UnsupportedToken,
    UserRejected,
    ApprovalRejected,
    SwapRejected,
    WalletTimeout,
    TransactionReverted,
    TransactionError,
    OperationInProgress,
    OperationCancelled,
    ConfigurationError,
    OperationNotSupported,
)

__all__ = [
    "ErrorCode",
    "DexAdapterError",
    "InvalidInput",
    "InvalidNumericInput",
    "Overflow",
    "QuoteUnavailable",
    "UnsupportedChain",
    "UnsupportedToken",
    "UserRejected",
    "ApprovalRejected",
    "SwapRejected",
    "WalletTimeout",
    "TransactionReverted",
    "TransactionError",
    "OperationInProgress",
    "OperationCancelled",
    "ConfigurationError",
    "OperationNotSupported",
]
