"""
Exception definitions for the swap and liquidity core
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """
    Unified error codes for swap and liquidity operations

    1xxx - Input errors
    2xxx - Quote errors
    3xxx - Wallet / user errors
    4xxx - Transaction errors
    5xxx - Registry errors
    7xxx - Operation errors
    9xxx - Configuration errors
    """
    # Input errors (rejected before any network call)
    INVALID_INPUT = "1001"
    INVALID_NUMERIC = "1002"
    OVERFLOW = "1003"
    INVALID_ADDRESS = "1004"

    # Quote errors (recoverable)
    QUOTE_UNAVAILABLE = "2001"
    QUOTE_HTTP_ERROR = "2002"
    QUOTE_MALFORMED = "2003"

    # Wallet / user errors
    USER_REJECTED = "3001"
    APPROVAL_REJECTED = "3002"
    SWAP_REJECTED = "3003"
    WALLET_TIMEOUT = "3004"
    CHAIN_SWITCH_FAILED = "3005"

    # Transaction errors
    TX_REVERTED = "4001"
    TX_SEND_FAILED = "4002"
    TX_FEE_NOT_SENT = "4003"

    # Registry errors
    UNSUPPORTED_CHAIN = "5001"
    UNSUPPORTED_TOKEN = "5002"

    # Operation errors
    OPERATION_NOT_SUPPORTED = "7001"
    OPERATION_IN_PROGRESS = "7002"
    OPERATION_CANCELLED = "7003"

    # Configuration errors
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"


class DexAdapterError(Exception):
    """
    Base exception for all swap core errors

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        recoverable: Whether the error might succeed on retry
        original_error: The underlying exception if any
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"

    @property
    def should_retry(self) -> bool:
        """Indicate if the operation should be retried"""
        return self.recoverable


class InvalidInput(DexAdapterError):
    """
    Malformed user or caller input - not recoverable

    Raised when:
    - An amount is zero, negative or not a number
    - An address is not valid hex
    - A percentage is out of range
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INVALID_INPUT,
        field: Optional[str] = None,
        value: Optional[str] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=False,
            details={"field": field, "value": value},
        )
        self.field = field
        self.value = value

    @classmethod
    def invalid_address(cls, address: str) -> "InvalidInput":
        return cls(
            f"Invalid address: {address!r}",
            ErrorCode.INVALID_ADDRESS,
            field="address",
            value=str(address),
        )

    @classmethod
    def out_of_range(cls, field: str, value, reason: str) -> "InvalidInput":
        return cls(f"Invalid {field}={value!r}: {reason}", field=field, value=str(value))


class InvalidNumericInput(InvalidInput):
    """Amount string could not be parsed as a non-negative decimal"""

    def __init__(self, value: str, reason: str = "not a decimal number"):
        super().__init__(
            f"Invalid numeric input {value!r}: {reason}",
            ErrorCode.INVALID_NUMERIC,
            field="amount",
            value=str(value),
        )


class Overflow(InvalidInput):
    """Value does not fit the target word width"""

    def __init__(self, value: int, byte_width: int):
        super().__init__(
            f"Value {value} does not fit in {byte_width} bytes",
            ErrorCode.OVERFLOW,
            field="value",
            value=str(value),
        )
        self.byte_width = byte_width


class QuoteUnavailable(DexAdapterError):
    """
    Quote service did not produce a usable quote - recoverable

    A missing quote means "cannot submit swap", never "zero output".
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.QUOTE_UNAVAILABLE,
        original_error: Optional[Exception] = None,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=True,
            original_error=original_error,
            details={"endpoint": endpoint, "status_code": status_code},
        )
        self.endpoint = endpoint
        self.status_code = status_code

    @classmethod
    def transport(cls, endpoint: str, error: Exception) -> "QuoteUnavailable":
        return cls(
            f"Quote service unreachable: {error}",
            original_error=error,
            endpoint=endpoint,
        )

    @classmethod
    def http_status(cls, endpoint: str, status_code: int, error: str) -> "QuoteUnavailable":
        return cls(
            f"Quote service returned HTTP {status_code}: {error}",
            ErrorCode.QUOTE_HTTP_ERROR,
            endpoint=endpoint,
            status_code=status_code,
        )

    @classmethod
    def malformed(cls, endpoint: str, reason: str) -> "QuoteUnavailable":
        return cls(
            f"Malformed quote response: {reason}",
            ErrorCode.QUOTE_MALFORMED,
            endpoint=endpoint,
        )


class UnsupportedChain(DexAdapterError):
    """Chain (or a fee tier on it) is not in the registry"""

    def __init__(self, chain, reason: Optional[str] = None):
        message = f"Unsupported chain: {chain}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            message,
            ErrorCode.UNSUPPORTED_CHAIN,
            details={"chain": str(chain)},
        )
        self.chain = chain


class UnsupportedToken(DexAdapterError):
    """Token symbol or address is not known on the chain"""

    def __init__(self, token: str, chain: str):
        super().__init__(
            f"Unsupported token {token} on {chain}",
            ErrorCode.UNSUPPORTED_TOKEN,
            details={"token": token, "chain": chain},
        )
        self.token = token
        self.chain = chain


class UserRejected(DexAdapterError):
    """
    User declined the request in the wallet - terminal, never retried

    Raised when:
    - EIP-1193 error code 4001 is returned
    - TronLink / NeoLine report a cancelled signature
    """

    def __init__(
        self,
        message: str = "User rejected the request",
        code: ErrorCode = ErrorCode.USER_REJECTED,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, code, recoverable=False, original_error=original_error)


class ApprovalRejected(UserRejected):
    """User declined the token approval"""

    def __init__(self, token: Optional[str] = None, original_error: Optional[Exception] = None):
        super().__init__(
            f"Approval rejected for {token}" if token else "Approval rejected",
            ErrorCode.APPROVAL_REJECTED,
            original_error=original_error,
        )
        self.token = token


class SwapRejected(UserRejected):
    """User declined the fee transfer or the swap / liquidity transaction"""

    def __init__(self, step: str = "swap", original_error: Optional[Exception] = None):
        super().__init__(
            f"{step.capitalize()} rejected in wallet",
            ErrorCode.SWAP_REJECTED,
            original_error=original_error,
        )
        self.step = step


class WalletTimeout(DexAdapterError):
    """No receipt within the polling bound - terminal, user must retry manually"""

    def __init__(self, tx_hash: Optional[str], attempts: int, elapsed_seconds: float):
        super().__init__(
            f"No receipt for {tx_hash} after {attempts} polls ({elapsed_seconds:.0f}s)",
            ErrorCode.WALLET_TIMEOUT,
            recoverable=False,
            details={"tx_hash": tx_hash, "attempts": attempts, "elapsed": elapsed_seconds},
        )
        self.tx_hash = tx_hash
        self.attempts = attempts
        self.elapsed_seconds = elapsed_seconds


class TransactionReverted(DexAdapterError):
    """Transaction mined with a failure status"""

    def __init__(self, tx_hash: str, status=None, reason: Optional[str] = None):
        message = f"Transaction reverted: {tx_hash}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            message,
            ErrorCode.TX_REVERTED,
            recoverable=False,
            details={"tx_hash": tx_hash, "status": status},
        )
        self.tx_hash = tx_hash
        self.status = status


class TransactionError(DexAdapterError):
    """
    Transaction could not be handed to the wallet

    Raised when:
    - The transport returns an error other than a user rejection
    - The transport returns no transaction hash
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TX_SEND_FAILED,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, code, recoverable=False, original_error=original_error)

    @classmethod
    def send_failed(cls, error) -> "TransactionError":
        return cls(
            f"Failed to send transaction: {error}",
            original_error=error if isinstance(error, Exception) else None,
        )

    @classmethod
    def fee_not_sent(cls, reason: str) -> "TransactionError":
        return cls(f"Protocol fee transfer failed: {reason}", ErrorCode.TX_FEE_NOT_SENT)


class OperationInProgress(DexAdapterError):
    """Another wallet operation is already active in this session"""

    def __init__(self, active: str):
        super().__init__(
            f"Operation already in progress: {active}",
            ErrorCode.OPERATION_IN_PROGRESS,
            details={"active": active},
        )
        self.active = active


class OperationCancelled(DexAdapterError):
    """Caller aborted before anything was submitted"""

    def __init__(self, operation: str):
        super().__init__(
            f"Operation cancelled before submission: {operation}",
            ErrorCode.OPERATION_CANCELLED,
        )
        self.operation = operation


class ConfigurationError(DexAdapterError):
    """
    Configuration-related errors

    Raised when:
    - Required configuration is missing
    - Configuration values are invalid
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"Missing required configuration: {param}", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration '{param}': {reason}", ErrorCode.CONFIG_INVALID)


class OperationNotSupported(DexAdapterError):
    """
    Operation not supported by the adapter

    Raised when:
    - A DEX family has no encoding for the requested call
    - A chain family has no transport for the requested method
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        protocol: Optional[str] = None,
    ):
        super().__init__(
            message,
            ErrorCode.OPERATION_NOT_SUPPORTED,
            recoverable=False,
            details={"operation": operation, "protocol": protocol},
        )
        self.operation = operation
        self.protocol = protocol

    @classmethod
    def not_implemented(cls, operation: str, protocol: str) -> "OperationNotSupported":
        return cls(
            f"Operation '{operation}' is not supported by {protocol} adapter",
            operation=operation,
            protocol=protocol,
        )
