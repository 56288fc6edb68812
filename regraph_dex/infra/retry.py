"""
Receipt Polling Policy Module

Bounded polling for transaction receipts across EVM, TRON and NEO wallets.
Includes structured logging with correlation IDs for operation tracing.
"""

import logging
import time
import uuid
import contextvars
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from ..config import config as global_config
from ..errors import DexAdapterError, WalletTimeout

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Context variable for correlation ID (thread-safe)
_correlation_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    'correlation_id', default=None
)


def generate_correlation_id() -> str:
    """Generate a unique correlation ID for operation tracing."""
    return uuid.uuid4().hex[:12]


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: Optional[str]) -> contextvars.Token:
    """Set the correlation ID in context. Returns token for reset."""
    return _correlation_id.set(correlation_id)


class CorrelationContext:
    """
    Context manager for correlation ID scoping.

    Usage:
        with CorrelationContext("swap") as cid:
            logger.info(f"[{cid}] Starting operation")
            receipt = poll_until(fetch, policy, "swap")
    """

    def __init__(self, prefix: Optional[str] = None):
        """
        Initialize correlation context.

        Args:
            prefix: Optional prefix for the correlation ID (e.g., "swap", "lp")
        """
        self.correlation_id = generate_correlation_id()
        if prefix:
            self.correlation_id = f"{prefix}_{self.correlation_id}"
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> str:
        self._token = set_correlation_id(self.correlation_id)
        return self.correlation_id

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._token is not None:
            _correlation_id.reset(self._token)


def log_with_correlation(
    level: int,
    message: str,
    operation_name: str,
    attempt: Optional[int] = None,
    max_attempts: Optional[int] = None,
    **extra
):
    """
    Log message with correlation ID and structured context.

    Args:
        level: Logging level (logging.INFO, logging.WARNING, etc.)
        message: Log message
        operation_name: Name of the operation being executed
        attempt: Current attempt number (1-indexed)
        max_attempts: Attempt cap, None when uncapped
        **extra: Additional context fields
    """
    cid = get_correlation_id()

    parts = []
    if cid:
        parts.append(f"[{cid}]")
    parts.append(f"[{operation_name}]")
    if attempt is not None:
        parts.append(f"[{attempt}/{max_attempts if max_attempts is not None else '-'}]")
    parts.append(message)

    log_message = " ".join(parts)

    # Add extra context for structured logging systems
    extra_context = {
        "correlation_id": cid,
        "operation": operation_name,
        "attempt": attempt,
        "max_attempts": max_attempts,
        **extra
    }

    logger.log(level, log_message, extra=extra_context)


# Error keywords for transient transport failures while polling
RECOVERABLE_KEYWORDS = [
    "timeout", "connection", "network", "rate limit",
    "too many requests", "503", "502", "504",
    "temporarily unavailable", "service unavailable",
    "econnreset", "enotfound", "etimedout",
    "socket hang up", "request failed",
]


def is_recoverable_error(error: Exception) -> bool:
    """
    Classify a polling error

    Coded errors carry their own flag; anything else is judged by its message.
    """
    if isinstance(error, DexAdapterError):
        return error.recoverable
    error_str = str(error).lower()
    return any(keyword in error_str for keyword in RECOVERABLE_KEYWORDS)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Receipt polling policy

    Attributes:
        interval: Seconds between polls
        max_attempts: Poll cap, None for uncapped
        deadline_seconds: Wall-clock cap, None for uncapped
    """
    interval: float = 2.0
    max_attempts: Optional[int] = None
    deadline_seconds: Optional[float] = None

    def __post_init__(self):
        if self.interval < 0:
            raise ValueError(f"interval must be >= 0, got {self.interval}")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.deadline_seconds is not None and self.deadline_seconds <= 0:
            raise ValueError(f"deadline_seconds must be > 0, got {self.deadline_seconds}")

    @property
    def is_bounded(self) -> bool:
        return self.max_attempts is not None or self.deadline_seconds is not None

    def exhausted(self, attempts: int, elapsed: float) -> bool:
        """True once either cap is reached"""
        if self.max_attempts is not None and attempts >= self.max_attempts:
            return True
        if self.deadline_seconds is not None and elapsed >= self.deadline_seconds:
            return True
        return False

    @classmethod
    def desktop(cls) -> "RetryPolicy":
        """Poll until a receipt arrives"""
        return cls(interval=global_config.tx.poll_interval)

    @classmethod
    def mobile(cls) -> "RetryPolicy":
        """60 polls or 120 s, whichever comes first"""
        return cls(
            interval=global_config.tx.poll_interval,
            max_attempts=global_config.tx.mobile_max_attempts,
            deadline_seconds=global_config.tx.mobile_deadline_seconds,
        )

    @classmethod
    def approval(cls) -> "RetryPolicy":
        return cls(
            interval=global_config.tx.poll_interval,
            max_attempts=global_config.tx.approval_max_attempts,
        )

    @classmethod
    def fee_transfer(cls) -> "RetryPolicy":
        return cls(
            interval=global_config.tx.poll_interval,
            max_attempts=global_config.tx.fee_transfer_max_attempts,
        )


def poll_until(
    fetch: Callable[[], Optional[T]],
    policy: RetryPolicy,
    operation_name: str,
    tx_hash: Optional[str] = None,
    clock: Optional[Callable[[], float]] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> T:
    """
    Call ``fetch`` until it returns something other than None

    Transient transport errors count as an empty poll; any other error propagates.
    Once the policy is exhausted no further fetch is made.

    Args:
        fetch: Receipt lookup, returns None while pending
        policy: Polling bounds
        operation_name: Name for logging purposes
        tx_hash: Hash being polled, reported on timeout
        clock: Time source, time.monotonic by default
        sleep: Sleep function, time.sleep by default

    Returns:
        First non-None value from fetch

    Raises:
        WalletTimeout: If the policy is exhausted first
    """
    clock = clock or time.monotonic
    sleep = sleep or time.sleep
    start = clock()
    attempt = 0

    while True:
        attempt += 1
        try:
            result = fetch()
        except Exception as e:
            if not is_recoverable_error(e):
                raise
            log_with_correlation(
                logging.WARNING,
                f"Transient error while polling: {e}",
                operation_name,
                attempt,
                policy.max_attempts,
                tx_hash=tx_hash,
                error_type="recoverable",
            )
            result = None

        if result is not None:
            if attempt > 1:
                log_with_correlation(
                    logging.DEBUG,
                    f"Receipt after {attempt} polls",
                    operation_name,
                    attempt,
                    policy.max_attempts,
                    tx_hash=tx_hash,
                )
            return result

        elapsed = clock() - start
        if policy.exhausted(attempt, elapsed):
            log_with_correlation(
                logging.ERROR,
                f"No receipt for {tx_hash} after {elapsed:.0f}s",
                operation_name,
                attempt,
                policy.max_attempts,
                tx_hash=tx_hash,
                error_type="timeout",
            )
            raise WalletTimeout(tx_hash, attempt, elapsed)

        sleep(policy.interval)
