"""
Result type definitions for transactions and quotes
"""

import time
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional

from .common import Token


class TxStatus(Enum):
    """Transaction status"""
    SUCCESS = "success"
    FAILED = "failed"
    TIMEOUT = "timeout"
    PENDING = "pending"
    SKIPPED = "skipped"  # No action needed (e.g., allowance already sufficient)


@dataclass
class TxResult:
    """
    Transaction execution result

    Attributes:
        status: Transaction status
        tx_hash: Transaction hash (0x-hex on EVM/NEO, bare hex txid on TRON)
        explorer_url: Block explorer link for tx_hash
        error: Error message if failed
        recoverable: Whether the error is recoverable (can retry)
        error_code: Error code for programmatic handling
        block_number: Block the transaction was included in
        receipt: Raw receipt / transaction info returned by the wallet
    """
    status: TxStatus
    tx_hash: Optional[str] = None
    explorer_url: Optional[str] = None
    error: Optional[str] = None
    recoverable: bool = False
    error_code: Optional[str] = None
    block_number: Optional[int] = None
    receipt: Optional[dict] = None

    @property
    def is_success(self) -> bool:
        return self.status == TxStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        return self.status == TxStatus.FAILED

    @property
    def is_timeout(self) -> bool:
        return self.status == TxStatus.TIMEOUT

    @property
    def is_skipped(self) -> bool:
        return self.status == TxStatus.SKIPPED

    @classmethod
    def success(cls, tx_hash: str, **kwargs) -> "TxResult":
        """Create successful result"""
        return cls(status=TxStatus.SUCCESS, tx_hash=tx_hash, **kwargs)

    @classmethod
    def failed(cls, error: str, tx_hash: str = None, **kwargs) -> "TxResult":
        """Create failed result"""
        return cls(status=TxStatus.FAILED, tx_hash=tx_hash, error=error, **kwargs)

    @classmethod
    def timeout(cls, tx_hash: str = None, **kwargs) -> "TxResult":
        """Create timeout result (recoverable - the transaction may still land)"""
        return cls(
            status=TxStatus.TIMEOUT,
            tx_hash=tx_hash,
            error="Transaction confirmation timeout",
            recoverable=True,
            error_code="3004",
            **kwargs
        )

    @classmethod
    def skipped(cls, reason: str = "No action needed", **kwargs) -> "TxResult":
        """Create skipped result (no transaction was needed)"""
        return cls(status=TxStatus.SKIPPED, tx_hash=None, error=reason, **kwargs)

    def __str__(self) -> str:
        if self.is_success:
            hash_display = f"{self.tx_hash[:16]}..." if self.tx_hash else "no hash"
            return f"TxResult(SUCCESS, {hash_display})"
        return f"TxResult({self.status.value}, error={self.error})"


@dataclass
class Quote:
    """
    Swap quote returned by the quote service

    Quotes are never cached; callers discard stale ones.

    Attributes:
        amount_in: Input amount (smallest units) the quote was requested for
        amount_out: Expected output (smallest units of token_out)
        fee_bps: Pool fee as reported by the service
        route: Route description ("UniswapV3", "PancakeSwap V2", ...)
        decimals_out: Decimals of token_out
        source: Optional pricing source tag
        token_in: Input token
        token_out: Output token
    """
    amount_in: int
    amount_out: int
    fee_bps: int
    route: str
    decimals_out: int
    token_in: Optional[Token] = None
    token_out: Optional[Token] = None
    source: Optional[str] = None

    @property
    def exchange_rate(self) -> Decimal:
        """Output per input, in UI units"""
        if self.amount_in == 0 or self.token_in is None:
            return Decimal(0)
        ui_in = Decimal(self.amount_in).scaleb(-self.token_in.decimals)
        ui_out = Decimal(self.amount_out).scaleb(-self.decimals_out)
        return ui_out / ui_in

    def __str__(self) -> str:
        return f"Quote({self.amount_in} -> {self.amount_out}, route={self.route})"


@dataclass
class PriceTable:
    """
    USD price table for one chain

    Attributes:
        chain: Chain key
        prices: Symbol -> USD price
        tokens: Symbol -> token address
        fetched_at: Unix time of the fetch
    """
    chain: str
    prices: Dict[str, Decimal] = field(default_factory=dict)
    tokens: Dict[str, str] = field(default_factory=dict)
    fetched_at: float = field(default_factory=time.time)

    def price_of(self, symbol: str) -> Optional[Decimal]:
        return self.prices.get(symbol)

    def age(self, now: Optional[float] = None) -> float:
        return (time.time() if now is None else now) - self.fetched_at

    def usd_value(self, symbol: str, ui_amount: Decimal) -> Optional[Decimal]:
        """USD value of ``ui_amount`` of ``symbol``, None if unpriced"""
        price = self.prices.get(symbol)
        if price is None:
            return None
        return price * ui_amount
