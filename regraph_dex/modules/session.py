"""
Session context

Everything that lives from wallet connect to wallet disconnect: the wallet-action guard
that pauses background refresh, the per-chain price cache, and the active operation
slot. Nothing here is module-level; each session owns its own state.
"""

import logging
import time
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from ..config import config as global_config
from ..errors import OperationInProgress
from ..types import PriceTable

logger = logging.getLogger(__name__)

REFRESH_PRICES = "prices"
REFRESH_BALANCES = "balances"


class WalletActionGuard:
    """
    Reference-counted "wallet action in progress" flag

    Nested begin/end pairs are safe; refresh stays paused until the outermost end().
    """

    def __init__(self):
        self._depth = 0

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def active(self) -> bool:
        return self._depth > 0

    def begin(self) -> int:
        self._depth += 1
        return self._depth

    def end(self) -> int:
        """Release one hold; extra calls leave the count at zero"""
        if self._depth == 0:
            logger.debug("WalletActionGuard.end() without matching begin()")
            return 0
        self._depth -= 1
        return self._depth

    def reset(self):
        self._depth = 0

    @contextmanager
    def hold(self) -> Iterator["WalletActionGuard"]:
        self.begin()
        try:
            yield self
        finally:
            self.end()


class PriceCache:
    """
    Time-boxed price tables, one per chain

    Swap quotes are never stored here.
    """

    def __init__(self, ttl_seconds: Optional[float] = None, clock=time.time):
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else global_config.quote.price_ttl_seconds
        self._clock = clock
        self._tables: Dict[str, PriceTable] = {}

    def get(self, chain: str) -> Optional[PriceTable]:
        """Cached table for a chain, fresh or stale"""
        return self._tables.get(chain)

    def put(self, chain: str, table: PriceTable):
        self._tables[chain] = table

    def is_fresh(self, chain: str) -> bool:
        table = self._tables.get(chain)
        if table is None:
            return False
        return table.age(self._clock()) < self.ttl_seconds

    def clear(self):
        self._tables.clear()

    def __len__(self) -> int:
        return len(self._tables)


class SessionContext:
    """
    Session-scoped state shared by the quote client and the orchestrator

    Usage:
        with SessionContext() as session:
            client = QuoteClient(endpoint, session)
            ...
        # cache cleared and guard reset on exit (wallet disconnect)
    """

    def __init__(
        self,
        guard: Optional[WalletActionGuard] = None,
        price_cache: Optional[PriceCache] = None,
    ):
        self.guard = guard or WalletActionGuard()
        self.price_cache = price_cache or PriceCache()
        self._active_operation: Optional[str] = None
        self._closed = False

    @property
    def active_operation(self) -> Optional[str]:
        return self._active_operation

    @property
    def closed(self) -> bool:
        return self._closed

    def begin_operation(self, name: str):
        """
        Claim the single operation slot

        Raises:
            OperationInProgress: If another operation is active
        """
        if self._active_operation is not None:
            raise OperationInProgress(self._active_operation)
        self._active_operation = name
        logger.debug(f"Operation started: {name}")

    def end_operation(self, name: Optional[str] = None):
        if name is not None and self._active_operation not in (None, name):
            logger.warning(f"end_operation({name}) while {self._active_operation} is active")
            return
        self._active_operation = None

    def should_refresh(self) -> bool:
        """Background refresh is paused while a wallet action is pending"""
        return not self._closed and not self.guard.active

    def close(self):
        """Teardown on wallet disconnect"""
        self.price_cache.clear()
        self.guard.reset()
        self._active_operation = None
        self._closed = True
        logger.debug("Session closed")

    def __enter__(self) -> "SessionContext":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class RefreshScheduler:
    """
    Fixed-interval refresh bookkeeping for prices and balances

    The caller drives the clock: ask due(now), run the refreshes, then mark_done().
    Nothing is due while the session's guard is active.
    """

    def __init__(
        self,
        session: SessionContext,
        prices_interval: Optional[float] = None,
        balances_interval: Optional[float] = None,
    ):
        self.session = session
        self.intervals = {
            REFRESH_PRICES: prices_interval if prices_interval is not None else global_config.refresh.prices_interval,
            REFRESH_BALANCES: (
                balances_interval if balances_interval is not None else global_config.refresh.balances_interval
            ),
        }
        self._last_run: Dict[str, Optional[float]] = {name: None for name in self.intervals}

    def due(self, now: Optional[float] = None) -> List[str]:
        if not self.session.should_refresh():
            return []
        now = time.time() if now is None else now
        return [
            name for name, interval in self.intervals.items()
            if self._last_run[name] is None or now - self._last_run[name] >= interval
        ]

    def mark_done(self, name: str, now: Optional[float] = None):
        if name not in self._last_run:
            raise KeyError(f"Unknown refresh: {name}")
        self._last_run[name] = time.time() if now is None else now
