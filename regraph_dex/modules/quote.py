"""
Quote Client

HTTP client for the quote / price service.

    POST {endpoint} {"action": "prices", "chain": key}
        -> {"prices": {symbol: float}, "tokens": {symbol: address}}
    POST {endpoint} {"action": "quote", "tokenIn", "tokenOut", "amountIn", "chain"}
        -> {"amountOut": "123", "fee": 3000, "route": "...", "decimalsOut": 6}

Price tables are cached per chain in the session; swap quotes never are. The client
does not retry; the caller's periodic refresh re-fetches.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Union

import httpx

from ..codec import to_smallest_unit
from ..config import config as global_config
from ..errors import QuoteUnavailable
from ..registry import resolve_chain, resolve_token
from ..types import ChainProfile, PriceTable, Quote, Token
from .session import SessionContext

logger = logging.getLogger(__name__)


class QuoteClient:
    """
    Quote / price service client

    Usage:
        with SessionContext() as session:
            client = QuoteClient(session=session)
            quote = client.fetch_quote(weth, usdc, 10**18, "base")
            prices = client.fetch_prices("base")
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        session: Optional[SessionContext] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
        api_key: Optional[str] = None,
    ):
        """
        Initialize quote client

        Args:
            endpoint: Fixed endpoint URL; per-chain endpoints from config when omitted
            session: Session owning the price cache and wallet-action guard
            timeout: Request timeout in seconds
            http_client: Preconfigured httpx client (tests pass one with a MockTransport)
            api_key: Bearer token for the service
        """
        self._endpoint = endpoint
        self._session = session or SessionContext()
        self._timeout = timeout or global_config.quote.timeout
        self._api_key = api_key if api_key is not None else global_config.quote.api_key
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def session(self) -> SessionContext:
        return self._session

    def endpoint_for(self, chain: Union[str, ChainProfile]) -> str:
        if self._endpoint:
            return self._endpoint
        return global_config.quote.endpoint_for(resolve_chain(chain).key)

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client with auth headers"""
        if self._client is None:
            headers = {
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
            if self._api_key:
                headers["Authorization"] = f"Bearer {self._api_key}"

            self._client = httpx.Client(
                timeout=self._timeout,
                headers=headers,
            )
        return self._client

    def close(self):
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "QuoteClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _post(self, endpoint: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a JSON body

        Raises:
            QuoteUnavailable: On transport errors, non-2xx responses and non-object JSON
        """
        client = self._get_client()
        try:
            response = client.post(endpoint, json=body)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error_msg = f"HTTP {e.response.status_code}"
            try:
                error_data = e.response.json()
                if isinstance(error_data, dict) and "error" in error_data:
                    error_msg = str(error_data["error"])
            except ValueError:
                error_msg = e.response.text[:500] if e.response.text else error_msg
            logger.warning(f"Quote service error ({body.get('action')}): {error_msg}")
            raise QuoteUnavailable.http_status(endpoint, e.response.status_code, error_msg) from e
        except httpx.RequestError as e:
            logger.warning(f"Quote service request error ({body.get('action')}): {e}")
            raise QuoteUnavailable.transport(endpoint, e) from e

        try:
            data = response.json()
        except ValueError as e:
            raise QuoteUnavailable.malformed(endpoint, f"invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise QuoteUnavailable.malformed(endpoint, f"expected an object, got {type(data).__name__}")
        return data

    # ========== Prices ==========

    def fetch_prices(self, chain: Union[str, ChainProfile], force: bool = False) -> PriceTable:
        """
        USD price table for a chain

        A fresh cached table is returned as is. While a wallet action is pending no
        request is made and the cached table is returned even if stale.
        A closed session has no cache and never fetches.

        Raises:
            QuoteUnavailable: If nothing is cached and the service cannot be reached
        """
        profile = resolve_chain(chain)
        if self._session.closed:
            raise QuoteUnavailable(f"Session is closed, no prices for {profile.key}")
        cache = self._session.price_cache
        cached = cache.get(profile.key)

        if cached is not None and not force and cache.is_fresh(profile.key):
            return cached
        if not self._session.should_refresh():
            if cached is not None:
                logger.debug(f"[{profile.key}] Price refresh skipped, wallet action pending")
                return cached
            raise QuoteUnavailable(f"No cached prices for {profile.key} while a wallet action is pending")

        endpoint = self.endpoint_for(profile)
        data = self._post(endpoint, {"action": "prices", "chain": profile.key})
        tokens = data.get("tokens") or {}
        if not isinstance(tokens, dict):
            raise QuoteUnavailable.malformed(endpoint, "tokens must be an object")
        table = PriceTable(
            chain=profile.key,
            prices=_parse_prices(endpoint, data.get("prices") or {}),
            tokens=dict(tokens),
        )
        cache.put(profile.key, table)
        logger.debug(f"[{profile.key}] Fetched {len(table.prices)} prices")
        return table

    # ========== Quotes ==========

    def fetch_quote(
        self,
        token_in: Token,
        token_out: Token,
        amount_in: int,
        chain: Union[str, ChainProfile],
    ) -> Quote:
        """
        Quote for an exact input amount (smallest units)

        Never cached.

        Raises:
            QuoteUnavailable: On any transport error, or a response without a positive
                amountOut or without a fee tier
        """
        profile = resolve_chain(chain)
        endpoint = self.endpoint_for(profile)
        body = {
            "action": "quote",
            "tokenIn": token_in.address,
            "tokenOut": token_out.address,
            "amountIn": str(int(amount_in)),
            "chain": profile.key,
        }
        data = self._post(endpoint, body)

        for required in ("amountOut", "fee"):
            if data.get(required) in (None, ""):
                raise QuoteUnavailable.malformed(endpoint, f"missing {required}")
        try:
            amount_out = int(Decimal(str(data["amountOut"])))
            fee = int(data["fee"])
            decimals_out = int(data.get("decimalsOut", token_out.decimals))
        except (InvalidOperation, OverflowError, TypeError, ValueError) as e:
            raise QuoteUnavailable.malformed(endpoint, f"bad numeric field: {e}") from e
        if amount_out <= 0:
            raise QuoteUnavailable.malformed(endpoint, f"amountOut must be positive, got {amount_out}")
        if fee < 0:
            raise QuoteUnavailable.malformed(endpoint, f"negative fee {fee}")

        quote = Quote(
            amount_in=int(amount_in),
            amount_out=amount_out,
            fee_bps=fee,
            route=str(data.get("route", "")),
            decimals_out=decimals_out,
            token_in=token_in,
            token_out=token_out,
            source=data.get("source"),
        )
        logger.info(f"[{profile.key}] Quote {token_in.symbol}->{token_out.symbol}: {quote}")
        return quote

    def quote_human(
        self,
        token_in: Union[str, Token],
        token_out: Union[str, Token],
        amount_human: str,
        chain: Union[str, ChainProfile],
    ) -> Quote:
        """Quote for a UI amount ("1.5"); tokens may be registry symbols or addresses"""
        profile = resolve_chain(chain)
        if not isinstance(token_in, Token):
            token_in = resolve_token(profile, token_in)
        if not isinstance(token_out, Token):
            token_out = resolve_token(profile, token_out)
        amount_in = to_smallest_unit(amount_human, token_in.decimals)
        return self.fetch_quote(token_in, token_out, amount_in, profile)


def _parse_prices(endpoint: str, raw: Dict[str, Any]) -> Dict[str, Decimal]:
    if not isinstance(raw, dict):
        raise QuoteUnavailable.malformed(endpoint, "prices must be an object")
    prices: Dict[str, Decimal] = {}
    for symbol, value in raw.items():
        if value is None:
            continue
        try:
            price = Decimal(str(value))
        except InvalidOperation as e:
            raise QuoteUnavailable.malformed(endpoint, f"price for {symbol}: {value!r}") from e
        if not price.is_finite():
            raise QuoteUnavailable.malformed(endpoint, f"price for {symbol}: {value!r}")
        prices[symbol] = price
    return prices
