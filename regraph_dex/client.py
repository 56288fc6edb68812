"""
DexClient - Unified entry point for DEX operations

Binds one wallet transport to a chain and exposes the functional modules
(wallet, swap, liquidity) plus the shared session, quote client and orchestrator.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Union, TYPE_CHECKING

from .errors import ConfigurationError, UnsupportedToken
from .infra.retry import RetryPolicy
from .infra.transports import WalletTransport, transport_for
from .modules.orchestrator import ConfirmCallback, TransactionOrchestrator
from .modules.quote import QuoteClient
from .modules.session import RefreshScheduler, SessionContext
from .registry import resolve_chain, resolve_token
from .types import ChainProfile, PriceTable, Token

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)


class DexClient:
    """
    Unified DEX client

    Provides access to DEX operations through functional modules:
    - wallet: Native / token balances, custom token import
    - swap: Quote, fee split and swap through the chain's swap DEX
    - liquidity: Open / increase / remove / collect positions

    Usage:
        # Browser-style wallet object wrapped in the family's transport
        client = DexClient.connect("base", provider)

        # Local key through web3.py
        client = DexClient.from_private_key("bsc", "0x...")

        with client:
            outcome = client.swap.swap_tokens("ETH", "USDC", "0.1")
            print(outcome.state, outcome.tx_hash)
    """

    def __init__(
        self,
        chain: Union[str, int, ChainProfile],
        transport: WalletTransport,
        quote_endpoint: Optional[str] = None,
        retry_policy: Optional[RetryPolicy] = None,
        session: Optional[SessionContext] = None,
        confirm: Optional[ConfirmCallback] = None,
        http_client: Optional["httpx.Client"] = None,
    ):
        """
        Initialize DexClient

        Args:
            chain: Chain key, alias, id or profile
            transport: Wallet transport matching the chain's family
            quote_endpoint: Fixed quote service URL, per-chain config endpoints when omitted
            retry_policy: Receipt polling for the main call (desktop when omitted)
            session: Session to share with other clients
            confirm: Called with each plan before anything is sent
            http_client: Preconfigured httpx client for the quote service
        """
        profile = resolve_chain(chain)
        if transport.family != profile.family:
            raise ConfigurationError.invalid(
                "transport",
                f"{profile.name} needs a {profile.family.value} transport, got {transport.family.value}",
            )

        self._profile = profile
        self._transport = transport
        self._session = session or SessionContext()
        self._quotes = QuoteClient(endpoint=quote_endpoint, session=self._session, http_client=http_client)
        self._orchestrator = TransactionOrchestrator(
            transport,
            session=self._session,
            retry_policy=retry_policy,
            confirm=confirm,
        )
        self._refresh = RefreshScheduler(self._session)
        self._imported: Dict[str, Token] = {}

        # Lazy-loaded modules
        self._wallet: Optional["WalletModule"] = None
        self._swap: Optional["SwapModule"] = None
        self._liquidity: Optional["LiquidityModule"] = None

    # ========== Factories ==========

    @classmethod
    def connect(cls, chain, wallet, address: Optional[str] = None, **kwargs) -> "DexClient":
        """
        Wrap a wallet object (EIP-1193 provider, TronWeb, NeoLine) for the chain's family

        Args:
            chain: Chain key, alias, id or profile
            wallet: Wallet object
            address: Wallet address, read from the wallet when omitted
            **kwargs: Passed to DexClient()
        """
        profile = resolve_chain(chain)
        return cls(profile, transport_for(profile.family, wallet, address), **kwargs)

    @classmethod
    def from_private_key(
        cls,
        chain,
        private_key: str,
        rpc_url: Optional[str] = None,
        **kwargs,
    ) -> "DexClient":
        """
        EVM client signing locally through web3.py

        The RPC defaults to RPC_URL_<CHAIN>, then the chain's first endpoint.
        """
        from .infra.web3_provider import Web3Provider
        from .config import config

        profile = resolve_chain(chain)
        if not profile.is_evm:
            raise ConfigurationError.invalid("chain", f"{profile.key} is not an EVM chain")
        rpc_url = rpc_url or config.evm.rpc_overrides.get(profile.key) or profile.rpc_endpoints[0]
        provider = Web3Provider.from_private_key(rpc_url, private_key, profile.chain_id)
        return cls.connect(profile, provider, **kwargs)

    # ========== Accessors ==========

    @property
    def profile(self) -> ChainProfile:
        """Active chain profile"""
        return self._profile

    @property
    def chain(self) -> str:
        return self._profile.key

    @property
    def transport(self) -> WalletTransport:
        return self._transport

    @property
    def session(self) -> SessionContext:
        return self._session

    @property
    def quotes(self) -> QuoteClient:
        """Quote / price service client"""
        return self._quotes

    @property
    def orchestrator(self) -> TransactionOrchestrator:
        return self._orchestrator

    @property
    def refresh(self) -> RefreshScheduler:
        """Price / balance refresh bookkeeping, paused while a wallet action is pending"""
        return self._refresh

    @property
    def address(self) -> str:
        """Connected wallet address"""
        return self._transport.address

    @property
    def wallet(self) -> "WalletModule":
        """
        Wallet module for balance queries

        Provides:
        - native_balance(): Native balance in smallest units
        - token_balance(token): Token balance in smallest units
        - balances(tokens): UI balances by symbol
        - import_token(address): Descriptor from on-chain metadata
        """
        if self._wallet is None:
            from .modules.wallet import WalletModule
            self._wallet = WalletModule(self._transport, self._profile)
        return self._wallet

    @property
    def swap(self) -> "SwapModule":
        """
        Swap module for token exchanges

        Provides:
        - quote(intent): Quote for the post-fee amount
        - prepare(intent): SwapPlan without touching the wallet
        - swap(intent): Prepare and execute
        """
        if self._swap is None:
            from .modules.swap import SwapModule
            self._swap = SwapModule(self)
        return self._swap

    @property
    def liquidity(self) -> "LiquidityModule":
        """
        Liquidity module for LP operations

        Provides:
        - open_position(...): Mint a position
        - increase(position, amount0, amount1): Add liquidity
        - remove(position, percent): Decrease and collect
        - collect(position): Collect fees
        - positions(owner): List positions
        """
        if self._liquidity is None:
            from .modules.liquidity import LiquidityModule
            self._liquidity = LiquidityModule(self)
        return self._liquidity

    # ========== Chain / tokens ==========

    def use_chain(self, chain) -> ChainProfile:
        """
        Move the client to another chain of the same family

        The wallet is switched lazily, on the next operation.
        """
        profile = resolve_chain(chain)
        if profile.family != self._transport.family:
            raise ConfigurationError.invalid(
                "chain", f"{profile.name} needs a {profile.family.value} wallet"
            )
        if profile.key != self._profile.key:
            logger.info(f"Client chain {self._profile.key} -> {profile.key}")
            self._profile = profile
            self._wallet = None
        return profile

    def resolve_token(self, symbol_or_address: str, profile: Optional[ChainProfile] = None) -> Token:
        """
        Registry token, or one imported through import_token()

        Raises:
            UnsupportedToken: If the token is neither listed nor imported
        """
        profile = profile or self._profile
        try:
            return resolve_token(profile, symbol_or_address)
        except UnsupportedToken:
            imported = self._imported.get(_imported_key(profile.key, symbol_or_address))
            if imported is None:
                raise
            return imported

    def import_token(self, address: str) -> Token:
        """Read a token's metadata from chain and make it resolvable by address and symbol"""
        token = self.wallet.import_token(address)
        self._imported[_imported_key(self._profile.key, token.address)] = token
        self._imported[_imported_key(self._profile.key, token.symbol)] = token
        return token

    def prices(self, force: bool = False) -> PriceTable:
        """USD price table for the active chain"""
        return self._quotes.fetch_prices(self._profile, force=force)

    # ========== Lifecycle ==========

    def close(self):
        """Wallet disconnect: clear the session and close the quote client"""
        self._session.close()
        self._quotes.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"DexClient(chain={self._profile.key}, family={self._profile.family.value})"


def _imported_key(chain: str, ref: str) -> str:
    return f"{chain}:{ref.strip().lower()}"


# Type hints for modules (resolved at runtime)
if TYPE_CHECKING:
    from .modules.wallet import WalletModule
    from .modules.swap import SwapModule
    from .modules.liquidity import LiquidityModule
