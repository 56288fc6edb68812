"""
Chain profile definitions
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


class ChainFamily(Enum):
    """Wallet transport family"""
    EVM = "evm"
    TRON = "tron"
    NEO = "neo"


class DexKind(Enum):
    """DEX family, one adapter variant each"""
    UNISWAP_V3 = "uniswap_v3"
    UNISWAP_V2 = "uniswap_v2"
    LIQUIDITY_BOOK = "liquidity_book"
    NEP17 = "nep17"


@dataclass(frozen=True)
class FeeTier:
    """Pool fee tier (hundredths of a bip, 3000 = 0.3%) and its tick spacing"""
    fee: int
    tick_spacing: int

    @property
    def percent(self) -> float:
        return self.fee / 10_000


@dataclass(frozen=True)
class ChainProfile:
    """
    Static per-chain configuration

    Attributes:
        key: Registry key ("base", "bsc", ...)
        name: Display name
        family: Transport family
        chain_id: Numeric EVM chain id, or a string id for TRON / NEO
        swap_dex: Adapter variant used for swaps
        liquidity_dex: Adapter variant used for LP operations
        dex_name: DEX display name
        router_address: Swap router
        wrapped_native_address: WETH / WBNB / WAVAX / WTRX
        position_manager_address: NonfungiblePositionManager or LB router
        fee_tiers: Supported fee tiers (never empty)
        explorer_url: Block explorer base URL
        rpc_endpoints: Public RPC endpoints
        native_symbol: Native currency symbol
        native_decimals: Native currency decimals
        native_address: Native sentinel address used in token tables
        native_swap_name: "ETH" or "AVAX", naming of V2 router native functions
        swap_deadline_seconds: Deadline offset for swaps
        lp_deadline_seconds: Deadline offset for LP calls
        default_fee: Fee tier preselected for new positions
        bin_steps: Liquidity Book bin steps (empty for tick-based chains)
        aliases: Extra names accepted by resolve_chain
    """
    key: str
    name: str
    family: ChainFamily
    chain_id: Union[int, str]
    swap_dex: DexKind
    liquidity_dex: Optional[DexKind]
    dex_name: str
    router_address: str
    wrapped_native_address: str
    position_manager_address: str
    fee_tiers: Tuple[FeeTier, ...]
    explorer_url: str
    rpc_endpoints: Tuple[str, ...]
    native_symbol: str
    native_decimals: int
    native_address: str
    native_swap_name: str = "ETH"
    swap_deadline_seconds: int = 1200
    lp_deadline_seconds: int = 1800
    default_fee: int = 3000
    bin_steps: Tuple[int, ...] = field(default_factory=tuple)
    aliases: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.fee_tiers:
            raise ValueError(f"Chain {self.key} must define at least one fee tier")
        for tier in self.fee_tiers:
            if tier.tick_spacing <= 0:
                raise ValueError(f"Chain {self.key}: tick spacing must be positive, got {tier.tick_spacing}")

    def __str__(self) -> str:
        return self.key

    @property
    def is_evm(self) -> bool:
        return self.family == ChainFamily.EVM

    @property
    def hex_chain_id(self) -> Optional[str]:
        """Chain id as used by wallet_switchEthereumChain (EVM only)"""
        if self.family != ChainFamily.EVM or not isinstance(self.chain_id, int):
            return None
        return hex(self.chain_id)

    @property
    def fees(self) -> Tuple[int, ...]:
        return tuple(tier.fee for tier in self.fee_tiers)

    def explorer_tx_url(self, tx_hash: str) -> str:
        """Explorer link for a transaction"""
        base = self.explorer_url.rstrip("/")
        if self.family == ChainFamily.TRON:
            return f"{base}/#/transaction/{tx_hash}"
        return f"{base}/tx/{tx_hash}"

    def add_chain_params(self) -> dict:
        """Parameters for wallet_addEthereumChain"""
        return {
            "chainId": self.hex_chain_id,
            "chainName": self.name,
            "nativeCurrency": {
                "name": self.native_symbol,
                "symbol": self.native_symbol,
                "decimals": self.native_decimals,
            },
            "rpcUrls": list(self.rpc_endpoints),
            "blockExplorerUrls": [self.explorer_url],
        }
