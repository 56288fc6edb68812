"""
Chain / DEX registry

Static per-chain profiles and the lookup functions the rest of the core uses.
Lookups never fall back to a default chain or token: unknown input raises.
"""

import logging
from typing import Dict, List, Optional, Tuple, Union

from ..types.chain import ChainProfile, ChainFamily, DexKind, FeeTier
from ..types.common import Token, NATIVE_SENTINEL
from ..errors import UnsupportedChain, UnsupportedToken
from .tokens import TOKENS_BY_CHAIN, TRON_NATIVE_SENTINEL

logger = logging.getLogger(__name__)


UNISWAP_FEE_TIERS: Tuple[FeeTier, ...] = (
    FeeTier(100, 1),
    FeeTier(500, 10),
    FeeTier(3000, 60),
    FeeTier(10000, 200),
)

PANCAKESWAP_FEE_TIERS: Tuple[FeeTier, ...] = (
    FeeTier(100, 1),
    FeeTier(500, 10),
    FeeTier(2500, 50),
    FeeTier(10000, 200),
)

# Trader Joe V1 pools charge a flat 0.3%; LP goes through Liquidity Book bins
TRADER_JOE_FEE_TIERS: Tuple[FeeTier, ...] = (FeeTier(3000, 1),)
LB_BIN_STEPS: Tuple[int, ...] = (1, 5, 10, 15, 20, 25)

# Flamingo pairs charge a flat 0.3%
FLAMINGO_FEE_TIERS: Tuple[FeeTier, ...] = (FeeTier(3000, 1),)

UNISWAP_V3_SWAP_ROUTER = "0xE592427A0AEce92De3Edee1F18E0157C05861564"
UNISWAP_V3_POSITION_MANAGER = "0xC36442b4a4522E871399CD717aBDD847Ab11FE88"


CHAINS: Dict[str, ChainProfile] = {
    "base": ChainProfile(
        key="base",
        name="Base",
        family=ChainFamily.EVM,
        chain_id=8453,
        swap_dex=DexKind.UNISWAP_V3,
        liquidity_dex=DexKind.UNISWAP_V3,
        dex_name="Uniswap V3",
        router_address="0x2626664c2603336E57B271c5C0b26F421741e481",
        wrapped_native_address="0x4200000000000000000000000000000000000006",
        position_manager_address="0x03a520b32C04BF3bEEf7BEb72E919cf822Ed34f1",
        fee_tiers=UNISWAP_FEE_TIERS,
        explorer_url="https://basescan.org",
        rpc_endpoints=("https://mainnet.base.org",),
        native_symbol="ETH",
        native_decimals=18,
        native_address=NATIVE_SENTINEL,
        swap_deadline_seconds=1800,
    ),
    "ethereum": ChainProfile(
        key="ethereum",
        name="Ethereum",
        family=ChainFamily.EVM,
        chain_id=1,
        swap_dex=DexKind.UNISWAP_V3,
        liquidity_dex=DexKind.UNISWAP_V3,
        dex_name="Uniswap V3",
        router_address=UNISWAP_V3_SWAP_ROUTER,
        wrapped_native_address="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        position_manager_address=UNISWAP_V3_POSITION_MANAGER,
        fee_tiers=UNISWAP_FEE_TIERS,
        explorer_url="https://etherscan.io",
        rpc_endpoints=("https://eth.llamarpc.com",),
        native_symbol="ETH",
        native_decimals=18,
        native_address=NATIVE_SENTINEL,
        swap_deadline_seconds=1800,
        aliases=("eth", "mainnet"),
    ),
    "arbitrum": ChainProfile(
        key="arbitrum",
        name="Arbitrum One",
        family=ChainFamily.EVM,
        chain_id=42161,
        swap_dex=DexKind.UNISWAP_V3,
        liquidity_dex=DexKind.UNISWAP_V3,
        dex_name="Uniswap V3",
        router_address=UNISWAP_V3_SWAP_ROUTER,
        wrapped_native_address="0x82aF49447D8a07e3bd95BD0d56f35241523fBab1",
        position_manager_address=UNISWAP_V3_POSITION_MANAGER,
        fee_tiers=UNISWAP_FEE_TIERS,
        explorer_url="https://arbiscan.io",
        rpc_endpoints=("https://arb1.arbitrum.io/rpc",),
        native_symbol="ETH",
        native_decimals=18,
        native_address=NATIVE_SENTINEL,
        swap_deadline_seconds=1800,
        aliases=("arb",),
    ),
    "polygon": ChainProfile(
        key="polygon",
        name="Polygon",
        family=ChainFamily.EVM,
        chain_id=137,
        swap_dex=DexKind.UNISWAP_V3,
        liquidity_dex=DexKind.UNISWAP_V3,
        dex_name="Uniswap V3",
        router_address=UNISWAP_V3_SWAP_ROUTER,
        wrapped_native_address="0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270",
        position_manager_address=UNISWAP_V3_POSITION_MANAGER,
        fee_tiers=UNISWAP_FEE_TIERS,
        explorer_url="https://polygonscan.com",
        rpc_endpoints=("https://polygon-rpc.com",),
        native_symbol="MATIC",
        native_decimals=18,
        native_address=NATIVE_SENTINEL,
        swap_deadline_seconds=1800,
        aliases=("matic",),
    ),
    "optimism": ChainProfile(
        key="optimism",
        name="Optimism",
        family=ChainFamily.EVM,
        chain_id=10,
        swap_dex=DexKind.UNISWAP_V3,
        liquidity_dex=DexKind.UNISWAP_V3,
        dex_name="Uniswap V3",
        router_address=UNISWAP_V3_SWAP_ROUTER,
        wrapped_native_address="0x4200000000000000000000000000000000000006",
        position_manager_address=UNISWAP_V3_POSITION_MANAGER,
        fee_tiers=UNISWAP_FEE_TIERS,
        explorer_url="https://optimistic.etherscan.io",
        rpc_endpoints=("https://mainnet.optimism.io",),
        native_symbol="ETH",
        native_decimals=18,
        native_address=NATIVE_SENTINEL,
        swap_deadline_seconds=1800,
        aliases=("op",),
    ),
    "bsc": ChainProfile(
        key="bsc",
        name="BNB Smart Chain",
        family=ChainFamily.EVM,
        chain_id=56,
        swap_dex=DexKind.UNISWAP_V2,
        liquidity_dex=DexKind.UNISWAP_V3,
        dex_name="PancakeSwap",
        router_address="0x10ED43C718714eb63d5aA57B78B54704E256024E",
        wrapped_native_address="0xbb4CdB9CBd36B01bD1cBaEBF2De08d9173bc095c",
        position_manager_address="0x46A15B0b27311cedF172AB29E4f4766fbE7F4364",
        fee_tiers=PANCAKESWAP_FEE_TIERS,
        explorer_url="https://bscscan.com",
        rpc_endpoints=("https://bsc-dataseed.binance.org",),
        native_symbol="BNB",
        native_decimals=18,
        native_address=NATIVE_SENTINEL,
        default_fee=2500,
        aliases=("bnb", "binance"),
    ),
    "avalanche": ChainProfile(
        key="avalanche",
        name="Avalanche",
        family=ChainFamily.EVM,
        chain_id=43114,
        swap_dex=DexKind.UNISWAP_V2,
        liquidity_dex=DexKind.LIQUIDITY_BOOK,
        dex_name="Trader Joe",
        router_address="0x60aE616a2155Ee3d9A68541Ba4544862310933d4",
        wrapped_native_address="0xB31f66AA3C1e785363F0875A1B74E27b85FD66c7",
        position_manager_address="0xb4315e873dBcf96Ffd0acd8EA43f689D8c20fB30",
        fee_tiers=TRADER_JOE_FEE_TIERS,
        explorer_url="https://snowtrace.io",
        rpc_endpoints=("https://api.avax.network/ext/bc/C/rpc",),
        native_symbol="AVAX",
        native_decimals=18,
        native_address=NATIVE_SENTINEL,
        native_swap_name="AVAX",
        bin_steps=LB_BIN_STEPS,
        aliases=("avax",),
    ),
    "tron": ChainProfile(
        key="tron",
        name="TRON",
        family=ChainFamily.TRON,
        chain_id="tron-mainnet",
        swap_dex=DexKind.UNISWAP_V2,
        liquidity_dex=DexKind.UNISWAP_V3,
        dex_name="SunSwap",
        router_address="TKzxdSv2FZKQrEqkKVgp5DcwEXBEKMg2Ax",
        wrapped_native_address="TNUC9Qb1rRpS5CbWLmNMxXBjyFoydXjWFR",
        position_manager_address="TLSWrv7eC1AZCXkRjpqMZUmvgd99cj7pPF",
        fee_tiers=UNISWAP_FEE_TIERS,
        explorer_url="https://tronscan.org",
        rpc_endpoints=("https://api.trongrid.io",),
        native_symbol="TRX",
        native_decimals=6,
        native_address=TRON_NATIVE_SENTINEL,
        aliases=("trx",),
    ),
    "neo": ChainProfile(
        key="neo",
        name="NEO N3",
        family=ChainFamily.NEO,
        chain_id="neo-mainnet",
        swap_dex=DexKind.NEP17,
        liquidity_dex=DexKind.NEP17,
        dex_name="Flamingo",
        router_address="0xde3a4b093abbd07e9a69cdec88a54d9a1fe14975",
        wrapped_native_address="",
        position_manager_address="0xde3a4b093abbd07e9a69cdec88a54d9a1fe14975",
        fee_tiers=FLAMINGO_FEE_TIERS,
        explorer_url="https://explorer.onegate.space",
        rpc_endpoints=("https://mainnet1.neo.coz.io:443",),
        native_symbol="NEO",
        native_decimals=0,
        native_address="",
        aliases=("neo3", "n3"),
    ),
}

DEFAULT_CHAIN = "base"


def _build_index() -> Dict[str, str]:
    index: Dict[str, str] = {}
    for key, profile in CHAINS.items():
        index[key] = key
        index[str(profile.chain_id).lower()] = key
        if profile.hex_chain_id:
            index[profile.hex_chain_id] = key
        for alias in profile.aliases:
            index[alias.lower()] = key
    return index


_CHAIN_INDEX: Dict[str, str] = _build_index()


def resolve_chain(chain: Union[str, int, ChainProfile]) -> ChainProfile:
    """
    Look up a chain profile

    Args:
        chain: Registry key, alias, numeric chain id, hex chain id, or a profile

    Returns:
        ChainProfile

    Raises:
        UnsupportedChain: If the chain is unknown
    """
    if isinstance(chain, ChainProfile):
        return chain
    if isinstance(chain, bool):
        raise UnsupportedChain(chain)
    lookup = str(chain).strip().lower()
    key = _CHAIN_INDEX.get(lookup)
    if key is None and lookup.startswith("0x"):
        try:
            key = _CHAIN_INDEX.get(str(int(lookup, 16)))
        except ValueError:
            key = None
    if key is None:
        raise UnsupportedChain(chain)
    return CHAINS[key]


def chain_for_chain_id(chain_id: Union[int, str]) -> ChainProfile:
    """Reverse lookup from a wallet-reported chain id (int or hex string)"""
    if isinstance(chain_id, str) and chain_id.lower().startswith("0x"):
        chain_id = int(chain_id, 16)
    for profile in CHAINS.values():
        if profile.chain_id == chain_id:
            return profile
    raise UnsupportedChain(chain_id)


def list_chains(family: Optional[ChainFamily] = None) -> List[ChainProfile]:
    """List chain profiles, optionally filtered by transport family"""
    return [p for p in CHAINS.values() if family is None or p.family == family]


def list_tokens(chain) -> Tuple[Token, ...]:
    """All registry tokens for a chain"""
    profile = resolve_chain(chain)
    return TOKENS_BY_CHAIN.get(profile.key, ())


def resolve_token(chain, symbol_or_address: str) -> Token:
    """
    Look up a token on a chain

    Symbols match case-sensitively first ("USDbC" vs "USDBC"), then case-insensitively.
    Addresses match case-insensitively.

    Raises:
        UnsupportedToken: If the token is not in the chain's table
    """
    profile = resolve_chain(chain)
    tokens = TOKENS_BY_CHAIN.get(profile.key, ())
    needle = (symbol_or_address or "").strip()

    for token in tokens:
        if token.symbol == needle:
            return token
    lowered = needle.lower()
    for token in tokens:
        if token.symbol.lower() == lowered:
            return token
    for token in tokens:
        if token.address.lower() == lowered:
            return token

    raise UnsupportedToken(symbol_or_address, profile.key)


def tick_spacing_for(chain, fee: int) -> int:
    """
    Tick spacing for a fee tier on a chain

    Raises:
        UnsupportedChain: If the chain does not offer the fee tier
    """
    profile = resolve_chain(chain)
    for tier in profile.fee_tiers:
        if tier.fee == fee:
            return tier.tick_spacing
    raise UnsupportedChain(profile.key, f"fee tier {fee} not offered; available: {list(profile.fees)}")


def is_native(chain, address: str) -> bool:
    """Check if an address is the chain's native asset sentinel"""
    profile = resolve_chain(chain)
    if not profile.native_address or not address:
        return False
    return address.lower() == profile.native_address.lower()


def wrap_native(chain, address: str) -> str:
    """Map the native sentinel to the wrapped-native token; other addresses pass through"""
    profile = resolve_chain(chain)
    if is_native(profile, address):
        return profile.wrapped_native_address
    return address
