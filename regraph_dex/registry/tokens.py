"""
Token tables per chain

Addresses are the canonical mainnet deployments. Native assets use the chain's
native sentinel; wrapped natives are listed separately so they can be traded directly.
"""

from typing import Dict, List, Tuple

from ..types.common import Token, NATIVE_SENTINEL

# TRON zero address (base58 of 0x41 + 20 zero bytes)
TRON_NATIVE_SENTINEL = "T9yD14Nj9j7xAB4dbGeiX9h8unkKHxuWwb"

# (symbol, name, address, decimals, icon)
_TokenRow = Tuple[str, str, str, int, str]


# =============================================================================
# Base (8453)
# =============================================================================

BASE_TOKENS: List[_TokenRow] = [
    ("ETH", "Ethereum", NATIVE_SENTINEL, 18, "⟠"),
    ("WETH", "Wrapped Ether", "0x4200000000000000000000000000000000000006", 18, "⟠"),
    ("USDC", "USD Coin", "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913", 6, "💵"),
    ("USDbC", "USD Base Coin", "0xd9aAEc86B65D86f6A7B5B1b0c42FFA531710b6CA", 6, "💵"),
    ("DAI", "Dai Stablecoin", "0x50c5725949A6F0c72E6C4a641F24049A917DB0Cb", 18, "🔶"),
    ("USDT", "Tether USD", "0xfde4C96c8593536E31F229EA8f37b2ADa2699bb2", 6, "💲"),
    ("cbETH", "Coinbase Wrapped Staked ETH", "0x2Ae3F1Ec7F1F5012CFEab0185bfc7aa3cf0DEc22", 18, "🔵"),
    ("wstETH", "Wrapped stETH", "0xc1CBa3fCea344f92D9239c08C0568f6F2F0ee452", 18, "🔷"),
    ("AERO", "Aerodrome", "0x940181a94A35A4569E4529A3CDfB74e38FD98631", 18, "✈️"),
    ("WBTC", "Wrapped Bitcoin", "0x0555E30da8f98308EdB960aa94C0Db47230d2B9c", 8, "₿"),
    ("LINK", "Chainlink", "0x88Fb150BDc53A65fe94Dea0c9BA0a6dAf8C6e196", 18, "🔗"),
]

# =============================================================================
# Ethereum (1)
# =============================================================================

ETHEREUM_TOKENS: List[_TokenRow] = [
    ("ETH", "Ethereum", NATIVE_SENTINEL, 18, "⟠"),
    ("WETH", "Wrapped Ether", "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18, "⟠"),
    ("USDC", "USD Coin", "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", 6, "💵"),
    ("USDT", "Tether USD", "0xdAC17F958D2ee523a2206206994597C13D831ec7", 6, "💲"),
    ("DAI", "Dai Stablecoin", "0x6B175474E89094C44Da98b954EedeaC495271d0F", 18, "🔶"),
    ("WBTC", "Wrapped Bitcoin", "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599", 8, "₿"),
    ("UNI", "Uniswap", "0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984", 18, "🦄"),
    ("LINK", "Chainlink", "0x514910771AF9Ca656af840dff83E8264EcF986CA", 18, "🔗"),
    ("AAVE", "Aave", "0x7Fc66500c84A76Ad7e9c93437bFc5Ac33E2DDaE9", 18, "👻"),
]

# =============================================================================
# Arbitrum (42161)
# =============================================================================

ARBITRUM_TOKENS: List[_TokenRow] = [
    ("ETH", "Ethereum", NATIVE_SENTINEL, 18, "⟠"),
    ("WETH", "Wrapped Ether", "0x82aF49447D8a07e3bd95BD0d56f35241523fBab1", 18, "⟠"),
    ("USDC", "USD Coin", "0xaf88d065e77c8cC2239327C5EDb3A432268e5831", 6, "💵"),
    ("USDT", "Tether USD", "0xFd086bC7CD5C481DCC9C85ebE478A1C0b69FCbb9", 6, "💲"),
    ("ARB", "Arbitrum", "0x912CE59144191C1204E64559FE8253a0e49E6548", 18, "🔷"),
    ("GMX", "GMX", "0xfc5A1A6EB076a2C7aD06eD22C90d7E710E35ad0a", 18, "📊"),
]

# =============================================================================
# Polygon (137)
# =============================================================================

POLYGON_TOKENS: List[_TokenRow] = [
    ("MATIC", "Polygon", NATIVE_SENTINEL, 18, "💜"),
    ("WMATIC", "Wrapped MATIC", "0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270", 18, "💜"),
    ("USDC", "USD Coin", "0x3c499c542cEF5E3811e1192ce70d8cC03d5c3359", 6, "💵"),
    ("USDT", "Tether USD", "0xc2132D05D31c914a87C6611C10748AEb04B58e8F", 6, "💲"),
    ("WETH", "Wrapped Ether", "0x7ceB23fD6bC0adD59E62ac25578270cFf1b9f619", 18, "⟠"),
    ("WBTC", "Wrapped Bitcoin", "0x1BFD67037B42Cf73acF2047067bd4F2C47D9BfD6", 8, "₿"),
]

# =============================================================================
# Optimism (10)
# =============================================================================

OPTIMISM_TOKENS: List[_TokenRow] = [
    ("ETH", "Ethereum", NATIVE_SENTINEL, 18, "⟠"),
    ("WETH", "Wrapped Ether", "0x4200000000000000000000000000000000000006", 18, "⟠"),
    ("USDC", "USD Coin", "0x0b2C639c533813f4Aa9D7837CAf62653d097Ff85", 6, "💵"),
    ("USDT", "Tether USD", "0x94b008aA00579c1307B0EF2c499aD98a8ce58e58", 6, "💲"),
    ("OP", "Optimism", "0x4200000000000000000000000000000000000042", 18, "🔴"),
]

# =============================================================================
# BNB Smart Chain (56)
# =============================================================================

BSC_TOKENS: List[_TokenRow] = [
    ("BNB", "BNB", NATIVE_SENTINEL, 18, "🟡"),
    ("WBNB", "Wrapped BNB", "0xbb4CdB9CBd36B01bD1cBaEBF2De08d9173bc095c", 18, "🟡"),
    ("USDT", "Tether USD", "0x55d398326f99059fF775485246999027B3197955", 18, "💲"),
    ("USDC", "USD Coin", "0x8AC76a51cc950d9822D68b83fE1Ad97B32Cd580d", 18, "💵"),
    ("BUSD", "Binance USD", "0xe9e7CEA3DedcA5984780Bafc599bD69ADd087D56", 18, "💵"),
    ("CAKE", "PancakeSwap", "0x0E09FaBB73Bd3Ade0a17ECC321fD13a19e81cE82", 18, "🥞"),
    ("ETH", "Ethereum", "0x2170Ed0880ac9A755fd29B2688956BD959F933F8", 18, "⟠"),
    ("BTCB", "Bitcoin BEP2", "0x7130d2A12B9BCbFAe4f2634d864A1Ee1Ce3Ead9c", 18, "₿"),
    ("DAI", "Dai Stablecoin", "0x1AF3F329e8BE154074D8769D1FFa4eE058B1DBc3", 18, "🔶"),
    ("DOGE", "Dogecoin", "0xbA2aE424d960c26247Dd6c32edC70B295c744C43", 8, "🐕"),
]

# =============================================================================
# Avalanche C-Chain (43114)
# =============================================================================

AVALANCHE_TOKENS: List[_TokenRow] = [
    ("AVAX", "Avalanche", NATIVE_SENTINEL, 18, "🔺"),
    ("WAVAX", "Wrapped AVAX", "0xB31f66AA3C1e785363F0875A1B74E27b85FD66c7", 18, "🔺"),
    ("USDC", "USD Coin", "0xB97EF9Ef8734C71904D8002F8b6Bc66Dd9c48a6E", 6, "💵"),
    ("USDC.e", "Bridged USD Coin", "0xA7D7079b0FEaD91F3e65f86E8915Cb59c1a4C664", 6, "💵"),
    ("USDT", "Tether USD", "0x9702230A8Ea53601f5cD2dc00fDBc13d4dF4A8c7", 6, "💲"),
    ("JOE", "Trader Joe", "0x6e84a6216eA6dACC71eE8E6b0a5B7322EEbC0fDd", 18, "🦜"),
    ("WETH.e", "Wrapped Ether", "0x49D5c2BdFfac6CE2BFdB6640F4F80f226bc10bAB", 18, "⟠"),
    ("WBTC.e", "Wrapped Bitcoin", "0x50b7545627a5162F82A992c33b87aDc75187B218", 8, "₿"),
]

# =============================================================================
# TRON
# =============================================================================

TRON_TOKENS: List[_TokenRow] = [
    ("TRX", "TRON", TRON_NATIVE_SENTINEL, 6, "♦️"),
    ("WTRX", "Wrapped TRX", "TNUC9Qb1rRpS5CbWLmNMxXBjyFoydXjWFR", 6, "♦️"),
    ("USDT", "Tether USD", "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t", 6, "💲"),
    ("USDC", "USD Coin", "TEkxiTehnzSmSe2XqrBj4w32RUN966rdz8", 6, "💵"),
    ("USDD", "USDD", "TPYmHEhy5n8TCEfYGqW2rPxsghSfzghPDn", 18, "💵"),
    ("BTT", "BitTorrent", "TAFjULxiVgT4qWk6UZwjqwZXTSaGaqnVp4", 18, "🔷"),
    ("JST", "JUST", "TCFLL5dx5ZJdKnWuesXxi1VPwjLVmWZZy9", 18, "⚖️"),
    ("SUN", "SUN", "TSSMHYeV2uE9qYH95DqyoCuNCzEL1NvU3S", 18, "☀️"),
]

# =============================================================================
# NEO N3 (NEP-17 script hashes)
# =============================================================================

NEO_TOKENS: List[_TokenRow] = [
    ("NEO", "NEO", "0xef4073a0f2b305a38ec4050e4d3d28bc40ea63f5", 0, "💚"),
    ("GAS", "GAS", "0xd2a4cff31913016155e38e474a2c06d08be276cf", 8, "⛽"),
    ("FLM", "Flamingo", "0xf0151f528127558851b39c2cd8aa47da7418ab28", 8, "🦩"),
    ("fUSDT", "fUSDT", "0xcd48b160c1bbc9d74997b803b9a7ad50a4bef020", 6, "💲"),
    ("bNEO", "Burger NEO", "0x48c40d4666f93408be1bef038b6722404d9a4c2a", 8, "🍔"),
    ("SWTH", "Switcheo", "0x78e1330db47634afdb5ea455302ba2d12b8d549d", 8, "🔄"),
]


_TOKEN_ROWS: Dict[str, Tuple[List[_TokenRow], object]] = {
    "base": (BASE_TOKENS, 8453),
    "ethereum": (ETHEREUM_TOKENS, 1),
    "arbitrum": (ARBITRUM_TOKENS, 42161),
    "polygon": (POLYGON_TOKENS, 137),
    "optimism": (OPTIMISM_TOKENS, 10),
    "bsc": (BSC_TOKENS, 56),
    "avalanche": (AVALANCHE_TOKENS, 43114),
    "tron": (TRON_TOKENS, "tron-mainnet"),
    "neo": (NEO_TOKENS, "neo-mainnet"),
}


def _build_tables() -> Dict[str, Tuple[Token, ...]]:
    tables = {}
    for key, (rows, chain_id) in _TOKEN_ROWS.items():
        tables[key] = tuple(
            Token(
                address=address,
                symbol=symbol,
                decimals=decimals,
                name=name,
                icon=icon,
                chain_id=chain_id,
            )
            for symbol, name, address, decimals, icon in rows
        )
    return tables


TOKENS_BY_CHAIN: Dict[str, Tuple[Token, ...]] = _build_tables()
