"""
DEX adapter registry

Maps each DEX family to its adapter class and picks the adapter for a chain once,
from the chain profile, so callers never branch on chain identifiers.
"""

import logging
from typing import Dict, List, Type, TYPE_CHECKING

if TYPE_CHECKING:
    from .base import DexAdapter

from ..errors import ConfigurationError, OperationNotSupported
from ..registry import resolve_chain
from ..types import DexKind

logger = logging.getLogger(__name__)

PURPOSE_SWAP = "swap"
PURPOSE_LIQUIDITY = "liquidity"


class ProtocolRegistry:
    """
    Registry for DEX adapters

    Usage:
        # Register adapter class
        ProtocolRegistry.register(DexKind.UNISWAP_V3, UniswapV3Adapter)

        # Get adapter instance for a chain
        adapter = ProtocolRegistry.get("bsc", purpose="liquidity")

        # List available DEX families
        kinds = ProtocolRegistry.list()
    """

    # Registered adapter classes
    _adapters: Dict[DexKind, Type["DexAdapter"]] = {}

    # Cached adapter instances (keyed by kind + chain)
    _instances: Dict[str, "DexAdapter"] = {}

    _builtins_loaded: bool = False

    @classmethod
    def register(cls, kind: DexKind, adapter_class: Type["DexAdapter"]):
        """
        Register an adapter class for a DEX family

        Args:
            kind: DEX family
            adapter_class: Adapter class (not instance)
        """
        cls._adapters[kind] = adapter_class
        logger.debug(f"Registered DEX adapter: {kind.value} -> {adapter_class.__name__}")

    @classmethod
    def get(cls, chain, purpose: str = PURPOSE_SWAP, cache: bool = True) -> "DexAdapter":
        """
        Adapter instance for a chain

        Args:
            chain: Chain key, id or profile
            purpose: "swap" or "liquidity"
            cache: Whether to cache the instance

        Returns:
            DexAdapter bound to the chain profile

        Raises:
            OperationNotSupported: If the chain offers no DEX for the purpose
            ConfigurationError: If no adapter is registered for the DEX family
        """
        profile = resolve_chain(chain)
        if purpose == PURPOSE_SWAP:
            kind = profile.swap_dex
        elif purpose == PURPOSE_LIQUIDITY:
            kind = profile.liquidity_dex
        else:
            raise ConfigurationError.invalid("purpose", f"expected 'swap' or 'liquidity', got {purpose!r}")

        if kind is None:
            raise OperationNotSupported(
                f"{profile.name} has no {purpose} DEX",
                operation=purpose,
                protocol=profile.dex_name,
            )

        cache_key = f"{kind.value}:{profile.key}"
        if cache and cache_key in cls._instances:
            return cls._instances[cache_key]

        cls._ensure_loaded()
        adapter_class = cls._adapters.get(kind)
        if adapter_class is None:
            available = ", ".join(k.value for k in cls._adapters) or "none"
            raise ConfigurationError.invalid(
                "dex_kind", f"No adapter for {kind.value}. Available: {available}"
            )

        instance = adapter_class(profile)
        if cache:
            cls._instances[cache_key] = instance
        return instance

    @classmethod
    def list(cls) -> List[DexKind]:
        """List registered DEX families"""
        cls._ensure_loaded()
        return list(cls._adapters.keys())

    @classmethod
    def is_registered(cls, kind: DexKind) -> bool:
        return kind in cls._adapters

    @classmethod
    def clear_cache(cls):
        """Clear cached adapter instances"""
        cls._instances.clear()

    @classmethod
    def _ensure_loaded(cls):
        """Register the built-in adapters on first use"""
        if cls._builtins_loaded:
            return
        cls._builtins_loaded = True
        from .uniswap_v3 import UniswapV3Adapter
        from .uniswap_v2 import UniswapV2Adapter
        from .trader_joe import LiquidityBookAdapter
        from .flamingo import Nep17Adapter

        builtins = {
            DexKind.UNISWAP_V3: UniswapV3Adapter,
            DexKind.UNISWAP_V2: UniswapV2Adapter,
            DexKind.LIQUIDITY_BOOK: LiquidityBookAdapter,
            DexKind.NEP17: Nep17Adapter,
        }
        for kind, adapter_class in builtins.items():
            # Explicit registrations win over built-ins
            cls._adapters.setdefault(kind, adapter_class)


def adapter_for(chain, purpose: str = PURPOSE_SWAP) -> "DexAdapter":
    """
    Convenience function to get the adapter for a chain

    Args:
        chain: Chain key, id or profile
        purpose: "swap" or "liquidity"
    """
    return ProtocolRegistry.get(chain, purpose)


def register_adapter(kind: DexKind, adapter_class: Type["DexAdapter"]):
    """Convenience function to register an adapter class"""
    ProtocolRegistry.register(kind, adapter_class)
