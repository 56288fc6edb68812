"""
Common type definitions
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import FrozenSet, Union


# Stablecoin symbols, used for USD-pegged price fallbacks
STABLECOINS: FrozenSet[str] = frozenset({
    "USDT", "USDC", "USDbC", "DAI", "BUSD", "USDD", "fUSDT", "USDC.e", "USDT.e", "DAI.e",
})

# Native asset sentinel on EVM chains
NATIVE_SENTINEL = "0x0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class Token:
    """
    Token descriptor

    Attributes:
        address: Contract address, or the chain's native sentinel
        symbol: Token symbol (e.g., "ETH", "USDC")
        decimals: Number of decimal places
        name: Display name
        icon: Icon reference for the UI
        chain_id: Chain the token lives on (EVM id, or "tron-mainnet" / "neo-mainnet")
        imported: True for tokens decoded from an on-chain contract at runtime
    """
    address: str
    symbol: str
    decimals: int
    name: str = ""
    icon: str = ""
    chain_id: Union[int, str] = 0
    imported: bool = False

    def __str__(self) -> str:
        return self.symbol

    def __repr__(self) -> str:
        return f"Token({self.symbol}, {self.address[:10]}...)"

    def ui_amount(self, raw_amount: int) -> Decimal:
        """
        Convert raw amount to UI amount with full precision

        Args:
            raw_amount: Raw token amount (smallest units)

        Returns:
            UI amount as Decimal for precision
        """
        return Decimal(raw_amount) / Decimal(10 ** self.decimals)

    def raw_amount(self, ui_amount: Union[Decimal, int, str]) -> int:
        """
        Convert UI amount to raw amount, truncating extra fraction digits

        Args:
            ui_amount: Human-readable amount

        Returns:
            Raw amount in smallest units
        """
        from ..codec import to_smallest_unit
        if isinstance(ui_amount, Decimal):
            try:
                ui_amount = format(ui_amount, "f")
            except (InvalidOperation, ValueError):
                ui_amount = str(ui_amount)
        return to_smallest_unit(str(ui_amount), self.decimals)

    def same_address(self, other: str) -> bool:
        return self.address.lower() == other.lower()
