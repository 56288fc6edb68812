"""
Protocol fee split and slippage math

All amounts are integers in smallest units. Every formula truncates (floor division)
and never rounds in the user's favour.
"""

import time
from dataclasses import dataclass
from decimal import Decimal, ROUND_FLOOR
from typing import Optional, Union

from ..config import config as global_config
from ..errors import InvalidInput
from ..types.chain import ChainFamily, ChainProfile

PROTOCOL_FEE_NUMERATOR = 3
PROTOCOL_FEE_DENOMINATOR = 1000

MAX_SLIPPAGE_BPS = 10_000


@dataclass(frozen=True)
class FeeSplit:
    """
    Input amount split into protocol fee and swap amount

    Invariant: fee + swap_amount == gross
    """
    gross: int
    fee: int
    swap_amount: int

    def __str__(self) -> str:
        return f"FeeSplit(gross={self.gross}, fee={self.fee}, swap={self.swap_amount})"


def _require_positive(name: str, value: int):
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{name} must be an integer amount, got {type(value).__name__}", field=name, value=value)
    if value <= 0:
        raise InvalidInput.out_of_range(name, value, "must be positive")


def split_fee(
    amount: int,
    numerator: int = PROTOCOL_FEE_NUMERATOR,
    denominator: int = PROTOCOL_FEE_DENOMINATOR,
) -> FeeSplit:
    """
    Withhold the protocol fee from a swap input

    fee = amount * 3 // 1000, swap_amount = amount - fee
    """
    _require_positive("amount", amount)
    if denominator <= 0 or not 0 <= numerator < denominator:
        raise InvalidInput.out_of_range("fee", f"{numerator}/{denominator}", "must be a fraction in [0, 1)")
    fee = amount * numerator // denominator
    return FeeSplit(gross=amount, fee=fee, swap_amount=amount - fee)


def min_amount_out(amount_out: int, slippage_bps: int) -> int:
    """
    Slippage-bounded minimum output

    amount_out * (1000 - slippage_bps // 10) // 1000. Slippage is applied at per-mille
    resolution, so 55 bps behaves like 50 bps.
    """
    _require_positive("amount_out", amount_out)
    if not 0 <= slippage_bps <= MAX_SLIPPAGE_BPS:
        raise InvalidInput.out_of_range("slippage_bps", slippage_bps, f"must be in 0..{MAX_SLIPPAGE_BPS}")
    return amount_out * (1000 - slippage_bps // 10) // 1000


def slippage_percent_to_bps(percent: Union[Decimal, int, str]) -> int:
    """Convert a percentage ("0.5") to basis points (50), truncating"""
    value = Decimal(str(percent))
    if not Decimal(0) <= value <= Decimal(100):
        raise InvalidInput.out_of_range("slippage", value, "must be between 0 and 100 percent")
    return int((value * 100).to_integral_value(rounding=ROUND_FLOOR))


def lp_min_amount(amount: int, slippage_percent: Union[Decimal, int, str]) -> int:
    """
    Minimum deposit for an LP call

    amount * floor((100 - slippage) * 100) // 10000. Zero is allowed, one-sided
    deposits leave the other side at 0.
    """
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise InvalidInput.out_of_range("amount", amount, "must be a non-negative integer")
    slippage = Decimal(str(slippage_percent))
    if not Decimal(0) <= slippage <= Decimal(100):
        raise InvalidInput.out_of_range("slippage", slippage, "must be between 0 and 100 percent")
    factor = int(((Decimal(100) - slippage) * 100).to_integral_value(rounding=ROUND_FLOOR))
    return amount * factor // 10000


def liquidity_to_remove(liquidity: int, percent: int) -> int:
    """liquidity * percent // 100, percent in 1..100"""
    _require_positive("liquidity", liquidity)
    if isinstance(percent, bool) or not isinstance(percent, int) or not 1 <= percent <= 100:
        raise InvalidInput.out_of_range("percent", percent, "must be an integer in 1..100")
    return liquidity * percent // 100


def deadline(offset_seconds: int, now: Optional[float] = None) -> int:
    """Unix deadline offset_seconds from now"""
    if offset_seconds <= 0:
        raise InvalidInput.out_of_range("deadline_offset", offset_seconds, "must be positive")
    return int(time.time() if now is None else now) + int(offset_seconds)


def fee_wallet_for(profile: ChainProfile) -> str:
    """
    Protocol fee receiver for the chain's address format

    TRON and NEO need their own wallets; EVM chains share one.
    """
    fee_config = global_config.fee
    if profile.family == ChainFamily.TRON:
        return fee_config.tron_wallet_address
    if profile.family == ChainFamily.NEO:
        return fee_config.neo_wallet_address
    return fee_config.wallet_address
