"""
Uniswap V3 Math Utilities

Tick/price conversion and tick alignment for concentrated-liquidity ranges.
Prices are token1 per token0; pass token decimals to work in UI units.
"""

from decimal import ROUND_FLOOR, Decimal, localcontext
from typing import Tuple, Union

from ...errors import InvalidInput

MIN_TICK = -887272
MAX_TICK = 887272

TICK_BASE = 1.0001

# Digits for ln(price) / ln(base); keeps the error far below one tick at MAX_TICK
LOG_PRECISION = 40

# Preset +/- range widths offered for new positions (percent)
RANGE_PRESETS = (10, 20, 30, 50)
DEFAULT_RANGE_PERCENT = 30

Number = Union[Decimal, int, float, str]


def _to_decimal(value: Number) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def log_ratio(value: Decimal, base: Decimal) -> Decimal:
    """ln(value) / ln(base) in Decimal, so very large or very small prices do not overflow a float"""
    with localcontext() as ctx:
        ctx.prec = LOG_PRECISION
        return value.ln() / base.ln()


def price_to_tick(price: Number, decimals0: int = 0, decimals1: int = 0) -> int:
    """
    Convert price to tick: floor(ln(price) / ln(1.0001))

    Non-positive prices map to MIN_TICK, infinite ones to MAX_TICK; results are clamped
    to [MIN_TICK, MAX_TICK].
    """
    adjusted = _to_decimal(price) * Decimal(10) ** (decimals1 - decimals0)
    if adjusted.is_nan():
        raise InvalidInput.out_of_range("price", str(price), "not a number")
    if adjusted <= 0:
        return MIN_TICK
    if adjusted.is_infinite():
        return MAX_TICK
    tick = int(log_ratio(adjusted, Decimal(str(TICK_BASE))).to_integral_value(rounding=ROUND_FLOOR))
    return max(MIN_TICK, min(MAX_TICK, tick))


def tick_to_price(tick: int, decimals0: int = 0, decimals1: int = 0) -> Decimal:
    """Convert tick to price: 1.0001^tick"""
    price = Decimal(str(TICK_BASE)) ** tick
    return price * Decimal(10) ** (decimals0 - decimals1)


def round_tick(tick: int, tick_spacing: int, round_up: bool) -> int:
    """
    Align a tick to a multiple of tick_spacing

    Rounds to the nearest multiple (halves go up), then nudges one spacing so the
    result is >= tick when round_up, <= tick otherwise.
    """
    if tick_spacing <= 0:
        raise InvalidInput.out_of_range("tick_spacing", tick_spacing, "must be positive")
    rounded = ((2 * tick + tick_spacing) // (2 * tick_spacing)) * tick_spacing
    if round_up and rounded < tick:
        rounded += tick_spacing
    elif not round_up and rounded > tick:
        rounded -= tick_spacing
    return rounded


def usable_tick_bounds(tick_spacing: int) -> Tuple[int, int]:
    """Lowest / highest ticks that are multiples of tick_spacing"""
    return -(MAX_TICK // tick_spacing) * tick_spacing, (MAX_TICK // tick_spacing) * tick_spacing


def ticks_for_price_range(
    price_lower: Number,
    price_upper: Number,
    tick_spacing: int,
    decimals0: int = 0,
    decimals1: int = 0,
) -> Tuple[int, int]:
    """
    Tick range for a price range

    Lower rounds down, upper rounds up. Both are kept inside the usable bounds and an
    empty range is widened by one spacing.
    """
    low_bound, high_bound = usable_tick_bounds(tick_spacing)
    tick_lower = round_tick(price_to_tick(price_lower, decimals0, decimals1), tick_spacing, round_up=False)
    tick_upper = round_tick(price_to_tick(price_upper, decimals0, decimals1), tick_spacing, round_up=True)
    tick_lower = max(low_bound, min(high_bound - tick_spacing, tick_lower))
    tick_upper = max(low_bound + tick_spacing, min(high_bound, tick_upper))
    if tick_lower >= tick_upper:
        tick_upper = tick_lower + tick_spacing
    return tick_lower, tick_upper


def price_range_from_percent(current_price: Number, percent: Number) -> Tuple[Decimal, Decimal]:
    """
    +/- percent band around the current price

    Example:
        price_range_from_percent(Decimal("2000"), 30) -> (1400, 2600)
    """
    price = _to_decimal(current_price)
    pct = _to_decimal(percent)
    if price <= 0:
        raise InvalidInput.out_of_range("current_price", price, "must be positive")
    if not Decimal(0) < pct < Decimal(100):
        raise InvalidInput.out_of_range("percent", pct, "must be between 0 and 100")
    factor = pct / Decimal(100)
    return price * (Decimal(1) - factor), price * (Decimal(1) + factor)
