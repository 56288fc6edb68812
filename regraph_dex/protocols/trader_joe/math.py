"""
Trader Joe Liquidity Book Math Utilities

Bin/price conversion and deposit distributions. Bin ids are offset by 2^23, so
bin 8388608 is price 1.
"""

import math
from decimal import ROUND_HALF_EVEN, Decimal
from typing import List, Union

from ...errors import InvalidInput
from ...types.position import BinDistribution
from ..uniswap_v3.math import TICK_BASE, log_ratio

BIN_ID_OFFSET = 2 ** 23
MIN_BIN_ID = 0
MAX_BIN_ID = 2 ** 24 - 1

BIN_STEPS = (1, 5, 10, 15, 20, 25)
DEFAULT_BIN_STEP = 15
DEFAULT_BIN_RANGE = 10

# Distribution weights are 1e18 fixed point
PRECISION = 10 ** 18

SHAPE_UNIFORM = "uniform"
SHAPE_CURVE = "curve"
SHAPE_BID_ASK = "bid-ask"
SHAPES = (SHAPE_UNIFORM, SHAPE_CURVE, SHAPE_BID_ASK)

Number = Union[Decimal, int, float, str]


def _check_bin_step(bin_step: int):
    if bin_step not in BIN_STEPS:
        raise InvalidInput.out_of_range("bin_step", bin_step, f"expected one of {BIN_STEPS}")


def bin_id_to_price(bin_id: int, bin_step: int, decimals_x: int = 0, decimals_y: int = 0) -> Decimal:
    """
    Convert bin ID to price (token Y per token X)

    Formula: price = (1 + bin_step/10000)^(bin_id - 2^23) * 10^(decimals_x - decimals_y)
    """
    _check_bin_step(bin_step)
    base = Decimal(1) + Decimal(bin_step) / Decimal(10000)
    return base ** (bin_id - BIN_ID_OFFSET) * Decimal(10) ** (decimals_x - decimals_y)


def price_to_bin_id(price: Number, bin_step: int, decimals_x: int = 0, decimals_y: int = 0) -> int:
    """
    Convert price to the nearest bin ID

    Formula: bin_id = round(log(price) / log(1 + bin_step/10000)) + 2^23
    Non-positive prices map to MIN_BIN_ID, infinite ones to MAX_BIN_ID.
    """
    _check_bin_step(bin_step)
    adjusted = Decimal(str(price)) / Decimal(10) ** (decimals_x - decimals_y)
    if adjusted.is_nan():
        raise InvalidInput.out_of_range("price", str(price), "not a number")
    if adjusted <= 0:
        return MIN_BIN_ID
    if adjusted.is_infinite():
        return MAX_BIN_ID
    base = Decimal(1) + Decimal(bin_step) / Decimal(10000)
    steps = log_ratio(adjusted, base).to_integral_value(rounding=ROUND_HALF_EVEN)
    bin_id = int(steps) + BIN_ID_OFFSET
    return max(MIN_BIN_ID, min(MAX_BIN_ID, bin_id))


def tick_to_bin(tick: int, bin_step: int) -> int:
    """
    Bin holding the price of a V3 tick

    Both grids are geometric, so this is a change of log base:
    bin = round(tick * ln(1.0001) / ln(1 + bin_step/10000)) + 2^23
    """
    _check_bin_step(bin_step)
    ratio = math.log(TICK_BASE) / math.log(1.0 + bin_step / 10000.0)
    return int(round(tick * ratio)) + BIN_ID_OFFSET


def _weight(shape: str, distance: int, bins_range: int) -> float:
    if shape == SHAPE_CURVE:
        return math.exp(-0.5 * (distance / (bins_range / 2)) ** 2)
    if shape == SHAPE_BID_ASK:
        return 0.3 + 0.7 * (distance / bins_range)
    return 1.0


def _normalize(weights: List[int]) -> List[int]:
    """Scale to sum exactly 1e18; rounding remainder goes to the last non-zero bin"""
    total = sum(weights)
    if total == 0:
        return weights
    scaled = [w * PRECISION // total for w in weights]
    remainder = PRECISION - sum(scaled)
    for i in range(len(scaled) - 1, -1, -1):
        if scaled[i] > 0:
            scaled[i] += remainder
            break
    return scaled


def build_bin_distribution(
    active_id: int,
    bins_range: int = DEFAULT_BIN_RANGE,
    shape: str = SHAPE_UNIFORM,
) -> BinDistribution:
    """
    Build the deltaIds / distributionX / distributionY arrays for addLiquidity

    Bins below the active bin hold only token Y, bins above hold only token X, and the
    active bin gets half weight on each side.

    Args:
        active_id: Active bin of the pair
        bins_range: Bins on each side of the active bin
        shape: "uniform", "curve" or "bid-ask"

    Returns:
        BinDistribution with 2 * bins_range + 1 entries
    """
    if shape not in SHAPES:
        raise InvalidInput.out_of_range("shape", shape, f"expected one of {SHAPES}")
    if bins_range < 1:
        raise InvalidInput.out_of_range("bins_range", bins_range, "must be at least 1")

    delta_ids = list(range(-bins_range, bins_range + 1))
    dist_x: List[int] = []
    dist_y: List[int] = []

    for delta in delta_ids:
        weight = _weight(shape, abs(delta), bins_range)
        if delta < 0:
            dist_x.append(0)
            dist_y.append(math.floor(weight * PRECISION))
        elif delta > 0:
            dist_x.append(math.floor(weight * PRECISION))
            dist_y.append(0)
        else:
            half = math.floor(weight * PRECISION / 2)
            dist_x.append(half)
            dist_y.append(half)

    return BinDistribution(
        delta_ids=delta_ids,
        distribution_x=_normalize(dist_x),
        distribution_y=_normalize(dist_y),
        active_id=active_id,
    )
