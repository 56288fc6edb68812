"""
Position type definitions
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple

from .chain import FeeTier
from ..errors import InvalidInput


@dataclass(frozen=True)
class LiquidityRange:
    """
    Tick range for a concentrated-liquidity position

    Invariant: tick_lower < tick_upper, both multiples of the tier's spacing.
    """
    price_lower: Decimal
    price_upper: Decimal
    tick_lower: int
    tick_upper: int
    fee_tier: FeeTier

    def __post_init__(self):
        spacing = self.fee_tier.tick_spacing
        if self.tick_lower >= self.tick_upper:
            raise InvalidInput(
                f"tick_lower ({self.tick_lower}) must be below tick_upper ({self.tick_upper})",
                field="tick_lower",
                value=self.tick_lower,
            )
        if self.tick_lower % spacing or self.tick_upper % spacing:
            raise InvalidInput(
                f"Ticks {self.tick_lower}/{self.tick_upper} are not multiples of spacing {spacing}",
                field="tick_spacing",
                value=spacing,
            )

    @classmethod
    def from_prices(cls, price_lower, price_upper, fee_tier: FeeTier) -> "LiquidityRange":
        """
        Build a range from raw (token1 per token0) prices

        Lower tick rounds down, upper tick rounds up; a degenerate range is widened by
        one spacing.
        """
        from ..protocols.uniswap_v3.math import ticks_for_price_range

        lower = Decimal(str(price_lower))
        upper = Decimal(str(price_upper))
        if lower <= 0 or upper <= 0:
            raise InvalidInput.out_of_range("price", f"{lower}-{upper}", "prices must be positive")
        if lower > upper:
            raise InvalidInput("price_lower must not exceed price_upper", field="price_lower", value=lower)
        tick_lower, tick_upper = ticks_for_price_range(lower, upper, fee_tier.tick_spacing)
        return cls(lower, upper, tick_lower, tick_upper, fee_tier)

    @property
    def width_ticks(self) -> int:
        return self.tick_upper - self.tick_lower

    def contains_tick(self, tick: int) -> bool:
        return self.tick_lower <= tick < self.tick_upper


@dataclass
class Position:
    """
    NonfungiblePositionManager position

    Attributes:
        token_id: Position NFT id
        token0: Token0 address (lower sort order)
        token1: Token1 address
        fee: Pool fee tier
        tick_lower: Lower tick
        tick_upper: Upper tick
        liquidity: Position liquidity
        tokens_owed0: Uncollected token0
        tokens_owed1: Uncollected token1
        chain: Chain key
    """
    token_id: int
    token0: str
    token1: str
    fee: int
    tick_lower: int
    tick_upper: int
    liquidity: int
    tokens_owed0: int = 0
    tokens_owed1: int = 0
    chain: str = ""

    def __str__(self) -> str:
        return f"Position(#{self.token_id}, fee={self.fee}, ticks={self.tick_lower}..{self.tick_upper})"

    @property
    def is_closed(self) -> bool:
        return self.liquidity == 0

    @property
    def has_uncollected(self) -> bool:
        return self.tokens_owed0 > 0 or self.tokens_owed1 > 0

    def check_in_range(self, current_tick: int) -> bool:
        return self.tick_lower <= current_tick < self.tick_upper

    def price_bounds(self, decimals0: int = 0, decimals1: int = 0) -> Tuple[Decimal, Decimal]:
        """Lower/upper price (token1 per token0, UI units)"""
        from ..protocols.uniswap_v3.math import tick_to_price

        scale = Decimal(10) ** (decimals0 - decimals1)
        return tick_to_price(self.tick_lower) * scale, tick_to_price(self.tick_upper) * scale

    def to_dict(self) -> dict:
        return {
            "token_id": self.token_id,
            "token0": self.token0,
            "token1": self.token1,
            "fee": self.fee,
            "tick_lower": self.tick_lower,
            "tick_upper": self.tick_upper,
            "liquidity": str(self.liquidity),
            "tokens_owed0": str(self.tokens_owed0),
            "tokens_owed1": str(self.tokens_owed1),
            "chain": self.chain,
        }


@dataclass
class BinDistribution:
    """
    Liquidity Book deposit shape

    Weights are 1e18-scaled integers; each non-empty side sums to exactly 1e18.
    """
    delta_ids: List[int] = field(default_factory=list)
    distribution_x: List[int] = field(default_factory=list)
    distribution_y: List[int] = field(default_factory=list)
    active_id: Optional[int] = None

    def __post_init__(self):
        if not len(self.delta_ids) == len(self.distribution_x) == len(self.distribution_y):
            raise InvalidInput("Bin distribution arrays must have equal length", field="delta_ids")

    def __len__(self) -> int:
        return len(self.delta_ids)

    @property
    def bin_ids(self) -> List[int]:
        base = self.active_id or 0
        return [base + d for d in self.delta_ids]

    @property
    def total_x(self) -> int:
        return sum(self.distribution_x)

    @property
    def total_y(self) -> int:
        return sum(self.distribution_y)
