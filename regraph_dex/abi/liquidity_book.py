"""
Trader Joe Liquidity Book (V2.1) router call data

``LiquidityParameters`` carries three dynamic arrays, so unlike the NPM structs it is
encoded with eth_abi rather than word by word.
"""

from dataclasses import dataclass, field
from typing import List

from .encoder import abi_address, encode_call, selector_for

LIQUIDITY_PARAMETERS_TYPE = (
    "address",    # tokenX
    "address",    # tokenY
    "uint256",    # binStep
    "uint256",    # amountX
    "uint256",    # amountY
    "uint256",    # amountXMin
    "uint256",    # amountYMin
    "uint256",    # activeIdDesired
    "uint256",    # idSlippage
    "int256[]",   # deltaIds
    "uint256[]",  # distributionX
    "uint256[]",  # distributionY
    "address",    # to
    "address",    # refundTo
    "uint256",    # deadline
)

_PARAMS_SIGNATURE = "(" + ",".join(LIQUIDITY_PARAMETERS_TYPE) + ")"
ADD_LIQUIDITY_SIGNATURE = f"addLiquidity({_PARAMS_SIGNATURE})"
ADD_LIQUIDITY_NATIVE_SIGNATURE = f"addLiquidityNATIVE({_PARAMS_SIGNATURE})"
ADD_LIQUIDITY_SELECTOR = selector_for(ADD_LIQUIDITY_SIGNATURE)
ADD_LIQUIDITY_NATIVE_SELECTOR = selector_for(ADD_LIQUIDITY_NATIVE_SIGNATURE)
_ADDRESS_FIELDS = (0, 1, 12, 13)

TRADER_JOE_POOL_URL = "https://traderjoexyz.com/avalanche/pool/v21/{token_x}/{token_y}/{bin_step}"


@dataclass
class LBLiquidityParameters:
    """LBRouter LiquidityParameters struct, fields in ABI order"""
    token_x: str
    token_y: str
    bin_step: int
    amount_x: int
    amount_y: int
    amount_x_min: int
    amount_y_min: int
    active_id_desired: int
    id_slippage: int
    delta_ids: List[int] = field(default_factory=list)
    distribution_x: List[int] = field(default_factory=list)
    distribution_y: List[int] = field(default_factory=list)
    to: str = ""
    refund_to: str = ""
    deadline: int = 0

    def as_tuple(self) -> tuple:
        return (
            self.token_x,
            self.token_y,
            self.bin_step,
            self.amount_x,
            self.amount_y,
            self.amount_x_min,
            self.amount_y_min,
            self.active_id_desired,
            self.id_slippage,
            list(self.delta_ids),
            list(self.distribution_x),
            list(self.distribution_y),
            self.to,
            self.refund_to or self.to,
            self.deadline,
        )


def _abi_values(params: LBLiquidityParameters) -> tuple:
    values = list(params.as_tuple())
    for index in _ADDRESS_FIELDS:
        values[index] = abi_address(values[index])
    return tuple(values)


def encode_lb_add_liquidity(params: LBLiquidityParameters) -> str:
    return encode_call(ADD_LIQUIDITY_SELECTOR, [_PARAMS_SIGNATURE], [_abi_values(params)])


def encode_lb_add_liquidity_native(params: LBLiquidityParameters) -> str:
    """addLiquidityNATIVE - the AVAX side is sent as call value"""
    return encode_call(ADD_LIQUIDITY_NATIVE_SELECTOR, [_PARAMS_SIGNATURE], [_abi_values(params)])


def pool_deep_link(token_x: str, token_y: str, bin_step: int) -> str:
    """Trader Joe UI page for the pair, used when the wallet flow is handed off"""
    return TRADER_JOE_POOL_URL.format(token_x=token_x, token_y=token_y, bin_step=bin_step)
