"""
ERC-20 call data
"""

from .encoder import build_call, uint_word, address_word, tron_parameters

APPROVE_SELECTOR = "0x095ea7b3"
ALLOWANCE_SELECTOR = "0xdd62ed3e"
BALANCE_OF_SELECTOR = "0x70a08231"
TRANSFER_SELECTOR = "0xa9059cbb"
NAME_SELECTOR = "0x06fdde03"
SYMBOL_SELECTOR = "0x95d89b41"
DECIMALS_SELECTOR = "0x313ce567"

# TRON wallets take the signature text, not the selector
APPROVE_SIGNATURE = "approve(address,uint256)"
TRANSFER_SIGNATURE = "transfer(address,uint256)"
ALLOWANCE_SIGNATURE = "allowance(address,address)"
BALANCE_OF_SIGNATURE = "balanceOf(address)"


def encode_approve(spender: str, amount: int) -> str:
    return build_call(APPROVE_SELECTOR, address_word(spender), uint_word(amount))


def encode_allowance(owner: str, spender: str) -> str:
    return build_call(ALLOWANCE_SELECTOR, address_word(owner), address_word(spender))


def encode_balance_of(owner: str) -> str:
    return build_call(BALANCE_OF_SELECTOR, address_word(owner))


def encode_transfer(to: str, amount: int) -> str:
    return build_call(TRANSFER_SELECTOR, address_word(to), uint_word(amount))


def encode_name() -> str:
    return NAME_SELECTOR


def encode_symbol() -> str:
    return SYMBOL_SELECTOR


def encode_decimals() -> str:
    return DECIMALS_SELECTOR


def tron_approve_parameters(spender: str, amount: int) -> tuple:
    return tron_parameters(("address", "uint256"), (spender, amount))


def tron_transfer_parameters(to: str, amount: int) -> tuple:
    return tron_parameters(("address", "uint256"), (to, amount))


def tron_allowance_parameters(owner: str, spender: str) -> tuple:
    return tron_parameters(("address", "address"), (owner, spender))


def tron_balance_of_parameters(owner: str) -> tuple:
    return tron_parameters(("address",), (owner,))
