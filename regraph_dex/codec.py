"""
Numeric codec

Exact integer conversions between human amounts and smallest units, fixed-width hex
words, two's-complement tick encoding and address padding. Amount paths never touch
floating point.
"""

import re
from decimal import Decimal
from typing import Optional, Union

import base58

from .errors import InvalidInput, InvalidNumericInput, Overflow

WORD_BYTES = 32
WORD_HEX = WORD_BYTES * 2
UINT256_MAX = 2 ** 256 - 1
UINT128_MAX = 2 ** 128 - 1
INT24_MIN = -(2 ** 23)
INT24_MAX = 2 ** 23 - 1

_DECIMAL_RE = re.compile(r"^(?P<whole>\d*)(?:\.(?P<frac>\d*))?$")
_HEX_ADDRESS_RE = re.compile(r"^(0x)?[0-9a-fA-F]{1,40}$")

# TRON base58check addresses carry a 0x41 version byte
TRON_ADDRESS_PREFIX = 0x41


def to_smallest_unit(amount: Union[str, int, Decimal], decimals: int) -> int:
    """
    Convert a human-entered decimal string to smallest units

    Fraction digits beyond ``decimals`` are truncated, never rounded.

    Args:
        amount: Decimal string such as "1.5", ".25" or "10"
        decimals: Token decimals (0-255)

    Returns:
        Amount in smallest units

    Raises:
        InvalidNumericInput: If the input is not a plain non-negative decimal
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int) or not 0 <= decimals <= 255:
        raise InvalidInput.out_of_range("decimals", decimals, "must be an integer in 0..255")
    if isinstance(amount, bool) or isinstance(amount, float):
        raise InvalidNumericInput(str(amount), "pass amounts as strings, not floats")
    if isinstance(amount, int):
        if amount < 0:
            raise InvalidNumericInput(str(amount), "negative amount")
        return amount * 10 ** decimals
    if isinstance(amount, Decimal):
        if not amount.is_finite():
            raise InvalidNumericInput(str(amount), "not finite")
        amount = format(amount, "f")
    if not isinstance(amount, str):
        raise InvalidNumericInput(repr(amount), "unsupported type")

    text = amount.strip()
    match = _DECIMAL_RE.match(text)
    if not text or match is None:
        raise InvalidNumericInput(amount)

    whole = match.group("whole") or ""
    frac = match.group("frac") or ""
    if not whole and not frac:
        raise InvalidNumericInput(amount, "no digits")

    frac = frac[:decimals].ljust(decimals, "0")
    return int(whole or "0") * 10 ** decimals + int(frac or "0")


def from_smallest_unit(value: int, decimals: int) -> Decimal:
    """Exact inverse of to_smallest_unit"""
    if value < 0:
        raise InvalidNumericInput(str(value), "negative amount")
    return Decimal(value).scaleb(-decimals)


def format_units(value: int, decimals: int, precision: Optional[int] = None) -> str:
    """
    Render smallest units as a plain decimal string

    Trailing zeros are trimmed. ``precision`` truncates (not rounds) the fraction.
    """
    whole, frac = divmod(value, 10 ** decimals)
    if decimals == 0:
        return str(whole)
    frac_str = str(frac).rjust(decimals, "0")
    if precision is not None:
        frac_str = frac_str[:precision]
    frac_str = frac_str.rstrip("0")
    return f"{whole}.{frac_str}" if frac_str else str(whole)


def pad_hex(value: int, byte_width: int = WORD_BYTES) -> str:
    """
    Left-pad an unsigned integer to ``byte_width`` bytes of lowercase hex (no 0x)

    Raises:
        Overflow: If the value is negative or wider than byte_width
    """
    if value < 0 or value >= 1 << (8 * byte_width):
        raise Overflow(value, byte_width)
    return format(value, "x").rjust(byte_width * 2, "0")


def encode_signed_tick(tick: int) -> str:
    """
    Encode an int24 tick as a 32-byte two's-complement word

    Negative ticks become 2**256 + tick.
    """
    if not INT24_MIN <= tick <= INT24_MAX:
        raise Overflow(tick, 3)
    return encode_signed_word(tick)


def encode_signed_word(value: int) -> str:
    """Two's-complement int256 word"""
    if not -(2 ** 255) <= value < 2 ** 255:
        raise Overflow(value, WORD_BYTES)
    if value < 0:
        value += 2 ** 256
    return pad_hex(value)


def decode_signed_word(word: Union[str, int]) -> int:
    """Inverse of encode_signed_word: values >= 2**255 are negative"""
    value = int(word, 16) if isinstance(word, str) else word
    if value >= 2 ** 255:
        value -= 2 ** 256
    return value


def tron_to_hex(address: str) -> str:
    """
    Convert a TRON base58check address to its 20-byte EVM-style hex form (0x-prefixed)

    Raises:
        InvalidInput: If the checksum or version byte is wrong
    """
    try:
        raw = base58.b58decode_check(address)
    except ValueError as e:
        raise InvalidInput.invalid_address(address) from e
    if len(raw) != 21 or raw[0] != TRON_ADDRESS_PREFIX:
        raise InvalidInput.invalid_address(address)
    return "0x" + raw[1:].hex()


def hex_to_tron(address: str) -> str:
    """Convert a 20-byte hex address to TRON base58check"""
    body = strip_address(address)[-40:].rjust(40, "0")
    return base58.b58encode_check(bytes([TRON_ADDRESS_PREFIX]) + bytes.fromhex(body)).decode()


def is_tron_address(address: str) -> bool:
    return isinstance(address, str) and len(address) == 34 and address.startswith("T")


def strip_address(address: str) -> str:
    """
    Lowercase hex address without 0x

    TRON base58 addresses are converted to their hex form first.

    Raises:
        InvalidInput: If the address is not 1-40 hex characters
    """
    if not isinstance(address, str):
        raise InvalidInput.invalid_address(str(address))
    address = address.strip()
    if is_tron_address(address):
        address = tron_to_hex(address)
    if not _HEX_ADDRESS_RE.match(address):
        raise InvalidInput.invalid_address(address)
    body = address[2:] if address[:2].lower() == "0x" else address
    return body.lower()


def pad_address(address: str) -> str:
    """Address as a 32-byte ABI word (lowercased, left-padded)"""
    return strip_address(address).rjust(WORD_HEX, "0")


def normalize_address(address: str) -> str:
    """Canonical 0x-prefixed 40-char lowercase form, used for comparisons and sorting"""
    return "0x" + strip_address(address).rjust(40, "0")


def to_hex_quantity(value: int) -> str:
    """JSON-RPC quantity encoding ("0x0", "0x1bc16d674ec80000")"""
    if value < 0:
        raise Overflow(value, WORD_BYTES)
    return hex(value)
