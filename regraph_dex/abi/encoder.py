"""
ABI word helpers

Fixed-layout calls (ERC-20, exactInputSingle, V2 path swaps, NPM structs) are written
word by word so their bytes are easy to audit. Anything with dynamic members
(multicall, Liquidity Book parameters) goes through eth_abi.encode.
"""

from typing import List, Sequence

from eth_abi import encode as abi_encode
from eth_abi.exceptions import EncodingError, ValueOutOfBounds
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

from ..codec import WORD_HEX, pad_hex, pad_address, normalize_address
from ..errors import ErrorCode, InvalidInput


def selector_for(signature: str) -> str:
    """4-byte selector for a canonical function signature, 0x-prefixed"""
    return "0x" + function_signature_to_4byte_selector(signature).hex()


def build_call(selector: str, *words: str) -> str:
    """Concatenate a selector with already-encoded 32-byte words"""
    for word in words:
        if len(word) % WORD_HEX:
            raise InvalidInput(f"Word is not 32-byte aligned: {word[:16]}...")
    return selector.lower() + "".join(words)


def uint_word(value: int) -> str:
    return pad_hex(int(value))


def address_word(address: str) -> str:
    return pad_address(address)


def abi_address(address: str) -> str:
    """Checksummed form eth_abi accepts (TRON base58 is converted to hex first)"""
    return to_checksum_address(normalize_address(address))


def call_bytes(data: str) -> bytes:
    """0x-hex call data as bytes, for bytes[] arguments"""
    return bytes.fromhex(data[2:] if data.startswith("0x") else data)


def encode_call(selector: str, types: Sequence[str], values: Sequence) -> str:
    """
    Selector followed by eth_abi-encoded arguments

    Raises:
        InvalidInput: If the values do not match the types (code OVERFLOW when a
            value does not fit its type)
    """
    if len(types) != len(values):
        raise InvalidInput(f"Expected {len(types)} ABI values, got {len(values)}")
    try:
        encoded = abi_encode(list(types), list(values))
    except ValueOutOfBounds as e:
        raise InvalidInput(f"Value out of range for {list(types)}: {e}", ErrorCode.OVERFLOW) from e
    except (EncodingError, TypeError, ValueError) as e:
        raise InvalidInput(f"Cannot ABI-encode {list(types)}: {e}") from e
    return selector.lower() + encoded.hex()


def split_words(data: str) -> List[str]:
    """Split hex return data (with or without 0x) into 64-char words"""
    body = data[2:] if data.startswith("0x") else data
    return [body[i:i + WORD_HEX] for i in range(0, len(body), WORD_HEX)]


def tron_parameters(types: Sequence[str], values: Sequence) -> tuple:
    """
    TronWeb ``triggerSmartContract`` parameter list

    Integers are passed as decimal strings; arrays and addresses pass through as-is.
    """
    if len(types) != len(values):
        raise InvalidInput(f"Expected {len(types)} TRON parameters, got {len(values)}")
    params = []
    for abi_type, value in zip(types, values):
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        params.append({"type": abi_type, "value": value})
    return tuple(params)
