"""
Return-data decoders for eth_call results
"""

import logging
from typing import List

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError

from ..codec import WORD_HEX, decode_signed_word
from ..errors import InvalidInput
from ..types.position import Position
from .encoder import split_words

logger = logging.getLogger(__name__)

# NonfungiblePositionManager.positions() return layout (word index)
_POS_TOKEN0 = 2
_POS_TOKEN1 = 3
_POS_FEE = 4
_POS_TICK_LOWER = 5
_POS_TICK_UPPER = 6
_POS_LIQUIDITY = 7
_POS_TOKENS_OWED0 = 10
_POS_TOKENS_OWED1 = 11
_POSITION_WORDS = 12


def _body(data: str) -> str:
    if not isinstance(data, str):
        raise InvalidInput(f"Return data must be hex text, got {type(data).__name__}")
    return data[2:] if data.startswith("0x") else data


def decode_uint(data: str) -> int:
    """First word of return data as an unsigned int ("0x" decodes to 0)"""
    body = _body(data)
    if not body:
        return 0
    return int(body[:WORD_HEX], 16)


def decode_address(word: str) -> str:
    """Address held in the low 20 bytes of a word"""
    return "0x" + _body(word)[-40:]


def decode_words(data: str) -> List[int]:
    return [int(w, 16) for w in split_words(data) if w]


def decode_position(data: str, token_id: int = 0, chain: str = "") -> Position:
    """
    Decode positions(tokenId) return data

    Raises:
        InvalidInput: If fewer than 12 words were returned
    """
    words = split_words(data)
    if len(words) < _POSITION_WORDS:
        raise InvalidInput(
            f"positions() returned {len(words)} words, expected {_POSITION_WORDS}",
            field="positions",
        )
    return Position(
        token_id=token_id,
        token0=decode_address(words[_POS_TOKEN0]),
        token1=decode_address(words[_POS_TOKEN1]),
        fee=int(words[_POS_FEE], 16),
        tick_lower=decode_signed_word(words[_POS_TICK_LOWER]),
        tick_upper=decode_signed_word(words[_POS_TICK_UPPER]),
        liquidity=int(words[_POS_LIQUIDITY], 16),
        tokens_owed0=int(words[_POS_TOKENS_OWED0], 16),
        tokens_owed1=int(words[_POS_TOKENS_OWED1], 16),
        chain=chain,
    )


def decode_erc20_string(data: str) -> str:
    """
    Decode name()/symbol() output

    Standard tokens return an ABI string; a few old ones (MKR, SAI) return bytes32.
    """
    raw = bytes.fromhex(_body(data))
    if not raw:
        return ""
    try:
        (value,) = abi_decode(["string"], raw)
        return value
    except (DecodingError, UnicodeDecodeError, OverflowError) as e:
        logger.debug(f"String decode failed ({e}), trying bytes32")
    return raw[:32].rstrip(b"\x00").decode("utf-8", errors="replace")
