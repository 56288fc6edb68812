"""
Unit tests for the position NFT reader
"""

import unittest
from unittest.mock import MagicMock

from eth_abi import encode

from regraph_dex.abi.erc20 import BALANCE_OF_SELECTOR, BALANCE_OF_SIGNATURE
from regraph_dex.abi.position_manager import (
    POSITIONS_SELECTOR,
    POSITIONS_SIGNATURE,
    TOKEN_OF_OWNER_BY_INDEX_SELECTOR,
    TOKEN_OF_OWNER_BY_INDEX_SIGNATURE,
)
from regraph_dex.codec import hex_to_tron
from regraph_dex.errors import InvalidInput, OperationNotSupported
from regraph_dex.modules.positions import PositionReader
from regraph_dex.registry import resolve_chain

OWNER = "0x1111111111111111111111111111111111111111"
TRON_OWNER = "TJRabPrwbZy45sbavfcjinPJC18kjpRTv8"
WETH = "0x4200000000000000000000000000000000000006"
USDC = "0x833589fcd6edb6e08f4c7c32d4f71b54bda02913"

_POSITION_TYPES = [
    "uint96", "address", "address", "address", "uint24", "int24",
    "int24", "uint128", "uint256", "uint256", "uint128", "uint128",
]


def position_data(token0, token1, fee=500, tick_lower=-887220, tick_upper=887220,
                  liquidity=10 ** 18, owed0=0, owed1=0) -> str:
    values = [0, "0x" + "00" * 20, token0, token1, fee, tick_lower, tick_upper, liquidity, 0, 0, owed0, owed1]
    return "0x" + encode(_POSITION_TYPES, values).hex()


def word(value: int) -> str:
    return "0x" + encode(["uint256"], [value]).hex()


class FakeNpm:
    """Answers balanceOf / tokenOfOwnerByIndex / positions from a list of positions"""

    def __init__(self, positions, tron=False):
        self.positions = positions
        self.tron = tron
        self.calls = []

    def __call__(self, call):
        self.calls.append(call)
        if self.tron:
            key = call.function_signature
            args = [p["value"] for p in call.parameters]
        else:
            key = call.data[:10]
            body = call.data[10:]
            args = [int(body[i:i + 64], 16) for i in range(0, len(body), 64)]

        if key in (BALANCE_OF_SELECTOR, BALANCE_OF_SIGNATURE):
            return word(len(self.positions))
        if key in (TOKEN_OF_OWNER_BY_INDEX_SELECTOR, TOKEN_OF_OWNER_BY_INDEX_SIGNATURE):
            index = int(args[1])
            return word(self.positions[index][0])
        if key in (POSITIONS_SELECTOR, POSITIONS_SIGNATURE):
            token_id = int(args[0])
            return dict(self.positions)[token_id]
        raise AssertionError(f"unexpected call {key}")


def reader_for(chain, positions, tron=False):
    transport = MagicMock()
    fake = FakeNpm(positions, tron=tron)
    transport.call.side_effect = fake
    return PositionReader(transport, resolve_chain(chain)), fake


class TestPositionReader(unittest.TestCase):
    """Tests for PositionReader on EVM chains"""

    def test_get_position(self):
        """Decodes every field of positions(tokenId)"""
        data = position_data(WETH, USDC, fee=500, tick_lower=-200100, tick_upper=-199800,
                             liquidity=123456789, owed0=5, owed1=7)
        reader, _ = reader_for("base", [(42, data)])

        position = reader.get_position(42)
        self.assertEqual(position.token_id, 42)
        self.assertEqual(position.token0, WETH.lower())
        self.assertEqual(position.token1, USDC)
        self.assertEqual(position.fee, 500)
        self.assertEqual(position.tick_lower, -200100)
        self.assertEqual(position.tick_upper, -199800)
        self.assertEqual(position.liquidity, 123456789)
        self.assertEqual(position.tokens_owed0, 5)
        self.assertEqual(position.tokens_owed1, 7)
        self.assertEqual(position.chain, "base")
        self.assertTrue(position.has_uncollected)

    def test_calls_go_to_position_manager(self):
        reader, fake = reader_for("base", [(1, position_data(WETH, USDC))])
        reader.get_position(1)
        self.assertEqual(fake.calls[0].to, resolve_chain("base").position_manager_address)
        self.assertTrue(fake.calls[0].data.startswith(POSITIONS_SELECTOR))

    def test_list_positions_skips_closed(self):
        """Closed positions (zero liquidity) are left out by default"""
        positions = [
            (10, position_data(WETH, USDC, liquidity=0)),
            (11, position_data(WETH, USDC, liquidity=99)),
        ]
        reader, _ = reader_for("base", positions)

        self.assertEqual(reader.position_count(OWNER), 2)
        self.assertEqual(reader.token_id_at(OWNER, 1), 11)
        self.assertEqual([p.token_id for p in reader.list_positions(OWNER)], [11])
        self.assertEqual([p.token_id for p in reader.list_positions(OWNER, include_closed=True)], [10, 11])

    def test_no_positions(self):
        reader, fake = reader_for("bsc", [])
        self.assertEqual(reader.list_positions(OWNER), [])
        self.assertEqual(len(fake.calls), 1)

    def test_short_return_data(self):
        """Fewer than 12 words is not a position"""
        reader, _ = reader_for("base", [(3, word(1) + "00" * 64)])
        with self.assertRaises(InvalidInput):
            reader.get_position(3)

    def test_unsupported_chains(self):
        """Liquidity Book and Flamingo have no position NFTs"""
        for chain in ("avalanche", "neo"):
            with self.subTest(chain=chain):
                with self.assertRaises(OperationNotSupported):
                    PositionReader(MagicMock(), resolve_chain(chain))


class TestTronPositionReader(unittest.TestCase):
    """Tests for PositionReader on TRON"""

    def test_tokens_in_base58(self):
        token0 = "0xa614f803b6fd780986a42c78ec9c7f77e6ded13c"
        token1 = "0x891cdb91d149f23b1a45d9c5ca78a88d0cb44c18"
        reader, fake = reader_for("tron", [(7, position_data(token0, token1, fee=3000))], tron=True)

        positions = reader.list_positions(TRON_OWNER)
        self.assertEqual(len(positions), 1)
        self.assertEqual(positions[0].token0, "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t")
        self.assertEqual(positions[0].token1, hex_to_tron(token1))
        self.assertEqual(positions[0].fee, 3000)

    def test_parameters(self):
        """TRON reads carry signatures and TronWeb parameters"""
        reader, fake = reader_for("tron", [(7, position_data(WETH, USDC))], tron=True)
        reader.list_positions(TRON_OWNER)

        signatures = [c.function_signature for c in fake.calls]
        self.assertEqual(signatures, [BALANCE_OF_SIGNATURE, TOKEN_OF_OWNER_BY_INDEX_SIGNATURE, POSITIONS_SIGNATURE])
        self.assertEqual(fake.calls[0].parameters, ({"type": "address", "value": TRON_OWNER},))
        self.assertEqual(
            fake.calls[1].parameters,
            ({"type": "address", "value": TRON_OWNER}, {"type": "uint256", "value": "0"}),
        )
        self.assertEqual(fake.calls[2].parameters, ({"type": "uint256", "value": "7"},))
        self.assertEqual(fake.calls[2].to, resolve_chain("tron").position_manager_address)


if __name__ == "__main__":
    unittest.main()
