"""
Unit tests for DEX adapters

Plans are built from registry tokens and checked by decoding their call data with eth_abi.
"""

import unittest
from decimal import Decimal
from unittest.mock import patch

import pytest
from eth_abi import decode
from eth_utils import to_checksum_address

from regraph_dex.abi.encoder import selector_for
from regraph_dex.abi.erc20 import encode_transfer
from regraph_dex.abi.liquidity_book import ADD_LIQUIDITY_NATIVE_SELECTOR, ADD_LIQUIDITY_SELECTOR
from regraph_dex.abi.position_manager import (
    COLLECT_SELECTOR,
    DECREASE_LIQUIDITY_SELECTOR,
    MINT_SELECTOR,
    MINT_SIGNATURE,
    MULTICALL_SELECTOR,
)
from regraph_dex.abi.router import (
    EXACT_INPUT_SINGLE_SELECTOR,
    SWAP_EXACT_ETH_FOR_TOKENS_SELECTOR,
    SWAP_EXACT_TOKENS_FOR_ETH_SELECTOR,
    SWAP_EXACT_TOKENS_FOR_TOKENS_SELECTOR,
)
from regraph_dex.codec import UINT128_MAX
from regraph_dex.config import config
from regraph_dex.errors import InvalidInput, OperationNotSupported, UnsupportedChain
from regraph_dex.modules.fees import split_fee
from regraph_dex.protocols.flamingo import Nep17Adapter
from regraph_dex.protocols.registry import PURPOSE_LIQUIDITY, ProtocolRegistry, adapter_for
from regraph_dex.protocols.trader_joe import LiquidityBookAdapter
from regraph_dex.protocols.trader_joe.math import BIN_ID_OFFSET
from regraph_dex.protocols.uniswap_v2 import UniswapV2Adapter
from regraph_dex.protocols.uniswap_v3 import UniswapV3Adapter
from regraph_dex.registry import resolve_chain, resolve_token
from regraph_dex.types import (
    ContractCall,
    FeeTier,
    LiquidityRange,
    MintRequest,
    NeoInvocation,
    Position,
    Quote,
    SwapIntent,
    TxKind,
)

USER = "0x1111111111111111111111111111111111111111"
TRON_USER = "TJRabPrwbZy45sbavfcjinPJC18kjpRTv8"
NEO_USER = "NZHf1NJvz1tvELGLWZjhpb3NqZJFFUYpxT"
FEE_WALLET = "0x320b6a1080d6c2abbbff1a6e1d105812e4fb2716"

MINT_TYPES = [
    "address", "address", "uint24", "int24", "int24",
    "uint256", "uint256", "uint256", "uint256", "address", "uint256",
]


def _args(data: str) -> bytes:
    return bytes.fromhex(data[10:])


def _quote(chain: str, token_in: str, token_out: str, amount_in: int, amount_out: int, fee: int = 500) -> Quote:
    t_in = resolve_token(chain, token_in)
    t_out = resolve_token(chain, token_out)
    return Quote(amount_in=amount_in, amount_out=amount_out, fee_bps=fee, route="test",
                 decimals_out=t_out.decimals, token_in=t_in, token_out=t_out)


def _plan(chain: str, token_in: str, token_out: str, amount: int, amount_out: int, sender=USER, **intent):
    adapter = adapter_for(chain)
    split = split_fee(amount)
    quote = _quote(chain, token_in, token_out, split.swap_amount, amount_out)
    return adapter.build_swap(SwapIntent(token_in, token_out, "1", chain, **intent), split, quote, sender)


class TestUniswapV3Swap(unittest.TestCase):
    """Tests for exactInputSingle plans on Base"""

    def test_native_in(self):
        plan = _plan("base", "ETH", "USDC", 10 ** 18, 3_000_000_000)
        base = resolve_chain("base")

        self.assertEqual(plan.swap_call.data[:10], EXACT_INPUT_SINGLE_SELECTOR)
        self.assertEqual(plan.swap_call.value, 997 * 10 ** 15)
        self.assertEqual(plan.swap_call.to, base.router_address)
        self.assertIsNone(plan.approval)

        token_in, token_out, fee, recipient, _, amount_in, min_out, limit = decode(
            ["address", "address", "uint24", "address", "uint256", "uint256", "uint256", "uint160"],
            _args(plan.swap_call.data),
        )
        self.assertEqual(token_in, to_checksum_address(base.wrapped_native_address))
        self.assertEqual(token_out.lower(), resolve_token("base", "USDC").address.lower())
        self.assertEqual(fee, 500)
        self.assertEqual(recipient, USER)
        self.assertEqual(amount_in, 997 * 10 ** 15)
        self.assertEqual(min_out, 2_985_000_000)
        self.assertEqual(limit, 0)

    def test_native_fee_is_value_transfer(self):
        plan = _plan("base", "ETH", "USDC", 10 ** 18, 3_000_000_000)
        self.assertEqual(plan.fee_amount, 3 * 10 ** 15)
        self.assertEqual(plan.fee_call.to.lower(), FEE_WALLET)
        self.assertEqual(plan.fee_call.value, 3 * 10 ** 15)
        self.assertTrue(plan.fee_call.is_value_transfer)
        self.assertEqual(plan.fee_call.kind, TxKind.FEE_TRANSFER)

    def test_native_out_unwraps(self):
        plan = _plan("base", "USDC", "ETH", 1_000_000_000, 3 * 10 ** 17)
        usdc = resolve_token("base", "USDC")

        self.assertEqual(plan.swap_call.data[:10], MULTICALL_SELECTOR)
        self.assertEqual(plan.swap_call.value, 0)
        (inner,) = decode(["bytes[]"], _args(plan.swap_call.data))
        self.assertEqual(len(inner), 2)
        self.assertEqual("0x" + inner[0][:4].hex(), EXACT_INPUT_SINGLE_SELECTOR)

        # exactInputSingle pays the router, which unwraps to the user
        recipient = decode(["address"], inner[0][4 + 96:4 + 128])[0]
        self.assertEqual(recipient.lower(), resolve_chain("base").router_address.lower())
        min_out, to = decode(["uint256", "address"], inner[1][4:])
        self.assertEqual(min_out, plan.min_amount_out)
        self.assertEqual(to, USER)

        self.assertEqual(plan.approval.token, usdc)
        self.assertEqual(plan.approval.amount, 997_000_000)
        self.assertTrue(plan.approval.exact)
        self.assertEqual(plan.fee_call.data, encode_transfer(FEE_WALLET, 3_000_000))
        self.assertEqual(plan.fee_call.to, usdc.address)

    def test_recipient_override(self):
        other = "0x2222222222222222222222222222222222222222"
        plan = _plan("base", "ETH", "USDC", 10 ** 18, 3_000_000_000, recipient=other)
        recipient = decode(["address"], _args(plan.swap_call.data)[96:128])[0]
        self.assertEqual(recipient, other)

    def test_deadline(self):
        adapter = adapter_for("base")
        self.assertEqual(adapter.swap_deadline(now=1000), 1000 + resolve_chain("base").swap_deadline_seconds)
        intent = SwapIntent("ETH", "USDC", "1", "base", deadline_offset_seconds=60)
        self.assertEqual(adapter.swap_deadline(intent, now=1000), 1060)
        self.assertEqual(adapter.lp_deadline(now=1000), 1000 + resolve_chain("base").lp_deadline_seconds)

    def test_unknown_fee_tier_rejected(self):
        """A quote whose fee tier has no pool on the chain never becomes a plan"""
        adapter = adapter_for("base")
        split = split_fee(10 ** 18)
        for fee in (0, 2500, 1_000_000):
            with self.subTest(fee=fee):
                quote = _quote("base", "ETH", "USDC", split.swap_amount, 3_000_000_000, fee=fee)
                with self.assertRaises(UnsupportedChain):
                    adapter.build_swap(SwapIntent("ETH", "USDC", "1", "base"), split, quote, USER)

    def test_tron_v3_swap_not_supported(self):
        adapter = UniswapV3Adapter(resolve_chain("tron"))
        with self.assertRaises(OperationNotSupported):
            adapter.build_swap(SwapIntent("TRX", "USDT", "1", "tron"), split_fee(10 ** 6),
                               _quote("tron", "TRX", "USDT", 997_000, 100_000), TRON_USER)


class TestUniswapV3Liquidity(unittest.TestCase):
    """Tests for NonfungiblePositionManager plans"""

    def setUp(self):
        self.base = resolve_chain("base")
        self.adapter = adapter_for("base", PURPOSE_LIQUIDITY)
        self.weth = resolve_token("base", "WETH")
        self.usdc = resolve_token("base", "USDC")
        self.range = LiquidityRange.from_prices(Decimal("0.9"), Decimal("1.1"), FeeTier(3000, 60))

    def test_mint_sorts_and_inverts(self):
        """USDC sorts after WETH on Base, so amounts swap and ticks invert"""
        plan = self.adapter.build_mint(MintRequest(
            token_a=self.usdc, token_b=self.weth, amount_a=2_000_000_000, amount_b=10 ** 18,
            recipient=USER, fee=3000, liquidity_range=self.range,
        ))
        (call,) = plan.calls
        self.assertEqual(call.data[:10], MINT_SELECTOR)
        self.assertEqual(call.value, 0)
        self.assertEqual(call.to, self.base.position_manager_address)

        token0, token1, fee, lower, upper, amount0, amount1, min0, min1, recipient, _ = decode(
            MINT_TYPES, _args(call.data)
        )
        self.assertEqual(token0.lower(), self.weth.address.lower())
        self.assertEqual(token1.lower(), self.usdc.address.lower())
        self.assertEqual(fee, 3000)
        self.assertEqual((lower, upper), (-960, 1080))
        self.assertEqual((amount0, amount1), (10 ** 18, 2_000_000_000))
        self.assertEqual((min0, min1), (995 * 10 ** 15, 1_990_000_000))
        self.assertEqual(recipient, USER)

    def test_mint_approvals_unlimited(self):
        plan = self.adapter.build_mint(MintRequest(
            token_a=self.weth, token_b=self.usdc, amount_a=10 ** 18, amount_b=2_000_000_000,
            recipient=USER, fee=3000, liquidity_range=self.range,
        ))
        self.assertEqual([a.token for a in plan.approvals], [self.weth, self.usdc])
        self.assertTrue(all(not a.exact for a in plan.approvals))
        self.assertTrue(all(a.spender == self.base.position_manager_address for a in plan.approvals))

    def test_mint_with_native_refunds(self):
        plan = self.adapter.build_mint(MintRequest(
            token_a=resolve_token("base", "ETH"), token_b=self.usdc, amount_a=10 ** 18, amount_b=2_000_000_000,
            recipient=USER, fee=3000, liquidity_range=self.range,
        ))
        (call,) = plan.calls
        self.assertEqual(call.data[:10], MULTICALL_SELECTOR)
        self.assertEqual(call.value, 10 ** 18)
        (inner,) = decode(["bytes[]"], _args(call.data))
        self.assertEqual("0x" + inner[0][:4].hex(), MINT_SELECTOR)
        self.assertEqual([a.token for a in plan.approvals], [self.usdc])

    def test_mint_from_prices(self):
        plan = self.adapter.build_mint(MintRequest(
            token_a=self.weth, token_b=self.usdc, amount_a=10 ** 18, amount_b=0,
            recipient=USER, fee=3000, price_lower=Decimal("0.9"), price_upper=Decimal("1.1"),
        ))
        values = decode(MINT_TYPES, _args(plan.calls[0].data))
        self.assertEqual((values[3], values[4]), (-1080, 960))
        self.assertEqual(values[8], 0)

    def test_mint_needs_amount(self):
        with self.assertRaises(InvalidInput):
            self.adapter.build_mint(MintRequest(
                token_a=self.weth, token_b=self.usdc, amount_a=0, amount_b=0,
                recipient=USER, liquidity_range=self.range,
            ))

    def test_mint_needs_range(self):
        with self.assertRaises(InvalidInput):
            self.adapter.build_mint(MintRequest(
                token_a=self.weth, token_b=self.usdc, amount_a=1, amount_b=1, recipient=USER, fee=3000,
            ))

    def _position(self, liquidity=1000) -> Position:
        return Position(token_id=42, token0=self.weth.address, token1=self.usdc.address, fee=3000,
                        tick_lower=-60, tick_upper=60, liquidity=liquidity)

    def test_decrease_then_collect(self):
        plan = self.adapter.build_decrease(self._position(), 50, Decimal("0.5"), USER)
        decrease, collect = plan.calls
        self.assertEqual(decrease.kind, TxKind.DECREASE_LIQUIDITY)
        self.assertEqual(collect.kind, TxKind.COLLECT)
        self.assertEqual(decrease.data[:10], DECREASE_LIQUIDITY_SELECTOR)
        self.assertEqual(collect.data[:10], COLLECT_SELECTOR)
        self.assertEqual(plan.approvals, [])

        token_id, liquidity, min0, min1, _ = decode(["uint256", "uint128", "uint256", "uint256", "uint256"],
                                                    _args(decrease.data))
        self.assertEqual((token_id, liquidity, min0, min1), (42, 500, 0, 0))

    def test_decrease_with_expected_amounts(self):
        plan = self.adapter.build_decrease(self._position(), 100, Decimal("0.5"), USER,
                                           expected_amounts=(1000, 2000))
        values = decode(["uint256", "uint128", "uint256", "uint256", "uint256"], _args(plan.calls[0].data))
        self.assertEqual(values[1:4], (1000, 995, 1990))

    def test_decrease_nothing(self):
        with self.assertRaises(InvalidInput):
            self.adapter.build_decrease(self._position(liquidity=1), 50, Decimal("0.5"), USER)

    def test_collect(self):
        plan = self.adapter.build_collect(self._position(), USER)
        token_id, recipient, max0, max1 = decode(["uint256", "address", "uint128", "uint128"],
                                                 _args(plan.calls[0].data))
        self.assertEqual((token_id, recipient), (42, USER))
        self.assertEqual((max0, max1), (UINT128_MAX, UINT128_MAX))

    def test_increase(self):
        plan = self.adapter.build_increase(self._position(), 10 ** 18, 0, Decimal("1"), USER)
        self.assertEqual(plan.kind, TxKind.INCREASE_LIQUIDITY)
        self.assertEqual([a.token for a in plan.approvals], [self.weth])
        values = decode(["uint256"] * 6, _args(plan.calls[0].data))
        self.assertEqual(values[:5], (42, 10 ** 18, 0, 99 * 10 ** 16, 0))

    def test_tron_mint_uses_signature(self):
        adapter = adapter_for("tron", PURPOSE_LIQUIDITY)
        plan = adapter.build_mint(MintRequest(
            token_a=resolve_token("tron", "USDT"), token_b=resolve_token("tron", "USDC"),
            amount_a=1_000_000, amount_b=1_000_000, recipient=TRON_USER, fee=3000, liquidity_range=self.range,
        ))
        (call,) = plan.calls
        self.assertEqual(call.function_signature, MINT_SIGNATURE)
        self.assertEqual(call.fee_limit, config.tron.mint_fee_limit)
        self.assertEqual(len(call.parameters), 11)
        self.assertTrue(all(a.spender == resolve_chain("tron").position_manager_address for a in plan.approvals))


class TestUniswapV2Swap(unittest.TestCase):
    """Tests for V2 router plans"""

    def test_bnb_for_tokens(self):
        plan = _plan("bsc", "BNB", "USDT", 10 ** 18, 600 * 10 ** 18)
        bsc = resolve_chain("bsc")
        self.assertEqual(plan.swap_call.data[:10], SWAP_EXACT_ETH_FOR_TOKENS_SELECTOR)
        self.assertEqual(plan.swap_call.value, 997 * 10 ** 15)
        min_out, path, to, _ = decode(["uint256", "address[]", "address", "uint256"], _args(plan.swap_call.data))
        self.assertEqual(min_out, 597 * 10 ** 18)
        self.assertEqual([p.lower() for p in path],
                         [bsc.wrapped_native_address.lower(), resolve_token("bsc", "USDT").address.lower()])
        self.assertEqual(to, USER)

    def test_tokens_for_tokens_via_wrapped(self):
        plan = _plan("bsc", "USDT", "CAKE", 100 * 10 ** 18, 40 * 10 ** 18)
        self.assertEqual(plan.swap_call.data[:10], SWAP_EXACT_TOKENS_FOR_TOKENS_SELECTOR)
        amount_in, _, path, _, _ = decode(["uint256", "uint256", "address[]", "address", "uint256"],
                                          _args(plan.swap_call.data))
        self.assertEqual(amount_in, plan.swap_amount)
        self.assertEqual(len(path), 3)
        self.assertEqual(path[1].lower(), resolve_chain("bsc").wrapped_native_address.lower())
        self.assertEqual(plan.approval.spender, resolve_chain("bsc").router_address)

    def test_tokens_for_native(self):
        plan = _plan("bsc", "CAKE", "BNB", 10 ** 18, 10 ** 16)
        self.assertEqual(plan.swap_call.data[:10], SWAP_EXACT_TOKENS_FOR_ETH_SELECTOR)
        self.assertEqual(plan.swap_call.value, 0)

    def test_avalanche_uses_avax_selectors(self):
        plan = _plan("avalanche", "AVAX", "USDC", 10 ** 18, 20_000_000)
        self.assertEqual(
            plan.swap_call.data[:10],
            selector_for("swapExactAVAXForTokens(uint256,address[],address,uint256)"),
        )
        self.assertEqual(plan.swap_call.to, resolve_chain("avalanche").router_address)

    def test_tron_swap_parameters(self):
        with patch("regraph_dex.modules.fees.global_config") as mock_config:
            mock_config.fee.tron_wallet_address = ""
            plan = _plan("tron", "TRX", "USDT", 10 ** 7, 2_000_000, sender=TRON_USER)
        call = plan.swap_call
        self.assertEqual(call.function_signature, "swapExactETHForTokens(uint256,address[],address,uint256)")
        self.assertEqual(call.value, plan.swap_amount)
        self.assertEqual(call.fee_limit, config.tron.swap_fee_limit)
        self.assertEqual(len(call.parameters), 4)
        self.assertIsNone(plan.fee_call)

    def test_tron_fee_transfer(self):
        with patch("regraph_dex.modules.fees.global_config") as mock_config:
            mock_config.fee.tron_wallet_address = TRON_USER
            plan = _plan("tron", "USDT", "TRX", 10 ** 7, 2_000_000, sender=TRON_USER)
        fee_call = plan.fee_call
        self.assertEqual(fee_call.function_signature, "transfer(address,uint256)")
        self.assertEqual(fee_call.to, resolve_token("tron", "USDT").address)
        self.assertEqual(fee_call.fee_limit, config.tron.transfer_fee_limit)


class TestLiquidityBook(unittest.TestCase):
    """Tests for Trader Joe LB plans"""

    def setUp(self):
        self.adapter = adapter_for("avalanche", PURPOSE_LIQUIDITY)
        self.avax = resolve_token("avalanche", "AVAX")
        self.usdc = resolve_token("avalanche", "USDC")

    def _request(self, **kwargs) -> MintRequest:
        defaults = dict(token_a=self.avax, token_b=self.usdc, amount_a=10 ** 18, amount_b=20_000_000,
                        recipient=USER, active_id=BIN_ID_OFFSET, bin_step=20, bins_range=5)
        defaults.update(kwargs)
        return MintRequest(**defaults)

    def test_native_mint(self):
        plan = self.adapter.build_mint(self._request())
        (call,) = plan.calls
        self.assertEqual(call.data[:10], ADD_LIQUIDITY_NATIVE_SELECTOR)
        self.assertEqual(call.value, 10 ** 18)
        self.assertEqual(call.to, resolve_chain("avalanche").position_manager_address)
        self.assertEqual([a.token for a in plan.approvals], [self.usdc])
        self.assertIn("/20", plan.deep_link)

    def test_token_mint(self):
        plan = self.adapter.build_mint(self._request(token_a=resolve_token("avalanche", "WAVAX")))
        self.assertEqual(plan.calls[0].data[:10], ADD_LIQUIDITY_SELECTOR)
        self.assertEqual(plan.calls[0].value, 0)
        self.assertEqual(len(plan.approvals), 2)

    def test_needs_active_id(self):
        with self.assertRaises(InvalidInput):
            self.adapter.build_mint(self._request(active_id=None))

    def test_unknown_bin_step(self):
        with self.assertRaises(InvalidInput):
            self.adapter.build_mint(self._request(bin_step=7))

    def test_swap_delegates_to_v2(self):
        split = split_fee(10 ** 18)
        plan = self.adapter.build_swap(SwapIntent("AVAX", "USDC", "1", "avalanche"), split,
                                       _quote("avalanche", "AVAX", "USDC", split.swap_amount, 20_000_000), USER)
        self.assertEqual(plan.swap_call.to, resolve_chain("avalanche").router_address)

    def test_decrease_not_supported(self):
        position = Position(token_id=1, token0="0xa", token1="0xb", fee=0, tick_lower=0, tick_upper=1, liquidity=1)
        with self.assertRaises(OperationNotSupported):
            self.adapter.build_decrease(position, 50, Decimal("0.5"), USER)


class TestNep17(unittest.TestCase):
    """Tests for Flamingo invocations"""

    def setUp(self):
        self.adapter = adapter_for("neo")
        self.gas = resolve_token("neo", "GAS")
        self.flm = resolve_token("neo", "FLM")
        self.router = resolve_chain("neo").router_address

    def test_swap_invocation(self):
        with patch("regraph_dex.modules.fees.global_config") as mock_config:
            mock_config.fee.neo_wallet_address = ""
            plan = _plan("neo", "GAS", "FLM", 10 ** 8, 5 * 10 ** 8, sender=NEO_USER)

        call = plan.swap_call
        self.assertIsInstance(call, NeoInvocation)
        self.assertEqual(call.script_hash, self.router)
        self.assertEqual(call.operation, "swapTokenInForTokenOut")
        self.assertEqual(call.args[1]["value"], str(plan.swap_amount))
        self.assertEqual(call.args[2]["value"], str(plan.min_amount_out))
        self.assertEqual(call.args[4]["value"], str(plan.deadline * 1000))
        self.assertEqual(call.signers[0]["scopes"], 16)
        self.assertEqual(call.signers[0]["allowedContracts"], [self.gas.address, self.router])
        self.assertIsNone(plan.approval)
        self.assertIsNone(plan.fee_call)

    def test_fee_is_nep17_transfer(self):
        with patch("regraph_dex.modules.fees.global_config") as mock_config:
            mock_config.fee.neo_wallet_address = "NFeeWallet"
            plan = _plan("neo", "GAS", "FLM", 10 ** 8, 5 * 10 ** 8, sender=NEO_USER)

        fee_call = plan.fee_call
        self.assertEqual(fee_call.operation, "transfer")
        self.assertEqual(fee_call.script_hash, self.gas.address)
        self.assertEqual(fee_call.args[1]["value"], "NFeeWallet")
        self.assertEqual(fee_call.args[2]["value"], str(plan.fee_amount))
        self.assertEqual(fee_call.kind, TxKind.FEE_TRANSFER)

    def test_mint_is_two_transfers(self):
        plan = self.adapter.build_mint(MintRequest(
            token_a=self.gas, token_b=self.flm, amount_a=10 ** 8, amount_b=10 ** 9, recipient=NEO_USER,
        ))
        self.assertEqual([c.script_hash for c in plan.calls], [self.gas.address, self.flm.address])
        self.assertTrue(all(c.args[1]["value"] == self.router for c in plan.calls))
        self.assertEqual(plan.approvals, [])

    def test_mint_needs_both_amounts(self):
        with self.assertRaises(InvalidInput):
            self.adapter.build_mint(MintRequest(
                token_a=self.gas, token_b=self.flm, amount_a=10 ** 8, amount_b=0, recipient=NEO_USER,
            ))

    def test_no_approvals_on_neo(self):
        self.assertIsNone(self.adapter.approval_for(self.gas, self.router, 10))


class TestProtocolRegistry(unittest.TestCase):
    """Tests for adapter selection"""

    def test_swap_adapters(self):
        self.assertIsInstance(adapter_for("base"), UniswapV3Adapter)
        self.assertIsInstance(adapter_for("bsc"), UniswapV2Adapter)
        self.assertIsInstance(adapter_for("tron"), UniswapV2Adapter)
        self.assertIsInstance(adapter_for("neo"), Nep17Adapter)

    def test_liquidity_adapters(self):
        self.assertIsInstance(adapter_for("bsc", PURPOSE_LIQUIDITY), UniswapV3Adapter)
        self.assertIsInstance(adapter_for("avalanche", PURPOSE_LIQUIDITY), LiquidityBookAdapter)

    def test_instances_cached_per_chain(self):
        self.assertIs(adapter_for("base"), adapter_for(8453))
        self.assertIsNot(adapter_for("base"), adapter_for("ethereum"))
        first = adapter_for("base")
        ProtocolRegistry.clear_cache()
        self.assertIsNot(adapter_for("base"), first)

    def test_bad_purpose(self):
        from regraph_dex.errors import ConfigurationError
        with self.assertRaises(ConfigurationError):
            adapter_for("base", "lending")


@pytest.mark.parametrize("chain", ["base", "ethereum", "arbitrum", "polygon", "optimism"])
def test_v3_swap_on_every_uniswap_chain(chain):
    profile = resolve_chain(chain)
    plan = _plan(chain, profile.native_symbol, "USDC", 10 ** 18, 1_000_000)
    assert isinstance(plan.swap_call, ContractCall)
    assert plan.swap_call.to == profile.router_address
    assert plan.fee_amount + plan.swap_amount == plan.amount_in
