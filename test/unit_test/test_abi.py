"""
Unit tests for call data encoding and return data decoding

Word-by-word encodings are checked against eth_abi and eth_utils.
"""

import unittest

from eth_abi import encode as abi_encode
from eth_utils import function_signature_to_4byte_selector

from regraph_dex.abi.decoder import (
    decode_address,
    decode_erc20_string,
    decode_position,
    decode_uint,
    decode_words,
)
from regraph_dex.abi.encoder import (
    build_call,
    call_bytes,
    encode_call,
    selector_for,
    split_words,
    tron_parameters,
)
from regraph_dex.abi.erc20 import (
    ALLOWANCE_SELECTOR,
    APPROVE_SELECTOR,
    BALANCE_OF_SELECTOR,
    DECIMALS_SELECTOR,
    NAME_SELECTOR,
    SYMBOL_SELECTOR,
    TRANSFER_SELECTOR,
    encode_approve,
    encode_transfer,
    tron_approve_parameters,
)
from regraph_dex.abi.liquidity_book import (
    ADD_LIQUIDITY_NATIVE_SELECTOR,
    ADD_LIQUIDITY_SELECTOR,
    LIQUIDITY_PARAMETERS_TYPE,
    LBLiquidityParameters,
    encode_lb_add_liquidity,
    pool_deep_link,
)
from regraph_dex.abi.position_manager import (
    COLLECT_SELECTOR,
    COLLECT_SIGNATURE,
    DECREASE_LIQUIDITY_SELECTOR,
    DECREASE_LIQUIDITY_SIGNATURE,
    INCREASE_LIQUIDITY_SELECTOR,
    INCREASE_LIQUIDITY_SIGNATURE,
    MINT_SELECTOR,
    MINT_SIGNATURE,
    MULTICALL_SELECTOR,
    POSITIONS_SELECTOR,
    REFUND_ETH_SELECTOR,
    TOKEN_OF_OWNER_BY_INDEX_SELECTOR,
    UNWRAP_WETH9_SELECTOR,
    encode_collect,
    encode_decrease_liquidity,
    encode_mint,
    encode_multicall,
    encode_unwrap_weth9,
    sort_token_pair,
    tron_collect_parameters,
)
from regraph_dex.abi.router import (
    EXACT_INPUT_SINGLE_SELECTOR,
    SWAP_EXACT_ETH_FOR_TOKENS_SELECTOR,
    SWAP_EXACT_TOKENS_FOR_ETH_SELECTOR,
    SWAP_EXACT_TOKENS_FOR_TOKENS_SELECTOR,
    build_v2_path,
    encode_exact_input_single,
    encode_swap_exact_native_for_tokens,
    encode_swap_exact_tokens_for_native,
    encode_swap_exact_tokens_for_tokens,
    tron_v2_swap_parameters,
    v2_swap_signature,
)
from regraph_dex.codec import UINT128_MAX, UINT256_MAX
from regraph_dex.errors import ErrorCode, InvalidInput

WETH = "0x4200000000000000000000000000000000000006"
USDC = "0x833589fcd6edb6e08f4c7c32d4f71b54bda02913"
ROUTER = "0x2626664c2603336e57b271c5c0b26f421741e481"
USER = "0x1111111111111111111111111111111111111111"
WAVAX = "0xb31f66aa3c1e785363f0875a1b74e27b85fd66c7"


def _selector(signature: str) -> str:
    return "0x" + function_signature_to_4byte_selector(signature).hex()


class TestSelectors(unittest.TestCase):
    """Pinned selectors match their canonical signatures"""

    def test_exact_input_single(self):
        self.assertEqual(EXACT_INPUT_SINGLE_SELECTOR, "0x414bf389")
        self.assertEqual(
            _selector("exactInputSingle((address,address,uint24,address,uint256,uint256,uint256,uint160))"),
            EXACT_INPUT_SINGLE_SELECTOR,
        )

    def test_erc20(self):
        self.assertEqual(_selector("approve(address,uint256)"), APPROVE_SELECTOR)
        self.assertEqual(_selector("allowance(address,address)"), ALLOWANCE_SELECTOR)
        self.assertEqual(_selector("balanceOf(address)"), BALANCE_OF_SELECTOR)
        self.assertEqual(_selector("transfer(address,uint256)"), TRANSFER_SELECTOR)
        self.assertEqual(_selector("name()"), NAME_SELECTOR)
        self.assertEqual(_selector("symbol()"), SYMBOL_SELECTOR)
        self.assertEqual(_selector("decimals()"), DECIMALS_SELECTOR)

    def test_position_manager(self):
        self.assertEqual(_selector(MINT_SIGNATURE), MINT_SELECTOR)
        self.assertEqual(_selector(INCREASE_LIQUIDITY_SIGNATURE), INCREASE_LIQUIDITY_SELECTOR)
        self.assertEqual(_selector(DECREASE_LIQUIDITY_SIGNATURE), DECREASE_LIQUIDITY_SELECTOR)
        self.assertEqual(_selector(COLLECT_SIGNATURE), COLLECT_SELECTOR)
        self.assertEqual(_selector("positions(uint256)"), POSITIONS_SELECTOR)
        self.assertEqual(_selector("tokenOfOwnerByIndex(address,uint256)"), TOKEN_OF_OWNER_BY_INDEX_SELECTOR)
        self.assertEqual(_selector("refundETH()"), REFUND_ETH_SELECTOR)
        self.assertEqual(_selector("unwrapWETH9(uint256,address)"), UNWRAP_WETH9_SELECTOR)
        self.assertEqual(_selector("multicall(bytes[])"), MULTICALL_SELECTOR)

    def test_v2_router(self):
        self.assertEqual(
            _selector("swapExactETHForTokens(uint256,address[],address,uint256)"),
            SWAP_EXACT_ETH_FOR_TOKENS_SELECTOR,
        )
        self.assertEqual(
            _selector("swapExactTokensForETH(uint256,uint256,address[],address,uint256)"),
            SWAP_EXACT_TOKENS_FOR_ETH_SELECTOR,
        )
        self.assertEqual(
            _selector("swapExactTokensForTokens(uint256,uint256,address[],address,uint256)"),
            SWAP_EXACT_TOKENS_FOR_TOKENS_SELECTOR,
        )

    def test_lb_selectors_differ(self):
        self.assertNotEqual(ADD_LIQUIDITY_SELECTOR, ADD_LIQUIDITY_NATIVE_SELECTOR)
        self.assertEqual(len(ADD_LIQUIDITY_SELECTOR), 10)

    def test_selector_for(self):
        self.assertEqual(selector_for("transfer(address,uint256)"), "0xa9059cbb")


class TestEncoder(unittest.TestCase):
    """encode_call and the word helpers"""

    def test_encode_call_matches_eth_abi(self):
        types = ["uint256", "address[]", "address"]
        values = [7, [WETH, USDC], USER]
        self.assertEqual(encode_call("0xA9059CBB", types, values), "0xa9059cbb" + abi_encode(types, values).hex())

    def test_call_bytes(self):
        self.assertEqual(call_bytes("0x12210e8a"), bytes.fromhex("12210e8a"))
        self.assertEqual(call_bytes("12210e8a"), bytes.fromhex("12210e8a"))

    def test_length_mismatch(self):
        with self.assertRaises(InvalidInput):
            encode_call("0x12345678", ["uint256"], [1, 2])

    def test_uint_width_checked(self):
        """Out-of-range values surface as an OVERFLOW input error"""
        with self.assertRaises(InvalidInput) as ctx:
            encode_call("0x12345678", ["uint24"], [2 ** 24])
        self.assertEqual(ctx.exception.code, ErrorCode.OVERFLOW)

    def test_wrong_value_type(self):
        with self.assertRaises(InvalidInput):
            encode_call("0x12345678", ["bytes[]"], [[123]])

    def test_build_call_rejects_misaligned_word(self):
        with self.assertRaises(InvalidInput):
            build_call("0x12345678", "abc")

    def test_split_words(self):
        words = split_words("0x" + "00" * 31 + "01" + "00" * 31 + "02")
        self.assertEqual(len(words), 2)
        self.assertEqual(int(words[1], 16), 2)

    def test_tron_parameters_stringify_ints(self):
        params = tron_parameters(("address", "uint256", "bool"), ("TXYZ", 10 ** 18, True))
        self.assertEqual(params[1], {"type": "uint256", "value": str(10 ** 18)})
        self.assertIs(params[2]["value"], True)
        self.assertIsInstance(params, tuple)


class TestSwapEncoding(unittest.TestCase):
    """Router call data"""

    def test_exact_input_single_golden(self):
        data = encode_exact_input_single(
            token_in=WETH,
            token_out=USDC,
            fee=500,
            recipient=USER,
            deadline=1_700_000_000,
            amount_in=997 * 10 ** 15,
            amount_out_min=2_985_000_000,
        )
        expected = abi_encode(
            ["(address,address,uint24,address,uint256,uint256,uint256,uint160)"],
            [(WETH, USDC, 500, USER, 1_700_000_000, 997 * 10 ** 15, 2_985_000_000, 0)],
        ).hex()
        self.assertTrue(data.startswith("0x414bf389"))
        self.assertEqual(data[10:], expected)
        self.assertEqual(len(data), 10 + 8 * 64)

    def test_v2_native_for_tokens(self):
        data = encode_swap_exact_native_for_tokens(100, [WETH, USDC], USER, 99)
        expected = abi_encode(["uint256", "address[]", "address", "uint256"], [100, [WETH, USDC], USER, 99]).hex()
        self.assertEqual(data, SWAP_EXACT_ETH_FOR_TOKENS_SELECTOR + expected)

    def test_v2_tokens_for_native(self):
        data = encode_swap_exact_tokens_for_native(5, 4, [USDC, WETH], USER, 99)
        expected = abi_encode(
            ["uint256", "uint256", "address[]", "address", "uint256"], [5, 4, [USDC, WETH], USER, 99]
        ).hex()
        self.assertEqual(data, SWAP_EXACT_TOKENS_FOR_ETH_SELECTOR + expected)

    def test_v2_tokens_for_tokens(self):
        path = [USDC, WETH, USER]
        data = encode_swap_exact_tokens_for_tokens(5, 4, path, USER, 99)
        expected = abi_encode(["uint256", "uint256", "address[]", "address", "uint256"], [5, 4, path, USER, 99]).hex()
        self.assertEqual(data, SWAP_EXACT_TOKENS_FOR_TOKENS_SELECTOR + expected)

    def test_avax_naming_changes_selector(self):
        data = encode_swap_exact_native_for_tokens(100, [WAVAX, USDC], USER, 99, native_name="AVAX")
        self.assertEqual(data[:10], _selector("swapExactAVAXForTokens(uint256,address[],address,uint256)"))

    def test_unknown_native_name(self):
        with self.assertRaises(InvalidInput):
            encode_swap_exact_native_for_tokens(100, [WETH, USDC], USER, 99, native_name="BNB")

    def test_path_needs_two_tokens(self):
        with self.assertRaises(InvalidInput):
            encode_swap_exact_tokens_for_tokens(1, 1, [USDC], USER, 1)

    def test_build_v2_path(self):
        self.assertEqual(build_v2_path("0xaa", USDC, WETH, native_in=True), [WETH, USDC])
        self.assertEqual(build_v2_path(USDC, "0xaa", WETH, native_out=True), [USDC, WETH])
        self.assertEqual(build_v2_path(USDC, USER, WETH), [USDC, WETH, USER])
        self.assertEqual(build_v2_path(USDC, WETH, WETH), [USDC, WETH])

    def test_build_v2_path_native_for_native(self):
        with self.assertRaises(InvalidInput):
            build_v2_path(WETH, WETH, WETH, native_in=True, native_out=True)

    def test_v2_swap_signature(self):
        self.assertEqual(
            v2_swap_signature(True, False, "ETH"),
            "swapExactETHForTokens(uint256,address[],address,uint256)",
        )
        self.assertEqual(
            v2_swap_signature(False, True, "ETH"),
            "swapExactTokensForETH(uint256,uint256,address[],address,uint256)",
        )

    def test_tron_v2_parameters(self):
        params = tron_v2_swap_parameters(10, 9, ["TA", "TB"], "TC", 123, native_in=True)
        self.assertEqual([p["type"] for p in params], ["uint256", "address[]", "address", "uint256"])
        self.assertEqual(params[0]["value"], "9")


class TestPositionManagerEncoding(unittest.TestCase):
    """NonfungiblePositionManager call data"""

    def test_mint_matches_eth_abi(self):
        data = encode_mint(WETH, USDC, 500, -887270, 887270, 10 ** 18, 3000 * 10 ** 6, 0, 0, USER, 1_700_000_000)
        expected = abi_encode(
            ["(address,address,uint24,int24,int24,uint256,uint256,uint256,uint256,address,uint256)"],
            [(WETH, USDC, 500, -887270, 887270, 10 ** 18, 3000 * 10 ** 6, 0, 0, USER, 1_700_000_000)],
        ).hex()
        self.assertEqual(data, MINT_SELECTOR + expected)

    def test_decrease_matches_eth_abi(self):
        data = encode_decrease_liquidity(42, 10 ** 12, 1, 2, 99)
        expected = abi_encode(["(uint256,uint128,uint256,uint256,uint256)"], [(42, 10 ** 12, 1, 2, 99)]).hex()
        self.assertEqual(data, DECREASE_LIQUIDITY_SELECTOR + expected)

    def test_collect_defaults_to_max(self):
        data = encode_collect(42, USER)
        expected = abi_encode(
            ["(uint256,address,uint128,uint128)"], [(42, USER, UINT128_MAX, UINT128_MAX)]
        ).hex()
        self.assertEqual(data, COLLECT_SELECTOR + expected)

    def test_multicall_matches_eth_abi(self):
        swap = encode_exact_input_single(WETH, USDC, 500, ROUTER, 1, 2, 3)
        unwrap = encode_unwrap_weth9(3, USER)
        data = encode_multicall([swap, unwrap])
        expected = abi_encode(["bytes[]"], [[bytes.fromhex(swap[2:]), bytes.fromhex(unwrap[2:])]]).hex()
        self.assertEqual(data, MULTICALL_SELECTOR + expected)

    def test_sort_token_pair_keeps_order(self):
        self.assertEqual(sort_token_pair(WETH, USDC, (1, 2)), (WETH, USDC, (1, 2)))

    def test_sort_token_pair_swaps_pairs(self):
        token0, token1, amounts, mins = sort_token_pair(USDC, WETH, (1, 2), (3, 4))
        self.assertEqual((token0, token1), (WETH, USDC))
        self.assertEqual(amounts, (2, 1))
        self.assertEqual(mins, (4, 3))

    def test_tron_collect_parameters(self):
        params = tron_collect_parameters(7, "TRecipient")
        self.assertEqual(params[2]["value"], str(UINT128_MAX))


class TestLiquidityBookEncoding(unittest.TestCase):
    """LBRouter addLiquidity call data"""

    def _params(self):
        return LBLiquidityParameters(
            token_x=WAVAX,
            token_y=USDC,
            bin_step=15,
            amount_x=10 ** 18,
            amount_y=20 * 10 ** 6,
            amount_x_min=995 * 10 ** 15,
            amount_y_min=19_900_000,
            active_id_desired=8_388_608,
            id_slippage=5,
            delta_ids=[-1, 0, 1],
            distribution_x=[0, 5 * 10 ** 17, 5 * 10 ** 17],
            distribution_y=[5 * 10 ** 17, 5 * 10 ** 17, 0],
            to=USER,
            deadline=1_700_000_000,
        )

    def test_matches_eth_abi(self):
        params = self._params()
        struct_type = "(" + ",".join(LIQUIDITY_PARAMETERS_TYPE) + ")"
        expected = abi_encode([struct_type], [params.as_tuple()]).hex()
        self.assertEqual(encode_lb_add_liquidity(params), ADD_LIQUIDITY_SELECTOR + expected)

    def test_addresses_normalized(self):
        """Addresses are normalized before encoding"""
        params = self._params()
        params.token_x = WAVAX[2:].upper()
        params.to = " " + USER + " "
        self.assertEqual(encode_lb_add_liquidity(params), encode_lb_add_liquidity(self._params()))

    def test_bad_address_rejected(self):
        params = self._params()
        params.to = "not-an-address"
        with self.assertRaises(InvalidInput):
            encode_lb_add_liquidity(params)

    def test_refund_defaults_to_recipient(self):
        self.assertEqual(self._params().as_tuple()[13], USER)

    def test_pool_deep_link(self):
        self.assertEqual(
            pool_deep_link(WAVAX, USDC, 15),
            f"https://traderjoexyz.com/avalanche/pool/v21/{WAVAX}/{USDC}/15",
        )


class TestDecoder(unittest.TestCase):
    """eth_call return data"""

    def test_decode_uint(self):
        self.assertEqual(decode_uint("0x" + abi_encode(["uint256"], [UINT256_MAX]).hex()), UINT256_MAX)

    def test_decode_empty_is_zero(self):
        self.assertEqual(decode_uint("0x"), 0)

    def test_decode_address(self):
        word = abi_encode(["address"], [USDC]).hex()
        self.assertEqual(decode_address(word), USDC)

    def test_decode_words(self):
        self.assertEqual(decode_words("0x" + abi_encode(["uint256", "uint256"], [1, 2]).hex()), [1, 2])

    def test_decode_position(self):
        data = "0x" + abi_encode(
            ["uint96", "address", "address", "address", "uint24", "int24", "int24",
             "uint128", "uint256", "uint256", "uint128", "uint128"],
            [0, "0x" + "00" * 20, WETH, USDC, 500, -200, 200, 10 ** 15, 0, 0, 11, 22],
        ).hex()
        position = decode_position(data, token_id=9, chain="base")
        self.assertEqual(position.token_id, 9)
        self.assertEqual(position.token0, WETH)
        self.assertEqual(position.token1, USDC)
        self.assertEqual(position.fee, 500)
        self.assertEqual((position.tick_lower, position.tick_upper), (-200, 200))
        self.assertEqual(position.liquidity, 10 ** 15)
        self.assertEqual((position.tokens_owed0, position.tokens_owed1), (11, 22))
        self.assertEqual(position.chain, "base")

    def test_decode_position_short_data(self):
        with self.assertRaises(InvalidInput):
            decode_position("0x" + "00" * 64 * 3)

    def test_decode_string(self):
        self.assertEqual(decode_erc20_string("0x" + abi_encode(["string"], ["USDC"]).hex()), "USDC")

    def test_decode_bytes32_symbol(self):
        raw = b"MKR".ljust(32, b"\x00")
        self.assertEqual(decode_erc20_string("0x" + raw.hex()), "MKR")

    def test_decode_empty_string(self):
        self.assertEqual(decode_erc20_string("0x"), "")


def test_approve_and_transfer_layout():
    assert encode_approve(ROUTER, 5) == APPROVE_SELECTOR + abi_encode(["address", "uint256"], [ROUTER, 5]).hex()
    assert encode_transfer(USER, 7) == TRANSFER_SELECTOR + abi_encode(["address", "uint256"], [USER, 7]).hex()


def test_tron_approve_parameters():
    params = tron_approve_parameters("TSpender", UINT256_MAX)
    assert params == ({"type": "address", "value": "TSpender"}, {"type": "uint256", "value": str(UINT256_MAX)})
