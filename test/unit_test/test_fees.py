"""
Unit tests for fee split and slippage math
"""

import unittest
from decimal import Decimal
from unittest.mock import patch

import pytest

from regraph_dex.errors import InvalidInput
from regraph_dex.modules.fees import (
    deadline,
    fee_wallet_for,
    liquidity_to_remove,
    lp_min_amount,
    min_amount_out,
    slippage_percent_to_bps,
    split_fee,
)
from regraph_dex.registry import resolve_chain


class TestSplitFee(unittest.TestCase):
    """Tests for the 0.3% protocol fee split"""

    def test_one_eth(self):
        """1 ETH -> 0.003 ETH fee, 0.997 ETH swapped"""
        split = split_fee(10 ** 18)
        self.assertEqual(split.fee, 3 * 10 ** 15)
        self.assertEqual(split.swap_amount, 997 * 10 ** 15)
        self.assertEqual(split.gross, 10 ** 18)

    def test_fee_truncates(self):
        """Fee floors, so tiny amounts pay nothing"""
        split = split_fee(333)
        self.assertEqual(split.fee, 0)
        self.assertEqual(split.swap_amount, 333)

    def test_identity_holds(self):
        for amount in (1, 999, 1000, 1001, 123456789, 10 ** 30 + 7):
            with self.subTest(amount=amount):
                split = split_fee(amount)
                self.assertEqual(split.fee + split.swap_amount, amount)
                self.assertEqual(split.fee, amount * 3 // 1000)

    def test_zero_numerator(self):
        split = split_fee(10 ** 18, numerator=0)
        self.assertEqual(split.fee, 0)
        self.assertEqual(split.swap_amount, 10 ** 18)

    def test_rejects_non_positive(self):
        with self.assertRaises(InvalidInput):
            split_fee(0)
        with self.assertRaises(InvalidInput):
            split_fee(-5)

    def test_rejects_non_integer(self):
        with self.assertRaises(InvalidInput):
            split_fee(Decimal("1.5"))
        with self.assertRaises(InvalidInput):
            split_fee(True)

    def test_rejects_bad_fraction(self):
        with self.assertRaises(InvalidInput):
            split_fee(1000, numerator=1000, denominator=1000)
        with self.assertRaises(InvalidInput):
            split_fee(1000, numerator=1, denominator=0)


class TestMinAmountOut(unittest.TestCase):
    """Tests for slippage-bounded output"""

    def test_half_percent(self):
        self.assertEqual(min_amount_out(1_000_000, 50), 995_000)

    def test_zero_slippage(self):
        self.assertEqual(min_amount_out(1_000_000, 0), 1_000_000)

    def test_per_mille_resolution(self):
        """55 bps behaves like 50 bps"""
        self.assertEqual(min_amount_out(1_000_000, 55), min_amount_out(1_000_000, 50))

    def test_full_slippage(self):
        self.assertEqual(min_amount_out(1_000_000, 10_000), 0)

    def test_rounds_down(self):
        self.assertEqual(min_amount_out(1001, 50), 995)

    def test_out_of_range(self):
        with self.assertRaises(InvalidInput):
            min_amount_out(1000, 10_001)
        with self.assertRaises(InvalidInput):
            min_amount_out(1000, -1)

    def test_zero_output_rejected(self):
        with self.assertRaises(InvalidInput):
            min_amount_out(0, 50)


class TestLiquidityMath(unittest.TestCase):
    """Tests for LP minimums and removal amounts"""

    def test_slippage_percent_to_bps(self):
        self.assertEqual(slippage_percent_to_bps("0.5"), 50)
        self.assertEqual(slippage_percent_to_bps(Decimal("1.239")), 123)
        self.assertEqual(slippage_percent_to_bps(3), 300)

    def test_slippage_percent_out_of_range(self):
        with self.assertRaises(InvalidInput):
            slippage_percent_to_bps("100.1")

    def test_lp_min_amount(self):
        self.assertEqual(lp_min_amount(10_000, "0.5"), 9_950)
        self.assertEqual(lp_min_amount(10 ** 18, Decimal("1")), 99 * 10 ** 16)

    def test_lp_min_amount_zero_allowed(self):
        """One-sided deposits leave the other side at zero"""
        self.assertEqual(lp_min_amount(0, "0.5"), 0)

    def test_lp_min_amount_negative(self):
        with self.assertRaises(InvalidInput):
            lp_min_amount(-1, "0.5")

    def test_liquidity_to_remove(self):
        self.assertEqual(liquidity_to_remove(1000, 100), 1000)
        self.assertEqual(liquidity_to_remove(1000, 25), 250)
        self.assertEqual(liquidity_to_remove(999, 50), 499)

    def test_liquidity_to_remove_bad_percent(self):
        for percent in (0, 101, 50.0):
            with self.subTest(percent=percent):
                with self.assertRaises(InvalidInput):
                    liquidity_to_remove(1000, percent)

    def test_deadline(self):
        self.assertEqual(deadline(1200, now=1_700_000_000.7), 1_700_001_200)

    def test_deadline_rejects_non_positive(self):
        with self.assertRaises(InvalidInput):
            deadline(0, now=1)


class TestFeeWallet(unittest.TestCase):
    """Tests for fee wallet selection per chain family"""

    def test_evm_chains_share_wallet(self):
        self.assertEqual(fee_wallet_for(resolve_chain("base")), fee_wallet_for(resolve_chain("bsc")))

    def test_family_specific_wallets(self):
        with patch("regraph_dex.modules.fees.global_config") as mock_config:
            mock_config.fee.wallet_address = "0xevm"
            mock_config.fee.tron_wallet_address = "TTron"
            mock_config.fee.neo_wallet_address = "NNeo"
            self.assertEqual(fee_wallet_for(resolve_chain("base")), "0xevm")
            self.assertEqual(fee_wallet_for(resolve_chain("tron")), "TTron")
            self.assertEqual(fee_wallet_for(resolve_chain("neo")), "NNeo")


@pytest.mark.parametrize("amount", [1, 2, 333, 334, 1_000_000, 10 ** 18 - 1])
def test_fee_never_exceeds_three_per_mille(amount):
    split = split_fee(amount)
    assert split.fee * 1000 <= amount * 3
    assert split.swap_amount > 0
