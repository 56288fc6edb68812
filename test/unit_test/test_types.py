"""
Test Types Module

Tests for regraph_dex.types package.
"""

from decimal import Decimal

import pytest


def test_token():
    """Test Token dataclass"""
    from regraph_dex.types import Token

    usdc = Token(
        address="0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
        symbol="USDC",
        decimals=6,
        name="USD Coin",
        chain_id=8453,
    )

    assert usdc.symbol == "USDC"
    assert str(usdc) == "USDC"
    assert not usdc.imported
    assert usdc.ui_amount(1_500_000) == Decimal("1.5")
    assert usdc.raw_amount("1.5") == 1_500_000
    assert usdc.raw_amount(Decimal("0.0000019")) == 1
    assert usdc.same_address("0x833589fcd6edb6e08f4c7c32d4f71b54bda02913")

    # Token is frozen (immutable)
    with pytest.raises(Exception):
        usdc.symbol = "XXX"


def test_tx_result():
    """Test TxResult factories"""
    from regraph_dex.types import TxResult, TxStatus

    ok = TxResult.success("0xabc", block_number=12)
    assert ok.is_success
    assert ok.block_number == 12
    assert "SUCCESS" in str(ok)

    failed = TxResult.failed("execution reverted", tx_hash="0xdef")
    assert failed.is_failed
    assert failed.tx_hash == "0xdef"

    timeout = TxResult.timeout("0x123")
    assert timeout.status == TxStatus.TIMEOUT
    assert timeout.recoverable
    assert timeout.error_code == "3004"

    assert TxResult.skipped().is_skipped


def test_quote():
    """Test Quote exchange rate in UI units"""
    from regraph_dex.registry import resolve_token
    from regraph_dex.types import Quote

    eth = resolve_token("base", "ETH")
    usdc = resolve_token("base", "USDC")
    quote = Quote(amount_in=10 ** 18, amount_out=3_000_000_000, fee_bps=500, route="UniswapV3",
                  decimals_out=6, token_in=eth, token_out=usdc)
    assert quote.exchange_rate == Decimal(3000)

    empty = Quote(amount_in=0, amount_out=0, fee_bps=0, route="", decimals_out=6)
    assert empty.exchange_rate == Decimal(0)


def test_price_table():
    """Test PriceTable lookups"""
    from regraph_dex.types import PriceTable

    table = PriceTable("base", prices={"ETH": Decimal("3000")}, fetched_at=100.0)
    assert table.price_of("ETH") == Decimal("3000")
    assert table.price_of("DOGE") is None
    assert table.usd_value("ETH", Decimal("0.5")) == Decimal("1500")
    assert table.usd_value("DOGE", Decimal(1)) is None
    assert table.age(now=130.0) == 30.0


def test_contract_call():
    """Test ContractCall value transfers and tx params"""
    from regraph_dex.types import ContractCall, TxKind

    transfer = ContractCall(to="0xfee", value=5, kind=TxKind.FEE_TRANSFER)
    assert transfer.is_value_transfer
    assert transfer.selector is None
    assert transfer.to_tx_params("0xme") == {"from": "0xme", "to": "0xfee", "value": "0x5"}

    call = ContractCall(to="0xrouter", data="0x414bf389" + "00" * 32)
    assert not call.is_value_transfer
    assert call.selector == "0x414bf389"
    assert call.to_tx_params("0xme")["data"] == call.data

    tron = ContractCall(to="T...", function_signature="approve(address,uint256)")
    assert not tron.is_value_transfer


def test_neo_invocation():
    """Test NeoInvocation request shape"""
    from regraph_dex.types import NeoInvocation

    invocation = NeoInvocation(
        script_hash="0xd2a4cff31913016155e38e474a2c06d08be276cf",
        operation="transfer",
        args=({"type": "Hash160", "value": "NZ..."}, {"type": "Integer", "value": "1"}),
        signers=({"account": "0xabc", "scopes": 1},),
    )
    request = invocation.to_request()
    assert request["operation"] == "transfer"
    assert request["args"][1] == {"type": "Integer", "value": "1"}
    assert request["signers"] == [{"account": "0xabc", "scopes": 1}]


def test_approval_request():
    """Test exact vs unlimited approvals"""
    from regraph_dex.codec import UINT256_MAX
    from regraph_dex.registry import resolve_token
    from regraph_dex.types import ApprovalRequest

    usdc = resolve_token("base", "USDC")
    assert ApprovalRequest(usdc, "0xrouter", 100).approve_amount == 100
    assert ApprovalRequest(usdc, "0xnpm", 100, exact=False).approve_amount == UINT256_MAX


def test_liquidity_range():
    """Test LiquidityRange validation"""
    from regraph_dex.errors import InvalidInput
    from regraph_dex.types import FeeTier, LiquidityRange

    tier = FeeTier(3000, 60)
    rng = LiquidityRange(Decimal("0.9"), Decimal("1.1"), -1080, 960, tier)
    assert rng.width_ticks == 2040
    assert rng.contains_tick(0)
    assert not rng.contains_tick(960)
    assert tier.percent == 0.3

    with pytest.raises(InvalidInput):
        LiquidityRange(Decimal(1), Decimal(1), 60, 60, tier)
    with pytest.raises(InvalidInput):
        LiquidityRange(Decimal(1), Decimal(2), -50, 60, tier)
    with pytest.raises(InvalidInput):
        LiquidityRange.from_prices("2", "1", tier)
    with pytest.raises(InvalidInput):
        LiquidityRange.from_prices("0", "1", tier)


def test_position():
    """Test Position helpers"""
    from regraph_dex.types import Position

    position = Position(
        token_id=7,
        token0="0xa",
        token1="0xb",
        fee=3000,
        tick_lower=-600,
        tick_upper=600,
        liquidity=1000,
        tokens_owed1=3,
    )
    assert not position.is_closed
    assert position.has_uncollected
    assert position.check_in_range(0)
    assert not position.check_in_range(600)
    assert "#7" in str(position)
    assert position.to_dict()["liquidity"] == "1000"

    lower, upper = position.price_bounds()
    assert lower < 1 < upper


def test_bin_distribution():
    """Test BinDistribution shape checks"""
    from regraph_dex.errors import InvalidInput
    from regraph_dex.types import BinDistribution

    dist = BinDistribution([-1, 0, 1], [0, 5 * 10 ** 17, 5 * 10 ** 17], [5 * 10 ** 17, 5 * 10 ** 17, 0], 8388608)
    assert len(dist) == 3
    assert dist.bin_ids == [8388607, 8388608, 8388609]
    assert dist.total_x == dist.total_y == 10 ** 18

    with pytest.raises(InvalidInput):
        BinDistribution([0, 1], [10 ** 18], [10 ** 18, 0])
