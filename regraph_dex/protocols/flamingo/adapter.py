"""
Flamingo (NEO N3) NEP-17 Adapter

NeoLine ``invoke`` requests instead of call data. Liquidity is deposited as two NEP-17
transfers to the router; swaps call the router's ``swapTokenInForTokenOut``.
"""

import logging

from ...errors import InvalidInput
from ...modules.fees import FeeSplit, min_amount_out
from ...types import (
    DexKind,
    LiquidityPlan,
    MintRequest,
    NeoInvocation,
    Quote,
    SwapIntent,
    SwapPlan,
    TxKind,
)
from ..base import DexAdapter, NEO_SCOPE_CUSTOM_CONTRACTS

logger = logging.getLogger(__name__)

SWAP_OPERATION = "swapTokenInForTokenOut"


class Nep17Adapter(DexAdapter):
    """Flamingo router adapter; NEP-17 tokens need no approvals"""

    name = "nep17"
    kind = DexKind.NEP17

    def build_swap(self, intent: SwapIntent, split: FeeSplit, quote: Quote, sender: str) -> SwapPlan:
        """
        swapTokenInForTokenOut(sender, amountIn, amountOutMin, paths, deadline)

        The router compares the deadline against block time in milliseconds.
        """
        token_in, token_out = quote.token_in, quote.token_out
        router = self.profile.router_address
        min_out = min_amount_out(quote.amount_out, intent.slippage_bps)
        swap_deadline = self.swap_deadline(intent)

        swap_call = NeoInvocation(
            script_hash=router,
            operation=SWAP_OPERATION,
            args=(
                {"type": "Address", "value": sender},
                {"type": "Integer", "value": str(split.swap_amount)},
                {"type": "Integer", "value": str(min_out)},
                {
                    "type": "Array",
                    "value": [
                        {"type": "Hash160", "value": token_in.address},
                        {"type": "Hash160", "value": token_out.address},
                    ],
                },
                {"type": "Integer", "value": str(swap_deadline * 1000)},
            ),
            signers=(
                {
                    "account": sender,
                    "scopes": NEO_SCOPE_CUSTOM_CONTRACTS,
                    "allowedContracts": [token_in.address, router],
                },
            ),
            kind=TxKind.SWAP,
        )

        logger.debug(f"[{self.chain}] Flamingo swap {token_in.symbol}->{token_out.symbol} min_out={min_out}")

        return SwapPlan(
            chain=self.chain,
            token_in=token_in,
            token_out=token_out,
            amount_in=split.gross,
            fee_amount=split.fee,
            swap_amount=split.swap_amount,
            min_amount_out=min_out,
            swap_call=swap_call,
            quote=quote,
            fee_call=self.build_fee_call(token_in, split.fee, sender),
            deadline=swap_deadline,
        )

    def build_mint(self, request: MintRequest) -> LiquidityPlan:
        """Transfer both tokens to the router, each as its own invocation"""
        if request.amount_a <= 0 or request.amount_b <= 0:
            raise InvalidInput("Flamingo deposits need both token amounts", field="amount")

        router = self.profile.router_address
        calls = [
            self.nep17_transfer(request.token_a.address, request.recipient, router, request.amount_a),
            self.nep17_transfer(request.token_b.address, request.recipient, router, request.amount_b),
        ]
        return LiquidityPlan(
            chain=self.chain,
            kind=TxKind.TRANSFER,
            calls=calls,
            description=f"Deposit {request.token_a.symbol}/{request.token_b.symbol} to Flamingo",
        )
