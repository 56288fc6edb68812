"""
Swap Module

Turns a SwapIntent into a SwapPlan (units, fee split, quote, adapter call) and runs it
through the orchestrator:

    amount_in_human -> to_smallest_unit -> split_fee -> fetch_quote(swap_amount)
        -> adapter.build_swap -> execute_swap
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..client import DexClient

from ..codec import to_smallest_unit
from ..config import config
from ..errors import ConfigurationError, InvalidInput
from ..protocols.registry import PURPOSE_SWAP, adapter_for
from ..registry import resolve_chain
from ..types import ChainProfile, Quote, SwapIntent, SwapPlan
from .fees import FeeSplit, fee_wallet_for, split_fee
from .orchestrator import OperationOutcome

logger = logging.getLogger(__name__)


class SwapModule:
    """
    Token swaps on the client's chain family

    Usage:
        intent = SwapIntent("ETH", "USDC", "0.5", chain="base", slippage_bps=50)
        plan = client.swap.prepare(intent)      # show plan.expected_out_ui, plan.min_amount_out
        outcome = client.swap.execute(plan)
        # or in one step
        outcome = client.swap.swap(intent)
    """

    def __init__(self, client: "DexClient"):
        """
        Initialize swap module

        Args:
            client: DexClient instance
        """
        self._client = client

    def _profile(self, intent: SwapIntent) -> ChainProfile:
        profile = resolve_chain(intent.chain)
        if profile.family != self._client.profile.family:
            raise ConfigurationError.invalid(
                "chain",
                f"{profile.name} needs a {profile.family.value} wallet, "
                f"connected wallet is {self._client.profile.family.value}",
            )
        return profile

    def split(self, profile: ChainProfile, amount_in: int) -> FeeSplit:
        """Fee split for an input amount; chains without a fee wallet withhold nothing"""
        if not fee_wallet_for(profile):
            return split_fee(amount_in, 0, config.fee.denominator)
        return split_fee(amount_in, config.fee.numerator, config.fee.denominator)

    def tokens(self, intent: SwapIntent, profile: Optional[ChainProfile] = None):
        """(token_in, token_out) for an intent"""
        profile = profile or self._profile(intent)
        token_in = self._client.resolve_token(intent.token_in, profile)
        token_out = self._client.resolve_token(intent.token_out, profile)
        if token_in.address.lower() == token_out.address.lower():
            raise InvalidInput(f"Cannot swap {token_in.symbol} for itself", field="token_out", value=intent.token_out)
        return token_in, token_out

    def quote(self, intent: SwapIntent) -> Quote:
        """Quote for the amount that actually reaches the router (after the fee)"""
        profile = self._profile(intent)
        token_in, token_out = self.tokens(intent, profile)
        split = self.split(profile, to_smallest_unit(intent.amount_in_human, token_in.decimals))
        return self._client.quotes.fetch_quote(token_in, token_out, split.swap_amount, profile)

    def prepare(self, intent: SwapIntent) -> SwapPlan:
        """
        Build the swap plan without touching the wallet

        Raises:
            InvalidInput: Bad amount, slippage or token pair
            UnsupportedToken: Token not in the registry or imported
            QuoteUnavailable: Quote service failure
        """
        profile = self._profile(intent)
        token_in, token_out = self.tokens(intent, profile)

        amount_in = to_smallest_unit(intent.amount_in_human, token_in.decimals)
        split = self.split(profile, amount_in)
        quote = self._client.quotes.fetch_quote(token_in, token_out, split.swap_amount, profile)

        adapter = adapter_for(profile, PURPOSE_SWAP)
        plan = adapter.build_swap(intent, split, quote, self._client.address)

        logger.info(
            f"[{profile.key}] Prepared {adapter.name} swap {amount_in} {token_in.symbol} -> "
            f"{quote.amount_out} {token_out.symbol} (min {plan.min_amount_out}, fee {split.fee})"
        )
        return plan

    def execute(self, plan: SwapPlan) -> OperationOutcome:
        return self._client.orchestrator.execute_swap(plan)

    def swap(self, intent: SwapIntent) -> OperationOutcome:
        """Prepare and execute in one step"""
        return self.execute(self.prepare(intent))

    def swap_tokens(
        self,
        token_in: str,
        token_out: str,
        amount: str,
        slippage_bps: Optional[int] = None,
        recipient: Optional[str] = None,
    ) -> OperationOutcome:
        """Swap on the client's own chain with the configured default slippage"""
        intent = SwapIntent(
            token_in=token_in,
            token_out=token_out,
            amount_in_human=str(amount),
            chain=self._client.profile.key,
            slippage_bps=config.trading.default_slippage_bps if slippage_bps is None else slippage_bps,
            recipient=recipient,
        )
        return self.swap(intent)
