"""
Transaction Orchestrator

Drives one wallet operation through its states:

    IDLE -> APPROVING? -> FEE_TRANSFERRING? -> SUBMITTING -> POLLING
         -> CONFIRMED | FAILED | TIMED_OUT | FEE_SENT_SWAP_ABORTED

Each step is confirmed before the next one is submitted. Rejected and reverted
transactions are never retried here; the outcome carries the error for the caller.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, List, Optional, Union

from ..abi.decoder import decode_uint
from ..errors import (
    ApprovalRejected,
    DexAdapterError,
    ErrorCode,
    OperationCancelled,
    SwapRejected,
    TransactionError,
    TransactionReverted,
    UserRejected,
    WalletTimeout,
)
from ..infra.retry import CorrelationContext, RetryPolicy, log_with_correlation, poll_until
from ..infra.transports import CHAIN_NOT_ADDED_CODE, NeoLineError, ProviderRpcError, WalletTransport
from ..protocols.registry import PURPOSE_SWAP, adapter_for
from ..registry import resolve_chain
from ..types import (
    ApprovalRequest,
    Call,
    ChainFamily,
    ChainProfile,
    LiquidityPlan,
    PendingTransaction,
    SwapPlan,
    Token,
    TxResult,
    TxStatus,
)
from .session import SessionContext

logger = logging.getLogger(__name__)

STEP_NETWORK = "network switch"
STEP_APPROVAL = "approval"
STEP_FEE = "fee transfer"
STEP_SWAP = "swap"


class OperationState(Enum):
    IDLE = "idle"
    APPROVING = "approving"
    FEE_TRANSFERRING = "fee_transferring"
    SUBMITTING = "submitting"
    POLLING = "polling"
    CONFIRMED = "confirmed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    FEE_SENT_SWAP_ABORTED = "fee_sent_swap_aborted"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES = frozenset({
    OperationState.CONFIRMED,
    OperationState.FAILED,
    OperationState.TIMED_OUT,
    OperationState.FEE_SENT_SWAP_ABORTED,
})


@dataclass
class OperationOutcome:
    """
    Result of one orchestrated operation

    Attributes:
        operation: Operation name used in logs
        state: Final (or current) state
        transactions: Every transaction submitted, in order
        error: Terminal error, None when confirmed
        fee_sent: True once the protocol fee transfer confirmed
        history: Every state entered, starting with IDLE
        correlation_id: Log correlation id
        chain: Chain key
    """
    operation: str
    state: OperationState = OperationState.IDLE
    transactions: List[PendingTransaction] = field(default_factory=list)
    error: Optional[DexAdapterError] = None
    fee_sent: bool = False
    history: List[OperationState] = field(default_factory=lambda: [OperationState.IDLE])
    correlation_id: Optional[str] = None
    chain: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.state == OperationState.CONFIRMED

    @property
    def last_transaction(self) -> Optional[PendingTransaction]:
        return self.transactions[-1] if self.transactions else None

    @property
    def tx_hash(self) -> Optional[str]:
        last = self.last_transaction
        return last.tx_hash if last else None

    def transition(self, state: OperationState):
        previous = self.state
        self.state = state
        self.history.append(state)
        log_with_correlation(
            logging.INFO,
            f"{previous.value} -> {state.value}",
            self.operation,
            state=state.value,
            chain=self.chain,
        )

    def finish(self, state: OperationState, error: DexAdapterError):
        self.error = error
        self.transition(state)
        log_with_correlation(
            logging.WARNING,
            f"Ended {state.value}: {error}",
            self.operation,
            error_code=error.code.value,
            fee_sent=self.fee_sent,
        )

    def to_tx_result(self) -> TxResult:
        last = self.last_transaction
        explorer_url = last.explorer_url if last else None
        if self.state == OperationState.CONFIRMED:
            return TxResult.success(self.tx_hash, explorer_url=explorer_url)
        if self.state == OperationState.TIMED_OUT:
            return TxResult.timeout(self.tx_hash, explorer_url=explorer_url)
        return TxResult.failed(
            str(self.error) if self.error else f"Operation ended {self.state.value}",
            tx_hash=self.tx_hash,
            explorer_url=explorer_url,
            error_code=self.error.code.value if self.error else None,
        )

    def __str__(self) -> str:
        return f"OperationOutcome({self.operation}, {self.state.value}, txs={len(self.transactions)})"


# confirm(plan) returns False or raises OperationCancelled to abort before submission
ConfirmCallback = Callable[[Union[SwapPlan, LiquidityPlan]], Optional[bool]]


class TransactionOrchestrator:
    """
    Runs swap and liquidity plans through a wallet transport

    Usage:
        orchestrator = TransactionOrchestrator(transport, session, RetryPolicy.mobile())
        outcome = orchestrator.execute_swap(plan)
        if outcome.state == OperationState.FEE_SENT_SWAP_ABORTED:
            ...
    """

    def __init__(
        self,
        transport: WalletTransport,
        session: Optional[SessionContext] = None,
        retry_policy: Optional[RetryPolicy] = None,
        approval_policy: Optional[RetryPolicy] = None,
        fee_policy: Optional[RetryPolicy] = None,
        confirm: Optional[ConfirmCallback] = None,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        """
        Args:
            transport: Wallet transport for the active chain family
            session: Session owning the guard and the operation slot
            retry_policy: Polling for the main call (desktop when omitted)
            approval_policy: Polling for approvals (30 x 2 s when omitted)
            fee_policy: Polling for the fee transfer (15 x 2 s when omitted)
            confirm: Called with the plan before anything is sent
            clock: Time source for polling
            sleep: Sleep function for polling
        """
        self.transport = transport
        self.session = session or SessionContext()
        self.retry_policy = retry_policy or RetryPolicy.desktop()
        self.approval_policy = approval_policy or RetryPolicy.approval()
        self.fee_policy = fee_policy or RetryPolicy.fee_transfer()
        self._confirm = confirm
        self._clock = clock
        self._sleep = sleep

    # =========================================================================
    # Building blocks
    # =========================================================================

    def ensure_chain(self, profile: ChainProfile):
        """
        Switch an EVM wallet to the profile's chain, adding the chain on 4902

        Raises:
            UserRejected: If the user declines the switch
            TransactionError: CHAIN_SWITCH_FAILED on any other provider error
        """
        if profile.family != ChainFamily.EVM:
            return
        current = self.transport.chain_id()
        if current is None or current == profile.chain_id:
            return

        logger.info(f"Switching wallet from chain {current} to {profile.name} ({profile.hex_chain_id})")
        try:
            self.transport.switch_chain(profile.hex_chain_id)
        except ProviderRpcError as e:
            if e.code != CHAIN_NOT_ADDED_CODE:
                raise TransactionError(
                    f"Could not switch to {profile.name}: {e.message}", ErrorCode.CHAIN_SWITCH_FAILED, e
                ) from e
            logger.info(f"{profile.name} unknown to wallet, adding it")
            try:
                self.transport.add_chain(profile.add_chain_params())
            except ProviderRpcError as add_error:
                raise TransactionError(
                    f"Could not add {profile.name}: {add_error.message}", ErrorCode.CHAIN_SWITCH_FAILED, add_error
                ) from add_error

    def ensure_approval(
        self,
        token: Token,
        spender: str,
        required: int,
        exact: bool = True,
        profile: Optional[ChainProfile] = None,
        outcome: Optional[OperationOutcome] = None,
    ) -> Optional[PendingTransaction]:
        """
        Approve ``spender`` if the current allowance is below ``required``

        Native assets and NEP-17 tokens never need approval. Swaps approve the exact
        amount; LP approves max uint256.

        Returns:
            The confirmed approval transaction, or None if none was needed
        """
        profile = profile or resolve_chain(token.chain_id)
        adapter = adapter_for(profile, PURPOSE_SWAP)
        approval = adapter.approval_for(token, spender, required, exact)
        if approval is None:
            logger.debug(f"[{profile.key}] No approval needed for {token.symbol}")
            return None

        owner = self.transport.address
        allowance = decode_uint(self.transport.call(adapter.build_allowance_query(token, owner, spender)))
        if allowance >= required:
            logger.debug(f"[{profile.key}] {token.symbol} allowance {allowance} >= {required}, skipping approve")
            return None

        logger.info(f"[{profile.key}] Approving {token.symbol} for {spender} (allowance {allowance} < {required})")
        outcome = outcome or OperationOutcome(operation=f"approve({token.symbol})", chain=profile.key)
        pending = self._submit(outcome, adapter.build_approve_call(approval), profile)
        self._wait(outcome, pending, self.approval_policy, STEP_APPROVAL)
        return pending

    def send_fee(
        self,
        token: Token,
        fee_amount: int,
        profile: ChainProfile,
        call: Optional[Call] = None,
        outcome: Optional[OperationOutcome] = None,
    ) -> Optional[PendingTransaction]:
        """
        Send the protocol fee and wait for it to confirm

        Native: value transfer to the fee wallet. Token: ERC-20 / TRC-20 / NEP-17 transfer.

        Returns:
            The confirmed fee transaction, or None when no fee applies
        """
        if call is None:
            call = adapter_for(profile, PURPOSE_SWAP).build_fee_call(token, fee_amount, self.transport.address)
        if call is None:
            logger.debug(f"[{profile.key}] No protocol fee to send")
            return None

        outcome = outcome or OperationOutcome(operation=f"fee({token.symbol})", chain=profile.key)
        pending = self._submit(outcome, call, profile)
        self._wait(outcome, pending, self.fee_policy, STEP_FEE)
        return pending

    def _submit(self, outcome: OperationOutcome, call: Call, profile: ChainProfile) -> PendingTransaction:
        tx_hash = self.transport.submit(call)
        pending = PendingTransaction(
            tx_hash=tx_hash,
            kind=call.kind,
            chain=profile.key,
            explorer_url=profile.explorer_tx_url(tx_hash),
        )
        outcome.transactions.append(pending)
        log_with_correlation(logging.INFO, f"Submitted {pending}", outcome.operation, tx_hash=tx_hash)
        return pending

    def _wait(self, outcome: OperationOutcome, pending: PendingTransaction, policy: RetryPolicy, step: str) -> dict:
        """
        Poll until the receipt arrives

        Raises:
            WalletTimeout: If the policy runs out first
            TransactionReverted: If the receipt reports failure
        """
        try:
            receipt = poll_until(
                lambda: self.transport.get_receipt(pending.tx_hash),
                policy,
                f"{outcome.operation}:{step}",
                tx_hash=pending.tx_hash,
                clock=self._clock,
                sleep=self._sleep,
            )
        except WalletTimeout:
            pending.status = TxStatus.TIMEOUT
            raise

        if not self.transport.receipt_succeeded(receipt):
            pending.status = TxStatus.FAILED
            raise TransactionReverted(
                pending.tx_hash,
                status=receipt.get("status"),
                reason=self.transport.failure_reason(receipt),
            )
        pending.status = TxStatus.SUCCESS
        log_with_correlation(logging.INFO, f"{step} confirmed", outcome.operation, tx_hash=pending.tx_hash)
        return receipt

    def _submit_and_poll(self, outcome: OperationOutcome, call: Call, profile: ChainProfile, step: str):
        outcome.transition(OperationState.SUBMITTING)
        pending = self._submit(outcome, call, profile)
        outcome.transition(OperationState.POLLING)
        self._wait(outcome, pending, self.retry_policy, step)

    # =========================================================================
    # Operations
    # =========================================================================

    @contextmanager
    def _operation(self, name: str, prefix: str, chain: str) -> Iterator[OperationOutcome]:
        """Claim the session's operation slot and hold the wallet-action guard"""
        self.session.begin_operation(name)
        try:
            with self.session.guard.hold(), CorrelationContext(prefix) as cid:
                yield OperationOutcome(operation=name, correlation_id=cid, chain=chain)
        finally:
            self.session.end_operation(name)

    def _check_confirmed(self, name: str, plan):
        if self._confirm is None:
            return
        if self._confirm(plan) is False:
            logger.info(f"{name} cancelled before submission")
            raise OperationCancelled(name)

    def execute_swap(self, plan: SwapPlan) -> OperationOutcome:
        """
        Approve (if needed), send the fee, then submit and poll the swap

        Raises:
            OperationInProgress: If the session already runs an operation
            OperationCancelled: If the confirm callback declines
        """
        profile = resolve_chain(plan.chain)
        name = f"swap({plan.token_in.symbol}->{plan.token_out.symbol})"

        with self._operation(name, "swap", profile.key) as outcome:
            self._check_confirmed(name, plan)
            step = STEP_NETWORK
            try:
                self.ensure_chain(profile)

                if plan.approval is not None:
                    step = STEP_APPROVAL
                    outcome.transition(OperationState.APPROVING)
                    self._ensure(plan.approval, profile, outcome)

                if plan.fee_call is not None:
                    step = STEP_FEE
                    outcome.transition(OperationState.FEE_TRANSFERRING)
                    self.send_fee(plan.token_in, plan.fee_amount, profile, call=plan.fee_call, outcome=outcome)
                    outcome.fee_sent = True

                step = STEP_SWAP
                self._submit_and_poll(outcome, plan.swap_call, profile, step)
                outcome.transition(OperationState.CONFIRMED)

            except WalletTimeout as e:
                outcome.finish(OperationState.TIMED_OUT, e)
            except (DexAdapterError, ProviderRpcError, NeoLineError) as e:
                error = self._map_error(e, step, plan.approval)
                aborted = outcome.fee_sent and outcome.state == OperationState.SUBMITTING
                outcome.finish(OperationState.FEE_SENT_SWAP_ABORTED if aborted else OperationState.FAILED, error)

        return outcome

    def execute_calls(self, plan: LiquidityPlan) -> OperationOutcome:
        """
        Ensure the plan's approvals, then submit and poll each call in order

        Raises:
            OperationInProgress: If the session already runs an operation
            OperationCancelled: If the confirm callback declines
        """
        profile = resolve_chain(plan.chain)
        name = plan.description or plan.kind.value

        with self._operation(name, plan.kind.value, profile.key) as outcome:
            self._check_confirmed(name, plan)
            step = STEP_NETWORK
            approval: Optional[ApprovalRequest] = None
            try:
                self.ensure_chain(profile)

                if plan.approvals:
                    step = STEP_APPROVAL
                    outcome.transition(OperationState.APPROVING)
                    for approval in plan.approvals:
                        self._ensure(approval, profile, outcome)

                for call in plan.calls:
                    step = call.kind.value.replace("_", " ")
                    self._submit_and_poll(outcome, call, profile, step)
                outcome.transition(OperationState.CONFIRMED)

            except WalletTimeout as e:
                outcome.finish(OperationState.TIMED_OUT, e)
            except (DexAdapterError, ProviderRpcError, NeoLineError) as e:
                outcome.finish(OperationState.FAILED, self._map_error(e, step, approval))

        return outcome

    def _ensure(self, approval: ApprovalRequest, profile: ChainProfile, outcome: OperationOutcome):
        self.ensure_approval(
            approval.token,
            approval.spender,
            approval.amount,
            exact=approval.exact,
            profile=profile,
            outcome=outcome,
        )

    @staticmethod
    def _map_error(error: Exception, step: str, approval: Optional[ApprovalRequest]) -> DexAdapterError:
        """Name rejections after the step they happened in"""
        if isinstance(error, (ProviderRpcError, NeoLineError)):
            error = TransactionError(f"Wallet request failed during {step}: {error}", original_error=error)
        if type(error) is UserRejected:
            if step == STEP_APPROVAL:
                return ApprovalRejected(approval.token.symbol if approval else None, original_error=error)
            return SwapRejected(step, original_error=error)
        if step == STEP_FEE and isinstance(error, TransactionError):
            return TransactionError.fee_not_sent(error.message)
        return error
