"""
Wallet transports

One transport per chain family, all behind the same interface:

    submit(call) -> tx hash
    get_receipt(tx_hash) -> receipt dict, or None while pending
    call(call) -> read-only result
    address

The objects handed in (EIP-1193 provider, TronWeb, NeoLine) are duck-typed so a browser
bridge, a local web3 provider or a test double can stand behind them.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..config import config as global_config
from ..errors import (
    ConfigurationError,
    OperationNotSupported,
    TransactionError,
    UserRejected,
)
from ..types import Call, ChainFamily, ContractCall, NeoInvocation

logger = logging.getLogger(__name__)

# EIP-1193 / EIP-3085 provider error codes
USER_REJECTED_CODE = 4001
CHAIN_NOT_ADDED_CODE = 4902

NEO_CANCELED = "CANCELED"

REJECTION_KEYWORDS = [
    "user rejected", "user denied", "rejected by user", "declined by user",
    "confirmation declined", "cancelled by user", "canceled by user",
]


class ProviderRpcError(Exception):
    """
    Error raised by an EIP-1193 provider

    Attributes:
        code: Provider error code (4001 rejected, 4902 unknown chain, ...)
        message: Provider message
        data: Optional provider payload
    """

    def __init__(self, code: int, message: str, data: Any = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class NeoLineError(Exception):
    """Error raised by the NeoLine bridge; ``type`` is NeoLine's error type"""

    def __init__(self, type: str, description: str = ""):
        super().__init__(description or type)
        self.type = type
        self.description = description


def looks_rejected(error: Exception) -> bool:
    """True if the error text reads like a wallet-side rejection"""
    text = str(error).lower()
    return any(keyword in text for keyword in REJECTION_KEYWORDS)


class WalletTransport(ABC):
    """
    Abstract wallet transport

    Subclasses talk to one wallet family; the orchestrator never needs to know which.
    """

    family: ChainFamily = ChainFamily.EVM

    @property
    @abstractmethod
    def address(self) -> str:
        """Connected wallet address"""
        ...

    @abstractmethod
    def submit(self, call: Call) -> str:
        """
        Ask the wallet to sign and broadcast a call

        Returns:
            Transaction hash / txid

        Raises:
            UserRejected: If the user declined in the wallet
            TransactionError: If the wallet failed to send
        """
        ...

    @abstractmethod
    def get_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        """Receipt for tx_hash, None while the transaction is pending"""
        ...

    @abstractmethod
    def receipt_succeeded(self, receipt: Dict[str, Any]) -> bool:
        ...

    @abstractmethod
    def call(self, call: Call) -> Any:
        """Read-only call"""
        ...

    def failure_reason(self, receipt: Dict[str, Any]) -> Optional[str]:
        """Revert reason carried by a failed receipt, if the wallet reports one"""
        return None

    def get_balance(self, address: str) -> int:
        """Native balance in smallest units"""
        raise OperationNotSupported.not_implemented("get_balance", type(self).__name__)

    def chain_id(self) -> Optional[int]:
        """Chain the wallet is connected to, None for wallets without chain switching"""
        return None

    def switch_chain(self, hex_chain_id: str):
        raise OperationNotSupported.not_implemented("switch_chain", type(self).__name__)

    def add_chain(self, params: Dict[str, Any]):
        raise OperationNotSupported.not_implemented("add_chain", type(self).__name__)


class EvmTransport(WalletTransport):
    """
    EIP-1193 transport

    Usage:
        transport = EvmTransport(provider)
        tx_hash = transport.submit(call)
        receipt = transport.get_receipt(tx_hash)
    """

    family = ChainFamily.EVM

    def __init__(self, provider, address: Optional[str] = None):
        """
        Args:
            provider: Object with ``request(method, params)``
            address: Wallet address; read from eth_accounts when omitted
        """
        self._provider = provider
        self._address = address

    def request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        Forward a JSON-RPC request to the provider

        Raises:
            UserRejected: On provider code 4001 or a rejection message
        """
        try:
            return self._provider.request(method, params or [])
        except ProviderRpcError as e:
            if e.code == USER_REJECTED_CODE or looks_rejected(e):
                raise UserRejected(original_error=e) from e
            raise

    @property
    def address(self) -> str:
        if self._address is None:
            accounts = self.request("eth_accounts")
            if not accounts:
                raise ConfigurationError.missing("wallet address (no connected EVM account)")
            self._address = accounts[0]
        return self._address

    def submit(self, call: Call) -> str:
        if not isinstance(call, ContractCall):
            raise OperationNotSupported.not_implemented("submit NEO invocation", "EVM transport")

        params = call.to_tx_params(self.address)
        try:
            tx_hash = self.request("eth_sendTransaction", [params])
        except ProviderRpcError as e:
            raise TransactionError.send_failed(e) from e

        if not tx_hash:
            raise TransactionError.send_failed("wallet returned no transaction hash")
        logger.debug(f"eth_sendTransaction {call.kind.value} -> {tx_hash}")
        return tx_hash

    def get_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        return self.request("eth_getTransactionReceipt", [tx_hash]) or None

    def receipt_succeeded(self, receipt: Dict[str, Any]) -> bool:
        return receipt.get("status") in ("0x1", 1)

    def call(self, call: Call) -> str:
        if not isinstance(call, ContractCall):
            raise OperationNotSupported.not_implemented("call NEO invocation", "EVM transport")
        return self.request("eth_call", [{"to": call.to, "data": call.data}, "latest"])

    def get_balance(self, address: str) -> int:
        return _quantity(self.request("eth_getBalance", [address, "latest"]))

    def chain_id(self) -> Optional[int]:
        return _quantity(self.request("eth_chainId"))

    def switch_chain(self, hex_chain_id: str):
        """wallet_switchEthereumChain; raises ProviderRpcError 4902 for unknown chains"""
        self.request("wallet_switchEthereumChain", [{"chainId": hex_chain_id}])

    def add_chain(self, params: Dict[str, Any]):
        self.request("wallet_addEthereumChain", [params])


class TronTransport(WalletTransport):
    """
    TronWeb transport

    Contract calls go through triggerSmartContract -> sign -> sendRawTransaction;
    plain TRX transfers through trx.sendTransaction.
    """

    family = ChainFamily.TRON

    def __init__(self, tron_web, address: Optional[str] = None):
        """
        Args:
            tron_web: TronWeb-like object (transactionBuilder, trx, defaultAddress)
            address: Base58 wallet address; read from defaultAddress when omitted
        """
        self._tron_web = tron_web
        self._address = address

    @property
    def address(self) -> str:
        if self._address is None:
            default = getattr(self._tron_web, "defaultAddress", None) or {}
            base58_address = default.get("base58") if isinstance(default, dict) else None
            if not base58_address:
                raise ConfigurationError.missing("wallet address (TronLink not connected)")
            self._address = base58_address
        return self._address

    def submit(self, call: Call) -> str:
        if not isinstance(call, ContractCall):
            raise OperationNotSupported.not_implemented("submit NEO invocation", "TRON transport")

        trx = self._tron_web.trx
        try:
            if call.is_value_transfer:
                result = trx.sendTransaction(call.to, call.value)
            else:
                options = {
                    "feeLimit": call.fee_limit or global_config.tron.swap_fee_limit,
                    "callValue": call.value,
                }
                triggered = self._tron_web.transactionBuilder.triggerSmartContract(
                    call.to,
                    call.function_signature,
                    options,
                    [dict(p) for p in call.parameters],
                    self.address,
                )
                if not (triggered or {}).get("result", {}).get("result"):
                    raise TransactionError.send_failed(
                        f"triggerSmartContract failed for {call.function_signature}: {triggered}"
                    )
                signed = trx.sign(triggered["transaction"])
                result = trx.sendRawTransaction(signed)
        except (UserRejected, TransactionError):
            raise
        except Exception as e:
            if looks_rejected(e):
                raise UserRejected(original_error=e) from e
            raise TransactionError.send_failed(e) from e

        txid = _tron_txid(result)
        if not txid:
            raise TransactionError.send_failed(f"TRON broadcast returned no txid: {result}")
        logger.debug(f"TRON {call.kind.value} -> {txid}")
        return txid

    def get_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        info = self._tron_web.trx.getTransactionInfo(tx_hash)
        return info or None

    def receipt_succeeded(self, receipt: Dict[str, Any]) -> bool:
        inner = receipt.get("receipt") or {}
        if inner.get("result") == "SUCCESS":
            return True
        # Plain TRX transfers carry no execution result
        return "result" not in inner and "result" not in receipt and bool(receipt.get("blockNumber"))

    def failure_reason(self, receipt: Dict[str, Any]) -> Optional[str]:
        message = receipt.get("resMessage")
        if not message:
            return (receipt.get("receipt") or {}).get("result")
        try:
            return bytes.fromhex(message).decode("utf-8", errors="replace")
        except ValueError:
            return message

    def call(self, call: Call) -> str:
        if not isinstance(call, ContractCall):
            raise OperationNotSupported.not_implemented("call NEO invocation", "TRON transport")
        result = self._tron_web.transactionBuilder.triggerConstantContract(
            call.to,
            call.function_signature,
            {},
            [dict(p) for p in call.parameters],
            self.address,
        )
        constant = (result or {}).get("constant_result") or []
        if not constant:
            raise TransactionError(f"Constant call {call.function_signature} on {call.to} returned nothing")
        return "0x" + constant[0]

    def get_balance(self, address: str) -> int:
        return int(self._tron_web.trx.getBalance(address))


class NeoTransport(WalletTransport):
    """
    NeoLine N3 transport

    Invocations are signed by NeoLine; receipts come from getApplicationLog.
    """

    family = ChainFamily.NEO

    def __init__(self, neoline, address: Optional[str] = None):
        """
        Args:
            neoline: NeoLine N3-like object (invoke, invokeRead, getApplicationLog, getAccount)
            address: NEO address; read from getAccount when omitted
        """
        self._neoline = neoline
        self._address = address

    @property
    def address(self) -> str:
        if self._address is None:
            account = self._neoline.getAccount() or {}
            if not account.get("address"):
                raise ConfigurationError.missing("wallet address (NeoLine not connected)")
            self._address = account["address"]
        return self._address

    def submit(self, call: Call) -> str:
        if not isinstance(call, NeoInvocation):
            raise OperationNotSupported.not_implemented("submit contract call", "NEO transport")

        try:
            result = self._neoline.invoke(call.to_request())
        except NeoLineError as e:
            if e.type == NEO_CANCELED or looks_rejected(e):
                raise UserRejected(original_error=e) from e
            raise TransactionError.send_failed(e) from e

        txid = (result or {}).get("txid")
        if not txid:
            raise TransactionError.send_failed(f"NeoLine returned no txid: {result}")
        logger.debug(f"NEO {call.operation} -> {txid}")
        return txid

    def get_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        log = self._neoline.getApplicationLog({"txid": tx_hash})
        if not log or not log.get("executions"):
            return None
        return log

    def receipt_succeeded(self, receipt: Dict[str, Any]) -> bool:
        executions = receipt.get("executions") or [{}]
        return executions[0].get("vmstate") == "HALT"

    def failure_reason(self, receipt: Dict[str, Any]) -> Optional[str]:
        executions = receipt.get("executions") or [{}]
        return executions[0].get("exception")

    def call(self, call: Call) -> Any:
        if not isinstance(call, NeoInvocation):
            raise OperationNotSupported.not_implemented("call contract call", "NEO transport")
        return self._neoline.invokeRead(call.to_request())


def _quantity(value) -> int:
    """JSON-RPC quantity (hex string or int) as int"""
    if isinstance(value, str):
        return int(value, 16)
    return int(value)


def _tron_txid(result) -> Optional[str]:
    if not isinstance(result, dict):
        return None
    return result.get("txid") or (result.get("transaction") or {}).get("txID")


def transport_for(family: ChainFamily, wallet, address: Optional[str] = None) -> WalletTransport:
    """Wrap a wallet object in the transport for its chain family"""
    if family == ChainFamily.EVM:
        return EvmTransport(wallet, address)
    if family == ChainFamily.TRON:
        return TronTransport(wallet, address)
    if family == ChainFamily.NEO:
        return NeoTransport(wallet, address)
    raise ConfigurationError.invalid("family", f"no transport for {family}")
