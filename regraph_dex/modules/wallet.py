"""
Wallet Module

Balance queries and custom token import through the wallet transport:
- EVM: eth_getBalance / ERC-20 balanceOf
- TRON: trx.getBalance / TRC-20 balanceOf (signature + parameters)
- NEO: NEP-17 balanceOf via invokeRead (NEO itself is a NEP-17 contract)
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional

from ..abi.decoder import decode_erc20_string, decode_uint
from ..abi.erc20 import (
    BALANCE_OF_SIGNATURE,
    encode_balance_of,
    encode_decimals,
    encode_name,
    encode_symbol,
    tron_balance_of_parameters,
)
from ..errors import InvalidInput, OperationNotSupported, TransactionError
from ..infra.transports import WalletTransport
from ..registry import is_native, resolve_token
from ..types import ChainFamily, ChainProfile, ContractCall, NeoInvocation, Token, TxKind

logger = logging.getLogger(__name__)

NAME_SIGNATURE = "name()"
SYMBOL_SIGNATURE = "symbol()"
DECIMALS_SIGNATURE = "decimals()"

# ERC-20 decimals is a uint8
MAX_DECIMALS = 255


class WalletModule:
    """
    Wallet balances for one chain

    Usage:
        wallet = WalletModule(transport, resolve_chain("base"))
        eth = wallet.native_balance()
        usdc = wallet.token_balance(resolve_token("base", "USDC"))
        token = wallet.import_token("0x...")
    """

    def __init__(self, transport: WalletTransport, profile: ChainProfile):
        """
        Args:
            transport: Wallet transport for the chain's family
            profile: Chain profile
        """
        self._transport = transport
        self._profile = profile

    @property
    def address(self) -> str:
        return self._transport.address

    @property
    def profile(self) -> ChainProfile:
        return self._profile

    # =========================================================================
    # Balances
    # =========================================================================

    def native_balance(self, owner: Optional[str] = None) -> int:
        """Native balance in smallest units (wei / sun / NEO)"""
        owner = owner or self.address
        if self._profile.family == ChainFamily.NEO:
            return self.token_balance(resolve_token(self._profile, self._profile.native_symbol), owner)
        return self._transport.get_balance(owner)

    def token_balance(self, token: Token, owner: Optional[str] = None) -> int:
        """Token balance in smallest units; the native sentinel reads the native balance"""
        owner = owner or self.address
        if is_native(self._profile, token.address):
            return self.native_balance(owner)

        family = self._profile.family
        if family == ChainFamily.NEO:
            result = self._transport.call(NeoInvocation(
                script_hash=token.address,
                operation="balanceOf",
                args=({"type": "Hash160", "value": owner},),
            ))
            return _neo_stack_int(result)

        if family == ChainFamily.TRON:
            call = ContractCall(
                to=token.address,
                kind=TxKind.TRANSFER,
                function_signature=BALANCE_OF_SIGNATURE,
                parameters=tron_balance_of_parameters(owner),
            )
        else:
            call = ContractCall(to=token.address, data=encode_balance_of(owner), kind=TxKind.TRANSFER)
        return decode_uint(self._transport.call(call))

    def balance(self, token: Token, owner: Optional[str] = None) -> Decimal:
        """Token balance in UI units"""
        return token.ui_amount(self.token_balance(token, owner))

    def balances(self, tokens: Iterable[Token], owner: Optional[str] = None) -> Dict[str, Decimal]:
        """
        UI balances keyed by symbol

        A failing read is logged and left out so one broken token does not hide the rest.
        """
        result: Dict[str, Decimal] = {}
        for token in tokens:
            try:
                result[token.symbol] = self.balance(token, owner)
            except TransactionError as e:
                logger.warning(f"[{self._profile.key}] Balance of {token.symbol} unavailable: {e}")
        return result

    # =========================================================================
    # Token import
    # =========================================================================

    def _read(self, address: str, data: str, signature: str) -> str:
        if self._profile.family == ChainFamily.TRON:
            call = ContractCall(to=address, kind=TxKind.TRANSFER, function_signature=signature)
        else:
            call = ContractCall(to=address, data=data, kind=TxKind.TRANSFER)
        return self._transport.call(call)

    def import_token(self, address: str, icon: str = "") -> Token:
        """
        Build a descriptor from the contract's name()/symbol()/decimals()

        Raises:
            InvalidInput: If the contract returns no symbol or impossible decimals
            OperationNotSupported: On NEO, where tokens come from the registry only
        """
        if self._profile.family == ChainFamily.NEO:
            raise OperationNotSupported.not_implemented("import_token", self._profile.dex_name)

        symbol = decode_erc20_string(self._read(address, encode_symbol(), SYMBOL_SIGNATURE)).strip()
        if not symbol:
            raise InvalidInput(f"{address} returned no symbol; not an ERC-20 contract?", field="address", value=address)
        name = decode_erc20_string(self._read(address, encode_name(), NAME_SIGNATURE)).strip()
        decimals = decode_uint(self._read(address, encode_decimals(), DECIMALS_SIGNATURE))
        if decimals > MAX_DECIMALS:
            raise InvalidInput.out_of_range("decimals", decimals, f"must be at most {MAX_DECIMALS}")

        token = Token(
            address=address,
            symbol=symbol,
            decimals=decimals,
            name=name or symbol,
            icon=icon,
            chain_id=self._profile.chain_id,
            imported=True,
        )
        logger.info(f"[{self._profile.key}] Imported token {symbol} ({decimals} decimals) at {address}")
        return token


def _neo_stack_int(result: Any) -> int:
    """First stack item of an invokeRead result as an int"""
    stack = (result or {}).get("stack") or []
    if not stack:
        raise TransactionError(f"invokeRead returned an empty stack: {result}")
    value = stack[0].get("value")
    if value in (None, ""):
        return 0
    return int(value)
