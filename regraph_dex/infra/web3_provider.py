"""
Local EIP-1193 provider using web3.py

Exposes ``request(method, params)`` over a web3 HTTP connection and signs locally with
an eth_account key, so EvmTransport can be driven from scripts without a browser wallet.
Only local private key signing is supported.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import HTTPProvider, Web3
from web3.exceptions import TransactionNotFound, Web3Exception
from web3.middleware import ExtraDataToPOAMiddleware

from ..config import config as global_config
from ..errors import ConfigurationError
from ..registry import resolve_chain
from .transports import CHAIN_NOT_ADDED_CODE, ProviderRpcError

logger = logging.getLogger(__name__)

# EIP-1193 codes used by the local provider
UNAUTHORIZED_CODE = 4100
UNSUPPORTED_METHOD_CODE = 4200
INTERNAL_ERROR_CODE = -32000

# Proof-of-authority chains need the extraData middleware
POA_CHAIN_IDS = (56, 97, 137)


def create_web3(
    rpc_url: str,
    chain_id: Optional[int] = None,
    timeout: Optional[float] = None,
) -> Web3:
    """
    Create Web3 instance for a chain

    Args:
        rpc_url: RPC endpoint URL
        chain_id: Chain ID; detected from the RPC when omitted
        timeout: Request timeout in seconds

    Returns:
        Configured Web3 instance
    """
    provider = HTTPProvider(
        rpc_url,
        request_kwargs={"timeout": timeout or global_config.evm.rpc_timeout},
    )
    web3 = Web3(provider)

    if chain_id is None:
        chain_id = web3.eth.chain_id

    if chain_id in POA_CHAIN_IDS:
        web3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

    return web3


class Web3Provider:
    """
    EIP-1193 style provider backed by web3.py

    Usage:
        provider = Web3Provider.from_env("bsc")
        transport = EvmTransport(provider)
    """

    def __init__(self, web3: Web3, account: Optional[LocalAccount] = None):
        """
        Args:
            web3: Connected Web3 instance
            account: Signing account; without one the provider is read-only
        """
        self._web3 = web3
        self._account = account

    @property
    def web3(self) -> Web3:
        return self._web3

    @property
    def address(self) -> Optional[str]:
        return self._account.address if self._account else None

    def request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        Handle one JSON-RPC request

        Raises:
            ProviderRpcError: With EIP-1193 codes (4100 no signer, 4200 unsupported,
                4902 unknown chain, -32000 node errors)
        """
        params = list(params or [])
        handler = getattr(self, f"_{method}", None)
        try:
            if handler is not None:
                return handler(params)
            return self._forward(method, params)
        except ProviderRpcError:
            raise
        except (ValueError, Web3Exception) as e:
            logger.warning(f"{method} failed: {e}")
            raise ProviderRpcError(INTERNAL_ERROR_CODE, str(e)) from e

    # ========== Account ==========

    def _eth_accounts(self, params) -> List[str]:
        return [self._account.address] if self._account else []

    def _eth_requestAccounts(self, params) -> List[str]:
        return self._eth_accounts(params)

    def _eth_chainId(self, params) -> str:
        return hex(self._web3.eth.chain_id)

    # ========== Chain switching ==========

    def _wallet_switchEthereumChain(self, params):
        requested = int(params[0]["chainId"], 16)
        if requested != self._web3.eth.chain_id:
            raise ProviderRpcError(
                CHAIN_NOT_ADDED_CODE,
                f"Local provider is bound to chain {self._web3.eth.chain_id}, not {requested}",
            )
        return None

    def _wallet_addEthereumChain(self, params):
        raise ProviderRpcError(UNSUPPORTED_METHOD_CODE, "Local provider cannot add chains")

    # ========== Transactions ==========

    def _eth_sendTransaction(self, params) -> str:
        if self._account is None:
            raise ProviderRpcError(UNAUTHORIZED_CODE, "No signing account configured")

        tx = params[0]
        sender = self._account.address
        tx_dict: Dict[str, Any] = {
            "from": sender,
            "to": Web3.to_checksum_address(tx["to"]),
            "value": int(tx.get("value", "0x0"), 16),
            "data": tx.get("data", "0x"),
            "nonce": self._web3.eth.get_transaction_count(sender, "pending"),
            "chainId": self._web3.eth.chain_id,
            "gasPrice": self._web3.eth.gas_price,
        }
        estimate = self._web3.eth.estimate_gas(tx_dict)
        tx_dict["gas"] = int(estimate * global_config.evm.gas_limit_multiplier)

        signed = self._account.sign_transaction(tx_dict)
        tx_hash = self._web3.eth.send_raw_transaction(signed.raw_transaction)
        logger.debug(f"Sent tx nonce={tx_dict['nonce']} gas={tx_dict['gas']}")
        return Web3.to_hex(tx_hash)

    def _eth_getTransactionReceipt(self, params) -> Optional[Dict[str, Any]]:
        try:
            receipt = self._web3.eth.get_transaction_receipt(params[0])
        except TransactionNotFound:
            return None
        return {
            "transactionHash": Web3.to_hex(receipt["transactionHash"]),
            "status": hex(receipt["status"]),
            "blockNumber": receipt["blockNumber"],
            "gasUsed": receipt["gasUsed"],
        }

    # ========== Reads ==========

    def _eth_call(self, params) -> str:
        call = params[0]
        block = params[1] if len(params) > 1 else "latest"
        result = self._web3.eth.call(
            {"to": Web3.to_checksum_address(call["to"]), "data": call.get("data", "0x")},
            block,
        )
        return Web3.to_hex(result)

    def _eth_getBalance(self, params) -> str:
        block = params[1] if len(params) > 1 else "latest"
        return hex(self._web3.eth.get_balance(Web3.to_checksum_address(params[0]), block))

    def _forward(self, method: str, params: List[Any]) -> Any:
        response = self._web3.provider.make_request(method, params)
        error = response.get("error")
        if error:
            raise ProviderRpcError(error.get("code", INTERNAL_ERROR_CODE), error.get("message", str(error)))
        return response.get("result")

    # ========== Factories ==========

    @classmethod
    def from_private_key(cls, rpc_url: str, private_key: str, chain_id: Optional[int] = None) -> "Web3Provider":
        """
        Create provider from an RPC URL and hex private key (with or without 0x prefix)
        """
        if not private_key.startswith("0x"):
            private_key = "0x" + private_key
        account = Account.from_key(private_key)
        return cls(create_web3(rpc_url, chain_id), account)

    @classmethod
    def from_env(cls, chain, env_var: str = "EVM_PRIVATE_KEY") -> "Web3Provider":
        """
        Create provider for a registry chain

        The RPC comes from RPC_URL_<CHAIN> when set, otherwise the chain's first endpoint.

        Raises:
            ConfigurationError: If the private key variable is not set
        """
        profile = resolve_chain(chain)
        if not profile.is_evm:
            raise ConfigurationError.invalid("chain", f"{profile.key} is not an EVM chain")
        private_key = os.getenv(env_var, "")
        if not private_key:
            raise ConfigurationError.missing(env_var)
        rpc_url = global_config.evm.rpc_overrides.get(profile.key) or profile.rpc_endpoints[0]
        return cls.from_private_key(rpc_url, private_key, profile.chain_id)

    def __repr__(self) -> str:
        return f"Web3Provider(address={self.address})"
