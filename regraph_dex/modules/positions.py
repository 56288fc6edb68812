"""
Position Reader

Reads NonfungiblePositionManager positions through the wallet transport
(Uniswap V3 chains, PancakeSwap V3 on BSC, SunSwap V3 on TRON).

Liquidity Book balances are per-bin and Flamingo has no position NFTs, so neither
can be listed here.
"""

import logging
from typing import List

from ..abi.decoder import decode_position, decode_uint
from ..abi.erc20 import BALANCE_OF_SIGNATURE, encode_balance_of, tron_balance_of_parameters
from ..abi.position_manager import (
    POSITIONS_SIGNATURE,
    TOKEN_OF_OWNER_BY_INDEX_SIGNATURE,
    encode_positions,
    encode_token_of_owner_by_index,
    tron_positions_parameters,
    tron_token_of_owner_by_index_parameters,
)
from ..codec import hex_to_tron
from ..errors import OperationNotSupported
from ..infra.transports import WalletTransport
from ..types import ChainFamily, ChainProfile, ContractCall, DexKind, Position, TxKind

logger = logging.getLogger(__name__)


class PositionReader:
    """
    Position NFT reader for one chain

    Usage:
        reader = PositionReader(transport, resolve_chain("bsc"))
        for position in reader.list_positions(transport.address):
            print(position, position.liquidity)
    """

    def __init__(self, transport: WalletTransport, profile: ChainProfile):
        if profile.liquidity_dex != DexKind.UNISWAP_V3:
            raise OperationNotSupported(
                f"{profile.dex_name} on {profile.name} has no position NFTs to read",
                operation="list_positions",
                protocol=profile.dex_name,
            )
        self._transport = transport
        self._profile = profile

    @property
    def position_manager(self) -> str:
        return self._profile.position_manager_address

    @property
    def _is_tron(self) -> bool:
        return self._profile.family == ChainFamily.TRON

    def _read(self, data: str, signature: str, parameters: tuple) -> str:
        if self._is_tron:
            call = ContractCall(
                to=self.position_manager,
                kind=TxKind.COLLECT,
                function_signature=signature,
                parameters=parameters,
            )
        else:
            call = ContractCall(to=self.position_manager, data=data, kind=TxKind.COLLECT)
        return self._transport.call(call)

    def position_count(self, owner: str) -> int:
        """Number of position NFTs held by ``owner``"""
        return decode_uint(self._read(
            encode_balance_of(owner),
            BALANCE_OF_SIGNATURE,
            tron_balance_of_parameters(owner),
        ))

    def token_id_at(self, owner: str, index: int) -> int:
        return decode_uint(self._read(
            encode_token_of_owner_by_index(owner, index),
            TOKEN_OF_OWNER_BY_INDEX_SIGNATURE,
            tron_token_of_owner_by_index_parameters(owner, index),
        ))

    def get_position(self, token_id: int) -> Position:
        """
        Decode positions(tokenId)

        TRON token addresses are returned in base58.
        """
        data = self._read(encode_positions(token_id), POSITIONS_SIGNATURE, tron_positions_parameters(token_id))
        position = decode_position(data, token_id=token_id, chain=self._profile.key)
        if self._is_tron:
            position.token0 = hex_to_tron(position.token0)
            position.token1 = hex_to_tron(position.token1)
        return position

    def list_positions(self, owner: str, include_closed: bool = False) -> List[Position]:
        """
        All positions owned by ``owner``

        Args:
            owner: Wallet address
            include_closed: Keep positions whose liquidity is zero

        Returns:
            Positions in NFT index order
        """
        count = self.position_count(owner)
        logger.debug(f"[{self._profile.key}] {owner} holds {count} position NFTs")

        positions = []
        for index in range(count):
            token_id = self.token_id_at(owner, index)
            position = self.get_position(token_id)
            if position.is_closed and not include_closed:
                logger.debug(f"[{self._profile.key}] Skipping closed position #{token_id}")
                continue
            positions.append(position)
        return positions
