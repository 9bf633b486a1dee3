"""PlatON client — context, method groups and construction."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from . import methods as m
from .addresses import Bech32AddressEncoder, ContractAddresses, derive_contract_addresses
from .codec import BlockParam, BlockTag, DataParam, QuantityParam
from .contracts import (
    ProposalContract,
    RestrictingPlanContract,
    RewardContract,
    SlashContract,
    StakingContract,
)
from .dispatch import dispatch, reject
from .errors import AddressEncodingError, ClientConstructionError
from .interfaces.address_encoder import AddressEncoder
from .interfaces.provider import Provider
from .models import (
    JSONRPC_VERSION,
    Block,
    Call,
    ProgramVersion,
    RPCResponse,
    SyncStatus,
    Transaction,
    TransactionObject,
    TransactionReceipt,
)
from .network import NetworkParameter

logger = logging.getLogger(__name__)

DEFAULT_RPC_ID = 1
DEFAULT_HRP = "atx"


@dataclass(frozen=True)
class ClientContext:
    """Everything a method group needs; shared, never mutated."""

    provider: Provider
    rpc_id: int
    chain_id: str
    hrp: str
    jsonrpc: str = JSONRPC_VERSION


# ---------------------------------------------------------------------------
# Method groups
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Net:
    """``net_*`` methods."""

    properties: ClientContext

    async def version(self) -> RPCResponse[str]:
        """Current network id, e.g. ``"201018"``."""
        return await dispatch(self.properties, m.NET_VERSION)

    async def peer_count(self) -> RPCResponse[int]:
        """Number of peers connected to the node."""
        return await dispatch(self.properties, m.NET_PEER_COUNT)


@dataclass(frozen=True)
class Platon:
    """``platon_*`` and ``admin_*`` node methods."""

    properties: ClientContext

    async def get_schnorr_nizk_prove(self) -> RPCResponse[str]:
        return await dispatch(self.properties, m.ADMIN_GET_SCHNORR_NIZK_PROVE)

    async def get_program_version(self) -> RPCResponse[ProgramVersion]:
        return await dispatch(self.properties, m.ADMIN_GET_PROGRAM_VERSION)

    async def protocol_version(self) -> RPCResponse[str]:
        return await dispatch(self.properties, m.PLATON_PROTOCOL_VERSION)

    async def syncing(self) -> RPCResponse[SyncStatus]:
        return await dispatch(self.properties, m.PLATON_SYNCING)

    async def gas_price(self) -> RPCResponse[int]:
        return await dispatch(self.properties, m.PLATON_GAS_PRICE)

    async def accounts(self) -> RPCResponse[list[str]]:
        return await dispatch(self.properties, m.PLATON_ACCOUNTS)

    async def block_number(self) -> RPCResponse[int]:
        return await dispatch(self.properties, m.PLATON_BLOCK_NUMBER)

    async def get_balance(self, address: str, block: BlockTag = "latest") -> RPCResponse[int]:
        """Balance of ``address`` in the smallest unit."""
        return await dispatch(self.properties, m.PLATON_GET_BALANCE, (address, BlockParam(block)))

    async def get_storage_at(
        self, address: str, position: int, block: BlockTag = "latest"
    ) -> RPCResponse[str]:
        return await dispatch(
            self.properties,
            m.PLATON_GET_STORAGE_AT,
            (address, QuantityParam(position), BlockParam(block)),
        )

    async def get_transaction_count(
        self, address: str, block: BlockTag = "latest"
    ) -> RPCResponse[int]:
        return await dispatch(
            self.properties, m.PLATON_GET_TRANSACTION_COUNT, (address, BlockParam(block))
        )

    async def get_block_transaction_count_by_hash(self, block_hash: str) -> RPCResponse[int]:
        return await dispatch(
            self.properties,
            m.PLATON_GET_BLOCK_TRANSACTION_COUNT_BY_HASH,
            (DataParam(block_hash),),
        )

    async def get_block_transaction_count_by_number(self, block: BlockTag) -> RPCResponse[int]:
        return await dispatch(
            self.properties,
            m.PLATON_GET_BLOCK_TRANSACTION_COUNT_BY_NUMBER,
            (BlockParam(block),),
        )

    async def get_code(self, address: str, block: BlockTag = "latest") -> RPCResponse[str]:
        return await dispatch(self.properties, m.PLATON_GET_CODE, (address, BlockParam(block)))

    async def send_transaction(self, transaction: Transaction) -> RPCResponse[str]:
        """Ask the node to sign and send ``transaction``; returns its hash.

        The sender must be set. Without one the call fails locally and nothing
        is sent to the node.
        """
        if not transaction.from_:
            return reject(self.properties, m.PLATON_SEND_TRANSACTION, "Transaction has no sender")
        return await dispatch(self.properties, m.PLATON_SEND_TRANSACTION, (transaction,))

    async def send_raw_transaction(self, raw: bytes | str) -> RPCResponse[str]:
        """Submit an already signed, RLP-encoded transaction."""
        return await dispatch(self.properties, m.PLATON_SEND_RAW_TRANSACTION, (DataParam(raw),))

    async def call(self, call: Call, block: BlockTag = "latest") -> RPCResponse[str]:
        return await dispatch(self.properties, m.PLATON_CALL, (call, BlockParam(block)))

    async def estimate_gas(self, call: Call) -> RPCResponse[int]:
        return await dispatch(self.properties, m.PLATON_ESTIMATE_GAS, (call,))

    async def get_block_by_hash(
        self, block_hash: str, full_transactions: bool = False
    ) -> RPCResponse[Block | None]:
        return await dispatch(
            self.properties,
            m.PLATON_GET_BLOCK_BY_HASH,
            (DataParam(block_hash), full_transactions),
        )

    async def get_block_by_number(
        self, block: BlockTag, full_transactions: bool = False
    ) -> RPCResponse[Block | None]:
        return await dispatch(
            self.properties,
            m.PLATON_GET_BLOCK_BY_NUMBER,
            (BlockParam(block), full_transactions),
        )

    async def get_transaction_by_hash(
        self, transaction_hash: str
    ) -> RPCResponse[TransactionObject | None]:
        """Transaction by hash; ``None`` result when the node does not know it."""
        return await dispatch(
            self.properties, m.PLATON_GET_TRANSACTION_BY_HASH, (DataParam(transaction_hash),)
        )

    async def get_transaction_by_block_hash_and_index(
        self, block_hash: str, index: int
    ) -> RPCResponse[TransactionObject | None]:
        return await dispatch(
            self.properties,
            m.PLATON_GET_TRANSACTION_BY_BLOCK_HASH_AND_INDEX,
            (DataParam(block_hash), QuantityParam(index)),
        )

    async def get_transaction_by_block_number_and_index(
        self, block: BlockTag, index: int
    ) -> RPCResponse[TransactionObject | None]:
        return await dispatch(
            self.properties,
            m.PLATON_GET_TRANSACTION_BY_BLOCK_NUMBER_AND_INDEX,
            (BlockParam(block), QuantityParam(index)),
        )

    async def get_transaction_receipt(
        self, transaction_hash: str
    ) -> RPCResponse[TransactionReceipt | None]:
        return await dispatch(
            self.properties, m.PLATON_GET_TRANSACTION_RECEIPT, (DataParam(transaction_hash),)
        )


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class Web3:
    """Typed entry point to a PlatON node.

    System contract addresses are derived when the client is built; if that
    fails the client is not built at all.
    """

    def __init__(
        self,
        provider: Provider,
        rpc_id: int = DEFAULT_RPC_ID,
        *,
        chain_id: str,
        hrp: str = DEFAULT_HRP,
        encoder: AddressEncoder | None = None,
    ) -> None:
        if not chain_id:
            raise ClientConstructionError("chain_id is required")

        properties = ClientContext(provider=provider, rpc_id=rpc_id, chain_id=chain_id, hrp=hrp)
        encoder = encoder if encoder is not None else Bech32AddressEncoder()

        try:
            addresses = derive_contract_addresses(hrp, encoder)
        except AddressEncodingError as e:
            logger.error("Cannot derive contract addresses for prefix '%s': %s", hrp, e)
            raise ClientConstructionError(f"Contract address derivation failed: {e}") from e

        self.properties = properties
        self.contract_addresses: ContractAddresses = addresses
        self.net = Net(properties)
        self.platon = Platon(properties)

        self.staking = StakingContract(self.platon, addresses.staking)
        self.proposal = ProposalContract(self.platon, addresses.proposal)
        self.slash = SlashContract(self.platon, addresses.slash)
        self.restricting = RestrictingPlanContract(self.platon, addresses.restricting)
        self.reward = RewardContract(self.platon, addresses.reward)

        logger.info("Client ready (chain_id=%s, hrp=%s)", chain_id, hrp)

    @classmethod
    def for_network(
        cls,
        provider: Provider,
        network: NetworkParameter,
        rpc_id: int = DEFAULT_RPC_ID,
        encoder: AddressEncoder | None = None,
    ) -> Web3:
        """Build a client using the network's chain id and address prefix."""
        return cls(
            provider,
            rpc_id,
            chain_id=network.chain_id,
            hrp=network.addr_prefix,
            encoder=encoder,
        )

    @property
    def provider(self) -> Provider:
        return self.properties.provider

    @property
    def rpc_id(self) -> int:
        return self.properties.rpc_id

    @property
    def chain_id(self) -> str:
        return self.properties.chain_id

    async def client_version(self) -> RPCResponse[str]:
        """Node client version, e.g. ``"PlatONnetwork/v1.0.0/linux-amd64/go1.16"``."""
        return await dispatch(self.properties, m.WEB3_CLIENT_VERSION)
