"""Catalog of remote procedures: wire name plus result decoder."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .codec import Decoder, decode_data, decode_quantity, decode_str, list_of, optional
from .models import Block, ProgramVersion, SyncStatus, TransactionObject, TransactionReceipt

T = TypeVar("T")


@dataclass(frozen=True)
class RPCMethod(Generic[T]):
    """A remote procedure. ``name`` must match the node's registry exactly."""

    name: str
    decode: Decoder[T]

    @property
    def namespace(self) -> str:
        return self.name.split("_", 1)[0]


def _method(name: str, decode: Decoder[Any]) -> RPCMethod[Any]:
    return RPCMethod(name, decode)


# web3
WEB3_CLIENT_VERSION = _method("web3_clientVersion", decode_str)

# net
NET_VERSION = _method("net_version", decode_str)
NET_PEER_COUNT = _method("net_peerCount", decode_quantity)

# admin
ADMIN_GET_SCHNORR_NIZK_PROVE = _method("admin_getSchnorrNIZKProve", decode_str)
ADMIN_GET_PROGRAM_VERSION = _method("admin_getProgramVersion", ProgramVersion.from_json)

# platon
PLATON_PROTOCOL_VERSION = _method("platon_protocolVersion", decode_str)
PLATON_SYNCING = _method("platon_syncing", SyncStatus.from_json)
PLATON_GAS_PRICE = _method("platon_gasPrice", decode_quantity)
PLATON_ACCOUNTS = _method("platon_accounts", list_of(decode_str))
PLATON_BLOCK_NUMBER = _method("platon_blockNumber", decode_quantity)
PLATON_GET_BALANCE = _method("platon_getBalance", decode_quantity)
PLATON_GET_STORAGE_AT = _method("platon_getStorageAt", decode_data)
PLATON_GET_TRANSACTION_COUNT = _method("platon_getTransactionCount", decode_quantity)
PLATON_GET_BLOCK_TRANSACTION_COUNT_BY_HASH = _method(
    "platon_getBlockTransactionCountByHash", decode_quantity
)
PLATON_GET_BLOCK_TRANSACTION_COUNT_BY_NUMBER = _method(
    "platon_getBlockTransactionCountByNumber", decode_quantity
)
PLATON_GET_CODE = _method("platon_getCode", decode_data)
PLATON_SEND_TRANSACTION = _method("platon_sendTransaction", decode_data)
PLATON_SEND_RAW_TRANSACTION = _method("platon_sendRawTransaction", decode_data)
PLATON_CALL = _method("platon_call", decode_data)
PLATON_ESTIMATE_GAS = _method("platon_estimateGas", decode_quantity)
PLATON_GET_BLOCK_BY_HASH = _method("platon_getBlockByHash", optional(Block.from_json))
PLATON_GET_BLOCK_BY_NUMBER = _method("platon_getBlockByNumber", optional(Block.from_json))
PLATON_GET_TRANSACTION_BY_HASH = _method(
    "platon_getTransactionByHash", optional(TransactionObject.from_json)
)
PLATON_GET_TRANSACTION_BY_BLOCK_HASH_AND_INDEX = _method(
    "platon_getTransactionByBlockHashAndIndex", optional(TransactionObject.from_json)
)
PLATON_GET_TRANSACTION_BY_BLOCK_NUMBER_AND_INDEX = _method(
    "platon_getTransactionByBlockNumberAndIndex", optional(TransactionObject.from_json)
)
PLATON_GET_TRANSACTION_RECEIPT = _method(
    "platon_getTransactionReceipt", optional(TransactionReceipt.from_json)
)

ALL_METHODS: tuple[RPCMethod[Any], ...] = tuple(
    value for value in list(globals().values()) if isinstance(value, RPCMethod)
)
