"""Data models — RPC envelope and node value types, all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from .codec import (
    Decoder,
    decode_data,
    decode_quantity,
    decode_str,
    encode_data,
    encode_quantity,
    optional_quantity,
    to_json,
)
from .errors import DecodingError, EmptyResponseError, RPCError, ServerError

T = TypeVar("T")

JSONRPC_VERSION = "2.0"


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RPCRequest:
    """A single JSON-RPC call. ``params`` order is the method's positional order."""

    id: int
    method: str
    params: tuple[Any, ...] = ()
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "jsonrpc": self.jsonrpc,
            "method": self.method,
            "params": [to_json(p) for p in self.params],
        }


@dataclass(frozen=True)
class RPCResponse(Generic[T]):
    """Outcome of one call: a decoded result or an error, never both.

    A successful response may carry ``None`` (e.g. a block that does not exist),
    so success is defined by ``error is None``.
    """

    id: int
    result: T | None = None
    error: RPCError | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.result is not None:
            raise ValueError("RPCResponse cannot carry both a result and an error")

    @classmethod
    def success(cls, id: int, value: T | None) -> RPCResponse[T]:
        return cls(id=id, result=value)

    @classmethod
    def failure(cls, id: int, error: RPCError) -> RPCResponse[T]:
        return cls(id=id, error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    def unwrap(self) -> T | None:
        """Return the result, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.result

    @classmethod
    def from_payload(
        cls, request: RPCRequest, payload: Any, decode: Decoder[T]
    ) -> RPCResponse[T]:
        """Decode a raw JSON-RPC response object for ``request``. Never raises."""
        if not isinstance(payload, dict):
            return cls.failure(
                request.id, DecodingError(f"Response is not an object: {payload!r}")
            )

        if payload.get("id") != request.id:
            return cls.failure(
                request.id,
                DecodingError(
                    f"Response id {payload.get('id')!r} does not match request id {request.id}"
                ),
            )

        err = payload.get("error")
        if err is not None:
            code = err.get("code") if isinstance(err, dict) else None
            if not isinstance(code, int) or isinstance(code, bool):
                return cls.failure(
                    request.id, DecodingError(f"Malformed error object: {err!r}")
                )
            return cls.failure(
                request.id,
                ServerError(code, str(err.get("message", "")), err.get("data")),
            )

        if "result" not in payload:
            return cls.failure(request.id, EmptyResponseError(f"No result for {request.method}"))

        try:
            value = decode(payload["result"])
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            return cls.failure(
                request.id, DecodingError(f"Cannot decode {request.method} result: {e}", e)
            )
        return cls.success(request.id, value)


# ---------------------------------------------------------------------------
# Outbound value types
# ---------------------------------------------------------------------------


def _compact(fields: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if v is not None}


@dataclass(frozen=True)
class Transaction:
    """Transaction to be signed and sent by the node (``platon_sendTransaction``)."""

    from_: str | None = None
    to: str | None = None
    gas: int | None = None
    gas_price: int | None = None
    value: int | None = None
    data: bytes | str | None = None
    nonce: int | None = None

    def to_json(self) -> dict[str, Any]:
        return _compact(
            {
                "from": self.from_,
                "to": self.to,
                "gas": None if self.gas is None else encode_quantity(self.gas),
                "gasPrice": None if self.gas_price is None else encode_quantity(self.gas_price),
                "value": None if self.value is None else encode_quantity(self.value),
                "data": None if self.data is None else encode_data(self.data),
                "nonce": None if self.nonce is None else encode_quantity(self.nonce),
            }
        )


@dataclass(frozen=True)
class Call:
    """Message call for ``platon_call`` / ``platon_estimateGas``."""

    to: str
    from_: str | None = None
    gas: int | None = None
    gas_price: int | None = None
    value: int | None = None
    data: bytes | str | None = None

    def to_json(self) -> dict[str, Any]:
        return _compact(
            {
                "from": self.from_,
                "to": self.to,
                "gas": None if self.gas is None else encode_quantity(self.gas),
                "gasPrice": None if self.gas_price is None else encode_quantity(self.gas_price),
                "value": None if self.value is None else encode_quantity(self.value),
                "data": None if self.data is None else encode_data(self.data),
            }
        )


# ---------------------------------------------------------------------------
# Result value types
# ---------------------------------------------------------------------------


def _require_object(raw: Any, kind: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise TypeError(f"Expected {kind} object, got {raw!r}")
    return raw

@dataclass(frozen=True)
class ProgramVersion:
    version: int
    sign: str

    @classmethod
    def from_json(cls, raw: Any) -> ProgramVersion:
        raw = _require_object(raw, "program version")
        return cls(version=int(raw["Version"]), sign=decode_str(raw["Sign"]))


@dataclass(frozen=True)
class SyncStatus:
    syncing: bool
    starting_block: int | None = None
    current_block: int | None = None
    highest_block: int | None = None

    @classmethod
    def from_json(cls, raw: Any) -> SyncStatus:
        if raw is False:
            return cls(syncing=False)
        if not isinstance(raw, dict):
            raise TypeError(f"Expected sync object or false, got {raw!r}")
        return cls(
            syncing=True,
            starting_block=decode_quantity(raw["startingBlock"]),
            current_block=decode_quantity(raw["currentBlock"]),
            highest_block=decode_quantity(raw["highestBlock"]),
        )


@dataclass(frozen=True)
class Log:
    address: str
    topics: tuple[str, ...]
    data: str
    block_number: int | None = None
    transaction_hash: str | None = None
    transaction_index: int | None = None
    block_hash: str | None = None
    log_index: int | None = None
    removed: bool = False

    @classmethod
    def from_json(cls, raw: Any) -> Log:
        raw = _require_object(raw, "log")
        return cls(
            address=decode_str(raw["address"]),
            topics=tuple(decode_data(t) for t in raw.get("topics", [])),
            data=decode_data(raw["data"]),
            block_number=optional_quantity(raw.get("blockNumber")),
            transaction_hash=raw.get("transactionHash"),
            transaction_index=optional_quantity(raw.get("transactionIndex")),
            block_hash=raw.get("blockHash"),
            log_index=optional_quantity(raw.get("logIndex")),
            removed=bool(raw.get("removed", False)),
        )


@dataclass(frozen=True)
class TransactionObject:
    hash: str
    nonce: int
    from_: str
    to: str | None
    value: int
    gas: int
    gas_price: int
    input: str
    block_hash: str | None = None
    block_number: int | None = None
    transaction_index: int | None = None

    @classmethod
    def from_json(cls, raw: Any) -> TransactionObject:
        raw = _require_object(raw, "transaction")
        return cls(
            hash=decode_data(raw["hash"]),
            nonce=decode_quantity(raw["nonce"]),
            from_=decode_str(raw["from"]),
            to=raw.get("to"),
            value=decode_quantity(raw["value"]),
            gas=decode_quantity(raw["gas"]),
            gas_price=decode_quantity(raw["gasPrice"]),
            input=decode_data(raw["input"]),
            block_hash=raw.get("blockHash"),
            block_number=optional_quantity(raw.get("blockNumber")),
            transaction_index=optional_quantity(raw.get("transactionIndex")),
        )


@dataclass(frozen=True)
class TransactionReceipt:
    transaction_hash: str
    transaction_index: int
    block_hash: str
    block_number: int
    cumulative_gas_used: int
    gas_used: int
    contract_address: str | None = None
    logs: tuple[Log, ...] = ()
    logs_bloom: str | None = None
    status: int | None = None

    @classmethod
    def from_json(cls, raw: Any) -> TransactionReceipt:
        raw = _require_object(raw, "receipt")
        return cls(
            transaction_hash=decode_data(raw["transactionHash"]),
            transaction_index=decode_quantity(raw["transactionIndex"]),
            block_hash=decode_data(raw["blockHash"]),
            block_number=decode_quantity(raw["blockNumber"]),
            cumulative_gas_used=decode_quantity(raw["cumulativeGasUsed"]),
            gas_used=decode_quantity(raw["gasUsed"]),
            contract_address=raw.get("contractAddress"),
            logs=tuple(Log.from_json(entry) for entry in raw.get("logs", [])),
            logs_bloom=raw.get("logsBloom"),
            status=optional_quantity(raw.get("status")),
        )


@dataclass(frozen=True)
class Block:
    """Block header plus either transaction hashes or full transaction objects."""

    parent_hash: str
    timestamp: int
    gas_limit: int
    gas_used: int
    miner: str
    extra_data: str
    number: int | None = None
    hash: str | None = None
    nonce: str | None = None
    size: int | None = None
    transactions: tuple[str | TransactionObject, ...] = field(default_factory=tuple)

    @classmethod
    def from_json(cls, raw: Any) -> Block:
        raw = _require_object(raw, "block")
        txs: list[str | TransactionObject] = []
        for tx in raw.get("transactions", []):
            txs.append(TransactionObject.from_json(tx) if isinstance(tx, dict) else decode_data(tx))
        return cls(
            parent_hash=decode_data(raw["parentHash"]),
            timestamp=decode_quantity(raw["timestamp"]),
            gas_limit=decode_quantity(raw["gasLimit"]),
            gas_used=decode_quantity(raw["gasUsed"]),
            miner=decode_str(raw["miner"]),
            extra_data=decode_data(raw["extraData"]),
            number=optional_quantity(raw.get("number")),
            hash=raw.get("hash"),
            nonce=raw.get("nonce"),
            size=optional_quantity(raw.get("size")),
            transactions=tuple(txs),
        )
