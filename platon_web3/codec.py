"""Wire value encoding and result decoders."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, TypeVar, Union

T = TypeVar("T")

Decoder = Callable[[Any], T]
BlockTag = Union[int, str]

BLOCK_TAGS = ("latest", "earliest", "pending")

_HEX_RE = re.compile(r"^0x[0-9a-fA-F]*$")


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def encode_quantity(value: int) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Quantity must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Quantity must be non-negative, got {value}")
    return hex(value)


def encode_block(block: BlockTag) -> str:
    """Encode a block number or one of the named block tags."""
    if isinstance(block, str):
        if block not in BLOCK_TAGS:
            raise ValueError(f"Unknown block tag '{block}'")
        return block
    return encode_quantity(block)


def encode_data(value: bytes | str) -> str:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if not _HEX_RE.match(value) or len(value) % 2:
        raise ValueError(f"Not a 0x-prefixed even-length hex string: {value!r}")
    return value


@dataclass(frozen=True)
class QuantityParam:
    value: int

    def to_json(self) -> str:
        return encode_quantity(self.value)


@dataclass(frozen=True)
class BlockParam:
    block: BlockTag = "latest"

    def to_json(self) -> str:
        return encode_block(self.block)


@dataclass(frozen=True)
class DataParam:
    value: bytes | str

    def to_json(self) -> str:
        return encode_data(self.value)


def to_json(value: Any) -> Any:
    """Convert a request parameter into its JSON-ready form."""
    if hasattr(value, "to_json"):
        return value.to_json()
    if isinstance(value, (bytes, bytearray)):
        return encode_data(value)
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode_str(raw: Any) -> str:
    if not isinstance(raw, str):
        raise TypeError(f"Expected string, got {type(raw).__name__}")
    return raw


def decode_bool(raw: Any) -> bool:
    if not isinstance(raw, bool):
        raise TypeError(f"Expected bool, got {type(raw).__name__}")
    return raw


def decode_quantity(raw: Any) -> int:
    if isinstance(raw, bool):
        raise TypeError("Expected quantity, got bool")
    if isinstance(raw, int):
        return raw
    if not isinstance(raw, str) or not raw.startswith("0x") or len(raw) < 3:
        raise ValueError(f"Invalid quantity: {raw!r}")
    return int(raw, 16)


def decode_data(raw: Any) -> str:
    value = decode_str(raw)
    if not _HEX_RE.match(value):
        raise ValueError(f"Invalid hex data: {value!r}")
    return value


def optional(decode: Decoder[T]) -> Decoder[T | None]:
    """Wrap a decoder so that JSON ``null`` decodes to ``None``."""

    def _decode(raw: Any) -> T | None:
        if raw is None:
            return None
        return decode(raw)

    return _decode


def list_of(decode: Decoder[T]) -> Decoder[list[T]]:
    def _decode(raw: Any) -> list[T]:
        if not isinstance(raw, list):
            raise TypeError(f"Expected list, got {type(raw).__name__}")
        return [decode(item) for item in raw]

    return _decode


def optional_quantity(raw: Any) -> int | None:
    return None if raw is None else decode_quantity(raw)
