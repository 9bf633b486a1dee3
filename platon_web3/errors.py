"""Error taxonomy.

Per-call errors are carried as values inside a failed ``RPCResponse``; they are
exceptions only so that ``RPCResponse.unwrap()`` can raise them. Construction
errors are raised directly.
"""
from __future__ import annotations

from typing import Any


class RPCError(Exception):
    """Base class for every per-call failure."""

    def __init__(self, message: str = "", cause: BaseException | None = None) -> None:
        super().__init__(message or self.__class__.__name__)
        self.cause = cause

    def __eq__(self, other: object) -> bool:
        return (
            type(self) is type(other)
            and self.args == other.args  # type: ignore[attr-defined]
        )

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class RequestFailedError(RPCError):
    """A local precondition failed; nothing was sent."""


class ConnectionFailedError(RPCError):
    """The transport could not complete the exchange."""


class ServerError(RPCError):
    """The node answered with a JSON-RPC error object."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        super().__init__(f"RPC error {code}: {message}")
        self.code = code
        self.message = message
        self.data = data


class DecodingError(RPCError):
    """The response does not match the expected result type."""


class EmptyResponseError(RPCError):
    """The response carried neither a result nor an error."""


class AddressEncodingError(ValueError):
    """A raw address could not be rendered with the given prefix."""


class ClientConstructionError(RuntimeError):
    """The client could not be built."""
