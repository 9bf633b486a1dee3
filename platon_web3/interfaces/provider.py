"""Provider protocol — transport abstraction for RPC envelopes."""
from typing import Protocol, TypeVar

from ..codec import Decoder
from ..models import RPCRequest, RPCResponse

T = TypeVar("T")


class Provider(Protocol):
    """Performs one request/response exchange with a node.

    Returns exactly one response carrying the request's id. Transport failures
    are reported as failed responses, not raised.
    """

    async def send(self, request: RPCRequest, decode: Decoder[T]) -> RPCResponse[T]: ...
