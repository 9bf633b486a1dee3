"""Envelope construction and hand-off to the provider."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from .errors import ConnectionFailedError, RequestFailedError
from .methods import RPCMethod
from .models import RPCRequest, RPCResponse

if TYPE_CHECKING:
    from .client import ClientContext

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_request(
    context: ClientContext, method: RPCMethod[Any], params: tuple[Any, ...]
) -> RPCRequest:
    return RPCRequest(
        id=context.rpc_id,
        jsonrpc=context.jsonrpc,
        method=method.name,
        params=params,
    )


async def dispatch(
    context: ClientContext, method: RPCMethod[T], params: tuple[Any, ...] = ()
) -> RPCResponse[T]:
    """Send ``method`` with positional ``params`` and return its single response."""
    request = build_request(context, method, params)
    try:
        # encoding check only; providers serialise the request for the wire
        request.to_dict()
    except (ValueError, TypeError) as e:
        return reject(context, method, f"Invalid parameter: {e}")

    logger.debug("-> %s id=%s params=%s", request.method, request.id, len(request.params))

    try:
        response = await context.provider.send(request, method.decode)
    except Exception as e:
        logger.warning("Provider raised on %s: %s", request.method, e)
        return RPCResponse.failure(request.id, ConnectionFailedError(str(e), e))

    if response.error is not None:
        logger.warning("%s failed: %s", request.method, response.error)
    return response


def reject(context: ClientContext, method: RPCMethod[T], reason: str) -> RPCResponse[T]:
    """Fail a call locally; nothing reaches the provider."""
    logger.warning("%s rejected: %s", method.name, reason)
    return RPCResponse.failure(context.rpc_id, RequestFailedError(reason))
