"""HTTP JSON-RPC provider with endpoint fallback."""
from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any, TypeVar

import aiohttp
import certifi

from ..codec import Decoder
from ..config import ProviderConfig
from ..errors import ConnectionFailedError, DecodingError
from ..models import RPCRequest, RPCResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HttpProvider:
    """Posts one envelope per call, trying each configured endpoint in turn.

    Only transport failures move on to the next endpoint. A JSON-RPC error from
    a node is an answer and is returned as-is.
    """

    def __init__(self, config: ProviderConfig) -> None:
        if not config.rpc_endpoints:
            raise ValueError("HttpProvider needs at least one RPC endpoint")
        self.endpoints = list(config.rpc_endpoints)
        self.timeout = config.rpc_timeout
        self.current_rpc_index = 0

    async def send(self, request: RPCRequest, decode: Decoder[T]) -> RPCResponse[T]:
        payload = request.to_dict()
        ssl_context = ssl.create_default_context(cafile=certifi.where())

        last_error: Exception | None = None
        for attempt in range(len(self.endpoints)):
            rpc_index = (self.current_rpc_index + attempt) % len(self.endpoints)
            rpc_url = self.endpoints[rpc_index]

            try:
                body = await self._post(rpc_url, payload, ssl_context)
            except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
                last_error = e
                logger.warning("RPC endpoint %s failed: %s", rpc_url, e)
                if attempt < len(self.endpoints) - 1:
                    logger.info("Trying next endpoint...")
                continue
            except ValueError as e:
                return RPCResponse.failure(
                    request.id, DecodingError(f"Response from {rpc_url} is not JSON", e)
                )

            if rpc_index != self.current_rpc_index:
                logger.info("Switched to RPC endpoint: %s", rpc_url)
                self.current_rpc_index = rpc_index

            return RPCResponse.from_payload(request, body, decode)

        return RPCResponse.failure(
            request.id,
            ConnectionFailedError(
                f"All RPC endpoints failed. Last error: {last_error}", last_error
            ),
        )

    async def _post(
        self, rpc_url: str, payload: dict[str, Any], ssl_context: ssl.SSLContext
    ) -> Any:
        connector = aiohttp.TCPConnector(ssl=ssl_context)
        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.post(
                rpc_url,
                json=payload,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if response.status >= 400:
                    raise aiohttp.ClientResponseError(
                        response.request_info,
                        response.history,
                        status=response.status,
                        message=f"HTTP {response.status}",
                    )
                return await response.json(content_type=None)
