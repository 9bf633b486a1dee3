"""Integration tests for the HTTP provider — fallback, error mapping, client wiring."""
from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from platon_web3.client import Web3
from platon_web3.codec import decode_quantity
from platon_web3.config import ProviderConfig
from platon_web3.errors import ConnectionFailedError, DecodingError, ServerError
from platon_web3.models import RPCRequest
from platon_web3.providers.http import HttpProvider

REQUEST = RPCRequest(id=1, method="platon_blockNumber")


@pytest.fixture()
def provider() -> HttpProvider:
    return HttpProvider(
        ProviderConfig(
            rpc_endpoints=(
                "https://rpc1.example.com",
                "https://rpc2.example.com",
                "https://rpc3.example.com",
            ),
            rpc_timeout=5,
        )
    )


def _mock_response(data: dict | None = None, status: int = 200, error: Exception | None = None):
    mock_response = AsyncMock()
    mock_response.status = status
    if error:
        mock_response.json = AsyncMock(side_effect=error)
    else:
        mock_response.json = AsyncMock(return_value=data or {})
    mock_response.__aenter__ = AsyncMock(return_value=mock_response)
    mock_response.__aexit__ = AsyncMock(return_value=None)
    return mock_response


def _mock_session(
    response_data: dict | None = None,
    error: Exception | None = None,
    status: int = 200,
):
    """Create a mock aiohttp session that returns given data or raises error."""
    mock_session = AsyncMock()
    if error:
        mock_session.post = MagicMock(side_effect=error)
    else:
        mock_session.post = MagicMock(return_value=_mock_response(response_data, status))
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=None)
    return mock_session


class TestHttpProviderConstruction:
    def test_requires_endpoint(self) -> None:
        with pytest.raises(ValueError, match="at least one RPC endpoint"):
            HttpProvider(ProviderConfig(rpc_endpoints=()))


class TestSend:
    @pytest.mark.asyncio
    async def test_successful_call(self, provider: HttpProvider) -> None:
        mock_session = _mock_session({"jsonrpc": "2.0", "id": 1, "result": "0x2a"})

        with patch("platon_web3.providers.http.aiohttp.ClientSession", return_value=mock_session):
            with patch("platon_web3.providers.http.aiohttp.TCPConnector"):
                response = await provider.send(REQUEST, decode_quantity)

        assert response.result == 42
        assert response.id == 1
        posted = mock_session.post.call_args
        assert posted.args[0] == "https://rpc1.example.com"
        assert posted.kwargs["json"] == {
            "id": 1,
            "jsonrpc": "2.0",
            "method": "platon_blockNumber",
            "params": [],
        }

    @pytest.mark.asyncio
    async def test_rpc_error_not_retried(self, provider: HttpProvider) -> None:
        mock_session = _mock_session(
            {"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "bad"}}
        )

        with patch("platon_web3.providers.http.aiohttp.ClientSession", return_value=mock_session):
            with patch("platon_web3.providers.http.aiohttp.TCPConnector"):
                response = await provider.send(REQUEST, decode_quantity)

        assert isinstance(response.error, ServerError)
        assert response.error.message == "bad"
        assert mock_session.post.call_count == 1

    @pytest.mark.asyncio
    async def test_fallback_on_connection_error(self, provider: HttpProvider) -> None:
        """When first endpoint fails, should try the next one."""
        call_count = 0
        success_response = _mock_response({"jsonrpc": "2.0", "id": 1, "result": "0x1"})

        def side_effect(*args, **kwargs):
            nonlocal call_count
            call_count += 1
            if call_count == 1:
                raise aiohttp.ClientConnectionError("first endpoint down")
            return success_response

        mock_session = AsyncMock()
        mock_session.post = MagicMock(side_effect=side_effect)
        mock_session.__aenter__ = AsyncMock(return_value=mock_session)
        mock_session.__aexit__ = AsyncMock(return_value=None)

        with patch("platon_web3.providers.http.aiohttp.ClientSession", return_value=mock_session):
            with patch("platon_web3.providers.http.aiohttp.TCPConnector"):
                response = await provider.send(REQUEST, decode_quantity)

        assert response.result == 1
        assert provider.current_rpc_index == 1

    @pytest.mark.asyncio
    async def test_timeout_falls_back(self, provider: HttpProvider) -> None:
        mock_session = _mock_session(error=asyncio.TimeoutError())

        with patch("platon_web3.providers.http.aiohttp.ClientSession", return_value=mock_session):
            with patch("platon_web3.providers.http.aiohttp.TCPConnector"):
                response = await provider.send(REQUEST, decode_quantity)

        assert isinstance(response.error, ConnectionFailedError)
        assert mock_session.post.call_count == 3

    @pytest.mark.asyncio
    async def test_all_endpoints_fail(self, provider: HttpProvider) -> None:
        mock_session = _mock_session(error=ConnectionError("down"))

        with patch("platon_web3.providers.http.aiohttp.ClientSession", return_value=mock_session):
            with patch("platon_web3.providers.http.aiohttp.TCPConnector"):
                response = await provider.send(REQUEST, decode_quantity)

        assert isinstance(response.error, ConnectionFailedError)
        assert "All RPC endpoints failed" in str(response.error)
        assert isinstance(response.error.cause, ConnectionError)
        assert provider.current_rpc_index == 0

    @pytest.mark.asyncio
    async def test_http_error_status_falls_back(self, provider: HttpProvider) -> None:
        mock_session = _mock_session({}, status=502)

        with patch("platon_web3.providers.http.aiohttp.ClientSession", return_value=mock_session):
            with patch("platon_web3.providers.http.aiohttp.TCPConnector"):
                response = await provider.send(REQUEST, decode_quantity)

        assert isinstance(response.error, ConnectionFailedError)
        assert mock_session.post.call_count == 3

    @pytest.mark.asyncio
    async def test_non_json_body(self, provider: HttpProvider) -> None:
        mock_session = AsyncMock()
        mock_session.post = MagicMock(
            return_value=_mock_response(error=json.JSONDecodeError("Expecting value", "", 0))
        )
        mock_session.__aenter__ = AsyncMock(return_value=mock_session)
        mock_session.__aexit__ = AsyncMock(return_value=None)

        with patch("platon_web3.providers.http.aiohttp.ClientSession", return_value=mock_session):
            with patch("platon_web3.providers.http.aiohttp.TCPConnector"):
                response = await provider.send(REQUEST, decode_quantity)

        assert isinstance(response.error, DecodingError)

    @pytest.mark.asyncio
    async def test_id_mismatch(self, provider: HttpProvider) -> None:
        mock_session = _mock_session({"jsonrpc": "2.0", "id": 99, "result": "0x1"})

        with patch("platon_web3.providers.http.aiohttp.ClientSession", return_value=mock_session):
            with patch("platon_web3.providers.http.aiohttp.TCPConnector"):
                response = await provider.send(REQUEST, decode_quantity)

        assert isinstance(response.error, DecodingError)


class TestClientOverHttp:
    @pytest.mark.asyncio
    async def test_net_version(self, provider: HttpProvider) -> None:
        web3 = Web3(provider, 12, chain_id="100")
        mock_session = _mock_session({"jsonrpc": "2.0", "id": 12, "result": "100"})

        with patch("platon_web3.providers.http.aiohttp.ClientSession", return_value=mock_session):
            with patch("platon_web3.providers.http.aiohttp.TCPConnector"):
                response = await web3.net.version()

        assert response.result == "100"
        assert mock_session.post.call_args.kwargs["json"] == {
            "id": 12,
            "jsonrpc": "2.0",
            "method": "net_version",
            "params": [],
        }

    @pytest.mark.asyncio
    async def test_decode_failure_reported(self, provider: HttpProvider) -> None:
        web3 = Web3(provider, chain_id="100")
        mock_session = _mock_session({"jsonrpc": "2.0", "id": 1, "result": 100})

        with patch("platon_web3.providers.http.aiohttp.ClientSession", return_value=mock_session):
            with patch("platon_web3.providers.http.aiohttp.TCPConnector"):
                response = await web3.net.version()

        assert isinstance(response.error, DecodingError)

    @pytest.mark.asyncio
    async def test_non_object_block_not_retried(self, provider: HttpProvider) -> None:
        web3 = Web3(provider, chain_id="100")
        mock_session = _mock_session({"jsonrpc": "2.0", "id": 1, "result": "0x1234"})

        with patch("platon_web3.providers.http.aiohttp.ClientSession", return_value=mock_session):
            with patch("platon_web3.providers.http.aiohttp.TCPConnector"):
                response = await web3.platon.get_block_by_hash("0x" + "ab" * 32)

        assert isinstance(response.error, DecodingError)
        assert mock_session.post.call_count == 1

    @pytest.mark.asyncio
    async def test_concurrent_calls(self, provider: HttpProvider) -> None:
        web3 = Web3(provider, chain_id="100")
        mock_session = _mock_session({"jsonrpc": "2.0", "id": 1, "result": "100"})

        with patch("platon_web3.providers.http.aiohttp.ClientSession", return_value=mock_session):
            with patch("platon_web3.providers.http.aiohttp.TCPConnector"):
                responses = await asyncio.gather(*(web3.net.version() for _ in range(5)))

        assert [r.result for r in responses] == ["100"] * 5
        assert mock_session.post.call_count == 5
