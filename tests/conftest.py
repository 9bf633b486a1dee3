"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any

import pytest

from platon_web3.client import ClientContext, Web3
from platon_web3.codec import Decoder
from platon_web3.config import AppConfig, ClientConfig, NetworkConfig, ProviderConfig
from platon_web3.models import RPCRequest, RPCResponse


# ---------------------------------------------------------------------------
# Provider test double
# ---------------------------------------------------------------------------


class MockProvider:
    """Records every request and answers with a canned JSON-RPC payload."""

    def __init__(
        self,
        result: Any = None,
        error: dict[str, Any] | None = None,
        payload: dict[str, Any] | None = None,
        raises: Exception | None = None,
    ) -> None:
        self.result = result
        self.error = error
        self.payload = payload
        self.raises = raises
        self.requests: list[RPCRequest] = []

    async def send(self, request: RPCRequest, decode: Decoder[Any]) -> RPCResponse[Any]:
        self.requests.append(request)
        if self.raises is not None:
            raise self.raises

        payload = self.payload
        if payload is None:
            payload = {"jsonrpc": "2.0", "id": request.id}
            if self.error is not None:
                payload["error"] = self.error
            else:
                payload["result"] = self.result
        return RPCResponse.from_payload(request, payload, decode)


@pytest.fixture()
def provider() -> MockProvider:
    return MockProvider()


@pytest.fixture()
def context(provider: MockProvider) -> ClientContext:
    return ClientContext(provider=provider, rpc_id=7, chain_id="100", hrp="atx")


@pytest.fixture()
def web3(provider: MockProvider) -> Web3:
    return Web3(provider, 7, chain_id="100")


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_provider_config() -> ProviderConfig:
    return ProviderConfig(
        rpc_endpoints=("https://rpc1.example.com", "https://rpc2.example.com"),
        rpc_timeout=10,
    )


@pytest.fixture()
def sample_app_config(sample_provider_config: ProviderConfig) -> AppConfig:
    return AppConfig(
        network=NetworkConfig(name="testnet", chain_id="201030", hrp=""),
        provider=sample_provider_config,
        client=ClientConfig(rpc_id=3),
    )


SAMPLE_YAML = textwrap.dedent("""\
    network:
      name: testnet
      chain_id: "201030"
      hrp: lat
    provider:
      rpc_endpoints: ["https://rpc.example.com"]
      rpc_timeout: 10
    client:
      rpc_id: 5
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Sample node data
# ---------------------------------------------------------------------------

TX_HASH = "0x" + "ab" * 32
BLOCK_HASH = "0x" + "cd" * 32


@pytest.fixture()
def sample_transaction_json() -> dict[str, Any]:
    return {
        "hash": TX_HASH,
        "nonce": "0x1",
        "from": "atx1qqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqq",
        "to": None,
        "value": "0xde0b6b3a7640000",
        "gas": "0x5208",
        "gasPrice": "0x3b9aca00",
        "input": "0x",
        "blockHash": BLOCK_HASH,
        "blockNumber": "0x10",
        "transactionIndex": "0x0",
    }


@pytest.fixture()
def sample_receipt_json() -> dict[str, Any]:
    return {
        "transactionHash": TX_HASH,
        "transactionIndex": "0x0",
        "blockHash": BLOCK_HASH,
        "blockNumber": "0x10",
        "cumulativeGasUsed": "0x5208",
        "gasUsed": "0x5208",
        "contractAddress": None,
        "logs": [
            {
                "address": "atx1zqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqq",
                "topics": ["0x" + "11" * 32],
                "data": "0x",
                "blockNumber": "0x10",
                "logIndex": "0x0",
                "removed": False,
            }
        ],
        "logsBloom": "0x" + "00" * 256,
        "status": "0x1",
    }


@pytest.fixture()
def sample_block_json(sample_transaction_json: dict[str, Any]) -> dict[str, Any]:
    return {
        "number": "0x10",
        "hash": BLOCK_HASH,
        "parentHash": "0x" + "ef" * 32,
        "nonce": "0x" + "00" * 8,
        "timestamp": "0x5f5e100",
        "gasLimit": "0x47b760",
        "gasUsed": "0x5208",
        "miner": "atx1qqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqq",
        "extraData": "0x",
        "size": "0x200",
        "transactions": [sample_transaction_json],
    }


@pytest.fixture()
def make_provider() -> type[MockProvider]:
    return MockProvider
