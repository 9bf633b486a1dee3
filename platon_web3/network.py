"""Network parameters — which PlatON network a client talks to."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

MAINNET_CHAIN_ID = "201018"
UNIT = "ATP"
COIN_CODE = 206


@dataclass(frozen=True)
class MainNet:
    """The production network."""

    @property
    def chain_id(self) -> str:
        return MAINNET_CHAIN_ID

    @property
    def unit(self) -> str:
        return UNIT

    @property
    def addr_prefix(self) -> str:
        return "atp"

    @property
    def coin_code(self) -> int:
        return COIN_CODE


@dataclass(frozen=True)
class TestNet:
    """A named test network identified by its chain id."""

    __test__ = False  # keep pytest from collecting this as a test class

    chain_id: str

    def __post_init__(self) -> None:
        if not self.chain_id:
            raise ValueError("TestNet requires a non-empty chain id")

    @property
    def unit(self) -> str:
        return UNIT

    @property
    def addr_prefix(self) -> str:
        return "atx"

    @property
    def coin_code(self) -> int:
        return COIN_CODE


NetworkParameter = Union[MainNet, TestNet]


def network_from_name(name: str, chain_id: str | None = None) -> NetworkParameter:
    """Resolve a configured network name ("mainnet" / "testnet")."""
    key = name.strip().lower()
    if key == "mainnet":
        return MainNet()
    if key == "testnet":
        if not chain_id:
            raise ValueError("Network 'testnet' requires a chain_id")
        return TestNet(chain_id)
    raise ValueError(f"Unknown network '{name}'")
