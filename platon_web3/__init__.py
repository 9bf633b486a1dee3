"""Typed JSON-RPC client for PlatON nodes."""
from .addresses import Bech32AddressEncoder, ContractAddresses
from .client import ClientContext, Net, Platon, Web3
from .errors import (
    AddressEncodingError,
    ClientConstructionError,
    ConnectionFailedError,
    DecodingError,
    EmptyResponseError,
    RequestFailedError,
    RPCError,
    ServerError,
)
from .models import Call, RPCRequest, RPCResponse, Transaction
from .network import MainNet, NetworkParameter, TestNet

__all__ = [
    "AddressEncodingError",
    "Bech32AddressEncoder",
    "Call",
    "ClientConstructionError",
    "ClientContext",
    "ConnectionFailedError",
    "ContractAddresses",
    "DecodingError",
    "EmptyResponseError",
    "MainNet",
    "Net",
    "NetworkParameter",
    "Platon",
    "RPCError",
    "RPCRequest",
    "RPCResponse",
    "RequestFailedError",
    "ServerError",
    "TestNet",
    "Transaction",
    "Web3",
]
