"""Command-line interface for querying a PlatON node."""
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any

from .client import Web3
from .config import AppConfig, load_config
from .logging_setup import configure_logging
from .models import RPCResponse
from .network import network_from_name
from .providers import HttpProvider


def build_client(config: AppConfig) -> Web3:
    """Wire an HTTP provider and a client from configuration."""
    network = network_from_name(config.network.name, config.network.chain_id or None)
    provider = HttpProvider(config.provider)
    return Web3(
        provider,
        config.client.rpc_id,
        chain_id=network.chain_id,
        hrp=config.network.hrp or network.addr_prefix,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="platon-web3",
        description="Query a PlatON node over JSON-RPC",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("client-version", help="Node client version")
    sub.add_parser("version", help="Network id reported by the node")
    sub.add_parser("peer-count", help="Connected peer count")
    sub.add_parser("block-number", help="Latest block number")
    sub.add_parser("gas-price", help="Current gas price")
    sub.add_parser("contracts", help="Derived system contract addresses")

    balance_parser = sub.add_parser("balance", help="Balance of an address")
    balance_parser.add_argument("address")
    balance_parser.add_argument(
        "--block",
        default="latest",
        type=_parse_block,
        help="Block number or tag (latest, earliest, pending)",
    )

    receipt_parser = sub.add_parser("receipt", help="Transaction receipt by hash")
    receipt_parser.add_argument("tx_hash")

    return parser


def _parse_block(value: str) -> int | str:
    if not value[:1].isdigit():
        return value
    try:
        return int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid block number: {value!r}") from None


def _print(response: RPCResponse[Any]) -> int:
    if response.error is not None:
        print(f"Error: {response.error}", file=sys.stderr)
        return 1
    print(response.result)
    return 0


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    web3 = build_client(config)

    if args.command == "contracts":
        for name, address in vars(web3.contract_addresses).items():
            print(f"{name:<12} {address}")
        return 0
    if args.command == "client-version":
        return _print(await web3.client_version())
    if args.command == "version":
        return _print(await web3.net.version())
    if args.command == "peer-count":
        return _print(await web3.net.peer_count())
    if args.command == "block-number":
        return _print(await web3.platon.block_number())
    if args.command == "gas-price":
        return _print(await web3.platon.gas_price())
    if args.command == "balance":
        return _print(await web3.platon.get_balance(args.address, args.block))
    if args.command == "receipt":
        return _print(await web3.platon.get_transaction_receipt(args.tx_hash))

    build_parser().print_help()
    return 1


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))
