"""System contract addresses rendered in the chain's bech32 display format."""
from __future__ import annotations

import logging
from dataclasses import dataclass

import bech32  # type: ignore

from .errors import AddressEncodingError
from .interfaces.address_encoder import AddressEncoder

logger = logging.getLogger(__name__)

ADDRESS_LENGTH = 20

# Raw system contract addresses, fixed by the chain.
RESTRICTING_CONTRACT = bytes.fromhex("1000000000000000000000000000000000000001")
STAKING_CONTRACT = bytes.fromhex("1000000000000000000000000000000000000002")
SLASH_CONTRACT = bytes.fromhex("1000000000000000000000000000000000000004")
PROPOSAL_CONTRACT = bytes.fromhex("1000000000000000000000000000000000000005")
REWARD_CONTRACT = bytes.fromhex("1000000000000000000000000000000000000006")


class Bech32AddressEncoder:
    """Bech32 encoding of 20-byte addresses."""

    def encode(self, hrp: str, raw: bytes) -> str:
        _check_hrp(hrp)
        if len(raw) != ADDRESS_LENGTH:
            raise AddressEncodingError(
                f"Address must be {ADDRESS_LENGTH} bytes, got {len(raw)}"
            )

        words = bech32.convertbits(raw, 8, 5)
        if words is None:
            raise AddressEncodingError("Error converting to bech32 words")

        address = bech32.bech32_encode(hrp, words)
        decoded_hrp, _ = bech32.bech32_decode(address)
        if decoded_hrp is None:
            raise AddressEncodingError(f"Prefix '{hrp}' does not produce a valid address")
        return address


def _check_hrp(hrp: str) -> None:
    if not hrp:
        raise AddressEncodingError("Address prefix is empty")
    if any(ord(c) < 33 or ord(c) > 126 for c in hrp):
        raise AddressEncodingError(f"Address prefix '{hrp}' has invalid characters")
    if hrp.lower() != hrp and hrp.upper() != hrp:
        raise AddressEncodingError(f"Address prefix '{hrp}' mixes upper and lower case")


def decode_address(address: str) -> tuple[str, bytes]:
    """Decode a bech32 address to ``(hrp, raw_bytes)``."""
    hrp, data = bech32.bech32_decode(address)
    if hrp is None or data is None:
        raise AddressEncodingError(f"Invalid bech32 address: {address}")

    decoded = bech32.convertbits(data, 5, 8, False)
    if decoded is None:
        raise AddressEncodingError("Error converting from bech32 words")
    return hrp, bytes(decoded)


@dataclass(frozen=True)
class ContractAddresses:
    """Display addresses of the system contracts for one prefix."""

    staking: str
    proposal: str
    slash: str
    restricting: str
    reward: str


def derive_contract_addresses(hrp: str, encoder: AddressEncoder) -> ContractAddresses:
    """Encode every system contract address; any failure propagates."""
    addresses = ContractAddresses(
        staking=encoder.encode(hrp, STAKING_CONTRACT),
        proposal=encoder.encode(hrp, PROPOSAL_CONTRACT),
        slash=encoder.encode(hrp, SLASH_CONTRACT),
        restricting=encoder.encode(hrp, RESTRICTING_CONTRACT),
        reward=encoder.encode(hrp, REWARD_CONTRACT),
    )
    logger.debug("Derived system contract addresses for prefix '%s'", hrp)
    return addresses
