"""Capability interfaces consumed by the client."""
from .address_encoder import AddressEncoder
from .provider import Provider

__all__ = ["AddressEncoder", "Provider"]
