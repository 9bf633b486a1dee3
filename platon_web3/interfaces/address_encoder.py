"""Address encoder protocol — raw address to display address."""
from typing import Protocol


class AddressEncoder(Protocol):
    """Renders a raw address with a human-readable prefix.

    Raises ``AddressEncodingError`` when the prefix or address is invalid.
    """

    def encode(self, hrp: str, raw: bytes) -> str: ...
