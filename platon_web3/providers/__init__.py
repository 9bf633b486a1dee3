"""Transport providers."""
from .http import HttpProvider

__all__ = ["HttpProvider"]
