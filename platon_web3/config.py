"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NetworkConfig:
    name: str = "testnet"
    chain_id: str = ""
    hrp: str = ""


@dataclass(frozen=True)
class ProviderConfig:
    rpc_endpoints: tuple[str, ...] = ()
    rpc_timeout: int = 30


@dataclass(frozen=True)
class ClientConfig:
    rpc_id: int = 1


@dataclass(frozen=True)
class AppConfig:
    network: NetworkConfig = field(default_factory=NetworkConfig)
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    client: ClientConfig = field(default_factory=ClientConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML -> dataclass builders
# ---------------------------------------------------------------------------


def _build_network(raw: dict[str, Any]) -> NetworkConfig:
    chain_id = raw.get("chain_id", "")
    return NetworkConfig(
        name=str(raw.get("name", "testnet")),
        chain_id="" if chain_id is None else str(chain_id),
        hrp=str(raw.get("hrp") or ""),
    )


def _build_provider(raw: dict[str, Any]) -> ProviderConfig:
    return ProviderConfig(
        rpc_endpoints=tuple(raw.get("rpc_endpoints", [])),
        rpc_timeout=int(raw.get("rpc_timeout", 30)),
    )


def _build_client(raw: dict[str, Any]) -> ClientConfig:
    return ClientConfig(rpc_id=int(raw.get("rpc_id", 1)))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate client configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root.
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        network=_build_network(raw.get("network", {})),
        provider=_build_provider(raw.get("provider", {})),
        client=_build_client(raw.get("client", {})),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    name = cfg.network.name.lower()
    if name not in ("mainnet", "testnet"):
        raise ValueError(f"Unknown network '{cfg.network.name}'")
    if name == "testnet" and not cfg.network.chain_id:
        raise ValueError("Network 'testnet' requires a chain_id")

    if not cfg.provider.rpc_endpoints:
        raise ValueError("At least one RPC endpoint must be configured")
    for endpoint in cfg.provider.rpc_endpoints:
        if not endpoint:
            raise ValueError("RPC endpoint is empty (unset environment variable?)")
    if cfg.provider.rpc_timeout <= 0:
        raise ValueError("rpc_timeout must be positive")

    if cfg.client.rpc_id < 0:
        raise ValueError("rpc_id must not be negative")
