"""Network constants and protocol configuration."""

import os
from dataclasses import dataclass
from typing import Any

from web3 import Web3

from confidential_evm.errors import ConfigError

# =============================================================================
# Stable testnet
# =============================================================================

STABLE_TESTNET_RPC_URL = "https://rpc.testnet.stable.xyz"
STABLE_TESTNET_CHAIN_ID = 2201
STABLE_TESTNET_EXPLORER_URL = "https://testnet.stablescan.xyz/tx/"

# USDT0 on Stable testnet (2 decimals in the demo flow)
USDT0_TESTNET_ADDRESS = "0x78Cf24370174180738C5B8E352B6D14c83a6c9A9"
USDT0_DECIMALS = 2

# =============================================================================
# Environment variables
# =============================================================================

ENV_RPC_URL = "CONFIDENTIAL_RPC_URL"
ENV_CHAIN_ID = "CONFIDENTIAL_CHAIN_ID"
ENV_STABLE_TRUST = "STABLE_TRUST_ADDRESS"
ENV_CLIENT = "CONFIDENTIAL_CLIENT"

RPC_URL_SCHEMES = ("http://", "https://", "ws://", "wss://")


def _validate_network(rpc_url: Any, chain_id: Any) -> None:
    if not isinstance(rpc_url, str) or not rpc_url.startswith(RPC_URL_SCHEMES):
        raise ConfigError(f"rpc_url must be an http(s) or ws(s) URL, got {rpc_url!r}")
    if isinstance(chain_id, bool) or not isinstance(chain_id, int) or chain_id <= 0:
        raise ConfigError(f"chain_id must be a positive integer, got {chain_id!r}")


def _env_chain_id() -> int:
    raw = os.getenv(ENV_CHAIN_ID)
    if raw is None:
        return STABLE_TESTNET_CHAIN_ID
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{ENV_CHAIN_ID} must be an integer, got {raw!r}") from None


# =============================================================================
# Protocol configs
# =============================================================================


@dataclass(frozen=True)
class StableTrustConfig:
    """
    Network binding with an explicit StableTrust settlement contract.

    Used by StableTrustProtocolEvm (get_public_balance + get_fee).
    """

    rpc_url: str
    chain_id: int
    stable_trust: str

    def __post_init__(self):
        _validate_network(self.rpc_url, self.chain_id)
        if not isinstance(self.stable_trust, str) or not Web3.is_address(self.stable_trust):
            raise ConfigError(
                f"stable_trust must be a contract address, got {self.stable_trust!r}"
            )
        object.__setattr__(
            self, "stable_trust", Web3.to_checksum_address(self.stable_trust)
        )

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for the confidential transfer client factory."""
        return {
            "rpc_url": self.rpc_url,
            "chain_id": self.chain_id,
            "contract_address": self.stable_trust,
        }

    @classmethod
    def from_env(cls) -> "StableTrustConfig":
        stable_trust = os.getenv(ENV_STABLE_TRUST)
        if not stable_trust:
            raise ConfigError(f"{ENV_STABLE_TRUST} environment variable not set")
        return cls(
            rpc_url=os.getenv(ENV_RPC_URL, STABLE_TESTNET_RPC_URL),
            chain_id=_env_chain_id(),
            stable_trust=stable_trust,
        )


@dataclass(frozen=True)
class ConfidentialProtocolConfig:
    """
    Network binding where the client resolves the contract from the chain id.

    Used by ConfidentialProtocolEvm (quote_transfer_confidential).
    """

    rpc_url: str
    chain_id: int

    def __post_init__(self):
        _validate_network(self.rpc_url, self.chain_id)

    def client_kwargs(self) -> dict[str, Any]:
        return {"rpc_url": self.rpc_url, "chain_id": self.chain_id}

    @classmethod
    def from_env(cls) -> "ConfidentialProtocolConfig":
        return cls(
            rpc_url=os.getenv(ENV_RPC_URL, STABLE_TESTNET_RPC_URL),
            chain_id=_env_chain_id(),
        )
