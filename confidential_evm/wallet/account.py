"""
Wallet accounts consumed by the confidential protocol.

Two variants:
- ReadOnlyEvmAccount: an address, nothing to sign with
- EvmAccount: a private key (and so an address) plus an optional provider

The provider descriptor is a JSON-RPC URL, an AsyncBaseProvider instance or
an AsyncWeb3 instance. It is only turned into a connection by AccountAdapter.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from eth_account import Account
from eth_keys import keys
from web3 import Web3


@dataclass(frozen=True)
class KeyPair:
    """Raw signing key material of an EVM account."""

    public_key: bytes
    private_key: bytes = field(repr=False)


@runtime_checkable
class ReadOnlyAccount(Protocol):
    async def get_address(self) -> str: ...


@runtime_checkable
class SigningAccount(Protocol):
    key_pair: KeyPair
    provider: Any

    async def get_address(self) -> str: ...


def _key_bytes(private_key: bytes | bytearray | str) -> bytes:
    if isinstance(private_key, str):
        text = private_key[2:] if private_key[:2].lower() == "0x" else private_key
        return bytes.fromhex(text)
    return bytes(private_key)


class ReadOnlyEvmAccount:
    """Account known by address only."""

    def __init__(self, address: str, provider: Any = None):
        if not Web3.is_address(address):
            raise ValueError(f"Invalid EVM address: {address!r}")
        self._address = Web3.to_checksum_address(address)
        self.provider = provider

    async def get_address(self) -> str:
        return self._address

    @property
    def address(self) -> str:
        return self._address

    def __repr__(self) -> str:
        return f"ReadOnlyEvmAccount({self._address})"


class EvmAccount:
    """Account holding a private key; can sign through a provider."""

    def __init__(self, private_key: bytes | bytearray | str, provider: Any = None):
        key = _key_bytes(private_key)
        signer = Account.from_key(key)
        self.key_pair = KeyPair(
            public_key=keys.PrivateKey(key).public_key.to_bytes(),
            private_key=key,
        )
        self._address = signer.address
        self.provider = provider

    async def get_address(self) -> str:
        return self._address

    @property
    def address(self) -> str:
        return self._address

    def to_read_only(self) -> ReadOnlyEvmAccount:
        """Drop the key, keeping address and provider."""
        return ReadOnlyEvmAccount(self._address, provider=self.provider)

    def __repr__(self) -> str:
        return f"EvmAccount({self._address})"
