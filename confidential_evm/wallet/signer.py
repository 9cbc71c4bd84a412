"""Provider connections and signers handed to the confidential client."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from eth_account import Account
from eth_account.signers.local import LocalAccount
from loguru import logger
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.providers.async_base import AsyncBaseProvider


@dataclass(frozen=True)
class EvmSigner:
    """A local account bound to a web3 connection (ethers' Wallet + provider)."""

    account: LocalAccount
    web3: AsyncWeb3

    @property
    def address(self) -> str:
        return self.account.address


def connect_provider(descriptor: Any) -> AsyncWeb3:
    """
    Build a web3 connection from a provider descriptor.

    A URL becomes a JSON-RPC HTTP provider, an injected provider instance is
    wrapped directly and an AsyncWeb3 instance is returned as is.
    """
    if isinstance(descriptor, AsyncWeb3):
        return descriptor
    if isinstance(descriptor, str):
        logger.debug(f"Connecting JSON-RPC provider {descriptor}")
        return AsyncWeb3(AsyncHTTPProvider(descriptor))
    if isinstance(descriptor, AsyncBaseProvider):
        logger.debug(f"Wrapping injected provider {type(descriptor).__name__}")
        return AsyncWeb3(descriptor)
    raise TypeError(
        f"Unsupported provider descriptor: {type(descriptor).__name__}"
    )


@contextmanager
def scoped_key(private_key: bytes | bytearray) -> Iterator[bytearray]:
    """Copy key bytes into a buffer that is zeroed on exit."""
    buffer = bytearray(private_key)
    try:
        yield buffer
    finally:
        for i in range(len(buffer)):
            buffer[i] = 0


def build_signer(private_key: bytes | bytearray, web3: AsyncWeb3) -> EvmSigner:
    """Create the signer the client expects from raw private key bytes."""
    with scoped_key(private_key) as key:
        account = Account.from_key(key)
    return EvmSigner(account=account, web3=web3)
