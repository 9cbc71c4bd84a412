"""
Confidential transfer client interface and resolution.

The client performs the actual encryption, proof generation and contract
calls. This package only consumes it: a client is injected, built by a
factory, or imported from the dotted path in CONFIDENTIAL_CLIENT
("package.module:ClassName").
"""

import importlib
import os
from collections.abc import Callable
from typing import Any, Protocol

from loguru import logger

from confidential_evm.config import ENV_CLIENT
from confidential_evm.errors import ConfigError


class ConfidentialTransferClient(Protocol):
    """
    Operations the adapter expects from a confidential transfer client.

    Methods may be coroutines or plain functions. Results may be mappings or
    objects exposing the documented fields.
    """

    def ensure_account(self, signer: Any) -> Any:
        """Derive confidential keys and register the public key on-chain.

        Returns {public_key, private_key}.
        """

    def confidential_deposit(self, signer: Any, token: str, amount: int) -> Any:
        """Returns {hash}."""

    def confidential_transfer(
        self, signer: Any, recipient: str, token: str, amount: int
    ) -> Any:
        """Returns {hash}."""

    def withdraw(self, signer: Any, token: str, amount: int) -> Any:
        """Returns {hash}."""

    def get_confidential_balance(self, address: str, private_key: str, token: str) -> Any:
        """Returns {amount}."""

    def get_public_balance(self, address: str, token: str) -> Any:
        """Returns the amount."""


ClientFactory = Callable[..., ConfidentialTransferClient]


def load_client_factory(path: str) -> ClientFactory:
    """
    Import a client class or factory from "package.module:attribute".

    Raises:
        ConfigError: If the path is malformed or cannot be imported.
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigError(f"Client path must look like 'package.module:Name', got {path!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot import confidential client module {module_name!r}: {e}") from e

    factory = getattr(module, attr, None)
    if not callable(factory):
        raise ConfigError(f"{path!r} is not a callable client factory")
    return factory


def create_client(
    config: Any,
    client_factory: ClientFactory | None = None,
) -> ConfidentialTransferClient:
    """Build a client bound to a protocol config."""
    if client_factory is None:
        path = os.getenv(ENV_CLIENT)
        if not path:
            raise ConfigError(
                "No confidential transfer client configured. "
                f"Pass client= or client_factory=, or set {ENV_CLIENT}."
            )
        client_factory = load_client_factory(path)
        logger.debug(f"Resolved confidential client from {path}")

    return client_factory(**config.client_kwargs())
