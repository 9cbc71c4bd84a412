"""
Confidential protocol for EVM chains backed by a StableTrust client.

Two network shapes are offered as separate classes:
- StableTrustProtocolEvm: explicit settlement contract address,
  exposes get_public_balance and get_fee
- ConfidentialProtocolEvm: contract resolved by the client from the chain id,
  exposes quote_transfer_confidential

Every confidential operation is gated on enable_confidentiality() having
succeeded on the same instance. Gating, option checks and amount checks all
run before the client is contacted.
"""

import asyncio
import inspect
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any

from loguru import logger

from confidential_evm.client import (
    ClientFactory,
    ConfidentialTransferClient,
    create_client,
)
from confidential_evm.config import ConfidentialProtocolConfig, StableTrustConfig
from confidential_evm.errors import (
    BackendFailureError,
    ConfidentialError,
    InvalidAmountError,
    NotEnabledError,
)
from confidential_evm.models import (
    ConfidentialBalanceOptions,
    ConfidentialBalanceResult,
    ConfidentialKeys,
    ConfidentialResult,
    DepositConfidentialOptions,
    EnableConfidentialityOptions,
    FeeOptions,
    PublicBalanceOptions,
    QuoteTransferConfidentialOptions,
    TransferConfidentialOptions,
    WithdrawConfidentialOptions,
    coerce_options,
    result_field,
    to_amount,
    to_hex_string,
)
from confidential_evm.protocol.base import ConfidentialProtocol
from confidential_evm.wallet.adapter import AccountAdapter

# Fee and quote estimation is not implemented; see get_fee().
PLACEHOLDER_FEE = 0


class _EvmConfidentialProtocol(ConfidentialProtocol):
    """
    Shared state machine of the EVM implementations.

    Not safe for concurrent use: serialize calls per instance. The key pair
    is the only mutable state and is assigned once the client call returned.
    Separate instances share nothing.
    """

    config_type: type = object

    def __init__(
        self,
        account: Any,
        config: Any,
        client: ConfidentialTransferClient | None = None,
        client_factory: ClientFactory | None = None,
    ):
        if not isinstance(config, self.config_type):
            raise TypeError(
                f"{type(self).__name__} needs a {self.config_type.__name__}, "
                f"got {type(config).__name__}"
            )
        super().__init__(account)

        self._config = config
        self._signers = AccountAdapter(account)
        self._client = client if client is not None else create_client(config, client_factory)
        self._keys: ConfidentialKeys | None = None

    @property
    def config(self) -> Any:
        return self._config

    @property
    def is_enabled(self) -> bool:
        return self._keys is not None

    @property
    def keys(self) -> ConfidentialKeys | None:
        """Copy of the current confidential key pair, or None."""
        return replace(self._keys) if self._keys is not None else None

    # =========================================================================
    # Helpers
    # =========================================================================

    def _require_keys(self, operation: str) -> ConfidentialKeys:
        if self._keys is None:
            raise NotEnabledError(operation)
        return self._keys

    async def _call_client(
        self, operation: str, method: Callable[..., Any], *args: Any
    ) -> Any:
        try:
            if inspect.iscoroutinefunction(method):
                result = await method(*args)
            else:
                result = await asyncio.to_thread(method, *args)
            if inspect.isawaitable(result):
                result = await result
        except ConfidentialError:
            raise
        except Exception as e:
            raise BackendFailureError(operation, e) from e
        return result

    def _tx_result(self, operation: str, result: Any, token: str) -> ConfidentialResult:
        tx_hash = to_hex_string(result_field(result, operation, "hash"))
        logger.info(f"{operation} submitted for token {token}: {tx_hash}")
        return ConfidentialResult(hash=tx_hash)

    def _amount_result(self, operation: str, result: Any) -> int:
        if isinstance(result, Mapping) or hasattr(result, "amount"):
            result = result_field(result, operation, "amount")
        try:
            return to_amount(result)
        except InvalidAmountError as e:
            raise BackendFailureError(operation, e) from e

    # =========================================================================
    # Confidential operations
    # =========================================================================

    async def enable_confidentiality(self, options=None) -> ConfidentialKeys:
        """
        Create the confidential key pair and register it with the contract.

        Calling this again registers again and replaces the stored keys.
        """
        operation = "enable_confidentiality"
        coerce_options(options, EnableConfidentialityOptions)
        signer = self._signers.get_signer(operation)

        result = await self._call_client(operation, self._client.ensure_account, signer)
        keys = ConfidentialKeys(
            public_key=to_hex_string(
                result_field(result, operation, "public_key", "publicKey")
            ),
            private_key=to_hex_string(
                result_field(result, operation, "private_key", "privateKey")
            ),
        )
        self._keys = keys

        logger.info(f"Confidentiality enabled for {signer.address}")
        return replace(keys)

    async def deposit_confidential(self, options) -> ConfidentialResult:
        operation = "deposit_confidential"
        self._signers.require_signing(operation)
        self._require_keys(operation)
        opts = coerce_options(options, DepositConfidentialOptions)
        amount = to_amount(opts.amount)
        signer = self._signers.get_signer(operation)

        result = await self._call_client(
            operation, self._client.confidential_deposit, signer, opts.token, amount
        )
        return self._tx_result(operation, result, opts.token)

    async def transfer_confidential(self, options) -> ConfidentialResult:
        """The transferred amount never appears in the result or in logs."""
        operation = "transfer_confidential"
        self._signers.require_signing(operation)
        self._require_keys(operation)
        opts = coerce_options(options, TransferConfidentialOptions)
        amount = to_amount(opts.amount)
        signer = self._signers.get_signer(operation)

        result = await self._call_client(
            operation,
            self._client.confidential_transfer,
            signer,
            opts.recipient,
            opts.token,
            amount,
        )
        return self._tx_result(operation, result, opts.token)

    async def withdraw_confidential(self, options) -> ConfidentialResult:
        operation = "withdraw_confidential"
        self._signers.require_signing(operation)
        self._require_keys(operation)
        opts = coerce_options(options, WithdrawConfidentialOptions)
        amount = to_amount(opts.amount)
        signer = self._signers.get_signer(operation)

        result = await self._call_client(
            operation, self._client.withdraw, signer, opts.token, amount
        )
        return self._tx_result(operation, result, opts.token)

    async def get_confidential_balance(self, options) -> ConfidentialBalanceResult:
        operation = "get_confidential_balance"
        keys = self._require_keys(operation)
        opts = coerce_options(options, ConfidentialBalanceOptions)
        address = await self._signers.get_address()

        result = await self._call_client(
            operation,
            self._client.get_confidential_balance,
            address,
            keys.private_key,
            opts.token,
        )
        return ConfidentialBalanceResult(amount=self._amount_result(operation, result))


class StableTrustProtocolEvm(_EvmConfidentialProtocol):
    """Confidential protocol bound to an explicit StableTrust contract."""

    config_type = StableTrustConfig

    async def get_public_balance(self, options) -> int:
        """Public (non-confidential) token balance. Works for read-only accounts."""
        operation = "get_public_balance"
        opts = coerce_options(options, PublicBalanceOptions)
        address = await self._signers.get_address()

        result = await self._call_client(
            operation, self._client.get_public_balance, address, opts.token
        )
        return self._amount_result(operation, result)

    async def get_fee(self, options=None) -> int:
        """
        Placeholder fee estimate.

        Fee estimation is not implemented: this always returns
        PLACEHOLDER_FEE (0) and logs a warning. Do not present the value as
        a real quote.
        """
        coerce_options(options, FeeOptions)
        logger.warning("get_fee is not implemented, returning placeholder fee 0")
        return PLACEHOLDER_FEE


class ConfidentialProtocolEvm(_EvmConfidentialProtocol):
    """Confidential protocol whose contract is resolved from the chain id."""

    config_type = ConfidentialProtocolConfig

    async def quote_transfer_confidential(self, options=None) -> int:
        """
        Placeholder transfer quote.

        Quoting is not implemented: this always returns PLACEHOLDER_FEE (0)
        and logs a warning. Do not present the value as a real quote.
        """
        coerce_options(options, QuoteTransferConfidentialOptions)
        logger.warning(
            "quote_transfer_confidential is not implemented, returning placeholder 0"
        )
        return PLACEHOLDER_FEE
