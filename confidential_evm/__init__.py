"""
Confidential token operations for EVM wallet accounts.

Usage:
    from confidential_evm import (
        ConfidentialProtocolConfig,
        ConfidentialProtocolEvm,
        EvmAccount,
    )

    account = EvmAccount(private_key, provider="https://rpc.testnet.stable.xyz")
    protocol = ConfidentialProtocolEvm(account, ConfidentialProtocolConfig.from_env())

    await protocol.enable_confidentiality()
    await protocol.deposit_confidential({"token": token, "amount": 100})
    balance = await protocol.get_confidential_balance({"token": token})
"""

from confidential_evm.client import ConfidentialTransferClient, create_client, load_client_factory
from confidential_evm.config import ConfidentialProtocolConfig, StableTrustConfig
from confidential_evm.errors import (
    BackendFailureError,
    ConfidentialError,
    ConfidentialNotImplementedError,
    ConfigError,
    InvalidAmountError,
    NotConnectedError,
    NotEnabledError,
    UnsupportedOperationError,
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
)
from confidential_evm.protocol import (
    PLACEHOLDER_FEE,
    ConfidentialProtocol,
    ConfidentialProtocolEvm,
    StableTrustProtocolEvm,
)
from confidential_evm.wallet import EvmAccount, ReadOnlyEvmAccount, WalletStorage

__version__ = "0.1.0"

__all__ = [
    "ConfidentialTransferClient",
    "create_client",
    "load_client_factory",
    "ConfidentialProtocolConfig",
    "StableTrustConfig",
    "BackendFailureError",
    "ConfidentialError",
    "ConfidentialNotImplementedError",
    "ConfigError",
    "InvalidAmountError",
    "NotConnectedError",
    "NotEnabledError",
    "UnsupportedOperationError",
    "ConfidentialBalanceOptions",
    "ConfidentialBalanceResult",
    "ConfidentialKeys",
    "ConfidentialResult",
    "DepositConfidentialOptions",
    "EnableConfidentialityOptions",
    "FeeOptions",
    "PublicBalanceOptions",
    "QuoteTransferConfidentialOptions",
    "TransferConfidentialOptions",
    "WithdrawConfidentialOptions",
    "PLACEHOLDER_FEE",
    "ConfidentialProtocol",
    "ConfidentialProtocolEvm",
    "StableTrustProtocolEvm",
    "EvmAccount",
    "ReadOnlyEvmAccount",
    "WalletStorage",
]
