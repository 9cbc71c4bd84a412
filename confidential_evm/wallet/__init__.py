"""Wallet accounts, signers and the local keystore."""

from confidential_evm.wallet.account import (
    EvmAccount,
    KeyPair,
    ReadOnlyAccount,
    ReadOnlyEvmAccount,
    SigningAccount,
)
from confidential_evm.wallet.adapter import AccountAdapter
from confidential_evm.wallet.encryption import encrypt_private_key, decrypt_private_key
from confidential_evm.wallet.signer import EvmSigner, build_signer, connect_provider
from confidential_evm.wallet.storage import WalletStorage

__all__ = [
    "EvmAccount",
    "KeyPair",
    "ReadOnlyAccount",
    "ReadOnlyEvmAccount",
    "SigningAccount",
    "AccountAdapter",
    "encrypt_private_key",
    "decrypt_private_key",
    "EvmSigner",
    "build_signer",
    "connect_provider",
    "WalletStorage",
]
