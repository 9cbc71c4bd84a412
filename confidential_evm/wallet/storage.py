"""
Encrypted JSON keystore for the signing account.

File layout:
    {
        "address": "0x...",
        "encrypted_key": "<base64 nonce+ciphertext>",
        "salt": "<base64>",
        "kdf_iterations": 100000
    }

The address is stored in clear so read-only commands work without the
password.
"""

import json
import os
from pathlib import Path
from typing import Any

from loguru import logger

from confidential_evm.errors import ConfigError
from confidential_evm.wallet.account import EvmAccount, ReadOnlyEvmAccount
from confidential_evm.wallet.encryption import (
    KDF_ITERATIONS,
    decrypt_private_key,
    encrypt_private_key,
)

DEFAULT_WALLET_PATH = Path(".wallet.local.json")


class WalletStorage:
    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else DEFAULT_WALLET_PATH

    def exists(self) -> bool:
        return self.path.exists()

    def _read(self) -> dict:
        if not self.path.exists():
            raise ConfigError(f"No keystore at {self.path}. Run: confidential-evm import-key")
        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigError(f"Unreadable keystore {self.path}: {e}") from e
        missing = {"address", "encrypted_key", "salt"} - data.keys()
        if missing:
            raise ConfigError(f"Keystore {self.path} is missing {sorted(missing)}")
        return data

    def address(self) -> str:
        return self._read()["address"]

    def save(self, private_key: bytes | str, password: str) -> str:
        """Encrypt and write the key. Returns the account address."""
        account = EvmAccount(private_key)
        address = account.address
        encrypted, salt = encrypt_private_key(
            account.key_pair.private_key, password, address
        )

        self.path.write_text(
            json.dumps(
                {
                    "address": address,
                    "encrypted_key": encrypted,
                    "salt": salt,
                    "kdf_iterations": KDF_ITERATIONS,
                },
                indent=2,
            )
        )
        os.chmod(self.path, 0o600)
        logger.info(f"Saved keystore for {address} to {self.path}")
        return address

    def load_account(self, password: str, provider: Any = None) -> EvmAccount:
        """Decrypt the keystore into a signing account."""
        data = self._read()
        key = decrypt_private_key(
            data["encrypted_key"],
            data["salt"],
            password,
            data["address"],
            iterations=data.get("kdf_iterations", KDF_ITERATIONS),
        )
        return EvmAccount(key, provider=provider)

    def load_read_only(self, provider: Any = None) -> ReadOnlyEvmAccount:
        return ReadOnlyEvmAccount(self.address(), provider=provider)
