"""AES-256-GCM encryption of signing keys kept in the local keystore."""

import base64
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from confidential_evm.errors import ConfigError

KDF_ITERATIONS = 100_000
SALT_BYTES = 16
NONCE_BYTES = 12


def _derive_key(password: str, salt: bytes, iterations: int) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(password.encode())


def encrypt_private_key(
    private_key: bytes, password: str, address: str
) -> tuple[str, str]:
    """
    Encrypt raw key bytes under a password.

    The account address is bound as associated data, so a ciphertext copied
    under another address fails to decrypt.

    Returns:
        Tuple of (encrypted_key_b64, salt_b64)
    """
    salt = os.urandom(SALT_BYTES)
    key = _derive_key(password, salt, KDF_ITERATIONS)

    nonce = os.urandom(NONCE_BYTES)
    ciphertext = AESGCM(key).encrypt(nonce, bytes(private_key), address.lower().encode())

    return (
        base64.b64encode(nonce + ciphertext).decode(),
        base64.b64encode(salt).decode(),
    )


def decrypt_private_key(
    encrypted_b64: str,
    salt_b64: str,
    password: str,
    address: str,
    iterations: int = KDF_ITERATIONS,
) -> bytes:
    """
    Decrypt raw key bytes.

    Raises:
        ConfigError: If the password is wrong or the keystore was tampered with.
    """
    encrypted = base64.b64decode(encrypted_b64)
    salt = base64.b64decode(salt_b64)
    key = _derive_key(password, salt, iterations)

    nonce, ciphertext = encrypted[:NONCE_BYTES], encrypted[NONCE_BYTES:]
    try:
        return AESGCM(key).decrypt(nonce, ciphertext, address.lower().encode())
    except InvalidTag:
        raise ConfigError("Invalid keystore password") from None
