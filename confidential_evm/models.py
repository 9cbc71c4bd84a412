"""
Option, result and key types for confidential operations.

Amounts are plain Python ints in the token's base unit. Inputs given as
float or Decimal are accepted only when they hold an exact integral value,
so values above 2**53 never lose precision on the way to the client.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, TypeVar, Union

from web3 import Web3

from confidential_evm.errors import BackendFailureError, InvalidAmountError

Amount = Union[int, float, Decimal, str]

T = TypeVar("T")


# =============================================================================
# OPTIONS
# =============================================================================


@dataclass(frozen=True)
class EnableConfidentialityOptions:
    """Options for enable_confidentiality (currently none)."""


@dataclass(frozen=True)
class DepositConfidentialOptions:
    token: str
    amount: Amount


@dataclass(frozen=True)
class TransferConfidentialOptions:
    recipient: str
    token: str
    amount: Amount


@dataclass(frozen=True)
class WithdrawConfidentialOptions:
    token: str
    amount: Amount


@dataclass(frozen=True)
class ConfidentialBalanceOptions:
    token: str


@dataclass(frozen=True)
class PublicBalanceOptions:
    token: str


@dataclass(frozen=True)
class FeeOptions:
    """Options for get_fee (currently none)."""


@dataclass(frozen=True)
class QuoteTransferConfidentialOptions:
    """Options for quote_transfer_confidential (currently none)."""


# =============================================================================
# RESULTS
# =============================================================================


@dataclass(frozen=True)
class ConfidentialResult:
    """Transaction hash of a submitted confidential operation."""

    hash: str


@dataclass(frozen=True)
class ConfidentialBalanceResult:
    amount: int


@dataclass(frozen=True)
class ConfidentialKeys:
    """Key pair encrypting and decrypting the confidential balance."""

    public_key: str
    private_key: str = field(repr=False)


# =============================================================================
# NORMALIZATION
# =============================================================================


def coerce_options(options: Any, cls: type[T]) -> T:
    """Accept an options dataclass or a mapping with the same keys."""
    if isinstance(options, cls):
        return options
    if options is None:
        options = {}
    if isinstance(options, Mapping):
        return cls(**options)
    raise TypeError(
        f"Expected {cls.__name__} or a mapping, got {type(options).__name__}"
    )


def to_amount(value: Any) -> int:
    """
    Convert an amount to an int in base units without losing precision.

    Raises:
        InvalidAmountError: If the value is negative, fractional, not finite
            or of an unsupported type. The message never echoes the value.
    """
    if isinstance(value, bool):
        raise InvalidAmountError("Amount must be a number, got bool")

    if isinstance(value, int):
        amount = value
    elif isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise InvalidAmountError("Amount must be a finite whole number of base units")
        amount = int(value)
    elif isinstance(value, Decimal):
        if not value.is_finite() or value != value.to_integral_value():
            raise InvalidAmountError("Amount must be a finite whole number of base units")
        amount = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text.isascii() or "_" in text:
            raise InvalidAmountError("Amount string is not an integer")
        try:
            amount = int(text, 16) if text[:2].lower() == "0x" else int(text)
        except ValueError:
            raise InvalidAmountError("Amount string is not an integer") from None
    else:
        raise InvalidAmountError(f"Unsupported amount type: {type(value).__name__}")

    if amount < 0:
        raise InvalidAmountError("Amount must not be negative")
    return amount


def result_field(result: Any, operation: str, *names: str) -> Any:
    """Read the first present field from a client result (mapping or object)."""
    for name in names:
        if isinstance(result, Mapping):
            if name in result:
                return result[name]
        elif hasattr(result, name):
            return getattr(result, name)
    raise BackendFailureError(
        operation, KeyError(f"client result has no '{names[0]}' field")
    )


def to_hex_string(value: Any) -> str:
    """Render hashes and keys returned as bytes as 0x-prefixed hex."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return Web3.to_hex(bytes(value))
    return str(value)
