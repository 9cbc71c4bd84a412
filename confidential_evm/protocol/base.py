"""Interface every confidential protocol implementation provides."""

from typing import Any

from confidential_evm.errors import ConfidentialNotImplementedError
from confidential_evm.models import (
    ConfidentialBalanceResult,
    ConfidentialKeys,
    ConfidentialResult,
)


class ConfidentialProtocol:
    """
    Confidential operations on behalf of one wallet account.

    Subclasses bind a network and a confidential transfer client and
    override every operation. Calling an operation that was not overridden
    raises ConfidentialNotImplementedError. Methods that only one network
    shape has (get_public_balance and get_fee, or quote_transfer_confidential)
    are defined on the concrete classes only.
    """

    def __init__(self, account: Any):
        self._account = account

    @property
    def account(self) -> Any:
        return self._account

    async def enable_confidentiality(self, options=None) -> ConfidentialKeys:
        """Create and register the confidential key pair of the account."""
        raise ConfidentialNotImplementedError("enable_confidentiality(options)")

    async def deposit_confidential(self, options) -> ConfidentialResult:
        """Move public tokens into the confidential balance."""
        raise ConfidentialNotImplementedError("deposit_confidential(options)")

    async def transfer_confidential(self, options) -> ConfidentialResult:
        """Send tokens from the confidential balance to another account."""
        raise ConfidentialNotImplementedError("transfer_confidential(options)")

    async def withdraw_confidential(self, options) -> ConfidentialResult:
        """Move tokens from the confidential balance back to the public one."""
        raise ConfidentialNotImplementedError("withdraw_confidential(options)")

    async def get_confidential_balance(self, options) -> ConfidentialBalanceResult:
        """Decrypt and return the confidential balance of a token."""
        raise ConfidentialNotImplementedError("get_confidential_balance(options)")
