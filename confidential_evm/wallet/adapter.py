"""
Bridge between wallet accounts and the signer the client needs.

Read-only accounts can answer address queries but refuse anything that
signs. Signing accounts need a provider, connected once when the adapter is
created.
"""

from web3 import AsyncWeb3

from confidential_evm.errors import NotConnectedError, UnsupportedOperationError
from confidential_evm.wallet.account import ReadOnlyAccount, SigningAccount
from confidential_evm.wallet.signer import EvmSigner, build_signer, connect_provider


class AccountAdapter:
    def __init__(self, account: ReadOnlyAccount | SigningAccount):
        self._account = account
        self._web3: AsyncWeb3 | None = None

        provider = getattr(account, "provider", None)
        if provider is not None:
            self._web3 = connect_provider(provider)

    @property
    def account(self) -> ReadOnlyAccount | SigningAccount:
        return self._account

    @property
    def web3(self) -> AsyncWeb3 | None:
        return self._web3

    @property
    def is_read_only(self) -> bool:
        return getattr(self._account, "key_pair", None) is None

    async def get_address(self) -> str:
        return await self._account.get_address()

    def require_signing(self, operation: str) -> None:
        """Raise UnsupportedOperationError for read-only accounts."""
        if self.is_read_only:
            raise UnsupportedOperationError(operation)

    def get_signer(self, operation: str) -> EvmSigner:
        """
        Build a signer for a mutating operation.

        Raises:
            UnsupportedOperationError: If the account is read-only.
            NotConnectedError: If no provider was attached to the account.
        """
        self.require_signing(operation)
        if self._web3 is None:
            raise NotConnectedError()
        return build_signer(self._account.key_pair.private_key, self._web3)
