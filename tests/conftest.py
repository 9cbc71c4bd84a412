"""Shared fixtures: well-known dev keys and a recording client double."""

import pytest

from confidential_evm.config import ConfidentialProtocolConfig, StableTrustConfig
from confidential_evm.wallet import EvmAccount, ReadOnlyEvmAccount

# Hardhat/Anvil development accounts #0 and #1
DEV_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEV_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
DEV_KEY_2 = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"
DEV_ADDRESS_2 = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

RPC_URL = "http://127.0.0.1:8545"
TOKEN = "0xAAA"
STABLE_TRUST = "0x" + "ab" * 20


class FakeConfidentialClient:
    """
    Client double that records every call.

    Keys handed out by ensure_account come from key_sequence in order, so
    repeated registrations return different pairs.
    """

    def __init__(
        self,
        key_sequence=(("pk1", "sk1"),),
        tx_hash="0xdeadbeef",
        confidential_balance=100,
        public_balance=500,
        fail_with=None,
        **network,
    ):
        self.network = network
        self.key_sequence = list(key_sequence)
        self.tx_hash = tx_hash
        self.confidential_balance = confidential_balance
        self.public_balance = public_balance
        self.fail_with = fail_with
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name, args))
        if self.fail_with is not None:
            raise self.fail_with

    def call_names(self):
        return [name for name, _ in self.calls]

    async def ensure_account(self, signer):
        self._record("ensure_account", signer)
        index = min(self.call_names().count("ensure_account"), len(self.key_sequence)) - 1
        public_key, private_key = self.key_sequence[index]
        return {"publicKey": public_key, "privateKey": private_key}

    async def confidential_deposit(self, signer, token, amount):
        self._record("confidential_deposit", signer, token, amount)
        return {"hash": self.tx_hash}

    async def confidential_transfer(self, signer, recipient, token, amount):
        self._record("confidential_transfer", signer, recipient, token, amount)
        return {"hash": self.tx_hash}

    async def withdraw(self, signer, token, amount):
        self._record("withdraw", signer, token, amount)
        return {"hash": self.tx_hash}

    async def get_confidential_balance(self, address, private_key, token):
        self._record("get_confidential_balance", address, private_key, token)
        return {"amount": self.confidential_balance}

    async def get_public_balance(self, address, token):
        self._record("get_public_balance", address, token)
        return self.public_balance


@pytest.fixture
def fake_client():
    return FakeConfidentialClient()


@pytest.fixture
def signing_account():
    return EvmAccount(DEV_KEY, provider=RPC_URL)


@pytest.fixture
def unconnected_account():
    return EvmAccount(DEV_KEY)


@pytest.fixture
def read_only_account():
    return ReadOnlyEvmAccount(DEV_ADDRESS, provider=RPC_URL)


@pytest.fixture
def protocol_config():
    return ConfidentialProtocolConfig(rpc_url=RPC_URL, chain_id=2201)


@pytest.fixture
def stable_trust_config():
    return StableTrustConfig(rpc_url=RPC_URL, chain_id=2201, stable_trust=STABLE_TRUST)
