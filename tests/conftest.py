# tests/conftest.py
import pytest

from starledger.chain.blockchain import Blockchain
from starledger.crypto.keys import AgentKeyPair


class FakeClock:
    """Unix-seconds clock that only moves when told to."""

    def __init__(self, now: int = 1_700_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def blockchain(clock):
    return Blockchain(clock=clock)


@pytest.fixture
def alice():
    return AgentKeyPair.generate()


@pytest.fixture
def bob():
    return AgentKeyPair.generate()


def _submit(chain: Blockchain, keys: AgentKeyPair, payload):
    """Full ownership flow: challenge → sign → submit."""
    identity = keys.public_key_b64url()
    message = chain.request_ownership_challenge(identity)
    return chain.submit_proof(identity, message, keys.sign(message), payload)


@pytest.fixture
def submit():
    return _submit
