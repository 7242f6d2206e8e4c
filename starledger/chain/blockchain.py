# starledger/chain/blockchain.py
import time
import threading
from typing import Any, Callable, List, Optional

from starledger.core.types import Block, GENESIS_DATA
from starledger.core.errors import (
    ChainValidationFailed,
    ChallengeExpired,
    VerificationFailed,
)
from starledger.crypto.signatures import SignatureVerifier, Ed25519Verifier
from starledger.verify.verifier import ChainValidator, VerificationResult
from starledger.chain.ownership import (
    format_challenge,
    parse_challenge_time,
    resolve_challenge_window,
    within_window,
)


def unix_now() -> int:
    return int(time.time())


class Blockchain:
    """
    In-memory, append-only chain of hash-linked blocks.

    The chain lives only as long as this object: nothing is persisted.
    New data enters through the ownership proof (request_ownership_challenge
    then submit_proof); _add_block is the single append primitive.

    `height` keeps the historical convention: -1 before genesis, then the
    number of blocks in the chain (so it is one past the tip's height).
    `length` is the tip's height itself.

    One lock guards `chain` and `height`. Appends hold it end to end
    (link, stamp, hash, push, re-validate); reads work on a snapshot taken
    under it.
    """

    def __init__(
        self,
        verifier: Optional[SignatureVerifier] = None,
        clock: Optional[Callable[[], int]] = None,
        challenge_window: Optional[int] = None,
        initialize: bool = True,
    ):
        self.chain: List[Block] = []
        self.height = -1
        self.verifier = verifier or Ed25519Verifier()
        self.clock = clock or unix_now
        self.challenge_window = resolve_challenge_window(challenge_window)
        self._validator = ChainValidator()
        self._lock = threading.RLock()
        if initialize:
            self.initialize_chain()

    def initialize_chain(self) -> Optional[Block]:
        """Create the genesis block if the chain doesn't have one yet."""
        with self._lock:
            if self.height != -1:
                return None
            return self._add_block(Block(GENESIS_DATA))

    def get_chain_height(self) -> int:
        with self._lock:
            return self.height

    @property
    def length(self) -> int:
        """Height of the tip block: -1 before genesis, 0 with only genesis."""
        with self._lock:
            return len(self.chain) - 1

    def get_chain(self) -> List[Block]:
        """Snapshot of the chain (the list is a copy, the blocks are shared)."""
        with self._lock:
            return self.chain.copy()

    def _add_block(self, block: Block) -> Block:
        """
        Link, stamp, seal and append a block, then re-validate the whole chain.

        If validation reports errors, ChainValidationFailed is raised but the
        block stays in the chain: the check runs after the append, not as a guard.
        """
        with self._lock:
            if self.height > 0:
                block.previous_hash = self.chain[-1].hash
            else:
                self.height = 0
            block.time = self.clock()
            block.height = self.height
            block.hash = block.compute_hash()
            self.chain.append(block)
            self.height += 1

            errors = self.validate_chain()
            if errors:
                print(f"[starledger] Warning: chain invalid after appending block {block.height}: {errors}")
                raise ChainValidationFailed(errors)
            return block

    def request_ownership_challenge(self, identity: str) -> str:
        """Message the owner of `identity` must sign before submitting data."""
        return format_challenge(identity, self.clock())

    def submit_proof(self, identity: str, challenge: str, signature: str, payload: Any) -> Block:
        """
        Append `{"identity": identity, "payload": payload}` once the signed
        challenge checks out.

        Raises ChallengeExpired when the challenge is older than the window
        (or from the future), VerificationFailed when the signature does not
        verify or the verifier itself errors.
        """
        challenge_time = parse_challenge_time(challenge)
        if challenge_time is None:
            raise ChallengeExpired(None, self.challenge_window)

        elapsed = self.clock() - challenge_time
        if not within_window(elapsed, self.challenge_window):
            raise ChallengeExpired(elapsed, self.challenge_window)

        try:
            is_verified = self.verifier.verify(challenge, identity, signature)
        except Exception as e:
            raise VerificationFailed(str(e)) from e
        if not is_verified:
            raise VerificationFailed()

        block = Block({"identity": identity, "payload": payload})
        return self._add_block(block)

    def get_block_by_hash(self, block_hash: str) -> Optional[Block]:
        for block in self.get_chain():
            if block.hash == block_hash:
                return block
        return None

    def get_block_by_height(self, height: int) -> Optional[Block]:
        for block in self.get_chain():
            if block.height == height:
                return block
        return None

    def get_payloads_by_identity(self, identity: str) -> List[Any]:
        """Payloads submitted by `identity`, in chain order. Genesis is skipped."""
        payloads = []
        for block in self.get_chain()[1:]:
            data = block.get_data()
            if isinstance(data, dict) and data.get("identity") == identity:
                payloads.append(data.get("payload"))
        return payloads

    def validation_report(self) -> VerificationResult:
        return self._validator.verify(self.get_chain())

    def validate_chain(self) -> List[str]:
        """Integrity errors for the whole chain; empty when nothing was tampered with."""
        return self.validation_report().errors

    def to_dicts(self) -> List[dict]:
        return [block.to_dict() for block in self.get_chain()]
