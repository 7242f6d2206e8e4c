# starledger/core/errors.py
"""
Exceptions raised by the ledger. Nothing here is retried or fatal:
every error goes back to the caller of the operation that produced it.
"""
from typing import List


class LedgerError(Exception):
    """Base class for all starledger errors."""


class DecodeError(LedgerError):
    """A block body could not be turned back into data."""


class GenesisHasNoData(DecodeError):
    def __init__(self):
        super().__init__("Genesis block hasn't associated data")


class MalformedPayload(DecodeError, ValueError):
    def __init__(self, height: int, detail: str):
        self.height = height
        super().__init__(f"Malformed payload in block {height}: {detail}")


class ProofError(LedgerError):
    """Ownership proof rejected before anything was written."""


class ChallengeExpired(ProofError):
    def __init__(self, elapsed=None, window: int = 300):
        self.elapsed = elapsed
        self.window = window
        if elapsed is None:
            msg = "Challenge carries no readable timestamp"
        else:
            msg = (
                f"Elapsed {elapsed}s between ownership challenge and submission "
                f"(allowed window is [0, {window}) seconds)"
            )
        super().__init__(msg)


class VerificationFailed(ProofError):
    def __init__(self, detail: str = ""):
        self.detail = detail
        msg = "Message verification failed"
        if detail:
            msg = f"{msg}. {detail}"
        super().__init__(msg)


class ChainValidationFailed(LedgerError):
    """Post-append integrity check found problems. The block is NOT rolled back."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(",".join(self.errors))
