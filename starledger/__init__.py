# starledger/__init__.py
"""
starledger — in-memory, hash-linked, append-only ledger.
Each block commits to its predecessor's SHA-256 digest; writes are admitted
only after a signed, time-boxed ownership challenge.
"""

from starledger.core.types import Block
from starledger.core.errors import (
    LedgerError,
    DecodeError,
    GenesisHasNoData,
    MalformedPayload,
    ProofError,
    ChallengeExpired,
    VerificationFailed,
    ChainValidationFailed,
)
from starledger.crypto.keys import AgentKeyPair
from starledger.crypto.signatures import SignatureVerifier, Ed25519Verifier
from starledger.chain.blockchain import Blockchain
from starledger.verify.verifier import ChainValidator, VerificationResult

__version__ = "0.1.0-dev"

__all__ = [
    "Block",
    "Blockchain",
    "ChainValidator",
    "VerificationResult",
    "AgentKeyPair",
    "SignatureVerifier",
    "Ed25519Verifier",
    "LedgerError",
    "DecodeError",
    "GenesisHasNoData",
    "MalformedPayload",
    "ProofError",
    "ChallengeExpired",
    "VerificationFailed",
    "ChainValidationFailed",
]
