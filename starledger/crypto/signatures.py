# starledger/crypto/signatures.py
"""
Signature verification capability used by the ownership-proof gate.

The ledger only needs `verify(message, identity, signature) -> bool`.
Anything satisfying SignatureVerifier can be plugged in; implementations
may raise on malformed input and the ledger reports that as a failed proof.
"""
from typing import Protocol, runtime_checkable

from starledger.core.encoding import b64url_decode
from starledger.crypto.keys import AgentKeyPair


@runtime_checkable
class SignatureVerifier(Protocol):
    def verify(self, message: str, identity: str, signature: str) -> bool:
        ...


class Ed25519Verifier:
    """identity = base64url Ed25519 public key, signature = base64url signature over UTF-8 message."""

    def verify(self, message: str, identity: str, signature: str) -> bool:
        # Bad key or signature encodings raise ValueError / binascii.Error
        key = AgentKeyPair.from_public_b64url(identity)
        return key.verify_bytes(b64url_decode(signature), message.encode("utf-8"))
