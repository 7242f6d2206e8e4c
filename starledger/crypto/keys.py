# starledger/crypto/keys.py
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from starledger.core.encoding import b64url_decode, b64url_encode


class AgentKeyPair:
    """
    Ed25519 identity. The base64url raw public key doubles as the identity
    string a ledger writer proves ownership of.
    A verify-only pair (loaded from a public key) cannot sign.
    """

    def __init__(self, private_key: Ed25519PrivateKey | None = None,
                 public_key: Ed25519PublicKey | None = None):
        if private_key is None and public_key is None:
            raise ValueError("AgentKeyPair needs a private or a public key")
        self._private_key = private_key
        self._public_key = public_key or private_key.public_key()

    @classmethod
    def generate(cls) -> "AgentKeyPair":
        return cls(private_key=Ed25519PrivateKey.generate())

    @classmethod
    def from_private_b64url(cls, priv_b64: str) -> "AgentKeyPair":
        raw = b64url_decode(priv_b64)
        return cls(private_key=Ed25519PrivateKey.from_private_bytes(raw))

    @classmethod
    def from_public_b64url(cls, pub_b64: str) -> "AgentKeyPair":
        raw = b64url_decode(pub_b64)
        return cls(public_key=Ed25519PublicKey.from_public_bytes(raw))

    @property
    def can_sign(self) -> bool:
        return self._private_key is not None

    def public_key_b64url(self) -> str:
        raw = self._public_key.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        return b64url_encode(raw)

    def private_key_b64url(self) -> str:
        if not self.can_sign:
            raise ValueError("Verify-only key pair has no private key")
        raw = self._private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )
        return b64url_encode(raw)

    def sign_bytes(self, data: bytes) -> bytes:
        if not self.can_sign:
            raise ValueError("Verify-only key pair cannot sign")
        return self._private_key.sign(data)

    def sign(self, message: str) -> str:
        """Sign a text message (e.g. an ownership challenge); returns base64url signature."""
        return b64url_encode(self.sign_bytes(message.encode("utf-8")))

    def verify_bytes(self, signature: bytes, data: bytes) -> bool:
        try:
            self._public_key.verify(signature, data)
            return True
        except InvalidSignature:
            return False
