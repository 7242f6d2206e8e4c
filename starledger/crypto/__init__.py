# starledger/crypto/__init__.py
from .keys import AgentKeyPair
from .signatures import SignatureVerifier, Ed25519Verifier

__all__ = ["AgentKeyPair", "SignatureVerifier", "Ed25519Verifier"]
