# starledger/crypto/hashing.py
import hashlib
from typing import TYPE_CHECKING, Any, Dict

from starledger.core.canon import canonical_json

if TYPE_CHECKING:
    from starledger.core.types import Block


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def digest_view_hash(view: Dict[str, Any]) -> str:
    """Hash a digest-input view (all block fields, hash cleared)."""
    return sha256_hex(canonical_json(view))


def block_hash(block: "Block") -> str:
    """What the block's current contents hash to, regardless of its stored hash."""
    return digest_view_hash(block.digest_view())
