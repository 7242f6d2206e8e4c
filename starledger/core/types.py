# starledger/core/types.py
import json
from dataclasses import dataclass, asdict, fields
from typing import Any, Optional

from starledger.core.canon import canonical_body
from starledger.core.encoding import hex_encode, hex2utf8
from starledger.core.errors import GenesisHasNoData, MalformedPayload
from starledger.crypto.hashing import block_hash

GENESIS_DATA = {"data": "Genesis Block"}


@dataclass(init=False)
class Block:
    """
    Single entry in the hash-linked chain.

    `body` holds the caller's data as hex of its canonical JSON; the ledger
    never looks inside it except through get_data(). Fields are plain
    attributes so a sealed block can still be tampered with (and caught by
    validate()); only the ledger's append path should ever set them.
    """
    body: str
    hash: Optional[str] = None
    height: int = 0
    time: int = 0
    previous_hash: Optional[str] = None   # None only for genesis

    def __init__(self, data: Any = None, *, body: Optional[str] = None):
        if body is None:
            body = hex_encode(canonical_body(data))
        self.body = body
        self.hash = None
        self.height = 0
        self.time = 0
        self.previous_hash = None

    def digest_view(self) -> dict:
        """Every field with hash cleared: the input to the block digest."""
        d = asdict(self)
        d["hash"] = None
        return d

    def compute_hash(self) -> str:
        return block_hash(self)

    def validate(self) -> bool:
        """True if the block is unchanged since it was sealed."""
        return self.compute_hash() == self.hash

    @property
    def is_genesis(self) -> bool:
        return self.previous_hash is None

    def get_data(self) -> Any:
        """Decode the body back to the data the block was created from."""
        if self.is_genesis:
            raise GenesisHasNoData()
        try:
            return json.loads(hex2utf8(self.body))
        except (ValueError, TypeError) as e:
            # UnicodeDecodeError and JSONDecodeError are ValueErrors
            raise MalformedPayload(self.height, str(e)) from e

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "Block":
        """Rebuild an exported block exactly as it was, stored hash included."""
        known = {f.name for f in fields(cls)}
        unknown = set(d) - known
        if unknown:
            raise ValueError(f"Unknown block fields: {sorted(unknown)}")
        block = cls(body=d["body"])
        block.hash = d.get("hash")
        block.height = d.get("height", 0)
        block.time = d.get("time", 0)
        block.previous_hash = d.get("previous_hash")
        return block
