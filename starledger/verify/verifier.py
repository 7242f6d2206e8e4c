# starledger/verify/verifier.py
from typing import List, Optional
from dataclasses import dataclass, field

from starledger.core.types import Block


@dataclass
class VerificationFailure:
    index: int
    message: str
    category: str = "general"  # "block_hash" or "previous_hash"


@dataclass
class VerificationResult:
    is_valid: bool
    message: str = ""
    failures: List[VerificationFailure] = field(default_factory=list)

    @property
    def first_failure(self) -> Optional[VerificationFailure]:
        return self.failures[0] if self.failures else None

    @property
    def errors(self) -> List[str]:
        """Failure messages in report order."""
        return [f.message for f in self.failures]

    def __bool__(self):
        return self.is_valid

    def __str__(self):
        if self.is_valid:
            return "Chain is valid ✓"
        lines = [f"Verification FAILED ({len(self.failures)} issues):"]
        for f in self.failures:
            lines.append(f"  • [{f.index}] {f.category}: {f.message}")
        return "\n".join(lines)


class ChainValidator:
    """
    Whole-chain integrity check. Runs both passes over every block, every time.

    Order of failures is part of the contract: all block-hash failures by
    ascending index first, then previous-hash failures walking backwards
    from the tip, then the genesis link check.
    """

    def verify(self, chain: List[Block]) -> VerificationResult:
        if not chain:
            return VerificationResult(True, "Empty chain is valid")

        result = VerificationResult(True)

        # 1. Each block against its own stored hash
        for i, block in enumerate(chain):
            if not block.validate():
                result.failures.append(VerificationFailure(
                    i, f"Invalid block hash at index {block.height}", "block_hash"))

        # 2. Links, tip to genesis. Compare against what the predecessor
        # actually hashes to now, so a rewritten body also breaks its successor.
        for i in range(len(chain) - 1, 0, -1):
            if chain[i].previous_hash != chain[i - 1].compute_hash():
                result.failures.append(VerificationFailure(
                    i, f"Invalid previous block hash at index {i}", "previous_hash"))
        if chain[0].previous_hash is not None:
            result.failures.append(VerificationFailure(
                0, "Invalid previous block hash at index 0", "previous_hash"))

        result.is_valid = not result.failures
        result.message = "Valid chain" if result.is_valid else f"Failed with {len(result.failures)} issues"
        return result

    def validate_chain(self, chain: List[Block]) -> List[str]:
        return self.verify(chain).errors
