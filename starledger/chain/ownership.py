# starledger/chain/ownership.py
"""
Ownership challenge format: "<identity>:<unix seconds>:starRegistry".

The caller signs the challenge off-system and hands it back with the
signature; the ledger only accepts it within the expiry window.
"""
import os
import re
from typing import Optional

CHALLENGE_SUFFIX = "starRegistry"
DEFAULT_CHALLENGE_WINDOW = 5 * 60

_TIMESTAMP_RE = re.compile(r"-?[0-9]+")


def format_challenge(identity: str, timestamp: int) -> str:
    return f"{identity}:{timestamp}:{CHALLENGE_SUFFIX}"


def parse_challenge_time(challenge: str) -> Optional[int]:
    """Second colon-delimited field as unix seconds, or None if missing/not a number."""
    parts = challenge.split(":")
    if len(parts) < 2 or not _TIMESTAMP_RE.fullmatch(parts[1]):
        return None
    return int(parts[1])


def within_window(elapsed: int, window: int) -> bool:
    return 0 <= elapsed < window


def resolve_challenge_window(window: Optional[int] = None) -> int:
    """Resolve the expiry window in this order:
    1. explicit argument
    2. STARLEDGER_CHALLENGE_WINDOW environment variable
    3. Default: 300 seconds
    """
    if window is not None:
        resolved = int(window)
    else:
        env_window = os.environ.get("STARLEDGER_CHALLENGE_WINDOW")
        resolved = int(env_window) if env_window else DEFAULT_CHALLENGE_WINDOW

    if resolved <= 0:
        raise ValueError(f"Challenge window must be positive, got {resolved}")
    return resolved
