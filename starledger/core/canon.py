# starledger/core/canon.py
import json
from typing import Any

try:
    import jcs
except ImportError:
    raise ImportError("Please install jcs: pip install jcs")


def canonical_json(obj: Any) -> bytes:
    """
    Produce deterministic UTF-8 bytes according to RFC 8785 (JSON Canonicalization Scheme).
    Used for the hashed view of a block, whose values are all strings, small ints or null.
    """
    return jcs.canonicalize(obj)


def canonical_json_str(obj: Any) -> str:
    """Same as above, but returns string (mostly for debugging)."""
    return canonical_json(obj).decode("utf-8")


def _check_keys(obj: Any) -> None:
    if isinstance(obj, dict):
        for key, value in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"Object keys must be str, got {type(key).__name__}: {key!r}")
            _check_keys(value)
    elif isinstance(obj, (list, tuple)):
        for item in obj:
            _check_keys(item)


def canonical_body(obj: Any) -> bytes:
    """
    Sorted-key, compact UTF-8 JSON for block payloads.

    Unlike RFC 8785 it keeps ints at full precision, so decoding a body gives
    back exactly the data it was built from. Anything JSON can't carry
    unchanged (non-str keys, NaN/Infinity, arbitrary objects) raises TypeError.
    """
    _check_keys(obj)
    try:
        text = json.dumps(obj, sort_keys=True, separators=(",", ":"),
                          ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise TypeError(f"Payload is not JSON serializable: {e}") from e
    return text.encode("utf-8")
