"""
JSON codec helpers shared by the ledger records.

Decoding mirrors the ledger's wire conventions: missing or null fields take
their zero value, unknown fields are ignored, and a value of the wrong type
for a known field rejects the whole document.
"""

import json
import math
from typing import Any, Union

from ..errors import DecodeError

RAW_PREVIEW_CHARS = 200


def _preview(raw: Union[bytes, str]) -> str:
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    return text[:RAW_PREVIEW_CHARS]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def load_document(raw: Union[bytes, str], record_type: str) -> Any:
    """Parse raw JSON, raising DecodeError on malformed input.

    NaN and Infinity literals are rejected, as is nesting deeper than the
    interpreter can decode.
    """
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, TypeError, RecursionError) as e:
        raise DecodeError(
            f"Invalid {record_type} JSON: {e}",
            record_type=record_type,
            raw_data=_preview(raw) if isinstance(raw, (bytes, str)) else None
        ) from e


def expect_object(doc: Any, record_type: str) -> dict[str, Any]:
    if not isinstance(doc, dict):
        raise DecodeError(
            f"Cannot decode {type(doc).__name__} into {record_type}",
            record_type=record_type
        )
    return doc


def expect_list(doc: Any, record_type: str) -> list[Any]:
    if not isinstance(doc, list):
        raise DecodeError(
            f"Cannot decode {type(doc).__name__} into a list of {record_type}",
            record_type=record_type
        )
    return doc


def str_field(doc: dict[str, Any], name: str, record_type: str) -> str:
    value = doc.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(
            f"Field '{name}' of {record_type} must be a string, got {type(value).__name__}",
            record_type=record_type
        )
    return value


def int_field(doc: dict[str, Any], name: str, record_type: str) -> int:
    value = doc.get(name)
    if value is None:
        return 0
    # bool is an int subclass; a fractional number is not an integer quantity
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(
            f"Field '{name}' of {record_type} must be an integer, got {value!r}",
            record_type=record_type
        )
    return value


def float_field(doc: dict[str, Any], name: str, record_type: str) -> float:
    value = doc.get(name)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(
            f"Field '{name}' of {record_type} must be a number, got {value!r}",
            record_type=record_type
        )
    if not math.isfinite(value):
        raise DecodeError(
            f"Field '{name}' of {record_type} is out of range: {value!r}",
            record_type=record_type
        )
    return float(value)


def dump_document(doc: Any) -> bytes:
    """Serialize to compact JSON bytes; non-finite numbers raise ValueError."""
    return json.dumps(doc, separators=(",", ":"), ensure_ascii=False, allow_nan=False).encode("utf-8")
