"""
Composite key encoding.

A composite key is ``NS + objectType + SEP + attr1 + SEP + attr2 + SEP ...``
with both the namespace marker and the separator being U+0000. Keys sort by
object type first, so a partial key is a contiguous range that ends just
before ``partial + U+10FFFF``.
"""

from collections.abc import Sequence

from ..errors import InvalidKeyError

MIN_UNICODE_RUNE = "\x00"
MAX_UNICODE_RUNE = "\U0010ffff"
COMPOSITE_KEY_NAMESPACE = "\x00"


def _validate_component(value: str) -> None:
    if not isinstance(value, str):
        raise InvalidKeyError(
            f"Composite key component must be a string, got {type(value).__name__}",
            component=repr(value)
        )
    if MIN_UNICODE_RUNE in value or MAX_UNICODE_RUNE in value:
        raise InvalidKeyError(
            f"Composite key component {value!r} contains a reserved character",
            component=value
        )
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidKeyError(
            f"Composite key component {value!r} is not valid UTF-8",
            component=value
        ) from e


def create_composite_key(object_type: str, attributes: Sequence[str]) -> str:
    """Build the ledger key for ``object_type`` and its identifying attributes."""
    _validate_component(object_type)
    if not object_type:
        raise InvalidKeyError("Composite key object type must not be empty", component=object_type)

    key = COMPOSITE_KEY_NAMESPACE + object_type + MIN_UNICODE_RUNE
    for attribute in attributes:
        _validate_component(attribute)
        key += attribute + MIN_UNICODE_RUNE
    return key


def split_composite_key(key: str) -> tuple[str, list[str]]:
    """Inverse of ``create_composite_key``."""
    if not key.startswith(COMPOSITE_KEY_NAMESPACE):
        raise InvalidKeyError(f"Key {key!r} is not a composite key", component=key)

    parts = key[len(COMPOSITE_KEY_NAMESPACE):].split(MIN_UNICODE_RUNE)
    # Trailing separator leaves an empty last element
    return parts[0], parts[1:-1]


def partial_key_range(object_type: str, attributes: Sequence[str]) -> tuple[str, str]:
    """Start (inclusive) and end (exclusive) keys of a partial composite key scan."""
    start = create_composite_key(object_type, attributes)
    return start, start + MAX_UNICODE_RUNE
