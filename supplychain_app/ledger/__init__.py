"""
Ledger host interface.

The contracts only ever see a ``LedgerStub``: state get/put by composite key,
prefix range scans through a closeable iterator, and synchronous calls into
other contracts. ``InMemoryLedger`` is a host implementation for tests and
local runs.
"""
from .keys import create_composite_key, partial_key_range, split_composite_key
from .stub import (
    ERROR,
    ERROR_THRESHOLD,
    OK,
    Invocation,
    KeyValue,
    LedgerStub,
    Response,
    StateIterator,
    error,
    success,
)

__all__ = [
    "ERROR",
    "ERROR_THRESHOLD",
    "OK",
    "Invocation",
    "KeyValue",
    "LedgerStub",
    "Response",
    "StateIterator",
    "create_composite_key",
    "error",
    "partial_key_range",
    "split_composite_key",
    "success",
]
