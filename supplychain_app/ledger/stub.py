"""Ledger host interface consumed by the contracts."""

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Optional

from . import keys

OK = 200
ERROR_THRESHOLD = 400
ERROR = 500


@dataclass(frozen=True)
class Response:
    """Outcome of an invocation as returned to the caller."""
    status: int
    message: str = ""
    payload: bytes = b""

    @property
    def ok(self) -> bool:
        return self.status < ERROR_THRESHOLD


def success(payload: Optional[bytes] = None) -> Response:
    return Response(status=OK, payload=payload or b"")


def error(message: str, status: int = ERROR) -> Response:
    return Response(status=status, message=message)


@dataclass(frozen=True)
class Invocation:
    """A single contract invocation as delivered by the host."""
    function: str
    args: tuple[str, ...]
    creator: bytes
    tx_id: str
    channel: str = ""


@dataclass(frozen=True)
class KeyValue:
    """One entry yielded by a range scan."""
    key: str
    value: bytes


class StateIterator(ABC):
    """Cursor over a range of ledger state.

    Must be closed once the scan is done; use it as a context manager so the
    cursor is released when decoding an entry fails.
    """

    @abstractmethod
    def has_next(self) -> bool:
        pass

    @abstractmethod
    def next(self) -> KeyValue:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    def __iter__(self) -> Iterator[KeyValue]:
        while self.has_next():
            yield self.next()

    def __enter__(self) -> "StateIterator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class LedgerStub(ABC):
    """State and invocation access for one transaction."""

    def __init__(self, invocation: Invocation):
        self.invocation = invocation

    @property
    def tx_id(self) -> str:
        return self.invocation.tx_id

    @property
    def channel_id(self) -> str:
        return self.invocation.channel

    def get_creator(self) -> bytes:
        return self.invocation.creator

    def get_function_and_parameters(self) -> tuple[str, list[str]]:
        return self.invocation.function, list(self.invocation.args)

    def create_composite_key(self, object_type: str, attributes: Sequence[str]) -> str:
        return keys.create_composite_key(object_type, attributes)

    def split_composite_key(self, key: str) -> tuple[str, list[str]]:
        return keys.split_composite_key(key)

    @abstractmethod
    def get_state(self, key: str) -> Optional[bytes]:
        """Committed value for ``key``, or None when absent."""
        pass

    @abstractmethod
    def put_state(self, key: str, value: bytes) -> None:
        pass

    @abstractmethod
    def get_state_by_partial_composite_key(
        self, object_type: str, attributes: Sequence[str]
    ) -> StateIterator:
        pass

    @abstractmethod
    def invoke_contract(self, name: str, args: Sequence[bytes], channel: str) -> Response:
        """Synchronously invoke another contract and return its response."""
        pass

