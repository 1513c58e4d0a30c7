"""
In-memory ledger host.

Executes contract invocations against a versioned key-value world state the
way the real host does: reads see committed state only, writes are buffered
in the transaction's write set, and a successful transaction commits only if
every key it read is still at the version it observed.
"""

import threading
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional, Protocol

import structlog

from ..errors import LedgerError, MVCCConflictError
from .keys import partial_key_range
from .stub import ERROR, Invocation, KeyValue, LedgerStub, Response, StateIterator

logger = structlog.get_logger(__name__)


class InvocableContract(Protocol):
    def invoke(self, stub: LedgerStub) -> Response: ...


@dataclass(frozen=True)
class VersionedValue:
    """Committed value with the commit number that last wrote it."""
    value: bytes
    version: int


@dataclass
class PreparedTransaction:
    """Simulated transaction awaiting commit."""
    invocation: Invocation
    response: Response
    read_set: dict[str, Optional[int]] = field(default_factory=dict)
    write_set: dict[str, bytes] = field(default_factory=dict)


class MemoryStateIterator(StateIterator):
    """Iterator over a snapshot of committed entries."""

    def __init__(self, entries: list[KeyValue], on_close):
        self._entries = entries
        self._position = 0
        self._on_close = on_close
        self.closed = False

    def has_next(self) -> bool:
        return not self.closed and self._position < len(self._entries)

    def next(self) -> KeyValue:
        if self.closed:
            raise LedgerError("Iterator already closed", operation="next")
        if self._position >= len(self._entries):
            raise LedgerError("Iterator exhausted", operation="next")
        entry = self._entries[self._position]
        self._position += 1
        return entry

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            self._on_close(self)


class TransactionStub(LedgerStub):
    """Stub handed to a contract for one simulated transaction."""

    def __init__(self, ledger: "InMemoryLedger", invocation: Invocation):
        super().__init__(invocation)
        self.ledger = ledger
        self.read_set: dict[str, Optional[int]] = {}
        self.write_set: dict[str, bytes] = {}

    def get_state(self, key: str) -> Optional[bytes]:
        entry = self.ledger.read(key)
        self.read_set[key] = entry.version if entry else None
        return entry.value if entry else None

    def put_state(self, key: str, value: bytes) -> None:
        if not key:
            raise LedgerError("Key must not be empty", operation="put_state", key=key)
        if not isinstance(value, bytes):
            raise LedgerError(
                f"Value must be bytes, got {type(value).__name__}",
                operation="put_state",
                key=key
            )
        self.write_set[key] = value

    def get_state_by_partial_composite_key(
        self, object_type: str, attributes: Sequence[str]
    ) -> StateIterator:
        start, end = partial_key_range(object_type, attributes)
        entries = []
        for key, entry in self.ledger.range(start, end):
            self.read_set[key] = entry.version
            entries.append(KeyValue(key=key, value=entry.value))
        return self.ledger.open_iterator(entries)

    def invoke_contract(self, name: str, args: Sequence[bytes], channel: str) -> Response:
        return self.ledger.invoke_peer(
            name, args, channel or self.channel_id, self.get_creator(), self.tx_id
        )


class InMemoryLedger:
    """Versioned world state for one channel plus a registry of peer contracts."""

    def __init__(self, channel: str = "default"):
        self.channel = channel
        self.logger = logger.bind(channel=channel)
        self._state: dict[str, VersionedValue] = {}
        self._commit_count = 0
        self._lock = threading.Lock()
        self._open_iterators: list[MemoryStateIterator] = []
        self.iterators_opened = 0
        self._peers: dict[tuple[str, str], tuple[InvocableContract, "InMemoryLedger"]] = {}

    # -- world state -------------------------------------------------------

    def read(self, key: str) -> Optional[VersionedValue]:
        return self._state.get(key)

    def get(self, key: str) -> Optional[bytes]:
        entry = self._state.get(key)
        return entry.value if entry else None

    def version_of(self, key: str) -> Optional[int]:
        entry = self._state.get(key)
        return entry.version if entry else None

    def range(self, start: str, end: str) -> list[tuple[str, VersionedValue]]:
        return [(key, self._state[key]) for key in sorted(self._state) if start <= key < end]

    def seed(self, key: str, value: bytes) -> None:
        """Write directly to committed state, outside any transaction."""
        with self._lock:
            self._commit_count += 1
            self._state[key] = VersionedValue(value=value, version=self._commit_count)

    # -- iterators ---------------------------------------------------------

    def open_iterator(self, entries: list[KeyValue]) -> MemoryStateIterator:
        iterator = MemoryStateIterator(entries, self._release_iterator)
        self._open_iterators.append(iterator)
        self.iterators_opened += 1
        return iterator

    def _release_iterator(self, iterator: MemoryStateIterator) -> None:
        self._open_iterators.remove(iterator)

    @property
    def open_iterator_count(self) -> int:
        return len(self._open_iterators)

    # -- peers -------------------------------------------------------------

    def register_peer(self, name: str, contract: InvocableContract,
                      ledger: Optional["InMemoryLedger"] = None) -> None:
        """Deploy ``contract`` as ``name`` on ``ledger``'s channel (default: this one)."""
        target = ledger or self
        self._peers[(target.channel, name)] = (contract, target)

    def invoke_peer(self, name: str, args: Sequence[bytes], channel: str,
                    creator: bytes, tx_id: str) -> Response:
        """Run a peer contract; its writes are never committed."""
        peer = self._peers.get((channel, name))
        if peer is None:
            return Response(status=ERROR, message=f"contract {name} not found on channel {channel}")
        if not args:
            return Response(status=ERROR, message="no function supplied to peer contract")

        contract, ledger = peer
        decoded = [arg.decode("utf-8") for arg in args]
        invocation = Invocation(
            function=decoded[0],
            args=tuple(decoded[1:]),
            creator=creator,
            tx_id=tx_id,
            channel=channel,
        )
        self.logger.debug("Invoking peer contract", peer=name, peer_channel=channel, tx_id=tx_id)
        return contract.invoke(TransactionStub(ledger, invocation))

    # -- transactions ------------------------------------------------------

    def prepare(self, contract: InvocableContract, function: str, args: Sequence[str],
                creator: bytes, tx_id: Optional[str] = None) -> PreparedTransaction:
        """Simulate an invocation without committing it."""
        invocation = Invocation(
            function=function,
            args=tuple(args),
            creator=creator,
            tx_id=tx_id or uuid.uuid4().hex,
            channel=self.channel,
        )
        stub = TransactionStub(self, invocation)
        response = contract.invoke(stub)
        return PreparedTransaction(
            invocation=invocation,
            response=response,
            read_set=dict(stub.read_set),
            write_set=dict(stub.write_set),
        )

    def commit(self, tx: PreparedTransaction) -> None:
        """Validate and apply a prepared transaction.

        Failed responses discard their write set. A key whose committed
        version moved since it was read rejects the whole transaction.
        """
        if not tx.response.ok:
            self.logger.info(
                "Discarding failed transaction",
                tx_id=tx.invocation.tx_id,
                status=tx.response.status,
            )
            return

        with self._lock:
            for key, read_version in tx.read_set.items():
                committed_version = self.version_of(key)
                if committed_version != read_version:
                    raise MVCCConflictError(
                        f"MVCC read conflict on key {key!r}",
                        key=key,
                        read_version=read_version,
                        committed_version=committed_version,
                    )

            self._commit_count += 1
            for key, value in tx.write_set.items():
                self._state[key] = VersionedValue(value=value, version=self._commit_count)

        self.logger.debug(
            "Committed transaction",
            tx_id=tx.invocation.tx_id,
            writes=len(tx.write_set),
            version=self._commit_count,
        )

    def submit(self, contract: InvocableContract, function: str, args: Sequence[str],
               creator: bytes, tx_id: Optional[str] = None) -> Response:
        """Prepare and commit an invocation, returning the contract response."""
        tx = self.prepare(contract, function, args, creator, tx_id)
        self.commit(tx)
        return tx.response
