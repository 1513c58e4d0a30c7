"""
Contract base class and invocation dispatch.

Every invocation resolves the caller, maps the function name onto the
contract's operation enum and runs the matching handler. Handlers raise
``ContractError`` subclasses; the dispatcher turns them into failure
responses carrying the error's status.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, TypeVar

from structlog.types import FilteringBoundLogger

from ..config.loader import ConfigLoader, ContractSettings
from ..errors import (
    ArgumentShapeError,
    CallerError,
    ContractError,
    NotFoundError,
    UnknownFunctionError,
)
from ..identity import CallerIdentity, IdentityResolver
from ..ledger import LedgerStub, Response, error, success
from ..logging.config import get_contract_logger

T = TypeVar("T")

INVALID_FUNCTION_MESSAGE = "Invalid invoke function name."


@dataclass(frozen=True)
class InvocationContext:
    """Everything a handler needs for one invocation."""
    stub: LedgerStub
    args: list[str]
    caller: CallerIdentity
    logger: FilteringBoundLogger


Handler = Callable[[InvocationContext], Optional[bytes]]


class Contract(ABC):
    """Base class for contracts dispatched on a closed operation enum."""

    name: str = "contract"
    functions: type[Enum]

    def __init__(
        self,
        settings: Optional[ContractSettings] = None,
        logger: Optional[FilteringBoundLogger] = None,
        resolver: Optional[IdentityResolver] = None,
    ) -> None:
        self.settings = settings or ConfigLoader.create().load_settings(self.name)
        self.logger = logger or get_contract_logger(__name__, self.name)
        self.resolver = resolver or IdentityResolver(self.logger)

        self._handlers = self.handlers()
        missing = [member.value for member in self.functions if member not in self._handlers]
        if missing:
            raise TypeError(f"{type(self).__name__} has no handler for: {', '.join(missing)}")

    @abstractmethod
    def handlers(self) -> dict[Any, Handler]:
        """Map every member of ``functions`` to its handler."""

    def init(self, stub: LedgerStub) -> Response:
        self.logger.debug("Init", tx_id=stub.tx_id)
        return success()

    def invoke(self, stub: LedgerStub) -> Response:
        log = self.logger.bind(tx_id=stub.tx_id, channel=stub.channel_id)
        log.debug("Invoke")

        function, args = stub.get_function_and_parameters()
        try:
            caller = self.resolver.resolve(stub.get_creator(), log)
            log = log.bind(caller=str(caller))
            log.debug("Transaction creator", common_name=caller.common_name,
                      organization=caller.organization_short)

            operation = self.parse_function(function)
            log = log.bind(function=operation.value)
            payload = self._handlers[operation](
                InvocationContext(stub=stub, args=args, caller=caller, logger=log)
            )
        except CallerError as e:
            log.warning("Invocation rejected", error=e.message, error_type=type(e).__name__,
                        status=e.status)
            return error(e.message, status=e.status)
        except ContractError as e:
            log.error("Invocation failed", error=e.message, error_type=type(e).__name__,
                      status=e.status)
            return error(e.message, status=e.status)

        return success(payload)

    def parse_function(self, function: str) -> Enum:
        try:
            return self.functions(function)
        except ValueError:
            raise UnknownFunctionError(INVALID_FUNCTION_MESSAGE, function=function) from None

    # -- helpers shared by handlers ---------------------------------------

    @staticmethod
    def require_args(args: list[str], count: int, message: str = "Incorrect number of arguments",
                     at_least: bool = False) -> None:
        """Check the argument count; with ``at_least`` trailing extras are allowed."""
        if at_least:
            invalid, expected = len(args) < count, f">={count}"
        else:
            invalid, expected = len(args) != count, str(count)
        if invalid:
            raise ArgumentShapeError(message, expected=expected, received=len(args))

    @staticmethod
    def read_record(stub: LedgerStub, key: str) -> bytes:
        """Stored value for ``key``; absent and empty values are both not-found."""
        value = stub.get_state(key)
        if not value:
            _, attributes = stub.split_composite_key(key)
            raise NotFoundError(f"No record found for {'/'.join(attributes)}", key=key)
        return value

    @staticmethod
    def scan_records(stub: LedgerStub, object_type: str,
                     decode: Callable[[bytes], T]) -> list[T]:
        """Decode every record stored under ``object_type``."""
        records = []
        with stub.get_state_by_partial_composite_key(object_type, []) as iterator:
            for entry in iterator:
                records.append(decode(entry.value))
        return records
