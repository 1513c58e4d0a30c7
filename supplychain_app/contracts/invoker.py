"""Synchronous cross-contract invocation with an explicit retry policy."""

import time
from collections.abc import Callable, Sequence
from typing import Optional

from structlog.types import FilteringBoundLogger

from ..config.defaults import InvokeParams
from ..errors import DownstreamError, LedgerError
from ..ledger import OK, LedgerStub, Response

UNEXPECTED_RETURN_MESSAGE = "Got unexpected return from InvokeChaincode"


class CrossContractClient:
    """Calls another contract through the ledger host.

    A call succeeds only on a 200 response returned within ``timeout_ms``.
    Failed attempts are retried ``max_retries`` times, ``retry_delay_ms`` apart.
    """

    def __init__(
        self,
        stub: LedgerStub,
        params: InvokeParams,
        logger: FilteringBoundLogger,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.stub = stub
        self.params = params
        self.logger = logger
        self._sleep = sleep
        self._clock = clock

    def invoke(self, name: str, args: Sequence[str], channel: str) -> Response:
        encoded = [arg.encode("utf-8") for arg in args]
        attempts = self.params.max_retries + 1
        last_status: Optional[int] = None
        last_reason = ""

        for attempt in range(1, attempts + 1):
            started = self._clock()
            try:
                response = self.stub.invoke_contract(name, encoded, channel)
            except LedgerError as e:
                last_status = None
                last_reason = e.message
            else:
                elapsed_ms = (self._clock() - started) * 1000
                self.logger.debug(
                    "Peer contract response",
                    peer=name,
                    peer_channel=channel,
                    status=response.status,
                    payload=response.payload.decode("utf-8", errors="replace"),
                    elapsed_ms=round(elapsed_ms, 3),
                )
                last_status = response.status
                if elapsed_ms > self.params.timeout_ms:
                    last_reason = f"timed out after {elapsed_ms:.0f}ms"
                elif response.status == OK:
                    return response
                else:
                    last_reason = response.message

            self.logger.warning(
                "Peer contract attempt failed",
                peer=name,
                peer_channel=channel,
                attempt=attempt,
                max_attempts=attempts,
                status=last_status,
                reason=last_reason,
            )
            if attempt < attempts and self.params.retry_delay_ms:
                self._sleep(self.params.retry_delay_ms / 1000)

        raise DownstreamError(
            UNEXPECTED_RETURN_MESSAGE,
            target=name,
            channel=channel,
            response_status=last_status,
            attempts=attempts,
            context={"reason": last_reason},
        )
