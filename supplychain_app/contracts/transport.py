"""
Transport contract.

Shipments are created once and then only grow their status history. The
author of each appended status is the caller's resolved organization.
"""

from enum import Enum

from ..models.transport import RECORD_TYPE, Status, Transport
from .base import Contract, Handler, InvocationContext


class TransportFunction(str, Enum):
    """Operations exposed by the transport contract."""
    CREATE = "create"
    UPDATE = "update"
    QUERY = "query"


class TransportContract(Contract):
    """Creation, status updates and listing of transports."""

    name = "transport"
    functions = TransportFunction

    def handlers(self) -> dict[TransportFunction, Handler]:
        return {
            TransportFunction.CREATE: self.create,
            TransportFunction.UPDATE: self.update,
            TransportFunction.QUERY: self.query,
        }

    def create(self, ctx: InvocationContext) -> None:
        self.require_args(ctx.args, 1, at_least=True)
        raw = ctx.args[0]
        transport = Transport.from_json(raw)

        key = ctx.stub.create_composite_key(RECORD_TYPE, [transport.id])
        ctx.stub.put_state(key, raw.encode("utf-8"))

        ctx.logger.info("Created transport", transport_id=transport.id, qty=transport.qty,
                        statuses=len(transport.statuses))

    def update(self, ctx: InvocationContext) -> None:
        self.require_args(ctx.args, 2)
        transport_id, status_name = ctx.args

        key = ctx.stub.create_composite_key(RECORD_TYPE, [transport_id])
        transport = Transport.from_json(self.read_record(ctx.stub, key))

        status = Status(name=status_name, author=ctx.caller.organization_short)
        updated = transport.with_status(status)
        ctx.stub.put_state(key, updated.to_json())

        ctx.logger.info("Appended transport status", transport_id=transport_id,
                        status=status.name, author=status.author,
                        history_length=len(updated.statuses))

    def query(self, ctx: InvocationContext) -> bytes:
        transports = self.scan_records(ctx.stub, RECORD_TYPE, Transport.from_json)
        ctx.logger.debug("Transport listing", count=len(transports))
        return Transport.list_to_json(transports)
