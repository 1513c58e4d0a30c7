"""
Order contract.

Retailers author new orders; distributors import the upstream ledger's ready
orders into this ledger's open queue; anyone may complete or query an order.
"""

from enum import Enum
from typing import Optional

from ..errors import AuthorizationError, StatusTransitionError
from ..logging.config import log_authorization_decision, log_state_transition
from ..models.order import RECORD_TYPE, Order, OrderStatus, is_allowed_transition
from .base import Contract, Handler, InvocationContext
from .invoker import CrossContractClient

STATUS_QUERIES = frozenset(status.value for status in OrderStatus)
QUERY_ARGS_MESSAGE = "Incorrect number of arguments, provide id or status (open, ready)"


class OrderFunction(str, Enum):
    """Operations exposed by the order contract."""
    CREATE = "create"
    COMPLETE = "complete"
    QUERY = "query"


class OrderContract(Contract):
    """Role-gated creation, completion and querying of orders."""

    name = "order"
    functions = OrderFunction

    def handlers(self) -> dict[OrderFunction, Handler]:
        return {
            OrderFunction.CREATE: self.create,
            OrderFunction.COMPLETE: self.complete,
            OrderFunction.QUERY: self.query,
        }

    def create(self, ctx: InvocationContext) -> None:
        org = ctx.caller.organization_short
        params = self.settings.orders

        if org == params.retailer_org:
            log_authorization_decision(ctx.logger, "create", org, True, "retailer authors orders")
            self._create_order(ctx)
        elif org == params.distributor_org:
            log_authorization_decision(ctx.logger, "create", org, True, "distributor imports orders")
            self._import_upstream_orders(ctx)
        else:
            log_authorization_decision(ctx.logger, "create", org, False, "unrecognized organization")
            raise AuthorizationError(
                f"Don't know how to handle org {org}",
                organization=org,
                operation="create"
            )

    def _create_order(self, ctx: InvocationContext) -> None:
        self.require_args(ctx.args, 1, at_least=True)
        raw = ctx.args[0]
        order = Order.from_json(raw)

        self._check_transition(ctx, order.id, None, order.status)
        key = ctx.stub.create_composite_key(RECORD_TYPE, [order.id])
        # The caller's document is stored as sent
        ctx.stub.put_state(key, raw.encode("utf-8"))

        log_state_transition(ctx.logger, RECORD_TYPE, order.id, None, order.status, "create")

    def _import_upstream_orders(self, ctx: InvocationContext) -> None:
        params = self.settings.orders
        client = CrossContractClient(ctx.stub, self.settings.invoke, ctx.logger)
        response = client.invoke(
            params.upstream_contract,
            [OrderFunction.QUERY.value, params.upstream_status],
            params.upstream_channel,
        )

        orders = Order.list_from_json(response.payload)
        for order in orders:
            self._check_transition(ctx, order.id, order.status, OrderStatus.OPEN.value)
            key = ctx.stub.create_composite_key(RECORD_TYPE, [order.id])
            ctx.stub.put_state(key, order.with_status(OrderStatus.OPEN).to_json())
            log_state_transition(
                ctx.logger, RECORD_TYPE, order.id, order.status, OrderStatus.OPEN.value,
                "import", context={"source_channel": params.upstream_channel}
            )

        ctx.logger.info("Imported upstream orders", count=len(orders),
                        source=params.upstream_contract, source_channel=params.upstream_channel)

    def complete(self, ctx: InvocationContext) -> None:
        self.require_args(ctx.args, 1)
        order_id = ctx.args[0]

        key = ctx.stub.create_composite_key(RECORD_TYPE, [order_id])
        order = Order.from_json(self.read_record(ctx.stub, key))

        self._check_transition(ctx, order_id, order.status, OrderStatus.READY.value)
        ctx.stub.put_state(key, order.with_status(OrderStatus.READY).to_json())

        log_state_transition(ctx.logger, RECORD_TYPE, order_id, order.status,
                             OrderStatus.READY.value, "complete")

    def query(self, ctx: InvocationContext) -> bytes:
        self.require_args(ctx.args, 1, QUERY_ARGS_MESSAGE)
        selector = ctx.args[0]

        if selector not in STATUS_QUERIES:
            key = ctx.stub.create_composite_key(RECORD_TYPE, [selector])
            return self.read_record(ctx.stub, key)

        # Status is not indexed; filter a full scan
        orders = [
            order for order in self.scan_records(ctx.stub, RECORD_TYPE, Order.from_json)
            if order.status == selector
        ]
        ctx.logger.debug("Status query", status=selector, matches=len(orders))
        return Order.list_to_json(orders)

    def _check_transition(self, ctx: InvocationContext, order_id: str,
                          current: Optional[str], target: str) -> None:
        if is_allowed_transition(current, target):
            return

        if self.settings.orders.enforce_transitions:
            raise StatusTransitionError(
                f"Order {order_id} cannot move from {current or 'none'} to {target}",
                current_status=current,
                attempted_status=target
            )

        ctx.logger.warning(
            "Order status transition outside workflow",
            order_id=order_id,
            from_status=current if current is not None else "none",
            to_status=target,
        )
