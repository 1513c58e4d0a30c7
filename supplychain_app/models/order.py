"""
Order record and status vocabulary.

Orders move ``(none) -> open -> ready``. The status field itself stays a
free-form string so records written by older clients keep decoding; the
enum and transition table describe the workflow the contract expects.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from .codec import (
    dump_document,
    expect_list,
    expect_object,
    float_field,
    int_field,
    load_document,
    str_field,
)

RECORD_TYPE = "Order"


class OrderStatus(str, Enum):
    """Order workflow statuses."""
    OPEN = "open"
    READY = "ready"


# Allowed status moves. READY -> OPEN is the distributor import re-homing
# upstream ready orders into the local open queue.
ALLOWED_TRANSITIONS: dict[Optional[OrderStatus], frozenset[OrderStatus]] = {
    None: frozenset({OrderStatus.OPEN}),
    OrderStatus.OPEN: frozenset({OrderStatus.READY}),
    OrderStatus.READY: frozenset({OrderStatus.OPEN}),
}


def is_allowed_transition(current: Optional[str], target: str) -> bool:
    """Check a status move against the transition table.

    ``current`` is None for a record that does not exist yet. Statuses outside
    the vocabulary never satisfy the table.
    """
    try:
        current_status = OrderStatus(current) if current is not None else None
        target_status = OrderStatus(target)
    except ValueError:
        return False
    return target_status in ALLOWED_TRANSITIONS.get(current_status, frozenset())


@dataclass(frozen=True)
class Order:
    """Purchase order stored under the composite key ``(Order, id)``."""

    id: str
    price: float = 0.0
    qty: int = 0
    status: str = ""

    def with_status(self, status: Union[OrderStatus, str]) -> "Order":
        """Return a copy carrying the given status."""
        value = status.value if isinstance(status, OrderStatus) else status
        return replace(self, status=value)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "price": self.price,
            "qty": self.qty,
            "status": self.status,
        }

    def to_json(self) -> bytes:
        return dump_document(self.to_dict())

    @classmethod
    def from_dict(cls, doc: object) -> "Order":
        doc = expect_object(doc, RECORD_TYPE)
        return cls(
            id=str_field(doc, "id", RECORD_TYPE),
            price=float_field(doc, "price", RECORD_TYPE),
            qty=int_field(doc, "qty", RECORD_TYPE),
            status=str_field(doc, "status", RECORD_TYPE),
        )

    @classmethod
    def from_json(cls, raw: Union[bytes, str]) -> "Order":
        return cls.from_dict(load_document(raw, RECORD_TYPE))

    @staticmethod
    def list_from_json(raw: Union[bytes, str]) -> list["Order"]:
        """Decode a JSON array of orders; null decodes as empty."""
        doc = load_document(raw, RECORD_TYPE)
        if doc is None:
            return []
        return [Order.from_dict(item) for item in expect_list(doc, RECORD_TYPE)]

    @staticmethod
    def list_to_json(orders: list["Order"]) -> bytes:
        return dump_document([order.to_dict() for order in orders])
