"""
Ledger record models.

Order and Transport records with their JSON codec and the order status
vocabulary.
"""
from .order import ALLOWED_TRANSITIONS, Order, OrderStatus, is_allowed_transition
from .transport import Status, Transport

__all__ = [
    "ALLOWED_TRANSITIONS",
    "Order",
    "OrderStatus",
    "Status",
    "Transport",
    "is_allowed_transition",
]
