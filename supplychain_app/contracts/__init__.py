"""
Order and Transport contracts.
"""
from .base import Contract, InvocationContext
from .invoker import CrossContractClient
from .order import OrderContract, OrderFunction
from .transport import TransportContract, TransportFunction

__all__ = [
    "Contract",
    "CrossContractClient",
    "InvocationContext",
    "OrderContract",
    "OrderFunction",
    "TransportContract",
    "TransportFunction",
]
