"""
Error classification for contract invocations.

Caller errors (authorization, argument shape, not-found) are reported with a
403-class status; system failures (decode, downstream, ledger) with 500.
"""

from .caller_errors import (
    ContractError,
    CallerError,
    AuthorizationError,
    IdentityError,
    ArgumentShapeError,
    UnknownFunctionError,
    StatusTransitionError,
    InvalidKeyError,
    NotFoundError,
)
from .system_failures import (
    SystemFailureError,
    DecodeError,
    DownstreamError,
    LedgerError,
    MVCCConflictError,
    ConfigurationError,
)

__all__ = [
    "ContractError",
    # Caller Errors
    "CallerError",
    "AuthorizationError",
    "IdentityError",
    "ArgumentShapeError",
    "UnknownFunctionError",
    "StatusTransitionError",
    "InvalidKeyError",
    "NotFoundError",
    # System Failures
    "SystemFailureError",
    "DecodeError",
    "DownstreamError",
    "LedgerError",
    "MVCCConflictError",
    "ConfigurationError",
]
