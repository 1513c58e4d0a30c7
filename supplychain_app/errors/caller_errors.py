"""
Caller error classifications for contract invocations.

These exceptions describe invocations the contract refuses because of who
is calling or how the call is shaped. They are reported back to the caller
with a 403-class status and never change ledger state.
"""

from typing import Any, Dict, Optional


class ContractError(Exception):
    """Base class for every error surfaced as an invocation failure."""

    status: int = 500

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class CallerError(ContractError):
    """Base class for authorization and argument-shape failures."""

    status = 403

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.recoverable = True


class AuthorizationError(CallerError):
    """Caller organization is not allowed to perform the operation."""

    def __init__(self, message: str, organization: Optional[str] = None,
                 operation: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.organization = organization
        self.operation = operation


class IdentityError(AuthorizationError):
    """Caller credential could not be decoded into a usable identity."""

    def __init__(self, message: str, reason: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.reason = reason


class ArgumentShapeError(CallerError):
    """Wrong number of arguments for the invoked operation."""

    def __init__(self, message: str, expected: Optional[str] = None,
                 received: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.expected = expected
        self.received = received


class UnknownFunctionError(ArgumentShapeError):
    """Invoked function name is not an operation of the contract."""

    def __init__(self, message: str, function: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.function = function


class StatusTransitionError(CallerError):
    """Record status change outside the allowed transition table."""

    def __init__(self, message: str, current_status: Optional[str] = None,
                 attempted_status: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_status = current_status
        self.attempted_status = attempted_status


class InvalidKeyError(CallerError):
    """Composite key component the ledger cannot store."""

    def __init__(self, message: str, component: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.component = component


class NotFoundError(CallerError):
    """Lookup by key yielded no record."""

    status = 404

    def __init__(self, message: str, key: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.key = key
