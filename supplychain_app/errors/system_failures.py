"""
System failure error classifications for contract invocations.

These exceptions represent failures of stored data or collaborators rather
than of the caller's request. They abort the invocation with a 500 status.
"""

from typing import Optional

from .caller_errors import ContractError


class SystemFailureError(ContractError):
    """Base class for internal invocation failures."""

    status = 500

    def __init__(self, message: str, **kwargs):
        super().__init__(message, **kwargs)
        self.recoverable = False


class DecodeError(SystemFailureError):
    """Stored or supplied bytes do not match the expected record structure."""

    def __init__(self, message: str, record_type: Optional[str] = None,
                 raw_data: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.record_type = record_type
        self.raw_data = raw_data


class DownstreamError(SystemFailureError):
    """Cross-contract invocation did not return success."""

    def __init__(self, message: str, target: Optional[str] = None,
                 channel: Optional[str] = None, response_status: Optional[int] = None,
                 attempts: int = 1, **kwargs):
        super().__init__(message, **kwargs)
        self.target = target
        self.channel = channel
        self.response_status = response_status
        self.attempts = attempts


class LedgerError(SystemFailureError):
    """Ledger host rejected a state access."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 key: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.key = key


class MVCCConflictError(LedgerError):
    """A key read by the transaction changed before commit."""

    def __init__(self, message: str, read_version: Optional[int] = None,
                 committed_version: Optional[int] = None, **kwargs):
        super().__init__(message, operation="commit", **kwargs)
        self.read_version = read_version
        self.committed_version = committed_version


class ConfigurationError(SystemFailureError):
    """Loaded configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
