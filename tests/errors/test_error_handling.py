"""
Error handling tests for the contract invocation path.

Tests cover the error hierarchy, status mapping, and that failed invocations
leave ledger state untouched.
"""

import pytest

from conftest import order_json, transport_json
from supplychain_app.errors import (
    ArgumentShapeError,
    AuthorizationError,
    CallerError,
    ConfigurationError,
    ContractError,
    DecodeError,
    DownstreamError,
    IdentityError,
    InvalidKeyError,
    LedgerError,
    MVCCConflictError,
    NotFoundError,
    StatusTransitionError,
    SystemFailureError,
    UnknownFunctionError,
)
from supplychain_app.ledger import create_composite_key


class TestErrorClassification:
    """Test error classification system."""

    def test_caller_error_hierarchy(self):
        base_error = CallerError("base error")
        assert base_error.recoverable is True
        assert base_error.context == {}
        assert base_error.status == 403

        auth_error = AuthorizationError("denied", organization="carrier", operation="create")
        assert isinstance(auth_error, CallerError)
        assert auth_error.organization == "carrier"

        identity_error = IdentityError("bad cert", reason="invalid_certificate")
        assert isinstance(identity_error, AuthorizationError)
        assert identity_error.status == 403

        shape_error = ArgumentShapeError("wrong count", expected="2", received=1)
        assert shape_error.expected == "2"
        assert shape_error.received == 1

        unknown = UnknownFunctionError("Invalid invoke function name.", function="delete")
        assert isinstance(unknown, ArgumentShapeError)

        transition = StatusTransitionError("no", current_status="ready", attempted_status="ready")
        assert transition.current_status == "ready"

        assert isinstance(InvalidKeyError("bad", component="\x00"), CallerError)

    def test_not_found_has_own_status(self):
        error = NotFoundError("missing", key="k")
        assert isinstance(error, CallerError)
        assert error.status == 404
        assert error.key == "k"

    def test_system_failure_error_hierarchy(self):
        decode_error = DecodeError("bad json", record_type="Order", raw_data="{")
        assert decode_error.recoverable is False
        assert decode_error.status == 500
        assert decode_error.record_type == "Order"

        downstream = DownstreamError("down", target="order", channel="rd",
                                     response_status=500, attempts=3)
        assert isinstance(downstream, SystemFailureError)
        assert downstream.attempts == 3

        conflict = MVCCConflictError("conflict", key="k", read_version=1, committed_version=2)
        assert isinstance(conflict, LedgerError)
        assert conflict.operation == "commit"
        assert conflict.key == "k"

        config_error = ConfigurationError("bad config", errors=["x"])
        assert config_error.errors == ["x"]

    def test_every_error_is_a_contract_error(self):
        for error_cls in (CallerError, SystemFailureError, NotFoundError, DecodeError):
            assert issubclass(error_cls, ContractError)

    def test_context_is_preserved(self):
        error = DecodeError("bad", context={"tx_id": "t1"})
        assert error.context == {"tx_id": "t1"}
        assert str(error) == "bad"


class TestFailedInvocationsLeaveStateUntouched:
    """Every failure aborts the whole invocation."""

    def test_rejected_create_writes_nothing(self, ledger, order_contract, carrier):
        before = dict(ledger.range("", "\U0010ffff"))

        response = ledger.submit(order_contract, "create", [order_json()], carrier)

        assert not response.ok
        assert dict(ledger.range("", "\U0010ffff")) == before

    def test_partial_import_is_rolled_back(self, ledger, upstream_ledger, order_contract,
                                           distributor):
        class HalfBadPeer:
            def invoke(self, stub):
                from supplychain_app.ledger import success
                return success(b'[{"id": "O1", "status": "ready"}, {"id": 2}]')

        ledger.register_peer("order", HalfBadPeer(), upstream_ledger)

        response = ledger.submit(order_contract, "create", [], distributor)

        assert response.status == 500
        assert ledger.get(create_composite_key("Order", ["O1"])) is None

    def test_invalid_key_component_is_caller_error(self, ledger, transport_contract, carrier):
        response = ledger.submit(transport_contract, "create",
                                 [transport_json("bad\u0000id")], carrier)

        assert response.status == 403
        assert "reserved character" in response.message
