"""Tests for structured logging emitted by the contracts."""

import json
import logging

import pytest
import structlog
import yaml
from structlog.testing import capture_logs

from conftest import order_json, transport_json
from supplychain_app.config.loader import ConfigLoader
from supplychain_app.contracts import OrderContract, TransportContract
from supplychain_app.logging import configure_logging, configure_logging_from_params, get_contract_logger
from supplychain_app.logging.config import log_authorization_decision, log_state_transition


@pytest.fixture(autouse=True)
def reset_structlog():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestContractLogging:
    """Test log entries produced while handling invocations."""

    def test_invocation_context_is_bound(self, ledger, settings, retailer):
        with capture_logs() as logs:
            contract = OrderContract(settings=settings)
            ledger.submit(contract, "create", [order_json()], retailer, tx_id="tx-42")

        transition = next(entry for entry in logs if entry["event"] == "State transition")
        assert transition["tx_id"] == "tx-42"
        assert transition["contract"] == "order"
        assert transition["function"] == "create"
        assert transition["caller"] == "User1@retailer.example.com@retailer"
        assert transition["record_id"] == "O1"
        assert transition["from_status"] == "none"
        assert transition["to_status"] == "open"

    def test_resolved_identity_is_logged(self, ledger, settings, retailer):
        with capture_logs() as logs:
            contract = OrderContract(settings=settings)
            ledger.submit(contract, "query", ["ready"], retailer)

        resolved = next(entry for entry in logs if entry["event"] == "Resolved caller identity")
        assert resolved["organization"] == "retailer.example.com"
        assert resolved["log_level"] == "debug"

    def test_denied_create_logs_warning(self, ledger, settings, carrier):
        with capture_logs() as logs:
            contract = OrderContract(settings=settings)
            ledger.submit(contract, "create", [order_json()], carrier)

        denied = next(entry for entry in logs if entry["event"] == "Authorization denied")
        assert denied["log_level"] == "warning"
        assert denied["organization"] == "carrier"
        assert denied["decision"] == "DENY"

        rejected = next(entry for entry in logs if entry["event"] == "Invocation rejected")
        assert rejected["error_type"] == "AuthorizationError"
        assert rejected["status"] == 403

    def test_system_failure_logs_error(self, ledger, settings, carrier):
        with capture_logs() as logs:
            contract = TransportContract(settings=settings)
            ledger.submit(contract, "create", ["{"], carrier)

        failed = next(entry for entry in logs if entry["event"] == "Invocation failed")
        assert failed["log_level"] == "error"
        assert failed["error_type"] == "DecodeError"

    def test_out_of_workflow_transition_warns(self, ledger, settings, retailer):
        with capture_logs() as logs:
            contract = OrderContract(settings=settings)
            ledger.submit(contract, "create", [order_json(status="ready")], retailer)

        warning = next(entry for entry in logs
                       if entry["event"] == "Order status transition outside workflow")
        assert warning["to_status"] == "ready"

    def test_injected_logger_is_used(self, ledger, settings, carrier):
        with capture_logs() as logs:
            logger = structlog.get_logger("custom").bind(deployment="staging")
            contract = TransportContract(settings=settings, logger=logger)
            ledger.submit(contract, "create", [transport_json()], carrier)

        created = next(entry for entry in logs if entry["event"] == "Created transport")
        assert created["deployment"] == "staging"
        assert "contract" not in created


class TestLoggingHelpers:
    """Test the standardized logging helpers."""

    def test_contract_logger_binding(self):
        with capture_logs() as logs:
            get_contract_logger(__name__, "transport").info("hello")

        assert logs[0]["subsystem"] == "contract"
        assert logs[0]["contract"] == "transport"
        assert logs[0]["audit_trail"] is True

    def test_log_state_transition_with_context(self):
        with capture_logs() as logs:
            log_state_transition(structlog.get_logger(), "Order", "O1", "ready", "open",
                                 "import", context={"source_channel": "rd"})

        assert logs[0]["from_status"] == "ready"
        assert logs[0]["context"] == {"source_channel": "rd"}

    def test_log_authorization_decision_allow(self):
        with capture_logs() as logs:
            log_authorization_decision(structlog.get_logger(), "create", "retailer", True, "ok")

        assert logs[0]["log_level"] == "info"
        assert logs[0]["decision"] == "ALLOW"

    def test_configure_logging_json_output(self, capsys):
        configure_logging(level="DEBUG", format_json=True, include_timestamp=False)

        structlog.get_logger("json-test").info("rendered", record_id="O1")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "rendered"
        assert payload["record_id"] == "O1"
        assert payload["level"] == "info"

    def test_configure_logging_sets_level(self):
        configure_logging(level="warning")

        assert logging.getLogger().level == logging.WARNING

    def test_logging_section_of_settings_is_applied(self, tmp_path, capsys):
        (tmp_path / "contracts.yaml").write_text(
            yaml.safe_dump({"logging": {"level": "WARNING", "format_json": True}})
        )
        settings = ConfigLoader.create(tmp_path).load_settings("order")

        configure_logging_from_params(settings.logging, include_timestamp=False)
        log = structlog.get_logger("settings-test")
        log.info("suppressed")
        log.warning("emitted", record_id="O1")

        lines = capsys.readouterr().out.strip().splitlines()
        assert logging.getLogger().level == logging.WARNING
        assert [json.loads(line)["event"] for line in lines] == ["emitted"]
