"""
Centralized logging configuration for the supply chain contracts.

This module provides standardized logging configuration using structlog.
Contracts receive a logger at construction and bind invocation context
(transaction id, caller) onto it, so every line emitted while handling an
invocation carries that context.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger

from ..config.defaults import LoggingParams


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s",
        force=True
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging_from_params(params: LoggingParams, **kwargs: Any) -> None:
    """Apply the `logging` section of loaded contract settings."""
    configure_logging(level=params.level, format_json=params.format_json, **kwargs)


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_contract_logger(name: str, contract: str) -> FilteringBoundLogger:
    """
    Get a logger for a contract instance.

    Args:
        name: Logger name (typically __name__)
        contract: Contract name bound onto every entry

    Returns:
        Configured structlog logger bound to the contract
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="contract",
        contract=contract,
        audit_trail=True
    )


def log_authorization_decision(
    logger: FilteringBoundLogger,
    operation: str,
    organization: str,
    allowed: bool,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log an authorization decision with standardized format.

    Args:
        logger: Structlog logger instance
        operation: Operation the caller attempted
        organization: Resolved caller organization
        allowed: Whether the caller was let through
        reason: Detailed reason for the decision
        context: Additional context data
    """
    bound_logger = logger.bind(
        operation=operation,
        organization=organization,
        decision="ALLOW" if allowed else "DENY",
        reason=reason,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if allowed:
        bound_logger.info("Authorization granted")
    else:
        bound_logger.warning("Authorization denied")


def log_state_transition(
    logger: FilteringBoundLogger,
    record_type: str,
    record_id: str,
    from_status: Optional[str],
    to_status: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a record status transition with standardized format.

    Args:
        logger: Structlog logger instance
        record_type: Ledger object type (Order, Transport)
        record_id: ID of the record transitioning
        from_status: Status before the write, None for a new record
        to_status: Status written
        trigger: Operation that caused the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        record_type=record_type,
        record_id=record_id,
        from_status=from_status if from_status is not None else "none",
        to_status=to_status,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("State transition")
