"""
Logging configuration and utilities for the supply chain contracts.
"""
from .config import configure_logging, configure_logging_from_params, get_contract_logger, get_logger

__all__ = ["configure_logging", "configure_logging_from_params", "get_contract_logger", "get_logger"]
