"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_order_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate order contract parameters."""
        errors = []

        for name in ("retailer_org", "distributor_org", "upstream_contract",
                     "upstream_channel", "upstream_status"):
            if name in params:
                value = params[name]
                if not isinstance(value, str) or not value:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-empty string",
                        value=value
                    ))

        # Short organization names never contain the domain separator
        for name in ("retailer_org", "distributor_org"):
            value = params.get(name)
            if isinstance(value, str) and "." in value:
                errors.append(ValidationError(
                    field=name,
                    message="Must be a short organization name without '.'",
                    value=value
                ))

        if (params.get("retailer_org") is not None
                and params.get("retailer_org") == params.get("distributor_org")):
            errors.append(ValidationError(
                field="distributor_org",
                message="Must differ from retailer_org",
                value=params.get("distributor_org")
            ))

        if "enforce_transitions" in params:
            value = params["enforce_transitions"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="enforce_transitions",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_invoke_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate cross-contract invocation parameters."""
        errors = []

        if "timeout_ms" in params:
            value = params["timeout_ms"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="timeout_ms",
                    message="Must be a positive integer",
                    value=value
                ))

        for name in ("max_retries", "retry_delay_ms"):
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-negative integer",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in VALID_LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {', '.join(VALID_LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @classmethod
    def validate_config(cls, config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "orders" in config:
            errors.extend(cls.validate_order_params(config["orders"]))

        if "invoke" in config:
            errors.extend(cls.validate_invoke_params(config["invoke"]))

        if "logging" in config:
            errors.extend(cls.validate_logging_params(config["logging"]))

        return errors
