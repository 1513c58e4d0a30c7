"""Configuration loader with layered parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import DefaultConfig, InvokeParams, LoggingParams, OrderParams, get_default_config
from .validation import ConfigValidator

CONFIG_FILENAME = "contracts.yaml"


@dataclass(frozen=True)
class ContractSettings:
    """Resolved, validated settings for one contract instance."""
    orders: OrderParams
    invoke: InvokeParams
    logging: LoggingParams


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with layered precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load the raw contents of the configuration file."""
        config_file = self.config_dir / CONFIG_FILENAME

        if not config_file.exists():
            return {}

        with open(config_file) as f:
            file_config = yaml.safe_load(f)

        return file_config or {}

    def merge_config(
        self,
        contract_name: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with layered precedence.

        Priority order:
        1. Per-call overrides (highest priority)
        2. Contract-specific section (``contracts.<name>``)
        3. Top-level file values
        4. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        file_config = self.load_file_config()
        contract_sections = file_config.get("contracts", {}) or {}
        top_level = {k: v for k, v in file_config.items() if k != "contracts"}
        config = self._deep_merge(config, top_level)

        if contract_name:
            config = self._deep_merge(config, contract_sections.get(contract_name, {}) or {})

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load_settings(
        self,
        contract_name: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> ContractSettings:
        """Merge, validate and build typed settings for a contract."""
        config = self.merge_config(contract_name, overrides)

        errors = ConfigValidator.validate_config(config)
        if errors:
            details = "; ".join(f"{err.field}: {err.message} (got: {err.value})" for err in errors)
            raise ConfigurationError(
                f"Invalid configuration for {contract_name or 'defaults'}: {details}",
                errors=errors
            )

        return ContractSettings(
            orders=self._build(OrderParams, config.get("orders", {})),
            invoke=self._build(InvokeParams, config.get("invoke", {})),
            logging=self._build(LoggingParams, config.get("logging", {})),
        )

    def _build(self, params_cls: type, values: dict[str, Any]) -> Any:
        """Instantiate a params dataclass, ignoring unknown keys."""
        known = {f.name for f in fields(params_cls)}
        return params_cls(**{k: v for k, v in values.items() if k in known})

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
