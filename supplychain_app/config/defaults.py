"""Default configuration parameters for the supply chain contracts."""

from dataclasses import dataclass


@dataclass(frozen=True)
class OrderParams:
    """Order contract roles and upstream import source."""
    # Authorization roles (short organization names)
    retailer_org: str = "retailer"                  # May author new orders
    distributor_org: str = "distributor"            # Imports upstream ready orders

    # Upstream import for the distributor path
    upstream_contract: str = "order"
    upstream_channel: str = "retailer-distributor"
    upstream_status: str = "ready"                  # Status queried upstream

    # Status vocabulary strictness
    enforce_transitions: bool = False               # Reject moves outside the table


@dataclass(frozen=True)
class InvokeParams:
    """Cross-contract invocation policy."""
    timeout_ms: int = 30000
    max_retries: int = 0                            # 0 = single attempt
    retry_delay_ms: int = 0


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    orders: OrderParams
    invoke: InvokeParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        orders=OrderParams(),
        invoke=InvokeParams(),
        logging=LoggingParams(),
    )
