#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from supplychain_app.config.loader import ConfigLoader
from supplychain_app.config.validation import ConfigValidator, ValidationError

CONTRACTS = ["order", "transport"]


def validate_contract_config(loader: ConfigLoader, contract_name: str) -> List[ValidationError]:
    """Validate merged configuration for a specific contract."""
    config = loader.merge_config(contract_name)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)
    print(f"Validating contract configuration in {loader.config_dir}")

    all_valid = True
    for contract_name in CONTRACTS:
        print(f"\n[{contract_name}]")

        try:
            errors = validate_contract_config(loader, contract_name)
        except Exception as e:  # yaml errors, unreadable file
            print(f"  error loading configuration: {e}")
            all_valid = False
            continue

        if errors:
            print(f"  {len(errors)} validation error(s):")
            for error in errors:
                print(f"  - {error.field}: {error.message} (value: {error.value!r})")
            all_valid = False
        else:
            settings = loader.load_settings(contract_name)
            print(f"  orders: {settings.orders}")
            print(f"  invoke: {settings.invoke}")
            print("  valid")

    if all_valid:
        print("\nAll contract configuration is valid.")
        sys.exit(0)
    else:
        print("\nConfiguration validation failed.")
        sys.exit(1)


if __name__ == "__main__":
    main()
