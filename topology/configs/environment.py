"""
Stack configuration loader.

Reads topology overrides from the Pulumi stack config. Keys use the
deployment context names; absent keys are left out so the resolver applies
its defaults.
"""

from typing import Final

import pulumi

# Stack config key -> TopologyParameters field
CONTEXT_KEYS: Final[dict[str, str]] = {
    "vpcCidr": "network_cidr",
    "instanceType": "compute_instance_type",
    "desiredCapacity": "desired_capacity",
    "minCapacity": "min_capacity",
    "maxCapacity": "max_capacity",
    "dbEngine": "data_engine",
    "dbStorage": "data_storage_gib",
    "dbInstanceType": "data_instance_type",
}


def load_raw_parameters(config: pulumi.Config | None = None) -> dict[str, str]:
    """
    Collect topology overrides from Pulumi stack config.

    Args:
        config: Pulumi config to read from (defaults to the project config)

    Returns:
        dict[str, str]: Sparse mapping of parameter overrides
    """
    config = config or pulumi.Config()

    raw: dict[str, str] = {}
    for key, field in CONTEXT_KEYS.items():
        value = config.get(key)
        if value:
            raw[field] = value
    return raw
