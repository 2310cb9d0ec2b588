"""
Infrastructure constants for the three-tier topology.

Contains parameter defaults plus the fixed network, boundary, edge and
data tier policy.
"""

from typing import Final

# Parameter defaults (applied by the resolver when a key is absent)
DEFAULT_PARAMETERS: Final[dict[str, str | int]] = {
    "network_cidr": "10.20.0.0/16",
    "compute_instance_type": "t2.micro",
    "desired_capacity": 2,
    "min_capacity": 1,
    "max_capacity": 4,
    "data_engine": "postgres",
    "data_storage_gib": 20,
    "data_instance_type": "t3.micro",
}

# Network policy
AVAILABILITY_ZONE_COUNT: Final[int] = 2
NAT_GATEWAY_COUNT: Final[int] = 1
SUBNET_CIDR_MASK: Final[int] = 24

SUBNET_TIER_NAMES: Final[dict[str, str]] = {
    "public": "PublicSubnet",
    "private-with-egress": "PrivateSubnet",
}

# Boundary node names
EDGE_TIER: Final[str] = "edge-tier"
COMPUTE_TIER: Final[str] = "compute-tier"
DATA_TIER: Final[str] = "data-tier"

ANY_IPV4: Final[str] = "0.0.0.0/0"

# Port configurations
PORTS: Final[dict[str, int]] = {
    "http": 80,
    "postgres": 5432,
}

# Edge health check
HEALTH_CHECK: Final[dict[str, str | int]] = {
    "path": "/health",
    "interval_seconds": 60,
}

# Engine -> pinned version
ENGINE_VERSIONS: Final[dict[str, str]] = {
    "postgres": "15",
    "mysql": "8.0.33",
}

# Generated database credential
DB_USERNAME: Final[str] = "dbadmin"
DB_SECRET_KEY: Final[str] = "password"

# Plan resource identifiers
RESOURCE_IDS: Final[dict[str, str]] = {
    "network": "network",
    "boundary": "boundary",
    "compute": "compute",
    "edge": "edge",
    "credential": "credential",
    "data": "data",
}

# Post-deploy outputs
OUTPUT_ENTRY_POINT: Final[str] = "ALB-DNS"
OUTPUT_DATABASE_ENDPOINT: Final[str] = "RDS-Endpoint"

# Default tags applied to all resources
DEFAULT_TAGS: Final[dict[str, str]] = {
    "Project": "ops-topology",
    "ManagedBy": "pulumi",
}
