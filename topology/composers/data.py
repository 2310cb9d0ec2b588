"""
Data tier composer.

Derives the managed database: engine and pinned version, storage, instance
class, private placement, data-tier boundary node and generated credential.

Engine selection (case-insensitive):
- mysql -> MySQL 8.0.33
- postgres -> PostgreSQL 15
- anything else -> UnrecognizedEngine

The database listens on the port the boundary opens from the compute tier
(5432) for either engine.

Dev/test posture: multi-AZ and deletion protection are always off and the
instance is destroyed without a final snapshot when the plan is retracted.
"""

import logging
from dataclasses import dataclass

from topology.composers.boundary import SecurityBoundary
from topology.composers.credentials import CredentialDescriptor
from topology.composers.network import NetworkPlacement, SubnetTier, SubnetVisibility
from topology.configs.base import TopologyParameters
from topology.configs.constants import DATA_TIER, ENGINE_VERSIONS, RESOURCE_IDS
from topology.exceptions import BoundaryViolation, UnrecognizedEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataTierSpec:
    """Managed database intent for the data tier."""
    engine: str
    engine_version: str
    storage_gib: int
    instance_type: str
    port: int
    network_id: str
    subnet_tier: SubnetTier
    boundary_id: str
    boundary_node: str
    credential_id: str
    multi_az: bool = False
    deletion_protection: bool = False
    destroy_on_retract: bool = True
    resource_id: str = RESOURCE_IDS["data"]


def select_engine(engine: str) -> tuple[str, str]:
    """
    Map an engine name to (engine, pinned version).

    Raises:
        UnrecognizedEngine: If the engine is neither postgres nor mysql
    """
    normalized = engine.lower()
    if normalized not in ENGINE_VERSIONS:
        raise UnrecognizedEngine(engine)
    return normalized, ENGINE_VERSIONS[normalized]


def compose_data(
    params: TopologyParameters,
    placement: NetworkPlacement,
    boundary: SecurityBoundary,
    credential: CredentialDescriptor,
) -> DataTierSpec:
    """
    Derive the data tier.

    Args:
        params: Resolved topology parameters
        placement: Network placement
        boundary: Security boundary graph
        credential: Generated credential request

    Returns:
        DataTierSpec: Database bound to the private subnets
    """
    engine, engine_version = select_engine(params.data_engine)
    data_node = boundary.node(DATA_TIER)

    # Port follows the compute -> data boundary rule
    inbound = boundary.inbound(data_node.name)
    if not inbound:
        raise BoundaryViolation("Data tier has no inbound rule", node=data_node.name)
    port = inbound[0].port

    spec = DataTierSpec(
        engine=engine,
        engine_version=engine_version,
        storage_gib=params.data_storage_gib,
        instance_type=params.data_instance_type,
        port=port,
        network_id=placement.resource_id,
        subnet_tier=placement.tier(SubnetVisibility.PRIVATE_WITH_EGRESS),
        boundary_id=boundary.resource_id,
        boundary_node=data_node.name,
        credential_id=credential.resource_id,
    )
    logger.debug("Composed data tier %s %s", spec.engine, spec.engine_version)
    return spec
