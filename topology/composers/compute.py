"""
Compute tier composer.

Binds an auto-scaled instance group to the private-with-egress subnets and
the compute-tier boundary node. Capacity bounds are taken as resolved; the
resolver has already checked min <= desired <= max.
"""

import logging
from dataclasses import dataclass

from topology.composers.boundary import SecurityBoundary
from topology.composers.network import NetworkPlacement, SubnetTier, SubnetVisibility
from topology.configs.base import TopologyParameters
from topology.configs.constants import COMPUTE_TIER, RESOURCE_IDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComputeTierSpec:
    """Auto scaling group intent for the compute tier."""
    instance_type: str
    network_id: str
    subnet_tier: SubnetTier
    boundary_id: str
    boundary_node: str
    min_capacity: int
    desired_capacity: int
    max_capacity: int
    resource_id: str = RESOURCE_IDS["compute"]


def compose_compute(
    params: TopologyParameters,
    placement: NetworkPlacement,
    boundary: SecurityBoundary,
) -> ComputeTierSpec:
    """
    Derive the compute tier.

    Args:
        params: Resolved topology parameters
        placement: Network placement
        boundary: Security boundary graph

    Returns:
        ComputeTierSpec: Compute tier bound to the private subnets
    """
    spec = ComputeTierSpec(
        instance_type=params.compute_instance_type,
        network_id=placement.resource_id,
        subnet_tier=placement.tier(SubnetVisibility.PRIVATE_WITH_EGRESS),
        boundary_id=boundary.resource_id,
        boundary_node=boundary.node(COMPUTE_TIER).name,
        min_capacity=params.min_capacity,
        desired_capacity=params.desired_capacity,
        max_capacity=params.max_capacity,
    )
    logger.debug(
        "Composed compute tier %s (%d/%d/%d)",
        spec.instance_type,
        spec.min_capacity,
        spec.desired_capacity,
        spec.max_capacity,
    )
    return spec
