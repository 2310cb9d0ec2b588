"""
Edge composer.

Derives the internet-facing entry point: a load balancer in the public
subnets, listening on port 80 and forwarding to the compute tier with a
fixed health check (GET /health every 60 seconds).

The edge refers to the compute tier by identifier only. It never holds the
compute spec, so the two specs have no ownership relation; the identifier
is resolved through the plan when ordering and when wiring outputs.
"""

import logging
from dataclasses import dataclass, field

from topology.composers.boundary import SecurityBoundary
from topology.composers.compute import ComputeTierSpec
from topology.composers.network import NetworkPlacement, SubnetTier, SubnetVisibility
from topology.configs.constants import EDGE_TIER, HEALTH_CHECK, PORTS, RESOURCE_IDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HealthCheck:
    """Target health check contract."""
    path: str = HEALTH_CHECK["path"]
    interval_seconds: int = HEALTH_CHECK["interval_seconds"]


@dataclass(frozen=True)
class EdgeSpec:
    """
    Load balancer intent for the edge tier.

    Attributes:
        network_id: Plan identifier of the network placement
        subnet_tier: Public subnet tier the load balancer lives in
        boundary_id: Plan identifier of the security boundary
        boundary_node: Boundary node guarding the load balancer
        target_id: Plan identifier of the compute tier receiving traffic
        listener_port: Port the listener accepts traffic on
        target_port: Port traffic is forwarded to
        internet_facing: Whether the load balancer has a public address
        health_check: Health check applied to targets
    """
    network_id: str
    subnet_tier: SubnetTier
    boundary_id: str
    boundary_node: str
    target_id: str
    listener_port: int = PORTS["http"]
    target_port: int = PORTS["http"]
    internet_facing: bool = True
    health_check: HealthCheck = field(default_factory=HealthCheck)
    resource_id: str = RESOURCE_IDS["edge"]


def compose_edge(
    placement: NetworkPlacement,
    boundary: SecurityBoundary,
    compute: ComputeTierSpec,
) -> EdgeSpec:
    """
    Derive the edge tier and bind it to the compute tier.

    Args:
        placement: Network placement
        boundary: Security boundary graph
        compute: Compute tier receiving the traffic

    Returns:
        EdgeSpec: Edge tier bound to the public subnets
    """
    spec = EdgeSpec(
        network_id=placement.resource_id,
        subnet_tier=placement.tier(SubnetVisibility.PUBLIC),
        boundary_id=boundary.resource_id,
        boundary_node=boundary.node(EDGE_TIER).name,
        target_id=compute.resource_id,
    )
    logger.debug("Composed edge tier targeting %s", spec.target_id)
    return spec
