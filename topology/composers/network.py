"""
Network composer.

Derives the subnet layout from a CIDR block. Policy is fixed:
- 2 availability zones, 1 NAT gateway for the private tier
- /24 subnets for both tiers
- Tier order [public, private-with-egress]
- Blocks carved tier-major: public AZ-a, public AZ-b, private AZ-a, private AZ-b

The composer is a pure function: the same CIDR always yields an equal
placement.
"""

import ipaddress
import logging
from dataclasses import dataclass
from enum import Enum

from topology.configs.base import MAX_NETWORK_PREFIX
from topology.configs.constants import (
    AVAILABILITY_ZONE_COUNT,
    NAT_GATEWAY_COUNT,
    RESOURCE_IDS,
    SUBNET_CIDR_MASK,
    SUBNET_TIER_NAMES,
)
from topology.exceptions import DependencyCycle, InvalidParameter

logger = logging.getLogger(__name__)


class SubnetVisibility(str, Enum):
    """Reachability class of a subnet tier."""

    PUBLIC = "public"
    PRIVATE_WITH_EGRESS = "private-with-egress"


@dataclass(frozen=True)
class SubnetTier:
    """One subnet tier, with one CIDR block per availability zone."""
    name: str
    cidr_mask: int
    visibility: SubnetVisibility
    cidr_blocks: tuple[str, ...]


@dataclass(frozen=True)
class NetworkPlacement:
    """
    Network layout shared by every tier.

    Attributes:
        cidr: CIDR block of the whole network
        availability_zone_count: Number of AZs the subnets span
        nat_gateways: NAT gateways serving the private tier
        subnet_tiers: Tiers in order [public, private-with-egress]
        resource_id: Plan identifier
    """
    cidr: str
    availability_zone_count: int
    nat_gateways: int
    subnet_tiers: tuple[SubnetTier, ...]
    resource_id: str = RESOURCE_IDS["network"]

    def tier(self, visibility: SubnetVisibility) -> SubnetTier:
        """Return the subnet tier with the given visibility."""
        for subnet_tier in self.subnet_tiers:
            if subnet_tier.visibility == visibility:
                return subnet_tier
        raise DependencyCycle(
            f"Network placement has no {visibility.value} tier",
            resource_id=self.resource_id,
            details={"visibility": visibility.value},
        )


def compose_network(cidr: str) -> NetworkPlacement:
    """
    Derive the network placement for a CIDR block.

    Args:
        cidr: IPv4 CIDR block of the network

    Returns:
        NetworkPlacement: Deterministic two-tier, two-AZ layout

    Raises:
        InvalidParameter: If the CIDR is malformed or too small for the layout
    """
    try:
        network = ipaddress.IPv4Network(cidr)
    except ValueError as e:
        raise InvalidParameter(f"Invalid IPv4 CIDR block: {cidr}", field="network_cidr") from e
    if network.prefixlen > MAX_NETWORK_PREFIX:
        raise InvalidParameter(
            f"CIDR block {cidr} cannot hold the subnet layout",
            field="network_cidr",
            details={"max_prefix": MAX_NETWORK_PREFIX},
        )

    blocks = network.subnets(new_prefix=SUBNET_CIDR_MASK)
    tiers = []
    for visibility in (SubnetVisibility.PUBLIC, SubnetVisibility.PRIVATE_WITH_EGRESS):
        tiers.append(SubnetTier(
            name=SUBNET_TIER_NAMES[visibility.value],
            cidr_mask=SUBNET_CIDR_MASK,
            visibility=visibility,
            cidr_blocks=tuple(str(next(blocks)) for _ in range(AVAILABILITY_ZONE_COUNT)),
        ))

    placement = NetworkPlacement(
        cidr=str(network),
        availability_zone_count=AVAILABILITY_ZONE_COUNT,
        nat_gateways=NAT_GATEWAY_COUNT,
        subnet_tiers=tuple(tiers),
    )
    logger.debug("Composed network %s with %d subnet tiers", placement.cidr, len(tiers))
    return placement
