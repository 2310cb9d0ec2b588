"""
Security boundary composer.

Builds the directed access graph between the three logical tiers.

Nodes:
- edge-tier: the load balancer. Open to any IPv4 address on port 80.
- compute-tier: the instances. Reachable only from edge-tier on port 80.
- data-tier: the database. Reachable only from compute-tier on port 5432,
  with all outbound traffic denied.

A rule (A -> B, port, protocol) permits traffic from A to reach B. Nodes
carry no state beyond identity and their outbound policy.
"""

import logging
from dataclasses import dataclass

from topology.configs.constants import (
    COMPUTE_TIER,
    DATA_TIER,
    EDGE_TIER,
    PORTS,
    RESOURCE_IDS,
)
from topology.exceptions import BoundaryViolation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundaryNode:
    """A logical access-control unit (one security group)."""
    name: str
    description: str
    allow_all_outbound: bool


@dataclass(frozen=True)
class BoundaryRule:
    """
    Permitted traffic from one node (or anywhere) to another.

    Attributes:
        source: Source node name, or None for any IPv4 address
        target: Target node name
        port: Destination port
        protocol: IP protocol
        description: Rule description
    """
    source: str | None
    target: str
    port: int
    protocol: str = "tcp"
    description: str = ""

    @property
    def unrestricted(self) -> bool:
        """Whether the rule admits traffic from any address."""
        return self.source is None


@dataclass(frozen=True)
class SecurityBoundary:
    """Directed graph of boundary nodes and the rules between them."""
    nodes: tuple[BoundaryNode, ...]
    rules: tuple[BoundaryRule, ...]
    network_id: str = RESOURCE_IDS["network"]
    resource_id: str = RESOURCE_IDS["boundary"]

    def node(self, name: str) -> BoundaryNode:
        """Return the node with the given name."""
        for boundary_node in self.nodes:
            if boundary_node.name == name:
                return boundary_node
        raise BoundaryViolation(f"Boundary has no node: {name}", node=name)

    def inbound(self, name: str) -> tuple[BoundaryRule, ...]:
        """Return the rules targeting a node."""
        return tuple(rule for rule in self.rules if rule.target == name)

    def edges(self) -> tuple[BoundaryRule, ...]:
        """Return the node-to-node rules."""
        return tuple(rule for rule in self.rules if not rule.unrestricted)

    def unrestricted_rules(self) -> tuple[BoundaryRule, ...]:
        """Return the rules open to any address."""
        return tuple(rule for rule in self.rules if rule.unrestricted)


def compose_boundary() -> SecurityBoundary:
    """
    Build the three-node, two-edge security boundary.

    Returns:
        SecurityBoundary: Verified boundary graph
    """
    boundary = SecurityBoundary(
        nodes=(
            BoundaryNode(EDGE_TIER, "ALB security group", allow_all_outbound=True),
            BoundaryNode(COMPUTE_TIER, "EC2 security group", allow_all_outbound=True),
            BoundaryNode(DATA_TIER, "Database security group", allow_all_outbound=False),
        ),
        rules=(
            BoundaryRule(None, EDGE_TIER, PORTS["http"], description="Allow HTTP"),
            BoundaryRule(EDGE_TIER, COMPUTE_TIER, PORTS["http"], description="Allow HTTP from ALB"),
            BoundaryRule(
                COMPUTE_TIER,
                DATA_TIER,
                PORTS["postgres"],
                description="Allow database traffic from EC2",
            ),
        ),
    )
    verify_boundary(boundary)
    logger.debug(
        "Composed boundary with %d nodes and %d rules",
        len(boundary.nodes),
        len(boundary.rules),
    )
    return boundary


def verify_boundary(boundary: SecurityBoundary) -> None:
    """
    Check the boundary access policy.

    Args:
        boundary: Boundary graph to check

    Raises:
        BoundaryViolation: If a rule references an unknown node, if any rule
            other than edge-tier HTTP is open to any address, or if the data
            tier permits outbound traffic
    """
    names = {boundary_node.name for boundary_node in boundary.nodes}
    for rule in boundary.rules:
        for endpoint in (rule.source, rule.target):
            if endpoint is not None and endpoint not in names:
                raise BoundaryViolation(f"Rule references unknown node: {endpoint}", node=endpoint)

    open_rules = boundary.unrestricted_rules()
    if len(open_rules) != 1:
        raise BoundaryViolation(
            "Exactly one rule may be open to any address",
            details={"open_rules": len(open_rules)},
        )
    open_rule = open_rules[0]
    if open_rule.target != EDGE_TIER or open_rule.port != PORTS["http"]:
        raise BoundaryViolation(
            "Only edge-tier HTTP may be open to any address",
            node=open_rule.target,
            details={"port": open_rule.port},
        )

    if DATA_TIER in names and boundary.node(DATA_TIER).allow_all_outbound:
        raise BoundaryViolation("Data tier must deny all outbound traffic", node=DATA_TIER)
