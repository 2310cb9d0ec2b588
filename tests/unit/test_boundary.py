"""Tests for the security boundary composer."""

from dataclasses import replace

import pytest

from topology.composers import BoundaryNode, BoundaryRule, compose_boundary, verify_boundary
from topology.exceptions import BoundaryViolation


class TestBoundaryGraph:
    """Three nodes, two node-to-node edges, one open ingress."""

    def test_nodes(self, boundary) -> None:
        """Edge, compute and data tiers exist."""
        assert [node.name for node in boundary.nodes] == ["edge-tier", "compute-tier", "data-tier"]

    def test_edges(self, boundary) -> None:
        """edge -> compute on 80 and compute -> data on 5432."""
        edges = {(rule.source, rule.target, rule.port, rule.protocol) for rule in boundary.edges()}
        assert edges == {
            ("edge-tier", "compute-tier", 80, "tcp"),
            ("compute-tier", "data-tier", 5432, "tcp"),
        }

    def test_single_unrestricted_rule(self, boundary) -> None:
        """Only the edge tier accepts traffic from any address, on port 80."""
        open_rules = boundary.unrestricted_rules()
        assert len(open_rules) == 1
        assert open_rules[0].target == "edge-tier"
        assert open_rules[0].port == 80

        for rule in boundary.rules:
            if rule is not open_rules[0]:
                assert rule.source in {node.name for node in boundary.nodes}

    def test_inbound_lookup(self, boundary) -> None:
        """Data tier is reachable only from the compute tier."""
        inbound = boundary.inbound("data-tier")
        assert [(rule.source, rule.port) for rule in inbound] == [("compute-tier", 5432)]

    def test_data_tier_denies_outbound(self, boundary) -> None:
        """Data tier outbound is fully denied; the others are open."""
        assert boundary.node("data-tier").allow_all_outbound is False
        assert boundary.node("edge-tier").allow_all_outbound is True
        assert boundary.node("compute-tier").allow_all_outbound is True

    def test_deterministic(self) -> None:
        """Composition is repeatable."""
        assert compose_boundary() == compose_boundary()

    def test_unknown_node_lookup(self, boundary) -> None:
        """Looking up a missing node raises BoundaryViolation."""
        with pytest.raises(BoundaryViolation) as exc_info:
            boundary.node("cache-tier")
        assert exc_info.value.details["node"] == "cache-tier"


class TestVerifyBoundary:
    """Access policy violations are rejected."""

    def test_second_open_rule_rejected(self, boundary) -> None:
        """No node other than the edge tier may be open to the world."""
        opened = replace(boundary, rules=boundary.rules + (BoundaryRule(None, "compute-tier", 22),))
        with pytest.raises(BoundaryViolation):
            verify_boundary(opened)

    def test_open_rule_on_wrong_port_rejected(self, boundary) -> None:
        """The open rule must be HTTP on the edge tier."""
        rules = (BoundaryRule(None, "edge-tier", 443),) + boundary.rules[1:]
        with pytest.raises(BoundaryViolation):
            verify_boundary(replace(boundary, rules=rules))

    def test_open_rule_on_data_tier_rejected(self, boundary) -> None:
        """The data tier is never open to any address."""
        rules = (BoundaryRule(None, "data-tier", 80),) + boundary.rules[1:]
        with pytest.raises(BoundaryViolation) as exc_info:
            verify_boundary(replace(boundary, rules=rules))
        assert exc_info.value.details["node"] == "data-tier"

    def test_data_outbound_rejected(self, boundary) -> None:
        """Allowing data-tier outbound breaks the policy."""
        nodes = boundary.nodes[:2] + (BoundaryNode("data-tier", "Database", allow_all_outbound=True),)
        with pytest.raises(BoundaryViolation):
            verify_boundary(replace(boundary, nodes=nodes))

    def test_unknown_node_rejected(self, boundary) -> None:
        """Rules must connect known nodes."""
        rules = boundary.rules + (BoundaryRule("cache-tier", "data-tier", 5432),)
        with pytest.raises(BoundaryViolation):
            verify_boundary(replace(boundary, rules=rules))

    def test_standard_boundary_passes(self, boundary) -> None:
        """The composed boundary satisfies its own policy."""
        verify_boundary(boundary)
