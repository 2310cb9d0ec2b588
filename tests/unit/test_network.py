"""Tests for the network composer."""

import pytest

from topology.composers import SubnetVisibility, compose_network
from topology.exceptions import DependencyCycle, InvalidParameter


class TestSubnetLayout:
    """Fixed two-tier, two-AZ layout."""

    def test_tier_order_and_policy(self) -> None:
        """Public tier first, then private-with-egress, both /24."""
        placement = compose_network("10.20.0.0/16")

        assert placement.availability_zone_count == 2
        assert placement.nat_gateways == 1
        assert [tier.visibility for tier in placement.subnet_tiers] == [
            SubnetVisibility.PUBLIC,
            SubnetVisibility.PRIVATE_WITH_EGRESS,
        ]
        assert [tier.name for tier in placement.subnet_tiers] == ["PublicSubnet", "PrivateSubnet"]
        assert all(tier.cidr_mask == 24 for tier in placement.subnet_tiers)

    def test_blocks_carved_tier_major(self) -> None:
        """One block per AZ per tier, public blocks first."""
        placement = compose_network("10.20.0.0/16")

        assert placement.tier(SubnetVisibility.PUBLIC).cidr_blocks == ("10.20.0.0/24", "10.20.1.0/24")
        assert placement.tier(SubnetVisibility.PRIVATE_WITH_EGRESS).cidr_blocks == (
            "10.20.2.0/24",
            "10.20.3.0/24",
        )

    def test_blocks_stay_inside_network(self) -> None:
        """Blocks follow the supplied CIDR."""
        placement = compose_network("172.16.8.0/22")

        blocks = [block for tier in placement.subnet_tiers for block in tier.cidr_blocks]
        assert blocks == ["172.16.8.0/24", "172.16.9.0/24", "172.16.10.0/24", "172.16.11.0/24"]
        assert placement.cidr == "172.16.8.0/22"

    def test_resource_id(self) -> None:
        """Placement is addressable in the plan as 'network'."""
        assert compose_network("10.20.0.0/16").resource_id == "network"


class TestDeterminism:
    """The composer is a pure function."""

    def test_same_cidr_same_placement(self) -> None:
        """Two calls yield structurally equal placements."""
        assert compose_network("10.20.0.0/16") == compose_network("10.20.0.0/16")

    def test_different_cidr_different_placement(self) -> None:
        """Placements differ when the CIDR differs."""
        assert compose_network("10.20.0.0/16") != compose_network("10.30.0.0/16")


class TestInvalidNetwork:
    """Blocks that cannot be laid out are rejected."""

    def test_malformed_cidr(self) -> None:
        """Malformed blocks raise InvalidParameter."""
        with pytest.raises(InvalidParameter):
            compose_network("10.20.0.0/40")

    def test_cidr_too_small(self) -> None:
        """A /23 cannot hold four /24 subnets."""
        with pytest.raises(InvalidParameter) as exc_info:
            compose_network("10.20.0.0/23")
        assert exc_info.value.field == "network_cidr"

    def test_unknown_tier_lookup(self) -> None:
        """Placement lookups only succeed for composed tiers."""
        placement = compose_network("10.20.0.0/16")
        stripped = type(placement)(
            cidr=placement.cidr,
            availability_zone_count=placement.availability_zone_count,
            nat_gateways=placement.nat_gateways,
            subnet_tiers=placement.subnet_tiers[:1],
        )
        with pytest.raises(DependencyCycle) as exc_info:
            stripped.tier(SubnetVisibility.PRIVATE_WITH_EGRESS)
        assert exc_info.value.resource_id == "network"
