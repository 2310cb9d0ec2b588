"""
VPC Component Resource for the network placement.

Steps & Architecture:
1. VPC (placement CIDR, default 10.20.0.0/16) with DNS support.
2. Internet Gateway: the public tier's route to the internet.
3. Subnets: one per tier per availability zone.
   - Public (x.x.0.0/24, x.x.1.0/24): ALB, NAT gateway. Public IPs on launch.
   - Private with egress (x.x.2.0/24, x.x.3.0/24): instances and database.
4. NAT Gateway: one, in the first public subnet, with an Elastic IP.
5. Route Tables:
   - Public RT: 0.0.0.0/0 -> IGW, shared by the public subnets.
   - Private RT per subnet: 0.0.0.0/0 -> NAT (outbound only).
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from topology.composers.network import NetworkPlacement, SubnetTier, SubnetVisibility
from topology.configs.constants import ANY_IPV4
from topology.utils.tags import create_tags


@dataclass
class VpcOutputs:
    """Output values from VPC component."""
    vpc_id: pulumi.Output[str]
    subnet_ids: dict[SubnetVisibility, list[pulumi.Output[str]]]
    nat_gateway_ids: list[pulumi.Output[str]]

    def subnet_ids_for(self, tier: SubnetTier) -> list[pulumi.Output[str]]:
        """Subnet IDs of one tier, in AZ order."""
        return self.subnet_ids[tier.visibility]


class VpcComponent(pulumi.ComponentResource):
    """
    VPC component with two subnet tiers and NAT egress.

    Creates one subnet per tier per availability zone and routes the
    private tier's outbound traffic through the NAT gateway.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        placement: NetworkPlacement,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:networking:Vpc", name, None, opts)
        self.environment = environment

        child_opts = pulumi.ResourceOptions(parent=self)

        zones = aws.get_availability_zones(state="available")
        availability_zones = list(zones.names)[: placement.availability_zone_count]

        # Create VPC
        self.vpc = aws.ec2.Vpc(
            f"{name}-vpc",
            cidr_block=placement.cidr,
            enable_dns_hostnames=True,
            enable_dns_support=True,
            tags=create_tags(environment, f"{name}-vpc"),
            opts=child_opts,
        )

        # Create Internet Gateway (public tier and NAT)
        self.igw = aws.ec2.InternetGateway(
            f"{name}-igw",
            vpc_id=self.vpc.id,
            tags=create_tags(environment, f"{name}-igw"),
            opts=child_opts,
        )

        # Create subnets, tier by tier
        self.subnets: dict[SubnetVisibility, list[aws.ec2.Subnet]] = {}
        for tier in placement.subnet_tiers:
            self.subnets[tier.visibility] = [
                aws.ec2.Subnet(
                    f"{name}-{tier.visibility.value}-{index + 1}",
                    vpc_id=self.vpc.id,
                    cidr_block=cidr_block,
                    availability_zone=availability_zone,
                    map_public_ip_on_launch=tier.visibility == SubnetVisibility.PUBLIC,
                    tags=create_tags(
                        environment,
                        f"{name}-{tier.name}{index + 1}",
                        SubnetType=tier.visibility.value,
                    ),
                    opts=child_opts,
                )
                for index, (cidr_block, availability_zone) in enumerate(
                    zip(tier.cidr_blocks, availability_zones)
                )
            ]

        self._create_nat_gateways(name, placement.nat_gateways)
        self._create_route_tables(name, child_opts)

        self.register_outputs({
            "vpc_id": self.vpc.id,
            "public_subnet_ids": [s.id for s in self.subnets[SubnetVisibility.PUBLIC]],
            "private_subnet_ids": [
                s.id for s in self.subnets[SubnetVisibility.PRIVATE_WITH_EGRESS]
            ],
            "nat_gateway_ids": [nat.id for nat in self.nat_gateways],
        })

    def _create_nat_gateways(self, name: str, count: int) -> None:
        """Create NAT gateways in the public subnets, first AZ first."""
        public_subnets = self.subnets[SubnetVisibility.PUBLIC]
        self.nat_gateways: list[aws.ec2.NatGateway] = []

        for index in range(count):
            eip = aws.ec2.Eip(
                f"{name}-nat-eip-{index + 1}",
                domain="vpc",
                tags=create_tags(self.environment, f"{name}-nat-eip-{index + 1}"),
                opts=pulumi.ResourceOptions(parent=self),
            )
            self.nat_gateways.append(aws.ec2.NatGateway(
                f"{name}-nat-{index + 1}",
                allocation_id=eip.id,
                subnet_id=public_subnets[index % len(public_subnets)].id,
                tags=create_tags(self.environment, f"{name}-nat-{index + 1}"),
                opts=pulumi.ResourceOptions(parent=self, depends_on=[self.igw]),
            ))

    def _create_route_tables(
        self,
        name: str,
        opts: pulumi.ResourceOptions,
    ) -> None:
        """Create route tables for public and private subnets."""
        # Public route table (Internet Gateway)
        public_rt = aws.ec2.RouteTable(
            f"{name}-public-rt",
            vpc_id=self.vpc.id,
            routes=[
                aws.ec2.RouteTableRouteArgs(
                    cidr_block=ANY_IPV4,
                    gateway_id=self.igw.id,
                ),
            ],
            tags=create_tags(self.environment, f"{name}-public-rt"),
            opts=opts,
        )

        for index, subnet in enumerate(self.subnets[SubnetVisibility.PUBLIC]):
            aws.ec2.RouteTableAssociation(
                f"{name}-public-rt-assoc-{index + 1}",
                subnet_id=subnet.id,
                route_table_id=public_rt.id,
                opts=opts,
            )

        # Private route tables (outbound through NAT)
        for index, subnet in enumerate(self.subnets[SubnetVisibility.PRIVATE_WITH_EGRESS]):
            nat = self.nat_gateways[index % len(self.nat_gateways)]
            private_rt = aws.ec2.RouteTable(
                f"{name}-private-rt-{index + 1}",
                vpc_id=self.vpc.id,
                routes=[
                    aws.ec2.RouteTableRouteArgs(
                        cidr_block=ANY_IPV4,
                        nat_gateway_id=nat.id,
                    ),
                ],
                tags=create_tags(self.environment, f"{name}-private-rt-{index + 1}"),
                opts=opts,
            )
            aws.ec2.RouteTableAssociation(
                f"{name}-private-rt-assoc-{index + 1}",
                subnet_id=subnet.id,
                route_table_id=private_rt.id,
                opts=opts,
            )

    def get_outputs(self) -> VpcOutputs:
        """Get VPC output values."""
        return VpcOutputs(
            vpc_id=self.vpc.id,
            subnet_ids={
                visibility: [subnet.id for subnet in subnets]
                for visibility, subnets in self.subnets.items()
            },
            nat_gateway_ids=[nat.id for nat in self.nat_gateways],
        )
