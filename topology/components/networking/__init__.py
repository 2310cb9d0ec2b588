"""
Networking components for the network placement and security boundary.

Components:
- VpcComponent: VPC, subnets, NAT gateway, route tables
- SecurityGroupsComponent: one security group per boundary node
"""

from topology.components.networking.vpc import VpcComponent, VpcOutputs
from topology.components.networking.security_groups import (
    SecurityGroupsComponent,
    SecurityGroupOutputs,
)

__all__ = [
    "VpcComponent",
    "VpcOutputs",
    "SecurityGroupsComponent",
    "SecurityGroupOutputs",
]
