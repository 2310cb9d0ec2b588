"""
Security Groups Component for the security boundary graph.

Architectural Steps & Flow:
1. Create "Shell" Security Groups:
   - One per boundary node (edge-tier, compute-tier, data-tier), without
     rules, so they can be referenced by ID.

2. Ingress (Inbound), one rule per boundary rule:
   - Source node -> referenced security group (identity-based).
   - No source node -> 0.0.0.0/0. Only edge-tier HTTP is ever open.

3. Egress (Outbound):
   - All traffic for nodes that allow outbound (edge-tier, compute-tier).
   - Nothing for data-tier. Without an egress rule the group denies all
     outbound traffic.

Security Groups are stateful: allowing an inbound request allows its reply.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from topology.composers.boundary import BoundaryRule, SecurityBoundary
from topology.configs.constants import ANY_IPV4
from topology.utils.tags import create_tags


@dataclass
class SecurityGroupOutputs:
    """Output values from security groups component."""
    group_ids: dict[str, pulumi.Output[str]]

    def group_id(self, node: str) -> pulumi.Output[str]:
        """Security group ID of a boundary node."""
        return self.group_ids[node]


class SecurityGroupsComponent(pulumi.ComponentResource):
    """
    Security groups component rendering the boundary graph.

    Implements least-privilege rules:
    - ALB accepts HTTP from anywhere
    - Instances accept HTTP only from the ALB
    - Database accepts connections only from the instances, no outbound
    """

    def __init__(
        self,
        name: str,
        environment: str,
        boundary: SecurityBoundary,
        vpc_id: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:networking:SecurityGroups", name, None, opts)
        self.environment = environment

        child_opts = pulumi.ResourceOptions(parent=self)

        self.groups: dict[str, aws.ec2.SecurityGroup] = {
            node.name: aws.ec2.SecurityGroup(
                f"{name}-{node.name}-sg",
                description=node.description,
                vpc_id=vpc_id,
                tags=create_tags(environment, f"{name}-{node.name}-sg"),
                opts=child_opts,
            )
            for node in boundary.nodes
        }

        self._create_rules(name, boundary, child_opts)

        self.register_outputs({
            f"{node}_sg_id": group.id for node, group in self.groups.items()
        })

    def _create_rules(
        self,
        name: str,
        boundary: SecurityBoundary,
        opts: pulumi.ResourceOptions,
    ) -> None:
        """Create security group rules."""
        self.ingress_rules = [
            aws.vpc.SecurityGroupIngressRule(
                f"{name}-{rule.target}-ingress-{rule.source or 'any'}-{rule.port}",
                security_group_id=self.groups[rule.target].id,
                ip_protocol=rule.protocol,
                from_port=rule.port,
                to_port=rule.port,
                description=rule.description,
                opts=opts,
                **self._source_args(rule),
            )
            for rule in boundary.rules
        ]

        self.egress_rules = [
            aws.vpc.SecurityGroupEgressRule(
                f"{name}-{node.name}-egress-all",
                security_group_id=self.groups[node.name].id,
                ip_protocol="-1",
                cidr_ipv4=ANY_IPV4,
                description="All outbound traffic",
                opts=opts,
            )
            for node in boundary.nodes
            if node.allow_all_outbound
        ]

    def _source_args(self, rule: BoundaryRule) -> dict[str, pulumi.Input[str]]:
        """Ingress source: any IPv4 address or the source node's group."""
        if rule.unrestricted:
            return {"cidr_ipv4": ANY_IPV4}
        return {"referenced_security_group_id": self.groups[rule.source].id}

    def get_outputs(self) -> SecurityGroupOutputs:
        """Get security group output values."""
        return SecurityGroupOutputs(
            group_ids={node: group.id for node, group in self.groups.items()},
        )
