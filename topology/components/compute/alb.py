"""
Application Load Balancer Component for the edge tier.

The 3-Resource Chain:
1. Load Balancer: internet-facing, in the public subnets, guarded by the
   edge-tier security group. Has the DNS name exported as ALB-DNS.
2. Target Group: HTTP on the target port. Health check GET /health every
   60 seconds; unhealthy instances stop receiving traffic.
3. Listener: HTTP on port 80, forwarding to the target group.

Target registration: the compute tier's auto scaling group is attached to
the target group, so instances register as they launch.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from topology.composers.edge import EdgeSpec
from topology.utils.tags import create_tags


@dataclass
class AlbOutputs:
    """Output values from ALB component."""
    alb_arn: pulumi.Output[str]
    dns_name: pulumi.Output[str]
    listener_arn: pulumi.Output[str]
    target_group_arn: pulumi.Output[str]


class AlbComponent(pulumi.ComponentResource):
    """
    Internet-facing Application Load Balancer in front of the compute tier.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        edge: EdgeSpec,
        vpc_id: pulumi.Input[str],
        subnet_ids: list[pulumi.Input[str]],
        security_group_id: pulumi.Input[str],
        autoscaling_group_name: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:compute:Alb", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.alb = aws.lb.LoadBalancer(
            f"{name}-alb",
            internal=not edge.internet_facing,
            load_balancer_type="application",
            security_groups=[security_group_id],
            subnets=subnet_ids,
            enable_deletion_protection=False,  # Dev only
            tags=create_tags(environment, f"{name}-alb"),
            opts=child_opts,
        )

        self.target_group = aws.lb.TargetGroup(
            f"{name}-tg",
            port=edge.target_port,
            protocol="HTTP",
            vpc_id=vpc_id,
            target_type="instance",
            health_check=aws.lb.TargetGroupHealthCheckArgs(
                enabled=True,
                path=edge.health_check.path,
                port="traffic-port",
                protocol="HTTP",
                interval=edge.health_check.interval_seconds,
                matcher="200",
            ),
            tags=create_tags(environment, f"{name}-tg"),
            opts=child_opts,
        )

        # HTTP Listener
        self.listener = aws.lb.Listener(
            f"{name}-listener",
            load_balancer_arn=self.alb.arn,
            port=edge.listener_port,
            protocol="HTTP",
            default_actions=[
                aws.lb.ListenerDefaultActionArgs(
                    type="forward",
                    target_group_arn=self.target_group.arn,
                ),
            ],
            tags=create_tags(environment, f"{name}-listener"),
            opts=child_opts,
        )

        # Register the auto scaling group's instances as targets
        self.attachment = aws.autoscaling.Attachment(
            f"{name}-asg-attachment",
            autoscaling_group_name=autoscaling_group_name,
            lb_target_group_arn=self.target_group.arn,
            opts=child_opts,
        )

        self.register_outputs({
            "alb_arn": self.alb.arn,
            "dns_name": self.alb.dns_name,
            "listener_arn": self.listener.arn,
            "target_group_arn": self.target_group.arn,
        })

    def get_outputs(self) -> AlbOutputs:
        """Get ALB output values."""
        return AlbOutputs(
            alb_arn=self.alb.arn,
            dns_name=self.alb.dns_name,
            listener_arn=self.listener.arn,
            target_group_arn=self.target_group.arn,
        )
