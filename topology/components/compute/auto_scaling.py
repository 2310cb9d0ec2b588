"""
Auto Scaling Component for the compute tier.

Key Components:
1. AMI: latest Amazon Linux 2023 (x86_64), looked up at deploy time.
2. Launch Template: instance type, AMI and the compute-tier security group.
   IMDSv2 is required on every instance.
3. Auto Scaling Group: min/desired/max from the compute spec, spread over
   the private-with-egress subnets. Instances have no public IP; outbound
   traffic leaves through the NAT gateway.

Target registration with the load balancer happens in the ALB component.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from topology.composers.compute import ComputeTierSpec
from topology.utils.tags import create_tags


@dataclass
class AutoScalingOutputs:
    """Output values from auto scaling component."""
    group_name: pulumi.Output[str]
    launch_template_id: pulumi.Output[str]


class AutoScalingComponent(pulumi.ComponentResource):
    """
    Launch template plus auto scaling group for the web instances.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        compute: ComputeTierSpec,
        subnet_ids: list[pulumi.Input[str]],
        security_group_id: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:compute:AutoScaling", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        # Get latest Amazon Linux 2023 AMI
        ami = aws.ec2.get_ami(
            most_recent=True,
            owners=["amazon"],
            filters=[
                aws.ec2.GetAmiFilterArgs(
                    name="name",
                    values=["al2023-ami-2023.*-x86_64"],
                ),
                aws.ec2.GetAmiFilterArgs(
                    name="virtualization-type",
                    values=["hvm"],
                ),
            ],
        )

        self.launch_template = aws.ec2.LaunchTemplate(
            f"{name}-launch-template",
            name_prefix=f"{name}-",
            image_id=ami.id,
            instance_type=compute.instance_type,
            vpc_security_group_ids=[security_group_id],
            metadata_options=aws.ec2.LaunchTemplateMetadataOptionsArgs(
                http_tokens="required",  # IMDSv2
                http_endpoint="enabled",
            ),
            tag_specifications=[
                aws.ec2.LaunchTemplateTagSpecificationArgs(
                    resource_type="instance",
                    tags=create_tags(environment, f"{name}-instance"),
                ),
            ],
            tags=create_tags(environment, f"{name}-launch-template"),
            opts=child_opts,
        )

        self.group = aws.autoscaling.Group(
            f"{name}-asg",
            vpc_zone_identifiers=subnet_ids,
            min_size=compute.min_capacity,
            max_size=compute.max_capacity,
            desired_capacity=compute.desired_capacity,
            launch_template=aws.autoscaling.GroupLaunchTemplateArgs(
                id=self.launch_template.id,
                version="$Latest",
            ),
            tags=[
                aws.autoscaling.GroupTagArgs(
                    key=key,
                    value=value,
                    propagate_at_launch=False,
                )
                for key, value in create_tags(environment, f"{name}-asg").items()
            ],
            opts=child_opts,
        )

        self.register_outputs({
            "group_name": self.group.name,
            "launch_template_id": self.launch_template.id,
        })

    def get_outputs(self) -> AutoScalingOutputs:
        """Get auto scaling output values."""
        return AutoScalingOutputs(
            group_name=self.group.name,
            launch_template_id=self.launch_template.id,
        )
