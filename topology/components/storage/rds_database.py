"""
RDS Component for the data tier.

Access Control - Who Can Connect:
1. Compute tier (compute-tier SG) -> database port ✅
2. Anyone else -> DENIED ❌
3. Outbound from the database -> DENIED ❌

How the Connection Works:
1. Routing: instances and the database share the private subnets and
   talk over the implicit local route. Traffic never leaves the VPC.
2. Credentials: the master username comes from the credential; RDS
   generates the password and keeps it in Secrets Manager, encrypted with
   the credential's KMS key. The program never sees the value.
3. Posture: single AZ, no deletion protection, no final snapshot. Retracting
   the plan destroys the database.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from topology.composers.data import DataTierSpec
from topology.utils.tags import create_tags


@dataclass
class DatabaseOutputs:
    """Output values from database component."""
    endpoint_address: pulumi.Output[str]
    endpoint: pulumi.Output[str]
    port: pulumi.Output[int]
    secret_arn: pulumi.Output[str]


def instance_class(instance_type: str) -> str:
    """RDS instance class for an instance type (t3.micro -> db.t3.micro)."""
    if instance_type.startswith("db."):
        return instance_type
    return f"db.{instance_type}"


def master_secret_arn(secrets) -> str | None:
    """ARN of the RDS-managed master secret, once RDS has created it."""
    if not secrets:
        return None
    return secrets[0].secret_arn


class DatabaseComponent(pulumi.ComponentResource):
    """
    RDS instance (PostgreSQL or MySQL) in the private subnets.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        data: DataTierSpec,
        subnet_ids: list[pulumi.Input[str]],
        security_group_id: pulumi.Input[str],
        username: pulumi.Input[str],
        kms_key_id: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:storage:Database", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        # DB Subnet Group
        self.subnet_group = aws.rds.SubnetGroup(
            f"{name}-subnet-group",
            subnet_ids=subnet_ids,
            tags=create_tags(environment, f"{name}-subnet-group"),
            opts=child_opts,
        )

        # RDS Instance
        self.instance = aws.rds.Instance(
            f"{name}-{data.engine}",
            engine=data.engine,
            engine_version=data.engine_version,
            instance_class=instance_class(data.instance_type),
            allocated_storage=data.storage_gib,
            storage_encrypted=True,
            port=data.port,
            username=username,
            manage_master_user_password=True,  # AWS manages password in Secrets Manager
            master_user_secret_kms_key_id=kms_key_id,
            db_subnet_group_name=self.subnet_group.name,
            vpc_security_group_ids=[security_group_id],
            publicly_accessible=False,
            multi_az=data.multi_az,
            deletion_protection=data.deletion_protection,
            skip_final_snapshot=data.destroy_on_retract,
            tags=create_tags(environment, f"{name}-{data.engine}"),
            opts=child_opts,
        )

        self.secret_arn = self.instance.master_user_secrets.apply(master_secret_arn)

        self.register_outputs({
            "endpoint_address": self.instance.address,
            "endpoint": self.instance.endpoint,
            "port": self.instance.port,
            "secret_arn": self.secret_arn,
        })

    def get_outputs(self) -> DatabaseOutputs:
        """Get database output values."""
        return DatabaseOutputs(
            endpoint_address=self.instance.address,
            endpoint=self.instance.endpoint,
            port=self.instance.port,
            secret_arn=self.secret_arn,
        )
