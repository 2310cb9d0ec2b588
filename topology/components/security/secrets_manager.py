"""
Secrets Manager component for the generated database credential.

Materializes a CredentialDescriptor:
1. Key: a customer-managed KMS key (with alias) that encrypts the secret.
2. Secret: RDS generates the master password itself and stores
   {"username": "dbadmin", "password": <generated>} in Secrets Manager,
   encrypted with this key. See DatabaseComponent.

The password is generated once, by AWS, and never passes through this
program or its state. Replacing the database keeps the secret and the
instance in step because RDS owns both.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from topology.composers.credentials import CredentialDescriptor
from topology.utils.tags import create_tags


@dataclass
class SecretOutputs:
    """Output values from secret component."""
    kms_key_arn: pulumi.Output[str]
    username: pulumi.Output[str]


class SecretComponent(pulumi.ComponentResource):
    """
    Encryption key and master username for the managed database secret.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        credential: CredentialDescriptor,
        secret_name: str,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:security:Secret", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.key = aws.kms.Key(
            f"{name}-key",
            description=f"Encrypts the generated database credential {secret_name}",
            deletion_window_in_days=7,  # Shortest window (dev only)
            enable_key_rotation=True,
            tags=create_tags(environment, f"{name}-key"),
            opts=child_opts,
        )

        self.alias = aws.kms.Alias(
            f"{name}-key-alias",
            name=f"alias/{secret_name}",
            target_key_id=self.key.key_id,
            opts=child_opts,
        )

        self.username = pulumi.Output.from_input(credential.username)

        self.register_outputs({
            "kms_key_arn": self.key.arn,
            "username": self.username,
        })

    def get_outputs(self) -> SecretOutputs:
        """Get secret output values."""
        return SecretOutputs(
            kms_key_arn=self.key.arn,
            username=self.username,
        )
