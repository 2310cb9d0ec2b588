"""
Credential provisioner.

Emits the instruction for the secret store to generate the database
credential: fixed username, random password without punctuation. The
password itself never exists in the plan.
"""

import json
from dataclasses import dataclass

from topology.configs.constants import DB_SECRET_KEY, DB_USERNAME, RESOURCE_IDS


@dataclass(frozen=True)
class CredentialDescriptor:
    """Generated-secret request for the data tier."""
    username: str = DB_USERNAME
    secret_key: str = DB_SECRET_KEY
    exclude_punctuation: bool = True
    resource_id: str = RESOURCE_IDS["credential"]

    def secret_template(self) -> str:
        """JSON document the generated password is added to."""
        return json.dumps({"username": self.username})


def provision_credential() -> CredentialDescriptor:
    """Create the credential generation request for one plan."""
    return CredentialDescriptor()
