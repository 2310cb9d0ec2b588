"""
Security components.

Components:
- SecretComponent: KMS key and username for the RDS-managed database secret
"""

from topology.components.security.secrets_manager import SecretComponent, SecretOutputs

__all__ = [
    "SecretComponent",
    "SecretOutputs",
]
