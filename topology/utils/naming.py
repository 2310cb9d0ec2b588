"""
Resource naming conventions for consistent AWS resource names.

Follows pattern: {project}-{environment}-{resource}
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceNamer:
    """
    Generates consistent resource names for rendered plan entities.

    Attributes:
        project: Project identifier
        environment: Deployment environment (dev, staging, prod)
    """
    project: str
    environment: str

    @property
    def prefix(self) -> str:
        """Shared name prefix."""
        return f"{self.project}-{self.environment}"

    def name(self, resource: str) -> str:
        """
        Generate a resource name.

        Args:
            resource: Resource identifier (e.g., 'vpc', 'edge-tier-sg')

        Returns:
            Formatted resource name
        """
        return f"{self.prefix}-{resource}"

    def secret_name(self, name: str) -> str:
        """
        Generate a Secrets Manager secret name.

        Args:
            name: Secret identifier

        Returns:
            Secret name with project and environment prefix
        """
        return f"{self.project}/{self.environment}/{name}"
