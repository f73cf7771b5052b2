"""
Resource naming conventions for consistent AWS resource names.

Follows pattern: {stack}-{environment}-{resource}
"""

from dataclasses import dataclass


@dataclass
class ResourceNamer:
    """
    Generates consistent resource names for AWS resources.

    Attributes:
        stack: Logical deployment name
        environment: Deployment environment (dev, staging, prod)
    """
    stack: str
    environment: str

    def name(self, resource: str) -> str:
        """
        Generate a resource name.

        Args:
            resource: Resource identifier (e.g., 'vpc', 'external-sg')

        Returns:
            Formatted resource name
        """
        return f"{self.stack}-{self.environment}-{resource}"

    def short_name(self, resource: str, limit: int = 32) -> str:
        """
        Generate a name for resources with a length limit (ALB, target group).

        Args:
            resource: Resource identifier
            limit: Maximum length accepted by AWS

        Returns:
            Resource name truncated to the limit, without a trailing hyphen
        """
        return self.name(resource)[:limit].rstrip("-")
