"""
Base configuration dataclass for stack settings.

Provides type-safe configuration structure loaded from Pulumi stack configs.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class StackConfig:
    """
    Stack-specific configuration for infrastructure deployment.

    Attributes:
        stack_name: Logical deployment name (also the log group name)
        environment: Deployment environment (dev, staging, prod)
        demo_image: Container image for the demo workload
        aws_region: Region used by the awslogs driver
    """
    stack_name: str
    environment: str
    demo_image: str
    aws_region: str

    @property
    def is_production(self) -> bool:
        """Check if this is a production environment."""
        return self.environment == "prod"

    def get_tags(self) -> dict[str, str]:
        """Get stack-specific tags."""
        return {
            "Environment": self.environment,
            "Stack": self.stack_name,
        }
