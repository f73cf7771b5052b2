"""
Stack configuration loader.

Loads configuration from Pulumi stack config files, falling back to the
demo defaults for anything left unset.
"""

import pulumi

from fargate_service_alb.configs.base import StackConfig
from fargate_service_alb.configs.constants import (
    DEFAULT_ENVIRONMENT,
    DEFAULT_REGION,
    DEFAULT_STACK_NAME,
    DEMO_IMAGE,
)


def get_config() -> StackConfig:
    """
    Load stack configuration from Pulumi stack config.

    Returns:
        StackConfig: Configuration object with defaults applied
    """
    config = pulumi.Config()
    aws_config = pulumi.Config("aws")

    return StackConfig(
        stack_name=config.get("stack_name") or DEFAULT_STACK_NAME,
        environment=config.get("environment") or DEFAULT_ENVIRONMENT,
        demo_image=config.get("demo_image") or DEMO_IMAGE,
        aws_region=aws_config.get("region") or DEFAULT_REGION,
    )
