"""
Configuration module for Pulumi infrastructure.

Provides type-safe configuration loading from Pulumi stack config files.
"""

from fargate_service_alb.configs.base import StackConfig
from fargate_service_alb.configs.environment import get_config
from fargate_service_alb.configs.constants import (
    DEFAULT_STACK_NAME,
    DEFAULT_TAGS,
    DEMO_IMAGE,
    HEALTH_CHECK,
    PORTS,
    SUBNET_CIDRS,
    VPC_CIDR,
)

__all__ = [
    "StackConfig",
    "get_config",
    "DEFAULT_STACK_NAME",
    "DEFAULT_TAGS",
    "DEMO_IMAGE",
    "HEALTH_CHECK",
    "PORTS",
    "SUBNET_CIDRS",
    "VPC_CIDR",
]
