"""
Utility functions for Pulumi infrastructure.

Provides naming conventions and tag factories.
"""

from fargate_service_alb.utils.naming import ResourceNamer
from fargate_service_alb.utils.tags import create_tags, merge_tags, resource_tags

__all__ = [
    "ResourceNamer",
    "create_tags",
    "merge_tags",
    "resource_tags",
]
