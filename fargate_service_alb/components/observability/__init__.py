"""
Observability components.

Components:
- LogGroupComponent: CloudWatch log group for container logs
"""

from fargate_service_alb.components.observability.log_group import LogGroupComponent, LogGroupOutputs

__all__ = [
    "LogGroupComponent",
    "LogGroupOutputs",
]
