"""
Compute components for the Fargate workload.

Components:
- ClusterComponent: ECS cluster and service discovery namespace
- AlbComponent: Public ALB, listener and target group
- FargateServiceComponent: Task definition, discovery record and ECS service
"""

from fargate_service_alb.components.compute.cluster import ClusterComponent, ClusterOutputs
from fargate_service_alb.components.compute.alb import AlbComponent, AlbOutputs
from fargate_service_alb.components.compute.fargate_service import FargateServiceComponent, FargateServiceOutputs

__all__ = [
    "ClusterComponent",
    "ClusterOutputs",
    "AlbComponent",
    "AlbOutputs",
    "FargateServiceComponent",
    "FargateServiceOutputs",
]
