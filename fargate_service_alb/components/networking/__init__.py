"""
Networking components for VPC infrastructure.

Components:
- VpcComponent: VPC with public/private subnets, NAT gateways, route tables
- SecurityGroupsComponent: External (ALB) and internal (service) security groups
"""

from fargate_service_alb.components.networking.vpc import VpcComponent, VpcOutputs
from fargate_service_alb.components.networking.security_groups import SecurityGroupsComponent, SecurityGroupOutputs

__all__ = [
    "VpcComponent",
    "VpcOutputs",
    "SecurityGroupsComponent",
    "SecurityGroupOutputs",
]
