"""
Security components.

Components:
- IamRolesComponent: Task role and task execution role
"""

from fargate_service_alb.components.security.iam_roles import IamRolesComponent, IamRoleOutputs

__all__ = [
    "IamRolesComponent",
    "IamRoleOutputs",
]
