"""
IAM roles component for the Fargate workload.

Creates one role per execution identity:
- Task role: assumed by running containers, CloudWatch Logs only
- Task execution role: assumed by the ECS agent to launch tasks,
  CloudWatch Logs + read-only ECR pulls
"""

import json
from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from fargate_service_alb.configs.base import StackConfig
from fargate_service_alb.configs.constants import MANAGED_POLICY_ARN_PREFIX
from fargate_service_alb.topology.descriptors import ExecutionIdentity
from fargate_service_alb.utils.tags import resource_tags


@dataclass
class IamRoleOutputs:
    """Output values from IAM roles component."""
    role_arns: dict[str, pulumi.Output[str]]


def managed_policy_arn(policy_name: str) -> str:
    """ARN of an AWS managed policy."""
    return f"{MANAGED_POLICY_ARN_PREFIX}{policy_name}"


def assume_role_policy(principal: str) -> str:
    """Trust policy letting a service principal assume the role."""
    return json.dumps({
        "Version": "2012-10-17",
        "Statement": [{
            "Effect": "Allow",
            "Principal": {"Service": principal},
            "Action": "sts:AssumeRole",
        }],
    })


class IamRolesComponent(pulumi.ComponentResource):
    """
    IAM roles for the task and the task execution agent.

    Follows least-privilege principle: only the managed policies listed on
    each identity are attached.
    """

    def __init__(
        self,
        name: str,
        config: StackConfig,
        identities: tuple[ExecutionIdentity, ...],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:security:IamRoles", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.roles: dict[str, aws.iam.Role] = {}
        self.policy_attachments: dict[str, list[aws.iam.RolePolicyAttachment]] = {}
        for identity in identities:
            role = aws.iam.Role(
                f"{name}-{identity.name}-role",
                assume_role_policy=assume_role_policy(identity.assumed_by),
                tags=resource_tags(config, f"{name}-{identity.name}-role"),
                opts=child_opts,
            )
            self.roles[identity.name] = role
            self.policy_attachments[identity.name] = [
                aws.iam.RolePolicyAttachment(
                    f"{name}-{identity.name}-{policy_name}",
                    role=role.name,
                    policy_arn=managed_policy_arn(policy_name),
                    opts=child_opts,
                )
                for policy_name in identity.managed_policies
            ]

        self.register_outputs({
            f"{identity_name}_role_arn": role.arn
            for identity_name, role in self.roles.items()
        })

    def get_outputs(self) -> IamRoleOutputs:
        """Get IAM role output values."""
        return IamRoleOutputs(
            role_arns={name: role.arn for name, role in self.roles.items()},
        )
