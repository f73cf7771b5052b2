"""
Security Groups Component for Network Access Control.

Architectural Steps & Flow:
1. Create "Shell" Security Groups:
   - One per access-rule group (external, internal), created without inline
     rules so they can be referenced by ID, including by themselves.

2. Ingress (Inbound), one rule per AccessRule:
   - Any IPv4 source  -> cidr_ipv4 = 0.0.0.0/0 (external group, HTTP only).
   - Same-group source -> referenced_security_group_id = the group itself
     (internal group: app and proxy ports, never reachable from outside).

3. Egress (Outbound):
   - All traffic when the group allows all outbound.

4. Stateful Nature:
   - Allowing an inbound request automatically allows the reply.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from fargate_service_alb.configs.base import StackConfig
from fargate_service_alb.configs.constants import ANY_IPV4_CIDR
from fargate_service_alb.topology.descriptors import (
    AccessRule,
    AccessRuleGroup,
    SourceScope,
)
from fargate_service_alb.utils.tags import resource_tags


@dataclass
class SecurityGroupOutputs:
    """Output values from security groups component."""
    security_group_ids: dict[str, pulumi.Output[str]]


class SecurityGroupsComponent(pulumi.ComponentResource):
    """
    Security groups component for network access control.

    Creates one security group per access-rule group and translates every
    rule into a standalone ingress rule resource.
    """

    def __init__(
        self,
        name: str,
        config: StackConfig,
        vpc_id: pulumi.Input[str],
        access_groups: tuple[AccessRuleGroup, ...],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:networking:SecurityGroups", name, None, opts)
        self.config = config

        child_opts = pulumi.ResourceOptions(parent=self)

        self.security_groups: dict[str, aws.ec2.SecurityGroup] = {}
        self.ingress_rules: dict[str, list[aws.vpc.SecurityGroupIngressRule]] = {}
        self.egress_rules: dict[str, list[aws.vpc.SecurityGroupEgressRule]] = {}
        for group in access_groups:
            self.security_groups[group.name] = aws.ec2.SecurityGroup(
                f"{name}-{group.name}-sg",
                description=group.description,
                vpc_id=vpc_id,
                tags=resource_tags(self.config, f"{name}-{group.name}-sg"),
                opts=child_opts,
            )

        for group in access_groups:
            self._create_rules(name, group, child_opts)

        self.register_outputs({
            f"{group_name}_sg_id": sg.id
            for group_name, sg in self.security_groups.items()
        })

    def _create_rules(
        self,
        name: str,
        group: AccessRuleGroup,
        opts: pulumi.ResourceOptions,
    ) -> None:
        """Create ingress and egress rules for one group."""
        sg = self.security_groups[group.name]
        ingress = self.ingress_rules.setdefault(group.name, [])
        egress = self.egress_rules.setdefault(group.name, [])

        for rule in group.ingress:
            ingress.append(aws.vpc.SecurityGroupIngressRule(
                f"{name}-{group.name}-ingress-{rule.protocol}-{rule.port}",
                security_group_id=sg.id,
                ip_protocol=rule.protocol,
                from_port=rule.port,
                to_port=rule.port,
                description=rule.description,
                tags=resource_tags(self.config, f"{name}-{group.name}-ingress-{rule.port}"),
                opts=opts,
                **self._source_args(rule, sg),
            ))

        if group.allow_all_outbound:
            egress.append(aws.vpc.SecurityGroupEgressRule(
                f"{name}-{group.name}-egress-all",
                security_group_id=sg.id,
                ip_protocol="-1",
                cidr_ipv4=ANY_IPV4_CIDR,
                description="All outbound traffic",
                tags=resource_tags(self.config, f"{name}-{group.name}-egress"),
                opts=opts,
            ))

    @staticmethod
    def _source_args(
        rule: AccessRule,
        sg: aws.ec2.SecurityGroup,
    ) -> dict[str, pulumi.Input[str]]:
        if rule.source is SourceScope.ANY_IPV4:
            return {"cidr_ipv4": ANY_IPV4_CIDR}
        # Self-reference: members of the group talk to each other
        return {"referenced_security_group_id": sg.id}

    def get_outputs(self) -> SecurityGroupOutputs:
        """Get security group output values."""
        return SecurityGroupOutputs(
            security_group_ids={
                group_name: sg.id for group_name, sg in self.security_groups.items()
            },
        )
