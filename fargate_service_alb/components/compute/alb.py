"""
Application Load Balancer Component for public traffic to the demo service.

The 3-Resource Chain:
1. Load Balancer: the "building". Internet-facing, lives in the public
   subnets, guarded by the external security group (port 80 only).
2. Listener: the "door". Binds port 80 and forwards everything to the
   target group. Without a listener the ALB ignores all traffic.
3. Target Group: the "pool of servers". Fargate tasks register by IP on the
   application port; the health check decides which ones get traffic.

Health check:
- GET /ping on the traffic port every 10s, 5s timeout.
- 2 successes mark a target healthy, 2 failures unhealthy.
- Any status from 200 to 499 counts as healthy.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from fargate_service_alb.configs.base import StackConfig
from fargate_service_alb.topology.descriptors import (
    HealthCheckPolicy,
    TrafficEntryDescriptor,
)
from fargate_service_alb.utils.naming import ResourceNamer
from fargate_service_alb.utils.tags import resource_tags


@dataclass
class AlbOutputs:
    """Output values from ALB component."""
    alb_arn: pulumi.Output[str]
    alb_dns_name: pulumi.Output[str]
    listener_arn: pulumi.Output[str]
    target_group_arn: pulumi.Output[str]


def health_check_args(policy: HealthCheckPolicy) -> aws.lb.TargetGroupHealthCheckArgs:
    """Translate a health check policy into target group arguments."""
    return aws.lb.TargetGroupHealthCheckArgs(
        enabled=True,
        path=policy.path,
        port=policy.port,
        protocol="HTTP",
        interval=policy.interval_seconds,
        timeout=policy.timeout_seconds,
        healthy_threshold=policy.healthy_threshold,
        unhealthy_threshold=policy.unhealthy_threshold,
        matcher=policy.healthy_http_codes,
    )


class AlbComponent(pulumi.ComponentResource):
    """
    Public Application Load Balancer in front of the Fargate service.

    The target group is created here, empty; the ECS service registers its
    tasks into it.
    """

    def __init__(
        self,
        name: str,
        config: StackConfig,
        namer: ResourceNamer,
        traffic_entry: TrafficEntryDescriptor,
        vpc_id: pulumi.Input[str],
        subnet_ids: list[pulumi.Input[str]],
        security_group_id: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:compute:Alb", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.alb = aws.lb.LoadBalancer(
            f"{name}-alb",
            name=namer.short_name("alb"),
            internal=not traffic_entry.internet_facing,
            load_balancer_type="application",
            security_groups=[security_group_id],
            subnets=subnet_ids,
            enable_deletion_protection=config.is_production,
            tags=resource_tags(config, f"{name}-alb"),
            opts=child_opts,
        )

        # Fargate tasks use awsvpc networking, so targets register by IP
        self.target_group = aws.lb.TargetGroup(
            f"{name}-tg",
            name=namer.short_name("tg"),
            port=traffic_entry.target_port,
            protocol="HTTP",
            vpc_id=vpc_id,
            target_type="ip",
            health_check=health_check_args(traffic_entry.health_check),
            tags=resource_tags(config, f"{name}-tg"),
            opts=child_opts,
        )

        self.listener = aws.lb.Listener(
            f"{name}-listener",
            load_balancer_arn=self.alb.arn,
            port=traffic_entry.listener_port,
            protocol="HTTP",
            default_actions=[
                aws.lb.ListenerDefaultActionArgs(
                    type="forward",
                    target_group_arn=self.target_group.arn,
                ),
            ],
            tags=resource_tags(config, f"{name}-listener"),
            opts=child_opts,
        )

        self.register_outputs({
            "alb_arn": self.alb.arn,
            "alb_dns_name": self.alb.dns_name,
            "listener_arn": self.listener.arn,
            "target_group_arn": self.target_group.arn,
        })

    def get_outputs(self) -> AlbOutputs:
        """Get ALB output values."""
        return AlbOutputs(
            alb_arn=self.alb.arn,
            alb_dns_name=self.alb.dns_name,
            listener_arn=self.listener.arn,
            target_group_arn=self.target_group.arn,
        )
