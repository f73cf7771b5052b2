"""
CloudWatch Log Group Component for the demo workload.

The log group is named exactly after the stack so operators can find it, keeps
logs for a single day, and is deleted together with the stack.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from fargate_service_alb.configs.base import StackConfig
from fargate_service_alb.topology.descriptors import LogSinkDescriptor
from fargate_service_alb.utils.tags import resource_tags


@dataclass
class LogGroupOutputs:
    """Output values from log group component."""
    log_group_name: pulumi.Output[str]
    log_group_arn: pulumi.Output[str]


class LogGroupComponent(pulumi.ComponentResource):
    """Log destination for the container awslogs driver."""

    def __init__(
        self,
        name: str,
        config: StackConfig,
        log_sink: LogSinkDescriptor,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:observability:LogGroup", name, None, opts)

        child_opts = pulumi.ResourceOptions(
            parent=self,
            retain_on_delete=not log_sink.destroy_on_teardown,
        )

        self.log_group = aws.cloudwatch.LogGroup(
            f"{name}-log-group",
            name=log_sink.name,
            retention_in_days=log_sink.retention_days,
            skip_destroy=not log_sink.destroy_on_teardown,
            tags=resource_tags(config, f"{name}-log-group"),
            opts=child_opts,
        )

        self.register_outputs({
            "log_group_name": self.log_group.name,
            "log_group_arn": self.log_group.arn,
        })

    def get_outputs(self) -> LogGroupOutputs:
        """Get log group output values."""
        return LogGroupOutputs(
            log_group_name=self.log_group.name,
            log_group_arn=self.log_group.arn,
        )
