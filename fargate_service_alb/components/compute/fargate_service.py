"""
Fargate Service Component for the demo app.

Key Components:
1. Task Definition: the "recipe". Image, port, CPU/memory reservation, the
   two IAM roles and the awslogs driver pointing at the stack log group.
   - task_role: what the running container may do (write logs).
   - execution_role: what the ECS agent may do to launch it (pull the
     image, create log streams).
2. Service Discovery Service: registers an A record per task in the private
   namespace. TTL is kept short so records follow task replacement quickly.
3. ECS Service: keeps `desired_count` tasks running in the private subnets,
   inside the internal security group, registered into the ALB target group.

Placement:
- Private subnets only, no public IP. Outbound goes through the NAT gateways.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from fargate_service_alb.configs.base import StackConfig
from fargate_service_alb.topology.descriptors import WorkloadDescriptor
from fargate_service_alb.utils.tags import resource_tags


@dataclass
class FargateServiceOutputs:
    """Output values from Fargate service component."""
    service_name: pulumi.Output[str]
    task_definition_arn: pulumi.Output[str]
    discovery_service_arn: pulumi.Output[str]


def container_definitions(
    workload: WorkloadDescriptor,
    log_group_name: pulumi.Input[str],
    aws_region: str,
) -> pulumi.Output[str]:
    """JSON container definitions for the workload's single container."""
    return pulumi.Output.json_dumps([
        {
            "name": workload.container_name,
            "image": workload.image,
            "essential": True,
            "portMappings": [
                {
                    "containerPort": workload.container_port,
                    "protocol": "tcp",
                },
            ],
            "logConfiguration": {
                "logDriver": "awslogs",
                "options": {
                    "awslogs-group": log_group_name,
                    "awslogs-region": aws_region,
                    "awslogs-stream-prefix": workload.log_stream_prefix,
                },
            },
        },
    ])


class FargateServiceComponent(pulumi.ComponentResource):
    """
    Fargate task definition, service discovery record and ECS service.

    Runs in private subnets with access from the ALB through the target group.
    """

    def __init__(
        self,
        name: str,
        config: StackConfig,
        workload: WorkloadDescriptor,
        cluster_arn: pulumi.Input[str],
        namespace_id: pulumi.Input[str],
        log_group_name: pulumi.Input[str],
        task_role_arn: pulumi.Input[str],
        execution_role_arn: pulumi.Input[str],
        subnet_ids: list[pulumi.Input[str]],
        security_group_id: pulumi.Input[str],
        target_group_arn: pulumi.Input[str],
        listener: aws.lb.Listener,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:compute:FargateService", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.task_definition = aws.ecs.TaskDefinition(
            f"{name}-task",
            family=workload.family,
            cpu=str(workload.cpu),
            memory=str(workload.memory_mib),
            network_mode="awsvpc",
            requires_compatibilities=["FARGATE"],
            task_role_arn=task_role_arn,
            execution_role_arn=execution_role_arn,
            container_definitions=container_definitions(
                workload, log_group_name, config.aws_region
            ),
            tags=resource_tags(config, f"{name}-task"),
            opts=child_opts,
        )

        self.discovery_service = aws.servicediscovery.Service(
            f"{name}-discovery",
            name=workload.dns_name,
            dns_config=aws.servicediscovery.ServiceDnsConfigArgs(
                namespace_id=namespace_id,
                dns_records=[
                    aws.servicediscovery.ServiceDnsConfigDnsRecordArgs(
                        ttl=workload.dns_ttl_seconds,
                        type="A",
                    ),
                ],
                routing_policy="MULTIVALUE",
            ),
            health_check_custom_config=aws.servicediscovery.ServiceHealthCheckCustomConfigArgs(
                failure_threshold=1,
            ),
            tags=resource_tags(config, f"{name}-discovery"),
            opts=child_opts,
        )

        self.service = aws.ecs.Service(
            f"{name}-service",
            name=workload.name,
            cluster=cluster_arn,
            task_definition=self.task_definition.arn,
            desired_count=workload.desired_count,
            launch_type="FARGATE",
            network_configuration=aws.ecs.ServiceNetworkConfigurationArgs(
                subnets=subnet_ids,
                security_groups=[security_group_id],
                assign_public_ip=False,
            ),
            load_balancers=[
                aws.ecs.ServiceLoadBalancerArgs(
                    target_group_arn=target_group_arn,
                    container_name=workload.container_name,
                    container_port=workload.container_port,
                ),
            ],
            service_registries=aws.ecs.ServiceServiceRegistriesArgs(
                registry_arn=self.discovery_service.arn,
            ),
            tags=resource_tags(config, f"{name}-service"),
            # ECS rejects a target group that is not attached to a load balancer yet
            opts=pulumi.ResourceOptions(parent=self, depends_on=[listener]),
        )

        self.register_outputs({
            "service_name": self.service.name,
            "task_definition_arn": self.task_definition.arn,
            "discovery_service_arn": self.discovery_service.arn,
        })

    def get_outputs(self) -> FargateServiceOutputs:
        """Get Fargate service output values."""
        return FargateServiceOutputs(
            service_name=self.service.name,
            task_definition_arn=self.task_definition.arn,
            discovery_service_arn=self.discovery_service.arn,
        )
