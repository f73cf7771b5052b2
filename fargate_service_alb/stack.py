"""
Provisioning layer: turns a DeploymentDescriptor into Pulumi resources.

Components are created in the order the engine needs them:
1. Log group
2. VPC -> Security groups
3. Cluster (+ service discovery namespace) -> IAM roles
4. ALB (listener + empty target group)
5. Fargate service, registered into the target group

The descriptor graph itself is ordered workload -> traffic entry; the
target group is created ahead of the service only because ECS needs its ARN
when the service is created.
"""

import pulumi

from fargate_service_alb.configs.base import StackConfig
from fargate_service_alb.topology.descriptors import DeploymentDescriptor, OutputSource
from fargate_service_alb.utils.naming import ResourceNamer

from fargate_service_alb.components.observability.log_group import LogGroupComponent
from fargate_service_alb.components.networking.vpc import VpcComponent
from fargate_service_alb.components.networking.security_groups import SecurityGroupsComponent
from fargate_service_alb.components.security.iam_roles import IamRolesComponent
from fargate_service_alb.components.compute.cluster import ClusterComponent
from fargate_service_alb.components.compute.alb import AlbComponent
from fargate_service_alb.components.compute.fargate_service import FargateServiceComponent


def provision(
    descriptor: DeploymentDescriptor,
    config: StackConfig,
) -> dict[str, pulumi.Output[str]]:
    """
    Create every component for the descriptor graph.

    Args:
        descriptor: Descriptor graph from TopologyBuilder
        config: Stack configuration

    Returns:
        Operator-facing outputs keyed by StackOutput.key
    """
    namer = ResourceNamer(stack=descriptor.stack_name, environment=config.environment)
    workload = descriptor.workload
    traffic_entry = descriptor.traffic_entry

    # --- Log sink ---
    log_group = LogGroupComponent(
        name=namer.name("logs"),
        config=config,
        log_sink=descriptor.log_sink,
    )
    log_outputs = log_group.get_outputs()

    # --- Networking ---
    vpc = VpcComponent(
        name=namer.name(descriptor.network.name),
        config=config,
        network=descriptor.network,
    )
    vpc_outputs = vpc.get_outputs()

    security_groups = SecurityGroupsComponent(
        name=namer.name("sg"),
        config=config,
        vpc_id=vpc_outputs.vpc_id,
        access_groups=descriptor.access_groups,
    )
    sg_ids = security_groups.get_outputs().security_group_ids

    # --- Cluster and identities ---
    cluster = ClusterComponent(
        name=namer.name(descriptor.cluster.name),
        config=config,
        cluster=descriptor.cluster,
        vpc_id=vpc_outputs.vpc_id,
    )
    cluster_outputs = cluster.get_outputs()

    iam_roles = IamRolesComponent(
        name=namer.name("iam"),
        config=config,
        identities=descriptor.identities,
    )
    role_arns = iam_roles.get_outputs().role_arns

    # --- Traffic entry ---
    alb = AlbComponent(
        name=namer.name(traffic_entry.name),
        config=config,
        namer=namer,
        traffic_entry=traffic_entry,
        vpc_id=vpc_outputs.vpc_id,
        subnet_ids=vpc_outputs.public_subnet_ids,
        security_group_id=sg_ids[traffic_entry.access_group],
    )
    alb_outputs = alb.get_outputs()

    # --- Workload ---
    FargateServiceComponent(
        name=namer.name(workload.name),
        config=config,
        workload=workload,
        cluster_arn=cluster_outputs.cluster_arn,
        namespace_id=cluster_outputs.namespace_id,
        log_group_name=log_outputs.log_group_name,
        task_role_arn=role_arns[workload.task_identity],
        execution_role_arn=role_arns[workload.launch_identity],
        subnet_ids=vpc_outputs.private_subnet_ids,
        security_group_id=sg_ids[workload.access_group],
        target_group_arn=alb_outputs.target_group_arn,
        listener=alb.listener,
    )

    sources = {
        OutputSource.CLUSTER_NAME: cluster_outputs.cluster_name,
        OutputSource.LOAD_BALANCER_DNS: alb_outputs.alb_dns_name,
    }
    return {output.key: sources[output.source] for output in descriptor.outputs}
