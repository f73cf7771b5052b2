"""
ECS cluster component for Fargate tasks.

Creates:
- ECS cluster (Fargate capacity, no EC2 instances to manage)
- Private DNS namespace in the VPC, used by services to register
  themselves for service discovery
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from fargate_service_alb.configs.base import StackConfig
from fargate_service_alb.topology.descriptors import ComputeClusterDescriptor
from fargate_service_alb.utils.tags import resource_tags


@dataclass
class ClusterOutputs:
    """Output values from cluster component."""
    cluster_arn: pulumi.Output[str]
    cluster_name: pulumi.Output[str]
    namespace_id: pulumi.Output[str]


class ClusterComponent(pulumi.ComponentResource):
    """ECS cluster bound to the VPC through its service discovery namespace."""

    def __init__(
        self,
        name: str,
        config: StackConfig,
        cluster: ComputeClusterDescriptor,
        vpc_id: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:compute:Cluster", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.cluster = aws.ecs.Cluster(
            f"{name}-cluster",
            name=name,
            tags=resource_tags(config, name),
            opts=child_opts,
        )

        self.namespace = aws.servicediscovery.PrivateDnsNamespace(
            f"{name}-namespace",
            name=cluster.namespace,
            vpc=vpc_id,
            description=f"Service discovery for {name}",
            tags=resource_tags(config, f"{name}-namespace"),
            opts=child_opts,
        )

        self.register_outputs({
            "cluster_arn": self.cluster.arn,
            "cluster_name": self.cluster.name,
            "namespace_id": self.namespace.id,
        })

    def get_outputs(self) -> ClusterOutputs:
        """Get cluster output values."""
        return ClusterOutputs(
            cluster_arn=self.cluster.arn,
            cluster_name=self.cluster.name,
            namespace_id=self.namespace.id,
        )
