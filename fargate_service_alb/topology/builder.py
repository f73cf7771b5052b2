"""
Topology builder.

Assembles the deployment descriptor graph in a fixed order:

    log sink -> network -> access rules -> cluster -> identities
             -> workload -> traffic entry -> outputs

Each step may only read parts produced by earlier steps. A step that asks for
a part that does not exist yet raises MissingDependencyError, so the graph
never contains a forward reference. The builder creates no cloud resources;
the result is handed to the provisioning layer in fargate_service_alb.stack.

Dependencies: pydantic (descriptor models)
System role: Core of the topology generator
"""

import logging
from typing import Any, Callable, Final

from fargate_service_alb.configs.constants import (
    CONTAINER_NAME,
    DEFAULT_STACK_NAME,
    DEMO_IMAGE,
    DESIRED_COUNT,
    DNS_TTL_SECONDS,
    ECS_TASKS_PRINCIPAL,
    HEALTH_CHECK,
    LOG_RETENTION_DAYS,
    LOG_STREAM_PREFIX,
    MANAGED_POLICIES,
    MAX_AZS,
    PORTS,
    SERVICE_DISCOVERY_NAMESPACE_SUFFIX,
    SERVICE_NAME,
    SUBNET_CIDRS,
    TASK_CPU,
    TASK_FAMILY,
    TASK_MEMORY_MIB,
    VPC_CIDR,
)
from fargate_service_alb.topology.descriptors import (
    AccessRule,
    AccessRuleGroup,
    ComputeClusterDescriptor,
    DeploymentDescriptor,
    ExecutionIdentity,
    HealthCheckPolicy,
    IdentityRole,
    LogSinkDescriptor,
    NetworkDescriptor,
    OutputSource,
    SourceScope,
    StackOutput,
    TrafficEntryDescriptor,
    WorkloadDescriptor,
)
from fargate_service_alb.topology.exceptions import MissingDependencyError

logger = logging.getLogger(__name__)

BUILD_SEQUENCE: Final[tuple[str, ...]] = (
    "log_sink",
    "network",
    "access_rules",
    "cluster",
    "identities",
    "workload",
    "traffic_entry",
    "outputs",
)

EXTERNAL_GROUP: Final[str] = "external"
INTERNAL_GROUP: Final[str] = "internal"
TASK_IDENTITY: Final[str] = "task"
LAUNCH_IDENTITY: Final[str] = "task-execution"


class TopologyBuilder:
    """
    Builds one DeploymentDescriptor per call to build().

    Attributes:
        stack_name: Logical deployment name (defaults to "demo")
        image: Container image for the workload
    """

    def __init__(self, stack_name: str | None = None, image: str | None = None) -> None:
        self.stack_name = stack_name or DEFAULT_STACK_NAME
        self.image = image or DEMO_IMAGE

    def build(self) -> DeploymentDescriptor:
        """
        Run every step of BUILD_SEQUENCE in order and assemble the graph.

        Returns:
            DeploymentDescriptor: Immutable descriptor graph

        Raises:
            MissingDependencyError: If a step reads a part not built yet
            pydantic.ValidationError: If a descriptor value violates its schema
        """
        parts: dict[str, Any] = {}
        for step in BUILD_SEQUENCE:
            parts[step] = self._step(step)(parts)
            logger.debug("Built %s for stack %s", step, self.stack_name)

        return DeploymentDescriptor(
            stack_name=self.stack_name,
            log_sink=parts["log_sink"],
            network=parts["network"],
            access_groups=parts["access_rules"],
            cluster=parts["cluster"],
            identities=parts["identities"],
            workload=parts["workload"],
            traffic_entry=parts["traffic_entry"],
            outputs=parts["outputs"],
        )

    def _step(self, step: str) -> Callable[[dict[str, Any]], Any]:
        return getattr(self, f"_provision_{step}")

    @staticmethod
    def _require(parts: dict[str, Any], step: str, dependency: str) -> Any:
        if dependency not in parts:
            raise MissingDependencyError(step, dependency)
        return parts[dependency]

    def _provision_log_sink(self, parts: dict[str, Any]) -> LogSinkDescriptor:
        return LogSinkDescriptor(
            name=self.stack_name,
            retention_days=LOG_RETENTION_DAYS,
            destroy_on_teardown=True,
        )

    def _provision_network(self, parts: dict[str, Any]) -> NetworkDescriptor:
        return NetworkDescriptor(
            name="vpc",
            cidr_block=VPC_CIDR,
            max_azs=MAX_AZS,
            public_subnet_cidrs=SUBNET_CIDRS["public"][:MAX_AZS],
            private_subnet_cidrs=SUBNET_CIDRS["private"][:MAX_AZS],
            nat_gateways=MAX_AZS,
        )

    def _provision_access_rules(
        self, parts: dict[str, Any]
    ) -> tuple[AccessRuleGroup, AccessRuleGroup]:
        network = self._require(parts, "access_rules", "network")

        # Public inbound web traffic on port 80 only
        external = AccessRuleGroup(
            name=EXTERNAL_GROUP,
            description="Public inbound HTTP to the load balancer",
            network=network.name,
            ingress=(
                AccessRule(
                    port=PORTS["http"],
                    source=SourceScope.ANY_IPV4,
                    description="HTTP from anywhere",
                ),
            ),
        )

        # App and proxy ports, reachable only from members of this group
        internal = AccessRuleGroup(
            name=INTERNAL_GROUP,
            description="Traffic between app and proxy containers inside the VPC",
            network=network.name,
            ingress=tuple(
                AccessRule(
                    port=PORTS[key],
                    source=SourceScope.SAME_GROUP,
                    description=description,
                )
                for key, description in (
                    ("app", "App port"),
                    ("proxy_admin", "Proxy admin (health check)"),
                    ("proxy_ingress", "Proxy ingress"),
                )
            ),
        )
        return external, internal

    def _provision_cluster(self, parts: dict[str, Any]) -> ComputeClusterDescriptor:
        network = self._require(parts, "cluster", "network")
        return ComputeClusterDescriptor(
            name="cluster",
            network=network.name,
            namespace=f"{self.stack_name}.{SERVICE_DISCOVERY_NAMESPACE_SUFFIX}",
        )

    def _provision_identities(
        self, parts: dict[str, Any]
    ) -> tuple[ExecutionIdentity, ExecutionIdentity]:
        self._require(parts, "identities", "cluster")

        # Running tasks only write logs
        task = ExecutionIdentity(
            name=TASK_IDENTITY,
            role=IdentityRole.TASK,
            assumed_by=ECS_TASKS_PRINCIPAL,
            managed_policies=(MANAGED_POLICIES["logs"],),
        )
        # The launch agent also pulls the image
        launch = ExecutionIdentity(
            name=LAUNCH_IDENTITY,
            role=IdentityRole.LAUNCH,
            assumed_by=ECS_TASKS_PRINCIPAL,
            managed_policies=(
                MANAGED_POLICIES["logs"],
                MANAGED_POLICIES["registry_read"],
            ),
        )
        return task, launch

    def _provision_workload(self, parts: dict[str, Any]) -> WorkloadDescriptor:
        log_sink = self._require(parts, "workload", "log_sink")
        cluster = self._require(parts, "workload", "cluster")
        task, launch = self._require(parts, "workload", "identities")
        _, internal = self._require(parts, "workload", "access_rules")

        return WorkloadDescriptor(
            name=SERVICE_NAME,
            family=TASK_FAMILY,
            container_name=CONTAINER_NAME,
            image=self.image,
            container_port=PORTS["app"],
            cpu=TASK_CPU,
            memory_mib=TASK_MEMORY_MIB,
            log_sink=log_sink.name,
            log_stream_prefix=LOG_STREAM_PREFIX,
            cluster=cluster.name,
            task_identity=task.name,
            launch_identity=launch.name,
            access_group=internal.name,
            desired_count=DESIRED_COUNT,
            dns_name=SERVICE_NAME,
            dns_ttl_seconds=DNS_TTL_SECONDS,
        )

    def _provision_traffic_entry(self, parts: dict[str, Any]) -> TrafficEntryDescriptor:
        network = self._require(parts, "traffic_entry", "network")
        external, _ = self._require(parts, "traffic_entry", "access_rules")
        workload = self._require(parts, "traffic_entry", "workload")

        return TrafficEntryDescriptor(
            name="public-alb",
            internet_facing=True,
            network=network.name,
            access_group=external.name,
            listener_port=PORTS["http"],
            target=workload.name,
            target_port=workload.container_port,
            health_check=HealthCheckPolicy(**HEALTH_CHECK),
        )

    def _provision_outputs(self, parts: dict[str, Any]) -> tuple[StackOutput, StackOutput]:
        self._require(parts, "outputs", "cluster")
        self._require(parts, "outputs", "traffic_entry")
        return (
            StackOutput(
                key="ClusterName",
                description="ECS/Fargate cluster name",
                source=OutputSource.CLUSTER_NAME,
            ),
            StackOutput(
                key="URL",
                description="Demo App URL",
                source=OutputSource.LOAD_BALANCER_DNS,
            ),
        )


def build_topology(stack_name: str | None = None, image: str | None = None) -> DeploymentDescriptor:
    """Build the descriptor graph for one deployment."""
    return TopologyBuilder(stack_name=stack_name, image=image).build()
