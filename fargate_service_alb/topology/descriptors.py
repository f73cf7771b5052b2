"""
Descriptor graph models.

Immutable configuration nodes describing the desired infrastructure state.
Nodes reference each other by logical name only, so a graph can be compared
with == and handed to the provisioning layer as plain data.

Dependencies: pydantic
System role: Schema of the deployment descriptor graph
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from fargate_service_alb.topology.exceptions import UnknownReferenceError


class Descriptor(BaseModel):
    """Base for all descriptor nodes: immutable, no unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class SourceScope(str, Enum):
    """Where traffic permitted by an access rule may come from."""

    ANY_IPV4 = "any-ipv4"
    SAME_GROUP = "same-group"


class IdentityRole(str, Enum):
    """Who assumes an execution identity."""

    TASK = "task"
    LAUNCH = "launch"


class OutputSource(str, Enum):
    """Provisioned attribute an operator-facing output is read from."""

    CLUSTER_NAME = "cluster-name"
    LOAD_BALANCER_DNS = "load-balancer-dns"


class LogSinkDescriptor(Descriptor):
    """Named log destination for the workload."""

    name: str = Field(..., min_length=1)
    retention_days: int = Field(..., ge=1)
    destroy_on_teardown: bool = True


class NetworkDescriptor(Descriptor):
    """Isolated virtual network spanning several availability zones."""

    name: str = Field(..., min_length=1)
    cidr_block: str
    max_azs: int = Field(..., ge=1)
    public_subnet_cidrs: tuple[str, ...]
    private_subnet_cidrs: tuple[str, ...]
    nat_gateways: int = Field(..., ge=0)


class AccessRule(Descriptor):
    """One permitted inbound flow."""

    protocol: str = "tcp"
    port: int = Field(..., ge=1, le=65535)
    source: SourceScope
    description: str = ""


class AccessRuleGroup(Descriptor):
    """Set of access rules attached to the network (a security group)."""

    name: str = Field(..., min_length=1)
    description: str
    network: str
    ingress: tuple[AccessRule, ...]
    allow_all_outbound: bool = True

    @property
    def ports(self) -> tuple[int, ...]:
        """Ports opened by this group, in rule order."""
        return tuple(rule.port for rule in self.ingress)


class ComputeClusterDescriptor(Descriptor):
    """Logical grouping under which workloads run."""

    name: str = Field(..., min_length=1)
    network: str
    namespace: str


class ExecutionIdentity(Descriptor):
    """Permission set assumed by running tasks or by the launch agent."""

    name: str = Field(..., min_length=1)
    role: IdentityRole
    assumed_by: str
    managed_policies: tuple[str, ...]


class WorkloadDescriptor(Descriptor):
    """A runnable unit: container, sizing, placement and DNS registration."""

    name: str = Field(..., min_length=1)
    family: str
    container_name: str
    image: str = Field(..., min_length=1)
    container_port: int = Field(..., ge=1, le=65535)
    cpu: int = Field(..., gt=0)
    memory_mib: int = Field(..., gt=0)
    log_sink: str
    log_stream_prefix: str
    cluster: str
    task_identity: str
    launch_identity: str
    access_group: str
    desired_count: int = Field(..., ge=0)
    dns_name: str
    dns_ttl_seconds: int = Field(..., ge=0)


class HealthCheckPolicy(Descriptor):
    """Load balancer health check against the workload."""

    path: str
    port: str
    interval_seconds: int = Field(..., ge=5, le=300)
    timeout_seconds: int = Field(..., ge=2, le=120)
    healthy_threshold: int = Field(..., ge=2, le=10)
    unhealthy_threshold: int = Field(..., ge=2, le=10)
    healthy_http_codes: str


class TrafficEntryDescriptor(Descriptor):
    """Public load balancer with one listener targeting the workload."""

    name: str = Field(..., min_length=1)
    internet_facing: bool = True
    network: str
    access_group: str
    listener_port: int = Field(..., ge=1, le=65535)
    target: str
    target_port: int = Field(..., ge=1, le=65535)
    health_check: HealthCheckPolicy


class StackOutput(Descriptor):
    """Value printed for the operator after deployment."""

    key: str
    description: str
    source: OutputSource


class DeploymentDescriptor(Descriptor):
    """The whole descriptor graph for one deployment."""

    stack_name: str = Field(..., min_length=1)
    log_sink: LogSinkDescriptor
    network: NetworkDescriptor
    access_groups: tuple[AccessRuleGroup, ...]
    cluster: ComputeClusterDescriptor
    identities: tuple[ExecutionIdentity, ...]
    workload: WorkloadDescriptor
    traffic_entry: TrafficEntryDescriptor
    outputs: tuple[StackOutput, ...]

    def access_group(self, name: str) -> AccessRuleGroup:
        """Look up an access-rule group by name."""
        for group in self.access_groups:
            if group.name == name:
                return group
        raise UnknownReferenceError("access group", name)

    def identity(self, name: str) -> ExecutionIdentity:
        """Look up an execution identity by name."""
        for identity in self.identities:
            if identity.name == name:
                return identity
        raise UnknownReferenceError("execution identity", name)
