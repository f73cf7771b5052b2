"""
Descriptor graph for the demo deployment.

Pure data: builds the immutable descriptor graph that the Pulumi components
in fargate_service_alb.components turn into AWS resources.
"""

from fargate_service_alb.topology.builder import (
    BUILD_SEQUENCE,
    TopologyBuilder,
    build_topology,
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
from fargate_service_alb.topology.exceptions import (
    MissingDependencyError,
    TopologyError,
    UnknownReferenceError,
)

__all__ = [
    "BUILD_SEQUENCE",
    "TopologyBuilder",
    "build_topology",
    "AccessRule",
    "AccessRuleGroup",
    "ComputeClusterDescriptor",
    "DeploymentDescriptor",
    "ExecutionIdentity",
    "HealthCheckPolicy",
    "IdentityRole",
    "LogSinkDescriptor",
    "NetworkDescriptor",
    "OutputSource",
    "SourceScope",
    "StackOutput",
    "TrafficEntryDescriptor",
    "WorkloadDescriptor",
    "MissingDependencyError",
    "TopologyError",
    "UnknownReferenceError",
]
