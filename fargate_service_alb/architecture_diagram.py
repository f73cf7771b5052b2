"""
Fargate demo service architecture diagram.

Draws the descriptor graph: users -> public ALB -> Fargate service in the
private subnets, with logs, IAM roles and service discovery alongside.

Dependencies:
    pip install "fargate-service-alb[diagram]"   (diagrams + Graphviz)

Usage:
    python -m fargate_service_alb.architecture_diagram [stack_name]
    # Outputs: <stack_name>_architecture.png
"""

import sys

from fargate_service_alb.topology.builder import build_topology
from fargate_service_alb.topology.descriptors import DeploymentDescriptor

graph_attr = {
    "fontsize": "14",
    "bgcolor": "white",
    "pad": "0.5",
    "splines": "ortho",
    "nodesep": "0.8",
    "ranksep": "1.2",
}

node_attr = {
    "fontsize": "11",
}


def diagram_nodes(descriptor: DeploymentDescriptor) -> dict[str, str]:
    """Node labels of the diagram, keyed by role, in drawing order."""
    network = descriptor.network
    workload = descriptor.workload
    entry = descriptor.traffic_entry
    external = descriptor.access_group(entry.access_group)
    internal = descriptor.access_group(workload.access_group)
    health = entry.health_check

    return {
        "users": "Users\n(Internet)",
        "alb": (
            f"Public ALB\n:{entry.listener_port} "
            f"(sg: {external.name}, ports {_ports(external.ports)})\n"
            f"health {health.path} {health.healthy_http_codes}"
        ),
        "vpc": f"VPC {network.cidr_block}\n{network.max_azs} AZs",
        "nat": f"NAT Gateways x{network.nat_gateways}",
        "service": (
            f"Fargate service '{workload.name}'\n"
            f"{workload.container_name}:{workload.container_port}\n"
            f"{workload.cpu} CPU / {workload.memory_mib} MiB x{workload.desired_count}\n"
            f"(sg: {internal.name}, ports {_ports(internal.ports)})"
        ),
        "discovery": (
            f"Cloud Map\n{workload.dns_name}.{descriptor.cluster.namespace}\n"
            f"TTL {workload.dns_ttl_seconds}s"
        ),
        "logs": f"CloudWatch Logs\n{descriptor.log_sink.name} "
                f"({descriptor.log_sink.retention_days}d)",
        "registry": f"Container image\n{workload.image}",
        "roles": "IAM roles\n" + "\n".join(
            f"{identity.name}: {', '.join(identity.managed_policies)}"
            for identity in descriptor.identities
        ),
    }


def _ports(ports: tuple[int, ...]) -> str:
    return ",".join(str(port) for port in ports)


def render(descriptor: DeploymentDescriptor, filename: str | None = None) -> str:
    """
    Render the diagram to a PNG file.

    Args:
        descriptor: Descriptor graph to draw
        filename: Output file name without extension

    Returns:
        The file name used
    """
    from diagrams import Cluster, Diagram, Edge
    from diagrams.aws.compute import ECR, ECS, Fargate
    from diagrams.aws.general import Users
    from diagrams.aws.management import Cloudwatch
    from diagrams.aws.network import ALB, CloudMap, NATGateway
    from diagrams.aws.security import IAMRole

    filename = filename or f"{descriptor.stack_name}_architecture"
    labels = diagram_nodes(descriptor)

    with Diagram(
        f"{descriptor.stack_name}: Fargate service behind a public ALB",
        filename=filename,
        show=False,
        direction="LR",
        graph_attr=graph_attr,
        node_attr=node_attr,
    ):
        users = Users(labels["users"])

        with Cluster(labels["vpc"]):
            with Cluster("Public subnets"):
                alb = ALB(labels["alb"])
                nat = NATGateway(labels["nat"])
            with Cluster(f"ECS cluster ({descriptor.cluster.name})"):
                service = Fargate(labels["service"])
                ECS(descriptor.cluster.name) >> service
            discovery = CloudMap(labels["discovery"])

        logs = Cloudwatch(labels["logs"])
        registry = ECR(labels["registry"])
        roles = IAMRole(labels["roles"])

        users >> Edge(label="HTTP :80") >> alb
        alb >> Edge(label=f":{descriptor.traffic_entry.target_port}") >> service
        service >> Edge(style="dashed") >> discovery
        service >> Edge(label="awslogs") >> logs
        service >> nat >> registry
        roles >> Edge(style="dotted") >> service

    return filename


if __name__ == "__main__":
    stack_name = sys.argv[1] if len(sys.argv) > 1 else None
    print(render(build_topology(stack_name)))
