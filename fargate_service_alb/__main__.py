"""
Pulumi program entry point for the Fargate demo service.

Builds the descriptor graph, then instantiates all component resources:
1. Configuration
2. Descriptor graph (log sink, network, access rules, cluster, identities,
   workload, traffic entry, outputs)
3. Log group, VPC -> Security Groups, Cluster -> IAM Roles
4. ALB -> Fargate Service
5. Exports: cluster name and load balancer DNS name
"""

import pulumi

from fargate_service_alb.configs.environment import get_config
from fargate_service_alb.stack import provision
from fargate_service_alb.topology.builder import TopologyBuilder


def main() -> None:
    """Deploy the Fargate demo service behind a public ALB."""
    config = get_config()

    descriptor = TopologyBuilder(
        stack_name=config.stack_name,
        image=config.demo_image,
    ).build()
    pulumi.log.info(
        f"Descriptor graph built for stack '{descriptor.stack_name}' "
        f"({config.environment})"
    )

    outputs = provision(descriptor, config)

    # Printed by Pulumi once the deployment finishes
    for output in descriptor.outputs:
        pulumi.log.info(f"Exporting {output.key}: {output.description}")
        pulumi.export(output.key, outputs[output.key])


# Execute
main()
