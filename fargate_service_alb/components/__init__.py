"""
Pulumi component resources for the Fargate demo stack.

Each submodule provides ComponentResource classes that translate one part of
the descriptor graph into AWS resources:
- observability: CloudWatch log group
- networking: VPC, subnets, NAT gateways, security groups
- security: IAM roles for tasks and the task execution agent
- compute: ECS cluster, public ALB, Fargate service
"""
