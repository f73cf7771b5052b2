"""
Pulumi infrastructure-as-code for the Fargate demo service.

This package defines AWS infrastructure including:
- VPC with public and private subnets in 2 AZs
- Security groups for public HTTP and internal app/proxy traffic
- ECS cluster with a private service discovery namespace
- Fargate service for the demo app, with CloudWatch logs
- Internet-facing ALB with health checks
"""
