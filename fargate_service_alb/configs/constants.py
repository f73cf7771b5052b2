"""
Infrastructure constants for the Fargate demo service.

Contains ports, CIDR blocks, task sizing, health check policy and IAM policy
names. Values change here, never inline in the builder or the components.
"""

from typing import Final

# Stack defaults
DEFAULT_STACK_NAME: Final[str] = "demo"
DEFAULT_ENVIRONMENT: Final[str] = "dev"
DEFAULT_REGION: Final[str] = "us-east-1"

# Demo customization: your own image on Docker Hub or ECR for your own account
DEMO_IMAGE: Final[str] = "487213271675.dkr.ecr.us-east-1.amazonaws.com/demo-app:latest"

# Port configurations
PORTS: Final[dict[str, int]] = {
    "http": 80,
    "app": 8080,             # Demo app port (gateway and backends)
    "proxy_admin": 9901,     # Proxy admin interface, used for health checks
    "proxy_ingress": 15000,  # Proxy ingress; egress on 15001 is covered by all-outbound
}

# VPC Configuration (default public/private split across 2 AZs)
VPC_CIDR: Final[str] = "10.0.0.0/16"
MAX_AZS: Final[int] = 2

SUBNET_CIDRS: Final[dict[str, tuple[str, ...]]] = {
    "public": ("10.0.0.0/18", "10.0.64.0/18"),
    "private": ("10.0.128.0/18", "10.0.192.0/18"),
}

ANY_IPV4_CIDR: Final[str] = "0.0.0.0/0"

# Log sink
LOG_RETENTION_DAYS: Final[int] = 1
LOG_STREAM_PREFIX: Final[str] = "demo"

# Workload sizing and identity
TASK_FAMILY: Final[str] = "demoTask"
CONTAINER_NAME: Final[str] = "demoApp"
SERVICE_NAME: Final[str] = "demo"
TASK_CPU: Final[int] = 512
TASK_MEMORY_MIB: Final[int] = 1024
DESIRED_COUNT: Final[int] = 1

# Service discovery. Short TTL so records re-register quickly when the
# topology changes (e.g. a routing layer is put in front of the service).
SERVICE_DISCOVERY_NAMESPACE_SUFFIX: Final[str] = "local"
DNS_TTL_SECONDS: Final[int] = 10

# Load balancer health check
HEALTH_CHECK: Final[dict[str, str | int]] = {
    "path": "/ping",
    "port": "traffic-port",
    "interval_seconds": 10,
    "timeout_seconds": 5,
    "healthy_threshold": 2,
    "unhealthy_threshold": 2,
    "healthy_http_codes": "200-499",
}

# IAM
ECS_TASKS_PRINCIPAL: Final[str] = "ecs-tasks.amazonaws.com"

MANAGED_POLICIES: Final[dict[str, str]] = {
    "logs": "CloudWatchLogsFullAccess",
    "registry_read": "AmazonEC2ContainerRegistryReadOnly",
}

MANAGED_POLICY_ARN_PREFIX: Final[str] = "arn:aws:iam::aws:policy/"

# Default tags applied to all resources
DEFAULT_TAGS: Final[dict[str, str]] = {
    "Project": "fargate-service-alb",
    "ManagedBy": "pulumi",
}
