"""
Tests for the Pulumi provisioning layer, run against Pulumi mocks.

Validates:
1. Log group is named after the stack and kept for one day
2. Security group rules match the access-rule groups
3. IAM roles get exactly their managed policies
4. Target group health check and service registration
5. provision() returns the two operator outputs
"""

import json

import pulumi


class TopologyMocks(pulumi.runtime.Mocks):
    """Echo inputs back as outputs, filling in provider-computed attributes."""

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        outputs = dict(args.inputs)
        outputs.setdefault("arn", f"arn:aws:mock:us-east-1:123456789012:{args.name}")
        if args.typ == "aws:lb/loadBalancer:LoadBalancer":
            outputs["dnsName"] = f"{args.name}-1234567890.us-east-1.elb.amazonaws.com"
        return [f"{args.name}_id", outputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        if args.token == "aws:index/getAvailabilityZones:getAvailabilityZones":
            return {
                "names": ["us-east-1a", "us-east-1b", "us-east-1c"],
                "zoneIds": ["use1-az1", "use1-az2", "use1-az4"],
            }
        return {}


pulumi.runtime.set_mocks(
    TopologyMocks(),
    project="fargate-service-alb",
    stack="dev",
    preview=False,
)

# Imported after set_mocks so resources register against the mock monitor
from fargate_service_alb.components.compute.alb import AlbComponent  # noqa: E402
from fargate_service_alb.components.compute.cluster import ClusterComponent  # noqa: E402
from fargate_service_alb.components.compute.fargate_service import FargateServiceComponent  # noqa: E402
from fargate_service_alb.components.networking.security_groups import SecurityGroupsComponent  # noqa: E402
from fargate_service_alb.components.networking.vpc import VpcComponent  # noqa: E402
from fargate_service_alb.components.observability.log_group import LogGroupComponent  # noqa: E402
from fargate_service_alb.components.security.iam_roles import IamRolesComponent  # noqa: E402
from fargate_service_alb.configs.base import StackConfig  # noqa: E402
from fargate_service_alb.stack import provision  # noqa: E402
from fargate_service_alb.topology.builder import build_topology  # noqa: E402
from fargate_service_alb.utils.naming import ResourceNamer  # noqa: E402

CONFIG = StackConfig(
    stack_name="demo",
    environment="dev",
    demo_image="example/app:latest",
    aws_region="us-east-1",
)
DESCRIPTOR = build_topology("demo", image=CONFIG.demo_image)


@pulumi.runtime.test
def test_log_group_named_after_stack():
    component = LogGroupComponent("test-logs", CONFIG, DESCRIPTOR.log_sink)

    def check(args):
        name, retention, skip_destroy = args
        assert name == "demo"
        assert retention == 1
        assert not skip_destroy

    return pulumi.Output.all(
        component.log_group.name,
        component.log_group.retention_in_days,
        component.log_group.skip_destroy,
    ).apply(check)


@pulumi.runtime.test
def test_vpc_has_two_zones_with_nat():
    component = VpcComponent("test-net", CONFIG, DESCRIPTOR.network)
    outputs = component.get_outputs()

    assert len(outputs.public_subnet_ids) == 2
    assert len(outputs.private_subnet_ids) == 2
    assert len(outputs.nat_gateway_ids) == 2

    def check(zones):
        assert zones == ["us-east-1a", "us-east-1b"]

    return pulumi.Output.all(
        *[subnet.availability_zone for subnet in component.private_subnets]
    ).apply(check)


@pulumi.runtime.test
def test_external_security_group_only_opens_http_to_anyone():
    component = SecurityGroupsComponent(
        "test-sg", CONFIG, "vpc-123", DESCRIPTOR.access_groups
    )
    rules = component.ingress_rules["external"]

    def check(args):
        assert args == [(80, 80, "tcp", "0.0.0.0/0", None)]

    return pulumi.Output.all(*[
        pulumi.Output.all(
            rule.from_port,
            rule.to_port,
            rule.ip_protocol,
            rule.cidr_ipv4,
            rule.referenced_security_group_id,
        ).apply(tuple)
        for rule in rules
    ]).apply(check)


@pulumi.runtime.test
def test_internal_security_group_references_itself():
    component = SecurityGroupsComponent(
        "test-sg-internal", CONFIG, "vpc-123", DESCRIPTOR.access_groups
    )
    rules = component.ingress_rules["internal"]
    internal_sg = component.security_groups["internal"]

    def check(args):
        sg_id, *rule_values = args
        assert [port for port, _, _ in rule_values] == [8080, 9901, 15000]
        for _, cidr, referenced in rule_values:
            assert cidr is None
            assert referenced == sg_id

    return pulumi.Output.all(
        internal_sg.id,
        *[
            pulumi.Output.all(
                rule.from_port,
                rule.cidr_ipv4,
                rule.referenced_security_group_id,
            ).apply(tuple)
            for rule in rules
        ],
    ).apply(check)


@pulumi.runtime.test
def test_security_group_rules_carry_stack_tags():
    component = SecurityGroupsComponent(
        "test-sg-tags", CONFIG, "vpc-123", DESCRIPTOR.access_groups
    )
    rules = component.ingress_rules["internal"] + component.egress_rules["internal"]

    def check(all_tags):
        for tags in all_tags:
            assert tags["Stack"] == "demo"
            assert tags["Environment"] == "dev"
            assert tags["ManagedBy"] == "pulumi"
        assert all_tags[-1]["Name"] == "test-sg-tags-internal-egress"

    return pulumi.Output.all(*[rule.tags for rule in rules]).apply(check)


@pulumi.runtime.test
def test_iam_roles_get_only_their_managed_policies():
    component = IamRolesComponent("test-iam", CONFIG, DESCRIPTOR.identities)

    def check(args):
        task_arns, launch_arns = args
        assert task_arns == ["arn:aws:iam::aws:policy/CloudWatchLogsFullAccess"]
        assert launch_arns == [
            "arn:aws:iam::aws:policy/CloudWatchLogsFullAccess",
            "arn:aws:iam::aws:policy/AmazonEC2ContainerRegistryReadOnly",
        ]

    return pulumi.Output.all(
        pulumi.Output.all(*[a.policy_arn for a in component.policy_attachments["task"]]),
        pulumi.Output.all(*[a.policy_arn for a in component.policy_attachments["task-execution"]]),
    ).apply(check)


@pulumi.runtime.test
def test_iam_trust_policy_for_ecs_tasks():
    component = IamRolesComponent("test-iam-trust", CONFIG, DESCRIPTOR.identities)

    def check(policy):
        statement = json.loads(policy)["Statement"][0]
        assert statement["Principal"] == {"Service": "ecs-tasks.amazonaws.com"}
        assert statement["Action"] == "sts:AssumeRole"

    return component.roles["task"].assume_role_policy.apply(check)


@pulumi.runtime.test
def test_target_group_health_check():
    component = AlbComponent(
        "test-alb",
        CONFIG,
        ResourceNamer(stack="demo", environment="dev"),
        DESCRIPTOR.traffic_entry,
        vpc_id="vpc-123",
        subnet_ids=["subnet-a", "subnet-b"],
        security_group_id="sg-external",
    )

    def check(args):
        port, target_type, health, listener_port, internal = args
        assert port == 8080
        assert target_type == "ip"
        assert health["path"] == "/ping"
        assert health["interval"] == 10
        assert health["timeout"] == 5
        assert health["healthy_threshold"] == 2
        assert health["unhealthy_threshold"] == 2
        assert health["matcher"] == "200-499"
        assert listener_port == 80
        assert internal is False

    return pulumi.Output.all(
        component.target_group.port,
        component.target_group.target_type,
        component.target_group.health_check,
        component.listener.port,
        component.alb.internal,
    ).apply(check)


@pulumi.runtime.test
def test_target_group_health_check_typed_output():
    component = AlbComponent(
        "test-alb-typed",
        CONFIG,
        ResourceNamer(stack="typed", environment="dev"),
        DESCRIPTOR.traffic_entry,
        vpc_id="vpc-123",
        subnet_ids=["subnet-a", "subnet-b"],
        security_group_id="sg-external",
    )

    def check(health):
        assert health.path == "/ping"
        assert health.port == "traffic-port"
        assert health.matcher == "200-499"
        assert health.interval == 10
        assert health.timeout == 5

    return component.target_group.health_check.apply(check)


@pulumi.runtime.test
def test_fargate_service_registration():
    cluster = ClusterComponent("test-cluster", CONFIG, DESCRIPTOR.cluster, "vpc-123")
    alb = AlbComponent(
        "test-svc-alb",
        CONFIG,
        ResourceNamer(stack="svc", environment="dev"),
        DESCRIPTOR.traffic_entry,
        vpc_id="vpc-123",
        subnet_ids=["subnet-a", "subnet-b"],
        security_group_id="sg-external",
    )
    component = FargateServiceComponent(
        "test-svc",
        CONFIG,
        DESCRIPTOR.workload,
        cluster_arn=cluster.cluster.arn,
        namespace_id=cluster.namespace.id,
        log_group_name="demo",
        task_role_arn="arn:aws:iam::123456789012:role/task",
        execution_role_arn="arn:aws:iam::123456789012:role/task-execution",
        subnet_ids=["subnet-private-a", "subnet-private-b"],
        security_group_id="sg-internal",
        target_group_arn=alb.target_group.arn,
        listener=alb.listener,
    )

    def check(args):
        desired_count, load_balancers, name, definitions, cpu, memory = args
        assert desired_count == 1
        assert name == "demo"
        assert load_balancers[0]["container_port"] == 8080
        assert load_balancers[0]["container_name"] == "demoApp"
        assert cpu == "512"
        assert memory == "1024"

        container = json.loads(definitions)[0]
        assert container["image"] == "example/app:latest"
        assert container["portMappings"][0]["containerPort"] == 8080
        options = container["logConfiguration"]["options"]
        assert options["awslogs-group"] == "demo"
        assert options["awslogs-stream-prefix"] == "demo"

    return pulumi.Output.all(
        component.service.desired_count,
        component.service.load_balancers,
        component.service.name,
        component.task_definition.container_definitions,
        component.task_definition.cpu,
        component.task_definition.memory,
    ).apply(check)


@pulumi.runtime.test
def test_service_discovery_ttl():
    cluster = ClusterComponent("test-dns-cluster", CONFIG, DESCRIPTOR.cluster, "vpc-123")
    component = FargateServiceComponent(
        "test-dns",
        CONFIG,
        DESCRIPTOR.workload,
        cluster_arn=cluster.cluster.arn,
        namespace_id=cluster.namespace.id,
        log_group_name="demo",
        task_role_arn="arn:task",
        execution_role_arn="arn:task-execution",
        subnet_ids=["subnet-private-a"],
        security_group_id="sg-internal",
        target_group_arn="arn:tg",
        listener=AlbComponent(
            "test-dns-alb",
            CONFIG,
            ResourceNamer(stack="dns", environment="dev"),
            DESCRIPTOR.traffic_entry,
            vpc_id="vpc-123",
            subnet_ids=["subnet-a"],
            security_group_id="sg-external",
        ).listener,
    )

    def check(args):
        namespace, dns_config = args
        assert namespace == "demo.local"
        assert dns_config["dns_records"][0]["ttl"] == 10
        assert dns_config["dns_records"][0]["type"] == "A"

    return pulumi.Output.all(
        cluster.namespace.name,
        component.discovery_service.dns_config,
    ).apply(check)


@pulumi.runtime.test
def test_provision_exports_cluster_name_and_url():
    config = StackConfig(
        stack_name="e2e",
        environment="dev",
        demo_image="example/app:latest",
        aws_region="us-east-1",
    )
    outputs = provision(build_topology("e2e", image=config.demo_image), config)

    assert list(outputs) == ["ClusterName", "URL"]

    def check(args):
        cluster_name, url = args
        assert cluster_name == "e2e-dev-cluster"
        assert url.endswith(".elb.amazonaws.com")

    return pulumi.Output.all(outputs["ClusterName"], outputs["URL"]).apply(check)
