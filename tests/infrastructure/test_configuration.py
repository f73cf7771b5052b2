"""
Tests for stack configuration, naming and tagging utilities.

Validates:
1. get_config() falls back to the demo defaults
2. get_config() picks up stack config overrides
3. ResourceNamer and tag factories
4. Operator diagram labels
"""

from dataclasses import FrozenInstanceError, is_dataclass

import pytest

from fargate_service_alb.configs import environment
from fargate_service_alb.configs.base import StackConfig
from fargate_service_alb.configs.constants import DEFAULT_TAGS, DEMO_IMAGE


class FakeConfig:
    """Stands in for pulumi.Config with a fixed set of values per namespace."""

    values: dict[str, dict[str, str]] = {}

    def __init__(self, name: str | None = None) -> None:
        self.namespace = self.values.get(name or "project", {})

    def get(self, key: str) -> str | None:
        return self.namespace.get(key)


@pytest.fixture
def fake_config(monkeypatch):
    """Patch pulumi.Config as seen by the config loader."""
    monkeypatch.setattr(environment.pulumi, "Config", FakeConfig)
    FakeConfig.values = {}
    yield FakeConfig
    FakeConfig.values = {}


class TestGetConfig:
    """Tests for loading the stack config."""

    def test_defaults(self, fake_config):
        config = environment.get_config()

        assert config == StackConfig(
            stack_name="demo",
            environment="dev",
            demo_image=DEMO_IMAGE,
            aws_region="us-east-1",
        )

    def test_overrides(self, fake_config):
        fake_config.values = {
            "project": {
                "stack_name": "colorapp",
                "environment": "prod",
                "demo_image": "example/colorteller:blue",
            },
            "aws": {"region": "eu-west-1"},
        }

        config = environment.get_config()

        assert config.stack_name == "colorapp"
        assert config.environment == "prod"
        assert config.demo_image == "example/colorteller:blue"
        assert config.aws_region == "eu-west-1"
        assert config.is_production is True


class TestStackConfig:
    """Tests for the StackConfig dataclass."""

    def test_is_frozen_dataclass(self):
        config = StackConfig("demo", "dev", DEMO_IMAGE, "us-east-1")

        assert is_dataclass(config)
        with pytest.raises(FrozenInstanceError):
            config.stack_name = "other"

    def test_stack_tags(self):
        config = StackConfig("demo", "staging", DEMO_IMAGE, "us-east-1")

        assert config.get_tags() == {"Environment": "staging", "Stack": "demo"}
        assert config.is_production is False


class TestUtilities:
    """Tests for naming and tagging helpers."""

    def test_resource_naming(self):
        from fargate_service_alb.utils.naming import ResourceNamer

        namer = ResourceNamer(stack="demo", environment="dev")

        assert namer.name("cluster") == "demo-dev-cluster"

    def test_short_name_respects_limit(self):
        from fargate_service_alb.utils.naming import ResourceNamer

        namer = ResourceNamer(stack="a-very-long-deployment-name", environment="staging")
        name = namer.short_name("alb")

        assert len(name) <= 32
        assert not name.endswith("-")

    def test_create_tags_function(self):
        from fargate_service_alb.utils.tags import create_tags

        tags = create_tags("dev", "test-resource", ExtraTag="extra-value")

        assert tags["Environment"] == "dev"
        assert tags["Name"] == "test-resource"
        assert tags["ExtraTag"] == "extra-value"
        assert tags["ManagedBy"] == DEFAULT_TAGS["ManagedBy"]

    def test_merge_tags_function(self):
        from fargate_service_alb.utils.tags import merge_tags

        merged = merge_tags({"Tag1": "value1", "Shared": "original"}, {"Shared": "updated"})

        assert merged == {"Tag1": "value1", "Shared": "updated"}

    def test_resource_tags_include_stack(self):
        from fargate_service_alb.utils.tags import resource_tags

        config = StackConfig("demo", "dev", DEMO_IMAGE, "us-east-1")
        tags = resource_tags(config, "demo-dev-vpc")

        assert tags["Stack"] == "demo"
        assert tags["Name"] == "demo-dev-vpc"
        assert tags["Project"] == "fargate-service-alb"


class TestArchitectureDiagram:
    """Tests for the diagram labels (no Graphviz needed)."""

    def test_diagram_nodes_describe_topology(self, descriptor):
        from fargate_service_alb.architecture_diagram import diagram_nodes

        labels = diagram_nodes(descriptor)

        assert list(labels) == [
            "users", "alb", "vpc", "nat", "service",
            "discovery", "logs", "registry", "roles",
        ]
        assert "ports 80)" in labels["alb"]
        assert "/ping 200-499" in labels["alb"]
        assert "demoApp:8080" in labels["service"]
        assert "ports 8080,9901,15000" in labels["service"]
        assert "demo.demo.local" in labels["discovery"]
        assert "AmazonEC2ContainerRegistryReadOnly" in labels["roles"]
