"""Pytest fixtures for infrastructure tests."""

import sys
from pathlib import Path

import pytest


@pytest.fixture(scope="session", autouse=True)
def add_project_to_path():
    """Add the project root to the Python path for imports."""
    project_root = Path(__file__).parent.parent.parent
    sys.path.insert(0, str(project_root))
    yield
    # Cleanup
    sys.path.remove(str(project_root))


@pytest.fixture
def package_root():
    """Return the infrastructure package directory."""
    return Path(__file__).parent.parent.parent / "fargate_service_alb"


@pytest.fixture
def python_files_in_package(package_root):
    """Return all Python files in the infrastructure package."""
    return [f for f in package_root.rglob("*.py") if "__pycache__" not in str(f)]


@pytest.fixture
def descriptor():
    """Descriptor graph for the default 'demo' stack."""
    from fargate_service_alb.topology.builder import build_topology

    return build_topology("demo")
