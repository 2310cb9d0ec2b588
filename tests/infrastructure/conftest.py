"""Pytest fixtures for infrastructure tests."""

from pathlib import Path

import pytest


@pytest.fixture
def topology_package_root():
    """Return the topology package directory."""
    return Path(__file__).parent.parent.parent / "topology"


@pytest.fixture
def python_files_in_topology(topology_package_root):
    """Return all Python files in the topology package."""
    return [f for f in topology_package_root.rglob("*.py") if "__pycache__" not in str(f)]
