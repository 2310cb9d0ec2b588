"""
Shared test fixtures and configuration for entire test suite.

Provides: Resolved default parameters and each composed plan entity
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

import pytest

from topology.composers import (
    compose_boundary,
    compose_compute,
    compose_data,
    compose_edge,
    compose_network,
    compose_plan,
    provision_credential,
)
from topology.configs import resolve


@pytest.fixture
def default_params():
    """Parameters resolved from an empty override mapping."""
    return resolve({})


@pytest.fixture
def network(default_params):
    """Network placement for the default CIDR."""
    return compose_network(default_params.network_cidr)


@pytest.fixture
def boundary():
    """Standard security boundary graph."""
    return compose_boundary()


@pytest.fixture
def compute(default_params, network, boundary):
    """Compute tier composed from the default parameters."""
    return compose_compute(default_params, network, boundary)


@pytest.fixture
def edge(network, boundary, compute):
    """Edge tier bound to the default compute tier."""
    return compose_edge(network, boundary, compute)


@pytest.fixture
def credential():
    """Generated credential request."""
    return provision_credential()


@pytest.fixture
def data(default_params, network, boundary, credential):
    """Data tier composed from the default parameters."""
    return compose_data(default_params, network, boundary, credential)


@pytest.fixture
def default_plan():
    """Plan composed through the standard pipeline with no overrides."""
    return compose_plan()
