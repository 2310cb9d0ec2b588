"""
Plan composers.

Pure functions that turn resolved parameters into immutable resource specs,
plus the assembler that orders them into a provisioning plan.
"""

from topology.composers.network import (
    NetworkPlacement,
    SubnetTier,
    SubnetVisibility,
    compose_network,
)
from topology.composers.boundary import (
    BoundaryNode,
    BoundaryRule,
    SecurityBoundary,
    compose_boundary,
    verify_boundary,
)
from topology.composers.compute import ComputeTierSpec, compose_compute
from topology.composers.edge import EdgeSpec, HealthCheck, compose_edge
from topology.composers.credentials import CredentialDescriptor, provision_credential
from topology.composers.data import DataTierSpec, compose_data, select_engine
from topology.composers.plan import (
    DeferredRef,
    ProvisioningPlan,
    assemble,
    compose_plan,
)

__all__ = [
    "NetworkPlacement",
    "SubnetTier",
    "SubnetVisibility",
    "compose_network",
    "BoundaryNode",
    "BoundaryRule",
    "SecurityBoundary",
    "compose_boundary",
    "verify_boundary",
    "ComputeTierSpec",
    "compose_compute",
    "EdgeSpec",
    "HealthCheck",
    "compose_edge",
    "CredentialDescriptor",
    "provision_credential",
    "DataTierSpec",
    "compose_data",
    "select_engine",
    "DeferredRef",
    "ProvisioningPlan",
    "assemble",
    "compose_plan",
]
