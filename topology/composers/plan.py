"""
Plan assembler.

Orders the composed entities into a single acyclic resource graph and
extracts the post-deploy outputs.

Steps:
1. Collect entities by resource identifier (identifiers must be unique).
2. Read each entity's reference fields (network_id, boundary_id,
   target_id, credential_id) into a dependency graph. Every reference must
   name a supplied entity.
3. Check bindings: each tier must have been composed from the network,
   boundary and credential actually supplied. A tier built against a
   different upstream was composed out of order.
4. Order the graph in ready waves: an entity is placed once everything it
   references is placed. A wave that places nothing means a cycle.
5. Extract outputs as deferred references into the ordered entities.

Any failure raises DependencyCycle (or BoundaryViolation for a broken
boundary) and no plan is returned.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from topology.composers.boundary import SecurityBoundary, compose_boundary, verify_boundary
from topology.composers.compute import ComputeTierSpec, compose_compute
from topology.composers.credentials import CredentialDescriptor, provision_credential
from topology.composers.data import DataTierSpec, compose_data
from topology.composers.edge import EdgeSpec, compose_edge
from topology.composers.network import NetworkPlacement, SubnetVisibility, compose_network
from topology.configs.constants import (
    COMPUTE_TIER,
    DATA_TIER,
    EDGE_TIER,
    OUTPUT_DATABASE_ENDPOINT,
    OUTPUT_ENTRY_POINT,
    RESOURCE_IDS,
)
from topology.configs.parameters import resolve
from topology.exceptions import DependencyCycle

logger = logging.getLogger(__name__)

REFERENCE_FIELDS: tuple[str, ...] = ("network_id", "boundary_id", "target_id", "credential_id")

# Tie-break inside a ready wave
_CANONICAL_ORDER: tuple[str, ...] = (
    RESOURCE_IDS["network"],
    RESOURCE_IDS["boundary"],
    RESOURCE_IDS["credential"],
    RESOURCE_IDS["compute"],
    RESOURCE_IDS["edge"],
    RESOURCE_IDS["data"],
)


@dataclass(frozen=True)
class DeferredRef:
    """Placeholder for a value known only after the control plane creates a resource."""
    resource_id: str
    attribute: str

    def __str__(self) -> str:
        return f"${{{self.resource_id}.{self.attribute}}}"


@dataclass(frozen=True)
class ProvisioningPlan:
    """
    Complete, ordered, immutable set of resource specs and outputs.

    Attributes:
        network: Network placement
        boundary: Security boundary graph
        compute: Compute tier
        edge: Edge tier
        credential: Generated credential request
        data: Data tier
        order: Resource identifiers in creation order
        outputs: Output name -> deferred reference, in export order
    """
    network: NetworkPlacement
    boundary: SecurityBoundary
    compute: ComputeTierSpec
    edge: EdgeSpec
    credential: CredentialDescriptor
    data: DataTierSpec
    order: tuple[str, ...]
    outputs: Mapping[str, DeferredRef]

    def resources(self) -> dict[str, Any]:
        """Return the entities keyed by identifier, in creation order."""
        by_id = {
            entity.resource_id: entity
            for entity in (
                self.network,
                self.boundary,
                self.compute,
                self.edge,
                self.credential,
                self.data,
            )
        }
        return {resource_id: by_id[resource_id] for resource_id in self.order}

    def resolve(self, resource_id: str) -> Any:
        """Look up an entity by identifier."""
        try:
            return self.resources()[resource_id]
        except KeyError:
            raise KeyError(f"No resource {resource_id!r} in plan") from None


def assemble(
    network: NetworkPlacement,
    boundary: SecurityBoundary,
    compute: ComputeTierSpec,
    edge: EdgeSpec,
    credential: CredentialDescriptor,
    data: DataTierSpec,
) -> ProvisioningPlan:
    """
    Order the composed entities and extract the outputs.

    Returns:
        ProvisioningPlan: Deployable plan

    Raises:
        DependencyCycle: If references are dangling, inconsistent or cyclic
        BoundaryViolation: If the boundary graph breaks its access policy
    """
    entities = (network, boundary, compute, edge, credential, data)
    by_id: dict[str, Any] = {}
    for entity in entities:
        if entity.resource_id in by_id:
            raise DependencyCycle("Duplicate resource identifier", resource_id=entity.resource_id)
        by_id[entity.resource_id] = entity

    verify_boundary(boundary)
    graph = dependency_graph(by_id)
    _check_bindings(network, boundary, compute, edge, credential, data)
    order = _creation_order(graph)

    outputs = MappingProxyType({
        OUTPUT_ENTRY_POINT: DeferredRef(edge.resource_id, "dns_name"),
        OUTPUT_DATABASE_ENDPOINT: DeferredRef(data.resource_id, "endpoint_address"),
    })
    for name, ref in outputs.items():
        if ref.resource_id not in order:
            raise DependencyCycle(f"Output {name} references an unordered resource", resource_id=ref.resource_id)

    logger.info("Assembled plan: %s", " -> ".join(order))
    return ProvisioningPlan(
        network=network,
        boundary=boundary,
        compute=compute,
        edge=edge,
        credential=credential,
        data=data,
        order=order,
        outputs=outputs,
    )


def dependency_graph(entities: Mapping[str, Any]) -> dict[str, set[str]]:
    """
    Read reference fields into a graph of resource id -> referenced ids.

    Raises:
        DependencyCycle: If a reference names an entity that is not supplied
    """
    graph: dict[str, set[str]] = {}
    for resource_id, entity in entities.items():
        deps = {
            getattr(entity, name)
            for name in REFERENCE_FIELDS
            if hasattr(entity, name)
        }
        missing = deps - entities.keys()
        if missing:
            raise DependencyCycle(
                "Reference to a resource that was not composed",
                resource_id=resource_id,
                details={"missing": sorted(missing)},
            )
        graph[resource_id] = deps
    return graph


def _check_bindings(
    network: NetworkPlacement,
    boundary: SecurityBoundary,
    compute: ComputeTierSpec,
    edge: EdgeSpec,
    credential: CredentialDescriptor,
    data: DataTierSpec,
) -> None:
    """Check each tier was composed from the upstream entities supplied."""
    public = network.tier(SubnetVisibility.PUBLIC)
    private = network.tier(SubnetVisibility.PRIVATE_WITH_EGRESS)
    expected = {
        compute.resource_id: (compute.subnet_tier, private, compute.boundary_node, COMPUTE_TIER),
        edge.resource_id: (edge.subnet_tier, public, edge.boundary_node, EDGE_TIER),
        data.resource_id: (data.subnet_tier, private, data.boundary_node, DATA_TIER),
    }
    node_names = {node.name for node in boundary.nodes}

    for resource_id, (actual_tier, expected_tier, node_name, expected_node) in expected.items():
        if actual_tier != expected_tier:
            raise DependencyCycle(
                "Tier was composed against a different network placement",
                resource_id=resource_id,
                details={"subnet_tier": actual_tier.name},
            )
        if node_name not in node_names:
            raise DependencyCycle(
                "Tier was composed against a different security boundary",
                resource_id=resource_id,
                details={"boundary_node": node_name},
            )
        if node_name != expected_node:
            raise DependencyCycle(
                "Tier is bound to another tier's boundary node",
                resource_id=resource_id,
                details={"boundary_node": node_name, "expected": expected_node},
            )

    if edge.target_id != compute.resource_id:
        raise DependencyCycle("Edge targets a different compute tier", resource_id=edge.resource_id)
    if data.credential_id != credential.resource_id:
        raise DependencyCycle("Data tier uses a different credential", resource_id=data.resource_id)
    if data.port not in {rule.port for rule in boundary.inbound(data.boundary_node)}:
        raise DependencyCycle(
            "Data tier port is not opened by the security boundary",
            resource_id=data.resource_id,
            details={"port": data.port},
        )


def _creation_order(graph: Mapping[str, set[str]]) -> tuple[str, ...]:
    """Order the graph in ready waves."""
    rank = {resource_id: index for index, resource_id in enumerate(_CANONICAL_ORDER)}
    placed: list[str] = []
    remaining = set(graph)

    while remaining:
        ready = [
            resource_id for resource_id in remaining
            if graph[resource_id] <= set(placed)
        ]
        if not ready:
            raise DependencyCycle(
                "Circular dependency between resources",
                details={"remaining": sorted(remaining)},
            )
        ready.sort(key=lambda resource_id: (rank.get(resource_id, len(rank)), resource_id))
        placed.extend(ready)
        remaining -= set(ready)

    return tuple(placed)


def compose_plan(raw: Mapping[str, Any] | None = None) -> ProvisioningPlan:
    """
    Run the standard composition pipeline.

    Parameters -> {network, boundary} -> {compute, edge, credential, data}
    -> assembled plan. Identical input yields an equal plan.

    Args:
        raw: Sparse mapping of parameter overrides

    Returns:
        ProvisioningPlan: Deployable plan
    """
    params = resolve(raw)

    network = compose_network(params.network_cidr)
    boundary = compose_boundary()

    compute = compose_compute(params, network, boundary)
    edge = compose_edge(network, boundary, compute)
    credential = provision_credential()
    data = compose_data(params, network, boundary, credential)

    return assemble(network, boundary, compute, edge, credential, data)
