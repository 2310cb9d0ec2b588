"""
Plan renderer.

Walks a ProvisioningPlan in its creation order and creates one Pulumi
component per entity. Each entity finds its upstream components through
its reference fields (network_id, boundary_id, target_id, credential_id),
so a component is only ever created after everything it references.

Output extraction resolves each deferred reference against the rendered
component outputs: ALB-DNS -> load balancer DNS name, RDS-Endpoint ->
database endpoint address.
"""

from collections.abc import Callable
from typing import Any

import pulumi

from topology.components.compute import AlbComponent, AutoScalingComponent
from topology.components.networking import SecurityGroupsComponent, VpcComponent
from topology.components.security import SecretComponent
from topology.components.storage import DatabaseComponent
from topology.composers import (
    ComputeTierSpec,
    CredentialDescriptor,
    DataTierSpec,
    DeferredRef,
    EdgeSpec,
    NetworkPlacement,
    ProvisioningPlan,
    SecurityBoundary,
)
from topology.utils.logger import get_logger
from topology.utils.naming import ResourceNamer

logger = get_logger(__name__)

Rendered = dict[str, Any]


def _render_network(spec: NetworkPlacement, rendered: Rendered, namer: ResourceNamer):
    return VpcComponent(
        name=namer.name(spec.resource_id),
        environment=namer.environment,
        placement=spec,
    ).get_outputs()


def _render_boundary(spec: SecurityBoundary, rendered: Rendered, namer: ResourceNamer):
    network = rendered[spec.network_id]
    return SecurityGroupsComponent(
        name=namer.name(spec.resource_id),
        environment=namer.environment,
        boundary=spec,
        vpc_id=network.vpc_id,
    ).get_outputs()


def _render_compute(spec: ComputeTierSpec, rendered: Rendered, namer: ResourceNamer):
    network = rendered[spec.network_id]
    groups = rendered[spec.boundary_id]
    return AutoScalingComponent(
        name=namer.name(spec.resource_id),
        environment=namer.environment,
        compute=spec,
        subnet_ids=network.subnet_ids_for(spec.subnet_tier),
        security_group_id=groups.group_id(spec.boundary_node),
    ).get_outputs()


def _render_edge(spec: EdgeSpec, rendered: Rendered, namer: ResourceNamer):
    network = rendered[spec.network_id]
    groups = rendered[spec.boundary_id]
    target = rendered[spec.target_id]
    return AlbComponent(
        name=namer.name(spec.resource_id),
        environment=namer.environment,
        edge=spec,
        vpc_id=network.vpc_id,
        subnet_ids=network.subnet_ids_for(spec.subnet_tier),
        security_group_id=groups.group_id(spec.boundary_node),
        autoscaling_group_name=target.group_name,
    ).get_outputs()


def _render_credential(spec: CredentialDescriptor, rendered: Rendered, namer: ResourceNamer):
    return SecretComponent(
        name=namer.name(spec.resource_id),
        environment=namer.environment,
        credential=spec,
        secret_name=namer.secret_name("db-credentials"),
    ).get_outputs()


def _render_data(spec: DataTierSpec, rendered: Rendered, namer: ResourceNamer):
    network = rendered[spec.network_id]
    groups = rendered[spec.boundary_id]
    credential = rendered[spec.credential_id]
    return DatabaseComponent(
        name=namer.name(spec.resource_id),
        environment=namer.environment,
        data=spec,
        subnet_ids=network.subnet_ids_for(spec.subnet_tier),
        security_group_id=groups.group_id(spec.boundary_node),
        username=credential.username,
        kms_key_id=credential.kms_key_arn,
    ).get_outputs()


RENDERERS: dict[type, Callable[[Any, Rendered, ResourceNamer], Any]] = {
    NetworkPlacement: _render_network,
    SecurityBoundary: _render_boundary,
    ComputeTierSpec: _render_compute,
    EdgeSpec: _render_edge,
    CredentialDescriptor: _render_credential,
    DataTierSpec: _render_data,
}


def render_plan(plan: ProvisioningPlan, namer: ResourceNamer) -> dict[str, pulumi.Output[str]]:
    """
    Create the plan's resources in creation order.

    Args:
        plan: Assembled provisioning plan
        namer: Resource namer for the stack

    Returns:
        dict[str, pulumi.Output[str]]: Output name -> resolved output, in plan order
    """
    rendered: Rendered = {}
    for resource_id, entity in plan.resources().items():
        logger.info("Rendering %s (%s)", resource_id, type(entity).__name__)
        rendered[resource_id] = RENDERERS[type(entity)](entity, rendered, namer)

    return {
        name: resolve_output(ref, rendered)
        for name, ref in plan.outputs.items()
    }


def resolve_output(ref: DeferredRef, rendered: Rendered) -> pulumi.Output[str]:
    """Resolve a deferred reference against rendered component outputs."""
    return getattr(rendered[ref.resource_id], ref.attribute)
