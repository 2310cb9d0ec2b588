"""
Compute components for the compute and edge tiers.

Components:
- AutoScalingComponent: launch template and auto scaling group
- AlbComponent: internet-facing load balancer bound to the group
"""

from topology.components.compute.auto_scaling import AutoScalingComponent, AutoScalingOutputs
from topology.components.compute.alb import AlbComponent, AlbOutputs

__all__ = [
    "AutoScalingComponent",
    "AutoScalingOutputs",
    "AlbComponent",
    "AlbOutputs",
]
