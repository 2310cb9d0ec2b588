"""
Configuration module for the topology composer.

Provides the validated parameter model, the resolver, and ambient settings.
"""

from topology.configs.base import TopologyParameters
from topology.configs.parameters import resolve
from topology.configs.settings import TopologySettings, get_settings
from topology.configs.constants import (
    DEFAULT_PARAMETERS,
    ENGINE_VERSIONS,
    PORTS,
)

__all__ = [
    "TopologyParameters",
    "resolve",
    "TopologySettings",
    "get_settings",
    "DEFAULT_PARAMETERS",
    "ENGINE_VERSIONS",
    "PORTS",
]
