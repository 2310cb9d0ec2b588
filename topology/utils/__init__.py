"""
Utility functions for the topology program.

Provides naming conventions, tag factories, and logging setup.
"""

from topology.utils.naming import ResourceNamer
from topology.utils.tags import create_tags
from topology.utils.logger import configure_logging, get_logger

__all__ = [
    "ResourceNamer",
    "create_tags",
    "configure_logging",
    "get_logger",
]
