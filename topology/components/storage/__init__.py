"""
Storage components.

Components:
- DatabaseComponent: RDS instance for the data tier
"""

from topology.components.storage.rds_database import DatabaseComponent, DatabaseOutputs

__all__ = [
    "DatabaseComponent",
    "DatabaseOutputs",
]
