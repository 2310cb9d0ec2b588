"""
Ambient settings for the topology program.

Naming and logging settings, loaded from TOPOLOGY_* environment variables
or a local .env file.

Dependencies: pydantic, pydantic_settings
System role: Process-level configuration, separate from topology parameters
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TopologySettings(BaseSettings):
    """Naming and logging configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TOPOLOGY_",
        case_sensitive=False,
        extra="ignore",
    )

    project: str = Field(default="ops-topology", description="Project name used in resource names")
    environment: str = Field(default="dev", description="Deployment environment (dev, staging, prod)")
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )


@lru_cache
def get_settings() -> TopologySettings:
    """
    Get cached settings instance.

    Returns:
        TopologySettings: Settings loaded from the environment
    """
    return TopologySettings()
