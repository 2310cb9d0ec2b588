"""
Topology parameters model.

Provides the single explicit parameter value handed to every composer.
Validation happens here, once, before any composition starts.

Dependencies: pydantic
System role: Validation boundary between the parameter source and the composers
"""

import ipaddress

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from topology.configs.constants import (
    AVAILABILITY_ZONE_COUNT,
    DEFAULT_PARAMETERS,
    ENGINE_VERSIONS,
    SUBNET_CIDR_MASK,
    SUBNET_TIER_NAMES,
)

# Widest prefix that still leaves room for one /24 per tier per AZ
MAX_NETWORK_PREFIX = SUBNET_CIDR_MASK - (
    AVAILABILITY_ZONE_COUNT * len(SUBNET_TIER_NAMES) - 1
).bit_length()


class TopologyParameters(BaseModel):
    """
    Resolved parameters for one topology.

    Attributes:
        network_cidr: IPv4 CIDR block of the network
        compute_instance_type: Instance type for the compute tier
        desired_capacity: Desired instance count of the compute tier
        min_capacity: Lower capacity bound
        max_capacity: Upper capacity bound
        data_engine: Database engine, normalized to lower case
        data_storage_gib: Allocated database storage in GiB
        data_instance_type: Instance type for the database
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    network_cidr: str = Field(default=DEFAULT_PARAMETERS["network_cidr"])
    compute_instance_type: str = Field(
        default=DEFAULT_PARAMETERS["compute_instance_type"],
        min_length=1,
    )
    desired_capacity: int = Field(default=DEFAULT_PARAMETERS["desired_capacity"], ge=0)
    min_capacity: int = Field(default=DEFAULT_PARAMETERS["min_capacity"], ge=0)
    max_capacity: int = Field(default=DEFAULT_PARAMETERS["max_capacity"], ge=0)
    data_engine: str = Field(default=DEFAULT_PARAMETERS["data_engine"])
    data_storage_gib: int = Field(
        default=DEFAULT_PARAMETERS["data_storage_gib"],
        gt=0,
        alias="dataStorageGiB",
    )
    data_instance_type: str = Field(
        default=DEFAULT_PARAMETERS["data_instance_type"],
        min_length=1,
    )

    @field_validator("network_cidr")
    @classmethod
    def _validate_network_cidr(cls, value: str) -> str:
        if "/" not in value:
            raise PydanticCustomError(
                "invalid_cidr",
                "CIDR block must include a prefix length: {cidr}",
                {"cidr": value},
            )
        try:
            network = ipaddress.IPv4Network(value)
        except ValueError:
            raise PydanticCustomError(
                "invalid_cidr",
                "Invalid IPv4 CIDR block: {cidr}",
                {"cidr": value},
            ) from None
        if network.prefixlen > MAX_NETWORK_PREFIX:
            raise PydanticCustomError(
                "cidr_too_small",
                "CIDR block {cidr} cannot hold the subnet layout (need /{prefix} or wider)",
                {"cidr": value, "prefix": MAX_NETWORK_PREFIX},
            )
        return str(network)

    @field_validator("data_engine")
    @classmethod
    def _normalize_engine(cls, value: str) -> str:
        engine = value.lower()
        if engine not in ENGINE_VERSIONS:
            raise PydanticCustomError(
                "unrecognized_engine",
                "Unrecognized data engine: {engine}",
                {"engine": value},
            )
        return engine

    @model_validator(mode="after")
    def _check_capacity_bounds(self) -> "TopologyParameters":
        if not self.min_capacity <= self.desired_capacity <= self.max_capacity:
            raise PydanticCustomError(
                "capacity_bounds",
                "Capacity must satisfy min <= desired <= max "
                "(got min={min}, desired={desired}, max={max})",
                {
                    "min": self.min_capacity,
                    "desired": self.desired_capacity,
                    "max": self.max_capacity,
                },
            )
        return self
