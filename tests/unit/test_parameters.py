"""Tests for the parameter resolver."""

import pytest
from pydantic import ValidationError

from topology.configs import TopologyParameters, resolve
from topology.exceptions import InvalidParameter, UnrecognizedEngine


class TestDefaults:
    """Defaults apply to every absent key."""

    def test_empty_mapping_uses_defaults(self) -> None:
        """An empty mapping yields the documented defaults."""
        params = resolve({})
        assert params.network_cidr == "10.20.0.0/16"
        assert params.compute_instance_type == "t2.micro"
        assert params.desired_capacity == 2
        assert params.min_capacity == 1
        assert params.max_capacity == 4
        assert params.data_engine == "postgres"
        assert params.data_storage_gib == 20
        assert params.data_instance_type == "t3.micro"

    def test_none_and_empty_are_equivalent(self) -> None:
        """No mapping, an empty mapping and None values all mean defaults."""
        assert resolve() == resolve({})
        assert resolve({"min_capacity": None, "data_engine": None}) == resolve({})

    def test_unknown_keys_are_ignored(self) -> None:
        """Unrecognized options do not fail resolution."""
        assert resolve({"region": "eu-west-1"}) == resolve({})


class TestOverrides:
    """Overrides replace defaults."""

    def test_snake_case_overrides(self) -> None:
        """Field names are accepted."""
        params = resolve({"compute_instance_type": "t3.small", "max_capacity": 6})
        assert params.compute_instance_type == "t3.small"
        assert params.max_capacity == 6
        assert params.min_capacity == 1

    def test_camel_case_aliases(self) -> None:
        """camelCase aliases are accepted."""
        params = resolve({
            "networkCidr": "10.30.0.0/16",
            "desiredCapacity": 3,
            "dataStorageGiB": 50,
            "dataInstanceType": "t3.small",
        })
        assert params.network_cidr == "10.30.0.0/16"
        assert params.desired_capacity == 3
        assert params.data_storage_gib == 50
        assert params.data_instance_type == "t3.small"

    def test_string_numbers_are_coerced(self) -> None:
        """Stack config values arrive as strings."""
        params = resolve({"desired_capacity": "3", "data_storage_gib": "100"})
        assert params.desired_capacity == 3
        assert params.data_storage_gib == 100

    def test_engine_is_case_insensitive(self) -> None:
        """Engine names normalize to lower case."""
        assert resolve({"data_engine": "MySQL"}).data_engine == "mysql"
        assert resolve({"data_engine": "POSTGRES"}).data_engine == "postgres"

    def test_parameters_are_immutable(self) -> None:
        """Resolved parameters cannot be mutated."""
        params = resolve({})
        with pytest.raises(ValidationError):
            params.min_capacity = 0  # type: ignore[misc]


class TestCapacityBounds:
    """min <= desired <= max is enforced before composition."""

    @pytest.mark.parametrize(
        "raw",
        [
            {"min_capacity": 3, "desired_capacity": 2},
            {"desired_capacity": 5, "max_capacity": 4},
            {"min_capacity": 5, "desired_capacity": 5, "max_capacity": 4},
        ],
    )
    def test_contradictory_bounds_rejected(self, raw) -> None:
        """Violating bounds raise InvalidParameter."""
        with pytest.raises(InvalidParameter, match="min <= desired <= max"):
            resolve(raw)

    def test_equal_bounds_accepted(self) -> None:
        """Equal bounds are valid, including zero."""
        params = resolve({"min_capacity": 0, "desired_capacity": 0, "max_capacity": 0})
        assert (params.min_capacity, params.desired_capacity, params.max_capacity) == (0, 0, 0)

    def test_negative_capacity_rejected(self) -> None:
        """Capacities must be non-negative."""
        with pytest.raises(InvalidParameter) as exc_info:
            resolve({"min_capacity": -1})
        assert exc_info.value.field == "min_capacity"

    def test_non_positive_storage_rejected(self) -> None:
        """Storage must be positive."""
        with pytest.raises(InvalidParameter) as exc_info:
            resolve({"data_storage_gib": 0})
        assert exc_info.value.field == "data_storage_gib"


class TestNetworkCidr:
    """CIDR blocks are validated syntactically and for size."""

    @pytest.mark.parametrize(
        "cidr",
        ["not-a-cidr", "10.20.0.0", "10.20.0.1/16", "300.1.0.0/16", "10.20.0.0/33"],
    )
    def test_malformed_cidr_rejected(self, cidr: str) -> None:
        """Malformed blocks raise InvalidParameter on network_cidr."""
        with pytest.raises(InvalidParameter) as exc_info:
            resolve({"network_cidr": cidr})
        assert exc_info.value.field == "network_cidr"

    def test_too_small_cidr_rejected(self) -> None:
        """A block that cannot hold four /24 subnets is rejected."""
        with pytest.raises(InvalidParameter):
            resolve({"network_cidr": "10.20.0.0/23"})

    def test_smallest_usable_cidr_accepted(self) -> None:
        """A /22 holds exactly the four subnets."""
        assert resolve({"network_cidr": "10.20.0.0/22"}).network_cidr == "10.20.0.0/22"


class TestEngine:
    """Only postgres and mysql are recognized."""

    def test_unrecognized_engine_rejected(self) -> None:
        """Unknown engines raise UnrecognizedEngine."""
        with pytest.raises(UnrecognizedEngine) as exc_info:
            resolve({"data_engine": "oracle"})
        assert exc_info.value.engine == "oracle"
        assert exc_info.value.field == "data_engine"

    def test_unrecognized_engine_is_invalid_parameter(self) -> None:
        """Callers handling InvalidParameter also catch engine errors."""
        with pytest.raises(InvalidParameter):
            resolve({"dataEngine": "mariadb"})


class TestErrorContext:
    """Errors carry details for debugging."""

    def test_str_includes_details(self) -> None:
        """String form includes the details mapping."""
        with pytest.raises(InvalidParameter) as exc_info:
            resolve({"network_cidr": "bogus"})
        assert "Details:" in str(exc_info.value)
        assert exc_info.value.details["field"] == "network_cidr"

    def test_model_validates_directly(self) -> None:
        """The model itself rejects bad bounds with a pydantic error."""
        with pytest.raises(ValidationError):
            TopologyParameters(min_capacity=4, desired_capacity=1)
