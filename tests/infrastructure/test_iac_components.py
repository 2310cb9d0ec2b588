"""
Detailed tests for individual topology components and their helpers.

Validates:
1. Output dataclasses expose the lookups the renderer relies on
2. Naming, tagging and instance class conventions
3. Stack config and settings loading
"""

import pytest

from topology.composers import SubnetVisibility


class TestNetworkingOutputs:
    """Tests for networking output helpers."""

    def test_subnet_ids_for_tier(self, network):
        """VpcOutputs looks subnets up by tier visibility."""
        from topology.components.networking.vpc import VpcOutputs

        outputs = VpcOutputs(
            vpc_id="vpc-1",
            subnet_ids={
                SubnetVisibility.PUBLIC: ["subnet-a", "subnet-b"],
                SubnetVisibility.PRIVATE_WITH_EGRESS: ["subnet-c", "subnet-d"],
            },
            nat_gateway_ids=["nat-1"],
        )

        assert outputs.subnet_ids_for(network.tier(SubnetVisibility.PUBLIC)) == ["subnet-a", "subnet-b"]
        assert outputs.subnet_ids_for(network.tier(SubnetVisibility.PRIVATE_WITH_EGRESS)) == [
            "subnet-c",
            "subnet-d",
        ]

    def test_group_id_per_node(self):
        """SecurityGroupOutputs looks groups up by boundary node."""
        from topology.components.networking.security_groups import SecurityGroupOutputs

        outputs = SecurityGroupOutputs(group_ids={"edge-tier": "sg-1", "data-tier": "sg-3"})

        assert outputs.group_id("data-tier") == "sg-3"
        with pytest.raises(KeyError):
            outputs.group_id("compute-tier")

    def test_output_fields_match_deferred_references(self, default_plan):
        """Every deferred output names a field of the rendering component's outputs."""
        from dataclasses import fields

        from topology.components.compute.alb import AlbOutputs
        from topology.components.storage.rds_database import DatabaseOutputs

        owners = {"edge": AlbOutputs, "data": DatabaseOutputs}
        for ref in default_plan.outputs.values():
            assert ref.attribute in {f.name for f in fields(owners[ref.resource_id])}


class TestStorageComponents:
    """Tests for database helpers."""

    @pytest.mark.parametrize(
        "instance_type, expected",
        [("t3.micro", "db.t3.micro"), ("db.r6g.large", "db.r6g.large")],
    )
    def test_instance_class(self, instance_type, expected):
        """Instance types map onto RDS instance classes."""
        from topology.components.storage.rds_database import instance_class

        assert instance_class(instance_type) == expected


class TestNamingAndTags:
    """Tests for naming and tagging utilities."""

    def test_resource_names(self):
        """Names follow {project}-{environment}-{resource}."""
        from topology.utils.naming import ResourceNamer

        namer = ResourceNamer(project="ops-topology", environment="dev")

        assert namer.name("network") == "ops-topology-dev-network"
        assert namer.secret_name("db-credentials") == "ops-topology/dev/db-credentials"

    def test_tags(self):
        """Tags merge defaults, environment, name and extras."""
        from topology.utils.tags import create_tags

        tags = create_tags("dev", "ops-topology-dev-vpc", SubnetType="public")

        assert tags == {
            "Project": "ops-topology",
            "ManagedBy": "pulumi",
            "Environment": "dev",
            "Name": "ops-topology-dev-vpc",
            "SubnetType": "public",
        }


class _StackConfig:
    """Stand-in for pulumi.Config holding string values."""

    def __init__(self, values):
        self.values = values

    def get(self, key):
        return self.values.get(key)


class TestConfigLoading:
    """Tests for the stack config and settings loaders."""

    def test_context_keys_map_to_parameters(self):
        """Context keys become parameter overrides; absent keys stay absent."""
        from topology.configs.environment import load_raw_parameters

        raw = load_raw_parameters(_StackConfig({"vpcCidr": "10.50.0.0/16", "dbEngine": "mysql", "dbStorage": "40"}))

        assert raw == {
            "network_cidr": "10.50.0.0/16",
            "data_engine": "mysql",
            "data_storage_gib": "40",
        }

    def test_context_overrides_compose(self):
        """Stack config values resolve into a plan."""
        from topology.composers import compose_plan
        from topology.configs.environment import load_raw_parameters

        plan = compose_plan(load_raw_parameters(_StackConfig({"minCapacity": "2", "maxCapacity": "6"})))

        assert (plan.compute.min_capacity, plan.compute.max_capacity) == (2, 6)

    def test_settings_from_environment(self, monkeypatch):
        """Settings read TOPOLOGY_* variables."""
        from topology.configs.settings import TopologySettings

        monkeypatch.setenv("TOPOLOGY_ENVIRONMENT", "staging")
        monkeypatch.setenv("TOPOLOGY_LOG_LEVEL", "DEBUG")

        settings = TopologySettings(_env_file=None)

        assert settings.environment == "staging"
        assert settings.log_level == "DEBUG"
        assert settings.project == "ops-topology"
