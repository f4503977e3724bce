"""Tests for applying VPC config to a whole descriptor"""

import pytest

from vpc_discovery.config import ServiceDescriptor
from vpc_discovery.core.exceptions import ConfigurationError, NotFoundError
from vpc_discovery.modules.plugin import VPCDiscoveryPlugin

EXPECTED_VPC = {
    "subnetIds": ["subnet-test-1", "subnet-test-2", "subnet-test-3"],
    "securityGroupIds": ["sg-test"],
}


@pytest.fixture
def descriptor(base_config):
    return ServiceDescriptor.from_dict(
        {
            "service": "orders",
            "provider": {"name": "aws", "region": "us-moon-1"},
            "custom": {"vpcDiscovery": base_config},
            "functions": {
                "api": {"handler": "api.handler"},
                "cron": {"handler": "cron.handler", "vpcDiscovery": False},
                "worker": {
                    "handler": "worker.handler",
                    "vpcDiscovery": {"subnetNames": ["test_subnet_9"]},
                },
            },
        }
    )


class TestUpdateFunctionsVpcConfig:
    def test_updates_functions(self, descriptor, context, populated_ec2):
        plugin = VPCDiscoveryPlugin(descriptor, context)
        results = plugin.update_functions_vpc_config()
        assert results == {"api": {"vpc": EXPECTED_VPC}}
        assert descriptor.functions["api"]["vpc"] == EXPECTED_VPC
        assert descriptor.raw["functions"]["api"]["vpc"] == EXPECTED_VPC
        assert "vpc" not in descriptor.functions["cron"]

    def test_failures_are_collected(self, descriptor, context, populated_ec2, caplog):
        plugin = VPCDiscoveryPlugin(descriptor, context)
        plugin.update_functions_vpc_config()
        assert list(plugin.failures) == ["worker"]
        assert isinstance(plugin.failures["worker"], NotFoundError)
        assert "vpc" not in descriptor.functions["worker"]
        assert "Could not set VPC config for 'worker'" in caplog.text

    def test_selected_functions(self, descriptor, context, populated_ec2):
        plugin = VPCDiscoveryPlugin(descriptor, context)
        assert plugin.update_functions_vpc_config(["cron"]) == {}
        assert plugin.failures == {}
        populated_ec2.describe_vpcs.assert_not_called()

    def test_unknown_function(self, descriptor, context):
        plugin = VPCDiscoveryPlugin(descriptor, context)
        with pytest.raises(ConfigurationError, match="Unknown function"):
            plugin.update_functions_vpc_config(["missing"])

    def test_invalid_base_stops_run(self, context, populated_ec2):
        descriptor = ServiceDescriptor.from_dict(
            {
                "custom": {"vpcDiscovery": {"vpcName": "test"}},
                "functions": {"api": {}},
            }
        )
        plugin = VPCDiscoveryPlugin(descriptor, context)
        with pytest.raises(ConfigurationError) as exc_info:
            plugin.update_functions_vpc_config()
        assert exc_info.value.source == "custom.vpcDiscovery"
        populated_ec2.describe_vpcs.assert_not_called()

    def test_resolving_requires_context(self, descriptor):
        plugin = VPCDiscoveryPlugin(descriptor)
        with pytest.raises(ConfigurationError, match="Context"):
            plugin.update_functions_vpc_config()

    def test_malformed_function_is_skipped(self, context, populated_ec2, base_config):
        descriptor = ServiceDescriptor.from_dict(
            {
                "custom": {"vpcDiscovery": base_config},
                "functions": {
                    "api": {"vpcDiscovery": {"subnetNames": 5}},
                    "worker": {},
                },
            }
        )
        plugin = VPCDiscoveryPlugin(descriptor, context)
        results = plugin.update_functions_vpc_config()
        assert list(results) == ["worker"]
        assert isinstance(plugin.failures["api"], ConfigurationError)
        assert plugin.failures["api"].fields == ["subnetNames"]

    def test_no_discovery_config(self, context, populated_ec2):
        descriptor = ServiceDescriptor.from_dict({"functions": {"api": {}}})
        plugin = VPCDiscoveryPlugin(descriptor, context)
        assert plugin.update_functions_vpc_config() == {}


class TestValidate:
    def test_valid(self, descriptor):
        plugin = VPCDiscoveryPlugin(descriptor)
        assert plugin.validate_custom_config().vpc_name == "test"
        assert plugin.validate_functions() == {}

    def test_no_base(self):
        plugin = VPCDiscoveryPlugin(ServiceDescriptor.from_dict({}))
        assert plugin.validate_custom_config() is None

    def test_function_errors(self):
        descriptor = ServiceDescriptor.from_dict(
            {
                "functions": {
                    "api": {"vpcDiscovery": {"vpcName": "test"}},
                    "worker": {"vpcDiscovery": {"vpcName": "test", "subnetNames": ["a"]}},
                    "cron": {"vpcDiscovery": {"subnets": [{"tagKey": "Name"}]}},
                }
            }
        )
        errors = VPCDiscoveryPlugin(descriptor).validate_functions()
        assert set(errors) == {"api", "cron"}
        assert errors["api"].source == "functions.api.vpcDiscovery"
