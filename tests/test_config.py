"""Tests for descriptor loading"""

import pytest

from vpc_discovery.config import ServiceDescriptor, load_descriptor
from vpc_discovery.core.exceptions import ConfigurationError

DESCRIPTOR = """
service:
  name: orders
provider:
  name: aws
  region: eu-west-1
  profile: staging
custom:
  vpcDiscovery:
    vpcName: test
    subnetNames:
      - test_subnet_1
functions:
  api:
    handler: api.handler
  cron:
    handler: cron.handler
    vpcDiscovery: false
"""


class TestServiceDescriptor:
    def test_from_dict(self):
        desc = ServiceDescriptor.from_dict(
            {
                "service": "orders",
                "provider": {"region": "us-east-1"},
                "custom": {"vpcDiscovery": {"vpcName": "test"}},
                "functions": {"api": {"handler": "api.handler"}, "cron": None},
            }
        )
        assert desc.service == "orders"
        assert desc.region == "us-east-1"
        assert desc.profile is None
        assert desc.base == {"vpcName": "test"}
        assert list(desc.functions) == ["api", "cron"]
        assert desc.function_override("api") is None

    def test_empty(self):
        desc = ServiceDescriptor.from_dict(None)
        assert desc.functions == {}
        assert desc.base is None

    @pytest.mark.parametrize(
        "data",
        [
            ["not", "a", "mapping"],
            {"functions": ["api"]},
            {"custom": "vpcDiscovery"},
            {"functions": {"api": "handler"}},
        ],
    )
    def test_wrong_shape(self, data):
        with pytest.raises(ConfigurationError):
            ServiceDescriptor.from_dict(data)


class TestLoadDescriptor:
    def test_load(self, tmp_path):
        path = tmp_path / "serverless.yml"
        path.write_text(DESCRIPTOR)
        desc = load_descriptor(path)
        assert desc.service == "orders"
        assert desc.region == "eu-west-1"
        assert desc.profile == "staging"
        assert desc.base["subnetNames"] == ["test_subnet_1"]
        assert desc.function_override("cron") is False
        assert desc.path == path

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_descriptor(tmp_path / "missing.yml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "serverless.yml"
        path.write_text("functions: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Could not parse"):
            load_descriptor(path)
