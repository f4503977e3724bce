"""Shared pytest fixtures"""

from unittest.mock import MagicMock

import pytest

from vpc_discovery.core import Context

VPC_ID = "vpc-test"


def tag(key, value):
    return {"Key": key, "Value": value}


@pytest.fixture
def mock_ec2():
    """Mock boto3 EC2 client"""
    return MagicMock()


@pytest.fixture
def context(mock_ec2):
    """Run context whose session hands out mock_ec2 and never really sleeps"""
    session = MagicMock()
    session.client.return_value = mock_ec2
    return Context(session=session, region="us-moon-1", sleep=MagicMock())


@pytest.fixture
def vpc_data():
    return {"Vpcs": [{"VpcId": VPC_ID, "Tags": [tag("Name", "test")]}]}


@pytest.fixture
def subnet_data():
    return {
        "Subnets": [
            {
                "SubnetId": f"subnet-test-{i}",
                "VpcId": VPC_ID,
                "Tags": [tag("Name", f"test_subnet_{i}"), tag("Tier", "private")],
            }
            for i in (1, 2, 3)
        ]
    }


@pytest.fixture
def security_group_data():
    return {
        "SecurityGroups": [
            {
                "GroupId": "sg-test",
                "GroupName": "test_group_1",
                "VpcId": VPC_ID,
                "Tags": [tag("Role", "lambda")],
            }
        ]
    }


@pytest.fixture
def populated_ec2(mock_ec2, vpc_data, subnet_data, security_group_data):
    """mock_ec2 answering every describe call with the sample data"""
    mock_ec2.describe_vpcs.return_value = vpc_data
    mock_ec2.describe_subnets.return_value = subnet_data
    mock_ec2.describe_security_groups.return_value = security_group_data
    return mock_ec2


@pytest.fixture
def base_config():
    """Sample custom.vpcDiscovery block"""
    return {
        "vpcName": "test",
        "subnets": [
            {
                "tagKey": "Name",
                "tagValues": ["test_subnet_1", "test_subnet_2", "test_subnet_3"],
            }
        ],
        "securityGroups": [{"names": ["test_group_1"]}],
    }


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so nothing can reach a real account"""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)
