"""Resolve VPC, subnet and security group names into ids for function deployments."""

__version__ = "1.0.0"

from .core import ConfigurationError, Context, NotFoundError, RetryPolicy, VPCDiscoveryError
from .models import DiscoverySpec, ResolvedNetwork, SecurityGroupQuery, SubnetQuery
from .modules import EC2Client, FunctionResolver, VPCDiscoveryPlugin, effective_spec

__all__ = [
    "ConfigurationError",
    "Context",
    "NotFoundError",
    "RetryPolicy",
    "VPCDiscoveryError",
    "DiscoverySpec",
    "ResolvedNetwork",
    "SecurityGroupQuery",
    "SubnetQuery",
    "EC2Client",
    "FunctionResolver",
    "VPCDiscoveryPlugin",
    "effective_spec",
]
