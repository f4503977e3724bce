"""Pydantic models for VPC discovery."""

from .discovery import (
    DiscoverySpec,
    ResolvedNetwork,
    SecurityGroupQuery,
    SubnetQuery,
    normalize_legacy_fields,
    security_group_names_to_query,
    subnet_names_to_query,
)
from .overrides import FunctionOverride, Inherit, Override, Skip

__all__ = [
    "DiscoverySpec",
    "ResolvedNetwork",
    "SecurityGroupQuery",
    "SubnetQuery",
    "normalize_legacy_fields",
    "security_group_names_to_query",
    "subnet_names_to_query",
    "FunctionOverride",
    "Inherit",
    "Override",
    "Skip",
]
