"""Pydantic models for discovery specs and their resolved ids."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

SPEC_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


def subnet_names_to_query(subnet_names: list[str]) -> dict:
    """Legacy ``subnetNames`` become one subnet query on the Name tag."""
    return {"tagKey": "Name", "tagValues": list(subnet_names)}


def security_group_names_to_query(security_group_names: list[str]) -> dict:
    """Legacy ``securityGroupNames`` become one name-based group query."""
    return {"names": list(security_group_names)}


class LegacyFieldError(ValueError):
    """A legacy name list that is not a list; ``field`` names the key."""

    def __init__(self, field: str, value: Any):
        self.field = field
        super().__init__(f"must be a list of names, got {type(value).__name__}")


def _legacy_list(data: dict, *keys: str):
    for key in keys:
        if key in data:
            value = data.pop(key)
            if value is not None and not isinstance(value, (list, tuple)):
                raise LegacyFieldError(key, value)
            return value
    return None


def normalize_legacy_fields(data: Any) -> Any:
    """Fold deprecated flat name lists into the structured query lists.

    Legacy entries are appended after any structured entries given alongside
    them. Non-mapping input is returned untouched for pydantic to reject.

    Raises:
        LegacyFieldError: If a legacy key holds anything but a list
    """
    if not isinstance(data, dict):
        return data
    data = dict(data)

    subnet_names = _legacy_list(data, "subnetNames", "subnet_names")
    if subnet_names is not None:
        subnets = list(data.get("subnets") or [])
        subnets.append(subnet_names_to_query(subnet_names))
        data["subnets"] = subnets

    group_names = _legacy_list(data, "securityGroupNames", "security_group_names")
    if group_names is not None:
        key = "security_groups" if "security_groups" in data else "securityGroups"
        groups = list(data.get(key) or [])
        groups.append(security_group_names_to_query(group_names))
        data[key] = groups

    return data


class SubnetQuery(BaseModel):
    """Subnets in the VPC whose tag matches any of the values (wildcards allowed)."""

    model_config = SPEC_CONFIG

    tag_key: str = Field(..., alias="tagKey", min_length=1)
    tag_values: list[str] = Field(..., alias="tagValues", min_length=1)


class SecurityGroupQuery(BaseModel):
    """Security groups in the VPC selected by name and/or tag.

    Names may contain wildcards; tag values are compared exactly.
    """

    model_config = SPEC_CONFIG

    names: Optional[list[str]] = Field(None, min_length=1)
    tag_key: Optional[str] = Field(None, alias="tagKey", min_length=1)
    tag_values: Optional[list[str]] = Field(None, alias="tagValues", min_length=1)

    @model_validator(mode="after")
    def validate_criteria(self) -> "SecurityGroupQuery":
        if self.tag_key and not self.tag_values:
            raise ValueError("`tagValues` is required when `tagKey` is given")
        if self.tag_values and not self.tag_key:
            raise ValueError("`tagKey` is required when `tagValues` is given")
        if not self.names and not self.tag_key:
            raise ValueError(
                "requires at least one of `names` or `tagKey` with `tagValues`"
            )
        return self


class DiscoverySpec(BaseModel):
    """Which VPC, subnets and security groups to resolve.

    Every field is optional here so a per-function spec can carry only the
    keys it overrides; ``modules.merge.validate_spec`` checks that a merged
    spec is actionable.
    """

    model_config = SPEC_CONFIG

    vpc_name: Optional[str] = Field(None, alias="vpcName")
    subnets: Optional[list[SubnetQuery]] = None
    security_groups: Optional[list[SecurityGroupQuery]] = Field(
        None, alias="securityGroups"
    )

    @model_validator(mode="before")
    @classmethod
    def fold_legacy_fields(cls, data: Any) -> Any:
        return normalize_legacy_fields(data)

    @property
    def is_empty(self) -> bool:
        return not self.model_fields_set

    def to_dict(self) -> dict:
        """Descriptor-shaped dict (camelCase keys)."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ResolvedNetwork(BaseModel):
    """Resolved ids for one function. A key is None when it was not requested."""

    model_config = ConfigDict(populate_by_name=True)

    subnet_ids: Optional[list[str]] = Field(None, alias="subnetIds")
    security_group_ids: Optional[list[str]] = Field(None, alias="securityGroupIds")

    def to_dict(self) -> dict:
        """Convert to the descriptor's ``vpc`` block."""
        return self.model_dump(by_alias=True, exclude_none=True)
