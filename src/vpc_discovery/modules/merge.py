"""Merging of base and per-function discovery specs."""

import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import ValidationError

from ..core.exceptions import ConfigurationError
from ..models import DiscoverySpec, FunctionOverride, Inherit, Override, Skip

logger = logging.getLogger("vpc_discovery.merge")

BASE_SOURCE = "custom.vpcDiscovery"

# Model fields behind each invariant reported by spec_problems
_PROBLEM_FIELDS = {
    "vpcName": {"vpc_name"},
    "subnets": {"subnets", "security_groups"},
}


def unit_source(name: Optional[str]) -> str:
    return f"functions.{name}.vpcDiscovery" if name else "vpcDiscovery"


def _describe_validation_error(error: ValidationError) -> tuple[str, list[str]]:
    fields = []
    messages = []
    for err in error.errors():
        field = ".".join(str(part) for part in err["loc"])
        if not field:
            # Errors raised before field validation carry the key themselves
            field = getattr(err.get("ctx", {}).get("error"), "field", "")
        msg = err["msg"].removeprefix("Value error, ")
        fields.append(field)
        messages.append(f"'{field}' {msg}" if field else msg)
    return "; ".join(messages), fields


def parse_spec(
    raw: Union[Mapping, DiscoverySpec, None], source: str
) -> Optional[DiscoverySpec]:
    """Build a DiscoverySpec from a descriptor mapping.

    Raises:
        ConfigurationError: If the mapping has the wrong shape
    """
    if raw is None or isinstance(raw, DiscoverySpec):
        return raw
    if not isinstance(raw, Mapping):
        raise ConfigurationError(
            f"expected a mapping, got {type(raw).__name__}", source
        )
    try:
        return DiscoverySpec.model_validate(dict(raw))
    except ValidationError as e:
        message, fields = _describe_validation_error(e)
        raise ConfigurationError(message, source, fields) from e


def parse_override(value: Any, unit: Optional[str] = None) -> FunctionOverride:
    """Turn a function's ``vpcDiscovery`` value into Skip, Inherit or Override"""
    if isinstance(value, (Skip, Inherit, Override)):
        return value
    if value is False:
        return Skip()
    if value is None or value is True:
        return Inherit()
    spec = parse_spec(value, unit_source(unit))
    return Inherit() if spec.is_empty else Override(spec)


def is_empty(spec: Optional[DiscoverySpec]) -> bool:
    return spec is None or spec.is_empty


def spec_problems(spec: DiscoverySpec) -> list[tuple[str, str]]:
    """(field, message) pairs for each invariant a spec breaks"""
    problems = []
    if not spec.vpc_name:
        problems.append(("vpcName", "'vpcDiscovery.vpcName' is not specified."))
    if spec.subnets is None and spec.security_groups is None:
        problems.append(
            (
                "subnets",
                "You must specify at least one of the 'vpcDiscovery.subnets' "
                "or 'vpcDiscovery.securityGroups'.",
            )
        )
    return problems


def validate_spec(spec: DiscoverySpec, source: str) -> DiscoverySpec:
    """Check that a (merged) spec can be resolved.

    Raises:
        ConfigurationError: Naming the source and the fields at fault
    """
    problems = spec_problems(spec)
    if problems:
        fields = [field for field, _ in problems]
        if "subnets" in fields:
            fields.append("securityGroups")
        raise ConfigurationError(
            " ".join(message for _, message in problems), source, fields
        )
    return spec


def _blame(
    merged: DiscoverySpec,
    base: Optional[DiscoverySpec],
    override: Optional[DiscoverySpec],
    unit: Optional[str],
) -> str:
    """Source to name when a merged spec is invalid"""
    if is_empty(base):
        return unit_source(unit)
    if is_empty(override):
        return BASE_SOURCE
    faulty = set()
    for field, _ in spec_problems(merged):
        faulty |= _PROBLEM_FIELDS[field]
    if faulty & override.model_fields_set or not spec_problems(base):
        return unit_source(unit)
    return BASE_SOURCE


def effective_spec(
    base: Optional[DiscoverySpec],
    override: FunctionOverride = Inherit(),
    unit: Optional[str] = None,
) -> Optional[DiscoverySpec]:
    """Spec to resolve for one function, or None when nothing applies.

    Top-level keys set in the override replace the base's keys; lists are
    replaced, never appended to.

    Raises:
        ConfigurationError: If the merged spec is not actionable
    """
    if isinstance(override, Skip):
        return None

    override_spec = override.spec if isinstance(override, Override) else None
    if is_empty(base) and is_empty(override_spec):
        return None

    if is_empty(override_spec):
        merged = base
    elif is_empty(base):
        merged = override_spec
    else:
        merged = base.model_copy(
            update={
                name: getattr(override_spec, name)
                for name in override_spec.model_fields_set
            }
        )
        logger.debug(
            "Function '%s' overrides %s",
            unit,
            ", ".join(sorted(override_spec.model_fields_set)),
        )

    return validate_spec(merged, _blame(merged, base, override_spec, unit))
