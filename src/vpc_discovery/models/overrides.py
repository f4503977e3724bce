"""Per-function override of the base discovery spec."""

from dataclasses import dataclass
from typing import Union

from .discovery import DiscoverySpec


@dataclass(frozen=True)
class Skip:
    """``vpcDiscovery: false`` - the function gets no VPC config."""


@dataclass(frozen=True)
class Inherit:
    """No per-function spec - the base spec applies as is."""


@dataclass(frozen=True)
class Override:
    """Per-function spec whose top-level keys replace the base spec's."""

    spec: DiscoverySpec


FunctionOverride = Union[Skip, Inherit, Override]
