"""Deployment descriptor loading."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .core.exceptions import ConfigurationError


def _mapping(value: Any, where: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"'{where}' must be a mapping", fields=[where])
    return value


@dataclass
class ServiceDescriptor:
    """The parts of a serverless-style descriptor VPC discovery reads and writes.

    ``functions`` holds the descriptor's own function mappings, so resolved
    ``vpc`` blocks written into them land in ``raw`` as well.
    """

    service: Optional[str] = None
    region: Optional[str] = None
    profile: Optional[str] = None
    base: Optional[dict] = None
    functions: dict[str, dict] = field(default_factory=dict)
    raw: dict = field(default_factory=dict)
    path: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Any, path: Optional[Path] = None) -> "ServiceDescriptor":
        data = _mapping(data, "descriptor")
        provider = _mapping(data.get("provider"), "provider")
        custom = _mapping(data.get("custom"), "custom")
        functions = _mapping(data.get("functions"), "functions")
        for name, func in list(functions.items()):
            functions[name] = _mapping(func, f"functions.{name}")

        service = data.get("service")
        if isinstance(service, dict):
            service = service.get("name")

        return cls(
            service=service,
            region=provider.get("region"),
            profile=provider.get("profile"),
            base=custom.get("vpcDiscovery"),
            functions=functions,
            raw=data,
            path=path,
        )

    def function_override(self, name: str) -> Any:
        """The function's raw ``vpcDiscovery`` value (None when absent)"""
        return self.functions[name].get("vpcDiscovery")


def load_descriptor(path: Union[str, Path]) -> ServiceDescriptor:
    """Read a YAML deployment descriptor.

    Raises:
        ConfigurationError: If the file is missing or not valid YAML
    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text())
    except FileNotFoundError:
        raise ConfigurationError(f"Descriptor file not found: {path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Could not parse {path}: {e}")
    return ServiceDescriptor.from_dict(data, path)
