"""Applies discovered VPC config to every function of a descriptor."""

import logging
from typing import Iterable, Optional

from ..config import ServiceDescriptor
from ..core import ConfigurationError, Context, VPCDiscoveryError
from ..models import DiscoverySpec
from .function import FunctionResolver
from .merge import BASE_SOURCE, effective_spec, is_empty, parse_override, parse_spec, validate_spec

logger = logging.getLogger("vpc_discovery.plugin")


class VPCDiscoveryPlugin:
    """Outer layer around FunctionResolver.

    A function whose config is malformed or whose resources cannot be found
    is logged and skipped; the remaining functions are still resolved.
    """

    def __init__(self, descriptor: ServiceDescriptor, context: Optional[Context] = None):
        self.descriptor = descriptor
        self.context = context
        self.failures: dict[str, VPCDiscoveryError] = {}
        self._resolver: Optional[FunctionResolver] = None

    def validate_custom_config(self) -> Optional[DiscoverySpec]:
        """Parse and check ``custom.vpcDiscovery``.

        Raises:
            ConfigurationError: If a base spec is given but is not actionable
        """
        base = parse_spec(self.descriptor.base, BASE_SOURCE)
        if is_empty(base):
            return None
        return validate_spec(base, BASE_SOURCE)

    def validate_functions(self) -> dict[str, ConfigurationError]:
        """Check every function's merged spec without any remote call"""
        base = self.validate_custom_config()
        errors = {}
        for name in self.descriptor.functions:
            try:
                override = parse_override(self.descriptor.function_override(name), name)
                effective_spec(base, override, name)
            except ConfigurationError as e:
                errors[name] = e
        return errors

    @property
    def resolver(self) -> FunctionResolver:
        """Resolver for this run; raises ConfigurationError without a context"""
        if self._resolver is None:
            if self.context is None:
                raise ConfigurationError(
                    "A Context (AWS session) is required to resolve functions"
                )
            self._resolver = FunctionResolver(self.context, self.validate_custom_config())
        return self._resolver

    def _selected(self, functions: Optional[Iterable[str]]) -> list[str]:
        if functions is None:
            return list(self.descriptor.functions)
        names = list(functions)
        unknown = [n for n in names if n not in self.descriptor.functions]
        if unknown:
            raise ConfigurationError(
                f"Unknown function(s): {', '.join(unknown)}", fields=["functions"]
            )
        return names

    def update_functions_vpc_config(
        self, functions: Optional[Iterable[str]] = None
    ) -> dict[str, dict]:
        """Resolve and write the ``vpc`` block of each function, in order.

        Args:
            functions: Names to process (default: all, in descriptor order)

        Returns:
            ``{name: {"vpc": {...}}}`` for every function that got a config
        """
        names = self._selected(functions)
        resolver = self.resolver
        results = {}
        self.failures = {}
        for name in names:
            try:
                vpc = resolver.resolve_for_unit(
                    name, self.descriptor.function_override(name)
                )
            except VPCDiscoveryError as e:
                logger.error("Could not set VPC config for '%s': %s", name, e)
                self.failures[name] = e
                continue
            if vpc is None:
                continue
            self.descriptor.functions[name]["vpc"] = vpc.to_dict()
            results[name] = {"vpc": vpc.to_dict()}

        logger.debug("Resolution cache: %s", self.context.cache.get_info())
        return results
