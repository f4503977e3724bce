"""Per-function resolution on top of a shared base spec."""

import logging
from typing import Any, Optional

from ..core import Context
from ..models import DiscoverySpec, ResolvedNetwork, Skip
from .ec2 import EC2Client
from .merge import BASE_SOURCE, effective_spec, parse_override, parse_spec

logger = logging.getLogger("vpc_discovery.function")


class FunctionResolver:
    """Resolves the VPC config of functions one at a time.

    Every function resolved through the same instance shares the context's
    cache, so functions inheriting the base spec cost one set of lookups.
    """

    def __init__(self, context: Context, base: Any = None):
        self.context = context
        self.base: Optional[DiscoverySpec] = parse_spec(base, BASE_SOURCE)
        self.ec2 = EC2Client(context)

    def resolve_for_unit(self, name: str, override: Any = None) -> Optional[ResolvedNetwork]:
        """VPC config for one function, or None when none applies.

        Args:
            name: Function name, used in messages
            override: The function's ``vpcDiscovery`` value - False, None/True,
                a mapping, or an already parsed Skip/Inherit/Override

        Raises:
            ConfigurationError: If the merged spec is malformed
            NotFoundError: If a named resource cannot be fully resolved
        """
        variant = parse_override(override, name)
        if isinstance(variant, Skip):
            logger.info("Skipping VPC config for the function '%s'", name)
            return None

        spec = effective_spec(self.base, variant, name)
        if spec is None:
            logger.debug("No VPC discovery config applies to the function '%s'", name)
            return None

        logger.info("Getting VPC config for the function: '%s'", name)
        return self.ec2.get_vpc_config(spec)
