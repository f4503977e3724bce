"""Errors raised while resolving VPC discovery specs."""

from typing import Optional, Sequence


class VPCDiscoveryError(Exception):
    """Base class for every error raised by vpc_discovery."""


class ConfigurationError(VPCDiscoveryError):
    """A supplied discovery spec breaks one of its invariants.

    Raised before any remote call is made.

    Attributes:
        source: Where the spec came from (e.g. ``custom.vpcDiscovery``)
        fields: Dotted field paths at fault
    """

    def __init__(
        self, message: str, source: Optional[str] = None, fields: Sequence[str] = ()
    ):
        self.source = source
        self.fields = list(fields)
        self.reason = message
        if source:
            message = f"The `{source}` is not configured correctly: {message}"
        super().__init__(message)


class NotFoundError(VPCDiscoveryError):
    """A lookup matched nothing, or left requested criteria unmatched.

    Attributes:
        resource: ``vpc``, ``subnets`` or ``security-groups``
        vpc_id: Scoping VPC id (None for the VPC lookup itself)
        criterion: ``name`` or ``tag``
        tag_key: Tag key of a tag criterion
        missing: Requested values that matched nothing
    """

    def __init__(
        self,
        message: str,
        resource: str,
        criterion: str,
        missing: Sequence[str],
        vpc_id: Optional[str] = None,
        tag_key: Optional[str] = None,
    ):
        self.resource = resource
        self.vpc_id = vpc_id
        self.criterion = criterion
        self.tag_key = tag_key
        self.missing = list(missing)
        super().__init__(message)
