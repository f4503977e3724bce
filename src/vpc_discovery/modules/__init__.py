"""Resolution modules"""

from .ec2 import EC2Client
from .function import FunctionResolver
from .merge import effective_spec, parse_override, parse_spec, validate_spec
from .plugin import VPCDiscoveryPlugin

__all__ = [
    "EC2Client",
    "FunctionResolver",
    "VPCDiscoveryPlugin",
    "effective_spec",
    "parse_override",
    "parse_spec",
    "validate_spec",
]
