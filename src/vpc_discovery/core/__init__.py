"""Core utilities for VPC discovery"""

from .base import BaseClient, Context
from .cache import CacheKey, ResolutionCache
from .exceptions import ConfigurationError, NotFoundError, VPCDiscoveryError
from .logging import get_logger, logger, setup_logging
from .matching import value_for_tag, wildcard_matches
from .paging import fetch_all
from .retry import RetryPolicy, call_with_retry, is_retryable

__all__ = [
    "BaseClient",
    "Context",
    "CacheKey",
    "ResolutionCache",
    "ConfigurationError",
    "NotFoundError",
    "VPCDiscoveryError",
    "setup_logging",
    "get_logger",
    "logger",
    "wildcard_matches",
    "value_for_tag",
    "fetch_all",
    "RetryPolicy",
    "call_with_retry",
    "is_retryable",
]
