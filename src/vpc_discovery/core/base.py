"""Base client and per-run context."""

from dataclasses import dataclass, field
import time
from typing import Callable, Optional

import boto3
from botocore.config import Config

from .cache import ResolutionCache
from .retry import DEFAULT_RETRY_POLICY, RetryPolicy

# call_with_retry owns retrying; botocore makes a single attempt per call
BOTO_CONFIG = Config(retries={"max_attempts": 1, "mode": "standard"})


@dataclass
class Context:
    """Everything one resolution run needs, created once and passed around.

    Attributes:
        session: boto3 session carrying credentials
        region: Region for every lookup (None means the session default)
        retry: Backoff settings for throttled calls
        cache: Ids resolved so far in this run
        sleep: Blocking wait used between retries
    """

    session: boto3.Session
    region: Optional[str] = None
    retry: RetryPolicy = DEFAULT_RETRY_POLICY
    cache: ResolutionCache = field(default_factory=ResolutionCache)
    sleep: Callable[[float], None] = time.sleep

    @classmethod
    def create(
        cls,
        profile: Optional[str] = None,
        region: Optional[str] = None,
        retry: RetryPolicy = DEFAULT_RETRY_POLICY,
    ) -> "Context":
        session = (
            boto3.Session(profile_name=profile, region_name=region)
            if profile
            else boto3.Session(region_name=region)
        )
        return cls(session=session, region=region or session.region_name, retry=retry)


class BaseClient:
    """Creates boto3 clients from the run context."""

    def __init__(self, context: Context):
        self.context = context
        self.session = context.session
        self._clients: dict = {}

    def client(self, service: str, region_name: Optional[str] = None):
        region = region_name or self.context.region
        key = (service, region)
        if key not in self._clients:
            self._clients[key] = self.session.client(
                service, region_name=region, config=BOTO_CONFIG
            )
        return self._clients[key]
