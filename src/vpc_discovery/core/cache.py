"""In-memory cache of resolved resource ids for one resolution run.

Entries are never evicted: a run is short-lived and the VPC layout is not
expected to change underneath it. A new run starts with an empty cache.
"""

import hashlib
import logging
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger("vpc_discovery.cache")

SUBNETS = "subnets"
SECURITY_GROUPS = "security-groups"


@dataclass(frozen=True)
class CacheKey:
    """Shape of one subnet or security-group query inside a VPC."""

    vpc_id: str
    kind: str
    names: tuple[str, ...] = ()
    tag_key: Optional[str] = None
    tag_values: tuple[str, ...] = ()

    @classmethod
    def for_subnets(cls, vpc_id: str, tag_key: str, tag_values) -> "CacheKey":
        return cls(vpc_id, SUBNETS, (), tag_key, tuple(sorted(tag_values)))

    @classmethod
    def for_security_groups(
        cls, vpc_id: str, names=None, tag_key=None, tag_values=None
    ) -> "CacheKey":
        return cls(
            vpc_id,
            SECURITY_GROUPS,
            tuple(sorted(names or ())),
            tag_key,
            tuple(sorted(tag_values or ())),
        )

    @property
    def digest(self) -> str:
        """128-bit fingerprint of the key, bounded regardless of input size"""
        parts = [
            self.vpc_id,
            self.kind,
            ",".join(self.names),
            self.tag_key or "",
            ",".join(self.tag_values),
        ]
        return hashlib.md5("\x1f".join(parts).encode("utf-8")).hexdigest()


class ResolutionCache:
    """Memoizes VPC ids by name and id lists by CacheKey."""

    def __init__(self):
        self._vpc_ids: dict[str, str] = {}
        self._entries: dict[CacheKey, list[str]] = {}
        self.hits = 0
        self.misses = 0

    def get_vpc_id(self, vpc_name: str) -> Optional[str]:
        return self._vpc_ids.get(vpc_name)

    def set_vpc_id(self, vpc_name: str, vpc_id: str) -> None:
        self._vpc_ids[vpc_name] = vpc_id

    def vpc_id(self, vpc_name: str, resolve: Callable[[], str]) -> str:
        """Cached VPC id for a name, resolving it on first use"""
        cached = self.get_vpc_id(vpc_name)
        if cached is not None:
            self.hits += 1
            logger.debug("Cache hit for VPC '%s': %s", vpc_name, cached)
            return cached
        self.misses += 1
        vpc_id = resolve()
        self.set_vpc_id(vpc_name, vpc_id)
        return vpc_id

    def get(self, key: CacheKey) -> Optional[list[str]]:
        ids = self._entries.get(key)
        return list(ids) if ids is not None else None

    def set(self, key: CacheKey, ids: list[str]) -> None:
        self._entries[key] = list(ids)

    def get_or_resolve(self, key: CacheKey, resolve: Callable[[], list[str]]) -> list[str]:
        """Cached ids for key, or resolve and store them.

        Nothing is stored when ``resolve`` raises.
        """
        cached = self.get(key)
        if cached is not None:
            self.hits += 1
            logger.debug("Cache hit for %s %s", key.kind, key.digest)
            return cached
        self.misses += 1
        logger.debug("Cache miss for %s %s", key.kind, key.digest)
        ids = resolve()
        self.set(key, ids)
        return list(ids)

    def __len__(self) -> int:
        return len(self._vpc_ids) + len(self._entries)

    def __contains__(self, key) -> bool:
        if isinstance(key, CacheKey):
            return key in self._entries
        return key in self._vpc_ids

    def clear(self) -> None:
        self._vpc_ids.clear()
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def get_info(self) -> dict:
        """Cache counters"""
        return {
            "vpcs": len(self._vpc_ids),
            "queries": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
        }
